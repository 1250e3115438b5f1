"""Turn raw Blockfrost payloads into TransactionDetail.

This is the only place that tolerates missing or malformed fields: absent
arrays become empty, non-object entries are dropped, a null quantity is 0.
The first lovelace quantity of an entry and the fee must be integers;
anything else raises ValueError, which fails only the transaction being
processed. Other quantities are never summed, so an unparseable one is
kept as received.
"""

from typing import Any

from cardanoaudit.audit.types import LOVELACE, Amount, TransactionDetail, UtxoEntry


def parse_quantity(raw: Any) -> int:
    """Parse an integer quantity (Blockfrost sends strings). None → 0."""
    if raw is None:
        return 0
    if isinstance(raw, bool):
        raise ValueError(f"Invalid quantity: {raw!r}")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isdigit():
        value = int(raw.strip())
    else:
        raise ValueError(f"Invalid quantity: {raw!r}")
    if value < 0:
        raise ValueError(f"Negative quantity: {raw!r}")
    return value


def _lenient_quantity(raw: Any) -> int | str:
    try:
        return parse_quantity(raw)
    except ValueError:
        return str(raw)


def extract_amounts(raw: Any) -> list[Amount]:
    if not isinstance(raw, list):
        return []
    amounts: list[Amount] = []
    seen_lovelace = False
    for item in raw:
        if not isinstance(item, dict):
            continue
        unit = item.get("unit")
        if not unit or not isinstance(unit, str):
            continue
        raw_quantity = item.get("quantity")
        if unit == LOVELACE and not seen_lovelace:
            seen_lovelace = True
            quantity = parse_quantity(raw_quantity)
        else:
            quantity = _lenient_quantity(raw_quantity)
        amounts.append(Amount(unit=unit, quantity=quantity))
    return amounts


def extract_entries(raw: Any) -> list[UtxoEntry]:
    if not isinstance(raw, list):
        return []
    entries: list[UtxoEntry] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        address = item.get("address")
        entries.append(UtxoEntry(
            address=address if isinstance(address, str) else None,
            amount=extract_amounts(item.get("amount")),
        ))
    return entries


def build_transaction_detail(tx_hash: str, utxos: Any, info: Any) -> TransactionDetail:
    """Combine /txs/{hash}/utxos and /txs/{hash} responses."""
    utxos = utxos if isinstance(utxos, dict) else {}
    info = info if isinstance(info, dict) else {}
    return TransactionDetail(
        tx_hash=tx_hash,
        inputs=extract_entries(utxos.get("inputs")),
        outputs=extract_entries(utxos.get("outputs")),
        fee=parse_quantity(info.get("fees")),
    )
