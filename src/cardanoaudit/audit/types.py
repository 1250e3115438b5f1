"""Core data types for the address audit."""

from pydantic import BaseModel, ConfigDict

LOVELACE = "lovelace"
LOVELACE_PER_ADA = 1_000_000


class Amount(BaseModel):
    """A quantity of one unit in its smallest denomination."""

    model_config = ConfigDict(frozen=True)

    unit: str  # "lovelace" or policy id + hex asset name
    quantity: int | str  # str only for an asset quantity kept as received


class UtxoEntry(BaseModel):
    """One transaction input or output."""

    address: str | None = None
    amount: list[Amount] = []

    def lovelace(self) -> int:
        # Only the first lovelace amount counts
        for a in self.amount:
            if a.unit == LOVELACE:
                return a.quantity
        return 0

    def native_assets(self) -> list[Amount]:
        return [a for a in self.amount if a.unit != LOVELACE]


class TransactionDetail(BaseModel):
    """Normalized UTXO set and fee of one transaction. Transient."""

    tx_hash: str
    inputs: list[UtxoEntry] = []
    outputs: list[UtxoEntry] = []
    fee: int = 0  # lovelace


class TxSummary(BaseModel):
    """Address-scoped result of folding one transaction."""

    model_config = ConfigDict(frozen=True)

    tx_hash: str
    inputs_from_address_lovelace: int
    outputs_to_address_lovelace: int
    fee_lovelace: int  # as reported by the source
    fee_attributed_lovelace: int
    outgoing_assets: list[Amount] = []


class TxFailure(BaseModel):
    """A transaction that could not be fetched or processed."""

    model_config = ConfigDict(frozen=True)

    tx_hash: str
    reason: str


class AuditReport(BaseModel):
    """Final aggregate for one address. Built once, after all transactions."""

    model_config = ConfigDict(frozen=True)

    address: str
    tx_count: int
    total_received_lovelace: int
    total_spent_lovelace: int
    total_fees_attributed_lovelace: int
    total_received_ada: float
    total_spent_ada: float
    net_ada_change: float
    estimated_fees_paid_ada: float
    outgoing_txs_with_assets_count: int
    unique_asset_units_moved_out: list[str]
    per_tx_summary: list[TxSummary] = []
    failures: list[TxFailure] = []

    @property
    def per_tx_count(self) -> int:
        return len(self.per_tx_summary)

    def summary(self) -> dict:
        """The headline figures, without the per-transaction detail."""
        return {
            "address": self.address,
            "tx_count": self.tx_count,
            "total_received_ada": self.total_received_ada,
            "total_spent_ada": self.total_spent_ada,
            "net_ada_change": self.net_ada_change,
            "estimated_fees_paid_ada": self.estimated_fees_paid_ada,
            "outgoing_txs_with_assets_count": self.outgoing_txs_with_assets_count,
            "unique_asset_units_moved_out": list(self.unique_asset_units_moved_out),
            "per_tx_count": self.per_tx_count,
        }


def lovelace_to_ada(lovelace: int) -> float:
    return lovelace / LOVELACE_PER_ADA
