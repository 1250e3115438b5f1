"""LedgerAggregator — folds per-TX UTXO detail into address-scoped totals."""

from __future__ import annotations

import logging

from cardanoaudit.audit.types import (
    Amount,
    AuditReport,
    TransactionDetail,
    TxFailure,
    TxSummary,
    lovelace_to_ada,
)

logger = logging.getLogger(__name__)


def attribute_fee(fee: int, inputs_from_address: int, total_inputs: int) -> int:
    """Estimate the address's share of a TX fee from its share of input value.

    Floor division, so the share never exceeds the fee. Zero when the
    address supplied no lovelace.
    """
    if inputs_from_address <= 0 or total_inputs <= 0:
        return 0
    return fee * inputs_from_address // total_inputs


def summarize_transaction(address: str, detail: TransactionDetail) -> TxSummary:
    """Reduce one transaction's UTXO set to the audited address's view of it."""
    total_inputs = 0
    inputs_from_address = 0
    outgoing_assets: list[Amount] = []

    for inp in detail.inputs:
        lovelace = inp.lovelace()
        total_inputs += lovelace
        if inp.address == address:
            inputs_from_address += lovelace
            outgoing_assets.extend(inp.native_assets())

    outputs_to_address = sum(out.lovelace() for out in detail.outputs if out.address == address)

    return TxSummary(
        tx_hash=detail.tx_hash,
        inputs_from_address_lovelace=inputs_from_address,
        outputs_to_address_lovelace=outputs_to_address,
        fee_lovelace=detail.fee,
        fee_attributed_lovelace=attribute_fee(detail.fee, inputs_from_address, total_inputs),
        outgoing_assets=outgoing_assets,
    )


class LedgerAggregator:
    """Running totals for one address. All amounts are kept in lovelace."""

    def __init__(self, address: str) -> None:
        self.address = address
        self.total_received = 0
        self.total_spent = 0
        self.total_fees_attributed = 0
        self.outgoing_with_assets_count = 0
        # dict keeps first-appearance order while deduplicating
        self._outgoing_units: dict[str, None] = {}
        self.summaries: list[TxSummary] = []
        self.failures: list[TxFailure] = []

    @property
    def outgoing_asset_units(self) -> list[str]:
        return list(self._outgoing_units)

    def fold(self, detail: TransactionDetail) -> TxSummary:
        """Add one transaction to the running totals and return its summary."""
        summary = summarize_transaction(self.address, detail)

        self.total_received += summary.outputs_to_address_lovelace
        self.total_spent += summary.inputs_from_address_lovelace
        self.total_fees_attributed += summary.fee_attributed_lovelace
        if summary.outgoing_assets:
            self.outgoing_with_assets_count += 1
            for asset in summary.outgoing_assets:
                self._outgoing_units.setdefault(asset.unit, None)

        self.summaries.append(summary)
        return summary

    def record_failure(self, tx_hash: str, reason: str) -> TxFailure:
        failure = TxFailure(tx_hash=tx_hash, reason=reason)
        self.failures.append(failure)
        return failure

    def build_report(self, tx_count: int) -> AuditReport:
        """Convert to ADA only here; everything before is exact integers."""
        logger.info(
            "Audit of %s: %d/%d TXs processed, %d failed",
            self.address, len(self.summaries), tx_count, len(self.failures),
        )
        return AuditReport(
            address=self.address,
            tx_count=tx_count,
            total_received_lovelace=self.total_received,
            total_spent_lovelace=self.total_spent,
            total_fees_attributed_lovelace=self.total_fees_attributed,
            total_received_ada=lovelace_to_ada(self.total_received),
            total_spent_ada=lovelace_to_ada(self.total_spent),
            net_ada_change=lovelace_to_ada(self.total_received - self.total_spent),
            estimated_fees_paid_ada=lovelace_to_ada(self.total_fees_attributed),
            outgoing_txs_with_assets_count=self.outgoing_with_assets_count,
            unique_asset_units_moved_out=self.outgoing_asset_units,
            per_tx_summary=list(self.summaries),
            failures=list(self.failures),
        )
