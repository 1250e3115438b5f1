"""AuditService — locate an address's TXs, fetch each one, fold into a report."""

from __future__ import annotations

import logging

from cardanoaudit.audit.aggregator import LedgerAggregator
from cardanoaudit.audit.locator import TransactionLocator
from cardanoaudit.audit.normalize import build_transaction_detail
from cardanoaudit.audit.types import AuditReport, TransactionDetail, TxFailure, TxSummary
from cardanoaudit.infra.blockfrost.client import BlockfrostClient

logger = logging.getLogger(__name__)


class AuditService:
    """Locator -> per-TX detail fetch -> LedgerAggregator -> AuditReport.

    Strictly sequential: one request in flight at a time. A locator failure
    propagates (RetrievalError) and no report is produced; a failure on a
    single transaction is logged and that transaction is skipped.
    """

    def __init__(self, client: BlockfrostClient, locator: TransactionLocator) -> None:
        self._client = client
        self._locator = locator

    async def fetch_detail(self, tx_hash: str) -> TransactionDetail:
        utxos = await self._client.get_transaction_utxos(tx_hash)
        info = await self._client.get_transaction_info(tx_hash)
        return build_transaction_detail(tx_hash, utxos, info)

    async def process_transaction(
        self, aggregator: LedgerAggregator, tx_hash: str
    ) -> TxSummary | TxFailure:
        try:
            detail = await self.fetch_detail(tx_hash)
            summary = aggregator.fold(detail)
        except Exception as e:
            logger.warning("Failed to fetch/process TX %s: %s", tx_hash, e)
            return aggregator.record_failure(tx_hash, str(e) or type(e).__name__)

        logger.debug(
            "TX %s: in=%d out=%d fee=%d attributed=%d",
            tx_hash,
            summary.inputs_from_address_lovelace,
            summary.outputs_to_address_lovelace,
            summary.fee_lovelace,
            summary.fee_attributed_lovelace,
        )
        return summary

    async def audit_address(self, address: str) -> AuditReport:
        logger.info("Fetching transactions for %s ...", address)
        tx_hashes = await self._locator.collect(address)
        logger.info("Found %d TX(s). Processing each TX ...", len(tx_hashes))

        aggregator = LedgerAggregator(address)
        for tx_hash in tx_hashes:
            await self.process_transaction(aggregator, tx_hash)

        return aggregator.build_report(tx_count=len(tx_hashes))
