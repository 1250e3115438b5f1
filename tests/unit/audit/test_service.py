"""Tests for AuditService — full pipeline with a mocked Blockfrost client."""

from unittest.mock import AsyncMock

import httpx
import pytest

from cardanoaudit.audit.aggregator import LedgerAggregator
from cardanoaudit.audit.locator import TransactionLocator
from cardanoaudit.audit.service import AuditService
from cardanoaudit.audit.types import TxFailure, TxSummary
from cardanoaudit.exceptions import ExternalServiceError, RetrievalError
from cardanoaudit.infra.blockfrost.client import BlockfrostClient

ADDR = "addr1qxauditedaddress0000000000000000000000000000"
OTHER = "addr1qxcounterparty00000000000000000000000000000000"


def _utxo(address: str, lovelace: int, **assets: str) -> dict:
    amount = [{"unit": "lovelace", "quantity": str(lovelace)}]
    amount.extend({"unit": unit, "quantity": qty} for unit, qty in assets.items())
    return {"address": address, "amount": amount}


UTXOS = {
    "txA": {"inputs": [_utxo(OTHER, 5_200_000)], "outputs": [_utxo(ADDR, 5_000_000)]},
    "txB": {
        "inputs": [_utxo(ADDR, 5_000_000)],
        "outputs": [_utxo(OTHER, 4_800_000), _utxo(OTHER, 1_000_000, policy123abc="1")],
    },
    "txC": {
        "inputs": [_utxo(ADDR, 2_000_000, policy123abc="1"), _utxo(OTHER, 2_000_000)],
        "outputs": [_utxo(OTHER, 3_800_000, policy123abc="1")],
    },
}
INFO = {"txA": {"fees": "200000"}, "txB": {"fees": "170000"}, "txC": {"fees": "200001"}}


@pytest.fixture()
def client():
    client = AsyncMock(spec=BlockfrostClient)
    client.list_transactions.side_effect = lambda address, page=1, page_size=100, order="asc": (
        list(UTXOS) if page == 1 else []
    )
    client.get_transaction_utxos.side_effect = lambda tx_hash: UTXOS[tx_hash]
    client.get_transaction_info.side_effect = lambda tx_hash: INFO[tx_hash]
    return client


@pytest.fixture()
def service(client):
    return AuditService(client=client, locator=TransactionLocator(client))


class TestAuditService:
    async def test_audit_address(self, service):
        report = await service.audit_address(ADDR)

        assert report.tx_count == 3
        assert report.per_tx_count == 3
        assert report.total_received_ada == 5.0
        assert report.total_spent_ada == 7.0
        assert report.net_ada_change == -2.0
        # 170000 (sole input) + 200001 * 2/4 -> 100000
        assert report.total_fees_attributed_lovelace == 270_000
        assert report.estimated_fees_paid_ada == 0.27
        assert report.outgoing_txs_with_assets_count == 1
        assert report.unique_asset_units_moved_out == ["policy123abc"]
        assert [s.tx_hash for s in report.per_tx_summary] == ["txA", "txB", "txC"]
        assert report.failures == []

    async def test_failed_transaction_is_skipped(self, service, client):
        def _utxos(tx_hash):
            if tx_hash == "txB":
                raise ExternalServiceError("Blockfrost returned 500 for /txs/txB/utxos", status_code=500)
            return UTXOS[tx_hash]

        client.get_transaction_utxos.side_effect = _utxos
        report = await service.audit_address(ADDR)

        assert report.tx_count == 3
        assert report.per_tx_count == 2
        assert report.total_spent_lovelace == 2_000_000
        assert report.failures[0].tx_hash == "txB"
        assert "500" in report.failures[0].reason

    async def test_malformed_detail_is_skipped(self, service, client):
        client.get_transaction_info.side_effect = lambda tx_hash: {"fees": "??"} if tx_hash == "txA" else INFO[tx_hash]
        report = await service.audit_address(ADDR)

        assert report.per_tx_count == 2
        assert report.total_received_lovelace == 0
        assert [f.tx_hash for f in report.failures] == ["txA"]

    async def test_missing_fields_tolerated(self, service, client):
        client.get_transaction_utxos.side_effect = lambda tx_hash: {}
        client.get_transaction_info.side_effect = lambda tx_hash: {}
        report = await service.audit_address(ADDR)

        assert report.per_tx_count == 3
        assert report.total_received_lovelace == 0
        assert report.total_spent_lovelace == 0
        assert report.total_fees_attributed_lovelace == 0

    async def test_locator_failure_aborts(self, service, client):
        client.list_transactions.side_effect = ExternalServiceError("Blockfrost returned 403", status_code=403)

        with pytest.raises(RetrievalError):
            await service.audit_address(ADDR)
        client.get_transaction_utxos.assert_not_awaited()

    async def test_no_transactions(self, service, client):
        client.list_transactions.side_effect = None
        client.list_transactions.return_value = []
        report = await service.audit_address(ADDR)

        assert report.tx_count == 0
        assert report.total_received_ada == 0.0
        assert report.total_spent_ada == 0.0
        assert report.estimated_fees_paid_ada == 0.0
        assert report.unique_asset_units_moved_out == []

    async def test_process_transaction_returns_outcome(self, service):
        agg = LedgerAggregator(ADDR)

        ok = await service.process_transaction(agg, "txA")
        bad = await service.process_transaction(agg, "missing")

        assert isinstance(ok, TxSummary)
        assert isinstance(bad, TxFailure)
        assert bad.reason  # KeyError message from the lookup
        assert agg.summaries == [ok]
        assert agg.failures == [bad]


class TestMalformedDetailOverHttp:
    async def test_null_info_body_defaults_fee_to_zero(self, make_http):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/utxos"):
                return httpx.Response(200, json={"inputs": [], "outputs": [_utxo(ADDR, 1_000_000)]})
            return httpx.Response(200, content=b"null", headers={"content-type": "application/json"})

        client = BlockfrostClient(make_http(handler))
        service = AuditService(client=client, locator=TransactionLocator(client))
        agg = LedgerAggregator(ADDR)

        outcome = await service.process_transaction(agg, "tx1")

        assert isinstance(outcome, TxSummary)
        assert outcome.fee_lovelace == 0
        assert agg.total_received == 1_000_000
        assert agg.failures == []
