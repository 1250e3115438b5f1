"""Blockfrost v0 API client — address transaction listing and per-TX detail."""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from cardanoaudit.exceptions import ExternalServiceError, TransientServiceError
from cardanoaudit.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100  # Blockfrost max `count` per page

# _get result for a 404, distinct from a null or non-JSON body
NOT_FOUND = object()


class BlockfrostClient:
    def __init__(self, http_client: RateLimitedClient) -> None:
        self._http = http_client

    @retry(
        retry=retry_if_exception_type(TransientServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
        reraise=True,
    )
    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a path and return decoded JSON. Returns NOT_FOUND on 404, None for a non-JSON body."""
        try:
            resp = await self._http.get(path, params=params)
        except httpx.TransportError as e:
            raise TransientServiceError(f"Blockfrost unreachable: {e}") from e

        if resp.status_code == 404:
            return NOT_FOUND

        # Rate limit or server error → retriable
        if resp.status_code == 429 or resp.status_code >= 500:
            raise TransientServiceError(
                f"Blockfrost returned {resp.status_code} for {path}", status_code=resp.status_code
            )

        if resp.status_code != 200:
            raise ExternalServiceError(
                f"Blockfrost returned {resp.status_code} for {path}: {_error_message(resp)}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError:
            logger.warning("Blockfrost returned non-JSON body for %s", path)
            return None

    async def list_transactions(
        self, address: str, page: int = 1, page_size: int = MAX_PAGE_SIZE, order: str = "asc"
    ) -> list[str]:
        """Fetch one page of transaction hashes for an address.

        An unknown address (404) or a malformed page yields an empty list.
        """
        params = {"page": page, "count": page_size, "order": order}
        data = await self._get(f"/addresses/{quote(address, safe='')}/transactions", params=params)
        if data is NOT_FOUND or not isinstance(data, list):
            return []
        return [
            item["tx_hash"]
            for item in data
            if isinstance(item, dict) and isinstance(item.get("tx_hash"), str)
        ]

    async def get_transaction_utxos(self, tx_hash: str) -> dict:
        """Fetch {inputs, outputs} for a transaction."""
        data = await self._get(f"/txs/{tx_hash}/utxos")
        if data is NOT_FOUND:
            raise ExternalServiceError(f"Transaction {tx_hash} not found", status_code=404)
        # null, non-JSON or non-object bodies are tolerated as empty
        return data if isinstance(data, dict) else {}

    async def get_transaction_info(self, tx_hash: str) -> dict:
        """Fetch transaction info. The fee lives under `fees` (plural)."""
        data = await self._get(f"/txs/{tx_hash}")
        if data is NOT_FOUND:
            raise ExternalServiceError(f"Transaction {tx_hash} not found", status_code=404)
        # null, non-JSON or non-object bodies are tolerated as empty
        return data if isinstance(data, dict) else {}


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)
