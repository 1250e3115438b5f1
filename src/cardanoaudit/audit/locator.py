"""TransactionLocator — pages an address's transaction hashes, oldest first."""

import logging
from collections.abc import AsyncIterator

from cardanoaudit.exceptions import ExternalServiceError, RetrievalError
from cardanoaudit.infra.blockfrost.client import MAX_PAGE_SIZE, BlockfrostClient

logger = logging.getLogger(__name__)


class TransactionLocator:
    """Yields transaction hashes for an address in ascending chronological order."""

    def __init__(self, client: BlockfrostClient, page_size: int = MAX_PAGE_SIZE) -> None:
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")
        self._client = client
        self._page_size = page_size

    async def iter_transactions(self, address: str) -> AsyncIterator[str]:
        """Lazily page through hashes. Each call starts again from page 1.

        Stops at the first empty or malformed page. Raises RetrievalError
        if the data source fails.
        """
        seen: set[str] = set()
        page = 1
        while True:
            try:
                batch = await self._client.list_transactions(
                    address, page=page, page_size=self._page_size, order="asc"
                )
            except ExternalServiceError as e:
                raise RetrievalError(
                    f"Failed to fetch transaction list for {address} (page {page}): {e}"
                ) from e

            if not batch:
                break

            for tx_hash in batch:
                if tx_hash in seen:
                    continue
                seen.add(tx_hash)
                yield tx_hash

            logger.debug("Fetched page %d (%d hashes) for %s", page, len(batch), address)
            page += 1

    async def collect(self, address: str) -> list[str]:
        """Materialize the full list. No partial list on failure."""
        return [tx_hash async for tx_hash in self.iter_transactions(address)]
