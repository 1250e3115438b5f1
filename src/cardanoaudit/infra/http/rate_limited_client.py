import asyncio
from collections.abc import Awaitable, Callable

import httpx


class RateLimitedClient:
    """Async HTTP client that pauses for a fixed interval after every request."""

    def __init__(
        self,
        base_url: str = "",
        headers: dict[str, str] | None = None,
        pause_seconds: float = 0.2,
        timeout: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._pause_seconds = pause_seconds
        self._sleep = sleep
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def _pause(self) -> None:
        if self._pause_seconds > 0:
            await self._sleep(self._pause_seconds)

    async def get(self, url: str, params: dict | None = None) -> httpx.Response:
        try:
            return await self._client.get(url, params=params)
        finally:
            await self._pause()

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
