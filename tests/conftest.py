import httpx
import pytest

from cardanoaudit.infra.http.rate_limited_client import RateLimitedClient

BASE_URL = "https://cardano-test.blockfrost.io/api/v0"


@pytest.fixture()
async def make_http():
    """Build RateLimitedClients backed by httpx.MockTransport, no pause."""
    clients: list[RateLimitedClient] = []

    def _make(handler) -> RateLimitedClient:
        client = RateLimitedClient(
            base_url=BASE_URL,
            headers={"project_id": "test-project"},
            pause_seconds=0,
            transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.close()
