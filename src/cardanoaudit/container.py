from dependency_injector import containers, providers

from cardanoaudit.audit.locator import TransactionLocator
from cardanoaudit.audit.service import AuditService
from cardanoaudit.config import Settings
from cardanoaudit.infra.blockfrost.client import BlockfrostClient
from cardanoaudit.infra.http.rate_limited_client import RateLimitedClient
from cardanoaudit.report.json_writer import JsonWriter


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    http_client = providers.Singleton(
        RateLimitedClient,
        base_url=settings.provided.base_url,
        headers=settings.provided.auth_headers,
        pause_seconds=settings.provided.request_pause_seconds,
        timeout=settings.provided.request_timeout,
    )

    blockfrost = providers.Singleton(BlockfrostClient, http_client=http_client)

    locator = providers.Factory(
        TransactionLocator,
        client=blockfrost,
        page_size=settings.provided.page_size,
    )

    audit_service = providers.Factory(AuditService, client=blockfrost, locator=locator)

    json_writer = providers.Factory(JsonWriter)
