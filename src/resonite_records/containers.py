"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from resonite_records.adapters.auth_client import AuthClient, HttpxAuthClient
from resonite_records.adapters.resonite_client import (
    HttpxResoniteClient,
    ResoniteClient,
)
from resonite_records.config import Settings
from resonite_records.services.profile import ProfileService
from resonite_records.services.queries import QueryService
from resonite_records.services.records import RecordStoreService
from resonite_records.services.retention import RetentionService
from resonite_records.services.review import ReviewService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_client: AuthClient
    resonite_client: ResoniteClient
    record_store: RecordStoreService
    query_service: QueryService
    retention_service: RetentionService
    review_service: ReviewService
    profile_service: ProfileService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    auth_client = HttpxAuthClient.create(
        base_url=resolved_settings.api_base_url,
        timeout_seconds=resolved_settings.http_timeout_seconds,
    )
    resonite_client = HttpxResoniteClient.create(
        base_url=resolved_settings.api_base_url,
        user_agent=resolved_settings.user_agent,
        timeout_seconds=resolved_settings.http_timeout_seconds,
    )
    return wire_container(
        resolved_settings,
        auth_client=auth_client,
        resonite_client=resonite_client,
        close_resources=_closer(auth_client, resonite_client),
    )


def wire_container(
    settings: Settings,
    *,
    auth_client: AuthClient,
    resonite_client: ResoniteClient,
    close_resources: Callable[[], Awaitable[None]] | None = None,
) -> AppContainer:
    """Build the services on top of the given API clients."""
    record_store = RecordStoreService(resonite_client)
    query_service = QueryService(record_store)

    async def _noop() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_client=auth_client,
        resonite_client=resonite_client,
        record_store=record_store,
        query_service=query_service,
        retention_service=RetentionService(query_service, record_store),
        review_service=ReviewService(record_store),
        profile_service=ProfileService(resonite_client),
        close_resources=close_resources or _noop,
    )


def _closer(
    auth_client: HttpxAuthClient, resonite_client: HttpxResoniteClient
) -> Callable[[], Awaitable[None]]:
    async def close_resources() -> None:
        await auth_client.close()
        await resonite_client.close()

    return close_resources
