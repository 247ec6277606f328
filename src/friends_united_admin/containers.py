"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx

from friends_united_admin.adapters.auth_api_client import (
    AuthApiClient,
    HttpAuthApiClient,
)
from friends_united_admin.adapters.http_gateway import HttpxApiGateway
from friends_united_admin.adapters.sanity_content_store import SanityContentStore
from friends_united_admin.config import Settings
from friends_united_admin.services.accounts import AccountService
from friends_united_admin.services.contacts import ContactService
from friends_united_admin.services.dashboard import DashboardService
from friends_united_admin.services.editor import ContentEditor, ContentStore
from friends_united_admin.services.resources import ResourceDefinition
from friends_united_admin.services.session import ViewContext

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies.

    Remote clients are built per request because every outbound call reports
    failures into the request's ``ViewContext``.
    """

    settings: Settings
    auth_api_factory: Callable[[ViewContext], AuthApiClient]
    content_store_factory: Callable[[ViewContext], ContentStore]
    close_resources: Callable[[], Awaitable[None]]

    def account_service(self, context: ViewContext) -> AccountService:
        return AccountService(self.auth_api_factory(context), context)

    def content_editor(
        self, context: ViewContext, resource: ResourceDefinition
    ) -> ContentEditor:
        return ContentEditor(resource, self.content_store_factory(context))

    def contact_service(self, context: ViewContext) -> ContactService:
        return ContactService(self.content_store_factory(context))

    def dashboard_service(self, context: ViewContext) -> DashboardService:
        return DashboardService(self.content_store_factory(context))


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    http_client = httpx.AsyncClient(timeout=resolved_settings.request_timeout_seconds)
    if not resolved_settings.sanity_api_token:
        logger.warning("SANITY_API_TOKEN is not set; content writes will be rejected")

    def auth_api_factory(context: ViewContext) -> AuthApiClient:
        gateway = HttpxApiGateway(
            http_client=http_client,
            base_url=resolved_settings.auth_api_base_url,
            context=context,
        )
        return HttpAuthApiClient(gateway)

    def content_store_factory(context: ViewContext) -> ContentStore:
        gateway = HttpxApiGateway(
            http_client=http_client,
            base_url=resolved_settings.sanity_api_url,
            context=context,
            bearer=lambda: resolved_settings.sanity_api_token,
            force_logout_on_401=False,
        )
        return SanityContentStore(gateway, dataset=resolved_settings.sanity_dataset)

    async def close_resources() -> None:
        await http_client.aclose()

    return AppContainer(
        settings=resolved_settings,
        auth_api_factory=auth_api_factory,
        content_store_factory=content_store_factory,
        close_resources=close_resources,
    )
