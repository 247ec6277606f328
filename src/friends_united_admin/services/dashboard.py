"""Dashboard overview cards."""

from dataclasses import dataclass

from friends_united_admin.services.contacts import CONTACT_TYPE
from friends_united_admin.services.editor import ContentStore
from friends_united_admin.services.resources import dashboard_resources


@dataclass(frozen=True)
class DashboardCard:
    title: str
    description: str
    path: str
    count: int | None


@dataclass
class DashboardService:
    """Builds one card per content section with live document counts."""

    store: ContentStore

    async def cards(self) -> list[DashboardCard]:
        resources = dashboard_resources()
        type_names = [resource.type_name for resource in resources] + [CONTACT_TYPE]
        counts = await self.store.count_documents(type_names)
        cards = [
            DashboardCard(
                title=resource.title,
                description=resource.description,
                path=resource.path,
                count=None if counts is None else counts.get(resource.type_name, 0),
            )
            for resource in resources
        ]
        cards.append(
            DashboardCard(
                title="Contacts",
                description="Messages sent through the contact form.",
                path="/contacts",
                count=None if counts is None else counts.get(CONTACT_TYPE, 0),
            )
        )
        return cards
