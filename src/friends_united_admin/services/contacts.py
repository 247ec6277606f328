"""Contact form submissions."""

from dataclasses import dataclass
from typing import Any

from friends_united_admin.domain.content import ContactSubmission
from friends_united_admin.services.editor import ContentStore

CONTACT_TYPE = "contact"


@dataclass
class ContactService:
    """Reads and removes submissions sent from the public site."""

    store: ContentStore

    async def list_contacts(self) -> list[ContactSubmission]:
        documents = await self.store.list_documents(CONTACT_TYPE)
        return [_to_contact(document) for document in documents]

    async def get_contact(self, contact_id: str) -> ContactSubmission | None:
        document = await self.store.get_document(CONTACT_TYPE, contact_id)
        return _to_contact(document) if document is not None else None

    async def delete_contact(self, contact_id: str) -> None:
        await self.store.delete(contact_id)


def _to_contact(document: dict[str, Any]) -> ContactSubmission:
    return ContactSubmission(
        id=str(document.get("_id", "")),
        first_name=str(document.get("firstName") or ""),
        last_name=str(document.get("lastName") or ""),
        email=str(document.get("email") or ""),
        phone_number=str(document.get("phoneNumber") or ""),
        message=str(document.get("message") or ""),
        created_at=document.get("_createdAt"),
    )
