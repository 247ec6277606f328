"""Generic editor that syncs one form with one content document."""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from friends_united_admin.domain.content import (
    Creating,
    Editing,
    EditorMode,
    EmptyImage,
    FieldErrors,
    ImageValue,
    PersistedImage,
)
from friends_united_admin.domain.forms import validate_form
from friends_united_admin.services.images import resolve_image, validate_image
from friends_united_admin.services.resources import ResourceDefinition

logger = logging.getLogger(__name__)


class ContentStore(Protocol):
    """Interface for the headless content store."""

    async def fetch_first(self, type_name: str) -> dict[str, Any] | None:
        """Return the first document of a type, or None."""

    async def get_document(
        self, type_name: str, document_id: str
    ) -> dict[str, Any] | None:
        """Return a document by id, or None."""

    async def list_documents(self, type_name: str) -> list[dict[str, Any]]:
        """Return all documents of a type, newest first."""

    async def count_documents(self, type_names: list[str]) -> dict[str, int] | None:
        """Count documents per type; None when the read failed."""

    async def create(
        self,
        type_name: str,
        fields: dict[str, Any],
        document_id: str | None = None,
    ) -> str:
        """Create a document and return its id."""

    async def patch(self, document_id: str, fields: dict[str, Any]) -> None:
        """Update fields of an existing document."""

    async def delete(self, document_id: str) -> None:
        """Delete a document."""

    async def upload_image(
        self, content: bytes, filename: str, content_type: str
    ) -> str:
        """Upload an image asset and return its id."""


@dataclass
class EditorState:
    """What a content form renders: mode, values, images and errors."""

    mode: EditorMode
    values: dict[str, Any]
    images: dict[str, ImageValue] = field(default_factory=dict)
    errors: FieldErrors = field(default_factory=dict)

    @property
    def document_id(self) -> str | None:
        return self.mode.document_id if isinstance(self.mode, Editing) else None

    @property
    def is_editing(self) -> bool:
        return isinstance(self.mode, Editing)


@dataclass
class ContentEditor:
    """Loads, validates and writes one content document."""

    resource: ResourceDefinition
    store: ContentStore

    async def load(self, document_id: str | None = None) -> EditorState:
        """Load the document and decide between editing and creating."""
        document = await self._read(document_id)
        if document is None:
            return self.blank_state()
        return self._state_from_document(document)

    def blank_state(self) -> EditorState:
        return EditorState(
            mode=Creating(),
            values=self.resource.blank_values(),
            images=self.resource.form_images(None),
        )

    async def submit(
        self,
        mode: EditorMode,
        values: dict[str, Any],
        images: dict[str, ImageValue],
    ) -> EditorState:
        """Validate and persist submitted values.

        Validation failures return the submitted state with errors and make no
        remote call. ``ApiError`` from the store propagates unchanged so the
        caller can re-render the submitted values in their submitted mode.
        """
        form, errors = validate_form(self.resource.form_model, values)
        for image_field in self.resource.image_fields:
            value = images.get(image_field.name, EmptyImage())
            message = validate_image(image_field, value)
            if message:
                errors[image_field.name] = message
        if form is None or errors:
            return EditorState(mode=mode, values=values, images=images, errors=errors)

        fields = form.model_dump(by_alias=True)
        resolved_images: dict[str, ImageValue] = {}
        for image_field in self.resource.image_fields:
            reference = await resolve_image(
                images.get(image_field.name, EmptyImage()), self.store
            )
            fields[image_field.name] = reference
            resolved_images[image_field.name] = (
                PersistedImage(reference["asset"]["_ref"])
                if reference is not None
                else EmptyImage()
            )

        if isinstance(mode, Editing):
            document_id = mode.document_id
            await self.store.patch(document_id, fields)
        else:
            document_id = await self.store.create(
                self.resource.type_name,
                fields,
                document_id=self.resource.singleton_id,
            )
            logger.info(
                "Created content document",
                extra={"type": self.resource.type_name, "document_id": document_id},
            )

        document = await self.store.get_document(self.resource.type_name, document_id)
        if document is None:
            return EditorState(
                mode=Editing(document_id),
                values=self.resource.form_values(fields),
                images=resolved_images,
            )
        return self._state_from_document(document)

    async def list_documents(self) -> list[dict[str, Any]]:
        return await self.store.list_documents(self.resource.type_name)

    async def delete(self, document_id: str) -> None:
        await self.store.delete(document_id)

    async def _read(self, document_id: str | None) -> dict[str, Any] | None:
        if self.resource.singleton:
            return await self.store.fetch_first(self.resource.type_name)
        if not document_id:
            return None
        return await self.store.get_document(self.resource.type_name, document_id)

    def _state_from_document(self, document: dict[str, Any]) -> EditorState:
        return EditorState(
            mode=Editing(str(document.get("_id", ""))),
            values=self.resource.form_values(document),
            images=self.resource.form_images(document),
        )
