"""Content document domain models."""

from dataclasses import dataclass

FieldErrors = dict[str, str]


@dataclass(frozen=True)
class Creating:
    """No document exists yet; the next submit creates one."""


@dataclass(frozen=True)
class Editing:
    """The form edits an existing document."""

    document_id: str


EditorMode = Creating | Editing


def mode_from_document_id(document_id: str | None) -> EditorMode:
    """Rebuild the editor mode carried through a rendered form."""
    if document_id and document_id.strip():
        return Editing(document_id.strip())
    return Creating()


@dataclass(frozen=True)
class EmptyImage:
    """No image is set."""


@dataclass(frozen=True)
class PendingUpload:
    """A freshly selected local file that has not been uploaded yet.

    ``previous_ref`` remembers the stored asset the file would replace, so a
    form that fails to save can still render it.
    """

    content: bytes
    filename: str
    content_type: str
    previous_ref: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class PersistedImage:
    """An image asset already stored in the content store."""

    ref: str


ImageValue = EmptyImage | PendingUpload | PersistedImage


def image_reference(asset_id: str) -> dict[str, object]:
    """Return the document fragment that embeds an image asset by reference."""
    return {"_type": "image", "asset": {"_type": "reference", "_ref": asset_id}}


def image_from_document(value: object) -> ImageValue:
    """Read an embedded image reference back from a stored document."""
    if isinstance(value, dict):
        asset = value.get("asset")
        if isinstance(asset, dict) and isinstance(asset.get("_ref"), str):
            return PersistedImage(asset["_ref"])
    return EmptyImage()


@dataclass(frozen=True)
class ContactSubmission:
    """A message sent through the public site's contact form."""

    id: str
    first_name: str
    last_name: str
    email: str
    phone_number: str
    message: str
    created_at: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
