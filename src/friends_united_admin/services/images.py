"""Image field rules and upload resolution."""

from dataclasses import dataclass
from typing import Protocol

from friends_united_admin.domain.content import (
    EmptyImage,
    ImageValue,
    PendingUpload,
    PersistedImage,
    image_reference,
)

JPEG_PNG = frozenset({"image/jpeg", "image/jpg", "image/png"})
WEB_IMAGES = JPEG_PNG | {"image/webp"}
WEB_IMAGES_WITH_SVG = WEB_IMAGES | {"image/svg+xml"}
TWO_MEGABYTES = 2 * 1024 * 1024


class ImageUploader(Protocol):
    """Stores binary image assets."""

    async def upload_image(
        self, content: bytes, filename: str, content_type: str
    ) -> str:
        """Upload bytes and return the asset id."""


@dataclass(frozen=True)
class ImageField:
    """Declares an image field of a content form and its rules."""

    name: str
    label: str
    required: bool = False
    allowed_types: frozenset[str] = WEB_IMAGES
    max_bytes: int | None = None
    type_message: str = "Only image files are allowed"

    @property
    def accept(self) -> str:
        return ",".join(sorted(self.allowed_types))

    @property
    def required_message(self) -> str:
        return f"{self.label} is required"

    @property
    def size_message(self) -> str:
        megabytes = (self.max_bytes or 0) / (1024 * 1024)
        return f"File size must not exceed {megabytes:g}MB"


def validate_image(field: ImageField, value: ImageValue) -> str | None:
    """Return the error message for an image value, if any."""
    if isinstance(value, EmptyImage):
        return field.required_message if field.required else None
    if isinstance(value, PendingUpload):
        if value.content_type not in field.allowed_types:
            return field.type_message
        if field.max_bytes is not None and value.size > field.max_bytes:
            return field.size_message
    return None


async def resolve_image(
    value: ImageValue, uploader: ImageUploader
) -> dict[str, object] | None:
    """Turn an image value into the reference embedded in a document.

    Pending files are uploaded first, persisted references pass through
    unchanged and an empty value resolves to None.
    """
    if isinstance(value, PendingUpload):
        asset_id = await uploader.upload_image(
            value.content, value.filename, value.content_type
        )
        return image_reference(asset_id)
    if isinstance(value, PersistedImage):
        return image_reference(value.ref)
    return None
