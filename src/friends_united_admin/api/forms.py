"""Parsing of submitted HTML forms into nested values.

Inputs are named with dotted paths (``sections.0.content.1``); numeric
segments become list positions. Every list renders one blank trailing row,
so rows left fully blank are dropped before validation.
"""

from typing import Any

from starlette.datastructures import FormData, UploadFile

from friends_united_admin.domain.content import (
    EditorMode,
    EmptyImage,
    ImageValue,
    PendingUpload,
    PersistedImage,
    mode_from_document_id,
)
from friends_united_admin.services.images import ImageField

DOCUMENT_ID_FIELD = "document_id"
REF_SUFFIX = "__ref"
REMOVE_SUFFIX = "__remove"


def unflatten(pairs: list[tuple[str, str]]) -> dict[str, Any]:
    """Build nested dicts and lists from dotted input names."""
    root: dict[str, Any] = {}
    for name, value in pairs:
        parts = name.split(".")
        node = root
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value
    return _listify(root)


def _listify(node: Any) -> Any:
    if not isinstance(node, dict):
        return node
    converted = {key: _listify(value) for key, value in node.items()}
    if converted and all(key.isdigit() for key in converted):
        return [converted[key] for key in sorted(converted, key=int)]
    return converted


def is_blank(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list):
        return all(is_blank(item) for item in value)
    if isinstance(value, dict):
        return all(is_blank(item) for item in value.values())
    return value is None


def compact(value: Any) -> Any:
    """Drop fully blank list rows, recursively."""
    if isinstance(value, dict):
        return {key: compact(item) for key, item in value.items()}
    if isinstance(value, list):
        return [compact(item) for item in value if not is_blank(item)]
    return value


def form_values(form: FormData, skip: set[str] | None = None) -> dict[str, Any]:
    """Return the nested, compacted text values of a submitted form."""
    skipped = skip or set()
    pairs = [
        (key, value)
        for key, value in form.multi_items()
        if isinstance(value, str)
        and key != DOCUMENT_ID_FIELD
        and key not in skipped
        and not key.endswith((REF_SUFFIX, REMOVE_SUFFIX))
    ]
    return compact(unflatten(pairs))


async def read_image(form: FormData, name: str) -> ImageValue:
    """Resolve one image input group into an image value.

    A newly chosen file wins; otherwise the remove checkbox clears the image
    and the hidden reference keeps the stored one.
    """
    raw_ref = form.get(f"{name}{REF_SUFFIX}")
    ref = raw_ref.strip() if isinstance(raw_ref, str) else ""
    upload = form.get(name)
    if isinstance(upload, UploadFile) and upload.filename:
        content = await upload.read()
        if content:
            return PendingUpload(
                content=content,
                filename=upload.filename,
                content_type=upload.content_type or "application/octet-stream",
                previous_ref=ref or None,
            )
    if form.get(f"{name}{REMOVE_SUFFIX}"):
        return EmptyImage()
    if ref:
        return PersistedImage(ref)
    return EmptyImage()


async def read_submission(
    form: FormData, image_fields: tuple[ImageField, ...]
) -> tuple[EditorMode, dict[str, Any], dict[str, ImageValue]]:
    """Split a content form into editor mode, values and images."""
    names = {image.name for image in image_fields}
    images = {name: await read_image(form, name) for name in names}
    document_id = form.get(DOCUMENT_ID_FIELD)
    mode = mode_from_document_id(document_id if isinstance(document_id, str) else None)
    return mode, form_values(form, skip=names), images
