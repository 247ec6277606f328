"""Sanity-backed content store."""

import json
from dataclasses import dataclass

from friends_united_admin.adapters.http_gateway import ApiError, ApiGateway
from friends_united_admin.services.editor import ContentStore

PUBLISHED = '!(_id in path("drafts.**"))'


@dataclass
class SanityContentStore(ContentStore):
    """Content store implemented on the Sanity HTTP API."""

    gateway: ApiGateway
    dataset: str

    async def fetch_first(self, type_name: str) -> dict[str, object] | None:
        """Return the oldest published document of a type."""
        result = await self._query(
            f"*[_type == $type && {PUBLISHED}] | order(_createdAt asc)[0]",
            type=type_name,
        )
        return result if isinstance(result, dict) else None

    async def get_document(
        self, type_name: str, document_id: str
    ) -> dict[str, object] | None:
        """Return one document of a type by id."""
        result = await self._query(
            "*[_type == $type && _id == $id][0]", type=type_name, id=document_id
        )
        return result if isinstance(result, dict) else None

    async def list_documents(self, type_name: str) -> list[dict[str, object]]:
        """Return every document of a type, newest first."""
        result = await self._query(
            f"*[_type == $type && {PUBLISHED}] | order(_createdAt desc)",
            type=type_name,
        )
        if not isinstance(result, list):
            return []
        return [row for row in result if isinstance(row, dict)]

    async def count_documents(self, type_names: list[str]) -> dict[str, int] | None:
        """Count documents per type in a single query."""
        if not type_names:
            return {}
        params = {f"t{index}": name for index, name in enumerate(type_names)}
        projection = ", ".join(
            f'"{name}": count(*[_type == $t{index} && {PUBLISHED}])'
            for index, name in enumerate(type_names)
        )
        result = await self._query(f"{{{projection}}}", **params)
        if not isinstance(result, dict):
            return None
        return {name: int(result.get(name) or 0) for name in type_names}

    async def create(
        self,
        type_name: str,
        fields: dict[str, object],
        document_id: str | None = None,
    ) -> str:
        """Create a document and return its id.

        With a fixed ``document_id`` the create is idempotent: the document is
        created only if missing and the fields are then patched onto it.
        """
        values = {key: value for key, value in fields.items() if value is not None}
        if document_id is None:
            mutations: list[dict[str, object]] = [
                {"create": {"_type": type_name, **values}}
            ]
        else:
            mutations = [
                {"createIfNotExists": {"_id": document_id, "_type": type_name}}
            ]
            if values:
                mutations.append({"patch": {"id": document_id, "set": values}})
        data = await self._mutate(mutations)
        if document_id is not None:
            return document_id
        results = data.get("results")
        if isinstance(results, list) and results and isinstance(results[0], dict):
            created_id = results[0].get("id")
            if isinstance(created_id, str):
                return created_id
        raise ApiError("Content store did not return the created document id")

    async def patch(self, document_id: str, fields: dict[str, object]) -> None:
        """Set the given fields; None values are removed from the document."""
        patch: dict[str, object] = {"id": document_id}
        to_set = {key: value for key, value in fields.items() if value is not None}
        to_unset = [key for key, value in fields.items() if value is None]
        if to_set:
            patch["set"] = to_set
        if to_unset:
            patch["unset"] = to_unset
        await self._mutate([{"patch": patch}])

    async def delete(self, document_id: str) -> None:
        """Delete a document."""
        await self._mutate([{"delete": {"id": document_id}}])

    async def upload_image(
        self, content: bytes, filename: str, content_type: str
    ) -> str:
        """Upload an image asset and return its asset id."""
        response = await self.gateway.request(
            "POST",
            f"/assets/images/{self.dataset}",
            params={"filename": filename},
            content=content,
            headers={"Content-Type": content_type},
        )
        payload = response.data if isinstance(response.data, dict) else {}
        document = payload.get("document")
        if isinstance(document, dict) and isinstance(document.get("_id"), str):
            return document["_id"]
        raise ApiError("Content store did not return the uploaded asset id")

    async def _query(self, query: str, **params: str) -> object | None:
        encoded = {f"${name}": json.dumps(value) for name, value in params.items()}
        response = await self.gateway.request(
            "GET",
            f"/data/query/{self.dataset}",
            params={"query": query, **encoded},
        )
        if not response.ok or not isinstance(response.data, dict):
            return None
        return response.data.get("result")

    async def _mutate(self, mutations: list[dict[str, object]]) -> dict[str, object]:
        response = await self.gateway.request(
            "POST",
            f"/data/mutate/{self.dataset}",
            params={"returnIds": "true", "visibility": "sync"},
            json={"mutations": mutations},
        )
        return response.data if isinstance(response.data, dict) else {}


def image_url(cdn_base_url: str, ref: str) -> str | None:
    """Build the CDN URL for an image asset id like ``image-<sha>-<WxH>-<ext>``."""
    parts = ref.split("-")
    if len(parts) != 4 or parts[0] != "image":  # noqa: PLR2004
        return None
    _, sha1, dimensions, extension = parts
    return f"{cdn_base_url}/{sha1}-{dimensions}.{extension}"
