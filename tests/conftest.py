"""Shared test fixtures."""

from dataclasses import dataclass, field
from typing import Any

import pytest
from fastapi.testclient import TestClient

from friends_united_admin.adapters.auth_api_client import AuthApiClient
from friends_united_admin.adapters.http_gateway import ApiError
from friends_united_admin.api.app import create_app
from friends_united_admin.config import Settings
from friends_united_admin.containers import AppContainer
from friends_united_admin.services.editor import ContentStore
from friends_united_admin.services.session import AUTH_TOKEN_KEY, ViewContext

VALID_TOKEN = "valid-token"


@dataclass
class InMemoryContentStore(ContentStore):
    """In-memory content store that records every call in order."""

    documents: dict[str, dict[str, Any]] = field(default_factory=dict)
    calls: list[tuple[str, Any]] = field(default_factory=list)
    fail_writes: bool = False
    fail_reads: bool = False
    next_id: int = 1

    def add(self, type_name: str, document_id: str, **fields: Any) -> None:
        self.documents[document_id] = {"_id": document_id, "_type": type_name, **fields}

    async def fetch_first(self, type_name: str) -> dict[str, Any] | None:
        self.calls.append(("fetch_first", type_name))
        if self.fail_reads:
            return None
        for document in self.documents.values():
            if document["_type"] == type_name:
                return dict(document)
        return None

    async def get_document(
        self, type_name: str, document_id: str
    ) -> dict[str, Any] | None:
        self.calls.append(("get_document", document_id))
        document = self.documents.get(document_id)
        if self.fail_reads or document is None or document["_type"] != type_name:
            return None
        return dict(document)

    async def list_documents(self, type_name: str) -> list[dict[str, Any]]:
        self.calls.append(("list_documents", type_name))
        if self.fail_reads:
            return []
        return [
            dict(document)
            for document in reversed(self.documents.values())
            if document["_type"] == type_name
        ]

    async def count_documents(self, type_names: list[str]) -> dict[str, int] | None:
        self.calls.append(("count_documents", tuple(type_names)))
        if self.fail_reads:
            return None
        return {
            name: sum(1 for doc in self.documents.values() if doc["_type"] == name)
            for name in type_names
        }

    async def create(
        self,
        type_name: str,
        fields: dict[str, Any],
        document_id: str | None = None,
    ) -> str:
        self.calls.append(("create", type_name))
        self._check_write()
        if document_id is None:
            document_id = f"{type_name}-{self.next_id}"
            self.next_id += 1
        existing = self.documents.get(document_id, {})
        values = {key: value for key, value in fields.items() if value is not None}
        self.documents[document_id] = {
            **existing,
            **values,
            "_id": document_id,
            "_type": type_name,
        }
        return document_id

    async def patch(self, document_id: str, fields: dict[str, Any]) -> None:
        self.calls.append(("patch", document_id))
        self._check_write()
        document = self.documents[document_id]
        for key, value in fields.items():
            if value is None:
                document.pop(key, None)
            else:
                document[key] = value

    async def delete(self, document_id: str) -> None:
        self.calls.append(("delete", document_id))
        self._check_write()
        self.documents.pop(document_id, None)

    async def upload_image(
        self, content: bytes, filename: str, content_type: str
    ) -> str:
        self.calls.append(("upload_image", filename))
        self._check_write()
        asset_id = f"image-{self.next_id:040x}-100x100-png"
        self.next_id += 1
        return asset_id

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def _check_write(self) -> None:
        if self.fail_writes:
            raise ApiError("Write rejected", status_code=500)


@dataclass
class FakeAuthBackend:
    """State shared by every per-request fake auth client."""

    valid_tokens: set[str] = field(default_factory=lambda: {VALID_TOKEN})
    passwords: dict[str, str] = field(
        default_factory=lambda: {"admin@example.com": "secret1"}
    )
    otp: str = "123456"
    calls: list[tuple[str, Any]] = field(default_factory=list)
    reject_all: bool = False


@dataclass
class FakeAuthApi(AuthApiClient):
    """Fake auth API that reports failures into the request context."""

    backend: FakeAuthBackend
    context: ViewContext

    def _reject(self, message: str, status_code: int = 400) -> ApiError:
        self.context.notifier.error(message)
        return ApiError(message, status_code=status_code)

    async def login(self, email: str, password: str) -> str:
        self.backend.calls.append(("login", email))
        if self.backend.passwords.get(email) != password:
            raise self._reject("Invalid email or password")
        return VALID_TOKEN

    async def me(self) -> dict[str, object] | None:
        self.backend.calls.append(("me", None))
        if self.context.token_store.get() not in self.backend.valid_tokens:
            self.context.notifier.error(
                "Your session has expired. Please log in again.",
                title="Unauthorized",
            )
            self.context.force_logout()
            return None
        return {"name": "Ada Admin", "email": "admin@example.com"}

    async def forgot_password(self, email: str) -> None:
        self.backend.calls.append(("forgot_password", email))
        if self.backend.reject_all:
            raise self._reject("User not found", status_code=404)

    async def resend_reset_otp(self, email: str) -> None:
        self.backend.calls.append(("resend_reset_otp", email))

    async def verify_reset_otp(self, email: str, otp: str) -> None:
        self.backend.calls.append(("verify_reset_otp", otp))
        if otp != self.backend.otp:
            raise self._reject("Invalid OTP")

    async def reset_password(self, email: str, otp: str, password: str) -> None:
        self.backend.calls.append(("reset_password", email))
        self.backend.passwords[email] = password

    async def create_user(self, name: str, email: str, password: str) -> None:
        self.backend.calls.append(("create_user", email))
        if email in self.backend.passwords:
            raise self._reject("User already exists", status_code=409)
        self.backend.passwords[email] = password


@pytest.fixture
def settings() -> Settings:
    return Settings(
        auth_api_base_url="https://auth.example.com/api",
        sanity_project_id="proj123",
        sanity_dataset="production",
        sanity_api_token="sanity-token",
    )


@pytest.fixture
def content_store() -> InMemoryContentStore:
    return InMemoryContentStore()


@pytest.fixture
def auth_backend() -> FakeAuthBackend:
    return FakeAuthBackend()


@pytest.fixture
def container(
    settings: Settings,
    content_store: InMemoryContentStore,
    auth_backend: FakeAuthBackend,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_api_factory=lambda context: FakeAuthApi(auth_backend, context),
        content_store_factory=lambda context: content_store,
        close_resources=close_resources,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def signed_in_client(client: TestClient) -> TestClient:
    client.cookies.set(AUTH_TOKEN_KEY, VALID_TOKEN)
    return client
