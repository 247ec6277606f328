"""Authentication REST API client."""

from dataclasses import dataclass
from typing import Protocol

from friends_united_admin.adapters.http_gateway import ApiError, ApiGateway


class AuthApiClient(Protocol):
    """Interface for the authentication REST API."""

    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for a bearer token."""

    async def me(self) -> dict[str, object] | None:
        """Return the signed-in user, or None when it can't be read."""

    async def forgot_password(self, email: str) -> None:
        """Send a password reset code to the given address."""

    async def resend_reset_otp(self, email: str) -> None:
        """Send a fresh password reset code."""

    async def verify_reset_otp(self, email: str, otp: str) -> None:
        """Check a password reset code."""

    async def reset_password(self, email: str, otp: str, password: str) -> None:
        """Set a new password using a verified code."""

    async def create_user(self, name: str, email: str, password: str) -> None:
        """Create a new dashboard account."""


@dataclass
class HttpAuthApiClient(AuthApiClient):
    """Auth API client that sends every call through the gateway."""

    gateway: ApiGateway

    async def login(self, email: str, password: str) -> str:
        """Log in and return the issued token."""
        response = await self.gateway.post(
            "/users/login", json={"email": email, "password": password}
        )
        token = _unwrap(response.data).get("token")
        if not isinstance(token, str) or not token:
            raise ApiError("Login response did not include a token")
        return token

    async def me(self) -> dict[str, object] | None:
        """Fetch the current user profile."""
        response = await self.gateway.get("/users/me")
        if response.data is None:
            return None
        return _unwrap(response.data) or None

    async def forgot_password(self, email: str) -> None:
        await self.gateway.post("/users/forgot-password", json={"email": email})

    async def resend_reset_otp(self, email: str) -> None:
        await self.gateway.post("/auth/forgot-password", json={"email": email})

    async def verify_reset_otp(self, email: str, otp: str) -> None:
        await self.gateway.post(
            "/auth/verify-reset-otp", json={"email": email, "otp": otp}
        )

    async def reset_password(self, email: str, otp: str, password: str) -> None:
        await self.gateway.post(
            "/auth/reset-password",
            json={"email": email, "otp": otp, "newPassword": password},
        )

    async def create_user(self, name: str, email: str, password: str) -> None:
        await self.gateway.post(
            "/users/register",
            json={"name": name, "email": email, "password": password},
        )


def _unwrap(payload: object | None) -> dict[str, object]:
    """Return the ``data`` envelope of an API response body."""
    if not isinstance(payload, dict):
        return {}
    data = payload.get("data")
    if isinstance(data, dict):
        return data
    return payload
