"""Account and authentication domain models."""

from dataclasses import dataclass
from typing import Annotated

from pydantic import ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from friends_united_admin.domain.forms import (
    OTP_PATTERN,
    FormModel,
    email_format,
    matches,
    min_length,
    required,
)

_EMAIL_MESSAGE = "Please enter a valid email address"
_PASSWORD_MESSAGE = "Password must be at least 6 characters"

Email = Annotated[str, required(_EMAIL_MESSAGE), email_format(_EMAIL_MESSAGE)]
Password = Annotated[str, required(_PASSWORD_MESSAGE), min_length(6, _PASSWORD_MESSAGE)]


@dataclass(frozen=True)
class CurrentUser:
    """The signed-in admin as reported by the auth API."""

    name: str
    email: str
    role: str | None = None

    @property
    def initials(self) -> str:
        source = self.name or self.email
        parts = [part for part in source.replace("@", " ").split() if part]
        return "".join(part[0] for part in parts[:2]).upper() or "?"

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "CurrentUser":
        name = payload.get("name") or payload.get("fullName") or ""
        return cls(
            name=str(name),
            email=str(payload.get("email") or ""),
            role=str(payload["role"]) if payload.get("role") else None,
        )


class LoginForm(FormModel):
    email: Email = ""
    password: Password = ""


class ForgotPasswordForm(FormModel):
    email: Email = ""


class VerifyOtpForm(FormModel):
    email: Email = ""
    otp: Annotated[
        str,
        required("Please enter the 6-digit code"),
        matches(OTP_PATTERN, "Please enter the 6-digit code"),
    ] = ""


class ResetPasswordForm(FormModel):
    email: Email = ""
    otp: Annotated[str, required("Verification code is missing")] = ""
    password: Password = ""
    confirm_password: str = ""

    @field_validator("confirm_password")
    @classmethod
    def _passwords_match(cls, value: str, info: ValidationInfo) -> str:
        password = info.data.get("password")
        if password is not None and value != password:
            raise PydanticCustomError("mismatch", "Passwords do not match")
        return value


class NewUserForm(FormModel):
    name: Annotated[str, required("Name is required")] = ""
    email: Email = ""
    password: Password = ""
