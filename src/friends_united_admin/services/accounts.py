"""Sign-in, password recovery and account creation flows."""

import logging
from dataclasses import dataclass
from typing import Any

from friends_united_admin.adapters.auth_api_client import AuthApiClient
from friends_united_admin.adapters.http_gateway import ApiError
from friends_united_admin.domain.accounts import (
    CurrentUser,
    ForgotPasswordForm,
    LoginForm,
    NewUserForm,
    ResetPasswordForm,
    VerifyOtpForm,
)
from friends_united_admin.domain.content import FieldErrors
from friends_united_admin.domain.forms import validate_form
from friends_united_admin.services.session import ViewContext

logger = logging.getLogger(__name__)

FORM_ERROR_KEY = "__form__"


@dataclass
class AccountService:
    """Runs account flows for the current request.

    Each flow returns field errors; an empty mapping means the flow succeeded.
    Remote failures were already reported by the gateway and are returned
    under ``FORM_ERROR_KEY`` so the page can keep the submitted values.
    """

    auth_api: AuthApiClient
    context: ViewContext

    async def login(self, values: dict[str, Any]) -> FieldErrors:
        form, errors = validate_form(LoginForm, values)
        if form is None:
            return errors
        try:
            token = await self.auth_api.login(form.email, form.password)
        except ApiError as exc:
            return {FORM_ERROR_KEY: exc.message}
        self.context.token_store.set(token)
        logger.info("Admin signed in")
        return {}

    def logout(self) -> None:
        self.context.token_store.clear()
        self.context.current_user = None

    async def load_current_user(self) -> CurrentUser | None:
        """Load the signed-in user once per request."""
        if self.context.current_user is not None:
            return self.context.current_user
        payload = await self.auth_api.me()
        if payload is not None:
            self.context.current_user = CurrentUser.from_payload(payload)
        return self.context.current_user

    async def request_password_reset(self, values: dict[str, Any]) -> FieldErrors:
        form, errors = validate_form(ForgotPasswordForm, values)
        if form is None:
            return errors
        try:
            await self.auth_api.forgot_password(form.email)
        except ApiError as exc:
            return {FORM_ERROR_KEY: exc.message}
        self.context.notifier.success(
            f"A verification code has been sent to {form.email}",
            title="OTP Sent Successfully",
        )
        return {}

    async def resend_otp(self, email: str) -> bool:
        try:
            await self.auth_api.resend_reset_otp(email)
        except ApiError:
            return False
        self.context.notifier.success(
            f"A new verification code has been sent to {email}", title="OTP Resent"
        )
        return True

    async def verify_otp(self, values: dict[str, Any]) -> FieldErrors:
        form, errors = validate_form(VerifyOtpForm, values)
        if form is None:
            return errors
        try:
            await self.auth_api.verify_reset_otp(form.email, form.otp)
        except ApiError as exc:
            self.context.notifier.error(
                exc.message or "Invalid OTP. Please try again.",
                title="Verification Failed",
            )
            return {FORM_ERROR_KEY: exc.message}
        self.context.notifier.success(
            "You can now reset your password.", title="OTP Verified"
        )
        return {}

    async def reset_password(self, values: dict[str, Any]) -> FieldErrors:
        form, errors = validate_form(ResetPasswordForm, values)
        if form is None:
            return errors
        try:
            await self.auth_api.reset_password(form.email, form.otp, form.password)
        except ApiError as exc:
            return {FORM_ERROR_KEY: exc.message}
        self.context.notifier.success(
            "Your password has been updated. Please sign in.",
            title="Password Reset",
        )
        return {}

    async def create_user(self, values: dict[str, Any]) -> FieldErrors:
        form, errors = validate_form(NewUserForm, values)
        if form is None:
            return errors
        try:
            await self.auth_api.create_user(form.name, form.email, form.password)
        except ApiError as exc:
            return {FORM_ERROR_KEY: exc.message}
        self.context.notifier.success(f"Account created for {form.email}")
        return {}
