"""Session middleware and the guard dependency for protected pages."""

import base64
import json
import logging
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from fastapi import Depends, Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from friends_united_admin.domain.notifications import Notification
from friends_united_admin.services.session import (
    AUTH_TOKEN_KEY,
    LOGIN_PATH,
    CookieTokenStore,
    ViewContext,
)

if TYPE_CHECKING:
    from friends_united_admin.containers import AppContainer

logger = logging.getLogger(__name__)

FLASH_COOKIE = "flash"
FLASH_MAX_AGE = 60


class LoginRequired(Exception):
    """Raised by the guard when a protected page is requested without a token."""

    def __init__(self, next_path: str) -> None:
        super().__init__(next_path)
        self.next_path = next_path


def encode_flash(notifications: list[Notification]) -> str:
    payload = json.dumps([item.to_dict() for item in notifications])
    return base64.urlsafe_b64encode(payload.encode()).decode()


def decode_flash(raw: str | None) -> list[Notification]:
    """Read notifications carried over a redirect; a bad cookie reads as empty."""
    if not raw:
        return []
    try:
        payload = json.loads(base64.urlsafe_b64decode(raw.encode()))
        return [Notification.from_dict(item) for item in payload]
    except (ValueError, TypeError, AttributeError):
        logger.warning("Discarding unreadable flash cookie")
        return []


class SessionMiddleware(BaseHTTPMiddleware):
    """Builds the per-request ``ViewContext`` and applies its outcome.

    After the view ran: a pending forced navigation replaces the response with
    a redirect, token changes are written to the cookie and notifications
    that were not rendered travel to the next page in the flash cookie.
    """

    def __init__(self, app: ASGIApp, secure_cookies: bool = False) -> None:
        super().__init__(app)
        self.secure_cookies = secure_cookies

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        token_store = CookieTokenStore(request.cookies)
        context = ViewContext(token_store=token_store)
        context.notifier.items.extend(decode_flash(request.cookies.get(FLASH_COOKIE)))
        request.state.view_context = context

        response = await call_next(request)

        target = context.navigator.redirect_to
        if (
            target
            and target != request.url.path
            and not _redirects_to(response, target)
        ):
            response = RedirectResponse(target, status_code=303)

        if token_store.changed:
            token = token_store.get()
            if token:
                response.set_cookie(
                    AUTH_TOKEN_KEY,
                    token,
                    httponly=True,
                    secure=self.secure_cookies,
                    samesite="lax",
                )
            else:
                response.delete_cookie(AUTH_TOKEN_KEY)

        pending = context.notifier.drain()
        if pending and response.status_code in {301, 302, 303, 307, 308}:
            response.set_cookie(
                FLASH_COOKIE,
                encode_flash(pending),
                max_age=FLASH_MAX_AGE,
                httponly=True,
                secure=self.secure_cookies,
                samesite="lax",
            )
        elif FLASH_COOKIE in request.cookies:
            response.delete_cookie(FLASH_COOKIE)
        return response


def get_container(request: Request) -> "AppContainer":
    return request.app.state.container


def get_view_context(request: Request) -> ViewContext:
    return request.state.view_context


def requested_path(request: Request) -> str:
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


async def require_session(
    request: Request, context: ViewContext = Depends(get_view_context)
) -> ViewContext:
    """Gate a page on the stored token and load the current user once.

    The token is not checked locally; a rejected token surfaces as a 401 on
    the first outbound call, which forces a logout.
    """
    if not context.is_authenticated:
        raise LoginRequired(requested_path(request))
    container = get_container(request)
    await container.account_service(context).load_current_user()
    if not context.is_authenticated:
        raise LoginRequired(requested_path(request))
    return context


def login_redirect(next_path: str) -> RedirectResponse:
    return RedirectResponse(
        f"{LOGIN_PATH}?{urlencode({'next': next_path})}", status_code=303
    )


def _redirects_to(response: Response, path: str) -> bool:
    location = response.headers.get("location", "")
    return location == path or location.startswith(f"{path}?")
