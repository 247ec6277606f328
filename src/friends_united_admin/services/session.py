"""Per-request session state: token storage, navigation and notifications."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from friends_united_admin.domain.accounts import CurrentUser
from friends_united_admin.services.notifications import Notifier

AUTH_TOKEN_KEY = "authToken"
LOGIN_PATH = "/auth"

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    """Persistent storage for the session token."""

    def get(self) -> str | None:
        """Return the stored token, or None when logged out."""

    def set(self, token: str) -> None:
        """Store a freshly issued token."""

    def clear(self) -> None:
        """Forget the stored token."""


class _Unchanged:
    pass


_UNCHANGED = _Unchanged()


@dataclass
class CookieTokenStore(TokenStore):
    """Token store backed by the request cookies.

    Writes are recorded and applied to the outgoing response by the session
    middleware.
    """

    cookies: Mapping[str, str]
    _pending: str | None | _Unchanged = field(default=_UNCHANGED, init=False)

    def get(self) -> str | None:
        if not isinstance(self._pending, _Unchanged):
            return self._pending
        try:
            token = self.cookies.get(AUTH_TOKEN_KEY)
        except Exception:
            logger.exception("Failed to read the session token")
            return None
        if not isinstance(token, str) or not token.strip():
            return None
        return token

    def set(self, token: str) -> None:
        self._pending = token

    def clear(self) -> None:
        self._pending = None

    @property
    def changed(self) -> bool:
        return not isinstance(self._pending, _Unchanged)


@dataclass
class Navigator:
    """Records a navigation requested while a view was being handled."""

    redirect_to: str | None = None

    def go(self, path: str) -> None:
        self.redirect_to = path


@dataclass
class ViewContext:
    """Everything a view and its outbound calls share for one request."""

    token_store: TokenStore
    notifier: Notifier = field(default_factory=Notifier)
    navigator: Navigator = field(default_factory=Navigator)
    current_user: CurrentUser | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token_store.get() is not None

    def force_logout(self) -> None:
        """Drop the session token and send the viewer to the login page."""
        self.token_store.clear()
        self.current_user = None
        self.navigator.go(LOGIN_PATH)
