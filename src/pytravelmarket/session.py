"""Authenticated session state shared by all API groups of a client."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .exceptions import AuthError
from .models import AuthTokens, UserProfile

_LOGGER = logging.getLogger(__name__)

LogoutCallback = Callable[[], None]


class AuthSession:
    """Holds the tokens and profile of the signed-in user.

    A session is started by a successful login, has its access token replaced
    by a refresh, and is cleared on logout or when a refresh fails.
    """

    def __init__(self) -> None:
        self._tokens: AuthTokens | None = None
        self._user: UserProfile | None = None
        self._logout_callbacks: list[LogoutCallback] = []

    @property
    def is_authenticated(self) -> bool:
        return self._tokens is not None

    @property
    def tokens(self) -> AuthTokens | None:
        return self._tokens

    @property
    def user(self) -> UserProfile | None:
        return self._user

    @property
    def refresh_token(self) -> str | None:
        return self._tokens.refresh_token if self._tokens else None

    def start(self, tokens: AuthTokens, user: UserProfile | None = None) -> None:
        if not tokens.access_token:
            raise AuthError("Authentication response did not include a token.")
        self._tokens = tokens
        self._user = user
        _LOGGER.debug("Session started for %s", user.username if user else "unknown user")

    def update_access_token(self, tokens: AuthTokens) -> None:
        if self._tokens is None:
            raise AuthError("Authentication required.")
        if not tokens.access_token:
            raise AuthError("Refresh response did not include a token.")
        self._tokens = AuthTokens(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token or self._tokens.refresh_token,
            token_type=tokens.token_type,
            expires_in=tokens.expires_in,
        )
        _LOGGER.debug("Session access token refreshed")

    def set_user(self, user: UserProfile) -> None:
        self._user = user

    def authorization_header(self) -> str | None:
        if self._tokens is None:
            return None
        return f"Bearer {self._tokens.access_token}"

    def on_logout(self, callback: LogoutCallback) -> None:
        self._logout_callbacks.append(callback)

    def clear(self) -> None:
        was_active = self._tokens is not None
        self._tokens = None
        self._user = None
        if not was_active:
            return
        _LOGGER.debug("Session cleared")
        for callback in list(self._logout_callbacks):
            callback()
