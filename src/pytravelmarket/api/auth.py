"""Authentication and profile endpoints."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..exceptions import ApiError, ValidationError
from ..models import AuthTokens, UserProfile
from .base import BaseApi
from .const import CURRENT_USER_ENDPOINT, LOGIN_ENDPOINT, REGISTER_ENDPOINT

_LOGGER = logging.getLogger(__name__)

_REGISTER_FIELDS = ("username", "firstName", "lastName", "email", "password")


class AuthApi(BaseApi):
    """Login, registration and the signed-in user's profile."""

    async def login(self, username: str, password: str) -> AuthTokens:
        """Authenticate and start the shared session."""
        if not username:
            raise ValidationError("username is required.")
        if not password:
            raise ValidationError("password is required.")
        _LOGGER.debug("Auth login started")
        data = await self._request_json(
            "POST",
            LOGIN_ENDPOINT,
            json={"username": username, "password": password},
            fallback_message="Login failed. Please check your credentials.",
            authenticated=False,
        )
        body = self._expect_dict(data, "login response")
        tokens = self._map_tokens(body)
        user = self._map_login_user(body)
        self._auth.start(tokens, user)
        _LOGGER.debug("Auth login completed")
        return tokens

    async def register(self, data: Mapping[str, Any]) -> None:
        missing = [key for key in _REGISTER_FIELDS if not data.get(key)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}.")
        confirm = data.get("confirmPassword")
        if confirm is not None and confirm != data.get("password"):
            raise ValidationError(
                "Passwords do not match.",
                user_message="Passwords do not match",
            )
        await self._request_json(
            "POST",
            REGISTER_ENDPOINT,
            json=dict(data),
            fallback_message="Registration failed. Please try again.",
            authenticated=False,
        )

    async def refresh(self) -> AuthTokens:
        return await self.refresh_session()

    def logout(self) -> None:
        self._auth.clear()

    async def me(self) -> UserProfile:
        data = await self._request_json(
            "GET",
            CURRENT_USER_ENDPOINT,
            fallback_message="Failed to load profile",
        )
        user = self._map_user(self._expect_dict(data, "user"))
        self._auth.set_user(user)
        return user

    async def update_profile(self, data: Mapping[str, Any]) -> UserProfile:
        result = await self._request_json(
            "PUT",
            CURRENT_USER_ENDPOINT,
            json=dict(data),
            fallback_message="Failed to update profile",
        )
        user = self._map_user(self._expect_dict(result, "user"))
        self._auth.set_user(user)
        return user

    def _map_login_user(self, body: dict[str, Any]) -> UserProfile | None:
        if body.get("userId") is None or not body.get("username"):
            return None
        return UserProfile(
            id=self._coerce_id(body.get("userId"), "user"),
            username=str(body["username"]),
            email=body.get("email") or "",
            first_name=body.get("firstName") or "",
            last_name=body.get("lastName") or "",
            is_provider=body.get("provider") is True,
            roles=self._map_roles(body.get("roles")),
        )

    def _map_user(self, item: dict[str, Any]) -> UserProfile:
        username = item.get("username")
        if not isinstance(username, str) or not username:
            raise ApiError("API returned a user without a username.")
        return UserProfile(
            id=self._coerce_id(item.get("id"), "user"),
            username=username,
            email=item.get("email") or "",
            first_name=item.get("firstName") or "",
            last_name=item.get("lastName") or "",
            is_provider=item.get("isProvider") is True or item.get("provider") is True,
            roles=self._map_roles(item.get("roles")),
        )

    def _map_roles(self, value: Any) -> tuple[str, ...]:
        if not isinstance(value, list):
            return ()
        return tuple(str(role) for role in value if role)
