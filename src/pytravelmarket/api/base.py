"""Shared request handling for the API endpoint groups."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime, tzinfo
from typing import Any

import aiohttp

from ..exceptions import ApiError, AuthError, NetworkError, NotFoundError, ValidationError
from ..models import AuthTokens
from ..session import AuthSession
from ..util import parse_timestamp
from .const import (
    AUTH_HEADER,
    DEFAULT_HEADERS,
    FORBIDDEN_CODE,
    GENERIC_ERROR_MESSAGE,
    REFRESH_ENDPOINT,
    UNAUTHORIZED_CODE,
)

_LOGGER = logging.getLogger(__name__)
_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=30)


class BaseApi:
    """Base class for endpoint groups sharing one HTTP session and auth state."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        auth: AuthSession,
        *,
        base_url: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
        tz: tzinfo = UTC,
    ) -> None:
        if session is None:
            raise ValidationError("Session is required.")
        self._session = session
        self._auth = auth
        self._base_url = self._normalize_base_url(base_url)
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)
        self._tz = tz

    @property
    def auth(self) -> AuthSession:
        return self._auth

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def _build_url(self, path: str) -> str:
        if not isinstance(path, str) or not path:
            raise ValidationError("Path must be a non-empty string.")
        if path.startswith("http://") or path.startswith("https://"):
            raise ValidationError("Use relative paths when building API requests.")
        if self._base_url is None:
            raise ValidationError("base_url is required to build API requests.")
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{normalized_path}"

    def _normalize_base_url(self, base_url: str | None) -> str | None:
        if base_url is None:
            return None
        if not isinstance(base_url, str) or not base_url.strip():
            raise ValidationError("base_url must be a non-empty string.")
        return base_url.strip().rstrip("/")

    def _headers(self, *, authenticated: bool) -> dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        if authenticated:
            value = self._auth.authorization_header()
            if value:
                headers[AUTH_HEADER] = value
        return headers

    async def refresh_session(self) -> AuthTokens:
        """Exchange the stored refresh token for a new access token."""
        refresh_token = self._auth.refresh_token
        if not refresh_token:
            raise AuthError("No refresh token available.")
        data = await self._request_json(
            "POST",
            REFRESH_ENDPOINT,
            json={"refreshToken": refresh_token},
            fallback_message="Your session has expired. Please log in again.",
            authenticated=False,
        )
        tokens = self._map_tokens(data)
        self._auth.update_access_token(tokens)
        return tokens

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any | None = None,
        fallback_message: str = GENERIC_ERROR_MESSAGE,
        authenticated: bool = True,
    ) -> Any:
        url = self._build_url(path)
        query = self._clean_params(params)
        try:
            return await self._request_with_retry(
                method,
                url,
                params=query,
                json=json,
                fallback_message=fallback_message,
                authenticated=authenticated,
            )
        except AuthError as exc:
            if not authenticated or exc.error_code != UNAUTHORIZED_CODE:
                raise
            if not self._auth.refresh_token:
                self._auth.clear()
                raise
        _LOGGER.debug("Request %s %s unauthorized, refreshing session", method, path)
        try:
            await self.refresh_session()
        except (AuthError, ApiError, NetworkError) as exc:
            self._auth.clear()
            raise AuthError(
                "Session refresh failed.",
                error_code=UNAUTHORIZED_CODE,
                user_message="Your session has expired. Please log in again.",
            ) from exc
        try:
            return await self._request_with_retry(
                method,
                url,
                params=query,
                json=json,
                fallback_message=fallback_message,
                authenticated=True,
            )
        except AuthError as exc:
            if exc.error_code == UNAUTHORIZED_CODE:
                self._auth.clear()
            raise

    async def _request_with_retry(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, str] | None,
        json: Any | None,
        fallback_message: str,
        authenticated: bool,
    ) -> Any:
        retries = self._retry_count if method.upper() == "GET" else 0
        attempts = retries + 1
        for attempt in range(attempts):
            try:
                async with self._session.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=self._headers(authenticated=authenticated),
                    timeout=self._timeout,
                ) as response:
                    await self._raise_for_status(response, fallback_message)
                    if response.status == 204 or response.content_length == 0:
                        return None
                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as exc:
                        raise ApiError(
                            "Response did not contain valid JSON.",
                            status=response.status,
                            user_message=fallback_message,
                        ) from exc
            except (aiohttp.ClientError, TimeoutError) as exc:
                if attempt >= attempts - 1:
                    raise NetworkError(
                        "Network request failed.",
                        user_message=fallback_message,
                    ) from exc
                _LOGGER.debug("Retrying %s %s after network error", method, url)
        raise NetworkError("Network request failed.", user_message=fallback_message)

    async def _raise_for_status(
        self,
        response: aiohttp.ClientResponse,
        fallback_message: str,
    ) -> None:
        if 200 <= response.status < 300:
            return
        message = await self._error_message(response) or fallback_message
        if response.status == 401:
            raise AuthError(
                "Authentication failed.",
                error_code=UNAUTHORIZED_CODE,
                user_message=message,
            )
        if response.status == 403:
            raise AuthError("Access denied.", error_code=FORBIDDEN_CODE, user_message=message)
        if response.status == 404:
            raise NotFoundError(
                "Resource not found.",
                status=response.status,
                user_message=message,
            )
        raise ApiError(
            f"API request failed with status {response.status}.",
            status=response.status,
            user_message=message,
        )

    async def _error_message(self, response: aiohttp.ClientResponse) -> str | None:
        try:
            body = await response.json()
        except (aiohttp.ContentTypeError, ValueError):
            return None
        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message.strip():
                return message.strip()
        return None

    def _clean_params(self, params: Mapping[str, Any] | None) -> dict[str, str] | None:
        if not params:
            return None
        cleaned: dict[str, str] = {}
        for key, value in params.items():
            if value is None or value == "":
                continue
            if isinstance(value, bool):
                cleaned[key] = "true" if value else "false"
            else:
                cleaned[key] = str(value)
        return cleaned or None

    def _map_tokens(self, data: Any) -> AuthTokens:
        if not isinstance(data, dict):
            raise ApiError("Authentication response must be a JSON object.")
        token = data.get("token") or data.get("accessToken")
        if not isinstance(token, str) or not token:
            raise AuthError("Authentication response did not include a token.")
        refresh_token = data.get("refreshToken")
        return AuthTokens(
            access_token=token,
            refresh_token=refresh_token if isinstance(refresh_token, str) else None,
            token_type=str(data.get("tokenType") or "Bearer"),
            expires_in=self._coerce_optional_int(data.get("expiresIn")),
        )

    def _expect_list(self, data: Any, label: str) -> list[Any]:
        if data is None:
            return []
        if isinstance(data, dict) and isinstance(data.get("content"), list):
            return data["content"]
        if not isinstance(data, list):
            raise ApiError(f"API response included invalid {label}.")
        return data

    def _expect_dict(self, data: Any, label: str) -> dict[str, Any]:
        if not isinstance(data, dict):
            raise ApiError(f"API response included invalid {label}.")
        return data

    def _parse_api_timestamp(self, value: Any, label: str) -> datetime:
        try:
            return parse_timestamp(value)
        except ValidationError as exc:
            raise ApiError(f"API returned an invalid {label} timestamp.") from exc

    def _coerce_id(self, value: Any, label: str) -> int:
        if isinstance(value, bool) or value is None:
            raise ApiError(f"API returned an invalid {label} id.")
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ApiError(f"API returned an invalid {label} id.") from exc

    def _coerce_optional_int(self, value: Any) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    def _coerce_float(self, value: Any) -> float:
        if value is None or isinstance(value, bool):
            return 0.0
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0
