"""Client facade owning the HTTP session and the shared auth session."""

from __future__ import annotations

from datetime import UTC, tzinfo
from typing import TypeVar

import aiohttp

from .api.auth import AuthApi
from .api.availability import AvailabilityApi
from .api.base import BaseApi
from .api.bookings import BookingApi
from .api.catalog import CatalogApi
from .config import ClientConfig, load_config
from .session import AuthSession

_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=30)

_ApiT = TypeVar("_ApiT", bound=BaseApi)


class Client:
    """Facade for the marketplace API endpoint groups."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        base_url: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
        tz: tzinfo = UTC,
        auth: AuthSession | None = None,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._base_url = base_url
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)
        self._tz = tz
        self._auth_session = auth or AuthSession()
        self._groups: dict[type[BaseApi], BaseApi] = {}

    @classmethod
    def from_config(
        cls,
        config: ClientConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> Client:
        config = config or load_config()
        return cls(
            session,
            base_url=config.base_url,
            timeout=aiohttp.ClientTimeout(total=config.timeout_seconds),
            retry_count=config.retry_count,
            tz=config.tz,
        )

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._groups.clear()

    @property
    def session(self) -> AuthSession:
        return self._auth_session

    @property
    def auth(self) -> AuthApi:
        return self._group(AuthApi)

    @property
    def availability(self) -> AvailabilityApi:
        return self._group(AvailabilityApi)

    @property
    def bookings(self) -> BookingApi:
        return self._group(BookingApi)

    @property
    def catalog(self) -> CatalogApi:
        return self._group(CatalogApi)

    def _group(self, api_cls: type[_ApiT]) -> _ApiT:
        cached = self._groups.get(api_cls)
        if isinstance(cached, api_cls):
            return cached
        group = api_cls(
            self._ensure_session(),
            self._auth_session,
            base_url=self._base_url,
            timeout=self._timeout,
            retry_count=self._retry_count,
            tz=self._tz,
        )
        self._groups[api_cls] = group
        return group

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session
