"""Environment-driven client configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import ConfigError

ENV_API_URL = "API_URL"
ENV_API_TIMEOUT = "API_TIMEOUT"
ENV_API_RETRY_COUNT = "API_RETRY_COUNT"
ENV_API_TIMEZONE = "API_TIMEZONE"

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ClientConfig:
    base_url: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    retry_count: int = 0
    tz: tzinfo = UTC


def _parse_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number.") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive.")
    return value


def _parse_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer.") from exc
    if value < 0:
        raise ConfigError(f"{name} must not be negative.")
    return value


def _parse_timezone(raw: str) -> tzinfo:
    if raw.upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Timezone {raw!r} is not available.") from exc


def load_config(environ: Mapping[str, str] | None = None) -> ClientConfig:
    env = os.environ if environ is None else environ
    base_url = (env.get(ENV_API_URL) or "").strip()
    if not base_url:
        raise ConfigError(f"{ENV_API_URL} is required.")
    timeout = env.get(ENV_API_TIMEOUT)
    retry_count = env.get(ENV_API_RETRY_COUNT)
    tz_name = env.get(ENV_API_TIMEZONE)
    return ClientConfig(
        base_url=base_url,
        timeout_seconds=(
            _parse_float(ENV_API_TIMEOUT, timeout) if timeout else DEFAULT_TIMEOUT_SECONDS
        ),
        retry_count=_parse_int(ENV_API_RETRY_COUNT, retry_count) if retry_count else 0,
        tz=_parse_timezone(tz_name) if tz_name else UTC,
    )
