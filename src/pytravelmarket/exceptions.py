"""Library exceptions."""

from __future__ import annotations


class PyTravelMarketError(Exception):
    """Base exception for the library."""

    error_type = "unknown"
    default_code: str | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: str | None = None,
        detail: str | None = None,
        user_message: str | None = None,
    ) -> None:
        text = message if message is not None else detail
        super().__init__(text or "")
        self.error_code = error_code if error_code is not None else self.default_code
        self.detail = detail if detail is not None else message
        self.user_message = user_message


class AuthError(PyTravelMarketError):
    """Raised when authentication fails or the session is missing."""

    error_type = "auth"
    default_code = "auth_error"


class NetworkError(PyTravelMarketError):
    """Raised when network communication fails."""

    error_type = "network"
    default_code = "network_error"


class ValidationError(PyTravelMarketError):
    """Raised when inputs fail client-side validation."""

    error_type = "validation"
    default_code = "validation_error"


class ApiError(PyTravelMarketError):
    """Raised when the API answers with an error status or bad payload."""

    error_type = "api"
    default_code = "api_error"

    def __init__(
        self,
        message: str | None = None,
        *,
        status: int | None = None,
        error_code: str | None = None,
        detail: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(
            message,
            error_code=error_code,
            detail=detail,
            user_message=user_message,
        )
        self.status = status


class NotFoundError(ApiError):
    """Raised when the requested resource does not exist."""

    default_code = "not_found"


class ConfigError(PyTravelMarketError):
    """Raised when configuration values are missing or invalid."""

    error_type = "config"
    default_code = "config_error"
