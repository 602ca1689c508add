from pytravelmarket.exceptions import (
    ApiError,
    AuthError,
    ConfigError,
    NetworkError,
    NotFoundError,
    PyTravelMarketError,
    ValidationError,
)


def test_error_defaults() -> None:
    exc = PyTravelMarketError("base error")
    assert exc.error_type == "unknown"
    assert exc.error_code is None
    assert exc.detail == "base error"
    assert exc.user_message is None


def test_error_detail_fallback() -> None:
    exc = ApiError(detail="short detail")
    assert str(exc) == "short detail"
    assert exc.detail == "short detail"
    assert exc.error_code == "api_error"
    assert exc.status is None


def test_error_overrides() -> None:
    exc = NetworkError(
        "network down",
        error_code="network_timeout",
        detail="timeout talking to the API",
        user_message="Failed to load availabilities",
    )
    assert exc.error_type == "network"
    assert exc.error_code == "network_timeout"
    assert exc.detail == "timeout talking to the API"
    assert exc.user_message == "Failed to load availabilities"


def test_error_types_have_codes() -> None:
    assert AuthError("nope").error_code == "auth_error"
    assert NetworkError("nope").error_code == "network_error"
    assert ValidationError("nope").error_code == "validation_error"
    assert ApiError("nope").error_code == "api_error"
    assert NotFoundError("nope", status=404).error_code == "not_found"
    assert ConfigError("nope").error_code == "config_error"


def test_not_found_is_api_error() -> None:
    exc = NotFoundError("missing", status=404, user_message="Booking not found")
    assert isinstance(exc, ApiError)
    assert exc.status == 404
    assert exc.user_message == "Booking not found"
