"""pytravelmarket package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .client import Client
from .exceptions import (
    ApiError,
    AuthError,
    ConfigError,
    NetworkError,
    NotFoundError,
    PyTravelMarketError,
    ValidationError,
)
from .models import (
    AvailabilityRequest,
    AvailabilityWindow,
    Booking,
    BookingRequest,
    BookingStatus,
    PricingUnit,
    Service,
    ServiceType,
    SlotRange,
)
from .pricing import PriceBreakdown, price_breakdown
from .reconciler import OverlayOrder, reconcile
from .selector import BookingWindowSelector
from .session import AuthSession
from .slots import BulkDays, SlotGrid

try:
    __version__ = version("pytravelmarket")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "ApiError",
    "AuthError",
    "AuthSession",
    "AvailabilityRequest",
    "AvailabilityWindow",
    "Booking",
    "BookingRequest",
    "BookingStatus",
    "BookingWindowSelector",
    "BulkDays",
    "Client",
    "ConfigError",
    "NetworkError",
    "NotFoundError",
    "OverlayOrder",
    "PriceBreakdown",
    "PricingUnit",
    "PyTravelMarketError",
    "Service",
    "ServiceType",
    "SlotGrid",
    "SlotRange",
    "ValidationError",
    "__version__",
    "price_breakdown",
    "reconcile",
]
