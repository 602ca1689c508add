"""Endpoint groups of the marketplace API."""

from .auth import AuthApi
from .availability import AvailabilityApi
from .base import BaseApi
from .bookings import BookingApi
from .catalog import CatalogApi, ServiceFilter

__all__ = [
    "AuthApi",
    "AvailabilityApi",
    "BaseApi",
    "BookingApi",
    "CatalogApi",
    "ServiceFilter",
]
