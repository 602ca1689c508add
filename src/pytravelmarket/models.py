"""Public data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class ServiceType(StrEnum):
    ACCOMMODATION = "ACCOMMODATION"
    TOUR_GUIDE = "TOUR_GUIDE"
    LOCAL_EVENT = "LOCAL_EVENT"
    FOOD_EXPERIENCE = "FOOD_EXPERIENCE"
    TRANSPORTATION = "TRANSPORTATION"
    CAR_RENTAL = "CAR_RENTAL"
    ACTIVITY = "ACTIVITY"


class PricingUnit(StrEnum):
    PER_NIGHT = "PER_NIGHT"
    PER_DAY = "PER_DAY"
    PER_HOUR = "PER_HOUR"
    PER_PERSON = "PER_PERSON"
    FIXED_PRICE = "FIXED_PRICE"


class BookingStatus(StrEnum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED_BY_USER = "CANCELLED_BY_USER"
    CANCELLED_BY_PROVIDER = "CANCELLED_BY_PROVIDER"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"


@dataclass(frozen=True, slots=True)
class AvailabilityWindow:
    """Provider-declared interval, half-open ``[start, end)``."""

    id: int
    start: datetime
    end: datetime
    is_available: bool
    notes: str = ""


@dataclass(frozen=True, slots=True)
class AvailabilityRequest:
    service_id: int
    start: datetime
    end: datetime
    is_available: bool
    notes: str = ""


@dataclass(frozen=True, slots=True)
class SlotRange:
    """Run of equal slots; ``end == "00:00"`` is the following midnight."""

    start: str
    end: str
    is_available: bool


@dataclass(frozen=True, slots=True)
class Service:
    id: int
    title: str
    type: ServiceType
    price: float
    pricing_unit: PricingUnit
    capacity: int | None = None
    address: str = ""
    avg_rating: float | None = None
    review_count: int = 0
    is_verified: bool = False
    thumbnail_url: str | None = None


@dataclass(frozen=True, slots=True)
class Location:
    id: int
    city: str
    region: str
    country: str
    is_popular: bool = False


@dataclass(frozen=True, slots=True)
class Category:
    id: int
    name: str
    description: str = ""
    is_active: bool = True


@dataclass(frozen=True, slots=True)
class Review:
    id: int
    service_id: int
    rating: int
    comment: str = ""


@dataclass(frozen=True, slots=True)
class Booking:
    id: int
    start: datetime
    end: datetime
    status: BookingStatus
    total_price: float = 0.0
    guest_count: int | None = None
    special_requests: str = ""
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None
    service_id: int | None = None
    service_title: str = ""


@dataclass(frozen=True, slots=True)
class BookingRequest:
    service_id: int
    start: datetime
    end: datetime
    guest_count: int = 1
    special_requests: str = ""


@dataclass(frozen=True, slots=True)
class UserProfile:
    id: int
    username: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    is_provider: bool = False
    roles: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class AuthTokens:
    access_token: str
    refresh_token: str | None = None
    token_type: str = "Bearer"
    expires_in: int | None = None


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    items: list[T]
    total_pages: int = 0
    total_elements: int = 0
    size: int = 0
    number: int = 0
