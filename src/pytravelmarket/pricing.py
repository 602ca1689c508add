"""Booking price estimate shown before a booking is submitted."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .exceptions import ValidationError
from .models import PricingUnit, Service

SERVICE_FEE_RATE = 0.1
DEFAULT_CLEANING_FEE = 75.0
HOURS_PER_DAY = 24


@dataclass(frozen=True, slots=True)
class PriceBreakdown:
    quantity_label: str
    subtotal: float
    cleaning_fee: float
    service_fee: float
    total: float


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def price_breakdown(
    service: Service,
    start: datetime,
    end: datetime,
    guest_count: int = 1,
    *,
    cleaning_fee: float = DEFAULT_CLEANING_FEE,
) -> PriceBreakdown:
    """Estimate the cost of booking ``service`` from ``start`` to ``end``.

    Nights are whole 24-hour periods between the two instants. The subtotal
    depends on the pricing unit; a service fee of 10% of the subtotal and a
    flat cleaning fee are added on top.
    """
    nights = (end - start).days
    if nights <= 0:
        raise ValidationError(
            "end must be at least one day after start.",
            user_message="Check-out date must be after check-in date",
        )
    if guest_count < 1:
        raise ValidationError("guest_count must be at least 1.")

    price = service.price
    match service.pricing_unit:
        case PricingUnit.PER_NIGHT:
            subtotal = price * nights
            label = _plural(nights, "night", "nights")
        case PricingUnit.PER_DAY:
            subtotal = price * nights
            label = _plural(nights, "day", "days")
        case PricingUnit.PER_PERSON:
            subtotal = price * guest_count
            label = _plural(guest_count, "person", "people")
        case PricingUnit.PER_HOUR:
            # Hourly services are billed for every hour of the booked days.
            subtotal = price * HOURS_PER_DAY * nights
            label = f"{nights * HOURS_PER_DAY} hours"
        case PricingUnit.FIXED_PRICE:
            subtotal = price
            label = "fixed price"

    service_fee = subtotal * SERVICE_FEE_RATE
    return PriceBreakdown(
        quantity_label=label,
        subtotal=subtotal,
        cleaning_fee=cleaning_fee,
        service_fee=service_fee,
        total=subtotal + cleaning_fee + service_fee,
    )
