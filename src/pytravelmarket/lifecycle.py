"""Booking status transitions offered to customers and providers."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from .exceptions import ValidationError
from .models import Booking, BookingStatus


class BookingAction(StrEnum):
    CONFIRM = "confirm"
    COMPLETE = "complete"
    NO_SHOW = "no_show"
    CANCEL = "cancel"


STATUS_TABS: dict[str, tuple[BookingStatus, ...]] = {
    "all": (),
    "pending": (BookingStatus.PENDING,),
    "confirmed": (BookingStatus.CONFIRMED,),
    "completed": (BookingStatus.COMPLETED,),
    "cancelled": (BookingStatus.CANCELLED_BY_USER, BookingStatus.CANCELLED_BY_PROVIDER),
    "noshow": (BookingStatus.NO_SHOW,),
}

SUCCESS_MESSAGES = {
    BookingStatus.CONFIRMED: "Booking confirmed successfully",
    BookingStatus.COMPLETED: "Booking marked as completed successfully",
    BookingStatus.CANCELLED_BY_PROVIDER: "Booking cancelled successfully",
    BookingStatus.CANCELLED_BY_USER: "Your booking has been cancelled successfully.",
    BookingStatus.NO_SHOW: "Booking marked as no-show successfully",
}


def target_status(action: BookingAction, *, by_provider: bool = True) -> BookingStatus:
    match BookingAction(action):
        case BookingAction.CONFIRM:
            return BookingStatus.CONFIRMED
        case BookingAction.COMPLETE:
            return BookingStatus.COMPLETED
        case BookingAction.NO_SHOW:
            return BookingStatus.NO_SHOW
        case BookingAction.CANCEL:
            if by_provider:
                return BookingStatus.CANCELLED_BY_PROVIDER
            return BookingStatus.CANCELLED_BY_USER


def provider_actions(booking: Booking, now: datetime) -> list[BookingAction]:
    """Return the actions a provider may take on ``booking`` at ``now``."""
    match booking.status:
        case BookingStatus.PENDING:
            return [BookingAction.CONFIRM]
        case BookingStatus.CONFIRMED:
            actions: list[BookingAction] = []
            if booking.end < now:
                actions.append(BookingAction.COMPLETE)
            if booking.start < now:
                actions.append(BookingAction.NO_SHOW)
            actions.append(BookingAction.CANCEL)
            return actions
        case (
            BookingStatus.CANCELLED_BY_USER
            | BookingStatus.CANCELLED_BY_PROVIDER
            | BookingStatus.COMPLETED
            | BookingStatus.NO_SHOW
        ):
            return []


def customer_can_cancel(booking: Booking) -> bool:
    return booking.status in (BookingStatus.PENDING, BookingStatus.CONFIRMED)


def is_cancelled(status: BookingStatus) -> bool:
    return status in STATUS_TABS["cancelled"]


def tab_statuses(tab: str) -> tuple[BookingStatus, ...]:
    try:
        return STATUS_TABS[tab.lower()]
    except KeyError as exc:
        raise ValidationError(f"Unknown booking tab {tab!r}.") from exc
