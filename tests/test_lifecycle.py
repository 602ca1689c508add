from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pytravelmarket.exceptions import ValidationError
from pytravelmarket.lifecycle import (
    BookingAction,
    customer_can_cancel,
    is_cancelled,
    provider_actions,
    tab_statuses,
    target_status,
)
from pytravelmarket.models import Booking, BookingStatus

NOW = datetime(2024, 6, 10, 12, tzinfo=UTC)


def _booking(status: BookingStatus, start_day: int = 12, end_day: int = 14) -> Booking:
    return Booking(
        id=1,
        start=datetime(2024, 6, start_day, 15, tzinfo=UTC),
        end=datetime(2024, 6, end_day, 11, tzinfo=UTC),
        status=status,
    )


def test_pending_booking_can_be_confirmed() -> None:
    assert provider_actions(_booking(BookingStatus.PENDING), NOW) == [BookingAction.CONFIRM]


def test_upcoming_confirmed_booking_can_only_be_cancelled() -> None:
    assert provider_actions(_booking(BookingStatus.CONFIRMED), NOW) == [BookingAction.CANCEL]


def test_started_confirmed_booking_allows_no_show() -> None:
    booking = _booking(BookingStatus.CONFIRMED, start_day=9, end_day=11)
    assert provider_actions(booking, NOW) == [BookingAction.NO_SHOW, BookingAction.CANCEL]


def test_finished_confirmed_booking_allows_completion() -> None:
    booking = _booking(BookingStatus.CONFIRMED, start_day=5, end_day=7)
    assert provider_actions(booking, NOW) == [
        BookingAction.COMPLETE,
        BookingAction.NO_SHOW,
        BookingAction.CANCEL,
    ]


@pytest.mark.parametrize(
    "status",
    [
        BookingStatus.COMPLETED,
        BookingStatus.NO_SHOW,
        BookingStatus.CANCELLED_BY_USER,
        BookingStatus.CANCELLED_BY_PROVIDER,
    ],
)
def test_terminal_bookings_have_no_actions(status: BookingStatus) -> None:
    assert provider_actions(_booking(status), NOW) == []
    assert customer_can_cancel(_booking(status)) is False


def test_customer_can_cancel_open_bookings() -> None:
    assert customer_can_cancel(_booking(BookingStatus.PENDING))
    assert customer_can_cancel(_booking(BookingStatus.CONFIRMED))


def test_target_status() -> None:
    assert target_status(BookingAction.CONFIRM) is BookingStatus.CONFIRMED
    assert target_status(BookingAction.COMPLETE) is BookingStatus.COMPLETED
    assert target_status(BookingAction.NO_SHOW) is BookingStatus.NO_SHOW
    assert target_status(BookingAction.CANCEL) is BookingStatus.CANCELLED_BY_PROVIDER
    assert (
        target_status(BookingAction.CANCEL, by_provider=False) is BookingStatus.CANCELLED_BY_USER
    )


def test_tab_statuses() -> None:
    assert tab_statuses("all") == ()
    assert tab_statuses("Cancelled") == (
        BookingStatus.CANCELLED_BY_USER,
        BookingStatus.CANCELLED_BY_PROVIDER,
    )
    assert is_cancelled(BookingStatus.CANCELLED_BY_USER)
    assert not is_cancelled(BookingStatus.NO_SHOW)
    with pytest.raises(ValidationError):
        tab_statuses("archived")
