from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pytravelmarket.api.bookings import BookingApi
from pytravelmarket.exceptions import ApiError, ValidationError
from pytravelmarket.models import BookingRequest, BookingStatus

from fakes import FakeResponse, SequenceSession, logged_in_session

BASE_URL = "https://api.example.com/api"


def _api(session: SequenceSession) -> BookingApi:
    return BookingApi(session, logged_in_session(), base_url=BASE_URL)


def _booking_json(booking_id: int = 1, status: str = "PENDING", **extra) -> dict:
    data = {
        "id": booking_id,
        "startDateTime": "2024-06-01T15:00:00",
        "endDateTime": "2024-06-03T11:00:00",
        "status": status,
        "totalPrice": "240.50",
        "guestCount": 2,
        "service": {"id": 5, "title": "Sea view room"},
    }
    data.update(extra)
    return data


@pytest.mark.asyncio
async def test_create_booking_payload() -> None:
    session = SequenceSession([FakeResponse(json_data=_booking_json())])
    booking = await _api(session).create_booking(
        BookingRequest(
            5,
            datetime(2024, 6, 1, 15, tzinfo=UTC),
            datetime(2024, 6, 3, 11, tzinfo=UTC),
            guest_count=2,
            special_requests="Late arrival",
        )
    )
    assert session.requests[0]["json"] == {
        "serviceId": 5,
        "startDateTime": "2024-06-01T15:00:00Z",
        "endDateTime": "2024-06-03T11:00:00Z",
        "guestCount": 2,
        "specialRequests": "Late arrival",
    }
    assert booking.status is BookingStatus.PENDING
    assert booking.total_price == 240.5
    assert booking.service_id == 5
    assert booking.service_title == "Sea view room"


@pytest.mark.asyncio
async def test_create_booking_validation() -> None:
    session = SequenceSession([])
    api = _api(session)
    start = datetime(2024, 6, 1, 15, tzinfo=UTC)
    with pytest.raises(ValidationError):
        await api.create_booking(BookingRequest(5, start, start))
    with pytest.raises(ValidationError):
        await api.create_booking(
            BookingRequest(5, start, datetime(2024, 6, 2, tzinfo=UTC), guest_count=0)
        )
    assert session.calls == 0


@pytest.mark.asyncio
async def test_cancel_requires_reason() -> None:
    session = SequenceSession([])
    api = _api(session)
    with pytest.raises(ValidationError) as excinfo:
        await api.cancel(3, "   ")
    assert excinfo.value.user_message == "Please provide a reason for cancellation"
    with pytest.raises(ValidationError):
        await api.update_status(3, BookingStatus.CANCELLED_BY_PROVIDER)
    assert session.calls == 0


@pytest.mark.asyncio
async def test_cancel_sends_status_and_reason() -> None:
    session = SequenceSession(
        [
            FakeResponse(
                json_data=_booking_json(
                    3,
                    "CANCELLED_BY_PROVIDER",
                    cancellationReason="Maintenance",
                    cancelledAt="2024-05-30T10:00:00Z",
                )
            )
        ]
    )
    booking = await _api(session).cancel(3, " Maintenance ", by_provider=True)
    request = session.requests[0]
    assert request["method"] == "PATCH"
    assert request["url"] == f"{BASE_URL}/bookings/3/status"
    assert request["params"] == {
        "status": "CANCELLED_BY_PROVIDER",
        "cancellationReason": "Maintenance",
    }
    assert booking is not None
    assert booking.cancellation_reason == "Maintenance"
    assert booking.cancelled_at == datetime(2024, 5, 30, 10, tzinfo=UTC)


@pytest.mark.asyncio
async def test_confirm_without_body() -> None:
    session = SequenceSession([FakeResponse(status=204)])
    assert await _api(session).confirm(3) is None
    assert session.requests[0]["params"] == {"status": "CONFIRMED"}


@pytest.mark.asyncio
async def test_list_provider_bookings_filters_by_tab() -> None:
    session = SequenceSession(
        [
            FakeResponse(
                json_data={
                    "content": [_booking_json(1, "CANCELLED_BY_USER")],
                    "totalPages": 3,
                    "totalElements": 21,
                    "size": 10,
                    "number": 1,
                }
            )
        ]
    )
    page = await _api(session).list_provider_bookings("cancelled", page=1)
    assert session.requests[0]["params"] == {
        "page": "1",
        "size": "10",
        "sort": "createdAt,desc",
        "status": "CANCELLED_BY_USER,CANCELLED_BY_PROVIDER",
    }
    assert page.total_pages == 3
    assert page.total_elements == 21
    assert page.items[0].status is BookingStatus.CANCELLED_BY_USER


@pytest.mark.asyncio
async def test_list_provider_bookings_all_tab_has_no_status() -> None:
    session = SequenceSession([FakeResponse(json_data={"content": []})])
    page = await _api(session).list_provider_bookings()
    assert "status" not in session.requests[0]["params"]
    assert page.items == []


@pytest.mark.asyncio
async def test_list_provider_bookings_rejects_bad_sort() -> None:
    with pytest.raises(ValidationError):
        await _api(SequenceSession([])).list_provider_bookings(sort_direction="up")


@pytest.mark.asyncio
async def test_unknown_status_from_api() -> None:
    session = SequenceSession([FakeResponse(json_data=_booking_json(status="LOST"))])
    with pytest.raises(ApiError):
        await _api(session).get_booking(1)
