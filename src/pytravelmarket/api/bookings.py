"""Booking endpoints for customers and providers."""

from __future__ import annotations

import logging
from typing import Any

from ..exceptions import ApiError, ValidationError
from ..lifecycle import SUCCESS_MESSAGES, BookingAction, tab_statuses, target_status
from ..models import Booking, BookingRequest, BookingStatus, Page
from ..util import format_utc_timestamp
from .base import BaseApi
from .const import (
    BOOKING_ENDPOINT,
    BOOKING_STATUS_ENDPOINT,
    BOOKINGS_ENDPOINT,
    PROVIDER_BOOKING_STATS_ENDPOINT,
    PROVIDER_BOOKINGS_ENDPOINT,
)

_LOGGER = logging.getLogger(__name__)

SORT_DIRECTIONS = ("asc", "desc")


class BookingApi(BaseApi):
    """Create bookings and move them through their status lifecycle."""

    async def get_booking(self, booking_id: int) -> Booking:
        data = await self._request_json(
            "GET",
            BOOKING_ENDPOINT.format(booking_id=booking_id),
            fallback_message="Failed to load booking details",
        )
        return self._map_booking(self._expect_dict(data, "booking"))

    async def list_bookings(self) -> list[Booking]:
        data = await self._request_json(
            "GET",
            BOOKINGS_ENDPOINT,
            fallback_message="Failed to load bookings",
        )
        return [
            self._map_booking(item)
            for item in self._expect_list(data, "bookings")
            if isinstance(item, dict)
        ]

    async def create_booking(self, request: BookingRequest) -> Booking:
        """Validate and submit a booking request."""
        _LOGGER.debug("Booking create started for service %s", request.service_id)
        payload = self._serialize_request(request)
        data = await self._request_json(
            "POST",
            BOOKINGS_ENDPOINT,
            json=payload,
            fallback_message=(
                "Failed to create booking. Please try different dates or contact support."
            ),
        )
        booking = self._map_booking(self._expect_dict(data, "booking"))
        _LOGGER.debug("Booking create completed with id %s", booking.id)
        return booking

    async def update_status(
        self,
        booking_id: int,
        status: BookingStatus,
        cancellation_reason: str | None = None,
    ) -> Booking | None:
        status = BookingStatus(status)
        reason = cancellation_reason.strip() if cancellation_reason else None
        if status in (BookingStatus.CANCELLED_BY_USER, BookingStatus.CANCELLED_BY_PROVIDER):
            if not reason:
                raise ValidationError(
                    "Cancellation reason is required.",
                    user_message="Please provide a reason for cancellation",
                )
        _LOGGER.debug("Booking %s status update to %s started", booking_id, status)
        data = await self._request_json(
            "PATCH",
            BOOKING_STATUS_ENDPOINT.format(booking_id=booking_id),
            params={"status": status.value, "cancellationReason": reason},
            fallback_message="Failed to update booking status",
        )
        _LOGGER.debug("Booking %s: %s", booking_id, SUCCESS_MESSAGES.get(status, "updated"))
        if isinstance(data, dict) and "id" in data:
            return self._map_booking(data)
        return None

    async def cancel(
        self,
        booking_id: int,
        reason: str | None,
        *,
        by_provider: bool = False,
    ) -> Booking | None:
        status = target_status(BookingAction.CANCEL, by_provider=by_provider)
        return await self.update_status(booking_id, status, reason)

    async def confirm(self, booking_id: int) -> Booking | None:
        return await self.update_status(booking_id, target_status(BookingAction.CONFIRM))

    async def complete(self, booking_id: int) -> Booking | None:
        return await self.update_status(booking_id, target_status(BookingAction.COMPLETE))

    async def mark_no_show(self, booking_id: int) -> Booking | None:
        return await self.update_status(booking_id, target_status(BookingAction.NO_SHOW))

    async def list_provider_bookings(
        self,
        tab: str = "all",
        *,
        page: int = 0,
        size: int = 10,
        sort_field: str = "createdAt",
        sort_direction: str = "desc",
    ) -> Page[Booking]:
        """Return one page of the provider's bookings filtered by status tab."""
        if page < 0 or size <= 0:
            raise ValidationError("page must be >= 0 and size must be positive.")
        if sort_direction not in SORT_DIRECTIONS:
            raise ValidationError("sort_direction must be 'asc' or 'desc'.")
        statuses = tab_statuses(tab)
        params: dict[str, Any] = {
            "page": page,
            "size": size,
            "sort": f"{sort_field},{sort_direction}",
        }
        if statuses:
            params["status"] = ",".join(status.value for status in statuses)
        data = await self._request_json(
            "GET",
            PROVIDER_BOOKINGS_ENDPOINT,
            params=params,
            fallback_message="Failed to load bookings",
        )
        body = self._expect_dict(data, "bookings page")
        items = [
            self._map_booking(item)
            for item in self._expect_list(body.get("content"), "bookings")
            if isinstance(item, dict)
        ]
        return Page(
            items=items,
            total_pages=self._coerce_optional_int(body.get("totalPages")) or 0,
            total_elements=self._coerce_optional_int(body.get("totalElements")) or 0,
            size=self._coerce_optional_int(body.get("size")) or size,
            number=self._coerce_optional_int(body.get("number")) or page,
        )

    async def provider_stats(self) -> dict[str, Any]:
        data = await self._request_json(
            "GET",
            PROVIDER_BOOKING_STATS_ENDPOINT,
            fallback_message="Failed to load booking stats",
        )
        return self._expect_dict(data, "booking stats")

    def _serialize_request(self, request: BookingRequest) -> dict[str, Any]:
        if not request.service_id:
            raise ValidationError("service_id is required.")
        if request.start is None or request.end is None:
            raise ValidationError(
                "start and end are required.",
                user_message="Please select check-in and check-out dates",
            )
        if request.end <= request.start:
            raise ValidationError(
                "end must be after start.",
                user_message="End date must be after start date",
            )
        if request.guest_count < 1:
            raise ValidationError("guest_count must be at least 1.")
        return {
            "serviceId": request.service_id,
            "startDateTime": format_utc_timestamp(request.start),
            "endDateTime": format_utc_timestamp(request.end),
            "guestCount": request.guest_count,
            "specialRequests": request.special_requests,
        }

    def _map_booking(self, item: dict[str, Any]) -> Booking:
        raw_status = item.get("status")
        try:
            status = BookingStatus(raw_status)
        except ValueError as exc:
            raise ApiError(f"API returned unknown booking status {raw_status!r}.") from exc
        service = item.get("service") if isinstance(item.get("service"), dict) else {}
        service_id = item.get("serviceId", service.get("id"))
        cancelled_at = item.get("cancelledAt")
        return Booking(
            id=self._coerce_id(item.get("id"), "booking"),
            start=self._parse_api_timestamp(item.get("startDateTime"), "booking start"),
            end=self._parse_api_timestamp(item.get("endDateTime"), "booking end"),
            status=status,
            total_price=self._coerce_float(item.get("totalPrice")),
            guest_count=self._coerce_optional_int(item.get("guestCount")),
            special_requests=item.get("specialRequests") or "",
            cancellation_reason=item.get("cancellationReason") or None,
            cancelled_at=(
                self._parse_api_timestamp(cancelled_at, "booking cancellation")
                if cancelled_at
                else None
            ),
            service_id=self._coerce_optional_int(service_id),
            service_title=service.get("title") or "",
        )
