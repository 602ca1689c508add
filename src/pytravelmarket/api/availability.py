"""Provider availability endpoints."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any

from ..exceptions import ValidationError
from ..models import AvailabilityRequest, AvailabilityWindow
from ..reconciler import OverlayOrder, ReconciledDay, reconcile
from ..slots import BulkDays, SlotGrid, bulk_requests
from ..util import day_bounds, format_api_timestamp, format_utc_timestamp
from .base import BaseApi
from .const import (
    AVAILABILITIES_BULK_ENDPOINT,
    AVAILABILITIES_ENDPOINT,
    AVAILABILITY_ENDPOINT,
    SERVICE_AVAILABILITIES_ENDPOINT,
    SERVICE_AVAILABLE_DATES_ENDPOINT,
)

_LOGGER = logging.getLogger(__name__)


class AvailabilityApi(BaseApi):
    """Read and write availability windows of a provider's service."""

    async def list_windows(
        self,
        service_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[AvailabilityWindow]:
        """Return windows of a service, optionally limited to a period."""
        _LOGGER.debug("Availability list_windows started for service %s", service_id)
        params = self._period_params(start, end)
        data = await self._request_json(
            "GET",
            SERVICE_AVAILABILITIES_ENDPOINT.format(service_id=service_id),
            params=params,
            fallback_message="Failed to load availabilities",
        )
        windows = self._map_windows(data)
        _LOGGER.debug(
            "Availability list_windows completed for service %s with %d windows",
            service_id,
            len(windows),
        )
        return windows

    async def list_available_dates(
        self,
        service_id: int,
        start: datetime,
        end: datetime,
    ) -> list[AvailabilityWindow]:
        """Return only the bookable windows of a service within a period."""
        data = await self._request_json(
            "GET",
            SERVICE_AVAILABLE_DATES_ENDPOINT.format(service_id=service_id),
            params=self._period_params(start, end),
            fallback_message="Failed to check availability",
        )
        return self._map_windows(data)

    async def create_window(self, request: AvailabilityRequest) -> AvailabilityWindow:
        data = await self._request_json(
            "POST",
            AVAILABILITIES_ENDPOINT,
            json=self._serialize_request(request),
            fallback_message="Failed to create availability",
        )
        return self._map_window(self._expect_dict(data, "availability"))

    async def create_bulk(
        self,
        requests: Sequence[AvailabilityRequest],
    ) -> list[AvailabilityWindow]:
        if not requests:
            raise ValidationError("At least one availability is required.")
        data = await self._request_json(
            "POST",
            AVAILABILITIES_BULK_ENDPOINT,
            json=[self._serialize_request(request) for request in requests],
            fallback_message="Failed to create bulk availabilities",
        )
        return self._map_windows(data)

    async def update_window(
        self,
        availability_id: int,
        request: AvailabilityRequest,
    ) -> AvailabilityWindow:
        data = await self._request_json(
            "PUT",
            AVAILABILITY_ENDPOINT.format(availability_id=availability_id),
            json=self._serialize_request(request),
            fallback_message="Failed to update availability",
        )
        return self._map_window(self._expect_dict(data, "availability"))

    async def delete_window(self, availability_id: int) -> None:
        await self._request_json(
            "DELETE",
            AVAILABILITY_ENDPOINT.format(availability_id=availability_id),
            fallback_message="Failed to delete availability",
        )

    async def fetch_day(
        self,
        service_id: int,
        day: date,
        *,
        order: OverlayOrder = OverlayOrder.CREATION,
    ) -> ReconciledDay:
        """Fetch the windows of one day and reconcile them into a slot grid."""
        start, end = day_bounds(day, self._tz)
        windows = await self.list_windows(service_id, start, end)
        return reconcile(windows, day, tz=self._tz, order=order)

    async def load_grid(
        self,
        service_id: int,
        day: date,
        *,
        order: OverlayOrder = OverlayOrder.CREATION,
    ) -> SlotGrid:
        reconciled = await self.fetch_day(service_id, day, order=order)
        return SlotGrid(day, reconciled.selection, notes=reconciled.notes, tz=self._tz)

    async def save_day(self, service_id: int, grid: SlotGrid) -> list[AvailabilityWindow]:
        """Replace every window of the grid's day with its compressed ranges.

        Existing windows of that day are deleted first; the save is a full
        overwrite, so concurrent edits of the same day are not merged.
        """
        _LOGGER.debug("Availability save_day started for service %s on %s", service_id, grid.day)
        requests = grid.to_requests(service_id)
        start, end = day_bounds(grid.day, grid.tz)
        existing = await self.list_windows(service_id, start, end)
        for window in existing:
            await self.delete_window(window.id)
        created = await self.create_bulk(requests)
        _LOGGER.debug(
            "Availability save_day completed for service %s: %d removed, %d created",
            service_id,
            len(existing),
            len(requests),
        )
        return created

    async def save_bulk(
        self,
        service_id: int,
        start_date: date | None,
        end_date: date | None,
        start_time: str,
        end_time: str,
        *,
        days: BulkDays = BulkDays.ALL,
        is_available: bool = True,
        notes: str = "",
    ) -> list[AvailabilityWindow]:
        """Create one window per selected day; existing windows are kept."""
        requests = bulk_requests(
            service_id,
            start_date,
            end_date,
            start_time,
            end_time,
            days=days,
            is_available=is_available,
            notes=notes,
            tz=self._tz,
        )
        if not requests:
            raise ValidationError("No days in the selected range match the chosen option.")
        return await self.create_bulk(requests)

    def _period_params(
        self,
        start: datetime | None,
        end: datetime | None,
    ) -> dict[str, str] | None:
        if start is None and end is None:
            return None
        if start is None or end is None:
            raise ValidationError("start and end must be provided together.")
        if end < start:
            raise ValidationError("end must not be before start.")
        return {
            "startDate": format_api_timestamp(start),
            "endDate": format_api_timestamp(end),
        }

    def _serialize_request(self, request: AvailabilityRequest) -> dict[str, Any]:
        if request.end <= request.start:
            raise ValidationError("Availability must end after it starts.")
        return {
            "serviceId": request.service_id,
            "startDateTime": format_utc_timestamp(request.start),
            "endDateTime": format_utc_timestamp(request.end),
            "isAvailable": request.is_available,
            "notes": request.notes,
        }

    def _map_windows(self, data: Any) -> list[AvailabilityWindow]:
        windows: list[AvailabilityWindow] = []
        for item in self._expect_list(data, "availabilities"):
            if not isinstance(item, dict):
                continue
            windows.append(self._map_window(item))
        return windows

    def _map_window(self, item: dict[str, Any]) -> AvailabilityWindow:
        return AvailabilityWindow(
            id=self._coerce_id(item.get("id"), "availability"),
            start=self._parse_api_timestamp(item.get("startDateTime"), "availability start"),
            end=self._parse_api_timestamp(item.get("endDateTime"), "availability end"),
            is_available=item.get("isAvailable") is True or item.get("available") is True,
            notes=item.get("notes") or "",
        )
