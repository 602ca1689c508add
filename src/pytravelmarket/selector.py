"""Selectable booking start and end times for a consumer booking form."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, date, datetime, timedelta, tzinfo

from .exceptions import ValidationError
from .models import AvailabilityWindow, PricingUnit, ServiceType
from .util import TIME_SLOTS, at_slot, local_date, start_of_day

RANGED_SERVICE_TYPES = frozenset({ServiceType.ACCOMMODATION, ServiceType.CAR_RENTAL})
RANGED_PRICING_UNITS = frozenset(
    {PricingUnit.PER_NIGHT, PricingUnit.PER_DAY, PricingUnit.PER_HOUR}
)
LOOKAHEAD_DAYS = 7
MIN_STAY_DAYS = 1
IMPLIED_DURATION = timedelta(hours=1)
NO_AVAILABILITY_MESSAGE = "No availability for the selected date."


def requires_date_range(service_type: ServiceType | str, pricing_unit: PricingUnit | str) -> bool:
    """Return whether the service is booked with an explicit end date and time."""
    return str(service_type) in RANGED_SERVICE_TYPES or str(pricing_unit) in RANGED_PRICING_UNITS


def availability_message(times: Sequence[str]) -> str | None:
    return None if times else NO_AVAILABILITY_MESSAGE


class BookingWindowSelector:
    """Compute legal start/end slots from fetched availability windows.

    Slot instants must lie strictly inside an available window; both window
    boundaries are excluded.
    """

    def __init__(
        self,
        service_type: ServiceType | str,
        pricing_unit: PricingUnit | str,
        windows: Sequence[AvailabilityWindow] = (),
        *,
        tz: tzinfo = UTC,
    ) -> None:
        self.service_type = ServiceType(service_type)
        self.pricing_unit = PricingUnit(pricing_unit)
        self.windows = list(windows)
        self.tz = tz

    @property
    def requires_end(self) -> bool:
        return requires_date_range(self.service_type, self.pricing_unit)

    def fetch_range(self, start_date: date) -> tuple[datetime, datetime]:
        """Return the lookahead period to fetch windows for."""
        days = LOOKAHEAD_DAYS if self.requires_end else 0
        start = start_of_day(start_date, self.tz)
        return start, start_of_day(start_date + timedelta(days=days), self.tz)

    def min_end_date(self, start_date: date) -> date:
        if self.service_type is ServiceType.ACCOMMODATION:
            return start_date + timedelta(days=MIN_STAY_DAYS)
        return start_date

    def windows_for_date(self, day: date) -> list[AvailabilityWindow]:
        """Return available windows anchored to ``day``."""
        midnight = start_of_day(day, self.tz)
        return [
            window
            for window in self.windows
            if window.is_available
            and (
                local_date(window.start, self.tz) == day
                or window.start < midnight < window.end
            )
        ]

    def start_times(self, start_date: date) -> list[str]:
        return self._contained_slots(start_date)

    def end_times(
        self,
        start_date: date,
        end_date: date,
        start_time: str | None = None,
    ) -> list[str]:
        if not self.requires_end or end_date < self.min_end_date(start_date):
            return []
        times = self._contained_slots(end_date)
        if start_date == end_date and start_time:
            # Labels are zero-padded HH:mm, so string order is time order.
            times = [slot for slot in times if slot > start_time]
        return times

    def resolve(
        self,
        start_date: date | None,
        start_time: str | None,
        end_date: date | None = None,
        end_time: str | None = None,
    ) -> tuple[datetime, datetime]:
        """Return the booking instants for a completed selection."""
        if start_date is None or not start_time:
            raise ValidationError("Please select a start date and time")
        start = at_slot(start_date, start_time, self.tz)
        if not self.requires_end:
            return start, start + IMPLIED_DURATION
        if end_date is None or not end_time:
            raise ValidationError("Please select an end date and time")
        if end_date < self.min_end_date(start_date):
            raise ValidationError("End date is before the minimum allowed end date")
        end = at_slot(end_date, end_time, self.tz)
        if end <= start:
            raise ValidationError("End date must be after start date")
        return start, end

    def _contained_slots(self, day: date) -> list[str]:
        candidates = self.windows_for_date(day)
        times: list[str] = []
        for slot in TIME_SLOTS:
            instant = at_slot(day, slot, self.tz)
            if any(window.start < instant < window.end for window in candidates):
                times.append(slot)
        return times
