"""Hourly slot grid for a single day and its compression into ranges."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, date, timedelta, tzinfo
from enum import StrEnum

from .exceptions import ValidationError
from .models import AvailabilityRequest, AvailabilityWindow, SlotRange
from .reconciler import OverlayOrder, reconcile
from .util import TIME_SLOTS, at_slot, ensure_slot, parse_slot

MIDNIGHT = "00:00"


class BulkDays(StrEnum):
    ALL = "all"
    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"


class SlotGrid:
    """Editable availability state of one calendar day.

    Every one of the 24 hourly slots carries a boolean flag. Slots missing from
    the initial selection are treated as available.
    """

    def __init__(
        self,
        day: date,
        selection: Mapping[str, bool] | None = None,
        *,
        notes: str = "",
        tz: tzinfo = UTC,
    ) -> None:
        self._day = day
        self._tz = tz
        self._notes = notes or ""
        self._slots = {slot: True for slot in TIME_SLOTS}
        for slot, available in (selection or {}).items():
            self._slots[ensure_slot(slot)] = bool(available)

    @classmethod
    def from_windows(
        cls,
        windows: Sequence[AvailabilityWindow],
        day: date,
        *,
        tz: tzinfo = UTC,
        order: OverlayOrder = OverlayOrder.CREATION,
    ) -> SlotGrid:
        reconciled = reconcile(windows, day, tz=tz, order=order)
        return cls(day, reconciled.selection, notes=reconciled.notes, tz=tz)

    @property
    def day(self) -> date:
        return self._day

    @property
    def tz(self) -> tzinfo:
        return self._tz

    @property
    def notes(self) -> str:
        return self._notes

    @notes.setter
    def notes(self, value: str) -> None:
        self._notes = value or ""

    @property
    def selection(self) -> dict[str, bool]:
        return dict(self._slots)

    def is_available(self, slot: str) -> bool:
        return self._slots[ensure_slot(slot)]

    def set(self, slot: str, available: bool) -> None:
        self._slots[ensure_slot(slot)] = bool(available)

    def toggle(self, slot: str) -> bool:
        slot = ensure_slot(slot)
        self._slots[slot] = not self._slots[slot]
        return self._slots[slot]

    def set_all(self, available: bool) -> None:
        for slot in TIME_SLOTS:
            self._slots[slot] = bool(available)

    def compress(self) -> list[SlotRange]:
        """Merge consecutive equal slots into maximal ranges."""
        ranges: list[SlotRange] = []
        run_start: str | None = None
        run_value = False
        for slot in TIME_SLOTS:
            value = self._slots[slot]
            if run_start is not None and value == run_value:
                continue
            if run_start is not None:
                ranges.append(SlotRange(run_start, slot, run_value))
            run_start = slot
            run_value = value
        if run_start is not None:
            ranges.append(SlotRange(run_start, MIDNIGHT, run_value))
        return ranges

    def to_requests(self, service_id: int) -> list[AvailabilityRequest]:
        requests: list[AvailabilityRequest] = []
        for slot_range in self.compress():
            start = at_slot(self._day, slot_range.start, self._tz)
            if slot_range.end == MIDNIGHT:
                end = at_slot(self._day + timedelta(days=1), MIDNIGHT, self._tz)
            else:
                end = at_slot(self._day, slot_range.end, self._tz)
            requests.append(
                AvailabilityRequest(
                    service_id=service_id,
                    start=start,
                    end=end,
                    is_available=slot_range.is_available,
                    notes=self._notes,
                )
            )
        return requests


def expand(ranges: Iterable[SlotRange]) -> dict[str, bool]:
    """Expand compressed ranges back into a full slot selection."""
    selection: dict[str, bool] = {}
    for slot_range in ranges:
        first = TIME_SLOTS.index(ensure_slot(slot_range.start))
        last = len(TIME_SLOTS) if slot_range.end == MIDNIGHT else TIME_SLOTS.index(
            ensure_slot(slot_range.end)
        )
        if last <= first:
            raise ValidationError("Slot range must end after it starts.")
        for slot in TIME_SLOTS[first:last]:
            selection[slot] = slot_range.is_available
    if len(selection) != len(TIME_SLOTS):
        raise ValidationError("Slot ranges must cover the whole day.")
    return selection


def bulk_requests(
    service_id: int,
    start_date: date | None,
    end_date: date | None,
    start_time: str,
    end_time: str,
    *,
    days: BulkDays = BulkDays.ALL,
    is_available: bool = True,
    notes: str = "",
    tz: tzinfo = UTC,
) -> list[AvailabilityRequest]:
    """Build one window per selected day between two dates, inclusive.

    Overlap with windows already stored for the service is not checked.
    """
    if start_date is None or end_date is None:
        raise ValidationError("Please select start and end dates")
    if start_date > end_date:
        raise ValidationError("Start date must be before end date")
    parse_slot(start_time)
    parse_slot(end_time)
    days = BulkDays(days)

    requests: list[AvailabilityRequest] = []
    current = start_date
    while current <= end_date:
        is_weekend = current.weekday() >= 5
        if (
            days is BulkDays.ALL
            or (days is BulkDays.WEEKDAYS and not is_weekend)
            or (days is BulkDays.WEEKENDS and is_weekend)
        ):
            requests.append(
                AvailabilityRequest(
                    service_id=service_id,
                    start=at_slot(current, start_time, tz),
                    end=at_slot(current, end_time, tz),
                    is_available=is_available,
                    notes=notes,
                )
            )
        current += timedelta(days=1)
    return requests
