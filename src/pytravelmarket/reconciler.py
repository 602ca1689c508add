"""Hydrate a day's slot grid from stored availability windows."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, tzinfo
from enum import StrEnum

from .models import AvailabilityWindow
from .util import TIME_SLOTS, at_slot


class OverlayOrder(StrEnum):
    """Order in which overlapping windows are applied; the last one wins."""

    CREATION = "creation"
    FETCH = "fetch"


@dataclass(frozen=True, slots=True)
class ReconciledDay:
    selection: dict[str, bool]
    notes: str
    default_available: bool


def overlay_sequence(
    windows: Sequence[AvailabilityWindow],
    order: OverlayOrder = OverlayOrder.CREATION,
) -> list[AvailabilityWindow]:
    if OverlayOrder(order) is OverlayOrder.FETCH:
        return list(windows)
    # Server ids grow with creation time, so the newest window wins.
    return sorted(windows, key=lambda window: window.id)


def reconcile(
    windows: Sequence[AvailabilityWindow],
    day: date,
    *,
    tz: tzinfo = UTC,
    order: OverlayOrder = OverlayOrder.CREATION,
) -> ReconciledDay:
    """Compute the per-slot grid for ``day`` from fetched windows.

    All slots start available. Each window then overlays its flag onto every
    slot whose start instant lies in ``[window.start, window.end)``.

    Overlapping windows are applied oldest first by server id, so the most
    recently created window wins. Pass ``order=OverlayOrder.FETCH`` to apply
    them in the order the API returned them instead.

    The editor note and the default flag are read from the first window in the
    fetched list, not from the window governing any particular slot.
    """
    instants = {slot: at_slot(day, slot, tz) for slot in TIME_SLOTS}
    selection = {slot: True for slot in TIME_SLOTS}
    for window in overlay_sequence(windows, order):
        for slot, instant in instants.items():
            if window.start <= instant < window.end:
                selection[slot] = window.is_available

    if windows:
        first = windows[0]
        return ReconciledDay(selection, first.notes or "", first.is_available)
    return ReconciledDay(selection, "", True)
