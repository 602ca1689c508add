from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

from pytravelmarket.models import AvailabilityWindow
from pytravelmarket.reconciler import OverlayOrder, reconcile
from pytravelmarket.slots import SlotGrid

DAY = date(2024, 6, 1)


def _window(
    window_id: int,
    start_hour: int,
    end_hour: int,
    available: bool,
    notes: str = "",
) -> AvailabilityWindow:
    start = datetime(2024, 6, 1, tzinfo=UTC) + timedelta(hours=start_hour)
    end = datetime(2024, 6, 1, tzinfo=UTC) + timedelta(hours=end_hour)
    return AvailabilityWindow(window_id, start, end, available, notes)


def test_reconcile_defaults_to_available() -> None:
    result = reconcile([], DAY)
    assert all(result.selection.values())
    assert result.notes == ""
    assert result.default_available is True


def test_reconcile_overlays_windows() -> None:
    windows = [_window(1, 9, 12, True), _window(2, 12, 17, False)]
    selection = reconcile(windows, DAY).selection
    for hour in (9, 10, 11):
        assert selection[f"{hour:02d}:00"] is True
    for hour in range(12, 17):
        assert selection[f"{hour:02d}:00"] is False
    for hour in [*range(0, 9), *range(17, 24)]:
        assert selection[f"{hour:02d}:00"] is True


def test_reconcile_window_end_is_exclusive() -> None:
    selection = reconcile([_window(1, 10, 11, False)], DAY).selection
    assert selection["10:00"] is False
    assert selection["11:00"] is True


def test_reconcile_window_reaching_midnight() -> None:
    selection = reconcile([_window(1, 22, 24, False)], DAY).selection
    assert selection["22:00"] is False
    assert selection["23:00"] is False


def test_reconcile_fetch_order_last_wins() -> None:
    windows = [_window(5, 8, 12, False), _window(3, 10, 14, True)]
    selection = reconcile(windows, DAY, order=OverlayOrder.FETCH).selection
    assert selection["09:00"] is False
    assert selection["10:00"] is True


def test_reconcile_creation_order_newest_wins() -> None:
    windows = [_window(5, 8, 12, False), _window(3, 10, 14, True)]
    selection = reconcile(windows, DAY).selection
    assert selection["10:00"] is False
    assert selection["11:00"] is False
    assert selection["12:00"] is True


def test_reconcile_creation_order_ignores_fetch_order() -> None:
    windows = [_window(5, 8, 12, False), _window(3, 10, 14, True)]
    assert reconcile(windows, DAY).selection == reconcile(list(reversed(windows)), DAY).selection


def test_reconcile_notes_from_first_fetched_window() -> None:
    windows = [_window(9, 0, 6, False, "Night"), _window(1, 6, 24, True, "Day")]
    result = reconcile(windows, DAY)
    assert result.notes == "Night"
    assert result.default_available is False


def test_reconcile_uses_local_timezone() -> None:
    tz = timezone(timedelta(hours=2))
    window = AvailabilityWindow(
        1,
        datetime(2024, 6, 1, 7, tzinfo=UTC),
        datetime(2024, 6, 1, 8, tzinfo=UTC),
        False,
    )
    selection = reconcile([window], DAY, tz=tz).selection
    assert selection["09:00"] is False
    assert selection["07:00"] is True


def test_slot_grid_from_windows() -> None:
    grid = SlotGrid.from_windows([_window(1, 9, 12, False, "Lunch")], DAY)
    assert grid.notes == "Lunch"
    assert grid.is_available("09:00") is False
    assert len(grid.compress()) == 3
