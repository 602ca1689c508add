"""Manual live check for the availability endpoints.

Run from the repository root with:
  PYTHONPATH=src API_URL=... USERNAME=... PASSWORD=... SERVICE_ID=... \
  python scripts/availability_live_check.py

Optional environment variables:
  API_TIMEZONE
  DAY (YYYY-MM-DD, defaults to today)

The script only reads data; it never saves availability.
"""

from __future__ import annotations

import asyncio
import os
import sys
from datetime import date

from pytravelmarket import Client
from pytravelmarket.config import load_config
from pytravelmarket.exceptions import PyTravelMarketError
from pytravelmarket.slots import SlotGrid


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        print(f"Missing required environment variable: {name}", file=sys.stderr)
        raise SystemExit(2)
    return value


def _format_grid(grid: SlotGrid) -> str:
    return " ".join(
        f"{slot[:2]}{'+' if available else '-'}" for slot, available in grid.selection.items()
    )


async def main() -> int:
    username = _require_env("USERNAME")
    password = _require_env("PASSWORD")
    service_id = int(_require_env("SERVICE_ID"))
    raw_day = os.getenv("DAY")
    day = date.fromisoformat(raw_day) if raw_day else date.today()

    try:
        config = load_config()
        async with Client.from_config(config) as client:
            await client.auth.login(username, password)
            tz = client.availability.tz
            grid = await client.availability.load_grid(service_id, day)
            ranges = grid.compress()
    except PyTravelMarketError as exc:
        print(f"Error: {exc.__class__.__name__}: {exc.user_message or exc}", file=sys.stderr)
        return 1

    print(f"Service: {service_id} on {day.isoformat()} ({tz})")
    print(f"Notes: {grid.notes or '-'}")
    print(f"Grid: {_format_grid(grid)}")
    print(f"Ranges: {len(ranges)}")
    for slot_range in ranges:
        state = "available" if slot_range.is_available else "blocked"
        print(f"- {slot_range.start} -> {slot_range.end} {state}")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
