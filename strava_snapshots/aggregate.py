from __future__ import annotations

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any, Iterable

from .config import (
    CHALLENGE_START_ISO,
    KM_PER_MILE,
    QUALIFYING_DISTANCE_KM,
    RECENT_WINDOW_DAYS,
    SCHEMA_VERSION,
)
from .merge import sort_by_start, unique_by_id
from .normalize import format_snapshot_iso, parse_timestamp
from .store import load_month


def round_miles(value: float) -> float:
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def is_qualifying(item: dict[str, Any], threshold_km: float = QUALIFYING_DISTANCE_KM) -> bool:
    distance_km = item.get("distance_km")
    return distance_km is not None and distance_km >= threshold_km


def summarize(items: Iterable[dict[str, Any]], threshold_km: float = QUALIFYING_DISTANCE_KM) -> dict[str, Any]:
    """Count distinct qualifying days and total qualifying miles."""
    qualifying = [item for item in items if is_qualifying(item, threshold_km)]
    miles = sum(item["distance_km"] / KM_PER_MILE for item in qualifying)
    days = len({item["date"] for item in qualifying})
    return {"days": days, "miles": round_miles(miles)}


def build_index(month_files: list[Path], now: dt.datetime | None = None) -> dict[str, Any]:
    now = now or dt.datetime.now(dt.UTC)
    months: list[dict[str, Any]] = []
    for path in month_files:
        summary = summarize(load_month(path))
        months.append({"ym": path.stem, "days": summary["days"], "miles": summary["miles"]})
    months.sort(key=lambda entry: entry["ym"])

    return {
        "start": CHALLENGE_START_ISO[:10],
        "months": months,
        "last_update": format_snapshot_iso(now),
        "schema_version": SCHEMA_VERSION,
        "qualifying_km": QUALIFYING_DISTANCE_KM,
    }


def window_start(now: dt.datetime, days: int = RECENT_WINDOW_DAYS) -> dt.datetime:
    return now - dt.timedelta(days=days)


def collect_recent_items(
    month_files: list[Path],
    batch: list[dict[str, Any]],
    now: dt.datetime,
    days: int = RECENT_WINDOW_DAYS,
) -> list[dict[str, Any]]:
    """Union stored and freshly fetched items inside the trailing window.

    The batch goes last so a fetched item wins over a stored copy with the same id.
    """
    cutoff = window_start(now, days)
    candidates: list[dict[str, Any]] = []
    for path in month_files:
        candidates.extend(load_month(path))
    candidates.extend(batch)

    recent = [item for item in candidates if parse_timestamp(item["start_iso"]) >= cutoff]
    return sort_by_start(unique_by_id(recent))


def build_recent_window(
    month_files: list[Path],
    batch: list[dict[str, Any]],
    now: dt.datetime | None = None,
) -> tuple[list[dict[str, Any]], dict[str, Any]]:
    now = now or dt.datetime.now(dt.UTC)
    items = collect_recent_items(month_files, batch, now)
    summary = summarize(items)
    summary["generated_at"] = format_snapshot_iso(now)
    return items, summary
