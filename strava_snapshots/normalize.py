from __future__ import annotations

import datetime as dt
from typing import Any

from .config import RUN_TYPE, SCHEMA_VERSION


def parse_timestamp(value: str) -> dt.datetime:
    """Parse an ISO 8601 timestamp; naive values and a trailing Z are read as UTC."""
    parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.UTC)
    return parsed


def format_snapshot_iso(moment: dt.datetime) -> str:
    # Fixed width so plain string comparison orders items chronologically.
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"


def _optional_latlng(value: Any) -> list[float] | None:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return [float(value[0]), float(value[1])]
    return None


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


def normalize_activity(activity: dict[str, Any]) -> dict[str, Any] | None:
    """Map one raw Strava activity to a snapshot item, or None if it is not a run.

    `start_iso`, `date` and `time_hhmm` describe the local wall clock at the
    start location: the UTC `start_date` shifted by `utc_offset` seconds.
    """
    if activity.get("type") != RUN_TYPE:
        return None

    utc_start = activity["start_date"]
    offset_seconds = int(activity.get("utc_offset") or 0)
    local_start = parse_timestamp(utc_start) + dt.timedelta(seconds=offset_seconds)
    start_iso = format_snapshot_iso(local_start)
    moving_time = activity["moving_time"]

    return {
        "id": activity["id"],
        "date": start_iso[:10],
        "start_iso": start_iso,
        "utc_start": utc_start,
        "utc_offset": offset_seconds,
        "start_latlng": _optional_latlng(activity.get("start_latlng")),
        "distance_km": activity["distance"] / 1000,
        "moving_time_s": moving_time,
        "moving_time_min": moving_time / 60,
        "avg_hr": _optional_float(activity.get("average_heartrate")),
        "time_hhmm": start_iso[11:16],
        "schema_version": SCHEMA_VERSION,
    }


def normalize_activities(activities: list[dict[str, Any]]) -> list[dict[str, Any]]:
    items: list[dict[str, Any]] = []
    for activity in activities:
        item = normalize_activity(activity)
        if item is not None:
            items.append(item)
    return items
