from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path

from . import strava_client
from .aggregate import build_index, build_recent_window
from .config import (
    CHALLENGE_START_ISO,
    INDEX_FILENAME,
    RECENT_FILENAME,
    RECENT_SUMMARY_FILENAME,
)
from .cursor import determine_after_iso, to_epoch_seconds
from .merge import bucket_by_month, merge_by_id, month_key, unique_by_id
from .normalize import normalize_activities
from .store import list_month_files, load_month, month_file_path, write_json, write_month


@dataclass
class SyncResult:
    after_iso: str
    fetched: int
    runs: int
    months_written: list[str] = field(default_factory=list)
    recent_days: int = 0
    recent_miles: float = 0.0


def write_month_buckets(out_dir: Path, items: list[dict]) -> list[str]:
    """Merge each month's new items into its file.

    A fetched id lives only in the month of its fetched `start_iso`; stored
    copies filed under another month (legacy UTC-derived records) are removed
    from that file. Month files with no new items and no relocated ids are
    left untouched.
    """
    items = unique_by_id(items)
    buckets = bucket_by_month(items)
    month_by_id = {item["id"]: month_key(item) for item in items}
    stored_months = {path.stem for path in list_month_files(out_dir)}

    written: list[str] = []
    for ym in sorted(stored_months | set(buckets)):
        path = month_file_path(out_dir, ym)
        stored = load_month(path)
        kept = [item for item in stored if month_by_id.get(item["id"], ym) == ym]
        if ym in buckets:
            write_month(path, merge_by_id(kept, buckets[ym]))
        elif len(kept) != len(stored):
            write_month(path, kept)
        else:
            continue
        written.append(ym)
    return written


def rebuild_summaries(out_dir: Path, batch: list[dict], now: dt.datetime) -> dict:
    month_files = list_month_files(out_dir)
    write_json(out_dir / INDEX_FILENAME, build_index(month_files, now))

    recent_items, recent_summary = build_recent_window(month_files, batch, now)
    write_json(out_dir / RECENT_FILENAME, recent_items)
    write_json(out_dir / RECENT_SUMMARY_FILENAME, recent_summary)
    return recent_summary


def run_sync(
    out_dir: Path,
    credentials: dict[str, str],
    force: bool = False,
    now: dt.datetime | None = None,
) -> SyncResult:
    out_dir.mkdir(parents=True, exist_ok=True)

    after_iso = CHALLENGE_START_ISO if force else determine_after_iso(out_dir)
    after = to_epoch_seconds(after_iso)
    print(f"Fetching activities after {after_iso} ({after}).")

    access_token = strava_client.get_access_token(
        credentials["STRAVA_CLIENT_ID"],
        credentials["STRAVA_CLIENT_SECRET"],
        credentials["STRAVA_REFRESH_TOKEN"],
    )
    activities = strava_client.fetch_activities(access_token, after)
    items = normalize_activities(activities)
    print(f"Fetched {len(activities)} activities, {len(items)} runs.")

    months_written = write_month_buckets(out_dir, items)
    if months_written:
        print(f"Updated month files: {', '.join(months_written)}")

    now = now or dt.datetime.now(dt.UTC)
    recent_summary = rebuild_summaries(out_dir, items, now)
    print(f"Last 30 days: {recent_summary['days']} qualifying days, {recent_summary['miles']} mi.")

    return SyncResult(
        after_iso=after_iso,
        fetched=len(activities),
        runs=len(items),
        months_written=months_written,
        recent_days=recent_summary["days"],
        recent_miles=recent_summary["miles"],
    )
