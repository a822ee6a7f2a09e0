from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest

from strava_snapshots.config import CHALLENGE_START_ISO
from strava_snapshots.cursor import determine_after_iso, to_epoch_seconds
from strava_snapshots.errors import SnapshotFileError
from strava_snapshots.store import write_json, write_month


def test_no_month_files_uses_challenge_start(snapshot_dir: Path) -> None:
    assert determine_after_iso(snapshot_dir) == CHALLENGE_START_ISO
    assert to_epoch_seconds(determine_after_iso(snapshot_dir)) == int(dt.datetime(2024, 12, 7, tzinfo=dt.UTC).timestamp())


def test_missing_directory_uses_challenge_start(tmp_path: Path) -> None:
    assert determine_after_iso(tmp_path / "does-not-exist") == CHALLENGE_START_ISO


def test_latest_month_last_item_is_cursor(snapshot_dir: Path, make_item) -> None:
    write_month(snapshot_dir / "2025-08.json", [make_item(1, "2025-08-30T06:00:00.000Z", 5.0)])
    write_month(
        snapshot_dir / "2025-09.json",
        [
            make_item(2, "2025-09-01T06:00:00.000Z", 5.0),
            make_item(3, "2025-09-14T17:45:30.000Z", 5.0),
        ],
    )
    write_json(snapshot_dir / "index.json", {"months": []})
    write_json(snapshot_dir / "recent-30d.json", [])

    assert determine_after_iso(snapshot_dir) == "2025-09-14T17:45:30.000Z"
    assert to_epoch_seconds(determine_after_iso(snapshot_dir)) == int(dt.datetime(2025, 9, 14, 17, 45, 30, tzinfo=dt.UTC).timestamp())


def test_empty_latest_month_falls_back_to_start(snapshot_dir: Path, make_item) -> None:
    write_month(snapshot_dir / "2025-08.json", [make_item(1, "2025-08-30T06:00:00.000Z", 5.0)])
    write_month(snapshot_dir / "2025-09.json", [])

    assert determine_after_iso(snapshot_dir) == CHALLENGE_START_ISO


def test_corrupt_latest_month_raises(snapshot_dir: Path) -> None:
    (snapshot_dir / "2025-09.json").write_text("[{not json", encoding="utf-8")

    with pytest.raises(SnapshotFileError):
        determine_after_iso(snapshot_dir)
