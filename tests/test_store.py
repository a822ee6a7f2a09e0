from __future__ import annotations

import json
from pathlib import Path

import pytest

from strava_snapshots.errors import SnapshotFileError
from strava_snapshots.store import list_month_files, load_month, write_json, write_month


def test_month_file_round_trip(snapshot_dir: Path, make_item) -> None:
    items = [
        make_item(1, "2025-09-01T06:00:00.000Z", 5.0, start_latlng=[40.78, -73.97], avg_hr=148.5),
        make_item(2, "2025-09-03T07:15:00.000Z", 4.0, utc_offset=-14400),
    ]
    path = snapshot_dir / "2025-09.json"

    write_month(path, items)

    assert load_month(path) == items
    assert not (snapshot_dir / "2025-09.json.tmp").exists()


def test_write_json_is_pretty_with_trailing_newline(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "summary.json"

    write_json(path, {"days": 2, "miles": 5.59})

    text = path.read_text(encoding="utf-8")
    assert text == '{\n  "days": 2,\n  "miles": 5.59\n}\n'


def test_missing_month_file_is_empty(snapshot_dir: Path) -> None:
    assert load_month(snapshot_dir / "2030-01.json") == []


def test_month_file_must_be_a_list(snapshot_dir: Path) -> None:
    path = snapshot_dir / "2025-09.json"
    path.write_text(json.dumps({"id": 1}), encoding="utf-8")

    with pytest.raises(SnapshotFileError):
        load_month(path)


def test_list_month_files_ignores_derived_files(snapshot_dir: Path) -> None:
    for name in ("2025-10.json", "2024-12.json", "index.json", "recent-30d.json", "2025-1.json", "notes.txt"):
        (snapshot_dir / name).write_text("[]\n", encoding="utf-8")

    assert [path.name for path in list_month_files(snapshot_dir)] == ["2024-12.json", "2025-10.json"]


def test_month_item_without_start_iso_is_rejected(snapshot_dir: Path) -> None:
    path = snapshot_dir / "2025-09.json"
    path.write_text(json.dumps([{"id": 1, "date": "2025-09-01", "distance_km": 5.0}]), encoding="utf-8")

    with pytest.raises(SnapshotFileError, match="missing id or start_iso"):
        load_month(path)
