from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return self._payload


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    out_dir = tmp_path / "data" / "activities"
    out_dir.mkdir(parents=True)
    return out_dir


@pytest.fixture
def make_item():
    def _make_item(item_id: int, start_iso: str, distance_km: float, **overrides: Any) -> dict[str, Any]:
        item = {
            "id": item_id,
            "date": start_iso[:10],
            "start_iso": start_iso,
            "utc_start": start_iso[:19] + "Z",
            "utc_offset": 0,
            "start_latlng": None,
            "distance_km": distance_km,
            "moving_time_s": 1800,
            "moving_time_min": 30.0,
            "avg_hr": None,
            "time_hhmm": start_iso[11:16],
            "schema_version": 2,
        }
        item.update(overrides)
        return item

    return _make_item


@pytest.fixture
def fake_response():
    return FakeResponse
