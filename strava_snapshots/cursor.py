from __future__ import annotations

from pathlib import Path

from .config import CHALLENGE_START_ISO
from .normalize import parse_timestamp
from .store import list_month_files, load_month


def determine_after_iso(out_dir: Path, start_iso: str = CHALLENGE_START_ISO) -> str:
    """Return the start_iso of the newest stored run, or the challenge start when there is none."""
    month_files = list_month_files(out_dir)
    if not month_files:
        return start_iso

    latest_items = load_month(month_files[-1])
    if not latest_items:
        return start_iso
    return latest_items[-1]["start_iso"]


def to_epoch_seconds(iso_value: str) -> int:
    return int(parse_timestamp(iso_value).timestamp())
