from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from .errors import SnapshotFileError

MONTH_FILE_PATTERN = re.compile(r"^\d{4}-\d{2}\.json$")


def load_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise SnapshotFileError(f"Could not read {path}: {exc}") from exc


def write_json(path: Path, payload: object) -> None:
    """Write pretty-printed JSON via a temp file so readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=False)
        handle.write("\n")
    tmp_path.replace(path)


def month_file_path(out_dir: Path, ym: str) -> Path:
    return out_dir / f"{ym}.json"


def list_month_files(out_dir: Path) -> list[Path]:
    if not out_dir.exists():
        return []
    return sorted(path for path in out_dir.iterdir() if path.is_file() and MONTH_FILE_PATTERN.match(path.name))


def load_month(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        return []
    items = load_json(path)
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise SnapshotFileError(f"Month file {path} is not a list of activity objects")
    for position, item in enumerate(items):
        if "id" not in item or not isinstance(item.get("start_iso"), str):
            raise SnapshotFileError(f"Month file {path} item {position} is missing id or start_iso")
    return items


def write_month(path: Path, items: list[dict[str, Any]]) -> None:
    write_json(path, items)
