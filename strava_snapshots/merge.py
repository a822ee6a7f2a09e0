from __future__ import annotations

from collections import defaultdict
from typing import Any, Iterable


def sort_by_start(items: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(items, key=lambda item: item["start_iso"])


def unique_by_id(items: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    # Later items replace earlier ones sharing an id; first-seen position is kept.
    by_id: dict[Any, dict[str, Any]] = {}
    for item in items:
        by_id[item["id"]] = item
    return list(by_id.values())


def merge_by_id(existing: Iterable[dict[str, Any]] | None, new_items: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Merge a fetched batch into an existing collection, newest fetch winning per id."""
    merged = unique_by_id([*(existing or []), *new_items])
    return sort_by_start(merged)


def month_key(item: dict[str, Any]) -> str:
    return item["start_iso"][:7]


def bucket_by_month(items: Iterable[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    buckets: dict[str, list[dict[str, Any]]] = defaultdict(list)
    for item in items:
        buckets[month_key(item)].append(item)
    return dict(buckets)
