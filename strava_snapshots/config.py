"""Shared configuration for the Strava snapshot sync."""
from __future__ import annotations

import os
from pathlib import Path

SNAPSHOT_DIR = Path(os.environ.get("STRAVA_SNAPSHOT_DIR", str(Path("data") / "activities")))

CHALLENGE_START_ISO = "2024-12-07T00:00:00Z"

# Changing this re-derives every aggregate on the next run; month files keep raw distances.
QUALIFYING_DISTANCE_KM = 3.22
KM_PER_MILE = 1.60934
RECENT_WINDOW_DAYS = 30

RUN_TYPE = "Run"
PER_PAGE = 200
REQUEST_TIMEOUT_SECONDS = 30

# 2 = local time derived from utc_offset. Items without the field predate it.
SCHEMA_VERSION = 2

INDEX_FILENAME = "index.json"
RECENT_FILENAME = "recent-30d.json"
RECENT_SUMMARY_FILENAME = "recent-30d-summary.json"

REQUIRED_STRAVA_VARS = (
    "STRAVA_CLIENT_ID",
    "STRAVA_CLIENT_SECRET",
    "STRAVA_REFRESH_TOKEN",
)
