"""Sync Strava runs into monthly JSON snapshots with derived summaries."""
