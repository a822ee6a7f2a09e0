from __future__ import annotations

import sys
from typing import Any

import requests

from .config import PER_PAGE, REQUEST_TIMEOUT_SECONDS
from .errors import StravaAuthError, StravaFetchError

STRAVA_TOKEN_URL = "https://www.strava.com/oauth/token"
STRAVA_API_BASE = "https://www.strava.com/api/v3"


def get_access_token(client_id: str, client_secret: str, refresh_token: str) -> str:
    response = requests.post(
        STRAVA_TOKEN_URL,
        data={
            "client_id": client_id,
            "client_secret": client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        },
        timeout=60,
    )
    if not response.ok:
        print(f"Error fetching token: {response.status_code} - {response.text}", file=sys.stderr)
        raise StravaAuthError(f"Strava token refresh failed: {response.status_code}")

    payload = response.json()
    access_token = payload.get("access_token") if isinstance(payload, dict) else None
    if not access_token:
        raise StravaAuthError("Strava token refresh returned no access_token")
    return access_token


def fetch_activities(
    token: str,
    after: int | None = None,
    per_page: int = PER_PAGE,
) -> list[dict[str, Any]]:
    """Page through /athlete/activities until a short or empty page comes back."""
    url = f"{STRAVA_API_BASE}/athlete/activities"
    activities: list[dict[str, Any]] = []
    page = 1
    while True:
        params: dict[str, int] = {"page": page, "per_page": per_page}
        if after:
            params["after"] = after

        response = requests.get(
            url,
            headers={"Authorization": f"Bearer {token}"},
            params=params,
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        if not response.ok:
            print(
                f"Request failed ({response.status_code}) for {url} page {page}: {response.text}",
                file=sys.stderr,
            )
            raise StravaFetchError(f"Strava fetch failed: {response.status_code}")

        batch = response.json()
        if not isinstance(batch, list):
            raise StravaFetchError("Unexpected activities response from Strava API")

        activities.extend(activity for activity in batch if isinstance(activity, dict))
        if len(batch) < per_page:
            break
        page += 1

    return activities
