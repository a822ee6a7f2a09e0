from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import REQUIRED_STRAVA_VARS, SNAPSHOT_DIR
from .credentials import require_strava_credentials
from .sync import run_sync


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="strava-snapshots",
        description="Sync Strava runs into monthly JSON snapshots",
    )
    parser.add_argument("--out-dir", default=str(SNAPSHOT_DIR))
    parser.add_argument(
        "--force",
        action="store_true",
        help="Re-fetch everything since the challenge start and re-normalize stored runs.",
    )
    parser.add_argument(
        "--check-credentials",
        action="store_true",
        help="Report where each credential was found and exit without calling the Strava API.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        credentials, sources = require_strava_credentials()

        if args.check_credentials:
            print("Strava credentials available:")
            for var in REQUIRED_STRAVA_VARS:
                print(f"- {var}: {sources[var]}")
            return 0

        out_dir = Path(args.out_dir)
        result = run_sync(out_dir, credentials, force=args.force)
    except Exception as exc:
        print(f"Sync failed: {exc}", file=sys.stderr)
        return 1

    print(
        f"Done. {result.runs} runs merged into {len(result.months_written)} month files under {out_dir}; "
        f"last 30 days: {result.recent_days} days, {result.recent_miles} mi."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
