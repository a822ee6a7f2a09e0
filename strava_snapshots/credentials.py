from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Iterator, Mapping

from .config import REQUIRED_STRAVA_VARS
from .errors import MissingCredentialsError


def parse_dotenv(path: Path) -> dict[str, str]:
    """Read KEY=value lines; `export` prefixes and matching quotes are stripped."""
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return {}

    values: dict[str, str] = {}
    for raw_line in lines:
        line = raw_line.strip().removeprefix("export ").strip()
        key, sep, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if line.startswith("#") or not sep or not key:
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        values[key] = value
    return values


def discover_env_files() -> list[Path]:
    candidates = [Path.cwd() / ".env"]
    explicit_env_file = os.getenv("STRAVA_ENV_FILE")
    if explicit_env_file:
        candidates.insert(0, Path(explicit_env_file).expanduser())
    return list(dict.fromkeys(candidates))


def _credential_sources(env_files: list[Path]) -> Iterator[tuple[str, Mapping[str, str]]]:
    # .env files are only parsed once the environment leaves something unresolved.
    yield "environment", os.environ
    for env_file in env_files:
        if env_file.is_file():
            yield f"dotenv:{env_file}", parse_dotenv(env_file)


def resolve_strava_credentials() -> tuple[dict[str, str], dict[str, str], list[Path]]:
    """Collect Strava credentials from the environment, then from .env files.

    Returns the resolved values, where each one came from, and the .env paths
    that were considered.
    """
    values: dict[str, str] = {}
    sources: dict[str, str] = {}
    env_files = discover_env_files()

    for source, mapping in _credential_sources(env_files):
        for var_name in REQUIRED_STRAVA_VARS:
            if var_name not in values and mapping.get(var_name):
                values[var_name] = mapping[var_name]
                sources[var_name] = source
        if len(values) == len(REQUIRED_STRAVA_VARS):
            break

    return values, sources, env_files


def require_strava_credentials() -> tuple[dict[str, str], dict[str, str]]:
    credentials, sources, searched_env_files = resolve_strava_credentials()
    missing_vars = [var for var in REQUIRED_STRAVA_VARS if var not in credentials]
    if missing_vars:
        env_locations = ", ".join(shlex.quote(str(path)) for path in searched_env_files)
        raise MissingCredentialsError(
            f"Missing Strava credentials: {', '.join(missing_vars)}\n"
            "Credential lookup order: environment variables -> .env files.\n"
            f"Searched .env paths: {env_locations}"
        )
    return credentials, sources
