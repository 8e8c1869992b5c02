"""Persistent JSON config helpers.

Stores default analysis settings: compression algorithm, log level, and
asset exclude patterns. Malformed or missing config falls back to built-in
defaults.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .log import LOG_LEVELS
from .options import COMPRESSION_ALGORITHMS, DEFAULT_COMPRESSION_ALGORITHM

APP_NAME = "bundlelens"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_LOG_LEVEL = "info"


@dataclass(frozen=True)
class Defaults:
    """Sanitized config values the CLI falls back to when a flag is absent."""

    compression_algorithm: str = DEFAULT_COMPRESSION_ALGORITHM
    log_level: str = DEFAULT_LOG_LEVEL
    exclude_assets: tuple[str, ...] = ()


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; write failures are ignored."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _valid_pattern(value: object) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        re.compile(value)
    except re.error:
        return False
    return True


def load_defaults() -> Defaults:
    data = load_config()

    algorithm = data.get("compression_algorithm")
    if algorithm not in COMPRESSION_ALGORITHMS:
        algorithm = DEFAULT_COMPRESSION_ALGORITHM

    log_level = data.get("log_level")
    if not isinstance(log_level, str) or log_level.lower() not in LOG_LEVELS:
        log_level = DEFAULT_LOG_LEVEL

    raw_excludes = data.get("exclude_assets")
    if isinstance(raw_excludes, str):
        raw_excludes = [raw_excludes]
    if not isinstance(raw_excludes, list):
        raw_excludes = []
    exclude_assets = tuple(pattern for pattern in raw_excludes if _valid_pattern(pattern))

    return Defaults(
        compression_algorithm=algorithm,
        log_level=log_level.lower(),
        exclude_assets=exclude_assets,
    )
