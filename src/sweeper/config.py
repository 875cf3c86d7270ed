from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Mapping

from sweeper.errors import ConfigError
from sweeper.models import SweepConfig

DEFAULT_CONFIG_PATH = Path("config.json")
LIST_DELIMITER = "|"
KNOWN_KEYS = {
    "directories",
    "extensions",
    "pattern",
    "days_of_expiration",
    "search_in_subdirectories",
}


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> SweepConfig:
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return parse_config(data)


def parse_config(data: Mapping[str, Any]) -> SweepConfig:
    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    pattern = data.get("pattern", "")
    if not isinstance(pattern, str):
        raise ConfigError("'pattern' must be a string")
    if pattern.strip():
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ConfigError(f"Invalid 'pattern' {pattern!r}: {exc}") from exc

    days = data.get("days_of_expiration", 0)
    # bool is an int subclass; reject it explicitly.
    if isinstance(days, bool) or not isinstance(days, int) or days < 0:
        raise ConfigError("'days_of_expiration' must be a non-negative integer")

    recursive = data.get("search_in_subdirectories", False)
    if not isinstance(recursive, bool):
        raise ConfigError("'search_in_subdirectories' must be a boolean")

    return SweepConfig(
        directories=_split_list(data.get("directories", ""), "directories"),
        extensions=_split_list(data.get("extensions", ""), "extensions"),
        pattern=pattern,
        min_age_days=days,
        recursive=recursive,
    )


def _split_list(value: Any, key: str) -> tuple[str, ...]:
    if isinstance(value, str):
        items = value.split(LIST_DELIMITER)
    elif isinstance(value, list) and all(isinstance(item, str) for item in value):
        items = value
    else:
        raise ConfigError(f"'{key}' must be a '{LIST_DELIMITER}'-delimited string or a list of strings")
    return tuple(item for item in items if item.strip())
