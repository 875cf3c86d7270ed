from __future__ import annotations

import json
from pathlib import Path

import pytest

from sweeper.config import load_config, parse_config
from sweeper.errors import ConfigError
from sweeper.models import SweepConfig


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


def test_load_delimited_config(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    _write(
        config_path,
        json.dumps(
            {
                "directories": "/var/log/app|/tmp/cache",
                "extensions": "log|gz",
                "pattern": "^tmp_",
                "days_of_expiration": 30,
                "search_in_subdirectories": True,
            }
        ),
    )

    config = load_config(config_path)

    assert config == SweepConfig(
        directories=("/var/log/app", "/tmp/cache"),
        extensions=("log", "gz"),
        pattern="^tmp_",
        min_age_days=30,
        recursive=True,
    )


def test_lists_and_blank_entries() -> None:
    config = parse_config({"directories": ["/a", " ", "/b"], "extensions": "log||"})

    assert config.directories == ("/a", "/b")
    assert config.extensions == ("log",)
    assert config.pattern == ""
    assert config.min_age_days == 0
    assert config.recursive is False


def test_missing_file_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Cannot read config file"):
        load_config(tmp_path / "absent.json")


def test_invalid_json_is_fatal(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    _write(config_path, "{not json")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_config(config_path)


def test_non_object_is_fatal(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    _write(config_path, "[]")
    with pytest.raises(ConfigError, match="JSON object"):
        load_config(config_path)


@pytest.mark.parametrize(
    "data, message",
    [
        ({"days_of_expiration": -1}, "non-negative"),
        ({"days_of_expiration": "30"}, "non-negative"),
        ({"days_of_expiration": True}, "non-negative"),
        ({"search_in_subdirectories": "yes"}, "boolean"),
        ({"pattern": 5}, "string"),
        ({"pattern": "(unclosed"}, "Invalid 'pattern'"),
        ({"extensions": 3}, "delimited"),
        ({"directorys": "/tmp"}, "Unknown config keys: directorys"),
    ],
)
def test_invalid_values(data: dict, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        parse_config(data)


def test_config_str_lists_every_field() -> None:
    config = parse_config({"directories": "/a|/b", "extensions": "log", "days_of_expiration": 3})
    assert str(config) == (
        "{Directories: /a|/b, Extensions: log, Pattern: , "
        "DaysOfExpiration: 3, SearchInSubdirectories: False}"
    )
