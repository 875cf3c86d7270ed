from __future__ import annotations

import logging
import re
from typing import Iterable, Union

PatternLike = Union[str, re.Pattern, None]

logger = logging.getLogger(__name__)


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def compile_pattern(pattern: PatternLike) -> re.Pattern[str] | None:
    if pattern is None:
        return None
    if isinstance(pattern, re.Pattern):
        return pattern if not is_blank(pattern.pattern) else None
    if is_blank(pattern):
        return None
    return re.compile(pattern)


def matches_pattern(
    name: str,
    pattern: re.Pattern[str] | None,
    log: logging.Logger = logger,
) -> bool:
    if pattern is None or pattern.search(name) is None:
        return False
    log.debug("Word '%s' match with string '%s'", name, pattern.pattern)
    return True


def matches_extension(
    name: str,
    extensions: Iterable[str],
    log: logging.Logger = logger,
) -> bool:
    folded = name.lower()
    for suffix in extensions:
        if is_blank(suffix):
            continue
        if folded.endswith(suffix.lower()):
            log.debug("Word '%s' has suffix '%s'", name, suffix)
            return True
    return False


def qualifies(
    name: str,
    pattern: re.Pattern[str] | None,
    extensions: Iterable[str],
    log: logging.Logger = logger,
) -> bool:
    """Return True when a file name is subject to the retention rule.

    The pattern (if any) and the extension list are alternatives: either one
    matching is enough.
    """
    return matches_pattern(name, pattern, log) or matches_extension(name, extensions, log)
