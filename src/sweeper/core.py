from __future__ import annotations

import logging
import os
import re
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Iterator

from sweeper.logs import NOTICE, format_bytes
from sweeper.matching import PatternLike, compile_pattern, qualifies
from sweeper.models import FileCandidate, SweepConfig, SweepResult

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def run(
    config: SweepConfig,
    *,
    logger: logging.Logger = logger,
    dry_run: bool = False,
    clock: Clock = time.time,
) -> SweepResult:
    """Sweep every configured directory in order and log the grand total."""
    total = SweepResult()
    for directory in config.directories:
        try:
            os.stat(directory)
        except FileNotFoundError:
            logger.error("Directory does not exist: %s", directory)
            total += SweepResult(failures=1)
            continue
        except OSError as exc:
            logger.error("Cannot access directory %s: %s", directory, exc)
            total += SweepResult(failures=1)
            continue
        total += sweep(
            directory,
            config.pattern,
            config.extensions,
            config.min_age_days,
            config.recursive,
            logger=logger,
            dry_run=dry_run,
            clock=clock,
        )

    message = "Files deleted: %d - Size deleted: %s"
    args: list[object] = [total.files_deleted, format_bytes(total.bytes_deleted)]
    if total.failures:
        message += " - Failures: %d"
        args.append(total.failures)
    logger.log(NOTICE, message, *args)
    return total


def sweep(
    directory: str | os.PathLike[str],
    pattern: PatternLike,
    extensions: Iterable[str],
    min_age_days: int,
    recursive: bool,
    *,
    logger: logging.Logger = logger,
    dry_run: bool = False,
    clock: Clock = time.time,
) -> SweepResult:
    """Delete qualifying files under ``directory`` older than ``min_age_days``.

    A file qualifies when the non-blank ``pattern`` is found in its name or
    when its name ends with one of ``extensions`` (case-insensitive). Listing
    and deletion errors are logged and counted as failures; they never stop
    the sweep. Returns the totals for this directory including every
    subdirectory visited.
    """
    if min_age_days < 0:
        raise ValueError("min_age_days must be non-negative")
    return _sweep_dir(
        directory,
        compile_pattern(pattern),
        tuple(extensions),
        min_age_days,
        recursive,
        logger,
        dry_run,
        clock,
    )


@dataclass
class _Pending:
    """A directory whose entries are still being consumed."""

    path: str
    entries: Iterator[os.DirEntry]
    result: SweepResult = field(default_factory=SweepResult)


def _open_dir(directory: str | os.PathLike[str], logger: logging.Logger) -> _Pending:
    try:
        base = os.path.abspath(directory)
        with os.scandir(base) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        logger.error("Cannot list directory %s: %s", directory, exc)
        return _Pending(os.fspath(directory), iter(()), SweepResult(failures=1))
    return _Pending(base, iter(entries))


def _sweep_dir(
    directory: str | os.PathLike[str],
    pattern: re.Pattern[str] | None,
    extensions: tuple[str, ...],
    min_age_days: int,
    recursive: bool,
    logger: logging.Logger,
    dry_run: bool,
    clock: Clock,
) -> SweepResult:
    # Depth-first with an explicit stack; a subdirectory's totals are folded
    # into its parent once all of its own entries are consumed.
    stack = [_open_dir(directory, logger)]
    while True:
        current = stack[-1]
        entry = next(current.entries, None)
        if entry is None:
            stack.pop()
            if not stack:
                return current.result
            stack[-1].result += current.result
            logger.info(
                "Directory: %s - Files deleted: %d - Size deleted: %s",
                current.path,
                current.result.files_deleted,
                format_bytes(current.result.bytes_deleted),
            )
            continue

        path = os.path.join(current.path, entry.name)
        try:
            candidate = FileCandidate.from_entry(entry, path)
        except OSError as exc:
            logger.error("Cannot stat %s: %s", path, exc)
            current.result += SweepResult(failures=1)
            continue

        if candidate.is_dir:
            if recursive:
                stack.append(_open_dir(path, logger))
            else:
                logger.debug("Skipping directory: %s", path)
            continue

        if qualifies(candidate.name, pattern, extensions, logger):
            current.result += _expire(candidate, min_age_days, logger, dry_run, clock())


def _expire(
    candidate: FileCandidate,
    min_age_days: int,
    logger: logging.Logger,
    dry_run: bool,
    now: float,
) -> SweepResult:
    days_old = candidate.days_old(now)
    logger.info(
        "File: %s - Last update: %s - Days old: %d",
        candidate.name,
        datetime.fromtimestamp(candidate.mtime).strftime("%Y-%m-%d"),
        days_old,
    )
    if days_old < min_age_days:
        return SweepResult()

    if dry_run:
        logger.info("Would delete: %s - Size: %s", candidate.path, format_bytes(candidate.size))
        return SweepResult(files_deleted=1, bytes_deleted=candidate.size)

    try:
        os.remove(candidate.path)
    except OSError as exc:
        logger.error("Cannot delete %s: %s", candidate.path, exc)
        return SweepResult(failures=1)
    logger.info("File deleted: %s - Size: %s", candidate.path, format_bytes(candidate.size))
    return SweepResult(files_deleted=1, bytes_deleted=candidate.size)

