from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from sweeper import __version__
from sweeper.config import DEFAULT_CONFIG_PATH, load_config
from sweeper.errors import SweeperError
from sweeper.logs import LOGGER_NAME, configure_logging, format_bytes


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="retention-sweeper",
        description=(
            "Delete files older than a retention threshold from the configured "
            "directories. Runs once and exits."
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="JSON configuration file (default: config.json)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=Path("."),
        help="Directory for the per-run log file (default: current directory)",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Do not write a log file; errors still go to stderr",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be deleted without deleting anything",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Include debug records in the log file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(list(argv) if argv is not None else None)

    # Either failure aborts before anything is touched.
    try:
        config = load_config(args.config)
        configure_logging(
            None if args.no_log_file else args.log_dir,
            level=logging.DEBUG if args.verbose else logging.INFO,
            stream=sys.stderr,
        )
    except SweeperError as exc:
        raise SystemExit(str(exc)) from exc

    logger = logging.getLogger(LOGGER_NAME)
    logger.debug("Config: %s", config)

    from sweeper.core import run

    result = run(config, logger=logger, dry_run=args.dry_run)

    verb = "Would delete" if args.dry_run else "Deleted"
    summary = f"{verb} {result.files_deleted} files ({format_bytes(result.bytes_deleted)})"
    if result.failures:
        summary += f", {result.failures} failures"
    print(summary)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
