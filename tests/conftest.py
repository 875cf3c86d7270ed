from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from sweeper.logs import LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_sweeper_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
