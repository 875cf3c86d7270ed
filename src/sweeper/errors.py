"""Fatal error types. Anything raised from here stops the run before sweeping."""

from __future__ import annotations


class SweeperError(Exception):
    pass


class ConfigError(SweeperError):
    pass


class LogSetupError(SweeperError):
    pass
