# Copyright 2016-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Configuration of the standard library's `logging`."""

import logging
import logging.config
import sys

from pxeloader.logger._common import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_VERBOSITY_LEVELS,
    LoggingMode,
)

# verbosity -> `logging` level.
DEFAULT_LOGGING_VERBOSITY_LEVELS = {
    0: logging.ERROR,
    1: logging.WARN,
    2: logging.INFO,
    3: logging.DEBUG,
}

assert (
    DEFAULT_LOGGING_VERBOSITY_LEVELS.keys() == DEFAULT_LOG_VERBOSITY_LEVELS
), "Logging verbosity map does not match expectations."


def get_logging_level(verbosity: int) -> int:
    """Map `verbosity` to a `logging` level, clamping out-of-range values.

    0 logs errors only, 1 adds warnings, 2 adds informational messages and
    3 logs everything.
    """
    levels = DEFAULT_LOGGING_VERBOSITY_LEVELS
    verbosity = max(min(levels), min(max(levels), verbosity))
    return levels[verbosity]


def get_logging_config(verbosity: int, mode: LoggingMode):
    """Return a `logging.config.dictConfig` configuration."""
    standalone = mode is LoggingMode.COMMAND
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "stdout": {"format": DEFAULT_LOG_FORMAT, "datefmt": ""},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": sys.__stdout__,
                "formatter": "stdout",
            },
        },
        "loggers": {
            "pxeloader": {
                "level": get_logging_level(verbosity),
                "handlers": ["stdout"] if standalone else [],
                "propagate": not standalone,
            },
        },
    }


def set_standard_verbosity(verbosity: int, mode: LoggingMode = None):
    """Apply `verbosity` to the `pxeloader` logger."""
    if mode is None:
        mode = LoggingMode.guess()
    logging.config.dictConfig(get_logging_config(verbosity, mode))


def configure_standard_logging(verbosity: int, mode: LoggingMode):
    """Set up `logging` for the engine; see `get_logging_level`."""
    set_standard_verbosity(verbosity, mode)
    logging.captureWarnings(False)
