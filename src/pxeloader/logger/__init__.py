# Copyright 2014-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).
"""Logging for the PXE loader engine.

Importing the engine configures nothing. Modules obtain loggers from
`get_loader_logger`; the embedding application or command calls
`configure` once, and may later adjust the level with `set_verbosity`.
"""

__all__ = [
    "configure",
    "get_loader_logger",
    "LoaderLogger",
    "LoggingMode",
    "set_verbosity",
]

from pxeloader.logger._common import DEFAULT_LOG_VERBOSITY, LoggingMode
from pxeloader.logger._loaderlog import get_loader_logger, LoaderLogger
from pxeloader.logger._logging import (
    configure_standard_logging,
    set_standard_verbosity,
)


def configure(verbosity: int = None, mode: LoggingMode = None):
    """Configure logging for the PXE loader engine.

    :param verbosity: 0 to 3, see `get_logging_level`. Defaults to 3 when
        ``debug`` is set in the loader configuration, 2 otherwise.
    :param mode: A `LoggingMode`; guessed when not given.
    """
    if verbosity is None:
        # Avoid circular imports.
        from pxeloader.config import debug_enabled

        verbosity = 3 if debug_enabled() else DEFAULT_LOG_VERBOSITY
    if mode is None:
        mode = LoggingMode.guess()
    configure_standard_logging(verbosity, mode)


def set_verbosity(verbosity: int = None, mode: LoggingMode = None):
    """Change the verbosity after `configure` has been called."""
    if verbosity is None:
        verbosity = DEFAULT_LOG_VERBOSITY
    set_standard_verbosity(verbosity, mode)
