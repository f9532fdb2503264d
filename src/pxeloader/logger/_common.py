# Copyright 2016-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).
"""Shared logging constants and helpers."""

import enum
import sys

# No timestamps; whatever collects stdout adds its own.
DEFAULT_LOG_FORMAT = "%(name)s: [%(levelname)s] %(message)s"
DEFAULT_LOG_VERBOSITY_LEVELS = {0, 1, 2, 3}
DEFAULT_LOG_VERBOSITY = 2


@enum.unique
class LoggingMode(enum.Enum):
    """How the `pxeloader` logger is wired up."""

    # Standalone command: write to stdout.
    COMMAND = "COMMAND"

    # Inside a larger console process: propagate to its root logger.
    EMBEDDED = "EMBEDDED"

    @classmethod
    def guess(cls):
        """`COMMAND` if any standard stream is a terminal, else `EMBEDDED`."""
        streams = (sys.stdin, sys.stdout, sys.stderr)
        if any(stream is not None and stream.isatty() for stream in streams):
            return cls.COMMAND
        return cls.EMBEDDED
