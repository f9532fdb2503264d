# Copyright 2012-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Fixtures shared by the engine's tests."""

__all__ = ["CaptureLoaderLog", "TempDirectory"]

import logging
import os

import fixtures

from pxeloader.logger._common import DEFAULT_LOG_FORMAT


class TempDirectory(fixtures.TempDir):
    """A temporary directory whose `path` is always `str`."""

    def setUp(self):
        super().setUp()
        self.path = os.fsdecode(self.path)


class CaptureLoaderLog(fixtures.FakeLogger):
    """Capture records logged under ``pxeloader`` into `output`.

    Records are formatted as the engine formats them at run time.
    """

    def __init__(self, level=logging.DEBUG):
        super().__init__(
            name="pxeloader", level=level, format=DEFAULT_LOG_FORMAT
        )
