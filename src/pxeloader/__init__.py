# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""PXE loader resolution and preference.

Classify loader labels by firmware, resolve the loader recorded against a
host to a canonical kind, and recommend a loader for an operating system
from the templates it has available.
"""

__all__ = [
    "classify_firmware",
    "FirmwareFamily",
    "LoaderKind",
    "render_label",
    "resolve_loader_kind",
    "select_preferred_loader",
]

from pxeloader.enum import FirmwareFamily, LoaderKind
from pxeloader.firmware import classify_firmware
from pxeloader.kinds import render_label, resolve_loader_kind
from pxeloader.preference import select_preferred_loader
