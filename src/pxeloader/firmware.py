# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Classify PXE loader labels by firmware family."""

from pxeloader.enum import FirmwareFamily

# The label a host carries when it has no PXE loader at all.
NO_LOADER = "None"

# Trailing token of every label for a loader booted by UEFI firmware.
UEFI_SUFFIX = "UEFI"


def classify_firmware(label) -> FirmwareFamily:
    """Return the `FirmwareFamily` for the loader `label`.

    `"None"` means no firmware, anything ending with the `UEFI` token is
    UEFI, and everything else, including garbage, falls back to BIOS.
    """
    if label == NO_LOADER:
        return FirmwareFamily.NONE
    elif isinstance(label, str) and label.split()[-1:] == [UEFI_SUFFIX]:
        return FirmwareFamily.UEFI
    else:
        return FirmwareFamily.BIOS
