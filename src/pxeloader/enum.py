# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Enumerations meaningful to PXE loader selection."""

from enum import Enum, unique
from typing import Any, Callable


@unique
class LoaderKind(Enum):
    """Canonical identity of a PXE loader family.

    Each member doubles as the name of the template kind that provisioning
    templates are bound to, hence the odd capitalisation.
    """

    PXELinux = "PXELinux"
    PXEGrub = "PXEGrub"
    PXEGrub2 = "PXEGrub2"
    iPXE = "iPXE"


@unique
class FirmwareFamily(Enum):
    """Coarse classification of a host's boot firmware."""

    NONE = "none"
    BIOS = "bios"
    UEFI = "uefi"


# Precisions (architecture suffixes) of the EFI binaries shipped for each
# loader, e.g. "grubx64.efi" or "shimia32.efi".
class EFI_PRECISION:
    X64 = "x64"
    IA32 = "ia32"
    AA64 = "aa64"


def enum_choices(
    enum: Any, transform: Callable[[str], str] = lambda value: value
) -> tuple[tuple[str, str], ...]:
    """Return a sequence of `(value, label)` tuples from an enum-like class.

    Enum-like classes have the following structure:

      class MyEnum:
          VAL1 = "value1"
          VAL2 = "value2"

    Real `enum.Enum` subclasses work too; their members' values are used.

    If a `transform` callable is provided, it's called on the human-readable
    value to get a processed version.
    """
    if isinstance(enum, type) and issubclass(enum, Enum):
        values = [member.value for member in enum]
    else:
        values = [
            value
            for attr, value in vars(enum).items()
            if not attr.startswith("_")
        ]
    return tuple((value, transform(value)) for value in values)


EFI_PRECISION_CHOICES = enum_choices(EFI_PRECISION)
