# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""The PXE loader catalog, and resolution of loader identifiers to kinds.

A host's `pxe_loader` is free-form: it may be a loader filename relative to
the TFTP root (``grub2/shimx64.efi``), an HTTP boot URL, or one of the
human-readable labels listed in `LOADERS` (``Grub2 UEFI``). The tables below
are built once, at import time, from `LOADERS` and are read-only thereafter.
"""

__all__ = [
    "all_loaders",
    "all_loaders_map",
    "as_loader_kind",
    "catalog_firmware",
    "LoaderEntry",
    "LOADERS",
    "loader_label_choices",
    "render_label",
    "resolve_loader_kind",
]

from collections import namedtuple
from types import MappingProxyType
from typing import Optional
from urllib.parse import urlparse

from pxeloader.enum import EFI_PRECISION, FirmwareFamily, LoaderKind
from pxeloader.firmware import classify_firmware, NO_LOADER
from pxeloader.logger import get_loader_logger
from pxeloader.utils.enum import map_enum

loaderlog = get_loader_logger("kinds")


LoaderEntry = namedtuple(
    "LoaderEntry", ("label", "kind", "firmware", "filename")
)
LoaderEntry.__doc__ = """\
One loader offered to hosts.

:ivar label: Human-readable label, as shown in drop-downs.
:ivar kind: The `LoaderKind`, or `None` for the "None" pseudo-loader.
:ivar firmware: The `FirmwareFamily` that boots this loader.
:ivar filename: Filename template, relative to the TFTP root or an HTTP
    boot URL. Expanded with `precision` and `httpboot_host`. `None` when
    the loader is not downloaded at all.
"""


LOADERS = (
    LoaderEntry(NO_LOADER, None, FirmwareFamily.NONE, ""),
    LoaderEntry(
        "PXELinux BIOS",
        LoaderKind.PXELinux,
        FirmwareFamily.BIOS,
        "pxelinux.0",
    ),
    LoaderEntry(
        "PXELinux UEFI",
        LoaderKind.PXELinux,
        FirmwareFamily.UEFI,
        "pxelinux.efi",
    ),
    LoaderEntry(
        "Grub UEFI",
        LoaderKind.PXEGrub,
        FirmwareFamily.UEFI,
        "grub/grub{precision}.efi",
    ),
    LoaderEntry(
        "Grub2 BIOS",
        LoaderKind.PXEGrub2,
        FirmwareFamily.BIOS,
        "grub2/grub{precision}.0",
    ),
    LoaderEntry(
        "Grub2 ELF",
        LoaderKind.PXEGrub2,
        FirmwareFamily.BIOS,
        "grub2/grub{precision}.elf",
    ),
    LoaderEntry(
        "Grub2 UEFI",
        LoaderKind.PXEGrub2,
        FirmwareFamily.UEFI,
        "grub2/grub{precision}.efi",
    ),
    LoaderEntry(
        "Grub2 UEFI SecureBoot",
        LoaderKind.PXEGrub2,
        FirmwareFamily.UEFI,
        "grub2/shim{precision}.efi",
    ),
    LoaderEntry(
        "Grub2 UEFI HTTP",
        LoaderKind.PXEGrub2,
        FirmwareFamily.UEFI,
        "http://{httpboot_host}/httpboot/grub2/grub{precision}.efi",
    ),
    LoaderEntry(
        "Grub2 UEFI HTTPS",
        LoaderKind.PXEGrub2,
        FirmwareFamily.UEFI,
        "https://{httpboot_host}/httpboot/grub2/grub{precision}.efi",
    ),
    LoaderEntry(
        "Grub2 UEFI HTTPS SecureBoot",
        LoaderKind.PXEGrub2,
        FirmwareFamily.UEFI,
        "https://{httpboot_host}/httpboot/grub2/shim{precision}.efi",
    ),
    # Loaded from the NIC's own firmware; nothing to download.
    LoaderEntry("iPXE Embedded", LoaderKind.iPXE, FirmwareFamily.BIOS, None),
    LoaderEntry(
        "iPXE UEFI HTTP",
        LoaderKind.iPXE,
        FirmwareFamily.UEFI,
        "http://{httpboot_host}/httpboot/ipxe-{precision}.efi",
    ),
    LoaderEntry(
        "iPXE Chain BIOS",
        LoaderKind.iPXE,
        FirmwareFamily.BIOS,
        "undionly-ipxe.0",
    ),
    LoaderEntry(
        "iPXE Chain UEFI", LoaderKind.iPXE, FirmwareFamily.UEFI, "ipxe.efi"
    ),
)


# Name of each kind as it appears in labels.
KIND_DISPLAY_NAMES = MappingProxyType(
    {
        LoaderKind.PXELinux: "PXELinux",
        LoaderKind.PXEGrub: "Grub",
        LoaderKind.PXEGrub2: "Grub2",
        LoaderKind.iPXE: "iPXE",
    }
)

# The firmware each kind is recommended for, and the label qualifiers it
# needs to name a loader in `LOADERS`.
KIND_CANONICAL_FIRMWARE = MappingProxyType(
    {
        LoaderKind.PXELinux: (FirmwareFamily.BIOS, ()),
        LoaderKind.PXEGrub: (FirmwareFamily.UEFI, ()),
        LoaderKind.PXEGrub2: (FirmwareFamily.UEFI, ()),
        LoaderKind.iPXE: (FirmwareFamily.BIOS, ("Chain",)),
    }
)

FIRMWARE_SUFFIXES = MappingProxyType(
    {FirmwareFamily.BIOS: "BIOS", FirmwareFamily.UEFI: "UEFI"}
)


def render_label(kind: LoaderKind) -> str:
    """Render the canonical label for `kind`, e.g. ``Grub2 UEFI``.

    The label is always a member of `LOADERS`, and `resolve_loader_kind`
    maps it back to `kind`.
    """
    firmware, qualifiers = KIND_CANONICAL_FIRMWARE[kind]
    return " ".join(
        (KIND_DISPLAY_NAMES[kind], *qualifiers, FIRMWARE_SUFFIXES[firmware])
    )


def all_loaders_map(
    precision=EFI_PRECISION.X64, httpboot_host="httpboot_host"
) -> dict:
    """Return a `label: filename` dict of every loader in the catalog.

    :param precision: The EFI architecture suffix, see `EFI_PRECISION`.
    :param httpboot_host: Host name to use in HTTP boot URLs.
    """
    return {
        entry.label: (
            None
            if entry.filename is None
            else entry.filename.format(
                precision=precision, httpboot_host=httpboot_host
            )
        )
        for entry in LOADERS
    }


def all_loaders() -> list:
    """Return every loader label, in catalog order."""
    return [entry.label for entry in LOADERS]


def loader_label_choices():
    """Return `(label, label)` pairs suitable for a choice field."""
    return tuple((label, label) for label in all_loaders())


def get_httpboot_path(identifier: str) -> Optional[str]:
    """Return the path of an HTTP boot URL, or `None` if not a URL."""
    try:
        url = urlparse(identifier)
    except ValueError:
        # e.g. a malformed IPv6 address in the netloc.
        return None
    if url.scheme in ("http", "https"):
        return url.path
    else:
        return None


def _build_filename_tables():
    filenames, httpboot_paths = {}, {}
    for precision in sorted(map_enum(EFI_PRECISION).values()):
        for label, filename in all_loaders_map(precision, "").items():
            entry = _LOADERS_BY_LABEL[label]
            if entry.kind is None or not filename:
                continue
            httpboot_path = get_httpboot_path(filename)
            if httpboot_path is None:
                filenames[filename] = entry.kind
            else:
                httpboot_paths[httpboot_path] = entry.kind
    return MappingProxyType(filenames), MappingProxyType(httpboot_paths)


def _build_label_table():
    labels = {entry.label: entry.kind for entry in LOADERS if entry.kind}
    for kind in LoaderKind:
        labels.setdefault(render_label(kind), kind)
    return MappingProxyType(labels)


_LOADERS_BY_LABEL = MappingProxyType({entry.label: entry for entry in LOADERS})

# filename -> kind, for every known precision.
LOADER_FILENAMES, HTTPBOOT_PATHS = _build_filename_tables()

# label -> kind.
LOADER_LABELS = _build_label_table()


def catalog_firmware(label) -> FirmwareFamily:
    """Return the `FirmwareFamily` that boots the loader named `label`.

    Unlike `classify_firmware` this knows that, for example, ``Grub2 UEFI
    HTTP`` is booted by UEFI firmware. Labels not in the catalog are
    classified by `classify_firmware`.
    """
    entry = _LOADERS_BY_LABEL.get(label) if isinstance(label, str) else None
    if entry is None:
        return classify_firmware(label)
    else:
        return entry.firmware


def resolve_loader_kind(identifier) -> Optional[LoaderKind]:
    """Resolve a host's loader identifier to a `LoaderKind`.

    The identifier is tried first as a loader filename (or HTTP boot URL)
    and then as a loader label. Both matches are exact.

    :return: The `LoaderKind`, or `None` when the identifier is empty,
        ``None``, or not recognised.
    """
    if not identifier or identifier == NO_LOADER:
        return None
    if not isinstance(identifier, str):
        loaderlog.debug("Ignoring non-string PXE loader %r.", identifier)
        return None
    httpboot_path = get_httpboot_path(identifier)
    if httpboot_path is None:
        kind = LOADER_FILENAMES.get(identifier)
    else:
        kind = HTTPBOOT_PATHS.get(httpboot_path)
    if kind is None:
        kind = LOADER_LABELS.get(identifier)
    if kind is None:
        loaderlog.debug("PXE loader %r is not recognised.", identifier)
    return kind


def as_loader_kind(value) -> Optional[LoaderKind]:
    """Coerce `value` to a `LoaderKind`.

    Accepts members of `LoaderKind` or their names (``"PXEGrub2"``), which
    is how template kinds are usually stored. Anything else is `None`.
    """
    if isinstance(value, LoaderKind):
        return value
    try:
        return LoaderKind(value)
    except (TypeError, ValueError):
        return None
