# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Hosts, operating systems and templates, as seen by the loader engine.

These are read-only snapshots supplied by the surrounding console; the
engine never persists them.
"""

__all__ = [
    "DEFAULT_TEMPLATE_KINDS",
    "Host",
    "OperatingSystem",
    "ProvisioningTemplate",
    "PxeLoaderSupport",
]

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from pxeloader.enum import FirmwareFamily, LoaderKind
from pxeloader.firmware import classify_firmware, NO_LOADER
from pxeloader.kinds import (
    all_loaders,
    all_loaders_map,
    as_loader_kind,
    catalog_firmware,
    resolve_loader_kind,
)
from pxeloader.preference import (
    get_preference_policy,
    select_preferred_loader,
)

# The loader kinds a new operating system supports, highest priority first.
DEFAULT_TEMPLATE_KINDS = (
    LoaderKind.PXELinux,
    LoaderKind.PXEGrub,
    LoaderKind.PXEGrub2,
)


class PxeLoaderSupport:
    """Mix-in giving access to PXE loader resolution and preference.

    Classes using this provide `template_kinds`, the loader kinds they
    support in priority order, and `os_default_templates`, the provisioning
    templates nominated as their defaults. `preference_policy` may be set to
    a preference policy, or the name of one, to break ties between kinds.
    """

    template_kinds: Sequence = DEFAULT_TEMPLATE_KINDS
    os_default_templates: Sequence = ()
    preference_policy: Any = None

    @staticmethod
    def firmware_type(pxe_loader) -> FirmwareFamily:
        """Return the firmware family of the loader label `pxe_loader`."""
        return classify_firmware(pxe_loader)

    @staticmethod
    def all_loaders() -> list:
        """Return the labels of every loader in the catalog."""
        return all_loaders()

    @staticmethod
    def all_loaders_map(precision=None, httpboot_host=None) -> dict:
        """Return the loader catalog as a `label: filename` dict.

        Unspecified arguments are taken from `LoaderConfiguration`.
        """
        if precision is None or httpboot_host is None:
            # Avoid circular imports.
            from pxeloader.config import configured_catalog_options

            configured_precision, configured_host = (
                configured_catalog_options()
            )
            if precision is None:
                precision = configured_precision
            if httpboot_host is None:
                httpboot_host = configured_host
        return all_loaders_map(precision, httpboot_host)

    def pxe_loader_kind(self, host) -> Optional[LoaderKind]:
        """Return the `LoaderKind` of `host`'s PXE loader, if any."""
        return resolve_loader_kind(getattr(host, "pxe_loader", None))

    def preferred_loader(self, policy=None) -> Optional[str]:
        """Return the label of the loader recommended for new hosts.

        :param policy: Overrides `preference_policy` for this call. When
            neither is set, the configured policy is used.
        """
        if policy is None:
            policy = self.preference_policy
        if policy is None:
            policy = get_preference_policy()
        return select_preferred_loader(
            self.template_kinds, self.os_default_templates, policy=policy
        )


@dataclass
class ProvisioningTemplate:
    """A provisioning template.

    `template_kind` is a `LoaderKind` (or its name) for PXE loader
    templates, and something else, or `None`, for any other template.
    """

    name: str
    template_kind: Any = None

    @property
    def loader_kind(self) -> Optional[LoaderKind]:
        return as_loader_kind(self.template_kind)


@dataclass
class OperatingSystem(PxeLoaderSupport):
    """An operating system and its default provisioning templates."""

    name: str
    template_kinds: Sequence = DEFAULT_TEMPLATE_KINDS
    os_default_templates: Sequence = field(default_factory=list)
    preference_policy: Any = None


@dataclass
class Host:
    """A host, with the PXE loader recorded for it.

    `pxe_loader` is free-form: empty (no choice recorded), ``None`` (no
    loader wanted), a loader filename or URL, or a loader label.
    """

    hostname: str
    pxe_loader: str = ""
    operatingsystem: Optional[OperatingSystem] = None

    @property
    def pxe_loader_kind(self) -> Optional[LoaderKind]:
        return resolve_loader_kind(self.pxe_loader)

    @property
    def effective_pxe_loader(self) -> str:
        """The recorded loader, or else the one the OS recommends.

        Falls back to ``None`` when nothing is recorded and the operating
        system, if any, cannot recommend a loader.
        """
        if self.pxe_loader:
            return self.pxe_loader
        elif self.operatingsystem is not None:
            preferred = self.operatingsystem.preferred_loader()
            if preferred is not None:
                return preferred
        return NO_LOADER

    @property
    def firmware_type(self) -> FirmwareFamily:
        """The firmware that boots `effective_pxe_loader`.

        This expects a loader label; filenames classify as BIOS.
        """
        return catalog_firmware(self.effective_pxe_loader)

    def pxe_loader_filename(self, precision=None, httpboot_host=None):
        """Return the filename to hand to this host over DHCP.

        :return: The filename or URL, ``""`` when the host boots without a
            PXE loader, or `None` when the loader cannot be downloaded or
            is not recognised.
        """
        loader = self.effective_pxe_loader
        loaders = PxeLoaderSupport.all_loaders_map(precision, httpboot_host)
        if loader in loaders:
            return loaders[loader]
        elif resolve_loader_kind(loader) is not None:
            # Already a filename or URL.
            return loader
        else:
            return None
