# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Choose the preferred PXE loader for an operating system.

An operating system declares, in priority order, the loader kinds it
supports. Its default provisioning templates determine which of those
kinds can actually be used. When more than one survives, a *preference
policy* breaks the tie. Policies are plain callables taking the surviving
kinds, in the operating system's order, and returning one of them (or
`None`). They are registered by name in `PreferencePolicyRegistry` so that
configuration can select one.
"""

__all__ = [
    "by_precedence",
    "by_supported_order",
    "get_preference_policy",
    "LOADER_PRECEDENCE",
    "PREFERENCE_POLICY",
    "PreferencePolicyRegistry",
    "select_preferred_loader",
    "UnknownPreferencePolicy",
]

from typing import Callable, Iterable, Optional, Sequence

from pxeloader.enum import LoaderKind
from pxeloader.kinds import as_loader_kind, render_label
from pxeloader.logger import get_loader_logger
from pxeloader.utils.registry import Registry

loaderlog = get_loader_logger("preference")


PreferencePolicy = Callable[[Sequence[LoaderKind]], Optional[LoaderKind]]


class PREFERENCE_POLICY:
    """Names of the registered preference policies."""

    PRECEDENCE = "precedence"
    SUPPORTED_ORDER = "supported-order"


# Kinds in the order a loader is recommended when templates for several of
# them are available. Note that PXELinux wins over PXEGrub.
LOADER_PRECEDENCE = (
    LoaderKind.PXEGrub2,
    LoaderKind.PXELinux,
    LoaderKind.PXEGrub,
    LoaderKind.iPXE,
)


class UnknownPreferencePolicy(KeyError):
    """No preference policy is registered under the given name."""


class PreferencePolicyRegistry(Registry):
    """Registry for loader preference policies."""


def by_precedence(candidates, precedence=LOADER_PRECEDENCE):
    """Choose the first kind in `precedence` that is a candidate."""
    for kind in precedence:
        if kind in candidates:
            return kind
    return None


def by_supported_order(candidates):
    """Choose the candidate the operating system lists first."""
    return next(iter(candidates), None)


def get_preference_policy(name=None) -> PreferencePolicy:
    """Return the preference policy registered as `name`.

    :param name: A `PREFERENCE_POLICY` name. If `None`, the policy named by
        the ``loader_preference`` configuration option is returned.
    :raise UnknownPreferencePolicy: if `name` is not registered.
    """
    if name is None:
        # Avoid circular imports.
        from pxeloader.config import configured_loader_preference

        name = configured_loader_preference()
    policy = PreferencePolicyRegistry.get_item(name)
    if policy is None:
        raise UnknownPreferencePolicy(name)
    return policy


def _available_kinds(default_templates: Iterable) -> set:
    kinds = set()
    for template in default_templates:
        kind = as_loader_kind(getattr(template, "template_kind", None))
        if kind is not None:
            kinds.add(kind)
    return kinds


def select_preferred_loader(
    supported_kinds: Iterable,
    default_templates: Iterable,
    policy=None,
) -> Optional[str]:
    """Recommend a PXE loader label for an operating system.

    :param supported_kinds: The loader kinds the operating system supports,
        highest priority first. Kind names are accepted too.
    :param default_templates: The operating system's default provisioning
        templates. Each has a `template_kind`.
    :param policy: A preference policy, or the name of a registered one.
        Defaults to `by_precedence`.
    :return: A loader label such as ``Grub2 UEFI``, or `None` if no
        supported kind has a default template.
    """
    supported = []
    for value in supported_kinds:
        kind = as_loader_kind(value)
        if kind is not None and kind not in supported:
            supported.append(kind)
    available = _available_kinds(default_templates)
    if len(supported) == 0 or len(available) == 0:
        return None

    candidates = tuple(kind for kind in supported if kind in available)
    if len(candidates) == 0:
        return None

    if policy is None:
        policy = by_precedence
    elif isinstance(policy, str):
        policy = get_preference_policy(policy)
    chosen = policy(candidates)
    if chosen is None:
        return None
    elif chosen not in candidates:
        loaderlog.warning(
            "Preference policy %r chose %r which is not one of %s; "
            "ignoring it.",
            policy,
            chosen,
            ", ".join(kind.value for kind in candidates),
        )
        return None
    else:
        return render_label(chosen)


PreferencePolicyRegistry.register_item(
    PREFERENCE_POLICY.PRECEDENCE, by_precedence
)
PreferencePolicyRegistry.register_item(
    PREFERENCE_POLICY.SUPPORTED_ORDER, by_supported_order
)
