# Copyright 2014-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Singleton registries of named items."""

__all__ = ["Registry"]

from collections import defaultdict

# registry class -> {name: item}
_registry = defaultdict(dict)


class RegistryType(type):
    """Makes a `Registry` class behave as a mapping of its items."""

    def __contains__(cls, name):
        return name in _registry[cls]

    def __getitem__(cls, name):
        return _registry[cls][name]

    def __iter__(cls):
        """Iterate `(name, item)` pairs."""
        return iter(_registry[cls].items())

    def get_item(cls, name, default=None):
        return _registry[cls].get(name, default)

    def register_item(cls, name, item):
        _registry[cls][name] = item

    def unregister_item(cls, name):
        _registry[cls].pop(name, None)


class Registry(metaclass=RegistryType):
    """Subclass this for each kind of registry; each has its own items."""
