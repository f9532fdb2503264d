# Copyright 2014-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Helpers for enum-like classes, i.e. classes of plain constants."""


def map_enum(enum_class):
    """Return `{NAME: value}` for the public attributes of `enum_class`."""
    return {
        name: value
        for name, value in vars(enum_class).items()
        if not name.startswith("_")
    }
