# Copyright 2015-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""`formencode` validators for loader configuration options."""

import formencode
import formencode.validators


class UnicodeString(formencode.FancyValidator):
    """Accept `str` values only.

    formencode's own `UnicodeString` encodes and decodes on the way
    through; configuration values only need a type check.
    """

    accept_python = False
    not_empty = None
    messages = {
        "badType": (
            "The input must be a Unicode string (not a %(type)s: %(value)r)"
        ),
    }

    def _check_type(self, value, state=None):
        if isinstance(value, str):
            return
        message = self.message(
            "badType", state, value=value, type=type(value).__qualname__
        )
        raise formencode.Invalid(message, value, state)

    _validate_python = _check_type
    _validate_other = _check_type

    def empty_value(self, value):
        return ""


class OneWayStringBool(formencode.validators.StringBool):
    """Parse "yes", "off", "true" and friends, but store a real `bool`."""

    def from_python(self, value):
        return value


class RegisteredName(formencode.FancyValidator):
    """Accept only names registered in `registry`, a `Registry` subclass.

    The registry is consulted on every call, so late registrations count.
    """

    accept_python = False
    registry = None
    messages = {"notRegistered": "%(value)r is not one of: %(names)s"}

    def _validate_other(self, value, state=None):
        names = sorted(name for name, _ in self.registry)
        if value in names:
            return
        message = self.message(
            "notRegistered", state, value=value, names=", ".join(names)
        )
        raise formencode.Invalid(message, value, state)
