# Copyright 2012-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Random test data."""

__all__ = ["factory"]

from enum import Enum
from itertools import count, islice, repeat
import os.path
import random
import string

EMPTY_SET = frozenset()


class Factory:

    random_letters = map(
        random.choice, repeat(string.ascii_letters + string.digits)
    )

    random_letters_with_spaces = map(
        random.choice, repeat(string.ascii_letters + string.digits + " ")
    )

    exception_type_names = ("TestException#%d" % i for i in count(1))

    def make_string(self, size=10, spaces=False, prefix=""):
        """Return `prefix` followed by `size` random letters and digits."""
        letters = (
            self.random_letters_with_spaces if spaces else self.random_letters
        )
        return prefix + "".join(islice(letters, size))

    def make_name(self, prefix=None, sep="-", size=6):
        """Return a random name such as ``template-x8Jq2a``.

        A `prefix` makes failing tests easier to read; `size` is the length
        of the random part.
        """
        random_part = self.make_string(size=size)
        return random_part if prefix is None else prefix + sep + random_part

    def make_hostname(self, prefix="host", *args, **kwargs):
        """Return a random, lower-case host name.

        Lower case because `urllib.parse` lower-cases host names.
        """
        return self.make_name(prefix, *args, **kwargs).lower()

    def make_file(self, location, name=None, contents=None):
        """Write a file in the directory `location` and return its path.

        Test cases should prefer `PXETestCase.make_file`, which cleans up.

        :param name: File name; random if omitted.
        :param contents: `bytes` to write; random ASCII if omitted.
        """
        if name is None:
            name = self.make_string()
        if contents is None:
            contents = self.make_string().encode("ascii")
        path = os.path.join(location, name)
        with open(path, "wb") as f:
            f.write(contents)
        return path

    def make_exception_type(self, bases=(Exception,), **namespace):
        return type(next(self.exception_type_names), bases, namespace)

    def pick_bool(self):
        return random.choice((True, False))

    def pick_enum(self, enum, *, but_not=EMPTY_SET):
        """Return a random member of `enum`, but not one of `but_not`.

        `enum` is an `Enum` subclass, or an enum-like class of constants
        such as `EFI_PRECISION`, in which case a constant is returned.
        """
        if issubclass(enum, Enum):
            values = list(enum)
        else:
            values = [
                value
                for name, value in vars(enum).items()
                if not name.startswith("_")
            ]
        return random.choice(
            [value for value in values if value not in but_not]
        )

    def pick_choice(self, choices, but_not=()):
        """Return the id of a random `(id, label)` pair in `choices`.

        :param but_not: Ids to leave out.
        """
        ids = [choice[0] for choice in choices if choice[0] not in but_not]
        return random.choice(ids)


# Create factory singleton.
factory = Factory()
