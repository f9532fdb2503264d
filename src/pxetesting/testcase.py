# Copyright 2012-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Base test case for the PXE loader engine."""

__all__ = ["PXETestCase"]

from collections.abc import Mapping
from functools import wraps
from importlib import import_module
import os
import random
from typing import Any
from unittest import mock
from unittest.mock import MagicMock

import testtools
from testtools.content import text_content

from pxetesting.factory import factory
from pxetesting.fixtures import TempDirectory
from pxetesting.scenarios import WithScenarios

# Assertions taken from `unittest` rather than testtools, for their
# clearer failure messages.
UNITTEST_ASSERTIONS = (
    "assertEqual",
    "assertNotEqual",
    "assertIn",
    "assertNotIn",
    "assertIs",
    "assertIsNot",
    "assertIsNone",
    "assertIsNotNone",
)


class PXETestCase(WithScenarios, testtools.TestCase):
    """`testtools.TestCase` with scenarios and a few conveniences.

    Set ``PXELOADER_RAND_SEED`` in the environment to replay a run's
    random data.
    """

    maxDiff = testtools.TestCase.maxDiff * 3

    # (name, {attribute: value, ...}) pairs; see testscenarios.
    scenarios: tuple[Any] = ()

    def setUp(self):
        unittest_case = super(testtools.TestCase, self)
        for name in UNITTEST_ASSERTIONS:
            setattr(self, name, getattr(unittest_case, name))

        seed = os.environ.get("PXELOADER_RAND_SEED")
        random.seed(seed)
        if seed is not None:
            self.addDetail(
                "Seeds", text_content(f"PXELOADER_RAND_SEED={seed}")
            )
        super().setUp()

    def make_dir(self):
        """Return a new temporary directory, removed after the test."""
        return self.useFixture(TempDirectory()).path

    def make_file(self, name=None, contents=None):
        """Write a file into a new temporary directory; return its path.

        See `Factory.make_file` for `name` and `contents`.
        """
        return factory.make_file(self.make_dir(), name, contents)

    @wraps(testtools.TestCase.assertSequenceEqual)
    def assertSequenceEqual(self, seq1, seq2, msg=None, seq_type=None):
        # Mappings iterate their keys, which hides value differences.
        if seq_type is None:
            for seq in (seq1, seq2):
                self.assertNotIsInstance(
                    seq,
                    Mapping,
                    "Mappings cannot be compared with assertSequenceEqual",
                )
        return super().assertSequenceEqual(seq1, seq2, msg, seq_type)

    def patch(
        self, obj, attribute=None, value=mock.sentinel.unset
    ) -> MagicMock:
        """Replace `obj.attribute` with `value` until the test ends.

        Without `value` a `MagicMock` named `attribute` is patched in. When
        `attribute` is omitted, `obj` is patched in its own module.

        :return: The patched-in object.
        """
        if attribute is None:
            attribute = obj.__name__
            obj = import_module(obj.__module__)
        if value is mock.sentinel.unset:
            value = MagicMock(__name__=attribute)
        super().patch(obj, attribute, value)
        return value
