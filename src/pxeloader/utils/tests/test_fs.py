# Copyright 2012-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Tests for filesystem-related utilities."""

import os
import os.path

from pxeloader.utils import fs as fs_module
from pxeloader.utils.fs import atomic_write, touch
from pxetesting.factory import factory
from pxetesting.testcase import PXETestCase


class TestAtomicWrite(PXETestCase):
    """Test `atomic_write`."""

    def test_atomic_write_overwrites_dest_file(self):
        content = factory.make_string().encode("ascii")
        filename = self.make_file(contents=factory.make_string().encode())
        atomic_write(content, filename)
        with open(filename, "rb") as fd:
            self.assertEqual(content, fd.read())

    def test_atomic_write_writes_new_file(self):
        content = factory.make_string().encode("ascii")
        filename = os.path.join(self.make_dir(), factory.make_name("file"))
        atomic_write(content, filename)
        with open(filename, "rb") as fd:
            self.assertEqual(content, fd.read())

    def test_atomic_write_sets_permissions(self):
        filename = os.path.join(self.make_dir(), factory.make_name("file"))
        atomic_write(b"content", filename, mode=0o615)
        self.assertEqual(0o615, os.stat(filename).st_mode & 0o777)

    def test_atomic_write_does_not_leak_temp_file_on_failure(self):
        directory = self.make_dir()
        filename = os.path.join(directory, factory.make_name("file"))
        exception_type = factory.make_exception_type()
        self.patch(fs_module.os, "rename").side_effect = exception_type
        self.assertRaises(exception_type, atomic_write, b"content", filename)
        self.assertEqual([], os.listdir(directory))

    def test_atomic_write_rejects_text(self):
        filename = os.path.join(self.make_dir(), factory.make_name("file"))
        self.assertRaises(TypeError, atomic_write, "content", filename)
        self.assertFalse(os.path.exists(filename))

    def test_atomic_write_reports_temp_file_location_on_failure(self):
        directory = os.path.join(self.make_dir(), "missing")
        filename = os.path.join(directory, "file")
        error = self.assertRaises(OSError, atomic_write, b"content", filename)
        self.assertEqual(directory, os.path.dirname(error.filename))


class TestTouch(PXETestCase):
    def test_creates_file(self):
        filename = os.path.join(self.make_dir(), factory.make_name("file"))
        touch(filename)
        self.assertTrue(os.path.isfile(filename))

    def test_creates_file_with_mode(self):
        filename = os.path.join(self.make_dir(), factory.make_name("file"))
        touch(filename, mode=0o600)
        self.assertEqual(0o600, os.stat(filename).st_mode & 0o777)

    def test_leaves_existing_content(self):
        filename = self.make_file(contents=b"content")
        touch(filename)
        with open(filename, "rb") as fd:
            self.assertEqual(b"content", fd.read())
