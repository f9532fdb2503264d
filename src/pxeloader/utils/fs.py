# Copyright 2012-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Filesystem helpers."""

import os
import tempfile

# Owner read-write, group read.
default_file_mode = 0o640


def touch(path, mode=default_file_mode):
    """Create `path` if it does not exist; never truncate it."""
    os.close(os.open(path, os.O_CREAT | os.O_APPEND, mode))


def _write_temp_file(content, filename):
    """Write `content` to a new temporary file beside `filename`.

    :return: The temporary file's path.
    """
    directory, basename = os.path.split(filename)
    prefix, suffix = ".%s." % basename, ".tmp"
    try:
        fd, temp_file = tempfile.mkstemp(
            dir=directory, prefix=prefix, suffix=suffix
        )
    except OSError as error:
        if error.filename is None:
            error.filename = os.path.join(
                directory, prefix + "XXXXXX" + suffix
            )
        raise
    with os.fdopen(fd, "wb") as stream:
        stream.write(content)
        stream.flush()
        os.fsync(stream)
    return temp_file


def atomic_write(content, filename, mode=0o600):
    """Replace `filename` with `content` in one step.

    The new content goes to a temporary file in the same directory, which
    is then renamed over `filename`. Readers see either the old or the new
    file, never a partial one.

    :param content: `bytes` to write.
    :param mode: Permissions for the new file.
    """
    if not isinstance(content, bytes):
        raise TypeError(f"Content must be bytes, got: {content!r}")
    temp_file = _write_temp_file(content, filename)
    try:
        os.chmod(temp_file, mode)
        os.rename(temp_file, filename)
    finally:
        if os.path.isfile(temp_file):
            os.remove(temp_file)
