# Copyright 2014-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Loggers for the PXE loader engine."""

import logging


class LoaderLogger(logging.getLoggerClass()):
    """A Logger class that doesn't allow you to call exception()."""

    def exception(self, *args, **kwargs):
        raise NotImplementedError(
            "Don't log exceptions to the loader log; let them propagate "
            "to the calling application instead"
        )


def get_loader_logger(tag=None):
    """Return a logger for the PXE loader engine.

    :param tag: A string that will be used to name the logger with the
        Python logging module, in the form "pxeloader.<tag>". If None, the
        logger will simply be named "pxeloader".
    """
    if tag is None:
        logger_name = "pxeloader"
    else:
        logger_name = "pxeloader.%s" % tag

    loaderlog = logging.getLogger(logger_name)
    # Rebrand whatever `logging` handed back so that every logger obtained
    # here refuses `exception()`, while leaving all other loggers alone.
    loaderlog.__class__ = LoaderLogger

    return loaderlog
