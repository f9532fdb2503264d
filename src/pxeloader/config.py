# Copyright 2012-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Configuration for the PXE loader engine.

Options are attributes of `LoaderConfiguration`, each one a
`ConfigurationOption` with a `formencode` validator and a default. The
values live in a YAML file: ``$PXELOADER_CONFIG`` if set, otherwise
``loaders.conf`` under ``$PXELOADER_ROOT`` (``/etc/pxeloader``).

Read the configuration::

  with LoaderConfiguration.open() as config:
      print(config.loader_preference, config.efi_precision)

Code that only looks, such as the cached accessors at the bottom of
this module, uses `LoaderConfiguration.read`, which creates nothing.

Change it; the file is rewritten when the block exits cleanly::

  with LoaderConfiguration.open_for_update() as config:
      config.loader_preference = "supported-order"

Tests should use `pxeloader.testing.config.LoaderConfigurationFixture`.
"""

from contextlib import contextmanager
from functools import lru_cache
import os
from os import environ

from formencode.api import is_validator, NoDefault
from formencode.validators import OneOf
import yaml

from pxeloader.enum import EFI_PRECISION, EFI_PRECISION_CHOICES
from pxeloader.logger import get_loader_logger
from pxeloader.preference import PREFERENCE_POLICY, PreferencePolicyRegistry
from pxeloader.utils.config import (
    OneWayStringBool,
    RegisteredName,
    UnicodeString,
)
from pxeloader.utils.fs import atomic_write, default_file_mode, touch

loaderlog = get_loader_logger("config")


class ConfigurationImmutable(Exception):
    """A read-only configuration was asked to change."""


class ConfigurationFile:
    """A dict-like view of a YAML configuration file.

    Nothing guards against concurrent writers; keep it open briefly.
    """

    def __init__(self, path, *, mutable=False):
        super().__init__()
        self.path = path
        self.mutable = mutable
        self.config = {}
        self.dirty = False

    def __str__(self):
        return f"{type(self).__qualname__}({self.path!r})"

    def __iter__(self):
        return iter(self.config)

    def __getitem__(self, name):
        return self.config[name]

    def __setitem__(self, name, data):
        self._check_mutable(name)
        self.config[name] = data
        self.dirty = True

    def __delitem__(self, name):
        self._check_mutable(name)
        if name in self.config:
            del self.config[name]
            self.dirty = True

    def _check_mutable(self, name):
        if not self.mutable:
            raise ConfigurationImmutable(f"{self}: Cannot set `{name}'.")

    def load(self):
        """Replace the in-memory configuration with the file's."""
        with open(self.path, "rb") as fd:
            loaded = yaml.safe_load(fd)
        if loaded is None:
            loaded = {}
        elif not isinstance(loaded, dict):
            raise ValueError(
                "Configuration in %s is not a mapping: %r"
                % (self.path, loaded)
            )
        self.config = loaded
        self.dirty = False

    def save(self):
        """Write the configuration out, keeping the file's permissions."""
        try:
            mode = os.stat(self.path).st_mode
        except OSError:
            mode = default_file_mode
        content = yaml.safe_dump(
            self.config, default_flow_style=False, encoding="utf-8"
        )
        atomic_write(content, self.path, mode=mode)
        self.dirty = False

    @classmethod
    @contextmanager
    def open(cls, path: str):
        """Open `path` read-only, creating it if need be."""
        touch(path)
        configfile = cls(path)
        configfile.load()
        yield configfile

    @classmethod
    @contextmanager
    def open_for_update(cls, path: str):
        """Open `path` for changes, saved if the block exits cleanly."""
        touch(path)
        configfile = cls(path, mutable=True)
        configfile.load()
        yield configfile
        if configfile.dirty:
            configfile.save()
            loaderlog.info("Saved loader configuration to %s.", path)


def get_config_root():
    """Return the directory holding the loader configuration."""
    return environ.get("PXELOADER_ROOT", "/etc/pxeloader")


class ConfigurationMeta(type):
    """Metaclass for configuration classes.

    :cvar envvar: Environment variable naming the configuration file.
        `DEFAULT_FILENAME` reads and writes it, so sub-processes see the
        same file.
    :cvar default: File name, under `get_config_root`, used when `envvar`
        is unset or empty.
    :cvar backend: Store class; its ``open`` and ``open_for_update``
        class methods return context managers yielding dict-like objects.
        Instances are built from a path and filled by ``load``.
    """

    envvar = None
    default = None
    backend = None

    @property
    def DEFAULT_FILENAME(cls):
        """The configuration file to open when none is given."""
        filename = environ.get(cls.envvar)
        if filename:
            return filename
        return os.path.join(get_config_root(), cls.default)

    @DEFAULT_FILENAME.setter
    def DEFAULT_FILENAME(cls, filename):
        environ[cls.envvar] = filename

    @DEFAULT_FILENAME.deleter
    def DEFAULT_FILENAME(cls):
        environ.pop(cls.envvar, None)


class Configuration:
    """Holds configuration options, backed by a dict-like `store`.

    Only names declared on the class can be assigned; see
    `ConfigurationOption`.
    """

    DEFAULT_FILENAME = None  # Provided by `ConfigurationMeta`.

    def __init__(self, store):
        super().__init__()
        # Bypass our own __setattr__.
        object.__setattr__(self, "store", store)

    def __setattr__(self, name, value):
        if not hasattr(type(self), name):
            raise AttributeError(
                "%r object has no attribute %r" % (type(self).__name__, name)
            )
        super().__setattr__(name, value)

    @classmethod
    def _prepare(cls, filepath):
        if filepath is None:
            filepath = cls.DEFAULT_FILENAME
        directory = os.path.dirname(filepath)
        if directory != "":
            os.makedirs(directory, exist_ok=True)
        return filepath

    @classmethod
    def read(cls, filepath=None):
        """Return the configuration in `filepath` without changing the disk.

        Unlike `open`, a missing file is not created; every option then
        has its default. The result cannot be changed.
        """
        if filepath is None:
            filepath = cls.DEFAULT_FILENAME
        store = cls.backend(filepath)
        if os.path.exists(filepath):
            store.load()
        return cls(store)

    @classmethod
    @contextmanager
    def open(cls, filepath=None):
        with cls.backend.open(cls._prepare(filepath)) as store:
            yield cls(store)

    @classmethod
    @contextmanager
    def open_for_update(cls, filepath=None):
        with cls.backend.open_for_update(cls._prepare(filepath)) as store:
            yield cls(store)


class ConfigurationOption:
    """Descriptor declaring one option of a `Configuration`.

    Values are validated on the way in. Values already in the store are
    trusted and only passed through `from_python`.

    :param name: Key under which the value is stored.
    :param doc: Description of the option. Required.
    :param validator: A `formencode` validator with an ``if_missing``
        default.
    """

    def __init__(self, name, doc, validator):
        super().__init__()
        assert isinstance(name, str)
        assert isinstance(doc, str)
        assert is_validator(validator)
        assert validator.if_missing is not NoDefault
        self.name = name
        self.validator = validator
        self.__doc__ = doc

    def __get__(self, obj, type=None):
        if obj is None:
            return self
        try:
            value = obj.store[self.name]
        except KeyError:
            return self.validator.if_missing
        return self.validator.from_python(value)

    def __set__(self, obj, value):
        obj.store[self.name] = self.validator.to_python(value)

    def __delete__(self, obj):
        del obj.store[self.name]


class LoaderConfigurationMeta(ConfigurationMeta):
    envvar = "PXELOADER_CONFIG"
    default = "loaders.conf"
    backend = ConfigurationFile


class LoaderConfiguration(Configuration, metaclass=LoaderConfigurationMeta):
    """Local configuration for the PXE loader engine."""

    loader_preference = ConfigurationOption(
        "loader_preference",
        "The policy used to recommend a PXE loader when the default "
        "templates of an operating system back several loader kinds.",
        RegisteredName(
            registry=PreferencePolicyRegistry,
            if_missing=PREFERENCE_POLICY.PRECEDENCE,
        ),
    )

    # Catalog options.
    efi_precision = ConfigurationOption(
        "efi_precision",
        "The architecture suffix of EFI loader binaries, e.g. x64.",
        OneOf(
            [value for value, _ in EFI_PRECISION_CHOICES],
            if_missing=EFI_PRECISION.X64,
        ),
    )
    httpboot_host = ConfigurationOption(
        "httpboot_host",
        "The host name used in HTTP boot loader URLs.",
        UnicodeString(if_missing="httpboot_host"),
    )

    debug = ConfigurationOption(
        "debug",
        "Log everything, including debug messages.",
        OneWayStringBool(if_missing=False),
    )


@lru_cache(maxsize=1)
def configured_loader_preference():
    """Return and cache the name of the configured preference policy."""
    return LoaderConfiguration.read().loader_preference


@lru_cache(maxsize=1)
def debug_enabled():
    """Return and cache whether debug has been enabled."""
    return LoaderConfiguration.read().debug


@lru_cache(maxsize=1)
def configured_catalog_options():
    """Return and cache the configured `(efi_precision, httpboot_host)`."""
    config = LoaderConfiguration.read()
    return config.efi_precision, config.httpboot_host
