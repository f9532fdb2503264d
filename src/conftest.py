# Copyright 2023-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

import pytest

from pxeloader.testing.config import clear_configuration_caches


@pytest.fixture(autouse=True)
def setup_testenv(monkeypatch, tmpdir):
    config_root = tmpdir.join("pxeloader_root")
    config_root.mkdir()
    monkeypatch.setenv("PXELOADER_ROOT", str(config_root))
    monkeypatch.delenv("PXELOADER_CONFIG", raising=False)
    yield


@pytest.fixture(autouse=True)
def clean_globals():
    clear_configuration_caches()
    yield
    clear_configuration_caches()
