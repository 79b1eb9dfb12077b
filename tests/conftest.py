import os

import pytest

from codefence.config import FenceSettings, reset_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """No user config, no CODEFENCE_* variables, no cached settings."""
    for name in list(os.environ):
        if name.startswith("CODEFENCE_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("HOME", str(tmp_path))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    return FenceSettings()
