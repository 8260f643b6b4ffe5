"""Root conftest: shared fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp location so user defaults never leak in."""
    path = tmp_path / ".sqlinspector" / "config.toml"
    monkeypatch.setattr("sqlinspector.config._CONFIG_FILE", path)
    return path
