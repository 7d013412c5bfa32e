"""Shared fixtures for dotsync tests."""

import pathlib

import pytest


@pytest.fixture
def fake_home(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create an empty directory standing in for the user's home."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, fake_home: pathlib.Path) -> pathlib.Path:
    """Point HOME at the fake home and clear any settings override."""
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.delenv("DOTSYNC_CONFIG", raising=False)
    return fake_home
