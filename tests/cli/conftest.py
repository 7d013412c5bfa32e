"""Shared fixtures for CLI tests.

Every CLI test runs with HOME pointed at an empty temporary directory so
that no real settings file or dotfile leaks into the results.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.discovery.helpers import BASHRC, GITCONFIG, create_shell_home, write


@pytest.fixture(autouse=True)
def _isolate(isolated_env: Path) -> Path:
    return isolated_env


@pytest.fixture
def shell_dir(tmp_path: Path) -> Path:
    """A directory holding a .bashrc and a .vimrc."""
    target = tmp_path / "dots"
    target.mkdir()
    create_shell_home(target)
    return target


@pytest.fixture
def empty_dir(tmp_path: Path) -> Path:
    target = tmp_path / "empty"
    target.mkdir()
    return target


@pytest.fixture
def bashrc_file(tmp_path: Path) -> Path:
    return write(tmp_path / "single" / ".bashrc", BASHRC)


@pytest.fixture
def gitconfig_file(tmp_path: Path) -> Path:
    return write(tmp_path / "single" / ".gitconfig", GITCONFIG)
