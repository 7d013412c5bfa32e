"""Tests for path resolution and exclusion matching."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from dotsync.discovery.paths import pattern_to_regex, resolve_path, should_exclude


class TestResolvePath:
    """Home expansion and absolutisation."""

    def test_home_relative(self, tmp_path: Path) -> None:
        assert resolve_path("~/.bashrc", home=tmp_path) == os.path.join(str(tmp_path), ".bashrc")

    def test_bare_tilde(self, tmp_path: Path) -> None:
        assert resolve_path("~", home=tmp_path) == str(tmp_path)

    def test_nested_home_relative(self, tmp_path: Path) -> None:
        resolved = resolve_path("~/.ssh/config", home=tmp_path)
        assert resolved == os.path.join(str(tmp_path), ".ssh", "config")

    def test_default_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        assert resolve_path("~/.vimrc") == os.path.join(str(tmp_path), ".vimrc")

    def test_relative_path_is_made_absolute(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert resolve_path("dots/.zshrc") == os.path.join(os.getcwd(), "dots", ".zshrc")

    def test_absolute_path_unchanged(self, tmp_path: Path) -> None:
        target = str(tmp_path / ".gitconfig")
        assert resolve_path(target) == target

    def test_missing_path_still_resolves(self) -> None:
        assert resolve_path("/nonexistent/file") == "/nonexistent/file"


class TestShouldExclude:
    """Glob-like exclusion with ``*`` as the only wildcard."""

    def test_no_patterns_never_excludes(self) -> None:
        assert should_exclude("/home/u/app.log") is False
        assert should_exclude("/home/u/app.log", []) is False

    def test_star_suffix(self) -> None:
        assert should_exclude("/home/u/app.log", ["*.log"])

    def test_substring_not_anchored(self) -> None:
        """A match anywhere in the path is enough."""
        assert should_exclude("/home/u/app.logs/x", ["*.log"])

    def test_literal_pattern(self) -> None:
        assert should_exclude("/home/u/node_modules/pkg", ["node_modules"])

    def test_patterns_are_ored(self) -> None:
        assert should_exclude("/tmp/a.cache", ["*.log", "*.cache"])

    def test_non_matching(self) -> None:
        assert not should_exclude("/home/u/.bashrc", ["*.log", "*.tmp"])

    def test_dot_is_literal(self) -> None:
        """'.' matches only a dot, not any character."""
        assert not should_exclude("/home/u/appxlog", ["*.log"])

    def test_regex_metacharacters_are_literal(self) -> None:
        assert should_exclude("/home/u/a+b(1).txt", ["a+b(1)"])
        assert not should_exclude("/home/u/aab1.txt", ["a+b(1)"])

    def test_pattern_regex_translation(self) -> None:
        assert pattern_to_regex("*.log").pattern == ".*\\.log"
