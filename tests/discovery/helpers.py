"""Shared test helpers for building fake home directories.

Each helper writes a small but realistic set of dotfiles under a given
directory. They are used by the scanner, CLI and integration tests.
"""

from __future__ import annotations

from pathlib import Path

from dotsync.discovery.scanner import DotfileScanner

BASHRC = (
    "# ~/.bashrc\n"
    "export PATH=$PATH:/usr/local/bin\n"
    'export EDITOR="vim"\n'
    "alias ll='ls -la'\n"
    "source ~/.bash_aliases\n"
)

VIMRC = (
    '" basic settings\n'
    "set number\n"
    "set tabstop=4\n"
    "syntax on\n"
)

GITCONFIG = (
    "[user]\n"
    "    name = Jane Doe\n"
    "    email = jane@example.com\n"
    "[core]\n"
    "    editor = nvim\n"
    "[alias]\n"
    "    st = status\n"
    "    lg = !lazygit\n"
)


def write(path: Path, content: str) -> Path:
    """Write a file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def create_shell_home(home: Path) -> None:
    """A home with a .bashrc and a .vimrc."""
    write(home / ".bashrc", BASHRC)
    write(home / ".vimrc", VIMRC)


def create_full_home(home: Path) -> None:
    """A home with shell, vim, git, ssh and tmux configuration."""
    create_shell_home(home)
    write(home / ".gitconfig", GITCONFIG)
    write(home / ".ssh" / "config", "Host example\n    HostName example.com\n")
    write(home / ".tmux.conf", "set -g mouse on\n")
    write(home / "notes.txt", "not a config\n")


class CountingScanner(DotfileScanner):
    """DotfileScanner that records every file it reads."""

    def __init__(self, home: Path | None = None) -> None:
        super().__init__(home=home)
        self.reads: list[str] = []

    def _read_text(self, path: str) -> str:
        self.reads.append(path)
        return super()._read_text(path)
