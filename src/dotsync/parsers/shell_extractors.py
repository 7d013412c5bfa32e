"""Package-install and command extraction shared by the shell-style parsers.

Recognises ``apt install``, ``apt-get install``, ``snap install``,
``pip install`` (and ``pip3``) and ``npm install`` invocations. The
arguments after ``install`` are split on whitespace and unquoted. Flag
tokens (leading ``-``) and redirections are dropped. The argument list
ends at the first shell separator.
"""

from __future__ import annotations

import re

from dotsync.parsers.base import dedupe

_INSTALL_PATTERN = re.compile(
    r"(?<![\w-])(?:apt-get|apt|snap|pip3?|npm)\s+install\s+(.+)"
)

# Everything after one of these is a different command or a comment.
_SEPARATOR_PATTERN = re.compile(r"\s*(?:&&|\|\||[;|#)])")

# Bare command name -> package that provides it.
COMMAND_PACKAGES: dict[str, str] = {
    "git": "git",
    "docker": "docker.io",
    "node": "nodejs",
    "npm": "npm",
    "python": "python3",
    "pip": "python3-pip",
    "curl": "curl",
    "wget": "wget",
    "vim": "vim",
    "nano": "nano",
    "htop": "htop",
    "tree": "tree",
    "jq": "jq",
    "yq": "yq",
    "kubectl": "kubectl",
    "terraform": "terraform",
    "aws": "awscli",
}

_COMMAND_PATTERNS: dict[str, re.Pattern[str]] = {
    cmd: re.compile(rf"(?<![\w-]){re.escape(cmd)}(?![A-Za-z_-])")
    for cmd in COMMAND_PACKAGES
}

# Lines that only test whether a command exists.
_EXISTENCE_CHECK = re.compile(r"\bwhich\b|\bcommand\s+-v\b")


def is_comment(line: str) -> bool:
    return line.lstrip().startswith("#")


def extract_install_packages(line: str) -> list[str]:
    """Return the packages named by an install invocation on one line."""
    packages: list[str] = []
    for match in _INSTALL_PATTERN.finditer(line):
        args = _SEPARATOR_PATTERN.split(match.group(1), maxsplit=1)[0]
        for token in args.split():
            token = token.strip("'\"")
            if not token or token.startswith("-") or any(c in token for c in "<>"):
                continue
            packages.append(token)
    return packages


def extract_command_packages(line: str) -> list[str]:
    """Map bare command names on a line to their packages.

    Lines that merely check for a command (``which``, ``command -v``)
    contribute nothing.
    """
    if _EXISTENCE_CHECK.search(line):
        return []
    return [
        COMMAND_PACKAGES[cmd]
        for cmd, pattern in _COMMAND_PATTERNS.items()
        if pattern.search(line)
    ]


def scan_install_commands(content: str) -> list[str]:
    """Collect install-command packages from every non-comment line."""
    packages: list[str] = []
    for line in content.splitlines():
        if not is_comment(line):
            packages.extend(extract_install_packages(line))
    return dedupe(packages)
