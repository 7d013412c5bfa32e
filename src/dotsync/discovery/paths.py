"""Path resolution and exclusion matching for the scanner."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path

HOME_MARKER = "~"


def resolve_path(path: str, home: Path | None = None) -> str:
    """Expand a home-relative path, or make a path absolute.

    ``~/.bashrc`` becomes ``<home>/.bashrc``. Anything else is resolved
    against the current working directory. Resolution never touches the
    filesystem beyond reading the working directory, and never fails.

    Args:
        path: The path as given by the caller.
        home: Override the home directory (for testing).
    """
    if path.startswith(HOME_MARKER):
        home_dir = home if home is not None else Path.home()
        remainder = path[len(HOME_MARKER):].lstrip("/" + os.sep)
        return os.path.join(os.fspath(home_dir), remainder) if remainder else os.fspath(home_dir)
    return os.path.abspath(path)


@lru_cache(maxsize=256)
def pattern_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a glob-like pattern where only ``*`` is special.

    ``*`` becomes ``.*``; every other character matches literally, so
    ``.`` and ``(`` are not regex syntax here as they would be in a raw regex.
    """
    return re.compile(".*".join(re.escape(part) for part in pattern.split("*")))


def should_exclude(path: str, patterns: Iterable[str] | None = None) -> bool:
    """Return True when any pattern matches somewhere in ``path``.

    Matching is a substring search, not an anchored full match, so
    ``*.log`` excludes ``/home/u/.bashrc.log`` and also
    ``/home/u/app.logs/x``.
    """
    if not patterns:
        return False
    return any(pattern_to_regex(p).search(path) for p in patterns)
