"""DotSync exception hierarchy.

All public exceptions inherit from DotsyncError, giving callers a single
base class to catch when they want to handle any DotSync-specific failure
without swallowing unrelated errors.

Expected scan failures (missing file, permission denied, oversized file)
never leave ``DotfileScanner.scan()`` as exceptions: ``FileScanError`` is
caught at the orchestrator boundary and recorded as a ``ScanError``.
"""

from __future__ import annotations

import errno
from enum import Enum


class ErrorCategory(str, Enum):
    """The flat taxonomy of scan failures."""

    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    PARSE_ERROR = "parse_error"
    SIZE_LIMIT = "size_limit"
    UNKNOWN = "unknown"


_PERMISSION_ERRNOS = {errno.EACCES, errno.EPERM}
_NOT_FOUND_ERRNOS = {errno.ENOENT, errno.ENOTDIR}

# Message fragments, checked in order, for errors without a usable errno.
_MESSAGE_FRAGMENTS: tuple[tuple[tuple[str, ...], ErrorCategory], ...] = (
    (("permission denied", "eacces"), ErrorCategory.PERMISSION),
    (("no such file", "enoent"), ErrorCategory.NOT_FOUND),
    (("too large",), ErrorCategory.SIZE_LIMIT),
    (("parse", "syntax"), ErrorCategory.PARSE_ERROR),
)


class DotsyncError(Exception):
    """Base exception for all DotSync errors."""


class FileScanError(DotsyncError):
    """Raised when a single requested path cannot produce a record.

    Attributes:
        path: The offending (resolved) path.
        category: One of the five ``ErrorCategory`` values.
        name: The name of the underlying error (e.g. ``FileNotFoundError``).
    """

    def __init__(
        self,
        path: str,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        name: str = "ScanError",
    ) -> None:
        super().__init__(message)
        self.path = path
        self.message = message
        self.category = category
        self.name = name

    @classmethod
    def from_exception(cls, path: str, exc: BaseException) -> FileScanError:
        """Wrap an arbitrary exception, categorising it."""
        return cls(
            path=path,
            message=str(exc) or type(exc).__name__,
            category=categorize_error(exc),
            name=type(exc).__name__,
        )


class ScanAbortedError(DotsyncError):
    """Raised when a whole scan cannot produce a result.

    This signals a defect in the scanner itself, never a problem with
    the user's files.
    """


class ConfigParseError(DotsyncError):
    """Raised when a format parser fails internally on some content.

    Content that parses but is judged wrong ends up in the
    ``ValidationResult`` instead.
    """

    def __init__(self, message: str, kind: str = "custom") -> None:
        super().__init__(message)
        self.kind = kind


class SettingsError(DotsyncError):
    """Raised for an unreadable or malformed settings file."""


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Map an exception to one of the five scan error categories.

    OS error codes are used when present. Message sniffing is only a
    fallback and depends on the platform's (English) error strings.
    """
    if isinstance(exc, FileScanError):
        return exc.category
    if isinstance(exc, OSError) and exc.errno is not None:
        if exc.errno in _PERMISSION_ERRNOS:
            return ErrorCategory.PERMISSION
        if exc.errno in _NOT_FOUND_ERRNOS:
            return ErrorCategory.NOT_FOUND
    return categorize_message(str(exc))


def categorize_message(message: str) -> ErrorCategory:
    """Categorise an error purely from its message text."""
    lowered = message.lower()
    for fragments, category in _MESSAGE_FRAGMENTS:
        if any(fragment in lowered for fragment in fragments):
            return category
    return ErrorCategory.UNKNOWN
