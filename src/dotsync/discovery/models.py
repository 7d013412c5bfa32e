"""Data models for the discovery module.

Contains the records produced by ``DotfileScanner``: individual
configuration records, per-path scan errors, scan metadata, and the
aggregate scan result. The scan options consumed by the scanner live
here too so that callers can build them without importing the scanner.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any

from dotsync.exceptions import ErrorCategory

# Default maximum file size to scan (10 MiB).
MAX_FILE_SIZE = 10 * 1024 * 1024

# Well-known dotfile locations scanned when no explicit paths are given.
DEFAULT_SCAN_PATHS: tuple[str, ...] = (
    "~/.bashrc",
    "~/.bash_profile",
    "~/.bash_aliases",
    "~/.zshrc",
    "~/.zsh_profile",
    "~/.oh-my-zsh/custom",
    "~/.vimrc",
    "~/.nvimrc",
    "~/.gitconfig",
    "~/.gitignore_global",
    "~/.ssh/config",
    "~/.ssh/known_hosts",
    "~/.profile",
    "~/.inputrc",
    "~/.tmux.conf",
    "~/.screenrc",
)

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = ("*.log", "*.cache", "*.tmp")


class ConfigType(str, Enum):
    """Format family of a configuration file."""

    BASH = "bash"
    ZSH = "zsh"
    VIM = "vim"
    GIT = "git"
    SSH = "ssh"
    VSCODE = "vscode"
    SYSTEM = "system"
    CUSTOM = "custom"


class BackupStatus(str, Enum):
    """Lifecycle tag set by the backup collaborators, never by the scanner."""

    NOT_BACKED_UP = "not_backed_up"
    PENDING = "pending"
    BACKED_UP = "backed_up"
    ERROR = "error"


class ConfigCategory(str, Enum):
    """Category assigned by the analysis collaborator."""

    SHELL = "shell"
    EDITOR = "editor"
    GIT = "git"
    SYSTEM = "system"
    DEVELOPMENT = "development"
    PRODUCTIVITY = "productivity"


@dataclass(frozen=True)
class ConfigAnalysis:
    """Analysis payload attached to a record by an external collaborator.

    Attributes:
        description: Human-readable description of what the config does.
        category: Category the config belongs to.
        required_packages: Packages needed for the config to work.
        setup_instructions: Free-text setup instructions.
        has_issues: Whether any issues were found.
        issues: Issues or warnings found.
        confidence: Confidence of the analysis, between 0 and 1.
    """

    description: str
    category: ConfigCategory
    required_packages: list[str] = field(default_factory=list)
    setup_instructions: str = ""
    has_issues: bool = False
    issues: list[str] = field(default_factory=list)
    confidence: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be in [0, 1], got {self.confidence}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "category": self.category.value,
            "required_packages": list(self.required_packages),
            "setup_instructions": self.setup_instructions,
            "has_issues": self.has_issues,
            "issues": list(self.issues),
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class ConfigurationRecord:
    """A single configuration file discovered by the scanner.

    Records are immutable. Collaborators that attach an analysis or move
    the backup status get a new record back from ``with_analysis()`` or
    ``with_status()``.

    Attributes:
        path: Absolute path to the file.
        type: Configuration kind, always a member of ``ConfigType``.
        content: Raw text content of the file.
        last_modified: Modification time of the file.
        size: File size in bytes.
        dependencies: Package names required by the config (empty at scan time).
        ai_analysis: Optional analysis payload from a collaborator.
        is_active: Whether the config is in use.
        backup_status: Backup lifecycle tag.
    """

    path: str
    type: ConfigType
    content: str
    last_modified: datetime
    size: int
    dependencies: list[str] = field(default_factory=list)
    ai_analysis: ConfigAnalysis | None = None
    is_active: bool = True
    backup_status: BackupStatus = BackupStatus.NOT_BACKED_UP

    def with_analysis(self, analysis: ConfigAnalysis) -> ConfigurationRecord:
        """Return a copy carrying the given analysis payload."""
        return replace(self, ai_analysis=analysis)

    def with_status(self, status: BackupStatus) -> ConfigurationRecord:
        """Return a copy with a new backup status."""
        return replace(self, backup_status=status)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "type": self.type.value,
            "content": self.content,
            "last_modified": self.last_modified.isoformat(),
            "size": self.size,
            "dependencies": list(self.dependencies),
            "ai_analysis": self.ai_analysis.to_dict() if self.ai_analysis else None,
            "is_active": self.is_active,
            "backup_status": self.backup_status.value,
        }


@dataclass(frozen=True)
class ScanError:
    """One failed top-level path.

    Attributes:
        path: The resolved path that failed.
        message: Human-readable error message.
        type: Error category.
        name: Name of the underlying error.
    """

    path: str
    message: str
    type: ErrorCategory
    name: str = "ScanError"

    def to_dict(self) -> dict[str, str]:
        return {
            "path": self.path,
            "message": self.message,
            "type": self.type.value,
            "name": self.name,
        }


@dataclass(frozen=True)
class ScanMetadata:
    """Counts and timings for a single scan call.

    Attributes:
        total_files: Number of top-level paths requested.
        valid_configs: Number of records produced.
        duration_ms: Wall-clock duration of the scan in milliseconds.
        start_time: When the scan started.
        end_time: When the scan completed.
    """

    total_files: int
    valid_configs: int
    duration_ms: float
    start_time: datetime
    end_time: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "valid_configs": self.valid_configs,
            "duration_ms": self.duration_ms,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
        }


@dataclass(frozen=True)
class ScanOptions:
    """Options for a scan.

    Attributes:
        paths: Paths to scan. ``None`` means ``DEFAULT_SCAN_PATHS``.
        include_hidden: Whether directory walks descend into dot-entries.
        max_file_size: Files larger than this many bytes are rejected.
        exclude_patterns: Glob-like patterns (``*`` only) to skip. ``None``
            is the same as no patterns.
        max_workers: Number of top-level paths scanned concurrently.
    """

    paths: tuple[str, ...] | None = None
    include_hidden: bool = False
    max_file_size: int = MAX_FILE_SIZE
    exclude_patterns: tuple[str, ...] = ()
    max_workers: int = 1

    def __post_init__(self) -> None:
        # Accept lists from callers, store tuples.
        if self.paths is not None:
            object.__setattr__(self, "paths", tuple(self.paths))
        object.__setattr__(self, "exclude_patterns", tuple(self.exclude_patterns or ()))
        if self.max_file_size < 0:
            raise ValueError("max_file_size must be non-negative")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

    def effective_paths(self) -> tuple[str, ...]:
        """Return the explicit paths, or the default set verbatim."""
        return self.paths if self.paths is not None else DEFAULT_SCAN_PATHS


@dataclass
class ScanResult:
    """Complete result of a scan.

    Attributes:
        configs: All records found, in requested-path order.
        metadata: Counts and timings.
        errors: One entry per top-level path that failed.
    """

    configs: list[ConfigurationRecord]
    metadata: ScanMetadata
    errors: list[ScanError] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "configs": [c.to_dict() for c in self.configs],
            "metadata": self.metadata.to_dict(),
            "errors": [e.to_dict() for e in self.errors],
        }
