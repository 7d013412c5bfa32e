"""Dotfile discovery: path resolution, classification and scanning.

Public API::

    from dotsync.discovery import DotfileScanner, ScanOptions

    scanner = DotfileScanner()
    result = scanner.scan(ScanOptions(paths=["~/.bashrc"], include_hidden=True))
    for record in result.configs:
        print(f"{record.type.value}: {record.path}")
"""

from __future__ import annotations

from dotsync.discovery.classifier import (
    CONFIG_TYPE_MAPPING,
    SUPPORTED_EXTENSIONS,
    classify_name,
    classify_path,
)
from dotsync.discovery.models import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_SCAN_PATHS,
    MAX_FILE_SIZE,
    BackupStatus,
    ConfigAnalysis,
    ConfigCategory,
    ConfigType,
    ConfigurationRecord,
    ScanError,
    ScanMetadata,
    ScanOptions,
    ScanResult,
)
from dotsync.discovery.paths import resolve_path, should_exclude
from dotsync.discovery.scanner import DotfileScanner

__all__ = [
    "BackupStatus",
    "CONFIG_TYPE_MAPPING",
    "ConfigAnalysis",
    "ConfigCategory",
    "ConfigType",
    "ConfigurationRecord",
    "DEFAULT_EXCLUDE_PATTERNS",
    "DEFAULT_SCAN_PATHS",
    "DotfileScanner",
    "MAX_FILE_SIZE",
    "SUPPORTED_EXTENSIONS",
    "ScanError",
    "ScanMetadata",
    "ScanOptions",
    "ScanResult",
    "classify_name",
    "classify_path",
    "resolve_path",
    "should_exclude",
]
