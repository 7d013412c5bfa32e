"""Dotfile discovery scanner.

Finds configuration files on disk and turns them into
``ConfigurationRecord`` instances. No parsing happens here; records carry
raw content and are handed to the parsers (or any other collaborator)
afterwards.

Scan Algorithm:
    1. Take the explicit paths from ``ScanOptions`` or the default set.
    2. Resolve each path (``~`` expansion, then absolute).
    3. Stat it: a regular file goes to ``scan_file()``, a directory to
       ``walk_directory()``, anything else fails as ``unknown``.
    4. Collect every record into one list and exactly one ``ScanError``
       per requested path that failed outright.

Failures of individual files found while walking a directory are dropped
(and logged at DEBUG level). Only top-level requested paths produce
``ScanError`` entries.
"""

from __future__ import annotations

import logging
import os
import stat
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path

from dotsync.discovery.classifier import classify_path
from dotsync.discovery.models import (
    ConfigurationRecord,
    ScanError,
    ScanMetadata,
    ScanOptions,
    ScanResult,
)
from dotsync.discovery.paths import resolve_path, should_exclude
from dotsync.exceptions import (
    ErrorCategory,
    FileScanError,
    ScanAbortedError,
)

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."


class DotfileScanner:
    """Discovers configuration files under a set of paths.

    Usage::

        scanner = DotfileScanner()
        result = scanner.scan(ScanOptions(include_hidden=True))
        for record in result.configs:
            print(record.type.value, record.path)
    """

    def __init__(self, home: Path | None = None) -> None:
        self.home = home

    def scan(self, options: ScanOptions | None = None) -> ScanResult:
        """Scan every requested path and aggregate the outcome.

        Args:
            options: Scan options. Defaults to ``ScanOptions()``.

        Returns:
            A ``ScanResult`` with records, metadata and per-path errors.

        Raises:
            ScanAbortedError: Only on an unexpected internal failure.
        """
        opts = options if options is not None else ScanOptions()
        start_time = datetime.now()
        started = time.perf_counter()

        try:
            requested = opts.effective_paths()
            configs: list[ConfigurationRecord] = []
            errors: list[ScanError] = []
            for records, error in self._scan_requested(requested, opts):
                if error is not None:
                    errors.append(error)
                else:
                    configs.extend(records)
        except Exception as exc:
            logger.error("Scan aborted", exc_info=True)
            raise ScanAbortedError(f"Scan aborted: {exc}") from exc

        end_time = datetime.now()
        metadata = ScanMetadata(
            total_files=len(requested),
            valid_configs=len(configs),
            duration_ms=(time.perf_counter() - started) * 1000.0,
            start_time=start_time,
            end_time=end_time,
        )
        logger.info(
            "Scan completed: %d configurations found, %d errors",
            len(configs), len(errors),
        )
        return ScanResult(configs=configs, metadata=metadata, errors=errors)

    def _scan_requested(
        self, paths: tuple[str, ...], options: ScanOptions,
    ) -> list[tuple[list[ConfigurationRecord], ScanError | None]]:
        """Scan top-level paths, concurrently when asked to.

        ``executor.map`` keeps the requested order, so the aggregated
        lists do not depend on the worker count.
        """
        if options.max_workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=options.max_workers) as executor:
                return list(executor.map(lambda p: self._scan_one(p, options), paths))
        return [self._scan_one(p, options) for p in paths]

    def _scan_one(
        self, path: str, options: ScanOptions,
    ) -> tuple[list[ConfigurationRecord], ScanError | None]:
        """Scan one requested path, turning expected failures into data."""
        resolved = resolve_path(path, home=self.home)
        try:
            return self.scan_path(resolved, options), None
        except FileScanError as exc:
            if exc.category is ErrorCategory.NOT_FOUND:
                logger.debug("Not found: %s", resolved)
            else:
                logger.warning("Failed to scan %s: %s", resolved, exc.message)
            return [], ScanError(
                path=resolved, message=exc.message,
                type=exc.category, name=exc.name,
            )

    def scan_path(self, path: str, options: ScanOptions) -> list[ConfigurationRecord]:
        """Dispatch a resolved path to the file scanner or directory walker.

        Raises:
            FileScanError: When the path cannot be scanned.
        """
        try:
            st = os.stat(path)
        except (OSError, ValueError) as exc:
            raise FileScanError.from_exception(path, exc) from exc

        if stat.S_ISREG(st.st_mode):
            record = self.scan_file(path, options)
            return [record] if record is not None else []
        if stat.S_ISDIR(st.st_mode):
            return self.walk_directory(path, options)
        raise FileScanError(
            path=path,
            message=f"Path is neither file nor directory: {path}",
            category=ErrorCategory.UNKNOWN,
        )

    def scan_file(self, path: str, options: ScanOptions) -> ConfigurationRecord | None:
        """Read one file and build its record.

        The size limit is checked before reading, so oversized files are
        never opened.

        Returns:
            The record, or None when the file is not a configuration file.

        Raises:
            FileScanError: When the file cannot be stat'ed, is too large,
                or cannot be read.
        """
        try:
            st = os.stat(path)
        except (OSError, ValueError) as exc:
            raise FileScanError.from_exception(path, exc) from exc

        if st.st_size > options.max_file_size:
            raise FileScanError(
                path=path,
                message=f"File too large: {path} ({st.st_size} bytes)",
                category=ErrorCategory.SIZE_LIMIT,
                name="FileTooLargeError",
            )

        try:
            content = self._read_text(path)
        except (OSError, ValueError) as exc:
            raise FileScanError.from_exception(path, exc) from exc

        config_type = classify_path(path)
        if config_type is None:
            return None

        return ConfigurationRecord(
            path=path,
            type=config_type,
            content=content,
            last_modified=datetime.fromtimestamp(st.st_mtime),
            size=st.st_size,
        )

    def walk_directory(self, path: str, options: ScanOptions) -> list[ConfigurationRecord]:
        """Collect records from a directory tree, depth first.

        Uses an explicit stack of directory iterators instead of
        recursion. Entries are visited in name order.

        Raises:
            FileScanError: When the top directory itself cannot be listed.
        """
        try:
            top_entries = self._list_dir(path)
        except OSError as exc:
            raise FileScanError.from_exception(path, exc) from exc

        records: list[ConfigurationRecord] = []
        stack = [iter(top_entries)]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue
            if not options.include_hidden and entry.name.startswith(HIDDEN_PREFIX):
                continue
            if should_exclude(entry.path, options.exclude_patterns):
                continue

            try:
                is_file = entry.is_file()
                is_dir = not is_file and entry.is_dir()
            except OSError:
                logger.debug("Cannot stat entry: %s", entry.path, exc_info=True)
                continue

            if is_file:
                try:
                    record = self.scan_file(entry.path, options)
                except FileScanError as exc:
                    logger.debug("Skipping %s: %s", entry.path, exc.message)
                    continue
                if record is not None:
                    records.append(record)
            elif is_dir:
                try:
                    stack.append(iter(self._list_dir(entry.path)))
                except OSError:
                    logger.debug("Cannot list directory: %s", entry.path, exc_info=True)
        return records

    def _list_dir(self, path: str) -> list[os.DirEntry[str]]:
        with os.scandir(path) as it:
            return sorted(it, key=lambda e: e.name)

    def _read_text(self, path: str) -> str:
        """Read a whole file as text (the only read the scanner performs)."""
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.read()
