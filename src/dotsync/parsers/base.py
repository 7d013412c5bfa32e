"""Base interface and data structures for configuration parsers.

Every parser in DotSync implements the ``ConfigParser`` abstract base
class, which provides four operations over raw file content:

- ``parse(content)`` -- Extract variables, imports, comments and the
  format-specific structure (``ParsedConfig``).
- ``validate(content)`` -- Report syntax errors, warnings and improvement
  suggestions (``ValidationResult``).
- ``extract_dependencies(content)`` -- Package names the config needs.
- ``get_summary(content)`` -- A short descriptive ``ConfigSummary``.

All four are pure functions of the text. ``parse()`` and ``validate()``
wrap unexpected internal failures in ``ConfigParseError``; content the
parser processed but judged wrong is reported through the
``ValidationResult`` instead.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from dotsync.discovery.models import ConfigType
from dotsync.exceptions import ConfigParseError

_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


@dataclass
class ValidationResult:
    """Outcome of validating a configuration.

    ``is_valid`` is derived: a result is valid exactly when it has no
    errors. Warnings and suggestions never affect validity.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "suggestions": list(self.suggestions),
        }


@dataclass
class ParsedConfig:
    """Structured output of a single ``parse()`` call.

    Attributes:
        data: Format-specific structure (sections, settings, functions...).
        variables: Variable or setting name to parsed value.
        imports: Files sourced or included by the config.
        comments: Comment text, without the comment marker.
        validation: Validation result for the same content.
    """

    data: dict[str, Any]
    variables: dict[str, Any] = field(default_factory=dict)
    imports: list[str] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)
    validation: ValidationResult = field(default_factory=ValidationResult)

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "variables": dict(self.variables),
            "imports": list(self.imports),
            "comments": list(self.comments),
            "validation": self.validation.to_dict(),
        }


@dataclass
class ConfigSummary:
    """Short description of a configuration derived from its content."""

    description: str
    line_count: int
    function_count: int = 0
    variable_count: int = 0
    is_complex: bool = False
    features: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "line_count": self.line_count,
            "function_count": self.function_count,
            "variable_count": self.variable_count,
            "is_complex": self.is_complex,
            "features": list(self.features),
        }


class ConfigParser(ABC):
    """Abstract base class for configuration parsers.

    Subclasses implement ``_parse()`` and ``_validate()``; the public
    ``parse()`` and ``validate()`` add the error wrapping. Parsers keep
    no state between calls, so one instance per kind can be shared.
    """

    def __init__(self, config_type: ConfigType) -> None:
        self.config_type = config_type

    def parse(self, content: str) -> ParsedConfig:
        """Parse raw content into a ``ParsedConfig``.

        Raises:
            ConfigParseError: If the parser fails internally.
        """
        try:
            return self._parse(content)
        except ConfigParseError:
            raise
        except Exception as exc:
            raise ConfigParseError(
                f"Failed to parse {self.config_type.value} configuration: {exc}",
                kind=self.config_type.value,
            ) from exc

    def validate(self, content: str) -> ValidationResult:
        """Validate raw content.

        Raises:
            ConfigParseError: If the validator fails internally.
        """
        try:
            return self._validate(content)
        except ConfigParseError:
            raise
        except Exception as exc:
            raise ConfigParseError(
                f"Failed to validate {self.config_type.value} configuration: {exc}",
                kind=self.config_type.value,
            ) from exc

    @abstractmethod
    def _parse(self, content: str) -> ParsedConfig:
        """Format-specific parsing. May raise on internal failure."""

    @abstractmethod
    def _validate(self, content: str) -> ValidationResult:
        """Format-specific validation. May raise on internal failure."""

    @abstractmethod
    def extract_dependencies(self, content: str) -> list[str]:
        """Return the package names the configuration depends on.

        The list has no duplicates and keeps first-seen order.
        """

    @abstractmethod
    def get_summary(self, content: str) -> ConfigSummary:
        """Return a descriptive summary of the configuration."""


def split_lines(content: str) -> list[str]:
    """Split content on newlines, keeping a trailing empty line."""
    return content.replace("\r\n", "\n").split("\n")


def non_empty(lines: list[str]) -> list[str]:
    return [line for line in lines if line.strip()]


def strip_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    return value[1:-1] if _is_quoted(value) else value


def _is_quoted(value: str) -> bool:
    return len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'"


def coerce_value(raw: str) -> Any:
    """Parse a config value.

    Quoted values are unquoted and stay strings. Bare ``true``/``false``
    become booleans and bare numerics become int or float.
    """
    value = raw.strip()
    if _is_quoted(value):
        return value[1:-1]
    if value in ("true", "false"):
        return value == "true"
    if _NUMBER_PATTERN.match(value):
        if re.fullmatch(r"[+-]?\d+", value):
            return int(value)
        return float(value)
    return value


def dedupe(items: list[str]) -> list[str]:
    """Drop duplicates, keeping first-seen order."""
    return list(dict.fromkeys(items))
