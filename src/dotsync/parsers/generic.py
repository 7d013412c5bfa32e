"""Fallback parser for kinds without a dedicated parser.

Handles the ssh, vscode, system (tmux, inputrc, profile) and custom
kinds. It keeps the raw content, collects ``#`` comments and looks for
package install commands, but does no format-specific structure
extraction and never reports validation problems.
"""

from __future__ import annotations

from dotsync.discovery.models import ConfigType
from dotsync.parsers.base import (
    ConfigParser,
    ConfigSummary,
    ParsedConfig,
    ValidationResult,
    non_empty,
    split_lines,
)
from dotsync.parsers.shell_extractors import scan_install_commands

_COMPLEX_LINE_THRESHOLD = 50


class GenericParser(ConfigParser):
    """Content-preserving parser used for every otherwise unhandled kind."""

    def __init__(self, config_type: ConfigType = ConfigType.CUSTOM) -> None:
        super().__init__(config_type)

    def _parse(self, content: str) -> ParsedConfig:
        lines = split_lines(content)
        comments = [
            line.strip()[1:].strip() for line in lines if line.strip().startswith("#")
        ]
        return ParsedConfig(
            data={"content": content, "line_count": len(lines)},
            comments=comments,
            validation=self._validate(content),
        )

    def _validate(self, content: str) -> ValidationResult:
        return ValidationResult()

    def extract_dependencies(self, content: str) -> list[str]:
        return scan_install_commands(content)

    def get_summary(self, content: str) -> ConfigSummary:
        lines = split_lines(content)
        kind = self.config_type.value
        return ConfigSummary(
            description=f"{kind.capitalize()} configuration file",
            line_count=len(lines),
            is_complex=len(non_empty(lines)) > _COMPLEX_LINE_THRESHOLD,
            features=[f"{kind.capitalize()} configuration"],
        )
