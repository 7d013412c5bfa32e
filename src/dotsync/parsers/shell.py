"""Parser for bash and zsh startup files (.bashrc, .zshrc, .profile...).

Both dialects share the syntax this parser cares about, so a single
class serves both, parameterised by its ``ConfigType``.

Each trimmed line is classified by the first rule that matches:

1. ``# ...``                       -- comment
2. ``[export ]NAME=value``         -- variable (uppercase names only)
3. ``source file`` / ``. file``    -- import
4. ``name() {`` / ``function name`` -- function definition
5. ``alias name=value``            -- alias

Dependencies come from package-manager install lines plus a table of
well-known commands (see ``shell_extractors``).
"""

from __future__ import annotations

import re

from dotsync.discovery.models import ConfigType
from dotsync.parsers.base import (
    ConfigParser,
    ConfigSummary,
    ParsedConfig,
    ValidationResult,
    coerce_value,
    dedupe,
    non_empty,
    split_lines,
)
from dotsync.parsers.shell_extractors import (
    extract_command_packages,
    extract_install_packages,
    is_comment,
)

_VARIABLE_PATTERN = re.compile(r"^(?:export\s+)?([A-Z_][A-Z0-9_]*)\s*=\s*(.+)$")
_SOURCE_PATTERN = re.compile(r"^(?:source|\.)\s+(.+)$")
_FUNCTION_PATTERN = re.compile(
    r"^(?:function\s+([\w:-]+)\s*(?:\(\s*\))?|([\w:-]+)\s*\(\s*\))\s*\{"
)
_ALIAS_PATTERN = re.compile(r"^alias\s+([\w.:-]+)=(.+)$")

_SUDO_PATTERN = re.compile(r"\bsudo\b")
_CD_PATTERN = re.compile(r"(?<![\w-])cd(?:\s|$)")

# Long files or many functions make a config "complex".
_COMPLEX_LINE_THRESHOLD = 50
_COMPLEX_FUNCTION_THRESHOLD = 5


def _strip_trailing_comment(value: str) -> str:
    """Drop a ` #...` tail that sits outside quotes."""
    quote = ""
    for i, char in enumerate(value):
        if quote:
            if char == quote:
                quote = ""
        elif char in "\"'":
            quote = char
        elif char == "#" and i > 0 and value[i - 1].isspace():
            return value[:i].rstrip()
    return value


class ShellParser(ConfigParser):
    """Parser for bash/zsh configuration files."""

    def __init__(self, config_type: ConfigType = ConfigType.BASH) -> None:
        super().__init__(config_type)

    def _parse(self, content: str) -> ParsedConfig:
        lines = split_lines(content)
        variables: dict[str, object] = {}
        imports: list[str] = []
        comments: list[str] = []
        functions: list[str] = []
        aliases: list[str] = []
        alias_commands: dict[str, str] = {}

        for raw in lines:
            line = raw.strip()
            if not line:
                continue

            if line.startswith("#"):
                comments.append(line[1:].strip())
                continue

            var_match = _VARIABLE_PATTERN.match(line)
            if var_match:
                value = _strip_trailing_comment(var_match.group(2))
                variables[var_match.group(1)] = coerce_value(value)
                continue

            source_match = _SOURCE_PATTERN.match(line)
            if source_match:
                imports.append(re.sub(r"['\"]", "", source_match.group(1)).strip())
                continue

            func_match = _FUNCTION_PATTERN.match(line)
            if func_match:
                functions.append(func_match.group(1) or func_match.group(2))
                continue

            alias_match = _ALIAS_PATTERN.match(line)
            if alias_match:
                name = alias_match.group(1)
                aliases.append(name)
                command = _strip_trailing_comment(alias_match.group(2))
                alias_commands[name] = coerce_value(command)
                continue

        data = {
            "variables": variables,
            "imports": imports,
            "comments": comments,
            "functions": functions,
            "aliases": aliases,
            "alias_commands": alias_commands,
            "line_count": len(lines),
        }
        return ParsedConfig(
            data=data,
            variables=variables,
            imports=imports,
            comments=comments,
            validation=self._validate(content),
        )

    def _validate(self, content: str) -> ValidationResult:
        result = ValidationResult()
        for num, line in enumerate(split_lines(content), start=1):
            if is_comment(line):
                continue

            if line.count("$((") > line.count("))"):
                result.errors.append(f"Line {num}: Unclosed arithmetic expansion")
            if line.count("${") > line.count("}"):
                result.errors.append(f"Line {num}: Unclosed variable expansion")
            if (line.count("`") - line.count("\\`")) % 2 != 0:
                result.errors.append(f"Line {num}: Unclosed command substitution")

            if "rm -rf" in line and "$HOME" not in line:
                result.warnings.append(
                    f"Line {num}: Dangerous rm -rf command without path validation"
                )
            if _SUDO_PATTERN.search(line) and "echo" not in line:
                result.warnings.append(f"Line {num}: Sudo command may require password input")

            stripped = line.strip()
            if (
                stripped.startswith("export ")
                and "=" in stripped
                and '"' not in stripped
                and "'" not in stripped
            ):
                result.suggestions.append(f"Line {num}: Consider quoting variable values")
            if _CD_PATTERN.search(line) and "||" not in line:
                result.suggestions.append(
                    f"Line {num}: Consider error handling for cd command"
                )
        return result

    def extract_dependencies(self, content: str) -> list[str]:
        dependencies: list[str] = []
        for line in split_lines(content):
            if is_comment(line):
                continue
            dependencies.extend(extract_install_packages(line))
            dependencies.extend(extract_command_packages(line))
        return dedupe(dependencies)

    def get_summary(self, content: str) -> ConfigSummary:
        lines = split_lines(content)
        stripped = [line.strip() for line in lines]
        functions = [s for s in stripped if _FUNCTION_PATTERN.match(s)]
        variables = [s for s in stripped if _VARIABLE_PATTERN.match(s)]
        aliases = [s for s in stripped if _ALIAS_PATTERN.match(s)]
        sources = [s for s in stripped if _SOURCE_PATTERN.match(s)]

        features: list[str] = []
        if "export" in content:
            features.append("Environment variables")
        if aliases:
            features.append("Command aliases")
        if functions:
            features.append("Custom functions")
        if sources:
            features.append("File imports")
        if "PATH" in content:
            features.append("PATH modifications")
        if "PS1" in content or "PROMPT" in content:
            features.append("Prompt customization")
        if "history" in content.lower():
            features.append("History configuration")

        return ConfigSummary(
            description=self._describe(content),
            line_count=len(lines),
            function_count=len(functions),
            variable_count=len(variables),
            is_complex=(
                len(non_empty(lines)) > _COMPLEX_LINE_THRESHOLD
                or len(functions) > _COMPLEX_FUNCTION_THRESHOLD
            ),
            features=features,
        )

    def _describe(self, content: str) -> str:
        if "PS1" in content or "prompt" in content:
            return "Shell prompt and display configuration"
        if "PATH" in content:
            return "Environment and PATH configuration"
        if "alias" in content:
            return "Command aliases and shortcuts"
        if "function" in content:
            return "Custom shell functions and utilities"
        if "history" in content:
            return "Command history configuration"
        return f"{self.config_type.value.capitalize()} shell configuration file"
