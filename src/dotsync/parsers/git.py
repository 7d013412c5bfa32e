"""Parser for Git configuration files (.gitconfig).

Git config is INI-style: ``[section]`` or ``[section "subsection"]``
headers followed by ``key = value`` lines. The parser builds a nested
``sections`` mapping and a flat ``section.key`` view (``variables``)
that also picks up dotted ``user.name = ...`` lines written outside any
section.

Special sections:

- ``[alias]`` -- each key is a named alias.
- ``[remote "name"]`` -- the ``url`` is recorded under ``remotes[name]``.
- ``[include]`` / ``[includeIf ...]`` -- ``path`` values become imports.
"""

from __future__ import annotations

import re
from typing import Any

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

_SECTION_PATTERN = re.compile(r"^\[([^\]]+)\]$")
_KEY_VALUE_PATTERN = re.compile(r"^([^=]+?)\s*=\s*(.+)$")
_BARE_KEY_PATTERN = re.compile(r"^[A-Za-z][\w-]*$")
_VALID_ASSIGNMENT = re.compile(r"^[^=]+\s*=\s*.+$")
_SUBSECTION_PATTERN = re.compile(r'^([^\s"]+)\s+"([^"]*)"$')

# Editor command fragment -> package, first match wins.
_EDITOR_PACKAGES: tuple[tuple[str, str], ...] = (
    ("nvim", "neovim"),
    ("vim", "vim"),
    ("nano", "nano"),
    ("emacs", "emacs"),
    ("code", "code"),
)

# diff.tool / merge.tool value -> package.
_DIFF_TOOL_PACKAGES: dict[str, str] = {
    "meld": "meld",
    "kdiff3": "kdiff3",
    "vimdiff": "vim",
    "gvimdiff": "vim-gtk3",
    "nvimdiff": "neovim",
    "kompare": "kompare",
    "diffuse": "diffuse",
    "tkdiff": "tkdiff",
    "xxdiff": "xxdiff",
}
_DEFAULT_DIFF_PACKAGE = "meld"

# Commands referenced from alias values -> package.
ALIAS_COMMAND_PACKAGES: dict[str, str] = {
    "tig": "tig",
    "lazygit": "lazygit",
    "gh": "gh",
    "hub": "hub",
    "git-flow": "git-flow",
    "git-lfs": "git-lfs",
}

_FEATURE_KEYS: tuple[tuple[str, str], ...] = (
    ("user.name", "User identity"),
    ("user.email", "User email"),
    ("core.editor", "Default editor"),
    ("core.autocrlf", "Line ending handling"),
    ("core.ignorecase", "Case sensitivity"),
    ("init.defaultbranch", "Default branch"),
    ("pull.rebase", "Pull strategy"),
    ("push.default", "Push strategy"),
    ("branch.autosetupmerge", "Branch tracking"),
)
_FEATURE_PREFIXES: tuple[tuple[str, str], ...] = (
    ("color.", "Color output"),
    ("alias.", "Command aliases"),
    ("remote.", "Remote repositories"),
    ("credential.", "Credential management"),
    ("diff.", "Diff configuration"),
    ("merge.", "Merge configuration"),
)

_COMPLEX_LINE_THRESHOLD = 50
_COMPLEX_ALIAS_THRESHOLD = 10


def _is_comment(line: str) -> bool:
    return line.startswith("#") or line.startswith(";")


def _section_prefix(section: str) -> str:
    """``remote "origin"`` -> ``remote.origin``; ``Core`` -> ``core``."""
    match = _SUBSECTION_PATTERN.match(section)
    if match:
        return f"{match.group(1).lower()}.{match.group(2)}"
    return section.strip().lower()


class _GitDocument:
    """One pass over a git config, shared by parse, validate and friends."""

    def __init__(self, content: str) -> None:
        self.lines = split_lines(content)
        self.sections: dict[str, dict[str, Any]] = {}
        self.settings: dict[str, Any] = {}
        self.setting_lines: dict[str, int] = {}
        self.aliases: dict[str, Any] = {}
        self.remotes: dict[str, Any] = {}
        self.includes: list[str] = []
        self.comments: list[str] = []
        self._read()

    def _read(self) -> None:
        current = ""
        for num, raw in enumerate(self.lines, start=1):
            line = raw.strip()
            if not line:
                continue
            if _is_comment(line):
                self.comments.append(line[1:].strip())
                continue

            section_match = _SECTION_PATTERN.match(line)
            if section_match:
                current = section_match.group(1)
                self.sections.setdefault(current, {})
                continue

            kv_match = _KEY_VALUE_PATTERN.match(line)
            if kv_match:
                key, value = kv_match.group(1).strip(), coerce_value(kv_match.group(2))
            elif current and _BARE_KEY_PATTERN.match(line):
                key, value = line, True
            else:
                continue

            if not current:
                # Dotted form outside any section: ``user.name = Jane``.
                if "." in key:
                    self._record(key.lower(), value, num)
                    if key.lower().startswith("alias.") and key.count(".") == 1:
                        self.aliases[key.split(".", 1)[1]] = value
                continue

            self.sections[current][key] = value
            prefix = _section_prefix(current)
            self._record(f"{prefix}.{key.lower()}", value, num)

            if current == "alias":
                self.aliases[key] = value
            elif current.startswith("remote"):
                remote_name = current.split('"')[1] if current.count('"') >= 2 else ""
                if remote_name and key.lower() == "url":
                    self.remotes[remote_name] = value
            elif prefix.split(".")[0] in ("include", "includeif") and key.lower() == "path":
                self.includes.append(str(value))

    def _record(self, dotted_key: str, value: Any, line_number: int) -> None:
        self.settings[dotted_key] = value
        self.setting_lines.setdefault(dotted_key, line_number)

    def get(self, dotted_key: str) -> Any:
        return self.settings.get(dotted_key.lower())


class GitParser(ConfigParser):
    """Parser for Git configuration files."""

    def __init__(self) -> None:
        super().__init__(ConfigType.GIT)

    def _parse(self, content: str) -> ParsedConfig:
        doc = _GitDocument(content)
        data = {
            "sections": doc.sections,
            "aliases": doc.aliases,
            "remotes": doc.remotes,
            "line_count": len(doc.lines),
        }
        return ParsedConfig(
            data=data,
            variables=dict(doc.settings),
            imports=list(doc.includes),
            comments=doc.comments,
            validation=self._validate(content),
        )

    def _validate(self, content: str) -> ValidationResult:
        result = ValidationResult()
        doc = _GitDocument(content)

        for num, raw in enumerate(doc.lines, start=1):
            line = raw.strip()
            if not line or _is_comment(line):
                continue
            if line.startswith("["):
                if not line.endswith("]"):
                    result.errors.append(f"Line {num}: Unclosed section header")
                continue
            if "=" in line and not _VALID_ASSIGNMENT.match(line):
                result.errors.append(f"Line {num}: Invalid key-value format")

        has_name = doc.get("user.name") is not None
        has_email = doc.get("user.email") is not None
        if has_name and not has_email:
            num = doc.setting_lines["user.name"]
            result.suggestions.append(
                f"Line {num}: Consider setting user.email along with user.name"
            )
        elif has_email and not has_name:
            num = doc.setting_lines["user.email"]
            result.suggestions.append(
                f"Line {num}: Consider setting user.name along with user.email"
            )

        editor = doc.get("core.editor")
        if isinstance(editor, str) and "vim" in editor and "nano" not in editor:
            num = doc.setting_lines["core.editor"]
            result.suggestions.append(
                f"Line {num}: Consider using nano for core.editor if vim is not available"
            )
        return result

    def extract_dependencies(self, content: str) -> list[str]:
        doc = _GitDocument(content)
        dependencies = ["git"]

        editor = doc.get("core.editor")
        if isinstance(editor, str):
            for fragment, package in _EDITOR_PACKAGES:
                if fragment in editor:
                    dependencies.append(package)
                    break

        for key in ("diff.tool", "merge.tool"):
            tool = doc.get(key)
            if tool is not None:
                dependencies.append(_DIFF_TOOL_PACKAGES.get(str(tool), _DEFAULT_DIFF_PACKAGE))

        helper = doc.get("credential.helper")
        if isinstance(helper, str) and "manager" in helper:
            dependencies.append("git-credential-manager")

        for command in doc.aliases.values():
            dependencies.extend(_alias_command_packages(str(command)))
        return dedupe(dependencies)

    def get_summary(self, content: str) -> ConfigSummary:
        doc = _GitDocument(content)
        keys = doc.settings.keys()

        features = [label for key, label in _FEATURE_KEYS if key in keys]
        features.extend(
            label for prefix, label in _FEATURE_PREFIXES
            if any(k.startswith(prefix) for k in keys)
        )

        return ConfigSummary(
            description=self._describe(doc),
            line_count=len(doc.lines),
            function_count=len(doc.aliases),
            variable_count=len(doc.settings),
            is_complex=(
                len(non_empty(doc.lines)) > _COMPLEX_LINE_THRESHOLD
                or len(doc.aliases) > _COMPLEX_ALIAS_THRESHOLD
            ),
            features=features,
        )

    def _describe(self, doc: _GitDocument) -> str:
        keys = list(doc.settings)
        if doc.aliases:
            return "Git configuration with custom aliases"
        if doc.remotes:
            return "Git configuration with remote repositories"
        if any(k.startswith(("credential.", "user.")) for k in keys):
            return "Git configuration with user and credential settings"
        if any(k.startswith(("color.", "diff.")) for k in keys):
            return "Git configuration with display and diff settings"
        return "Git configuration file"


def _alias_command_packages(command: str) -> list[str]:
    return [
        package
        for cmd, package in ALIAS_COMMAND_PACKAGES.items()
        if re.search(rf"(?<![\w-]){re.escape(cmd)}(?![\w-])", command)
    ]
