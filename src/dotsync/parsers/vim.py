"""Parser for Vim and Neovim configuration files (.vimrc, .nvimrc).

Extracted structure:

- ``settings``      -- ``set option`` / ``set option=value`` (bare options are True)
- ``key_mappings``  -- ``map``/``noremap`` family, with mode prefixes
- ``plugins``       -- ``Plug 'x'``, ``Plugin 'x'``, ``NeoBundle 'x'``
- ``functions``     -- ``function[!] Name``
- ``autocmds``      -- ``autocmd ...`` lines, verbatim
- ``let`` assignments become ``variables``; ``source``/``runtime`` become imports

Dependencies are the plugin manager in use plus external tools that
plugins commonly shell out to (fzf, ripgrep, ctags, clang, python3).
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

_SET_PATTERN = re.compile(r"^set?\s+(.+)$")
_SET_OPTION_PATTERN = re.compile(r"^(\w+)(?:[+\-^]?=(.*))?$")
_MAP_PATTERN = re.compile(r"^([nvxsoilct]?(?:nore)?map)!?\s+(.+)$")
_MAP_ARGUMENTS = {"<buffer>", "<nowait>", "<silent>", "<special>", "<script>", "<expr>", "<unique>"}
_PLUGIN_PATTERN = re.compile(r"""^(Plug|Plugin|NeoBundle)\s+(['"])([^'"]+)\2""")
_FUNCTION_PATTERN = re.compile(r"^fu(?:n(?:c(?:t(?:i(?:o(?:n)?)?)?)?)?)?!?\s+([\w:#.]+)")
_AUTOCMD_PATTERN = re.compile(r"^au(?:tocmd)?!?\s+(.+)$")
_LET_PATTERN = re.compile(r"^let\s+([\w:#.]+)\s*=\s*(.+)$")
_SOURCE_PATTERN = re.compile(r"^(?:so(?:urce)?|runtime!?)\s+(.+)$")
_COLORSCHEME_PATTERN = re.compile(r"^(?:silent!?\s+)?colo(?:rscheme)?\s+\S+")
_LEADER_PATTERN = re.compile(r"<leader>", re.IGNORECASE)

# Plugin declaration keyword -> calls that initialise its manager.
_MANAGER_INIT_CALLS: dict[str, tuple[str, ...]] = {
    "Plug": ("plug#begin",),
    "Plugin": ("vundle#begin", "vundle#rc"),
    "NeoBundle": ("neobundle#begin",),
}

# (regex over one line, package) for external tools.
_TOOL_MARKERS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"fzf"), "fzf"),
    (re.compile(r"ripgrep|\brg\b"), "ripgrep"),
    (re.compile(r"ctags"), "ctags"),
    (re.compile(r"clang"), "clang"),
    (re.compile(r"python.*provider|provider.*python"), "python3"),
)

# ``set`` option -> feature label, in report order.
_SETTING_FEATURES: tuple[tuple[str, str], ...] = (
    ("number", "Line numbers"),
    ("syntax", "Syntax highlighting"),
    ("tabstop", "Tab configuration"),
    ("expandtab", "Spaces for tabs"),
    ("autoindent", "Auto-indentation"),
    ("hlsearch", "Search highlighting"),
    ("incsearch", "Incremental search"),
    ("ignorecase", "Case-insensitive search"),
    ("smartcase", "Smart case search"),
    ("wrap", "Line wrapping"),
    ("ruler", "Status line"),
    ("showcmd", "Command display"),
    ("wildmenu", "Command completion"),
    ("backspace", "Backspace behavior"),
    ("mouse", "Mouse support"),
)

_COMPLEX_LINE_THRESHOLD = 100
_COMPLEX_PLUGIN_THRESHOLD = 10


def _strip_trailing_comment(text: str) -> str:
    """Drop a trailing ``" comment`` from a set line."""
    return text.split(' "', 1)[0].strip()


def _parse_set_options(rest: str) -> dict[str, object]:
    options: dict[str, object] = {}
    for token in _strip_trailing_comment(rest).split():
        match = _SET_OPTION_PATTERN.match(token)
        if not match:
            continue
        name, value = match.group(1), match.group(2)
        options[name] = True if value is None else coerce_value(value)
    return options


def _parse_mapping(rest: str) -> tuple[str, str] | None:
    tokens = rest.split()
    while tokens and tokens[0].lower() in _MAP_ARGUMENTS:
        tokens.pop(0)
    if len(tokens) < 2:
        return None
    key, _, command = " ".join(tokens).partition(" ")
    return key, command


class VimParser(ConfigParser):
    """Parser for Vim/Neovim configuration files."""

    def __init__(self) -> None:
        super().__init__(ConfigType.VIM)

    def _parse(self, content: str) -> ParsedConfig:
        lines = split_lines(content)
        settings: dict[str, object] = {}
        key_mappings: dict[str, str] = {}
        plugins: list[str] = []
        comments: list[str] = []
        functions: list[str] = []
        autocmds: list[str] = []
        variables: dict[str, object] = {}
        imports: list[str] = []

        for raw in lines:
            line = raw.strip()
            if not line:
                continue

            if line.startswith('"'):
                comments.append(line[1:].strip())
                continue

            set_match = _SET_PATTERN.match(line)
            if set_match:
                settings.update(_parse_set_options(set_match.group(1)))
                continue

            map_match = _MAP_PATTERN.match(line)
            if map_match:
                mapping = _parse_mapping(map_match.group(2))
                if mapping is not None:
                    key_mappings[mapping[0]] = mapping[1]
                continue

            plugin_match = _PLUGIN_PATTERN.match(line)
            if plugin_match:
                plugins.append(plugin_match.group(3))
                continue

            func_match = _FUNCTION_PATTERN.match(line)
            if func_match:
                functions.append(func_match.group(1))
                continue

            if _AUTOCMD_PATTERN.match(line):
                autocmds.append(line)
                continue

            let_match = _LET_PATTERN.match(line)
            if let_match:
                variables[let_match.group(1)] = coerce_value(let_match.group(2))
                continue

            source_match = _SOURCE_PATTERN.match(line)
            if source_match:
                imports.append(source_match.group(1).strip())

        data = {
            "settings": settings,
            "key_mappings": key_mappings,
            "plugins": plugins,
            "functions": functions,
            "autocmds": autocmds,
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
        init_calls = {
            keyword: any(call in content for call in calls)
            for keyword, calls in _MANAGER_INIT_CALLS.items()
        }
        try_depth = 0

        for num, raw in enumerate(split_lines(content), start=1):
            line = raw.strip()
            if not line or line.startswith('"'):
                continue

            if re.match(r"^try\b", line):
                try_depth += 1
            elif re.match(r"^endt(?:ry)?\b", line):
                try_depth = max(0, try_depth - 1)

            map_match = _MAP_PATTERN.match(line)
            if map_match and "nore" not in map_match.group(1) and _LEADER_PATTERN.search(line):
                result.warnings.append(
                    f"Line {num}: Consider using noremap for leader key mappings"
                )

            set_match = _SET_PATTERN.match(line)
            if set_match and '"' not in line:
                for name, value in _parse_set_options(set_match.group(1)).items():
                    if isinstance(value, str) and value:
                        result.suggestions.append(
                            f"Line {num}: Consider quoting string values in set commands ({name})"
                        )

            plugin_match = _PLUGIN_PATTERN.match(line)
            if plugin_match and not init_calls[plugin_match.group(1)]:
                calls = " or ".join(f"{c}()" for c in _MANAGER_INIT_CALLS[plugin_match.group(1)])
                result.warnings.append(
                    f"Line {num}: Plugin without {calls} - ensure the plugin manager is installed"
                )

            if (
                _COLORSCHEME_PATTERN.match(line)
                and not line.startswith("silent")
                and try_depth == 0
            ):
                result.suggestions.append(
                    f"Line {num}: Consider wrapping colorscheme in try-catch"
                )
        return result

    def extract_dependencies(self, content: str) -> list[str]:
        dependencies: list[str] = []
        declarations = {
            match.group(1)
            for match in (_PLUGIN_PATTERN.match(line.strip()) for line in split_lines(content))
            if match
        }

        if "plug#begin" in content or "Plug" in declarations:
            dependencies.append("vim-plug")
        if "Vundle" in content or "vundle#" in content or "Plugin" in declarations:
            dependencies.append("Vundle.vim")
        if "dein" in content:
            dependencies.append("dein.vim")
        if "neobundle#" in content or "NeoBundle" in declarations:
            dependencies.append("neobundle.vim")

        for line in split_lines(content):
            for pattern, package in _TOOL_MARKERS:
                if pattern.search(line):
                    dependencies.append(package)
        return dedupe(dependencies)

    def get_summary(self, content: str) -> ConfigSummary:
        lines = split_lines(content)
        stripped = [line.strip() for line in lines]
        set_lines = [s for s in stripped if _SET_PATTERN.match(s)]
        mappings = [s for s in stripped if _MAP_PATTERN.match(s)]
        plugins = [s for s in stripped if _PLUGIN_PATTERN.match(s)]
        functions = [s for s in stripped if _FUNCTION_PATTERN.match(s)]

        options: set[str] = set()
        for s in set_lines:
            options.update(_parse_set_options(_SET_PATTERN.match(s).group(1)))
        if any(re.match(r"^syn(?:tax)?\s+(?:on|enable)\b", s) for s in stripped):
            options.add("syntax")

        features = [label for option, label in _SETTING_FEATURES if option in options]
        if any(_COLORSCHEME_PATTERN.match(s) for s in stripped):
            features.append("Color scheme")
        if plugins:
            features.append("Plugin management")
        if mappings:
            features.append("Custom key mappings")
        if functions:
            features.append("Custom functions")

        return ConfigSummary(
            description=self._describe(content, plugins, functions),
            line_count=len(lines),
            function_count=len(functions),
            variable_count=len(set_lines),
            is_complex=(
                len(non_empty(lines)) > _COMPLEX_LINE_THRESHOLD
                or len(plugins) > _COMPLEX_PLUGIN_THRESHOLD
            ),
            features=features,
        )

    def _describe(self, content: str, plugins: list[str], functions: list[str]) -> str:
        if plugins:
            return "Vim configuration with plugin management"
        if "colorscheme" in content:
            return "Vim configuration with custom color scheme"
        if functions or "autocmd" in content:
            return "Advanced Vim configuration with custom functions"
        if "set number" in content or "syntax" in content:
            return "Basic Vim configuration for development"
        return "Vim editor configuration file"
