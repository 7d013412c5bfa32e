"""Tests for the bash/zsh parser: parsing, validation, dependencies, summary."""

from __future__ import annotations

from dotsync.discovery.models import ConfigType
from dotsync.parsers.shell import ShellParser

SAMPLE = (
    "# shell setup\n"
    'export FOO="bar"\n'
    "EDITOR=vim\n"
    "HISTSIZE=1000\n"
    "DEBUG=true\n"
    "lower=ignored\n"
    "source ~/.bash_aliases\n"
    '. "$HOME/.env"\n'
    "myfunc() {\n"
    "  echo hi\n"
    "}\n"
    "function greet {\n"
    "  echo hello\n"
    "}\n"
    'alias ll="ls -la"\n'
    "alias gs='git status'\n"
)


# ---------------------------------------------------------------------------
# parse()
# ---------------------------------------------------------------------------


class TestShellParse:
    """Line classification and value coercion."""

    def test_export_and_alias(self) -> None:
        parsed = ShellParser().parse('export FOO="bar"\nalias ll="ls -la"\n')
        assert parsed.variables["FOO"] == "bar"
        assert parsed.data["aliases"] == ["ll"]
        assert parsed.data["alias_commands"] == {"ll": "ls -la"}

    def test_variables_are_coerced(self) -> None:
        variables = ShellParser().parse(SAMPLE).variables
        assert variables == {"FOO": "bar", "EDITOR": "vim", "HISTSIZE": 1000, "DEBUG": True}

    def test_quoted_values_stay_strings(self) -> None:
        variables = ShellParser().parse('PORT="8080"\nFLAG="true"\n').variables
        assert variables == {"PORT": "8080", "FLAG": "true"}

    def test_path_value_kept_verbatim(self) -> None:
        variables = ShellParser().parse("export PATH=$PATH:/usr/local/bin\n").variables
        assert variables["PATH"] == "$PATH:/usr/local/bin"

    def test_trailing_comment_is_dropped(self) -> None:
        parsed = ShellParser().parse(
            'export FOO="bar"  # note\n'
            "HISTSIZE=500 # lines\n"
            "alias ll='ls -la'  # long list\n"
        )
        assert parsed.variables == {"FOO": "bar", "HISTSIZE": 500}
        assert parsed.data["alias_commands"] == {"ll": "ls -la"}

    def test_hash_inside_quotes_is_kept(self) -> None:
        variables = ShellParser().parse('PS1="\\u # "\nURL=http://host/#top\n').variables
        assert variables == {"PS1": "\\u # ", "URL": "http://host/#top"}

    def test_imports_strip_quotes(self) -> None:
        parsed = ShellParser().parse(SAMPLE)
        assert parsed.imports == ["~/.bash_aliases", "$HOME/.env"]

    def test_functions(self) -> None:
        assert ShellParser().parse(SAMPLE).data["functions"] == ["myfunc", "greet"]

    def test_comments_without_marker(self) -> None:
        assert ShellParser().parse(SAMPLE).comments == ["shell setup"]

    def test_line_count(self) -> None:
        parsed = ShellParser().parse("a\nb\nc")
        assert parsed.data["line_count"] == 3

    def test_parse_embeds_validation(self) -> None:
        parsed = ShellParser().parse("echo `date\n")
        assert parsed.validation.is_valid is False

    def test_empty_content(self) -> None:
        parsed = ShellParser().parse("")
        assert parsed.variables == {}
        assert parsed.validation.is_valid is True


# ---------------------------------------------------------------------------
# validate()
# ---------------------------------------------------------------------------


class TestShellValidate:
    """Errors, warnings and suggestions per line."""

    def test_unclosed_backtick(self) -> None:
        result = ShellParser().validate("echo `date\n")
        assert result.is_valid is False
        assert any("Unclosed command substitution" in e for e in result.errors)

    def test_balanced_backticks(self) -> None:
        assert ShellParser().validate("NOW=`date`\n").is_valid is True

    def test_escaped_backtick_ignored(self) -> None:
        assert ShellParser().validate('echo "\\` literal"\n').is_valid is True

    def test_unclosed_arithmetic(self) -> None:
        result = ShellParser().validate("X=$((1 + 2\n")
        assert result.errors == ["Line 1: Unclosed arithmetic expansion"]

    def test_unclosed_variable_expansion(self) -> None:
        result = ShellParser().validate('echo "${HOME"\n')
        assert result.errors == ["Line 1: Unclosed variable expansion"]

    def test_comment_lines_are_not_validated(self) -> None:
        assert ShellParser().validate("# echo `date\n").is_valid is True

    def test_rm_rf_warning(self) -> None:
        result = ShellParser().validate("rm -rf /tmp/build || true\n")
        assert result.is_valid is True
        assert result.warnings == ["Line 1: Dangerous rm -rf command without path validation"]

    def test_rm_rf_in_home_is_fine(self) -> None:
        assert ShellParser().validate("rm -rf $HOME/.cache || true\n").warnings == []

    def test_sudo_warning(self) -> None:
        warnings = ShellParser().validate("sudo apt update\n").warnings
        assert warnings == ["Line 1: Sudo command may require password input"]

    def test_unquoted_export_suggestion(self) -> None:
        suggestions = ShellParser().validate("export PATH=/usr/bin\n").suggestions
        assert suggestions == ["Line 1: Consider quoting variable values"]

    def test_cd_suggestion(self) -> None:
        assert ShellParser().validate("cd /tmp\n").suggestions == [
            "Line 1: Consider error handling for cd command"
        ]
        assert ShellParser().validate("cd /tmp || exit 1\n").suggestions == []

    def test_line_numbers(self) -> None:
        result = ShellParser().validate("echo ok\n\necho `x\n")
        assert result.errors == ["Line 3: Unclosed command substitution"]


# ---------------------------------------------------------------------------
# extract_dependencies()
# ---------------------------------------------------------------------------


class TestShellDependencies:
    """Install commands plus the command table."""

    def test_apt_install(self) -> None:
        assert ShellParser().extract_dependencies("apt install git vim") == ["git", "vim"]

    def test_no_duplicates_across_lines(self) -> None:
        content = "apt install git vim\napt-get install vim curl\n"
        assert ShellParser().extract_dependencies(content) == ["git", "vim", "curl"]

    def test_flags_and_separators(self) -> None:
        content = "sudo apt-get install -y git && echo done\n"
        assert ShellParser().extract_dependencies(content) == ["git"]

    def test_npm_global(self) -> None:
        deps = ShellParser().extract_dependencies("npm install -g typescript\n")
        assert deps == ["typescript", "npm"]

    def test_command_table(self) -> None:
        deps = ShellParser().extract_dependencies("alias k=kubectl\ndocker ps\n")
        assert deps == ["kubectl", "docker.io"]

    def test_existence_checks_are_ignored(self) -> None:
        content = "if command -v docker >/dev/null; then :; fi\nwhich jq\n"
        assert ShellParser().extract_dependencies(content) == []

    def test_word_boundaries(self) -> None:
        assert ShellParser().extract_dependencies("cat Dockerfile dockerfile\n") == []

    def test_comment_lines_ignored(self) -> None:
        assert ShellParser().extract_dependencies("# apt install git\n") == []


# ---------------------------------------------------------------------------
# get_summary()
# ---------------------------------------------------------------------------


class TestShellSummary:
    """Description, counts, features and complexity."""

    def test_alias_file(self) -> None:
        summary = ShellParser().get_summary('export FOO="bar"\nalias ll="ls -la"\n')
        assert summary.description == "Command aliases and shortcuts"
        assert summary.features == ["Environment variables", "Command aliases"]
        assert summary.variable_count == 1
        assert summary.function_count == 0
        assert summary.line_count == 3
        assert summary.is_complex is False

    def test_prompt_description(self) -> None:
        summary = ShellParser().get_summary("PS1='\\u@\\h $ '\n")
        assert summary.description == "Shell prompt and display configuration"
        assert "Prompt customization" in summary.features

    def test_path_description(self) -> None:
        summary = ShellParser().get_summary("export PATH=$PATH:/usr/local/bin\n")
        assert summary.description == "Environment and PATH configuration"
        assert "PATH modifications" in summary.features

    def test_fallback_description_uses_kind(self) -> None:
        summary = ShellParser(ConfigType.ZSH).get_summary("setopt autocd\n")
        assert summary.description == "Zsh shell configuration file"

    def test_many_functions_are_complex(self) -> None:
        content = "".join(f"f{i}() {{\n  :\n}}\n" for i in range(6))
        summary = ShellParser().get_summary(content)
        assert summary.function_count == 6
        assert summary.is_complex is True

    def test_long_file_is_complex(self) -> None:
        content = "".join(f"echo {i}\n" for i in range(51))
        assert ShellParser().get_summary(content).is_complex is True


class TestInstallInsideAlias:
    """Install commands wrapped in quoted aliases."""

    def test_quotes_are_stripped(self) -> None:
        deps = ShellParser().extract_dependencies("alias up='sudo apt install htop'\n")
        assert deps == ["htop"]
