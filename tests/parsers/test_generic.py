"""Tests for the fallback parser."""

from __future__ import annotations

import pytest

from dotsync.discovery.models import ConfigType
from dotsync.exceptions import ConfigParseError
from dotsync.parsers.base import ParsedConfig, coerce_value
from dotsync.parsers.generic import GenericParser

SSH_CONFIG = (
    "# personal hosts\n"
    "Host example\n"
    "    HostName example.com\n"
    "    # use the work key\n"
    "    IdentityFile ~/.ssh/id_work\n"
)


class TestGenericParser:
    """Content, comments, install scan and summary."""

    def test_parse_keeps_content(self) -> None:
        parsed = GenericParser(ConfigType.SSH).parse(SSH_CONFIG)
        assert parsed.data == {"content": SSH_CONFIG, "line_count": 6}
        assert parsed.variables == {}
        assert parsed.imports == []

    def test_comments(self) -> None:
        parsed = GenericParser(ConfigType.SSH).parse(SSH_CONFIG)
        assert parsed.comments == ["personal hosts", "use the work key"]

    def test_always_valid(self) -> None:
        result = GenericParser().validate("echo `unbalanced $((\n")
        assert result.is_valid is True
        assert result.errors == result.warnings == result.suggestions == []

    def test_install_commands(self) -> None:
        content = "apt-get install -y tmux xclip\n# pip install ignored\n"
        assert GenericParser(ConfigType.SYSTEM).extract_dependencies(content) == ["tmux", "xclip"]

    def test_command_table_not_applied(self) -> None:
        assert GenericParser().extract_dependencies("git status\n") == []

    def test_summary(self) -> None:
        summary = GenericParser(ConfigType.SSH).get_summary(SSH_CONFIG)
        assert summary.description == "Ssh configuration file"
        assert summary.features == ["Ssh configuration"]
        assert summary.line_count == 6
        assert summary.is_complex is False

    def test_long_file_is_complex(self) -> None:
        content = "".join(f"k{i} v\n" for i in range(51))
        assert GenericParser().get_summary(content).is_complex is True


class _BrokenParser(GenericParser):
    def _parse(self, content: str) -> ParsedConfig:
        raise ValueError("boom")


class TestParseFailures:
    """Internal parser failures surface as ConfigParseError."""

    def test_parse_failure_is_wrapped(self) -> None:
        with pytest.raises(ConfigParseError, match="boom") as info:
            _BrokenParser(ConfigType.SSH).parse("Host x\n")
        assert info.value.kind == "ssh"
        assert isinstance(info.value.__cause__, ValueError)


class TestCoerceValue:
    """Shared value coercion."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ('"bar"', "bar"),
            ("'x y'", "x y"),
            ("true", True),
            ("false", False),
            ("42", 42),
            ("-3", -3),
            ("1.5", 1.5),
            ('"42"', "42"),
            ("True", "True"),
            ("$HOME/bin", "$HOME/bin"),
        ],
    )
    def test_coercion(self, raw: str, expected: object) -> None:
        value = coerce_value(raw)
        assert value == expected
        assert type(value) is type(expected)
