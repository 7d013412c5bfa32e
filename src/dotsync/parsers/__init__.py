"""Configuration parsers for shell, vim, git and generic dotfiles."""

from dotsync.parsers.base import (
    ConfigParser,
    ConfigSummary,
    ParsedConfig,
    ValidationResult,
)
from dotsync.parsers.generic import GenericParser
from dotsync.parsers.git import GitParser
from dotsync.parsers.registry import ParserRegistry, default_registry
from dotsync.parsers.shell import ShellParser
from dotsync.parsers.vim import VimParser

__all__ = [
    "ConfigParser",
    "ConfigSummary",
    "GenericParser",
    "GitParser",
    "ParsedConfig",
    "ParserRegistry",
    "ShellParser",
    "ValidationResult",
    "VimParser",
    "default_registry",
]
