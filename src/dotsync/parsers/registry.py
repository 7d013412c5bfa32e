"""Parser registry mapping configuration kinds to parser instances.

The ``ParserRegistry`` holds one factory per ``ConfigType`` and builds
each parser lazily on first request. Parsers are stateless, so the
registry hands out the same instance for every later request of that
kind. Kinds with no registered factory fall back to ``GenericParser``.

``default_registry()`` pre-registers the built-in parsers:

1. ``ShellParser`` -- bash and zsh
2. ``VimParser`` -- vim/neovim
3. ``GitParser`` -- git config

Custom parsers can be added via ``register()``.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from dotsync.discovery.models import ConfigType, ConfigurationRecord
from dotsync.parsers.base import ConfigParser
from dotsync.parsers.generic import GenericParser
from dotsync.parsers.git import GitParser
from dotsync.parsers.shell import ShellParser
from dotsync.parsers.vim import VimParser

logger = logging.getLogger(__name__)

ParserFactory = Callable[[ConfigType], ConfigParser]


class ParserRegistry:
    """Registry of parser factories keyed by configuration kind.

    Attributes:
        factories: Registered factory per kind, in registration order.
    """

    def __init__(self) -> None:
        self.factories: dict[ConfigType, ParserFactory] = {}
        self._instances: dict[ConfigType, ConfigParser] = {}
        self._lock = threading.Lock()

    def register(self, kind: ConfigType | str, factory: ParserFactory) -> None:
        """Register (or replace) the parser factory for a kind.

        Args:
            kind: The configuration kind, as enum or its string value.
            factory: Called with the kind to build the parser.
        """
        config_type = ConfigType(kind)
        with self._lock:
            self.factories[config_type] = factory
            self._instances.pop(config_type, None)

    def get(self, kind: ConfigType | str) -> ConfigParser:
        """Return the parser for a kind, creating it on first use.

        Unknown kind strings resolve to the ``custom`` generic parser.

        Args:
            kind: The configuration kind, as enum or its string value.

        Returns:
            The shared parser instance for that kind.
        """
        config_type = _coerce_kind(kind)
        with self._lock:
            parser = self._instances.get(config_type)
            if parser is None:
                factory = self.factories.get(config_type, GenericParser)
                parser = factory(config_type)
                self._instances[config_type] = parser
                logger.debug(
                    "Created %s for kind %s", type(parser).__name__, config_type.value
                )
            return parser

    def parser_for(self, record: ConfigurationRecord) -> ConfigParser:
        """Return the parser matching a discovered record's kind."""
        return self.get(record.type)

    def available_kinds(self) -> list[ConfigType]:
        """Every kind the registry can parse, in enum order."""
        return list(ConfigType)


def _coerce_kind(kind: ConfigType | str) -> ConfigType:
    try:
        return ConfigType(kind)
    except ValueError:
        logger.debug("Unknown configuration kind %r, using custom", kind)
        return ConfigType.CUSTOM


def default_registry() -> ParserRegistry:
    """Create a ParserRegistry pre-loaded with the built-in parsers.

    Returns:
        A ParserRegistry with shell, vim and git parsers registered.
        Every other kind resolves to ``GenericParser``.
    """
    registry = ParserRegistry()
    registry.register(ConfigType.BASH, ShellParser)
    registry.register(ConfigType.ZSH, ShellParser)
    registry.register(ConfigType.VIM, lambda _kind: VimParser())
    registry.register(ConfigType.GIT, lambda _kind: GitParser())
    return registry
