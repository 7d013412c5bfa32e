"""``dotsync types`` -- List configuration kinds and their parsers.

Exit Codes:
    0 -- Always (informational command).
"""

from __future__ import annotations

import click

from dotsync.discovery.classifier import CONFIG_TYPE_MAPPING
from dotsync.discovery.models import ConfigType
from dotsync.parsers.registry import default_registry


def kind_rows() -> list[tuple[ConfigType, str, list[str]]]:
    """One row per kind: the kind, its parser class name and mapped file names."""
    registry = default_registry()
    rows: list[tuple[ConfigType, str, list[str]]] = []
    for kind in registry.available_kinds():
        names = [name for name, mapped in CONFIG_TYPE_MAPPING.items() if mapped is kind]
        rows.append((kind, type(registry.get(kind)).__name__, names))
    return rows


@click.command("types")
def types_command() -> None:
    """List configuration kinds, their parser and the file names they match."""
    from dotsync.cli.output import print_types_table
    print_types_table(kind_rows())
