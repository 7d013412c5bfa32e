"""``dotsync parse <file>`` -- Parse and validate a single configuration file.

The kind is classified from the file name unless ``--type`` is given.
The matching parser reports a summary, the packages the file depends on
and its validation findings.

Exit Codes:
    0 -- The file has no validation errors (warnings are fine).
    1 -- The file has validation errors, cannot be read or classified,
         or the parser failed.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from dotsync.cli.common import configure_logging, is_verbose, reported_errors
from dotsync.discovery.classifier import classify_path
from dotsync.discovery.models import ConfigType
from dotsync.exceptions import FileScanError
from dotsync.parsers.registry import default_registry


def _read_config(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise FileScanError.from_exception(str(path), exc) from exc


@click.command("parse")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--type", "kind",
    type=click.Choice([t.value for t in ConfigType]),
    default=None,
    help="Configuration kind to parse as (default: classify by file name).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.pass_context
def parse_command(
    ctx: click.Context,
    file: str,
    kind: str | None,
    output_format: str,
) -> None:
    """Parse FILE and report its summary, dependencies and validation.

    Exit code 0 if the file is valid, 1 if validation found errors.
    """
    configure_logging("DEBUG" if is_verbose(ctx) else "WARNING")
    path = Path(file).resolve()

    config_type = ConfigType(kind) if kind else classify_path(path)
    if config_type is None:
        raise click.ClickException(
            f"Cannot classify {path.name}; pass --type to choose a parser."
        )

    with reported_errors():
        content = _read_config(path)
        parser = default_registry().get(config_type)
        parsed = parser.parse(content)
        summary = parser.get_summary(content)
        dependencies = parser.extract_dependencies(content)

    if output_format == "json":
        click.echo(json.dumps({
            "path": str(path),
            "type": config_type.value,
            "parser": type(parser).__name__,
            "summary": summary.to_dict(),
            "dependencies": dependencies,
            "parsed": parsed.to_dict(),
        }, indent=2, default=str))
    else:
        from dotsync.cli.output import print_parse_report
        print_parse_report(
            str(path), config_type, type(parser).__name__,
            summary, dependencies, parsed.validation,
        )

    sys.exit(0 if parsed.validation.is_valid else 1)
