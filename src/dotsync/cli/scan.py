"""``dotsync scan`` -- Discover configuration files.

Without ``--path`` the paths come from the settings file or, failing
that, the built-in list of well-known dotfile locations. Command-line
options override the settings file; ``--exclude`` patterns are added to
the configured ones.

Exit Codes:
    0 -- At least one configuration file was found.
    1 -- The settings file is invalid or the scan aborted.
    2 -- No configuration files were found.
"""

from __future__ import annotations

import json
import sys
from dataclasses import replace

import click

from dotsync.cli.common import configure_logging, is_verbose, reported_errors
from dotsync.config import load_settings
from dotsync.discovery.scanner import DotfileScanner

_BYTES_PER_MB = 1024 * 1024


@click.command("scan")
@click.option(
    "-p", "--path", "paths",
    multiple=True,
    help="File or directory to scan (repeatable). Defaults to well-known dotfiles.",
)
@click.option(
    "--exclude", "exclude",
    multiple=True,
    help="Extra exclusion pattern, '*' is the only wildcard (repeatable).",
)
@click.option(
    "--max-size",
    type=click.FloatRange(min=0),
    default=None,
    help="Skip files larger than this many megabytes (default: 10).",
)
@click.option(
    "--no-hidden",
    is_flag=True,
    default=False,
    help="Do not descend into hidden entries while walking directories.",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of top-level paths scanned concurrently.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Settings file (default: $DOTSYNC_CONFIG or ~/.config/dotsync/config.yaml).",
)
@click.pass_context
def scan_command(
    ctx: click.Context,
    paths: tuple[str, ...],
    exclude: tuple[str, ...],
    max_size: float | None,
    no_hidden: bool,
    workers: int,
    output_format: str,
    config_path: str | None,
) -> None:
    """Discover configuration files and list them.

    Exit code 0 if any configuration was found, 2 if none were.
    """
    verbose = is_verbose(ctx)
    with reported_errors():
        settings = load_settings(config_path)
        configure_logging("DEBUG" if verbose else settings.log_level)

        if paths:
            settings = replace(settings, paths=tuple(paths))
        if exclude:
            settings = replace(
                settings, exclude_patterns=settings.exclude_patterns + tuple(exclude)
            )
        if max_size is not None:
            settings = replace(settings, max_file_size=int(max_size * _BYTES_PER_MB))
        if no_hidden:
            settings = replace(settings, include_hidden=False)

        result = DotfileScanner().scan(settings.to_scan_options(max_workers=workers))

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        from dotsync.cli.output import print_scan_result
        print_scan_result(result, show_errors=verbose)

    sys.exit(0 if result.configs else 2)
