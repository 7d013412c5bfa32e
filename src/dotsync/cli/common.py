"""Helpers shared by the CLI subcommands."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import click

from dotsync.exceptions import DotsyncError

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int) -> None:
    """Send package logs to stderr at the given level.

    Stdout is left alone so that ``--format json`` output stays parseable.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("dotsync").setLevel(level)


def is_verbose(ctx: click.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("verbose"))


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn DotSync errors into a clean ``Error: ...`` and exit code 1."""
    try:
        yield
    except DotsyncError as exc:
        raise click.ClickException(str(exc)) from exc
