"""DotSync CLI: discover, classify and inspect dotfiles.

Entry point for the ``dotsync`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    scan   -- Discover configuration files and list them.
    parse  -- Parse a single configuration file and validate it.
    types  -- List configuration kinds and the parser for each.

Usage::

    dotsync scan                                # Well-known dotfile locations
    dotsync scan -p ~/.config/nvim -p ~/.bashrc # Specific paths
    dotsync --verbose scan --format json
    dotsync parse ~/.gitconfig
    dotsync types
"""

from __future__ import annotations

import click

from dotsync import __version__
from dotsync.cli.parse_cmd import parse_command
from dotsync.cli.scan import scan_command
from dotsync.cli.types_cmd import types_command


@click.group()
@click.version_option(version=__version__, prog_name="dotsync")
@click.option(
    "-v", "--verbose",
    is_flag=True,
    default=False,
    help="Enable debug logging and show per-path scan errors.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """DotSync: find, classify and inspect your dotfiles.

    Scans well-known configuration locations (shell, vim, git, ssh, tmux
    and more), classifies each file by name and parses the formats it
    understands to report dependencies and validation problems.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register all subcommands
cli.add_command(scan_command)
cli.add_command(parse_command)
cli.add_command(types_command)
