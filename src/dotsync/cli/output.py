"""Rich output formatting helpers for the DotSync CLI.

Provides consistent terminal output for scan results, single-file parse
reports and the configuration-kind listing.

Kind Color Mapping:
    shells = green, editors = cyan, git = magenta, ssh = yellow,
    system/custom = white
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dotsync.discovery.models import ConfigType, ScanResult
from dotsync.parsers.base import ConfigSummary, ValidationResult

_KIND_STYLES: dict[ConfigType, str] = {
    ConfigType.BASH: "green",
    ConfigType.ZSH: "green",
    ConfigType.VIM: "cyan",
    ConfigType.VSCODE: "cyan",
    ConfigType.GIT: "magenta",
    ConfigType.SSH: "yellow",
}

console = Console()


def kind_style(kind: ConfigType) -> str:
    """Return the Rich style string for a configuration kind."""
    return _KIND_STYLES.get(kind, "white")


def format_size(size: int) -> str:
    """Human-readable byte count (``512 B``, ``1.5 KB``, ``2.0 MB``)."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def print_scan_result(result: ScanResult, show_errors: bool = False) -> None:
    """Print the records found by a scan, then a one-line summary.

    Args:
        result: The scan result.
        show_errors: Also print the per-path errors table.
    """
    if not result.configs:
        console.print("[dim]No configuration files found.[/dim]")
    else:
        table = Table(title="DotSync Scan Results", show_header=True, header_style="bold")
        table.add_column("Kind", justify="center")
        table.add_column("Path", style="bold")
        table.add_column("Size", justify="right")
        table.add_column("Modified", style="dim")
        for record in result.configs:
            table.add_row(
                Text(record.type.value, style=kind_style(record.type)),
                escape(record.path),
                format_size(record.size),
                record.last_modified.strftime("%Y-%m-%d %H:%M"),
            )
        console.print(table)

    if show_errors and result.errors:
        errors = Table(title="Scan Errors", show_header=True, header_style="bold")
        errors.add_column("Path")
        errors.add_column("Type", justify="center")
        errors.add_column("Message", style="dim")
        for error in result.errors:
            errors.add_row(
                escape(error.path),
                Text(error.type.value, style="red"),
                escape(error.message),
            )
        console.print(errors)

    _print_scan_summary(result)


def _print_scan_summary(result: ScanResult) -> None:
    """Print a one-line summary after the results table."""
    meta = result.metadata
    parts = [
        f"[bold]{meta.valid_configs}[/bold] configs",
        f"{meta.total_files} paths",
    ]
    if result.errors:
        parts.append(f"[red]{len(result.errors)} errors[/red]")
    parts.append(f"{meta.duration_ms:.0f} ms")
    console.print(" | ".join(parts))


def print_parse_report(
    path: str,
    kind: ConfigType,
    parser_name: str,
    summary: ConfigSummary,
    dependencies: list[str],
    validation: ValidationResult,
) -> None:
    """Print the summary, dependencies and validation of one file."""
    if validation.is_valid:
        verdict = Text("VALID", style="bold green")
    else:
        verdict = Text("INVALID", style="bold red")

    header = Text.assemble(
        ("File: ", "bold"), (path, ""),
        ("\nKind: ", "bold"), (kind.value, kind_style(kind)),
        ("  Parser: ", "bold"), (parser_name, ""),
        ("  Status: ", "bold"), verdict,
    )
    console.print(Panel(header, title="Parse Result"))

    console.print(f"[bold]Description:[/bold] {escape(summary.description)}")
    console.print(
        f"{summary.line_count} lines, {summary.function_count} functions, "
        f"{summary.variable_count} variables"
        + (" [yellow](complex)[/yellow]" if summary.is_complex else "")
    )
    if summary.features:
        console.print(f"[bold]Features:[/bold] {escape(', '.join(summary.features))}")

    if dependencies:
        console.print(f"[bold]Dependencies:[/bold] {escape(', '.join(dependencies))}")
    else:
        console.print("[dim]No dependencies detected.[/dim]")

    _print_findings("Errors", validation.errors, "red")
    _print_findings("Warnings", validation.warnings, "yellow")
    _print_findings("Suggestions", validation.suggestions, "cyan")


def _print_findings(title: str, messages: list[str], style: str) -> None:
    if not messages:
        return
    console.print(f"[bold {style}]{title}:[/bold {style}]")
    for message in messages:
        console.print(f"  - {escape(message)}")


def print_types_table(rows: list[tuple[ConfigType, str, list[str]]]) -> None:
    """Print configuration kinds, their parser and the names mapped to them."""
    table = Table(title="Configuration Kinds", show_header=True, header_style="bold")
    table.add_column("Kind")
    table.add_column("Parser")
    table.add_column("File names", style="dim")
    for kind, parser_name, names in rows:
        table.add_row(
            Text(kind.value, style=kind_style(kind)),
            parser_name,
            ", ".join(names) if names else "-",
        )
    console.print(table)
