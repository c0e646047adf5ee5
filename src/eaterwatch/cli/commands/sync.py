"""
Sync command: rebuild the version history from the archive and live page.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from eaterwatch.core.archive import CaptureIndexError
from eaterwatch.core.backends import BackendError
from eaterwatch.core.config.loader import ConfigError, load_app_config
from eaterwatch.core.logging import configure_logging
from eaterwatch.core.orchestrator import RunStats, build_history
from eaterwatch.persistence import write_history

console = Console()
err_console = Console(stderr=True)


def sync_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to app.yaml (default: configs/app.yaml if present)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Override the artifact path",
    ),
    archive: bool = typer.Option(
        True,
        "--archive/--no-archive",
        help="Walk archived captures before the live page",
    ),
) -> None:
    """Rebuild the version history and write it to disk.

    Examples:
        eaterwatch sync
        eaterwatch sync --no-archive -o /tmp/versions.json
    """
    try:
        config = load_app_config(config_path)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/red] {e}")
        if e.details:
            err_console.print(f"[dim]{e.details}[/dim]")
        raise typer.Exit(1)

    if output is not None:
        config.output_path = output
    config.archive.enabled = archive

    configure_logging(config.logging)

    try:
        history, stats = asyncio.run(build_history(config))
    except BackendError as e:
        err_console.print(f"[red]Fetch failed:[/red] {e}")
        raise typer.Exit(1)
    except CaptureIndexError as e:
        err_console.print(f"[red]Capture index unreadable:[/red] {e}")
        raise typer.Exit(1)

    path = write_history(history, config.output_path)

    _print_stats(stats)
    console.print(f"[green]Saved {len(history.versions)} unique versions to[/green] {path}")


def _print_stats(stats: RunStats) -> None:
    table = Table(title="Sync", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Captures", str(stats.captures_seen))
    table.add_row("Fetch failures", str(stats.captures_failed))
    table.add_row("Unextractable", str(stats.captures_unextractable))
    table.add_row("Duplicates", str(stats.captures_duplicate))
    table.add_row("Versions", str(stats.versions_accepted))
    table.add_row("Live added", "yes" if stats.live_added else "no")
    if stats.duration_seconds is not None:
        table.add_row("Duration", f"{stats.duration_seconds:.1f}s")

    console.print(table)
