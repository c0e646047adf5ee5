"""
Extract command: run the extraction pipeline over a saved page.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from eaterwatch.core.config.loader import ConfigError, load_app_config
from eaterwatch.core.orchestrator import build_pipeline

console = Console()
err_console = Console(stderr=True)


def extract_command(
    html_file: Path = typer.Argument(..., help="Saved HTML of a capture"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to app.yaml",
    ),
) -> None:
    """Extract and print the restaurants found in a saved HTML page."""
    if not html_file.exists():
        err_console.print(f"[red]File not found:[/red] {html_file}")
        raise typer.Exit(1)

    try:
        config = load_app_config(config_path)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/red] {e}")
        raise typer.Exit(1)

    html = html_file.read_text(encoding="utf-8", errors="replace")
    result = build_pipeline(config).extract(html, str(html_file))

    if not result.ok:
        err_console.print("[red]No restaurant list found[/red]")
        for error in result.errors:
            err_console.print(f"[dim]- {error}[/dim]")
        raise typer.Exit(1)

    table = Table(
        title=f"{result.record_count} restaurants via {result.extraction_method}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Name", style="cyan")
    table.add_column("Slug")
    table.add_column("Address")
    table.add_column("Phone")

    for record in result.records:
        table.add_row(record.name, record.slug, record.address, record.phone)

    console.print(table)
