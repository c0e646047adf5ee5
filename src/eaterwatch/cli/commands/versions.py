"""
Versions command: summarize a stored version history.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from eaterwatch.core.normalize import build_frequency, compute_version_diff
from eaterwatch.persistence import HistoryStoreError, load_history

console = Console()
err_console = Console(stderr=True)


def versions_command(
    input_path: Path = typer.Option(
        Path("data/versions.json"),
        "--input",
        "-i",
        help="History file written by 'eaterwatch sync'",
    ),
    top: int = typer.Option(
        0,
        "--top",
        "-t",
        help="Also list the N restaurants present in the most versions",
    ),
) -> None:
    """Show the stored versions with restaurants added and removed."""
    try:
        history = load_history(input_path)
    except HistoryStoreError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    versions = history.sorted_by_date()
    if not versions:
        console.print("[dim]No versions stored.[/dim]")
        return

    table = Table(title=f"Versions of {history.source}", show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Capture")
    table.add_column("Restaurants", justify="right")
    table.add_column("Added", justify="right", style="green")
    table.add_column("Removed", justify="right", style="red")

    previous = None
    for version in versions:
        diff = compute_version_diff(version.restaurants, previous.restaurants if previous else None)
        table.add_row(
            version.date,
            version.id,
            str(len(version.restaurants)),
            str(len(diff.added)),
            str(len(diff.removed)),
        )
        previous = version

    console.print(table)

    if top > 0:
        frequency = build_frequency(v.restaurants for v in versions)
        ranked = sorted(frequency.items(), key=lambda item: (-item[1][1], item[1][0]))[:top]

        top_table = Table(title="Most persistent restaurants", show_header=True, header_style="bold magenta")
        top_table.add_column("Restaurant", style="cyan")
        top_table.add_column("Versions", justify="right")
        for _, (name, count) in ranked:
            top_table.add_row(name, f"{count}/{len(versions)}")
        console.print(top_table)
