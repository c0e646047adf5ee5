"""
EaterWatch CLI - Main entry point.

Builds and inspects the version history of the tracked restaurant list.
"""

from __future__ import annotations

from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.traceback import install as install_rich_traceback

from eaterwatch import __app_name__, __version__

# Load environment variables from .env (if present)
load_dotenv()

# Install rich traceback for better error display
install_rich_traceback(show_locals=False, width=120)

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name=__app_name__,
    help="Version history of a 'best restaurants' map list",
    rich_markup_mode="rich",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold cyan]{__app_name__}[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """EaterWatch - restaurant list history tracker."""


# =============================================================================
# Register subcommands
# =============================================================================

from .commands import extract, sync, versions  # noqa: E402

app.command("sync", help="Rebuild the version history and write it to disk")(sync.sync_command)
app.command("versions", help="Show the versions stored in a history file")(versions.versions_command)
app.command("extract", help="Extract restaurants from a saved HTML page")(extract.extract_command)


# =============================================================================
# Entry Point
# =============================================================================


def run() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run()
