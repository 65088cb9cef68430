"""Main CLI application for pokesim."""

import logging

import typer
from rich.console import Console

from pokesim import __version__
from pokesim.cli.commands import battle
from pokesim.utils.helpers import configure_logging

# Create main app
app = typer.Typer(
    name="pokesim",
    help="pokesim - turn-based Pokemon battle simulator",
    no_args_is_help=True,
)

# Register commands
app.command("battle")(battle.run_battle)
app.command("matchup")(battle.show_matchup)

console = Console()


@app.command("version")
def show_version() -> None:
    """Show version information."""
    console.print(f"pokesim v{__version__}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """pokesim - simulate Pokemon battles with real PokeAPI data."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


if __name__ == "__main__":
    app()
