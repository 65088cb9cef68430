"""Helper utilities for pokesim."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: int | str = logging.WARNING, console: Console | None = None) -> None:
    """Route log records through rich on stderr.

    Safe to call more than once: the previous handlers are replaced.
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def format_multiplier(multiplier: float) -> str:
    """Format an effectiveness multiplier, e.g. 4 -> 'x4', 0.25 -> 'x1/4'."""
    if multiplier == 0:
        return "x0"
    if multiplier < 1:
        return f"x1/{round(1 / multiplier)}"
    return f"x{multiplier:g}"


def format_duration(seconds: float) -> str:
    """Format seconds as e.g. '1m 05s' or '3.2s'."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m {secs:02d}s"


def hp_color(fraction: float) -> str:
    """Rich color for an HP bar at the given fraction of max HP."""
    if fraction > 0.5:
        return "green"
    if fraction > 0.2:
        return "yellow"
    return "red"


def display_name(name: str) -> str:
    """PokeAPI slug to display name: 'mr-mime' -> 'Mr Mime'."""
    return name.replace("-", " ").title()
