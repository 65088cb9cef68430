"""CLI commands for simulated battles and type matchups."""

import json
import logging
import random
import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from pokesim.core.analysis import BattleSnapshot, analyze_battle
from pokesim.core.analytics import fold_events
from pokesim.core.battle import BattleAction, create_battle, resolve_turn
from pokesim.core.errors import BattleError
from pokesim.core.pokemon import Combatant
from pokesim.core.type_chart import effectiveness, describe_effectiveness
from pokesim.cli.ui.displays import (
    display_battle_state,
    display_battle_summary,
    display_events,
    display_pokemon,
)
from pokesim.data.pokeapi import build_battle_pokemon_sync
from pokesim.utils.config import config
from pokesim.utils.helpers import format_multiplier

console = Console()
logger = logging.getLogger(__name__)


def choose_strongest_move(attacker: Combatant, defender: Combatant) -> BattleAction | None:
    """Pick the usable move with the highest expected power.

    Falls back to the first move with PP left when nothing deals damage.
    Returns None when every move is out of PP.
    """
    usable = [m for m in attacker.pokemon.moves if attacker.pp.get(m.name, 0) > 0]
    if not usable:
        return None

    def score(move) -> float:
        if not move.is_damaging:
            return -1.0
        stab = 1.5 if attacker.pokemon.has_type(move.type) else 1.0
        return move.power * stab * effectiveness(move.type, defender.pokemon.types)

    best = max(usable, key=score)
    return BattleAction(move_name=best.name)


def _load_snapshot(path: Path | None) -> BattleSnapshot | None:
    if path is None or not path.exists():
        return None
    with open(path, "r") as f:
        return BattleSnapshot.from_record(json.load(f))


def _save_snapshot(path: Path, snapshot: BattleSnapshot) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(snapshot.to_record(), f)


def run_battle(
    first: str = typer.Argument(..., help="Pokemon name or Pokedex number (side 0)"),
    second: str = typer.Argument(..., help="Pokemon name or Pokedex number (side 1)"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed for a reproducible battle"),
    max_turns: Optional[int] = typer.Option(None, "--max-turns", "-t", min=1, help="Stop after this many turns"),
    moves: Optional[list[str]] = typer.Option(None, "--move", "-m", help="Move for side 0 (repeatable)"),
    opponent_moves: Optional[list[str]] = typer.Option(
        None, "--opponent-move", "-o", help="Move for side 1 (repeatable)"
    ),
    snapshot: Optional[Path] = typer.Option(
        None, "--snapshot", help="JSON file to compare against and then overwrite with this battle's result"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show the summary"),
) -> None:
    """Simulate a battle between two Pokemon from PokeAPI."""
    max_turns = max_turns or config.default_max_turns

    pokemon = []
    for name, move_names in ((first, moves), (second, opponent_moves)):
        try:
            built = build_battle_pokemon_sync(name, move_names or None)
        except BattleError as e:
            console.print(f"[red]Bad PokeAPI record for '{name}':[/red] {e}")
            raise typer.Exit(1)
        if built is None:
            console.print(f"[red]Could not fetch Pokemon '{name}' from PokeAPI.[/red]")
            raise typer.Exit(1)
        if not built.moves:
            console.print(f"[red]{built.display_name} has no usable moves.[/red]")
            raise typer.Exit(1)
        pokemon.append(built)

    if not quiet:
        for p in pokemon:
            display_pokemon(p)

    names = (pokemon[0].display_name, pokemon[1].display_name)
    rng = random.Random(seed)
    started = time.perf_counter()

    try:
        result = create_battle(pokemon[0], pokemon[1])
        stats = fold_events(result.events)
        if not quiet:
            display_events(result.events, names)

        state = result.state
        while not state.finished and state.turn < max_turns:
            action0 = choose_strongest_move(state.combatant(0), state.combatant(1))
            action1 = choose_strongest_move(state.combatant(1), state.combatant(0))
            if action0 is None or action1 is None:
                console.print("[yellow]A Pokemon ran out of PP. The battle is stopped.[/yellow]")
                break
            result = resolve_turn(state, action0, action1, rng)
            fold_events(result.events, stats)
            if not quiet:
                display_events(result.events, names)
            state = result.state
    except BattleError as e:
        console.print(f"[red]Battle error:[/red] {e}")
        raise typer.Exit(1)

    stats.record_duration(time.perf_counter() - started)

    if not state.finished:
        console.print(f"[yellow]No winner after {state.turn} turns.[/yellow]")

    console.print()
    display_battle_state(state)

    previous = _load_snapshot(snapshot)
    analysis = analyze_battle(stats, player_side=0, winner=state.winner, previous=previous)
    display_battle_summary(stats, analysis, names, state.winner)

    if snapshot is not None:
        _save_snapshot(snapshot, BattleSnapshot.from_stats(stats, player_side=0))
        logger.debug("Saved battle snapshot to %s", snapshot)


def show_matchup(
    attacking: str = typer.Argument(..., help="Attacking move type"),
    defending: list[str] = typer.Argument(..., help="One or two defending types"),
) -> None:
    """Show the type effectiveness multiplier for a matchup."""
    try:
        multiplier = effectiveness(attacking.lower(), [t.lower() for t in defending])
    except ValueError as e:
        console.print(f"[red]Invalid matchup:[/red] {e}")
        raise typer.Exit(1)

    target = "/".join(t.capitalize() for t in defending)
    console.print(
        f"[bold]{attacking.capitalize()}[/bold] vs [bold]{target}[/bold]: "
        f"[cyan]{format_multiplier(multiplier)}[/cyan] {describe_effectiveness(multiplier)}"
    )
