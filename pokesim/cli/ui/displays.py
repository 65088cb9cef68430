"""Rich display components for the CLI."""

from rich import box
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pokesim.core.analysis import BattleAnalysis
from pokesim.core.analytics import BattleStats
from pokesim.core.battle import BattleState
from pokesim.core.events import (
    ActionPreventedEvent,
    BattleEvent,
    DamageDealtEvent,
    DamageSource,
    FaintEvent,
    HealReason,
    HpRestoredEvent,
    MoveMissedEvent,
    MoveUsedEvent,
    StatChangedEvent,
    StatusAppliedEvent,
    StatusDamageEvent,
    StatusHealedEvent,
    TurnStartEvent,
)
from pokesim.core.moves import StatusEffect
from pokesim.core.pokemon import Combatant, Pokemon
from pokesim.core.type_chart import PokemonType, describe_effectiveness
from pokesim.utils.helpers import display_name, format_duration, format_multiplier, hp_color

console = Console()


# Color mappings
TYPE_COLORS = {
    PokemonType.NORMAL: "white",
    PokemonType.FIRE: "red",
    PokemonType.WATER: "blue",
    PokemonType.ELECTRIC: "yellow",
    PokemonType.GRASS: "green",
    PokemonType.ICE: "cyan",
    PokemonType.FIGHTING: "red",
    PokemonType.POISON: "magenta",
    PokemonType.GROUND: "yellow",
    PokemonType.FLYING: "cyan",
    PokemonType.PSYCHIC: "magenta",
    PokemonType.BUG: "green",
    PokemonType.ROCK: "yellow",
    PokemonType.GHOST: "magenta",
    PokemonType.DRAGON: "blue",
    PokemonType.DARK: "white",
    PokemonType.STEEL: "white",
    PokemonType.FAIRY: "magenta",
}

STATUS_COLORS = {
    StatusEffect.BURN: "red",
    StatusEffect.FREEZE: "cyan",
    StatusEffect.PARALYSIS: "yellow",
    StatusEffect.POISON: "magenta",
    StatusEffect.SLEEP: "dim",
}

_STATUS_VERB = {
    StatusEffect.BURN: "was burned",
    StatusEffect.FREEZE: "was frozen solid",
    StatusEffect.PARALYSIS: "is paralyzed",
    StatusEffect.POISON: "was poisoned",
    StatusEffect.SLEEP: "fell asleep",
}

_PREVENTED = {
    StatusEffect.FREEZE: "is frozen solid!",
    StatusEffect.PARALYSIS: "is paralyzed and can't move!",
    StatusEffect.SLEEP: "is fast asleep.",
}

_HEALED = {
    HealReason.WOKE_UP: "woke up!",
    HealReason.THAWED: "thawed out!",
    HealReason.CURED: "was cured of its {status}.",
}


def format_types(types: tuple[PokemonType, ...]) -> str:
    return "/".join(f"[{TYPE_COLORS.get(t, 'white')}]{t.value.capitalize()}[/]" for t in types)


def hp_bar(current: int, maximum: int, width: int = 20) -> str:
    """Text HP bar with rich color markup."""
    fraction = current / maximum if maximum else 0.0
    filled = round(fraction * width)
    color = hp_color(fraction)
    return f"[{color}]{'#' * filled}[/{color}][dim]{'-' * (width - filled)}[/dim] {current}/{maximum}"


def describe_event(event: BattleEvent, names: tuple[str, str]) -> str | None:
    """One log line (rich markup) for an event, or None if it has no line."""
    if isinstance(event, TurnStartEvent):
        return f"\n[bold cyan]-- Turn {event.turn} --[/bold cyan]"

    name = names[event.side] if event.side is not None else ""

    if isinstance(event, MoveUsedEvent):
        return f"{name} used [bold]{display_name(event.move)}[/bold]!"

    if isinstance(event, MoveMissedEvent):
        return f"[dim]{name}'s attack missed![/dim]"

    if isinstance(event, ActionPreventedEvent):
        return f"[{STATUS_COLORS.get(event.status, 'white')}]{name} {_PREVENTED.get(event.status, 'cannot move!')}[/]"

    if isinstance(event, DamageDealtEvent):
        target = names[event.target]
        if event.source == DamageSource.RECOIL:
            return f"{target} is damaged by recoil! (-{event.amount} HP)"
        if event.effectiveness == 0:
            return f"[dim]It doesn't affect {target}...[/dim]"
        parts = [f"{target} took {event.amount} damage."]
        if event.critical:
            parts.append("[yellow]A critical hit![/yellow]")
        phrase = describe_effectiveness(event.effectiveness)
        if event.effectiveness > 1:
            parts.append(f"[green]{phrase}[/green]")
        elif phrase:
            parts.append(f"[dim]{phrase}[/dim]")
        return "  " + " ".join(parts)

    if isinstance(event, StatusAppliedEvent):
        color = STATUS_COLORS.get(event.status, "white")
        return f"[{color}]{name} {_STATUS_VERB.get(event.status, 'was afflicted')}![/{color}]"

    if isinstance(event, StatusDamageEvent):
        return f"{name} is hurt by its {event.status.value}! (-{event.amount} HP)"

    if isinstance(event, StatusHealedEvent):
        return f"{name} " + _HEALED[event.reason].format(status=event.status.value)

    if isinstance(event, StatChangedEvent):
        stat = display_name(event.stat.value)
        if event.delta > 0:
            return f"{name}'s {stat} rose!"
        return f"{name}'s {stat} fell!"

    if isinstance(event, HpRestoredEvent):
        return f"[green]{name} restored {event.amount} HP.[/green]"

    if isinstance(event, FaintEvent):
        return f"[red bold]{name} fainted![/red bold]"

    return None


def display_events(events: list[BattleEvent], names: tuple[str, str]) -> None:
    """Print an event log in playback order."""
    for event in events:
        line = describe_event(event, names)
        if line is not None:
            console.print(line)


def display_pokemon(pokemon: Pokemon) -> None:
    """Display a battle-ready Pokemon."""
    stats = pokemon.base_stats
    moves = ", ".join(m.display_name for m in pokemon.moves) or "[dim]none[/dim]"
    content = f"""[bold]{pokemon.display_name}[/bold]
[dim]#{pokemon.id:03d}[/dim]

[dim]Type:[/dim] {format_types(pokemon.types)}
[dim]Ability:[/dim] {display_name(pokemon.ability)}
[dim]HP/Atk/Def/SpA/SpD/Spe:[/dim] {stats.hp}/{stats.attack}/{stats.defense}/{stats.special_attack}/{stats.special_defense}/{stats.speed}
[dim]Moves:[/dim] {moves}"""
    console.print(Panel(content, box=box.ROUNDED))


def _combatant_panel(combatant: Combatant, side: int) -> Panel:
    status = ""
    if combatant.status != StatusEffect.NONE:
        color = STATUS_COLORS.get(combatant.status, "white")
        status = f"  [{color}]{combatant.status.value.upper()}[/{color}]"
    content = (
        f"[bold]{combatant.name}[/bold]{status}\n"
        f"{format_types(combatant.pokemon.types)}\n"
        f"{hp_bar(combatant.current_hp, combatant.max_hp)}"
    )
    return Panel(content, title=f"Side {side}", box=box.ROUNDED)


def display_battle_state(state: BattleState) -> None:
    """Both combatants side by side."""
    console.print(Columns([_combatant_panel(c, i) for i, c in enumerate(state.combatants)]))


def display_battle_summary(
    stats: BattleStats,
    analysis: BattleAnalysis,
    names: tuple[str, str],
    winner: int | None,
) -> None:
    """Stats table and analysis panel shown after a battle."""
    table = Table(title="Battle Stats", box=box.ROUNDED)
    table.add_column("", style="dim")
    table.add_column(names[0], justify="right")
    table.add_column(names[1], justify="right")
    table.add_row("Damage dealt", str(stats.damage_dealt[0]), str(stats.damage_dealt[1]))
    table.add_row("Damage received", str(stats.damage_received[0]), str(stats.damage_received[1]))
    table.add_row("Status damage", str(stats.status_damage[0]), str(stats.status_damage[1]))
    table.add_row("Critical hits", str(stats.critical_hits[0]), str(stats.critical_hits[1]))
    table.add_row("Misses", str(stats.misses[0]), str(stats.misses[1]))
    console.print(table)

    hits = ", ".join(
        f"{format_multiplier(mult)}: {count}"
        for mult, count in sorted(stats.effectiveness_counts.items())
    )
    result = "Draw" if winner is None else f"{names[winner]} wins"
    stars = "*" * analysis.stars + "." * (5 - analysis.stars)

    content = f"""[bold]{analysis.headline}[/bold]

[dim]Result:[/dim] {result} in {stats.total_turns} turns ({format_duration(stats.duration_seconds)})
[dim]Hits by effectiveness:[/dim] {hits or 'none'}
[dim]Rating:[/dim] [yellow]{stars}[/yellow] ({analysis.score}/100)"""

    for line in analysis.details:
        content += f"\n  - {line}"
    if analysis.achievements:
        content += "\n\n[dim]Achievements:[/dim] " + ", ".join(
            f"[green]{a}[/green]" for a in analysis.achievements
        )
    for line in analysis.comparisons:
        content += f"\n[cyan]{line}[/cyan]"

    console.print(Panel(content, title="Battle Summary", box=box.DOUBLE))
