"""Pokemon types and the static type effectiveness chart."""

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping


class PokemonType(str, Enum):
    """All 18 Pokemon types."""

    NORMAL = "normal"
    FIRE = "fire"
    WATER = "water"
    ELECTRIC = "electric"
    GRASS = "grass"
    ICE = "ice"
    FIGHTING = "fighting"
    POISON = "poison"
    GROUND = "ground"
    FLYING = "flying"
    PSYCHIC = "psychic"
    BUG = "bug"
    ROCK = "rock"
    GHOST = "ghost"
    DRAGON = "dragon"
    DARK = "dark"
    STEEL = "steel"
    FAIRY = "fairy"


# Every value `effectiveness` can return.
EFFECTIVENESS_TIERS: tuple[float, ...] = (0.0, 0.25, 0.5, 1.0, 2.0, 4.0)


# ---------------------------------------------------------------------------
# Type effectiveness chart
# ---------------------------------------------------------------------------
# Encoded as: TYPE_CHART[attacking_type][defending_type] = multiplier
# 2.0 = super effective, 0.5 = not very effective, 0.0 = immune, 1.0 = normal
# ---------------------------------------------------------------------------

# fmt: off
_SUPER_EFFECTIVE: list[tuple[str, str]] = [
    ("fire", "grass"), ("fire", "ice"), ("fire", "bug"), ("fire", "steel"),
    ("water", "fire"), ("water", "ground"), ("water", "rock"),
    ("electric", "water"), ("electric", "flying"),
    ("grass", "water"), ("grass", "ground"), ("grass", "rock"),
    ("ice", "grass"), ("ice", "ground"), ("ice", "flying"), ("ice", "dragon"),
    ("fighting", "normal"), ("fighting", "ice"), ("fighting", "rock"),
    ("fighting", "dark"), ("fighting", "steel"),
    ("poison", "grass"), ("poison", "fairy"),
    ("ground", "fire"), ("ground", "electric"), ("ground", "poison"),
    ("ground", "rock"), ("ground", "steel"),
    ("flying", "grass"), ("flying", "fighting"), ("flying", "bug"),
    ("psychic", "fighting"), ("psychic", "poison"),
    ("bug", "grass"), ("bug", "psychic"), ("bug", "dark"),
    ("rock", "fire"), ("rock", "ice"), ("rock", "flying"), ("rock", "bug"),
    ("ghost", "psychic"), ("ghost", "ghost"),
    ("dragon", "dragon"),
    ("dark", "psychic"), ("dark", "ghost"),
    ("steel", "ice"), ("steel", "rock"), ("steel", "fairy"),
    ("fairy", "fighting"), ("fairy", "dragon"), ("fairy", "dark"),
]

_NOT_VERY_EFFECTIVE: list[tuple[str, str]] = [
    ("normal", "rock"), ("normal", "steel"),
    ("fire", "fire"), ("fire", "water"), ("fire", "rock"), ("fire", "dragon"),
    ("water", "water"), ("water", "grass"), ("water", "dragon"),
    ("electric", "electric"), ("electric", "grass"), ("electric", "dragon"),
    ("grass", "fire"), ("grass", "grass"), ("grass", "poison"),
    ("grass", "flying"), ("grass", "bug"), ("grass", "dragon"), ("grass", "steel"),
    ("ice", "fire"), ("ice", "water"), ("ice", "ice"), ("ice", "steel"),
    ("fighting", "poison"), ("fighting", "flying"), ("fighting", "psychic"),
    ("fighting", "bug"), ("fighting", "fairy"),
    ("poison", "poison"), ("poison", "ground"), ("poison", "rock"), ("poison", "ghost"),
    ("ground", "grass"), ("ground", "bug"),
    ("flying", "electric"), ("flying", "rock"), ("flying", "steel"),
    ("psychic", "psychic"), ("psychic", "steel"),
    ("bug", "fire"), ("bug", "fighting"), ("bug", "poison"),
    ("bug", "flying"), ("bug", "ghost"), ("bug", "steel"), ("bug", "fairy"),
    ("rock", "fighting"), ("rock", "ground"), ("rock", "steel"),
    ("ghost", "dark"),
    ("dragon", "steel"),
    ("dark", "fighting"), ("dark", "dark"), ("dark", "fairy"),
    ("steel", "fire"), ("steel", "water"), ("steel", "electric"), ("steel", "steel"),
    ("fairy", "fire"), ("fairy", "poison"), ("fairy", "steel"),
]

_IMMUNE: list[tuple[str, str]] = [
    ("normal", "ghost"),
    ("electric", "ground"),
    ("fighting", "ghost"),
    ("poison", "steel"),
    ("ground", "flying"),
    ("psychic", "dark"),
    ("ghost", "normal"),
    ("dragon", "fairy"),
]
# fmt: on


def _build_chart() -> Mapping[PokemonType, Mapping[PokemonType, float]]:
    chart = {a: {d: 1.0 for d in PokemonType} for a in PokemonType}
    for multiplier, pairs in ((2.0, _SUPER_EFFECTIVE), (0.5, _NOT_VERY_EFFECTIVE), (0.0, _IMMUNE)):
        for atk, dfn in pairs:
            chart[PokemonType(atk)][PokemonType(dfn)] = multiplier
    # Read-only views so the chart cannot be mutated at runtime
    return MappingProxyType({a: MappingProxyType(row) for a, row in chart.items()})


TYPE_CHART = _build_chart()


def effectiveness(
    attacking_type: PokemonType | str,
    defending_types: Iterable[PokemonType | str],
) -> float:
    """Combined multiplier of an attacking type against one or two defending types.

    Each defending type is looked up independently and the results are
    multiplied, so the outcome is always one of EFFECTIVENESS_TIERS. An
    immunity from either type makes the whole result 0.

    Raises ValueError for unknown type names or a defending type count
    outside 1..2.
    """
    atk = PokemonType(attacking_type)
    defenders = [PokemonType(t) for t in defending_types]
    if not 1 <= len(defenders) <= 2:
        raise ValueError(f"Expected 1 or 2 defending types, got {len(defenders)}")

    row = TYPE_CHART[atk]
    mult = 1.0
    for dfn in defenders:
        mult *= row[dfn]
    return mult


def describe_effectiveness(multiplier: float) -> str:
    """Battle-log phrase for an effectiveness multiplier (empty for neutral)."""
    if multiplier == 0:
        return "It doesn't affect the target..."
    if multiplier > 1.0:
        return "It's super effective!"
    if multiplier < 1.0:
        return "It's not very effective..."
    return ""
