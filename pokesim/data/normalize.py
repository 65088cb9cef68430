"""Map PokeAPI `pokemon/{id}` and `move/{id}` records onto engine models.

The engine never sees the wire format. Optional data that is missing from a
record becomes an explicit None rather than a zero that could be mistaken
for a real value.
"""

from typing import Any

from pydantic import ValidationError

from pokesim.core.errors import CatalogRecordError
from pokesim.core.moves import (
    DamageClass,
    DamageEffect,
    EffectBasis,
    EffectTarget,
    HealEffect,
    Move,
    StatChangeEffect,
    StatusEffect,
    StatusInflictEffect,
)
from pokesim.core.pokemon import BaseStats, Pokemon
from pokesim.core.stat_stages import StatName
from pokesim.core.type_chart import PokemonType

# PokeAPI stat names -> BaseStats fields
_STAT_FIELDS = {
    "hp": "hp",
    "attack": "attack",
    "defense": "defense",
    "special-attack": "special_attack",
    "special-defense": "special_defense",
    "speed": "speed",
}

# PokeAPI ailment names that map to a major status
_AILMENTS = {
    "burn": StatusEffect.BURN,
    "freeze": StatusEffect.FREEZE,
    "paralysis": StatusEffect.PARALYSIS,
    "poison": StatusEffect.POISON,
    "sleep": StatusEffect.SLEEP,
}

_STAGED_STATS = {s.value: s for s in StatName}

DEFAULT_PP = 20


def _require(record: dict[str, Any], key: str) -> Any:
    value = record.get(key)
    if value is None:
        raise CatalogRecordError(key, "missing")
    return value


def _name_of(ref: Any) -> str | None:
    """Name from a PokeAPI named-resource reference ({"name", "url"})."""
    if isinstance(ref, dict):
        return ref.get("name")
    return None


def normalize_type(name: str | None) -> PokemonType:
    """Unknown or missing type names fall back to normal."""
    try:
        return PokemonType((name or "").lower())
    except ValueError:
        return PokemonType.NORMAL


# ---------------------------------------------------------------------------
# Pokemon
# ---------------------------------------------------------------------------

def normalize_pokemon(
    record: dict[str, Any],
    ability: str | None = None,
    moves: list[Move] | None = None,
) -> Pokemon:
    """Build a Pokemon from a PokeAPI pokemon record.

    `ability` overrides the record's ability. Without it the first
    non-hidden ability is used, then the first ability, then "none".
    """
    pokemon_id = _require(record, "id")
    name = _require(record, "name")

    raw_types = record.get("types") or []
    if not raw_types:
        raise CatalogRecordError("types", "at least one type is required")
    ordered = sorted(raw_types, key=lambda t: t.get("slot", 0))
    types = tuple(normalize_type(_name_of(t.get("type"))) for t in ordered[:2])

    stats = {field: 0 for field in _STAT_FIELDS.values()}
    for entry in record.get("stats") or []:
        field = _STAT_FIELDS.get(_name_of(entry.get("stat")) or "")
        if field is not None:
            stats[field] = entry.get("base_stat") or 0
    if stats["hp"] <= 0:
        raise CatalogRecordError("stats", "hp base stat is missing")

    if ability is None:
        abilities = record.get("abilities") or []
        visible = [a for a in abilities if not a.get("is_hidden")]
        chosen = (visible or abilities or [None])[0]
        ability = (_name_of(chosen.get("ability")) if chosen else None) or "none"

    try:
        return Pokemon(
            id=pokemon_id,
            name=name,
            types=types,
            base_stats=BaseStats(**stats),
            ability=ability,
            moves=tuple(moves or ()),
        )
    except ValidationError as e:
        raise CatalogRecordError(name, str(e)) from e


# ---------------------------------------------------------------------------
# Moves
# ---------------------------------------------------------------------------

def _effect_from_record(record: dict[str, Any]) -> tuple[Any, int | None]:
    """Pick the secondary effect for a move and its chance.

    Returns (effect, chance). Only one effect is kept, in this order:
    ailment, recoil, drain, healing, stat changes.
    """
    meta = record.get("meta") or {}
    effect_chance = record.get("effect_chance")

    ailment = _AILMENTS.get(_name_of(meta.get("ailment")) or "")
    if ailment is not None:
        chance = meta.get("ailment_chance") or effect_chance
        return StatusInflictEffect(status=ailment), chance or None

    drain = meta.get("drain") or 0
    if drain < 0:
        return DamageEffect(percent=min(100, -drain), basis=EffectBasis.DAMAGE), None
    if drain > 0:
        return HealEffect(percent=min(100, drain), basis=EffectBasis.DAMAGE), None

    healing = meta.get("healing") or 0
    if healing > 0:
        return HealEffect(percent=min(100, healing), basis=EffectBasis.MAX_HP), None

    changes: dict[StatName, int] = {}
    for entry in record.get("stat_changes") or []:
        stat = _STAGED_STATS.get(_name_of(entry.get("stat")) or "")
        if stat is not None and entry.get("change"):
            changes[stat] = entry["change"]
    if changes:
        # damage+raise marks damaging moves that change the user's stats (close-combat, flame-charge)
        if _name_of(record.get("target")) == "user" or _name_of(meta.get("category")) == "damage+raise":
            target = EffectTarget.USER
        else:
            target = EffectTarget.TARGET
        chance = meta.get("stat_chance") or effect_chance
        return StatChangeEffect(changes=changes, target=target), chance or None

    return None, None


def normalize_move(record: dict[str, Any]) -> Move:
    """Build a Move from a PokeAPI move record."""
    move_id = _require(record, "id")
    name = _require(record, "name")

    damage_class_name = _name_of(record.get("damage_class"))
    try:
        damage_class = DamageClass(damage_class_name)
    except ValueError as e:
        raise CatalogRecordError("damage_class", f"unknown damage class {damage_class_name!r}") from e

    power = record.get("power")
    if damage_class == DamageClass.STATUS:
        power = None

    try:
        effect, chance = _effect_from_record(record)
        return Move(
            id=move_id,
            name=name,
            type=normalize_type(_name_of(record.get("type"))),
            damage_class=damage_class,
            power=power,
            accuracy=record.get("accuracy"),
            pp=record.get("pp") or DEFAULT_PP,
            priority=record.get("priority") or 0,
            effect_chance=chance,
            effect=effect,
        )
    except ValidationError as e:
        raise CatalogRecordError(name, str(e)) from e
