"""Ability hooks.

An ability reacts to battle events through a small set of hooks. Abilities
not in the registry are inert.
"""

from pokesim.core.events import BattleEvent, StatChangedEvent
from pokesim.core.moves import Move
from pokesim.core.pokemon import Combatant
from pokesim.core.stat_stages import StatName
from pokesim.core.type_chart import PokemonType


class Ability:
    """Base ability. Every hook defaults to doing nothing."""

    name: str = "none"

    def on_enter_battle(self, user: Combatant, opponent: Combatant, side: int) -> list[BattleEvent]:
        """Called once when the battle is created. `side` is the user's side."""
        return []

    def damage_modifier(self, user: Combatant, move: Move) -> float:
        """Multiplier applied to damage the user deals with `move`."""
        return 1.0


_REGISTRY: dict[str, Ability] = {}


def register_ability(cls: type[Ability]) -> type[Ability]:
    """Class decorator that adds an ability to the registry."""
    _REGISTRY[cls.name.lower()] = cls()
    return cls


def get_ability(name: str | None) -> Ability | None:
    if not name:
        return None
    return _REGISTRY.get(name.lower())


def has_ability(name: str) -> bool:
    return name.lower() in _REGISTRY


def all_abilities() -> list[Ability]:
    return list(_REGISTRY.values())


# ---------------------------------------------------------------------------
# Built-in abilities
# ---------------------------------------------------------------------------

@register_ability
class Intimidate(Ability):
    """Lowers the opponent's Attack by one stage on entry."""

    name = "intimidate"

    def on_enter_battle(self, user: Combatant, opponent: Combatant, side: int) -> list[BattleEvent]:
        old, new = opponent.stages.shift(StatName.ATTACK, -1)
        if old == new:
            return []
        return [StatChangedEvent(side=1 - side, stat=StatName.ATTACK, old_stage=old, new_stage=new)]


@register_ability
class Blaze(Ability):
    """Fire moves hit 1.5x harder while HP is below a third of max."""

    name = "blaze"
    boost = 1.5

    def damage_modifier(self, user: Combatant, move: Move) -> float:
        if move.type == PokemonType.FIRE and user.current_hp * 3 < user.max_hp:
            return self.boost
        return 1.0
