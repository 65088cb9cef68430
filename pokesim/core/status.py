"""Major status conditions: who can receive them, when they stop a
combatant from acting, what they do at end of turn, and how they end.

A combatant carries at most one major status. Transitions:

    none -> X          a status effect lands (subject to type immunity)
    sleep(n) -> sleep(n-1)   at end of every turn; sleep(0) -> none (wakes)
    freeze -> none     20% thaw chance each time it tries to act
    X -> none          cure()
"""

from pydantic import BaseModel, ConfigDict

from pokesim.core.damage import RandomSource
from pokesim.core.events import (
    ActionPreventedEvent,
    BattleEvent,
    HealReason,
    StatusAppliedEvent,
    StatusDamageEvent,
    StatusHealedEvent,
)
from pokesim.core.moves import StatusEffect
from pokesim.core.pokemon import Combatant
from pokesim.core.stat_stages import StatName
from pokesim.core.type_chart import PokemonType

SLEEP_MIN_TURNS = 1
SLEEP_MAX_TURNS = 3
PARALYSIS_SKIP_CHANCE = 0.25
FREEZE_THAW_CHANCE = 0.2


class StatusRule(BaseModel):
    """Static behaviour of one status condition."""

    model_config = ConfigDict(frozen=True)

    status: StatusEffect
    immune_types: frozenset[PokemonType] = frozenset()
    tick_divisor: int | None = None  # End-of-turn damage is max_hp // tick_divisor
    speed_divisor: int = 1
    halves_physical_attack: bool = False


STATUS_RULES: dict[StatusEffect, StatusRule] = {
    StatusEffect.BURN: StatusRule(
        status=StatusEffect.BURN,
        immune_types=frozenset({PokemonType.FIRE}),
        tick_divisor=16,
        halves_physical_attack=True,
    ),
    StatusEffect.POISON: StatusRule(
        status=StatusEffect.POISON,
        immune_types=frozenset({PokemonType.POISON, PokemonType.STEEL}),
        tick_divisor=8,
    ),
    StatusEffect.PARALYSIS: StatusRule(
        status=StatusEffect.PARALYSIS,
        immune_types=frozenset({PokemonType.ELECTRIC}),
        speed_divisor=2,
    ),
    StatusEffect.FREEZE: StatusRule(
        status=StatusEffect.FREEZE,
        immune_types=frozenset({PokemonType.ICE}),
    ),
    StatusEffect.SLEEP: StatusRule(status=StatusEffect.SLEEP),
}


def can_receive(combatant: Combatant, status: StatusEffect) -> bool:
    """True if the status would land on this combatant right now."""
    if status == StatusEffect.NONE or combatant.is_fainted:
        return False
    if combatant.status != StatusEffect.NONE:
        return False
    rule = STATUS_RULES[status]
    return not any(combatant.pokemon.has_type(t) for t in rule.immune_types)


def inflict(
    combatant: Combatant, side: int, status: StatusEffect, rng: RandomSource
) -> list[BattleEvent]:
    """Try to give a combatant a status. Returns no events if it fails."""
    if not can_receive(combatant, status):
        return []

    combatant.status = status
    turns = None
    if status == StatusEffect.SLEEP:
        turns = rng.randint(SLEEP_MIN_TURNS, SLEEP_MAX_TURNS)
        combatant.sleep_turns = turns
    return [StatusAppliedEvent(side=side, status=status, turns=turns)]


def cure(
    combatant: Combatant, side: int, reason: HealReason = HealReason.CURED
) -> list[BattleEvent]:
    """Remove the combatant's status, if any."""
    if combatant.status == StatusEffect.NONE:
        return []
    old = combatant.status
    combatant.status = StatusEffect.NONE
    combatant.sleep_turns = 0
    return [StatusHealedEvent(side=side, status=old, reason=reason)]


def check_can_act(
    combatant: Combatant, side: int, rng: RandomSource
) -> tuple[bool, list[BattleEvent]]:
    """Decide whether a status stops this turn's action.

    Only freeze and paralysis draw from the random source.
    """
    status = combatant.status

    if status == StatusEffect.SLEEP and combatant.sleep_turns > 0:
        return False, [ActionPreventedEvent(side=side, status=status)]

    if status == StatusEffect.FREEZE:
        if rng.random() < FREEZE_THAW_CHANCE:
            return True, cure(combatant, side, HealReason.THAWED)
        return False, [ActionPreventedEvent(side=side, status=status)]

    if status == StatusEffect.PARALYSIS and rng.random() < PARALYSIS_SKIP_CHANCE:
        return False, [ActionPreventedEvent(side=side, status=status)]

    return True, []


def end_of_turn(combatant: Combatant, side: int) -> list[BattleEvent]:
    """Apply the end-of-turn tick: burn/poison damage or the sleep countdown.

    The caller is responsible for emitting a faint if HP reaches 0.
    """
    if combatant.is_fainted or combatant.status == StatusEffect.NONE:
        return []

    if combatant.status == StatusEffect.SLEEP:
        combatant.sleep_turns = max(0, combatant.sleep_turns - 1)
        if combatant.sleep_turns == 0:
            return cure(combatant, side, HealReason.WOKE_UP)
        return []

    rule = STATUS_RULES[combatant.status]
    if rule.tick_divisor is None:
        return []

    amount = combatant.take_damage(tick_damage(combatant.max_hp, combatant.status))
    return [
        StatusDamageEvent(
            side=side,
            status=combatant.status,
            amount=amount,
            remaining_hp=combatant.current_hp,
        )
    ]


def tick_damage(max_hp: int, status: StatusEffect) -> int:
    """End-of-turn damage for a status, floored with a minimum of 1."""
    rule = STATUS_RULES.get(status)
    if rule is None or rule.tick_divisor is None:
        return 0
    return max(1, max_hp // rule.tick_divisor)


def speed_multiplier(status: StatusEffect) -> float:
    rule = STATUS_RULES.get(status)
    return 1.0 if rule is None else 1 / rule.speed_divisor


def effective_speed(combatant: Combatant) -> int:
    """Staged Speed, reduced by paralysis, as used for turn order."""
    speed = combatant.stat(StatName.SPEED)
    rule = STATUS_RULES.get(combatant.status)
    if rule is not None:
        speed //= rule.speed_divisor
    return speed


def physical_attack(combatant: Combatant) -> int:
    """Staged Attack, halved while burned."""
    attack = combatant.stat(StatName.ATTACK)
    rule = STATUS_RULES.get(combatant.status)
    if rule is not None and rule.halves_physical_attack:
        attack //= 2
    return attack
