"""Damage formula.

    base = (((2 * LEVEL / 5 + 2) * power * A / D) / 50) + 2
    damage = floor(base * STAB * critical * variance * effectiveness)

A hit that is not immune always does at least 1 damage. An immune hit
does exactly 0.
"""

import math
from typing import Protocol

from pokesim.core.moves import DamageClass

# Every combatant fights at this level
LEVEL = 50

CRITICAL_CHANCE = 16  # 1 in 16
CRITICAL_MULTIPLIER = 1.5
STAB_MULTIPLIER = 1.5

VARIANCE_MIN = 0.85
VARIANCE_MAX = 1.0


class RandomSource(Protocol):
    """The subset of random.Random the engine draws from."""

    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def uniform(self, a: float, b: float) -> float: ...


def roll_critical(rng: RandomSource) -> bool:
    """Sample a critical hit at the fixed base rate."""
    return rng.randint(1, CRITICAL_CHANCE) == 1


def roll_variance(rng: RandomSource) -> float:
    """Sample the per-hit variance factor from [0.85, 1.0]."""
    return rng.uniform(VARIANCE_MIN, VARIANCE_MAX)


def base_damage(attack: int, defense: int, power: int) -> float:
    """Unfloored base damage before any modifier."""
    return (((2 * LEVEL / 5 + 2) * power * attack / defense) / 50) + 2


def compute_damage(
    attack: int,
    defense: int,
    power: int,
    effectiveness: float,
    critical: bool,
    damage_class: DamageClass,
    variance: float = VARIANCE_MAX,
    stab: bool = False,
    modifier: float = 1.0,
) -> int:
    """Integer damage for one hit.

    `attack` and `defense` are effective stats (stages already applied).
    `modifier` carries ability boosts and is applied together with STAB.
    """
    if damage_class == DamageClass.STATUS:
        raise ValueError("Status moves do not deal damage")
    if power <= 0:
        raise ValueError(f"Move power must be positive, got {power}")
    if not VARIANCE_MIN <= variance <= VARIANCE_MAX:
        raise ValueError(f"Variance must be in [{VARIANCE_MIN}, {VARIANCE_MAX}], got {variance}")
    if effectiveness == 0:
        return 0

    damage = base_damage(attack, max(1, defense), power)
    if stab:
        damage *= STAB_MULTIPLIER
    damage *= modifier
    if critical:
        damage *= CRITICAL_MULTIPLIER
    damage *= variance
    damage *= effectiveness

    return max(1, math.floor(damage))


def damage_range(
    attack: int,
    defense: int,
    power: int,
    effectiveness: float,
    critical: bool = False,
    stab: bool = False,
) -> tuple[int, int]:
    """(min, max) damage over the whole variance interval."""
    low = compute_damage(
        attack, defense, power, effectiveness, critical,
        DamageClass.PHYSICAL, variance=VARIANCE_MIN, stab=stab,
    )
    high = compute_damage(
        attack, defense, power, effectiveness, critical,
        DamageClass.PHYSICAL, variance=VARIANCE_MAX, stab=stab,
    )
    return low, high
