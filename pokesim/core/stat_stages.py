"""Stat stages: the -6..+6 modifiers applied to a combatant's stats."""

from enum import Enum

from pydantic import BaseModel

MIN_STAGE = -6
MAX_STAGE = 6


class StatName(str, Enum):
    """Stats that carry a stage counter during battle."""

    ATTACK = "attack"
    DEFENSE = "defense"
    SPECIAL_ATTACK = "special-attack"
    SPECIAL_DEFENSE = "special-defense"
    SPEED = "speed"
    ACCURACY = "accuracy"


class StatStages(BaseModel):
    """Stage counters for one combatant, each in [-6, +6]."""

    attack: int = 0
    defense: int = 0
    special_attack: int = 0
    special_defense: int = 0
    speed: int = 0
    accuracy: int = 0

    def get(self, stat: StatName) -> int:
        return getattr(self, _field(stat))

    def shift(self, stat: StatName, delta: int) -> tuple[int, int]:
        """Move a stage by delta, clamped to the valid range.

        Returns (old_stage, new_stage).
        """
        old = self.get(stat)
        new = clamp_stage(old + delta)
        setattr(self, _field(stat), new)
        return old, new


def _field(stat: StatName) -> str:
    return StatName(stat).value.replace("-", "_")


def clamp_stage(stage: int) -> int:
    """Clamp a stage into [-6, +6]."""
    return max(MIN_STAGE, min(MAX_STAGE, stage))


def stage_multiplier(stage: int) -> float:
    """Multiplier for a stage on the standard rational staircase.

    Stage -6: 2/8 ... stage -1: 2/3, stage 0: 1, stage +1: 3/2 ... stage +6: 8/2
    """
    if not MIN_STAGE <= stage <= MAX_STAGE:
        raise ValueError(f"Stat stage must be in [{MIN_STAGE}, {MAX_STAGE}], got {stage}")
    if stage >= 0:
        return (2 + stage) / 2
    return 2 / (2 - stage)


def effective_stat(base_stat: int, stage: int, divisor: bool = False) -> int:
    """Apply a stage to a base stat and floor the result.

    Stats used as a divisor downstream (Defense, Special Defense) never go
    below 1.
    """
    if not MIN_STAGE <= stage <= MAX_STAGE:
        raise ValueError(f"Stat stage must be in [{MIN_STAGE}, {MAX_STAGE}], got {stage}")
    # Integer arithmetic keeps the floor exact for every stage
    if stage >= 0:
        value = base_stat * (2 + stage) // 2
    else:
        value = base_stat * 2 // (2 - stage)
    return max(1, value) if divisor else value
