"""Move model and the closed set of secondary move effects."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from pokesim.core.stat_stages import StatName
from pokesim.core.type_chart import PokemonType


class DamageClass(str, Enum):
    """Move damage classification."""

    PHYSICAL = "physical"
    SPECIAL = "special"
    STATUS = "status"


class StatusEffect(str, Enum):
    """Major status conditions. A combatant carries at most one."""

    NONE = "none"
    BURN = "burn"
    FREEZE = "freeze"
    PARALYSIS = "paralysis"
    POISON = "poison"
    SLEEP = "sleep"


class EffectTarget(str, Enum):
    """Who a secondary effect lands on."""

    USER = "user"
    TARGET = "target"


class EffectBasis(str, Enum):
    """What a percentage-based HP effect is measured against."""

    DAMAGE = "damage"  # HP removed from the target by this hit
    MAX_HP = "max_hp"  # Max HP of the affected combatant


# ---------------------------------------------------------------------------
# Secondary effects (discriminated on `kind`)
# ---------------------------------------------------------------------------

class StatChangeEffect(BaseModel):
    """Raise or lower one or more stat stages."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["stat_change"] = "stat_change"
    target: EffectTarget = EffectTarget.TARGET
    changes: dict[StatName, int]


class StatusInflictEffect(BaseModel):
    """Inflict a major status condition."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["status"] = "status"
    target: EffectTarget = EffectTarget.TARGET
    status: StatusEffect


class DamageEffect(BaseModel):
    """Extra HP loss, e.g. recoil on the user."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["damage"] = "damage"
    target: EffectTarget = EffectTarget.USER
    percent: int = Field(gt=0, le=100)
    basis: EffectBasis = EffectBasis.DAMAGE


class HealEffect(BaseModel):
    """HP recovery: drain (basis=damage) or a flat heal (basis=max_hp)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["heal"] = "heal"
    target: EffectTarget = EffectTarget.USER
    percent: int = Field(gt=0, le=100)
    basis: EffectBasis = EffectBasis.MAX_HP


MoveEffect = Annotated[
    Union[StatChangeEffect, StatusInflictEffect, DamageEffect, HealEffect],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Move model
# ---------------------------------------------------------------------------

class Move(BaseModel):
    """A normalized, immutable Pokemon move."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    type: PokemonType
    damage_class: DamageClass = DamageClass.PHYSICAL
    power: int | None = Field(default=None, ge=0)  # None for status moves
    accuracy: int | None = Field(default=None, ge=0, le=100)  # None means always hits
    pp: int = Field(default=20, ge=0)
    priority: int = 0

    # Secondary effect. effect_chance None with an effect present means it always applies.
    effect_chance: int | None = Field(default=None, ge=0, le=100)
    effect: MoveEffect | None = None

    @property
    def display_name(self) -> str:
        return self.name.replace("-", " ").title()

    @property
    def is_damaging(self) -> bool:
        """Power only counts for physical and special moves."""
        return self.damage_class != DamageClass.STATUS and bool(self.power)

    @property
    def is_physical(self) -> bool:
        return self.damage_class == DamageClass.PHYSICAL
