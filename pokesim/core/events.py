"""Battle events.

A turn produces an ordered list of these. The order is the canonical
playback order, so replaying the list reproduces the battle exactly.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from pokesim.core.moves import StatusEffect
from pokesim.core.stat_stages import StatName
from pokesim.core.type_chart import PokemonType


class DamageSource(str, Enum):
    """What removed the HP in a damage_dealt event."""

    MOVE = "move"
    RECOIL = "recoil"


class HealReason(str, Enum):
    """Why a status condition ended."""

    WOKE_UP = "woke_up"
    THAWED = "thawed"
    CURED = "cured"


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    side: int | None = None  # Acting or affected side, 0 or 1


class TurnStartEvent(_Event):
    """Opens a turn and samples both sides' HP."""

    type: Literal["turn_start"] = "turn_start"
    turn: int
    hp: tuple[int, int]
    max_hp: tuple[int, int]


class MoveUsedEvent(_Event):
    type: Literal["move_used"] = "move_used"
    side: int
    move: str
    move_id: int
    move_type: PokemonType


class MoveMissedEvent(_Event):
    type: Literal["move_missed"] = "move_missed"
    side: int
    move: str


class ActionPreventedEvent(_Event):
    """A status condition stopped the side from acting."""

    type: Literal["action_prevented"] = "action_prevented"
    side: int
    status: StatusEffect


class DamageDealtEvent(_Event):
    """HP removed by a move or by recoil.

    `side` is the dealing side and `target` the side that lost HP. For
    recoil both are the attacker.
    """

    type: Literal["damage_dealt"] = "damage_dealt"
    side: int
    target: int
    amount: int
    remaining_hp: int
    critical: bool = False
    effectiveness: float = 1.0
    source: DamageSource = DamageSource.MOVE
    move: str | None = None


class StatusAppliedEvent(_Event):
    type: Literal["status_applied"] = "status_applied"
    side: int
    status: StatusEffect
    turns: int | None = None  # Sleep duration


class StatusDamageEvent(_Event):
    """End-of-turn burn or poison damage."""

    type: Literal["status_damage"] = "status_damage"
    side: int
    status: StatusEffect
    amount: int
    remaining_hp: int


class StatusHealedEvent(_Event):
    type: Literal["status_healed"] = "status_healed"
    side: int
    status: StatusEffect
    reason: HealReason = HealReason.CURED


class StatChangedEvent(_Event):
    type: Literal["stat_changed"] = "stat_changed"
    side: int
    stat: StatName
    old_stage: int
    new_stage: int

    @property
    def delta(self) -> int:
        return self.new_stage - self.old_stage


class HpRestoredEvent(_Event):
    type: Literal["hp_restored"] = "hp_restored"
    side: int
    amount: int
    remaining_hp: int


class FaintEvent(_Event):
    type: Literal["faint"] = "faint"
    side: int


BattleEvent = Annotated[
    Union[
        TurnStartEvent,
        MoveUsedEvent,
        MoveMissedEvent,
        ActionPreventedEvent,
        DamageDealtEvent,
        StatusAppliedEvent,
        StatusDamageEvent,
        StatusHealedEvent,
        StatChangedEvent,
        HpRestoredEvent,
        FaintEvent,
    ],
    Field(discriminator="type"),
]

_EVENT_LIST = TypeAdapter(list[BattleEvent])


def dump_events(events: list[BattleEvent]) -> list[dict]:
    """Serialize an event log to JSON-compatible dicts."""
    return _EVENT_LIST.dump_python(events, mode="json")


def load_events(data: list[dict]) -> list[BattleEvent]:
    """Rebuild an event log from dump_events output."""
    return _EVENT_LIST.validate_python(data)
