"""Battle stats aggregator: a left fold over the event stream.

Folding is additive. Folding the same events twice doubles the totals, so
fold each battle's events exactly once.
"""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from pokesim.core.events import (
    BattleEvent,
    DamageDealtEvent,
    DamageSource,
    HpRestoredEvent,
    MoveMissedEvent,
    MoveUsedEvent,
    StatusDamageEvent,
    TurnStartEvent,
)


def _pair() -> list[int]:
    return [0, 0]


class HpSample(BaseModel):
    """Both sides' HP at the start of a turn."""

    turn: int
    hp: tuple[int, int]


class BattleStats(BaseModel):
    """Running totals for one battle, indexed by side."""

    total_turns: int = 0
    damage_dealt: list[int] = Field(default_factory=_pair)
    damage_received: list[int] = Field(default_factory=_pair)
    status_damage: list[int] = Field(default_factory=_pair)
    critical_hits: list[int] = Field(default_factory=_pair)
    misses: list[int] = Field(default_factory=_pair)
    effectiveness_counts: dict[float, int] = Field(default_factory=dict)
    moves_used: list[dict[str, int]] = Field(default_factory=lambda: [{}, {}])
    hp_history: list[HpSample] = Field(default_factory=list)
    last_hp: list[int | None] = Field(default_factory=lambda: [None, None])
    max_hp: list[int] = Field(default_factory=_pair)
    duration_seconds: float = 0.0

    def apply(self, event: BattleEvent) -> None:
        """Fold a single event into the totals."""
        if isinstance(event, TurnStartEvent):
            self.total_turns = max(self.total_turns, event.turn)
            self.hp_history.append(HpSample(turn=event.turn, hp=event.hp))
            self.max_hp = list(event.max_hp)
            self.last_hp = list(event.hp)

        elif isinstance(event, MoveUsedEvent):
            used = self.moves_used[event.side]
            used[event.move] = used.get(event.move, 0) + 1

        elif isinstance(event, MoveMissedEvent):
            self.misses[event.side] += 1

        elif isinstance(event, DamageDealtEvent):
            self.damage_dealt[event.side] += event.amount
            self.damage_received[event.target] += event.amount
            self.last_hp[event.target] = event.remaining_hp
            if event.source == DamageSource.MOVE:
                if event.critical:
                    self.critical_hits[event.side] += 1
                key = float(event.effectiveness)
                self.effectiveness_counts[key] = self.effectiveness_counts.get(key, 0) + 1

        elif isinstance(event, StatusDamageEvent):
            self.status_damage[event.side] += event.amount
            self.last_hp[event.side] = event.remaining_hp

        elif isinstance(event, HpRestoredEvent):
            self.last_hp[event.side] = event.remaining_hp

    def record_duration(self, seconds: float) -> None:
        """Store the wall-clock duration measured by the caller."""
        if seconds < 0:
            raise ValueError(f"Duration cannot be negative, got {seconds}")
        self.duration_seconds = seconds

    @property
    def super_effective_hits(self) -> int:
        return sum(count for mult, count in self.effectiveness_counts.items() if mult > 1)

    @property
    def total_critical_hits(self) -> int:
        return sum(self.critical_hits)

    def hp_fraction(self, side: int) -> float:
        """Last known HP as a fraction of max. 1.0 before any turn."""
        hp = self.last_hp[side]
        if hp is None or self.max_hp[side] <= 0:
            return 1.0
        return hp / self.max_hp[side]

    def most_used_move(self, side: int) -> tuple[str, int] | None:
        used = self.moves_used[side]
        if not used:
            return None
        name = max(used, key=lambda m: used[m])
        return name, used[name]


def fold_events(events: Iterable[BattleEvent], stats: BattleStats | None = None) -> BattleStats:
    """Fold events into `stats` (or a fresh BattleStats) and return it."""
    if stats is None:
        stats = BattleStats()
    for event in events:
        stats.apply(event)
    return stats
