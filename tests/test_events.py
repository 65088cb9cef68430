"""Tests for battle event serialization."""

import random

import pytest
from pydantic import ValidationError

from pokesim.core.battle import BattleAction, create_battle, resolve_turn
from pokesim.core.events import (
    DamageDealtEvent,
    DamageSource,
    FaintEvent,
    StatChangedEvent,
    StatusAppliedEvent,
    dump_events,
    load_events,
)
from pokesim.core.moves import StatusEffect
from pokesim.core.stat_stages import StatName


class TestEventLog:
    def test_dump_uses_type_tags(self):
        data = dump_events([FaintEvent(side=1), StatusAppliedEvent(side=0, status=StatusEffect.SLEEP, turns=2)])
        assert data == [
            {"side": 1, "type": "faint"},
            {"side": 0, "type": "status_applied", "status": "sleep", "turns": 2},
        ]

    def test_load_rebuilds_concrete_events(self):
        events = load_events([
            {"type": "damage_dealt", "side": 0, "target": 0, "amount": 4, "remaining_hp": 10, "source": "recoil"},
            {"type": "stat_changed", "side": 1, "stat": "special-defense", "old_stage": 0, "new_stage": -2},
        ])
        assert isinstance(events[0], DamageDealtEvent)
        assert events[0].source == DamageSource.RECOIL
        assert events[1] == StatChangedEvent(
            side=1, stat=StatName.SPECIAL_DEFENSE, old_stage=0, new_stage=-2
        )
        assert events[1].delta == -2

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            load_events([{"type": "mega_evolved", "side": 0}])

    def test_events_are_immutable(self):
        event = FaintEvent(side=0)
        with pytest.raises(ValidationError):
            event.side = 1

    def test_battle_log_survives_serialization(self, pikachu, charmander):
        state = create_battle(pikachu, charmander).state
        result = resolve_turn(
            state, BattleAction(move_name="tackle"), BattleAction(move_name="ember"), random.Random(5)
        )
        assert load_events(dump_events(result.events)) == result.events
