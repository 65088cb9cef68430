"""Tests for the battle stats aggregator."""

import random

import pytest

from pokesim.core.analytics import BattleStats, HpSample, fold_events
from pokesim.core.battle import BattleAction, create_battle, resolve_turn
from pokesim.core.events import (
    DamageDealtEvent,
    DamageSource,
    HpRestoredEvent,
    MoveMissedEvent,
    MoveUsedEvent,
    StatusDamageEvent,
    TurnStartEvent,
)
from pokesim.core.moves import StatusEffect
from pokesim.core.type_chart import PokemonType


def _sample_events() -> list:
    return [
        TurnStartEvent(turn=1, hp=(100, 100), max_hp=(100, 100)),
        MoveUsedEvent(side=0, move="tackle", move_id=33, move_type=PokemonType.NORMAL),
        DamageDealtEvent(
            side=0, target=1, amount=40, remaining_hp=60, critical=True, effectiveness=2.0, move="tackle"
        ),
        MoveUsedEvent(side=1, move="ember", move_id=52, move_type=PokemonType.FIRE),
        MoveMissedEvent(side=1, move="ember"),
        TurnStartEvent(turn=2, hp=(100, 60), max_hp=(100, 100)),
        MoveUsedEvent(side=0, move="tackle", move_id=33, move_type=PokemonType.NORMAL),
        DamageDealtEvent(side=0, target=1, amount=30, remaining_hp=30, effectiveness=2.0, move="tackle"),
        DamageDealtEvent(
            side=0, target=0, amount=7, remaining_hp=93, source=DamageSource.RECOIL, move="tackle"
        ),
        StatusDamageEvent(side=1, status=StatusEffect.POISON, amount=12, remaining_hp=18),
        HpRestoredEvent(side=0, amount=5, remaining_hp=98),
    ]


class TestFoldEvents:
    """Tests for fold_events()."""

    def test_empty_stream(self):
        stats = fold_events([])
        assert stats.total_turns == 0
        assert stats.damage_dealt == [0, 0]
        assert stats.hp_fraction(0) == 1.0
        assert stats.most_used_move(0) is None

    def test_totals(self):
        stats = fold_events(_sample_events())
        assert stats.total_turns == 2
        assert stats.damage_dealt == [77, 0]
        assert stats.damage_received == [7, 70]
        assert stats.status_damage == [0, 12]
        assert stats.critical_hits == [1, 0]
        assert stats.misses == [0, 1]

    def test_recoil_not_counted_as_a_hit(self):
        stats = fold_events(_sample_events())
        assert stats.effectiveness_counts == {2.0: 2}
        assert stats.super_effective_hits == 2
        assert stats.total_critical_hits == 1

    def test_moves_used(self):
        stats = fold_events(_sample_events())
        assert stats.moves_used == [{"tackle": 2}, {"ember": 1}]
        assert stats.most_used_move(0) == ("tackle", 2)
        assert stats.most_used_move(1) == ("ember", 1)

    def test_hp_tracking(self):
        stats = fold_events(_sample_events())
        assert stats.hp_history == [HpSample(turn=1, hp=(100, 100)), HpSample(turn=2, hp=(100, 60))]
        assert stats.last_hp == [98, 18]
        assert stats.hp_fraction(1) == pytest.approx(0.18)

    def test_folding_twice_doubles(self):
        stats = fold_events(_sample_events())
        fold_events(_sample_events(), stats)
        assert stats.damage_dealt == [154, 0]
        assert stats.total_turns == 2

    def test_matches_real_battle(self, pikachu, charmander):
        rng = random.Random(3)
        state = create_battle(pikachu, charmander).state
        stats = BattleStats()
        while not state.finished:
            result = resolve_turn(
                state, BattleAction(move_name="tackle"), BattleAction(move_name="tackle"), rng
            )
            fold_events(result.events, stats)
            state = result.state

        assert stats.total_turns == state.turn
        for side in (0, 1):
            combatant = state.combatant(side)
            assert stats.damage_received[side] == combatant.max_hp - combatant.current_hp
        assert sum(stats.damage_dealt) == sum(stats.damage_received)


class TestDuration:
    def test_record_duration(self):
        stats = BattleStats()
        stats.record_duration(12.5)
        assert stats.duration_seconds == 12.5

    def test_negative_duration_rejected(self):
        with pytest.raises(ValueError):
            BattleStats().record_duration(-1)
