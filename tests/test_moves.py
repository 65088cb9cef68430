"""Tests for the Move model and move effects."""

import pytest
from pydantic import TypeAdapter, ValidationError

from pokesim.core.moves import (
    DamageClass,
    DamageEffect,
    EffectBasis,
    EffectTarget,
    HealEffect,
    Move,
    MoveEffect,
    StatChangeEffect,
    StatusEffect,
    StatusInflictEffect,
)
from pokesim.core.stat_stages import StatName
from pokesim.core.type_chart import PokemonType


class TestEnums:
    def test_three_classes(self):
        assert {c.value for c in DamageClass} == {"physical", "special", "status"}

    def test_all_statuses(self):
        assert {s.value for s in StatusEffect} == {"none", "burn", "freeze", "paralysis", "poison", "sleep"}


class TestMove:
    """Tests for Move model."""

    def test_defaults(self):
        move = Move(id=1, name="pound", type=PokemonType.NORMAL)
        assert move.accuracy is None
        assert move.power is None
        assert move.pp == 20
        assert move.priority == 0
        assert move.effect is None

    def test_display_name(self):
        assert Move(id=98, name="quick-attack", type="normal", power=40).display_name == "Quick Attack"

    def test_is_damaging(self, tackle, ember):
        assert tackle.is_damaging and tackle.is_physical
        assert ember.is_damaging and not ember.is_physical

    def test_status_move_never_damaging(self):
        move = Move(id=86, name="thunder-wave", type="electric", damage_class=DamageClass.STATUS, power=10)
        assert move.is_damaging is False

    def test_accuracy_range(self):
        with pytest.raises(ValidationError):
            Move(id=1, name="bad", type="normal", accuracy=101)

    def test_frozen(self, tackle):
        with pytest.raises(ValidationError):
            tackle.power = 999


class TestEffects:
    """Tests for the secondary effect union."""

    def test_effect_defaults(self):
        assert StatChangeEffect(changes={StatName.SPEED: 1}).target == EffectTarget.TARGET
        assert StatusInflictEffect(status=StatusEffect.BURN).target == EffectTarget.TARGET
        assert DamageEffect(percent=33).target == EffectTarget.USER
        assert DamageEffect(percent=33).basis == EffectBasis.DAMAGE
        assert HealEffect(percent=50).basis == EffectBasis.MAX_HP

    def test_percent_bounds(self):
        with pytest.raises(ValidationError):
            DamageEffect(percent=0)
        with pytest.raises(ValidationError):
            HealEffect(percent=101)

    def test_discriminated_on_kind(self):
        adapter = TypeAdapter(MoveEffect)
        effect = adapter.validate_python({"kind": "heal", "percent": 50, "basis": "damage"})
        assert effect == HealEffect(percent=50, basis=EffectBasis.DAMAGE)

    def test_move_accepts_effect_dict(self):
        move = Move(
            id=52,
            name="ember",
            type="fire",
            damage_class="special",
            power=40,
            effect_chance=10,
            effect={"kind": "status", "status": "burn"},
        )
        assert isinstance(move.effect, StatusInflictEffect)
        assert move.effect.status == StatusEffect.BURN
