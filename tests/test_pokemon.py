"""Tests for Pokemon and Combatant models."""

import pytest
from pydantic import ValidationError

from pokesim.core.moves import StatusEffect
from pokesim.core.pokemon import BaseStats, Combatant, Pokemon
from pokesim.core.stat_stages import StatName
from pokesim.core.type_chart import PokemonType


class TestBaseStats:
    def test_get_by_stat_name(self):
        stats = BaseStats(hp=45, attack=49, defense=49, special_attack=65, special_defense=65, speed=45)
        assert stats.get(StatName.SPECIAL_ATTACK) == 65
        assert stats.get(StatName.SPEED) == 45

    def test_accuracy_has_no_base(self):
        stats = BaseStats(hp=1, attack=1, defense=1, special_attack=1, special_defense=1, speed=1)
        with pytest.raises(ValueError):
            stats.get(StatName.ACCURACY)

    def test_hp_must_be_positive(self):
        with pytest.raises(ValidationError):
            BaseStats(hp=0, attack=1, defense=1, special_attack=1, special_defense=1, speed=1)


class TestPokemon:
    """Tests for the immutable Pokemon model."""

    def test_display(self, charmander):
        assert charmander.display_name == "Charmander"
        assert charmander.types_display == "Fire"
        assert charmander.has_type(PokemonType.FIRE)
        assert not charmander.has_type(PokemonType.WATER)

    def test_frozen(self, pikachu):
        with pytest.raises(ValidationError):
            pikachu.name = "raichu"

    def test_needs_a_type(self, pikachu):
        with pytest.raises(ValidationError):
            Pokemon(id=1, name="typeless", types=(), base_stats=pikachu.base_stats)

    def test_at_most_two_types(self, pikachu):
        with pytest.raises(ValidationError):
            Pokemon(
                id=1,
                name="triple",
                types=(PokemonType.FIRE, PokemonType.WATER, PokemonType.GRASS),
                base_stats=pikachu.base_stats,
            )

    def test_at_most_four_moves(self, pikachu, tackle):
        with pytest.raises(ValidationError):
            Pokemon(
                id=1,
                name="overloaded",
                types=(PokemonType.NORMAL,),
                base_stats=pikachu.base_stats,
                moves=(tackle,) * 5,
            )


class TestCombatant:
    """Tests for in-battle combatant state."""

    def test_from_pokemon(self, charmander):
        mon = Combatant.from_pokemon(charmander)
        assert mon.max_hp == mon.current_hp == 100
        assert mon.pp == {"tackle": 35, "ember": 25}
        assert mon.status == StatusEffect.NONE
        assert mon.last_move is None
        assert mon.name == "Charmander"

    def test_hp_bounds_validated(self, pikachu):
        with pytest.raises(ValidationError):
            Combatant(pokemon=pikachu, max_hp=100, current_hp=101)
        with pytest.raises(ValidationError):
            Combatant(pokemon=pikachu, max_hp=100, current_hp=-1)

    def test_take_damage(self, pikachu):
        mon = Combatant.from_pokemon(pikachu)
        assert mon.take_damage(30) == 30
        assert mon.current_hp == 70
        assert mon.hp_percent == 70.0

    def test_take_damage_overkill(self, pikachu):
        mon = Combatant.from_pokemon(pikachu)
        assert mon.take_damage(500) == 100
        assert mon.current_hp == 0
        assert mon.is_fainted

    def test_heal_capped_at_max(self, pikachu):
        mon = Combatant.from_pokemon(pikachu)
        mon.take_damage(10)
        assert mon.heal(50) == 10
        assert mon.current_hp == 100

    def test_heal_when_fainted(self, pikachu):
        mon = Combatant.from_pokemon(pikachu)
        mon.take_damage(100)
        assert mon.heal(50) == 0
        assert mon.is_fainted

    def test_get_move(self, charmander):
        mon = Combatant.from_pokemon(charmander)
        assert mon.get_move("ember").power == 40
        assert mon.get_move("flamethrower") is None

    def test_staged_stats(self, pikachu):
        mon = Combatant.from_pokemon(pikachu)
        mon.stages.attack = 2
        mon.stages.defense = -6
        assert mon.stat(StatName.ATTACK) == 110
        assert mon.stat(StatName.DEFENSE) == 10
