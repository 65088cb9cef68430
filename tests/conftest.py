"""Shared fixtures for pokesim tests."""

from collections import deque

import pytest
from typer.testing import CliRunner

from pokesim.core.moves import DamageClass, Move
from pokesim.core.pokemon import BaseStats, Pokemon
from pokesim.core.type_chart import PokemonType
from pokesim.utils import config as config_module


class ScriptedRandom:
    """Random source that replays scripted values.

    Once a script runs out the defaults are "nothing special happens":
    random() returns 0.99 and randint/uniform return their upper bound,
    so accuracy checks hit, no critical hit lands, and variance is 1.0.
    """

    def __init__(self, randoms=(), ints=(), uniforms=()):
        self.randoms = deque(randoms)
        self.ints = deque(ints)
        self.uniforms = deque(uniforms)
        self.calls: list[tuple] = []

    def random(self) -> float:
        value = self.randoms.popleft() if self.randoms else 0.99
        self.calls.append(("random", value))
        return value

    def randint(self, a: int, b: int) -> int:
        value = self.ints.popleft() if self.ints else b
        self.calls.append(("randint", a, b, value))
        return value

    def uniform(self, a: float, b: float) -> float:
        value = self.uniforms.popleft() if self.uniforms else b
        self.calls.append(("uniform", a, b, value))
        return value


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRandom sources."""
    return ScriptedRandom


# Move fixtures
@pytest.fixture
def tackle() -> Move:
    return Move(id=33, name="tackle", type=PokemonType.NORMAL, power=40, accuracy=100, pp=35)


@pytest.fixture
def ember() -> Move:
    return Move(
        id=52,
        name="ember",
        type=PokemonType.FIRE,
        damage_class=DamageClass.SPECIAL,
        power=40,
        accuracy=100,
        pp=25,
    )


# Pokemon fixtures
@pytest.fixture
def pikachu(tackle) -> Pokemon:
    return Pokemon(
        id=25,
        name="pikachu",
        types=(PokemonType.ELECTRIC,),
        base_stats=BaseStats(
            hp=100, attack=55, defense=40, special_attack=50, special_defense=50, speed=90
        ),
        ability="static",
        moves=(tackle,),
    )


@pytest.fixture
def charmander(tackle, ember) -> Pokemon:
    return Pokemon(
        id=4,
        name="charmander",
        types=(PokemonType.FIRE,),
        base_stats=BaseStats(
            hp=100, attack=52, defense=43, special_attack=60, special_defense=50, speed=65
        ),
        ability="blaze",
        moves=(tackle, ember),
    )


# PokeAPI record fixtures
@pytest.fixture
def pokemon_record() -> dict:
    """A trimmed PokeAPI pokemon/6 record."""
    return {
        "id": 6,
        "name": "charizard",
        "types": [
            {"slot": 2, "type": {"name": "flying", "url": ""}},
            {"slot": 1, "type": {"name": "fire", "url": ""}},
        ],
        "stats": [
            {"base_stat": 78, "effort": 0, "stat": {"name": "hp", "url": ""}},
            {"base_stat": 84, "effort": 0, "stat": {"name": "attack", "url": ""}},
            {"base_stat": 78, "effort": 0, "stat": {"name": "defense", "url": ""}},
            {"base_stat": 109, "effort": 3, "stat": {"name": "special-attack", "url": ""}},
            {"base_stat": 85, "effort": 0, "stat": {"name": "special-defense", "url": ""}},
            {"base_stat": 100, "effort": 0, "stat": {"name": "speed", "url": ""}},
        ],
        "abilities": [
            {"ability": {"name": "solar-power", "url": ""}, "is_hidden": True, "slot": 3},
            {"ability": {"name": "blaze", "url": ""}, "is_hidden": False, "slot": 1},
        ],
        "moves": [
            {"move": {"name": "scratch", "url": ""}},
            {"move": {"name": "ember", "url": ""}},
            {"move": {"name": "growl", "url": ""}},
        ],
    }


@pytest.fixture
def move_record():
    """Factory for PokeAPI move records."""

    def _make(**overrides) -> dict:
        record = {
            "id": 10,
            "name": "scratch",
            "accuracy": 100,
            "effect_chance": None,
            "pp": 35,
            "priority": 0,
            "power": 40,
            "damage_class": {"name": "physical", "url": ""},
            "type": {"name": "normal", "url": ""},
            "target": {"name": "selected-pokemon", "url": ""},
            "meta": {
                "ailment": {"name": "none", "url": ""},
                "ailment_chance": 0,
                "drain": 0,
                "healing": 0,
                "stat_chance": 0,
            },
            "stat_changes": [],
        }
        record.update(overrides)
        return record

    return _make


# Utility fixtures
@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI runner for command tests."""
    return CliRunner()


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point config paths at a temporary directory."""
    monkeypatch.setattr(config_module.config, "cache_dir", tmp_path / "cache")
    return config_module.config
