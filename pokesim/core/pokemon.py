"""Pokemon identity and in-battle combatant state."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pokesim.core.moves import Move, StatusEffect
from pokesim.core.stat_stages import StatName, StatStages, effective_stat
from pokesim.core.type_chart import PokemonType


class BaseStats(BaseModel):
    """The six base stats of a species."""

    model_config = ConfigDict(frozen=True)

    hp: int = Field(ge=1)
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    special_attack: int = Field(ge=0)
    special_defense: int = Field(ge=0)
    speed: int = Field(ge=0)

    def get(self, stat: StatName) -> int:
        if stat == StatName.ACCURACY:
            raise ValueError("Accuracy has no base stat")
        return getattr(self, StatName(stat).value.replace("-", "_"))


class Pokemon(BaseModel):
    """A normalized, immutable Pokemon ready to enter battle."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str

    # Ordered, the first type is primary
    types: tuple[PokemonType, ...] = Field(min_length=1, max_length=2)
    base_stats: BaseStats
    ability: str = "none"
    moves: tuple[Move, ...] = Field(default=(), max_length=4)

    @property
    def display_name(self) -> str:
        return self.name.replace("-", " ").title()

    @property
    def types_display(self) -> str:
        return "/".join(t.value.capitalize() for t in self.types)

    def has_type(self, type_: PokemonType) -> bool:
        return type_ in self.types


class Combatant(BaseModel):
    """A Pokemon's mutable state for the length of one battle.

    Max HP is the species' base HP; every combatant fights at the same level.
    """

    pokemon: Pokemon
    max_hp: int
    current_hp: int
    stages: StatStages = Field(default_factory=StatStages)

    # Status
    status: StatusEffect = StatusEffect.NONE
    sleep_turns: int = 0  # Turns remaining while asleep

    # Remaining PP by move name
    pp: dict[str, int] = Field(default_factory=dict)
    last_move: str | None = None

    @model_validator(mode="after")
    def _check_hp(self) -> "Combatant":
        if not 0 <= self.current_hp <= self.max_hp:
            raise ValueError(f"current_hp must be in [0, {self.max_hp}], got {self.current_hp}")
        return self

    @classmethod
    def from_pokemon(cls, pokemon: Pokemon) -> "Combatant":
        hp = pokemon.base_stats.hp
        return cls(
            pokemon=pokemon,
            max_hp=hp,
            current_hp=hp,
            pp={m.name: m.pp for m in pokemon.moves},
        )

    @property
    def name(self) -> str:
        return self.pokemon.display_name

    @property
    def is_fainted(self) -> bool:
        return self.current_hp == 0

    @property
    def hp_percent(self) -> float:
        return (self.current_hp / self.max_hp) * 100

    def get_move(self, name: str) -> Move | None:
        for move in self.pokemon.moves:
            if move.name == name:
                return move
        return None

    def stat(self, stat: StatName) -> int:
        """Base stat with the current stage applied."""
        divisor = stat in (StatName.DEFENSE, StatName.SPECIAL_DEFENSE)
        return effective_stat(self.pokemon.base_stats.get(stat), self.stages.get(stat), divisor=divisor)

    def take_damage(self, amount: int) -> int:
        """Apply damage, return actual amount dealt. Clamps to 0."""
        actual = min(amount, self.current_hp)
        self.current_hp -= actual
        return actual

    def heal(self, amount: int) -> int:
        """Heal HP, return actual amount healed. Clamps to max_hp."""
        if self.is_fainted:
            return 0
        actual = min(amount, self.max_hp - self.current_hp)
        self.current_hp += actual
        return actual
