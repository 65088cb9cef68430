"""Turn-based battle engine.

Resolves one turn at a time for a single-Pokemon-per-side battle:

    turn_start -> order actions -> status checks -> moves -> end-of-turn ticks

`resolve_turn` never mutates the state it is given. It works on a deep copy
and returns the new state together with the ordered event log. All
randomness is drawn from the injected random source, so the same state,
actions and seed always produce the same result.
"""

import logging

from pydantic import BaseModel, Field

from pokesim.core.abilities import get_ability
from pokesim.core.damage import RandomSource, compute_damage, roll_critical, roll_variance
from pokesim.core.errors import BattleFinishedError, IllegalActionError
from pokesim.core.events import (
    BattleEvent,
    DamageDealtEvent,
    DamageSource,
    FaintEvent,
    HpRestoredEvent,
    MoveMissedEvent,
    MoveUsedEvent,
    StatChangedEvent,
    TurnStartEvent,
)
from pokesim.core.moves import (
    DamageEffect,
    DamageClass,
    EffectBasis,
    EffectTarget,
    HealEffect,
    Move,
    MoveEffect,
    StatChangeEffect,
    StatusInflictEffect,
)
from pokesim.core.pokemon import Combatant, Pokemon
from pokesim.core.stat_stages import StatName, stage_multiplier
from pokesim.core.status import check_can_act, effective_speed, end_of_turn, inflict, physical_attack
from pokesim.core.type_chart import effectiveness

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class BattleAction(BaseModel):
    """The move one side chose for this turn."""

    move_name: str


class BattleState(BaseModel):
    """Everything needed to resolve the next turn."""

    combatants: list[Combatant] = Field(min_length=2, max_length=2)
    turn: int = 0
    finished: bool = False
    winner: int | None = None  # None while running, or on a double faint

    def combatant(self, side: int) -> Combatant:
        return self.combatants[side]

    def opponent(self, side: int) -> Combatant:
        return self.combatants[1 - side]

    @property
    def is_draw(self) -> bool:
        return self.finished and self.winner is None

    def hp(self) -> tuple[int, int]:
        return self.combatants[0].current_hp, self.combatants[1].current_hp


class TurnResult(BaseModel):
    """The state after a turn and the events that produced it."""

    state: BattleState
    events: list[BattleEvent] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Turn resolution engine
# ---------------------------------------------------------------------------

class BattleEngine:
    """Resolves one turn of a battle.

    Stateless -- takes a BattleState and returns a new one plus the events
    for that turn.
    """

    @staticmethod
    def create_battle(pokemon0: Pokemon, pokemon1: Pokemon) -> TurnResult:
        """Build the opening state and run enter-battle ability hooks."""
        state = BattleState(
            combatants=[Combatant.from_pokemon(pokemon0), Combatant.from_pokemon(pokemon1)]
        )
        events: list[BattleEvent] = []
        for side in (0, 1):
            ability = get_ability(state.combatant(side).pokemon.ability)
            if ability is not None:
                events.extend(
                    ability.on_enter_battle(state.combatant(side), state.opponent(side), side)
                )
        logger.debug(
            "Battle created: %s vs %s", pokemon0.name, pokemon1.name
        )
        return TurnResult(state=state, events=events)

    @staticmethod
    def validate_action(state: BattleState, side: int, action: BattleAction) -> Move:
        """Return the move an action names, or raise IllegalActionError."""
        combatant = state.combatant(side)
        move = combatant.get_move(action.move_name)
        if move is None:
            raise IllegalActionError(side, action.move_name, "move is not in the move set")
        if combatant.pp.get(move.name, 0) <= 0:
            raise IllegalActionError(side, action.move_name, "no PP left")
        return move

    @staticmethod
    def turn_order(state: BattleState, move0: Move, move1: Move) -> tuple[int, int]:
        """Higher priority first, then higher effective Speed, then side 0."""
        key0 = (move0.priority, effective_speed(state.combatant(0)))
        key1 = (move1.priority, effective_speed(state.combatant(1)))
        return (0, 1) if key0 >= key1 else (1, 0)

    @staticmethod
    def resolve_turn(
        state: BattleState,
        action0: BattleAction,
        action1: BattleAction,
        rng: RandomSource,
    ) -> TurnResult:
        """Resolve a single turn.

        Raises BattleFinishedError on a finished battle and
        IllegalActionError when an action names a move the combatant
        cannot use. Neither is raised once both checks pass.
        """
        if state.finished:
            raise BattleFinishedError(state.turn)

        moves = (
            BattleEngine.validate_action(state, 0, action0),
            BattleEngine.validate_action(state, 1, action1),
        )

        state = state.model_copy(deep=True)
        state.turn += 1
        events: list[BattleEvent] = [
            TurnStartEvent(
                turn=state.turn,
                hp=state.hp(),
                max_hp=(state.combatants[0].max_hp, state.combatants[1].max_hp),
            )
        ]

        order = BattleEngine.turn_order(state, moves[0], moves[1])
        for side in order:
            actor = state.combatant(side)
            # A combatant KO'd earlier this turn does not act
            if actor.is_fainted:
                continue

            can_act, status_events = check_can_act(actor, side, rng)
            events.extend(status_events)
            if not can_act:
                continue

            events.extend(BattleEngine._execute_move(state, side, moves[side], rng))

        # End-of-turn status ticks in side order
        for side in (0, 1):
            combatant = state.combatant(side)
            if combatant.is_fainted:
                continue
            events.extend(end_of_turn(combatant, side))
            if combatant.is_fainted:
                events.append(FaintEvent(side=side))

        fainted = [c.is_fainted for c in state.combatants]
        if any(fainted):
            state.finished = True
            if fainted[0] and fainted[1]:
                state.winner = None
            else:
                state.winner = 1 if fainted[0] else 0

        logger.debug(
            "Turn %d resolved: order=%s events=%d hp=%s finished=%s",
            state.turn, order, len(events), state.hp(), state.finished,
        )
        return TurnResult(state=state, events=events)

    @staticmethod
    def _execute_move(state: BattleState, side: int, move: Move, rng: RandomSource) -> list[BattleEvent]:
        """Execute one move. Returns events."""
        events: list[BattleEvent] = []
        target_side = 1 - side
        attacker = state.combatant(side)
        defender = state.combatant(target_side)

        attacker.pp[move.name] -= 1
        attacker.last_move = move.name
        events.append(MoveUsedEvent(side=side, move=move.name, move_id=move.id, move_type=move.type))

        # Accuracy check
        if move.accuracy is not None:
            threshold = move.accuracy * stage_multiplier(attacker.stages.get(StatName.ACCURACY))
            if rng.randint(1, 100) > threshold:
                events.append(MoveMissedEvent(side=side, move=move.name))
                return events

        multiplier = effectiveness(move.type, defender.pokemon.types)
        dealt = 0
        landed = True

        if move.is_damaging:
            if defender.is_fainted:
                landed = False
            else:
                dealt, hit_events = BattleEngine._deal_damage(
                    attacker, side, defender, target_side, move, multiplier, rng
                )
                events.extend(hit_events)
                landed = multiplier > 0

        if move.effect is None or not landed:
            return events

        # Status-inflicting moves fail against an immune type
        if (
            move.damage_class == DamageClass.STATUS
            and isinstance(move.effect, StatusInflictEffect)
            and move.effect.target == EffectTarget.TARGET
            and multiplier == 0
        ):
            return events

        recipient_side = side if move.effect.target == EffectTarget.USER else target_side
        if state.combatant(recipient_side).is_fainted:
            return events

        if move.effect_chance is not None and rng.randint(1, 100) > move.effect_chance:
            return events

        events.extend(
            BattleEngine._apply_effect(state, side, recipient_side, move, move.effect, dealt, rng)
        )
        return events

    @staticmethod
    def _deal_damage(
        attacker: Combatant,
        side: int,
        defender: Combatant,
        target_side: int,
        move: Move,
        multiplier: float,
        rng: RandomSource,
    ) -> tuple[int, list[BattleEvent]]:
        """Roll and apply the damage of a hit. Returns (HP removed, events)."""
        events: list[BattleEvent] = []
        critical = roll_critical(rng)
        variance = roll_variance(rng)

        if move.damage_class == DamageClass.PHYSICAL:
            attack = physical_attack(attacker)
            defense = defender.stat(StatName.DEFENSE)
        else:
            attack = attacker.stat(StatName.SPECIAL_ATTACK)
            defense = defender.stat(StatName.SPECIAL_DEFENSE)

        ability = get_ability(attacker.pokemon.ability)
        modifier = ability.damage_modifier(attacker, move) if ability is not None else 1.0

        damage = compute_damage(
            attack,
            defense,
            move.power,
            multiplier,
            critical,
            move.damage_class,
            variance=variance,
            stab=attacker.pokemon.has_type(move.type),
            modifier=modifier,
        )
        actual = defender.take_damage(damage)
        events.append(DamageDealtEvent(
            side=side,
            target=target_side,
            amount=actual,
            remaining_hp=defender.current_hp,
            critical=critical and multiplier > 0,
            effectiveness=multiplier,
            move=move.name,
        ))
        if defender.is_fainted:
            events.append(FaintEvent(side=target_side))
        return actual, events

    @staticmethod
    def _apply_effect(
        state: BattleState,
        side: int,
        recipient_side: int,
        move: Move,
        effect: MoveEffect,
        dealt: int,
        rng: RandomSource,
    ) -> list[BattleEvent]:
        """Apply a secondary effect that has already passed its chance roll."""
        events: list[BattleEvent] = []
        recipient = state.combatant(recipient_side)

        if isinstance(effect, StatChangeEffect):
            for stat, delta in effect.changes.items():
                old, new = recipient.stages.shift(stat, delta)
                if old != new:
                    events.append(StatChangedEvent(
                        side=recipient_side, stat=stat, old_stage=old, new_stage=new,
                    ))

        elif isinstance(effect, StatusInflictEffect):
            events.extend(inflict(recipient, recipient_side, effect.status, rng))

        elif isinstance(effect, DamageEffect):
            amount = _percent_of(effect.basis, effect.percent, dealt, recipient.max_hp)
            if amount > 0:
                actual = recipient.take_damage(amount)
                events.append(DamageDealtEvent(
                    side=side,
                    target=recipient_side,
                    amount=actual,
                    remaining_hp=recipient.current_hp,
                    source=DamageSource.RECOIL,
                    move=move.name,
                ))
                if recipient.is_fainted:
                    events.append(FaintEvent(side=recipient_side))

        elif isinstance(effect, HealEffect):
            amount = _percent_of(effect.basis, effect.percent, dealt, recipient.max_hp)
            healed = recipient.heal(amount)
            if healed > 0:
                events.append(HpRestoredEvent(
                    side=recipient_side, amount=healed, remaining_hp=recipient.current_hp,
                ))

        return events


def _percent_of(basis: EffectBasis, percent: int, dealt: int, max_hp: int) -> int:
    if basis == EffectBasis.DAMAGE:
        if dealt == 0:
            return 0
        return max(1, dealt * percent // 100)
    return max(1, max_hp * percent // 100)


# ---------------------------------------------------------------------------
# Module-level entry points
# ---------------------------------------------------------------------------

def create_battle(pokemon0: Pokemon, pokemon1: Pokemon) -> TurnResult:
    return BattleEngine.create_battle(pokemon0, pokemon1)


def resolve_turn(
    state: BattleState,
    action0: BattleAction,
    action1: BattleAction,
    rng: RandomSource,
) -> TurnResult:
    return BattleEngine.resolve_turn(state, action0, action1, rng)


def turn_order(state: BattleState, move0: Move, move1: Move) -> tuple[int, int]:
    return BattleEngine.turn_order(state, move0, move1)
