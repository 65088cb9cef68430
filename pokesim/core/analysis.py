"""Post-battle analysis: achievements, a rating, and comparison with the
previous battle."""

from pydantic import BaseModel, Field

from pokesim.core.analytics import BattleStats

FAST_VICTORY_TURNS = 3
TYPE_MASTER_HITS = 5
CRITICAL_MASTER_HITS = 3
TURN_DIFF_THRESHOLD = 2
DAMAGE_DIFF_THRESHOLD = 50


class BattleSnapshot(BaseModel):
    """Compact per-battle record kept for comparing battles."""

    total_turns: int = 0
    damage_dealt: int = 0
    damage_received: int = 0
    duration_seconds: float = 0.0

    @classmethod
    def from_stats(cls, stats: BattleStats, player_side: int = 0) -> "BattleSnapshot":
        return cls(
            total_turns=stats.total_turns,
            damage_dealt=stats.damage_dealt[player_side],
            damage_received=stats.damage_received[player_side],
            duration_seconds=stats.duration_seconds,
        )

    def to_record(self) -> dict[str, int | float]:
        """Flat key-value record."""
        return self.model_dump()

    @classmethod
    def from_record(cls, record: dict[str, int | float]) -> "BattleSnapshot":
        return cls.model_validate(record)


class BattleAnalysis(BaseModel):
    """Summary shown after a battle."""

    headline: str
    details: list[str] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)
    score: int = 0  # 0-100
    stars: int = 1  # 1-5
    comparisons: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _damage_ratio(stats: BattleStats, side: int) -> float:
    dealt = stats.damage_dealt[side]
    total = dealt + stats.damage_received[side]
    return dealt / total if total > 0 else 0.5


def _was_behind(stats: BattleStats, side: int) -> bool:
    """True if the side trailed in HP fraction at any turn boundary."""
    if len(stats.hp_history) < 2:
        return False
    opponent = 1 - side
    for sample in stats.hp_history:
        mine = sample.hp[side] / max(1, stats.max_hp[side])
        theirs = sample.hp[opponent] / max(1, stats.max_hp[opponent])
        if mine < theirs:
            return True
    return False


def build_achievements(stats: BattleStats, player_side: int, winner: int | None) -> list[str]:
    won = winner == player_side
    achievements: list[str] = []

    if won and stats.total_turns < FAST_VICTORY_TURNS:
        achievements.append("Fast Victory")
    if won and stats.damage_received[player_side] == 0:
        achievements.append("Perfect Defense")
    if won and _was_behind(stats, player_side):
        achievements.append("Comeback King")
    if stats.super_effective_hits >= TYPE_MASTER_HITS:
        achievements.append("Type Master")
    if stats.total_critical_hits >= CRITICAL_MASTER_HITS:
        achievements.append("Critical Master")

    return achievements


def build_headline(stats: BattleStats, player_side: int, winner: int | None) -> str:
    if winner is None:
        return "A hard-fought draw."

    player_hp = stats.hp_fraction(player_side)
    opponent_hp = stats.hp_fraction(1 - player_side)

    if winner == player_side:
        if stats.total_turns < FAST_VICTORY_TURNS:
            return "Victory by a landslide!"
        if player_hp < 0.1:
            return "You pulled off a clutch victory!"
        if player_hp < 0.25:
            return "Victory, but it was a close call!"
        if stats.damage_received[player_side] == 0:
            return "Perfect battle!"
        if _was_behind(stats, player_side):
            return "Comeback victory!"
        return "Solid victory!"

    if stats.total_turns < FAST_VICTORY_TURNS:
        return "Swift defeat..."
    if opponent_hp < 0.25:
        return "So close! Just a bit more damage and you had it."
    if stats.damage_dealt[player_side] == 0:
        return "A rough loss, you couldn't land a solid hit."
    return "Defeat this time, but valuable data for next run."


def build_details(stats: BattleStats, player_side: int, winner: int | None) -> list[str]:
    details: list[str] = []
    ratio = _damage_ratio(stats, player_side)

    if winner == player_side and stats.total_turns < FAST_VICTORY_TURNS:
        details.append("You overwhelmed your opponent before they could react.")

    if ratio >= 0.7:
        details.append("You won the damage race convincingly.")
    elif ratio <= 0.4:
        details.append("The opponent dealt significantly more damage overall.")

    if stats.super_effective_hits >= 3:
        details.append("You repeatedly hit for super-effective damage.")
    elif stats.super_effective_hits == 0:
        details.append("No super-effective hits. Consider your type matchups.")

    return details


def compute_rating(
    stats: BattleStats, player_side: int, winner: int | None, achievements: list[str]
) -> tuple[int, int]:
    """Return (score 0-100, stars 1-5)."""
    score = 40.0 if winner == player_side else 15.0

    # Fewer turns is better, capped at 10
    score += 20 / max(1, min(10, stats.total_turns))
    score += _damage_ratio(stats, player_side) * 20
    score += min(stats.super_effective_hits, 5) / 5 * 10
    score += min(len(achievements) * 5, 20)

    clamped = max(0, min(100, round(score)))
    stars = max(1, min(5, round(clamped / 100 * 5)))
    return clamped, stars


def compare_snapshots(current: BattleSnapshot, previous: BattleSnapshot | None) -> list[str]:
    if previous is None:
        return []
    messages: list[str] = []

    turn_diff = previous.total_turns - current.total_turns
    if turn_diff >= TURN_DIFF_THRESHOLD:
        messages.append(f"Finished {turn_diff} turns faster than your last battle!")
    elif turn_diff <= -TURN_DIFF_THRESHOLD:
        messages.append(f"This battle took {-turn_diff} more turns than last time.")

    dealt_diff = current.damage_dealt - previous.damage_dealt
    if dealt_diff >= DAMAGE_DIFF_THRESHOLD:
        messages.append(f"You dealt {dealt_diff} more damage than in your previous battle.")
    elif dealt_diff <= -DAMAGE_DIFF_THRESHOLD:
        messages.append(f"You dealt {-dealt_diff} less damage than in your previous battle.")

    received_diff = previous.damage_received - current.damage_received
    if received_diff >= DAMAGE_DIFF_THRESHOLD:
        messages.append(f"You took {received_diff} less damage than last time.")
    elif received_diff <= -DAMAGE_DIFF_THRESHOLD:
        messages.append(f"You took {-received_diff} more damage than last time. Watch your defenses.")

    return messages


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def analyze_battle(
    stats: BattleStats,
    player_side: int = 0,
    winner: int | None = None,
    previous: BattleSnapshot | None = None,
) -> BattleAnalysis:
    """Summarize a finished battle from one side's point of view."""
    achievements = build_achievements(stats, player_side, winner)
    score, stars = compute_rating(stats, player_side, winner, achievements)
    return BattleAnalysis(
        headline=build_headline(stats, player_side, winner),
        details=build_details(stats, player_side, winner),
        achievements=achievements,
        score=score,
        stars=stars,
        comparisons=compare_snapshots(BattleSnapshot.from_stats(stats, player_side), previous),
    )
