from __future__ import annotations

from dataclasses import dataclass


# =========================================================
# Scoring policy
# - base: flat reward for every correct match
# - streak: +streak_step per consecutive correct click after the first, capped
# - time: linear decay from time_bonus_max to 0 over time_bonus_window seconds
# =========================================================
@dataclass(frozen=True)
class ScoringPolicy:
    base_points: int = 100
    streak_step: int = 25
    streak_cap: int = 100
    time_bonus_max: int = 50
    time_bonus_window: float = 10.0


DEFAULT_POLICY = ScoringPolicy()


@dataclass(frozen=True)
class ScoreBreakdown:
    base: int
    streak_bonus: int
    time_bonus: int

    @property
    def total(self) -> int:
        return self.base + self.streak_bonus + self.time_bonus


def streak_bonus(streak_length: int, policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    if streak_length <= 1:
        return 0
    return max(0, min(policy.streak_step * (streak_length - 1), policy.streak_cap))


def time_bonus(elapsed_seconds: float, policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    if policy.time_bonus_window <= 0:
        return 0
    elapsed = max(0.0, float(elapsed_seconds))
    if elapsed >= policy.time_bonus_window:
        return 0
    raw = round(policy.time_bonus_max * (1.0 - elapsed / policy.time_bonus_window))
    return max(0, min(int(raw), policy.time_bonus_max))


def score(elapsed_seconds: float, streak_length: int, policy: ScoringPolicy = DEFAULT_POLICY) -> ScoreBreakdown:
    """Score one correct match. `streak_length` includes the match being scored."""
    return ScoreBreakdown(
        base=max(0, policy.base_points),
        streak_bonus=streak_bonus(streak_length, policy),
        time_bonus=time_bonus(elapsed_seconds, policy),
    )
