"""Scoring and ranking rules for finished games."""

import math

from ..models import ScoreEntry

MIN_SCORE = 1.0
MAX_SCORE = 50.0

ATTEMPTS_WEIGHT = 1000.0
TIME_WEIGHT = 300.0


def calculate_score(elapsed_seconds: float, attempts: int) -> float:
    """Calculate the efficiency score of a won game.

    Fewer attempts and less time both raise the score; attempts weigh more
    than time at the margin. Elapsed times under one second count as one
    second.

    Returns a value in [1.0, 50.0].
    """
    if attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {attempts}")
    if not math.isfinite(elapsed_seconds) or elapsed_seconds < 0:
        raise ValueError(f"elapsed_seconds must be a non-negative number, got {elapsed_seconds}")

    attempts_factor = ATTEMPTS_WEIGHT / attempts
    time_factor = TIME_WEIGHT / max(elapsed_seconds, 1.0)
    raw = attempts_factor + time_factor
    return max(min(raw, MAX_SCORE), MIN_SCORE)


def tie_breaker(elapsed_seconds: float, attempts: int) -> float:
    """Secondary ranking value: attempts plus elapsed minutes. Lower is better."""
    return attempts + elapsed_seconds / 60.0


def rank_key(entry: ScoreEntry) -> tuple[float, float]:
    """Sort key placing the best entry first.

    Used with a stable sort, so entries with identical keys keep their
    insertion order.
    """
    return (-entry.score, entry.tie_breaker)


def rank_entries(entries: list[ScoreEntry], limit: int | None = None) -> list[ScoreEntry]:
    """Return entries in leaderboard order, optionally truncated to ``limit``."""
    ranked = sorted(entries, key=rank_key)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked
