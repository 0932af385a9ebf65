"""Leaderboard data models."""

from dataclasses import dataclass
from datetime import datetime

DEFAULT_PLAYER_NAME = "Player"


@dataclass(frozen=True)
class ScoreEntry:
    """A finished game recorded on the leaderboard."""
    id: str
    player_name: str
    elapsed_seconds: float
    attempts: int
    score: float  # 1.0-50.0
    recorded_at: datetime  # Informational, never used for ranking

    @property
    def tie_breaker(self) -> float:
        """Secondary ranking value, lower is better."""
        return self.attempts + self.elapsed_seconds / 60.0
