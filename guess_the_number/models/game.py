"""Game session data models."""

from dataclasses import dataclass
from enum import Enum


class GameState(Enum):
    """Lifecycle states of a game session."""
    IN_PROGRESS = "in_progress"
    WON = "won"


class Verdict(Enum):
    """Directional feedback for a single guess."""
    TOO_LOW = "too_low"
    TOO_HIGH = "too_high"
    WON = "won"


@dataclass(frozen=True)
class GuessOutcome:
    """Result of evaluating one guess."""
    verdict: Verdict
    attempts: int
    elapsed_seconds: float | None = None  # Only set on the winning guess

    @property
    def is_win(self) -> bool:
        return self.verdict is Verdict.WON


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable view of a session for the presentation layer."""
    attempts: int
    won: bool
    message: str
    low: int
    high: int
    last_verdict: Verdict | None = None
