"""Scoring explanation screen."""

from typing import ClassVar, override

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Static

from guess_the_number.services.scoring import (
    ATTEMPTS_WEIGHT,
    MAX_SCORE,
    MIN_SCORE,
    TIME_WEIGHT,
    calculate_score,
)
from guess_the_number.ui.widgets import format_elapsed, format_score

from .base import BaseScreen

# (attempts, elapsed seconds, label)
EXAMPLE_ROUNDS: list[tuple[int, float, str]] = [
    (1, 3.0, "Perfect score"),
    (25, 60.0, "Good"),
    (40, 120.0, "Fair"),
    (100, 600.0, "Keep practicing"),
]


def example_lines() -> list[str]:
    """Describe the example rounds with their actual scores."""
    lines = []
    for attempts, elapsed, label in EXAMPLE_ROUNDS:
        score = calculate_score(elapsed, attempts)
        lines.append(f"  {attempts} attempts • {format_elapsed(elapsed)} → {format_score(score)}  ({label})")
    return lines


class ScoreInfoScreen(BaseScreen):
    """Explains the scoring formula and the tie-break rule."""

    SCREEN_TITLE: ClassVar[str] = "📊 How Scoring Works"
    SCREEN_NAME: ClassVar[str] = "score_info"

    CSS: ClassVar[str] = """
    ScoreInfoScreen {
        align: center middle;
    }

    #info-container {
        width: 72;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        border: solid $primary;
    }

    .info-section {
        margin-bottom: 1;
    }
    """

    @override
    def compose(self) -> ComposeResult:
        with VerticalScroll(id="info-container"):
            yield self.create_title_widget()
            yield Static(
                "The score rewards efficiency: fewer attempts and less time give a better "
                f"score, between {MIN_SCORE:g} and {MAX_SCORE:g} points.",
                classes="info-section",
            )
            yield Static(
                f"Score = ({ATTEMPTS_WEIGHT:g} ÷ attempts) + ({TIME_WEIGHT:g} ÷ seconds)",
                classes="info-section",
            )
            yield Static(
                "Ties: fewer attempts win, then less time. Strategy beats speed.",
                classes="info-section",
            )
            yield Static("\n".join(["Examples:", *example_lines()]), classes="info-section")
            yield Static(
                "Tip: use binary search. Start at 50, then 25 or 75 depending on the answer. "
                "Any number is found in at most 7 attempts.",
                classes="info-section",
            )
