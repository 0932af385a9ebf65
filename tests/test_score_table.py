"""Tests for leaderboard display formatting."""

import pytest

from guess_the_number.ui.screens.score_info import EXAMPLE_ROUNDS, example_lines
from guess_the_number.ui.widgets import format_elapsed, format_rank, format_score


@pytest.mark.parametrize(
    "seconds, expected",
    [(0.0, "0s"), (42.4, "42s"), (59.0, "59s"), (60.0, "1m 0s"), (125.9, "2m 5s"), (3600.0, "60m 0s")],
)
def test_format_elapsed(seconds: float, expected: str) -> None:
    assert format_elapsed(seconds) == expected


@pytest.mark.parametrize("score, expected", [(50.0, "50"), (27.5, "27.50"), (1.0, "1"), (33.333, "33.33")])
def test_format_score(score: float, expected: str) -> None:
    assert format_score(score) == expected


def test_podium_ranks_get_badges() -> None:
    assert format_rank(1) == "🥇 1"
    assert format_rank(2) == "🥈 2"
    assert format_rank(3) == "🥉 3"
    assert format_rank(4) == "4"


def test_example_rounds_show_real_scores() -> None:
    lines = example_lines()

    assert len(lines) == len(EXAMPLE_ROUNDS)
    assert "→ 50" in lines[0]
    assert "→ 45" in lines[1]
    assert "→ 27.50" in lines[2]
    assert "→ 10.50" in lines[3]
