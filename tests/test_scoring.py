"""Tests for the scoring and ranking rules."""

from datetime import datetime, timezone

import pytest
from hypothesis import given, strategies as st

from guess_the_number.models import ScoreEntry
from guess_the_number.services.scoring import (
    MAX_SCORE,
    MIN_SCORE,
    calculate_score,
    rank_entries,
    rank_key,
    tie_breaker,
)

attempts_strategy = st.integers(min_value=1, max_value=100_000)
elapsed_strategy = st.floats(min_value=0.0, max_value=1e7, allow_nan=False, allow_infinity=False)


def make_entry(entry_id: str, score: float, attempts: int, elapsed: float) -> ScoreEntry:
    return ScoreEntry(
        id=entry_id,
        player_name=entry_id,
        elapsed_seconds=elapsed,
        attempts=attempts,
        score=score,
        recorded_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class TestCalculateScore:
    @given(elapsed_strategy, attempts_strategy)
    def test_score_always_within_bounds(self, elapsed: float, attempts: int) -> None:
        score = calculate_score(elapsed, attempts)
        assert MIN_SCORE <= score <= MAX_SCORE

    def test_one_attempt_in_three_seconds_is_clamped_to_max(self) -> None:
        assert calculate_score(3, 1) == 50.0

    def test_ten_attempts_in_a_minute_is_clamped_to_max(self) -> None:
        # 1000/10 + 300/60 = 105
        assert calculate_score(60, 10) == 50.0

    def test_unclamped_mid_range(self) -> None:
        # 1000/50 + 300/300 = 21
        assert calculate_score(300, 50) == pytest.approx(21.0)

    def test_another_unclamped_value(self) -> None:
        # 1000/40 + 300/120 = 27.5
        assert calculate_score(120, 40) == pytest.approx(27.5)

    def test_sub_second_time_counts_as_one_second(self) -> None:
        assert calculate_score(0.0, 1000) == calculate_score(1.0, 1000)
        assert calculate_score(0.25, 1000) == calculate_score(1.0, 1000)

    def test_time_factor_below_cap(self) -> None:
        # 1000/1000 + 300/10 = 31
        assert calculate_score(10, 1000) == pytest.approx(31.0)

    def test_minimum_clamp(self) -> None:
        # 1000/100000 + 300/1e6 is far below 1
        assert calculate_score(1_000_000, 100_000) == 1.0

    def test_zero_attempts_rejected(self) -> None:
        with pytest.raises(ValueError):
            calculate_score(10, 0)

    def test_negative_elapsed_rejected(self) -> None:
        with pytest.raises(ValueError):
            calculate_score(-1, 3)

    @given(elapsed_strategy, st.integers(min_value=1, max_value=1000))
    def test_more_attempts_never_score_higher(self, elapsed: float, attempts: int) -> None:
        assert calculate_score(elapsed, attempts + 1) <= calculate_score(elapsed, attempts)


class TestTieBreaker:
    def test_attempts_plus_minutes(self) -> None:
        assert tie_breaker(90, 4) == pytest.approx(5.5)

    def test_entry_property_matches_function(self) -> None:
        entry = make_entry("a", 50.0, 4, 90)
        assert entry.tie_breaker == tie_breaker(90, 4)


class TestRanking:
    def test_higher_score_first(self) -> None:
        low = make_entry("low", 10.0, 5, 30)
        high = make_entry("high", 20.0, 50, 300)
        assert [e.id for e in rank_entries([low, high])] == ["high", "low"]

    def test_equal_score_lower_tie_breaker_first(self) -> None:
        slow = make_entry("slow", 50.0, 3, 120)  # 5.0
        fast = make_entry("fast", 50.0, 3, 30)  # 3.5
        assert [e.id for e in rank_entries([slow, fast])] == ["fast", "slow"]
        assert [e.id for e in rank_entries([fast, slow])] == ["fast", "slow"]

    def test_fewer_attempts_beat_less_time(self) -> None:
        quick = make_entry("quick", 50.0, 5, 6)  # 5.1
        careful = make_entry("careful", 50.0, 4, 60)  # 5.0
        assert rank_entries([quick, careful])[0].id == "careful"

    def test_full_tie_keeps_insertion_order(self) -> None:
        first = make_entry("first", 50.0, 2, 10)
        second = make_entry("second", 50.0, 2, 10)
        assert [e.id for e in rank_entries([first, second])] == ["first", "second"]
        assert [e.id for e in rank_entries([second, first])] == ["second", "first"]

    def test_limit_truncates(self) -> None:
        entries = [make_entry(str(i), float(i + 1), 1, 1) for i in range(15)]
        ranked = rank_entries(entries, limit=10)
        assert len(ranked) == 10
        assert ranked[0].score == 15.0

    def test_rank_key_orders_best_lowest(self) -> None:
        better = make_entry("b", 30.0, 3, 3)
        worse = make_entry("w", 20.0, 3, 3)
        assert rank_key(better) < rank_key(worse)
