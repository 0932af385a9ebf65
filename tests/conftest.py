"""Shared fixtures and test doubles."""

from datetime import datetime, timezone

import pytest

from guess_the_number.services import GameSession, LeaderboardStore, MemoryStorage


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


class FixedRandom:
    """Random source returning a preset sequence of values."""

    def __init__(self, *values: int) -> None:
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def uniform(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


class FailingStorage(MemoryStorage):
    """Storage whose writes always fail."""

    def __init__(self, error: Exception | None = None) -> None:
        super().__init__()
        self.error = error or OSError("disk full")
        self.attempted_writes = 0

    def set(self, key: str, data: bytes) -> None:
        self.attempted_writes += 1
        raise self.error


def fixed_time() -> datetime:
    return datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def leaderboard(storage: MemoryStorage) -> LeaderboardStore:
    return LeaderboardStore(storage, clock=fixed_time)


@pytest.fixture
def session_factory(clock: FakeClock):
    """Build a session whose secret is known in advance."""

    def factory(*secrets: int) -> GameSession:
        return GameSession(clock=clock, random_source=FixedRandom(*secrets))

    return factory
