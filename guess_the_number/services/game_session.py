"""Game session service: the secret number and the guess state machine."""

import random
import re
import time
from typing import Protocol

import structlog

from ..models import GameSnapshot, GameState, GuessOutcome, Verdict
from .errors import InvalidInputError

log = structlog.stdlib.get_logger()

DEFAULT_LOW = 0
DEFAULT_HIGH = 100

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


class Clock(Protocol):
    """Source of monotonic timestamps in seconds."""

    def now(self) -> float: ...


class RandomSource(Protocol):
    """Source of uniformly distributed integers."""

    def uniform(self, low: int, high: int) -> int:
        """Return an integer in the closed range [low, high]."""
        ...


class MonotonicClock:
    """Clock backed by ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic()


class SystemRandomSource:
    """Random source backed by ``random.Random``."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def uniform(self, low: int, high: int) -> int:
        return self._random.randint(low, high)


def parse_guess(value: str | int) -> int:
    """Parse a player's guess into an integer.

    Raises:
        InvalidInputError: If the value is not a whole number
    """
    if isinstance(value, bool):
        raise InvalidInputError(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_PATTERN.match(text):
            return int(text)
    raise InvalidInputError(value)


def prompt_message(low: int, high: int) -> str:
    return f"Guess the number between {low} and {high}"


class GameSession:
    """One round of the guessing game.

    The session starts in progress with a freshly drawn secret. Each valid
    guess counts as an attempt and yields a verdict; the matching guess moves
    the session to the won state, where further guesses are ignored until
    ``new_game`` is called.
    """

    MESSAGES: dict[Verdict, str] = {
        Verdict.TOO_LOW: "Higher!",
        Verdict.TOO_HIGH: "Lower!",
    }

    def __init__(
        self,
        clock: Clock | None = None,
        random_source: RandomSource | None = None,
        low: int = DEFAULT_LOW,
        high: int = DEFAULT_HIGH,
    ) -> None:
        self._clock: Clock = clock or MonotonicClock()
        self._random: RandomSource = random_source or SystemRandomSource()
        self._low = low
        self._high = high
        self._secret = 0
        self._attempts = 0
        self._started_at = 0.0
        self._state = GameState.IN_PROGRESS
        self._message = ""
        self._last_verdict: Verdict | None = None
        self.new_game(low, high)

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def won(self) -> bool:
        return self._state is GameState.WON

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def message(self) -> str:
        return self._message

    @property
    def started_at(self) -> float:
        return self._started_at

    @property
    def secret(self) -> int:
        return self._secret

    def new_game(self, low: int | None = None, high: int | None = None) -> GameSnapshot:
        """Start a new round, drawing a fresh secret from [low, high].

        Args:
            low: Lower bound of the range (defaults to the current one)
            high: Upper bound of the range (defaults to the current one)

        Returns:
            Snapshot of the reset session
        """
        low = self._low if low is None else low
        high = self._high if high is None else high
        if low > high:
            raise ValueError(f"Invalid range: [{low}, {high}]")

        self._low = low
        self._high = high
        self._secret = self._random.uniform(low, high)
        self._attempts = 0
        self._started_at = self._clock.now()
        self._state = GameState.IN_PROGRESS
        self._last_verdict = None
        self._message = prompt_message(low, high)

        log.info("New game started", low=low, high=high)
        return self.snapshot()

    def guess(self, value: str | int) -> GuessOutcome | None:
        """Evaluate one guess.

        Args:
            value: The player's guess, as typed or already parsed

        Returns:
            The outcome of the guess, or None if the round is already won,
            whatever the value

        Raises:
            InvalidInputError: If the round is in progress and the value is not
                a whole number. Neither the attempt counter nor the state changes.
        """
        if self._state is GameState.WON:
            log.debug("Guess ignored, round already won", attempts=self._attempts)
            return None

        try:
            number = parse_guess(value)
        except InvalidInputError:
            self._message = "Please enter a valid number"
            log.debug("Rejected guess", value=str(value)[:20])
            raise

        self._attempts += 1

        if number < self._secret:
            outcome = GuessOutcome(Verdict.TOO_LOW, self._attempts)
        elif number > self._secret:
            outcome = GuessOutcome(Verdict.TOO_HIGH, self._attempts)
        else:
            elapsed = max(self._clock.now() - self._started_at, 0.0)
            self._state = GameState.WON
            outcome = GuessOutcome(Verdict.WON, self._attempts, elapsed_seconds=elapsed)
            log.info("Round won", attempts=self._attempts, elapsed_seconds=round(elapsed, 3))

        self._last_verdict = outcome.verdict
        self._message = self._message_for(outcome)
        return outcome

    def _message_for(self, outcome: GuessOutcome) -> str:
        if outcome.is_win:
            noun = "attempt" if outcome.attempts == 1 else "attempts"
            return f"Found it in {outcome.attempts} {noun}!"
        return self.MESSAGES[outcome.verdict]

    def snapshot(self) -> GameSnapshot:
        """Return an immutable view of the session."""
        return GameSnapshot(
            attempts=self._attempts,
            won=self.won,
            message=self._message,
            low=self._low,
            high=self._high,
            last_verdict=self._last_verdict,
        )
