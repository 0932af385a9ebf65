"""Leaderboard service: ranking, retention and persistence of finished games."""

import json
import math
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import structlog

from ..models import DEFAULT_PLAYER_NAME, ScoreEntry
from .errors import DeserializationError, PersistenceWriteError, ValidationError, handle_error
from .scoring import calculate_score, rank_entries, rank_key, tie_breaker
from .storage import Storage

log = structlog.stdlib.get_logger()

LEADERBOARD_KEY = "leaderboard"
DEFAULT_MAX_ENTRIES = 10


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def normalize_player_name(name: str | None) -> str:
    """Return the display name, falling back to the placeholder when blank."""
    cleaned = (name or "").strip()
    return cleaned or DEFAULT_PLAYER_NAME


def entry_to_dict(entry: ScoreEntry) -> dict[str, Any]:
    """Convert a ScoreEntry to a dictionary for JSON serialization."""
    return {
        "id": entry.id,
        "player_name": entry.player_name,
        "elapsed_seconds": entry.elapsed_seconds,
        "attempts": entry.attempts,
        "score": entry.score,
        "recorded_at": entry.recorded_at.isoformat(),
    }


def entry_from_dict(data: Any) -> ScoreEntry:
    """Convert a decoded JSON record to a ScoreEntry.

    Raises:
        ValueError: If a field is missing or has an impossible value
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object, got {type(data).__name__}")

    entry_id = data["id"]
    player_name = data["player_name"]
    attempts = data["attempts"]
    elapsed = data["elapsed_seconds"]
    score = data["score"]

    if not isinstance(entry_id, str) or not entry_id:
        raise ValueError("id must be a non-empty string")
    if not isinstance(player_name, str) or not player_name:
        raise ValueError("player_name must be a non-empty string")
    if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1:
        raise ValueError(f"attempts must be a positive integer, got {attempts!r}")
    if isinstance(elapsed, bool) or not isinstance(elapsed, (int, float)) or not math.isfinite(elapsed) or elapsed < 0:
        raise ValueError(f"elapsed_seconds must be a non-negative number, got {elapsed!r}")
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
        raise ValueError(f"score must be a number, got {score!r}")

    recorded_at = datetime.fromisoformat(str(data["recorded_at"]))

    return ScoreEntry(
        id=entry_id,
        player_name=player_name,
        elapsed_seconds=float(elapsed),
        attempts=attempts,
        score=float(score),
        recorded_at=recorded_at,
    )


def encode_entries(entries: list[ScoreEntry]) -> bytes:
    """Serialize the ordered leaderboard as one JSON document."""
    payload = [entry_to_dict(entry) for entry in entries]
    return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")


def decode_entries(data: bytes) -> list[ScoreEntry]:
    """Deserialize a leaderboard JSON document.

    Raises:
        json.JSONDecodeError: If the document is not valid JSON
        UnicodeDecodeError: If the bytes are not UTF-8
        ValueError: If the document is not a list of valid records
    """
    payload = json.loads(data.decode("utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"Expected JSON array, got {type(payload).__name__}")
    try:
        return [entry_from_dict(record) for record in payload]
    except KeyError as e:
        raise ValueError(f"Missing field: {e}") from e


class LeaderboardStore:
    """The ranked, bounded list of past results.

    ``submit`` is the only mutating operation: it scores a finished game,
    inserts it at its rank, truncates the list to ``max_entries`` and persists
    the whole list. Reading and writing storage are both fail-soft: a corrupt
    value loads as an empty leaderboard and a failed write is logged while the
    in-memory ranking stays correct.
    """

    def __init__(
        self,
        storage: Storage,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        key: str = LEADERBOARD_KEY,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self._storage = storage
        self._key = key
        self._clock = clock
        self._id_factory = id_factory
        self.max_entries = max_entries
        self._entries: list[ScoreEntry] = []

    @property
    def entries(self) -> tuple[ScoreEntry, ...]:
        """Read-only ranked view, best first."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> list[ScoreEntry]:
        """Load the persisted leaderboard and make it the current one.

        Returns:
            The loaded entries in rank order; empty when nothing is stored or
            the stored value cannot be decoded
        """
        try:
            data = self._storage.get(self._key)
        except Exception as e:
            handle_error(
                DeserializationError("Saved leaderboard could not be read.", key=self._key, original_error=e),
                operation="load",
                component="leaderboard",
                context={"key": self._key},
            )
            self._entries = []
            return []

        if data is None:
            log.info("No saved leaderboard found", key=self._key)
            self._entries = []
            return []

        try:
            entries = decode_entries(data)
        except Exception as e:
            # Includes RecursionError on deep nesting and OverflowError on huge numbers
            handle_error(
                DeserializationError("Saved leaderboard could not be read and was ignored.", key=self._key, original_error=e),
                operation="load",
                component="leaderboard",
                context={"key": self._key},
            )
            self._entries = []
            return []

        ranked = rank_entries(entries, limit=self.max_entries)
        if len(ranked) < len(entries):
            log.info("Saved leaderboard truncated", stored=len(entries), kept=len(ranked))

        self._entries = ranked
        log.info("Leaderboard loaded", entry_count=len(ranked))
        return list(ranked)

    def persist(self, entries: list[ScoreEntry] | tuple[ScoreEntry, ...] | None = None) -> bool:
        """Write the full ordered list to storage as one value.

        Args:
            entries: Entries to write (defaults to the current leaderboard)

        Returns:
            True if the write succeeded, False if it failed and was logged
        """
        to_write = list(self._entries if entries is None else entries)
        try:
            data = encode_entries(to_write)
            self._storage.set(self._key, data)
        except Exception as e:
            handle_error(
                PersistenceWriteError("The leaderboard could not be saved.", key=self._key, original_error=e),
                operation="persist",
                component="leaderboard",
                context={"key": self._key, "entry_count": len(to_write)},
            )
            return False

        log.debug("Leaderboard saved", key=self._key, entry_count=len(to_write))
        return True

    def submit(self, player_name: str | None, elapsed_seconds: float, attempts: int) -> ScoreEntry:
        """Record a finished game.

        Args:
            player_name: Display name; blank names use the placeholder
            elapsed_seconds: Time from the start of the round to the winning guess
            attempts: Number of guesses including the winning one

        Returns:
            The created entry. Its rank is available from ``rank_of``; it may
            already have been truncated away if it did not make the board.

        Raises:
            ValidationError: If attempts or elapsed_seconds are out of range
        """
        if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1:
            raise ValidationError(
                "attempts must be a positive integer",
                field="attempts",
                value=attempts,
                constraints=["attempts >= 1"],
            )
        if not math.isfinite(elapsed_seconds) or elapsed_seconds < 0:
            raise ValidationError(
                "elapsed_seconds must be a non-negative number",
                field="elapsed_seconds",
                value=elapsed_seconds,
                constraints=["elapsed_seconds >= 0"],
            )

        entry = ScoreEntry(
            id=self._id_factory(),
            player_name=normalize_player_name(player_name),
            elapsed_seconds=float(elapsed_seconds),
            attempts=attempts,
            score=calculate_score(elapsed_seconds, attempts),
            recorded_at=self._clock(),
        )

        # Appending before a stable sort keeps earlier entries ahead on a full tie
        self._entries = rank_entries([*self._entries, entry], limit=self.max_entries)
        self.persist(self._entries)

        log.info(
            "Score submitted",
            player=entry.player_name,
            score=round(entry.score, 2),
            attempts=attempts,
            rank=self.rank_of(entry.id),
        )
        return entry

    def rank_of(self, entry_id: str) -> int | None:
        """Return the 1-based rank of an entry, or None if it is not on the board."""
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return index + 1
        return None

    def best(self) -> ScoreEntry | None:
        return self._entries[0] if self._entries else None

    def would_place(self, elapsed_seconds: float, attempts: int) -> bool:
        """Check whether a result would make the board without submitting it."""
        if len(self._entries) < self.max_entries:
            return True
        score = calculate_score(elapsed_seconds, attempts)
        candidate_key = (-score, tie_breaker(elapsed_seconds, attempts))
        return candidate_key < rank_key(self._entries[-1])
