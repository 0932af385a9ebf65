"""Service layer: game rules, leaderboard persistence and application plumbing."""

from .config import ConfigurationService, ValidationResult
from .errors import (
    AppError,
    ConfigurationError,
    DeserializationError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    InvalidInputError,
    PersistenceWriteError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
    handle_error,
)
from .game_session import (
    Clock,
    GameSession,
    MonotonicClock,
    RandomSource,
    SystemRandomSource,
    parse_guess,
)
from .leaderboard import LEADERBOARD_KEY, LeaderboardStore, normalize_player_name
from .scoring import MAX_SCORE, MIN_SCORE, calculate_score, rank_entries, rank_key, tie_breaker
from .storage import FileStorage, MemoryStorage, Storage

__all__ = [
    "AppError",
    "Clock",
    "ConfigurationError",
    "ConfigurationService",
    "DeserializationError",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "FileStorage",
    "GameSession",
    "InvalidInputError",
    "LEADERBOARD_KEY",
    "LeaderboardStore",
    "MAX_SCORE",
    "MIN_SCORE",
    "MemoryStorage",
    "MonotonicClock",
    "PersistenceWriteError",
    "RandomSource",
    "Storage",
    "SystemRandomSource",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "calculate_score",
    "get_error_service",
    "handle_error",
    "normalize_player_name",
    "parse_guess",
    "rank_entries",
    "rank_key",
    "tie_breaker",
]
