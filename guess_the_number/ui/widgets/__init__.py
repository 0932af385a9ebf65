"""Custom widgets for the TUI application."""

from .score_table import (
    LeaderboardTable,
    format_elapsed,
    format_rank,
    format_score,
)

__all__ = [
    "LeaderboardTable",
    "format_elapsed",
    "format_rank",
    "format_score",
]
