"""Leaderboard table widget and the display formatting it uses."""

from collections.abc import Iterable
from typing import ClassVar

from textual.widgets import DataTable

from guess_the_number.models import ScoreEntry

PODIUM_BADGES: dict[int, str] = {
    1: "🥇",
    2: "🥈",
    3: "🥉",
}


def format_elapsed(seconds: float) -> str:
    """Format elapsed time as ``42s`` under a minute and ``2m 5s`` otherwise."""
    if seconds < 60:
        return f"{seconds:.0f}s"
    minutes, remainder = divmod(int(seconds), 60)
    return f"{minutes}m {remainder}s"


def format_score(score: float) -> str:
    """Show whole scores without decimals and others with two."""
    if score == int(score):
        return f"{score:.0f}"
    return f"{score:.2f}"


def format_rank(rank: int) -> str:
    badge = PODIUM_BADGES.get(rank)
    return f"{badge} {rank}" if badge else str(rank)


class LeaderboardTable(DataTable[str]):
    """Read-only table of ranked leaderboard entries."""

    COLUMNS: ClassVar[tuple[str, ...]] = ("Rank", "Player", "Attempts", "Time", "Score")

    DEFAULT_CSS: ClassVar[str] = """
    LeaderboardTable {
        height: auto;
        max-height: 16;
    }
    """

    def on_mount(self) -> None:
        self.cursor_type = "row"
        self.zebra_stripes = True
        self._ensure_columns()

    def _ensure_columns(self) -> None:
        if not self.columns:
            self.add_columns(*self.COLUMNS)

    def show_entries(self, entries: Iterable[ScoreEntry], highlight_id: str | None = None) -> None:
        """Replace the table rows with ``entries`` in rank order.

        Args:
            entries: Ranked entries, best first
            highlight_id: Entry to move the cursor to, usually the latest submission
        """
        self._ensure_columns()
        self.clear()
        highlight_row: int | None = None
        for index, entry in enumerate(entries):
            rank = index + 1
            self.add_row(
                format_rank(rank),
                entry.player_name,
                str(entry.attempts),
                format_elapsed(entry.elapsed_seconds),
                format_score(entry.score),
                key=entry.id,
            )
            if entry.id == highlight_id:
                highlight_row = index

        if highlight_row is not None:
            self.move_cursor(row=highlight_row)
