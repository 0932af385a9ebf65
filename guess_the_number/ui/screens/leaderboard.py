"""Leaderboard screen."""

from typing import ClassVar, override

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Static

from guess_the_number.ui.widgets import LeaderboardTable

from .base import BaseScreen


class LeaderboardScreen(BaseScreen):
    """Shows the top results, highlighting the latest submission."""

    SCREEN_TITLE: ClassVar[str] = "🏆 Top Scores"
    SCREEN_NAME: ClassVar[str] = "leaderboard"

    CSS: ClassVar[str] = """
    LeaderboardScreen {
        align: center middle;
    }

    #leaderboard-container {
        width: 72;
        height: auto;
        padding: 1 2;
        border: solid $primary;
    }

    #leaderboard-hint {
        color: $text-muted;
        margin-bottom: 1;
    }

    #leaderboard-empty {
        text-align: center;
        color: $text-muted;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "go_back", "Back", show=True),
        Binding("i", "show_info", "How scoring works", show=True),
    ]

    @override
    def compose(self) -> ComposeResult:
        with Container(id="leaderboard-container"):
            yield self.create_title_widget()
            yield Static(
                "Score = efficiency: fewer attempts and less time score higher",
                id="leaderboard-hint",
            )
            yield LeaderboardTable(id="leaderboard-table")
            yield Static(
                "No scores yet. Play a round to see your results here!",
                id="leaderboard-empty",
            )

    @override
    async def on_mount(self) -> None:
        await super().on_mount()
        self._refresh()

    @override
    def on_screen_resume(self) -> None:
        super().on_screen_resume()
        self._refresh()

    def _refresh(self) -> None:
        state = self.game_app.app_state
        table = self.query_one("#leaderboard-table", LeaderboardTable)
        table.show_entries(state.leaderboard, highlight_id=state.last_entry_id)

        has_entries = len(state.leaderboard) > 0
        table.display = has_entries
        self.query_one("#leaderboard-empty", Static).display = not has_entries

    async def action_show_info(self) -> None:
        await self.game_app.push_screen_with_tracking("score_info")
