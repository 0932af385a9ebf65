"""Game screen: the guess loop."""

from typing import ClassVar, override

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.timer import Timer
from textual.widgets import Button, Input, Static

import structlog

from guess_the_number.models import GameSnapshot, Verdict
from guess_the_number.services.errors import InvalidInputError

from .base import BaseScreen

log = structlog.stdlib.get_logger()

VERDICT_ICONS: dict[Verdict, str] = {
    Verdict.TOO_LOW: "📈",
    Verdict.TOO_HIGH: "📉",
    Verdict.WON: "🎉",
}


class GameScreen(BaseScreen):
    """Plays one round at a time against the app's game session.

    After a win the leaderboard is revealed on a timer so the player sees
    the result first; the timer never touches the session or the leaderboard.
    """

    SCREEN_TITLE: ClassVar[str] = "🎯 Guess the Number"
    SCREEN_NAME: ClassVar[str] = "game"

    CSS: ClassVar[str] = """
    GameScreen {
        align: center middle;
    }

    #game-container {
        width: 60;
        height: auto;
        padding: 1 2;
        border: solid $primary;
    }

    #game-message {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    #game-attempts {
        text-align: center;
        color: $text-muted;
        margin-bottom: 1;
    }

    #button-row {
        height: auto;
        align: center middle;
        margin-top: 1;
    }

    #button-row Button {
        margin: 0 1;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "go_back", "Back", show=True),
        Binding("ctrl+n", "new_game", "New game", show=True),
    ]

    _reveal_timer: Timer | None

    def __init__(self) -> None:
        super().__init__()
        self._reveal_timer = None

    @override
    def compose(self) -> ComposeResult:
        with Container(id="game-container"):
            yield self.create_title_widget()
            yield Static("", id="game-message")
            yield Static("", id="game-attempts")
            yield Input(placeholder="Your guess", id="input-guess")
            with Horizontal(id="button-row"):
                yield Button("Guess", id="btn-guess", variant="primary")
                yield Button("New game", id="btn-new-game")

    @override
    async def on_mount(self) -> None:
        await super().on_mount()
        self._render_snapshot(self.game_app.session.snapshot())
        self.query_one("#input-guess", Input).focus()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit_guess(event.value)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-guess":
            self._submit_guess(self.query_one("#input-guess", Input).value)
        elif event.button.id == "btn-new-game":
            self.action_new_game()

    def _submit_guess(self, value: str) -> None:
        guess_input = self.query_one("#input-guess", Input)
        guess_input.value = ""

        try:
            outcome = self.game_app.session.guess(value)
        except InvalidInputError as e:
            self.handle_exception(e, operation="guess", context={"value": value[:20]})
            self._render_snapshot(self.game_app.session.snapshot())
            return

        if outcome is None:
            self.notify("This round is over. Start a new game to play again.")
            return

        if outcome.is_win and outcome.elapsed_seconds is not None:
            entry = self.game_app.record_win(outcome.elapsed_seconds, outcome.attempts)
            if entry is not None:
                rank = self.game_app.leaderboard.rank_of(entry.id) if self.game_app.leaderboard is not None else None
                if rank is not None:
                    self.notify(f"{entry.player_name} ranks #{rank} with {entry.score:.2f} points!")
                else:
                    self.notify(f"{entry.score:.2f} points, not enough for the leaderboard this time.")
            self._reveal_timer = self.set_timer(self.game_app.reveal_delay, self._reveal_leaderboard)
        else:
            self.game_app.refresh_state()

        self._render_snapshot(self.game_app.session.snapshot())

    def _render_snapshot(self, snapshot: GameSnapshot) -> None:
        icon = VERDICT_ICONS.get(snapshot.last_verdict) if snapshot.last_verdict else None
        message = f"{snapshot.message} {icon}" if icon else snapshot.message
        self.query_one("#game-message", Static).update(message)
        self.query_one("#game-attempts", Static).update(f"Attempts: {snapshot.attempts}")
        self.query_one("#input-guess", Input).disabled = snapshot.won
        self.query_one("#btn-guess", Button).disabled = snapshot.won

    async def _reveal_leaderboard(self) -> None:
        self._reveal_timer = None
        if self.screen_is_active:
            await self.game_app.push_screen_with_tracking("leaderboard")

    def action_new_game(self) -> None:
        if self._reveal_timer is not None:
            self._reveal_timer.stop()
            self._reveal_timer = None
        snapshot = self.game_app.restart_game()
        self._render_snapshot(snapshot)
        guess_input = self.query_one("#input-guess", Input)
        guess_input.focus()
        log.info("Player started a new game")
