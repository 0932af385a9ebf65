"""Player name screen."""

from typing import ClassVar, override

from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Button, Input, Static

from guess_the_number.models import DEFAULT_PLAYER_NAME
from guess_the_number.services.config import MAX_PLAYER_NAME_LENGTH

from .base import BaseScreen


class PlayerNameScreen(BaseScreen):
    """Asks for the name recorded with the player's scores.

    A blank name is accepted and recorded as the default placeholder.
    """

    SCREEN_TITLE: ClassVar[str] = "Welcome!"
    SCREEN_NAME: ClassVar[str] = "player_name"

    CSS: ClassVar[str] = """
    PlayerNameScreen {
        align: center middle;
    }

    #name-container {
        width: 50;
        height: auto;
        padding: 1 2;
        border: solid $primary;
    }

    #name-hint {
        color: $text-muted;
        margin-bottom: 1;
    }
    """

    @override
    def compose(self) -> ComposeResult:
        with Container(id="name-container"):
            yield self.create_title_widget()
            yield Static("Enter your name to start", id="name-hint")
            yield Input(
                value=self.game_app.app_state.player_name,
                placeholder=DEFAULT_PLAYER_NAME,
                max_length=MAX_PLAYER_NAME_LENGTH,
                id="input-name",
            )
            yield Button("Start", id="btn-start", variant="primary")

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        await self._confirm(event.value)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-start":
            await self._confirm(self.query_one("#input-name", Input).value)

    async def _confirm(self, name: str) -> None:
        self.game_app.set_player_name(name)
        await self.action_go_back()
