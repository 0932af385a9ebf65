"""Main menu screen."""

from typing import ClassVar, override

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.widgets import Button, Static

import structlog

from .base import BaseScreen

log = structlog.stdlib.get_logger()


class MainMenuScreen(BaseScreen):
    """Entry screen with navigation to the game, the leaderboard and settings."""

    SCREEN_TITLE: ClassVar[str] = "Main Menu"
    SCREEN_NAME: ClassVar[str] = "main_menu"

    CSS: ClassVar[str] = """
    MainMenuScreen {
        align: center middle;
    }

    #menu-container {
        width: 50;
        height: auto;
        padding: 1 4;
        border: solid $primary;
    }

    #menu-title {
        text-align: center;
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }

    #menu-player {
        text-align: center;
        color: $text-muted;
        margin-bottom: 1;
    }

    .menu-button {
        width: 100%;
        margin-bottom: 1;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("1", "navigate('game')", "Play", show=False),
        Binding("2", "navigate('leaderboard')", "Leaderboard", show=False),
        Binding("3", "navigate('player_name')", "Player", show=False),
        Binding("4", "navigate('score_info')", "Scoring", show=False),
    ]

    MENU_OPTIONS: ClassVar[list[tuple[str, str, str]]] = [
        ("play", "1. Play", "game"),
        ("leaderboard", "2. Leaderboard", "leaderboard"),
        ("player", "3. Change Player", "player_name"),
        ("scoring", "4. How Scoring Works", "score_info"),
    ]

    @override
    def compose(self) -> ComposeResult:
        with Container(id="menu-container"):
            yield Static("🎯 Guess the Number", id="menu-title")
            yield Static("", id="menu-player")
            with Vertical(id="menu-buttons"):
                for option_id, label, _ in self.MENU_OPTIONS:
                    yield Button(label, id=f"btn-{option_id}", classes="menu-button")

    @override
    async def on_mount(self) -> None:
        await super().on_mount()
        self._show_player()

    @override
    def on_screen_resume(self) -> None:
        super().on_screen_resume()
        self._show_player()

    def _show_player(self) -> None:
        name = self.game_app.app_state.player_name
        text = f"Playing as {name}" if name else "No player selected"
        self.query_one("#menu-player", Static).update(text)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if not button_id:
            return

        option = button_id.removeprefix("btn-")
        for opt_id, _, target in self.MENU_OPTIONS:
            if opt_id == option:
                log.info("Menu option selected", option=option, target=target)
                await self.action_navigate(target)
                return

        log.warning("Unknown menu option", button_id=button_id)

    async def action_navigate(self, screen_name: str) -> None:
        await self.game_app.push_screen_with_tracking(screen_name)

    @override
    async def action_go_back(self) -> None:
        """Back from the main menu quits the application."""
        log.info("Quit requested from main menu")
        self.game_app.exit()
