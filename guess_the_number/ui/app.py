"""Main Textual application with screen management and game state."""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, override

from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.reactive import reactive
from textual.widgets import Footer, Header

import structlog

from guess_the_number.models import AppConfig, GameSnapshot, ScoreEntry
from guess_the_number.services.config import ConfigurationService
from guess_the_number.services.errors import handle_error
from guess_the_number.services.game_session import GameSession
from guess_the_number.services.leaderboard import LeaderboardStore, normalize_player_name


log = structlog.stdlib.get_logger()


@dataclass(frozen=True)
class AppState:
    """Snapshot of what the screens render.

    Screens never read the services' mutable fields directly; every change
    goes through a new AppState built from the latest service snapshots.
    """

    player_name: str = ""
    game: GameSnapshot | None = None
    leaderboard: tuple[ScoreEntry, ...] = ()
    last_entry_id: str | None = None


class GuessTheNumberApp(App[None]):
    """Root Textual application for the guessing game.

    The app owns the game session and the leaderboard store and rebuilds
    ``app_state`` after every operation on them.
    """

    CSS: ClassVar[str] = """
    Screen {
        background: $surface;
    }

    .title {
        text-align: center;
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("ctrl+q", "quit", "Quit", show=True, priority=True),
        Binding("escape", "go_back", "Back", show=True),
        Binding("f1", "show_help", "Help", show=True),
    ]

    app_state: reactive[AppState] = reactive(AppState, init=False)

    _session: GameSession
    _leaderboard: LeaderboardStore | None
    _config: AppConfig | None
    _config_service: ConfigurationService | None
    _navigation_stack: list[str]

    def __init__(
        self,
        session: GameSession | None = None,
        leaderboard: LeaderboardStore | None = None,
        config: AppConfig | None = None,
        config_service: ConfigurationService | None = None,
    ) -> None:
        """Initialize the application with optional service injection.

        Args:
            session: Game session to play (a fresh one by default)
            leaderboard: Leaderboard store; None disables score recording
            config: Application configuration
            config_service: Saves the chosen player name; None keeps it in memory only
        """
        super().__init__()
        self.title = "Guess the Number"  # type: ignore[assignment]
        self.sub_title = "Find the secret number in as few tries as possible"  # type: ignore[assignment]
        self._session = session or GameSession()
        self._leaderboard = leaderboard
        self._config = config
        self._config_service = config_service
        self._navigation_stack = []
        self.app_state = AppState(
            player_name=config.player_name if config else "",
            game=self._session.snapshot(),
            leaderboard=leaderboard.entries if leaderboard is not None else (),
        )

        log.info("GuessTheNumberApp initialized")

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def leaderboard(self) -> LeaderboardStore | None:
        return self._leaderboard

    @property
    def reveal_delay(self) -> float:
        """Seconds between a win and the leaderboard reveal."""
        return self._config.reveal_delay if self._config else 1.5

    @property
    def navigation_stack(self) -> list[str]:
        """Get a copy of the current navigation stack."""
        return self._navigation_stack.copy()

    @override
    def compose(self) -> ComposeResult:
        yield Header()
        yield Footer()

    async def on_mount(self) -> None:
        """Open the menu, asking for a player name first if none is set."""
        self.refresh_state()

        await self.push_screen_with_tracking("main_menu")
        if not self.app_state.player_name:
            await self.push_screen_with_tracking("player_name")

    async def push_screen_with_tracking(self, screen_name: str) -> None:
        """Push a screen and track it in the navigation stack."""
        from guess_the_number.ui.screens import get_screen_by_name

        screen = get_screen_by_name(screen_name)
        if screen:
            self._navigation_stack.append(screen_name)
            await self.push_screen(screen)
            log.info("Screen pushed", screen=screen_name, stack_depth=len(self._navigation_stack))
        else:
            log.warning("Unknown screen requested", screen=screen_name)

    async def action_go_back(self) -> None:
        """Navigate back to the previous screen."""
        if len(self._navigation_stack) > 1:
            current = self._navigation_stack.pop()
            log.info("Navigating back", from_screen=current, stack_depth=len(self._navigation_stack))
            _ = self.pop_screen()
        else:
            log.debug("Already at root screen, cannot go back")

    async def action_show_help(self) -> None:
        await self.push_screen_with_tracking("score_info")

    def refresh_state(self, **changes: Any) -> AppState:
        """Rebuild ``app_state`` from the services, applying ``changes``."""
        leaderboard = self._leaderboard.entries if self._leaderboard is not None else ()
        self.app_state = replace(
            self.app_state,
            game=self._session.snapshot(),
            leaderboard=leaderboard,
            **changes,
        )
        return self.app_state

    def set_player_name(self, name: str) -> None:
        """Set the player name used for future leaderboard entries."""
        player_name = normalize_player_name(name)
        self.refresh_state(player_name=player_name)
        log.info("Player name set", player=player_name)
        self._save_player_name(player_name)

    def _save_player_name(self, player_name: str) -> None:
        """Write the name to the configuration file so the next start skips the prompt."""
        if self._config is not None:
            self._config = replace(self._config, player_name=player_name)
        if self._config_service is None:
            return

        try:
            # The file's own values, without command-line overrides
            stored = self._config_service.load_config()
            self._config_service.save_config(replace(stored, player_name=player_name))
        except (OSError, ValueError) as e:
            handle_error(e, operation="save_player_name", component="app", context={"field": "player_name"})

    def record_win(self, elapsed_seconds: float, attempts: int) -> ScoreEntry | None:
        """Submit a won round to the leaderboard.

        Returns:
            The created entry, or None when no leaderboard is attached
        """
        if self._leaderboard is None:
            return None
        entry = self._leaderboard.submit(self.app_state.player_name, elapsed_seconds, attempts)
        self.refresh_state(last_entry_id=entry.id)
        return entry

    def restart_game(self) -> GameSnapshot:
        snapshot = self._session.new_game()
        self.refresh_state(last_entry_id=None)
        return snapshot
