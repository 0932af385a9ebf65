"""Tests for UI navigation and the game screens."""

from pathlib import Path

import pytest
from hypothesis import given, settings, strategies as st

from conftest import FakeClock, FixedRandom, fixed_time
from guess_the_number.models import AppConfig
from guess_the_number.services import ConfigurationService, GameSession, LeaderboardStore, MemoryStorage
from guess_the_number.services.config import default_data_directory
from guess_the_number.ui import screens
from guess_the_number.ui.app import AppState, GuessTheNumberApp
from guess_the_number.ui.screens import (
    BaseScreen,
    GameScreen,
    LeaderboardScreen,
    MainMenuScreen,
    PlayerNameScreen,
    get_registered_screens,
    get_screen_by_name,
    register_screen,
)


def make_app(player_name: str = "Ada", secret: int = 42, reveal_delay: float = 0.0) -> GuessTheNumberApp:
    config = AppConfig(
        data_directory=Path("/tmp/unused"),
        log_level="INFO",
        player_name=player_name,
        reveal_delay=reveal_delay,
    )
    session = GameSession(clock=FakeClock(), random_source=FixedRandom(secret))
    leaderboard = LeaderboardStore(MemoryStorage(), clock=fixed_time)
    return GuessTheNumberApp(session=session, leaderboard=leaderboard, config=config)


class TestMenuNavigation:
    """Tests for menu navigation consistency."""

    @given(st.sampled_from([opt[0] for opt in MainMenuScreen.MENU_OPTIONS]))
    @settings(max_examples=20)
    def test_every_menu_option_targets_a_registered_screen(self, option: str) -> None:
        targets = [target for opt_id, _, target in MainMenuScreen.MENU_OPTIONS if opt_id == option]

        assert len(targets) == 1
        assert targets[0] in get_registered_screens()

    def test_all_menu_options_have_labels(self) -> None:
        for opt_id, label, target in MainMenuScreen.MENU_OPTIONS:
            assert opt_id
            assert label
            assert target

    def test_menu_options_are_unique(self) -> None:
        option_ids = [opt[0] for opt in MainMenuScreen.MENU_OPTIONS]
        targets = [opt[2] for opt in MainMenuScreen.MENU_OPTIONS]
        assert len(option_ids) == len(set(option_ids))
        assert len(targets) == len(set(targets))


class TestScreenRegistry:
    """Tests for screen registry functionality."""

    @pytest.mark.parametrize(
        "name, screen_class",
        [
            ("main_menu", MainMenuScreen),
            ("player_name", PlayerNameScreen),
            ("game", GameScreen),
            ("leaderboard", LeaderboardScreen),
        ],
    )
    def test_screens_are_registered(self, name: str, screen_class: type[BaseScreen]) -> None:
        screen = get_screen_by_name(name)
        assert isinstance(screen, screen_class)
        assert screen.SCREEN_NAME == name

    def test_unknown_screen_returns_none(self) -> None:
        assert get_screen_by_name("nonexistent_screen") is None

    def test_registry_returns_fresh_instances(self) -> None:
        assert get_screen_by_name("game") is not get_screen_by_name("game")

    def test_register_screen(self, monkeypatch: pytest.MonkeyPatch) -> None:
        class ExtraScreen(BaseScreen):
            SCREEN_NAME = "extra"

        monkeypatch.setattr(screens, "_SCREEN_REGISTRY", dict(screens._SCREEN_REGISTRY))
        register_screen("extra", ExtraScreen)

        assert isinstance(get_screen_by_name("extra"), ExtraScreen)
        assert "extra" in get_registered_screens()


class TestAppState:
    """Tests for application state management."""

    def test_app_state_defaults(self) -> None:
        state = AppState()
        assert state.player_name == ""
        assert state.game is None
        assert state.leaderboard == ()
        assert state.last_entry_id is None

    def test_app_initializes_from_services(self) -> None:
        app = make_app()
        assert app.app_state.player_name == "Ada"
        assert app.app_state.game is not None
        assert app.app_state.game.attempts == 0
        assert app.app_state.leaderboard == ()

    def test_app_starts_with_empty_navigation_stack(self) -> None:
        app = GuessTheNumberApp()
        assert app.navigation_stack == []
        assert app.leaderboard is None
        assert app.reveal_delay == 1.5

    def test_navigation_stack_is_copy(self) -> None:
        app = GuessTheNumberApp()
        stack = app.navigation_stack
        stack.append("test")
        assert "test" not in app.navigation_stack

    def test_set_player_name_normalizes(self) -> None:
        app = make_app(player_name="")
        app.set_player_name("   ")
        assert app.app_state.player_name == "Player"
        app.set_player_name(" Grace ")
        assert app.app_state.player_name == "Grace"

    def test_player_name_is_saved_to_config(self, tmp_path: Path) -> None:
        service = ConfigurationService(tmp_path / "config.json")
        app = GuessTheNumberApp(
            config=AppConfig(data_directory=tmp_path / "override", log_level="INFO"),
            config_service=service,
        )

        app.set_player_name(" Grace ")

        saved = service.load_config()
        assert saved.player_name == "Grace"
        assert saved.data_directory == default_data_directory()

    def test_player_name_save_failure_keeps_name(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("file", encoding="utf-8")
        app = GuessTheNumberApp(config_service=ConfigurationService(blocker / "config.json"))

        app.set_player_name("Grace")

        assert app.app_state.player_name == "Grace"

    def test_record_win_updates_state(self) -> None:
        app = make_app()
        entry = app.record_win(12.0, 3)

        assert entry is not None
        assert app.app_state.last_entry_id == entry.id
        assert app.app_state.leaderboard == (entry,)

    def test_record_win_without_leaderboard(self) -> None:
        app = GuessTheNumberApp()
        assert app.record_win(12.0, 3) is None

    def test_restart_game_clears_highlight(self) -> None:
        app = make_app()
        app.session.guess(42)
        app.record_win(1.0, 1)

        snapshot = app.restart_game()

        assert snapshot.attempts == 0
        assert app.app_state.last_entry_id is None
        assert app.app_state.game == snapshot


class TestPlayingThroughTheUI:
    """Drive the app headlessly the way a player would."""

    @pytest.mark.asyncio
    async def test_player_name_asked_when_missing(self) -> None:
        app = make_app(player_name="")
        async with app.run_test() as pilot:
            await pilot.pause()
            assert isinstance(app.screen, PlayerNameScreen)

            await pilot.press("G", "r", "a", "c", "e", "enter")
            await pilot.pause()

            assert app.app_state.player_name == "Grace"
            assert isinstance(app.screen, MainMenuScreen)
            assert app.navigation_stack == ["main_menu"]

    @pytest.mark.asyncio
    async def test_winning_round_reveals_leaderboard(self) -> None:
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("1")
            await pilot.pause()
            assert isinstance(app.screen, GameScreen)

            await pilot.press("5", "0", "enter")
            await pilot.press("4", "2", "enter")
            await pilot.pause(0.2)

            assert app.session.won
            assert app.session.attempts == 2
            assert app.leaderboard is not None
            assert len(app.leaderboard) == 1
            assert app.app_state.last_entry_id == app.leaderboard.entries[0].id
            assert isinstance(app.screen, LeaderboardScreen)

    @pytest.mark.asyncio
    async def test_invalid_guess_is_not_counted(self) -> None:
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("1")
            await pilot.pause()

            await pilot.press("a", "b", "c", "enter")
            await pilot.pause()

            assert app.session.attempts == 0
            assert app.session.message == "Please enter a valid number"
            assert isinstance(app.screen, GameScreen)

    @pytest.mark.asyncio
    async def test_back_navigation_returns_to_menu(self) -> None:
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("2")
            await pilot.pause()
            assert isinstance(app.screen, LeaderboardScreen)
            assert app.navigation_stack == ["main_menu", "leaderboard"]

            await pilot.press("escape")
            await pilot.pause()

            assert isinstance(app.screen, MainMenuScreen)
            assert app.navigation_stack == ["main_menu"]
