"""Screen components for the TUI application."""

from .base import BaseScreen
from .game import GameScreen
from .leaderboard import LeaderboardScreen
from .main_menu import MainMenuScreen
from .player_name import PlayerNameScreen
from .score_info import ScoreInfoScreen

# Screen registry for navigation
_SCREEN_REGISTRY: dict[str, type[BaseScreen]] = {
    "main_menu": MainMenuScreen,
    "player_name": PlayerNameScreen,
    "game": GameScreen,
    "leaderboard": LeaderboardScreen,
    "score_info": ScoreInfoScreen,
}


def get_screen_by_name(name: str) -> BaseScreen | None:
    """Get a new screen instance by its registered name, or None if unknown."""
    screen_class = _SCREEN_REGISTRY.get(name)
    if screen_class:
        return screen_class()
    return None


def register_screen(name: str, screen_class: type[BaseScreen]) -> None:
    _SCREEN_REGISTRY[name] = screen_class


def get_registered_screens() -> list[str]:
    return list(_SCREEN_REGISTRY.keys())


__all__ = [
    "BaseScreen",
    "GameScreen",
    "LeaderboardScreen",
    "MainMenuScreen",
    "PlayerNameScreen",
    "ScoreInfoScreen",
    "get_registered_screens",
    "get_screen_by_name",
    "register_screen",
]
