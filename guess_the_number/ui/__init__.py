"""User interface components using the Textual framework."""

from .app import AppState, GuessTheNumberApp
from .screens import (
    BaseScreen,
    MainMenuScreen,
    get_registered_screens,
    get_screen_by_name,
    register_screen,
)

__all__ = [
    "AppState",
    "BaseScreen",
    "GuessTheNumberApp",
    "MainMenuScreen",
    "get_registered_screens",
    "get_screen_by_name",
    "register_screen",
]
