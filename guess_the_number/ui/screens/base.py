"""Base screen class with common functionality for all screens."""

from typing import TYPE_CHECKING, ClassVar

from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Static

import structlog

from guess_the_number.services.errors import (
    ErrorSeverity,
    UserFriendlyError,
    get_error_service,
    handle_error,
)

if TYPE_CHECKING:
    from guess_the_number.ui.app import GuessTheNumberApp

log = structlog.stdlib.get_logger()


class BaseScreen(Screen[None]):
    """Base screen providing navigation, notifications and error display.

    Subclasses override compose() to define their layout and may override
    on_screen_resume() to re-render from the latest app state.
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "go_back", "Back", show=True),
    ]

    SCREEN_TITLE: ClassVar[str] = "Screen"
    SCREEN_NAME: ClassVar[str] = "base"

    _is_active: bool

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name=name or self.SCREEN_NAME)
        self._is_active = False

    @property
    def game_app(self) -> "GuessTheNumberApp":
        """Get the parent GuessTheNumberApp instance.

        Raises:
            RuntimeError: If the screen is not attached to a GuessTheNumberApp
        """
        from guess_the_number.ui.app import GuessTheNumberApp

        if isinstance(self.app, GuessTheNumberApp):
            return self.app
        raise RuntimeError("Screen is not attached to a GuessTheNumberApp")

    @property
    def screen_is_active(self) -> bool:
        return self._is_active

    async def on_mount(self) -> None:
        log.debug("Screen mounted", screen=self.SCREEN_NAME)
        self._is_active = True

    async def on_unmount(self) -> None:
        log.debug("Screen unmounted", screen=self.SCREEN_NAME)
        self._is_active = False

    def on_screen_resume(self) -> None:
        self._is_active = True

    def on_screen_suspend(self) -> None:
        self._is_active = False

    async def action_go_back(self) -> None:
        await self.game_app.action_go_back()

    def create_title_widget(self, title: str | None = None) -> Static:
        return Static(title or self.SCREEN_TITLE, classes="title")

    def handle_exception(
        self,
        error: Exception,
        operation: str,
        context: dict[str, str | int | float | bool] | None = None,
    ) -> UserFriendlyError:
        """Log an exception and show its user-friendly message as a notification.

        Args:
            error: The exception that occurred
            operation: Description of the operation that failed
            context: Additional context information

        Returns:
            UserFriendlyError with message and suggested actions
        """
        user_error = handle_error(
            error=error,
            operation=operation,
            component=self.SCREEN_NAME,
            context=context,
        )

        message = get_error_service().create_user_message(user_error, include_suggestions=False)
        severity = "warning" if user_error.severity == ErrorSeverity.WARNING else "error"
        self.notify(message, severity=severity)
        return user_error
