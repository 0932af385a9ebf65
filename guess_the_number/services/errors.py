"""Error handling module for the Guess the Number application.

This module provides:
- Custom exception classes for player input, storage and configuration errors
- User-friendly error message generation with suggested actions
- Centralized error handling service with a bounded error history

Nothing raised here is fatal: storage failures are logged and absorbed so the
game always stays playable.
"""

import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    """Categories of errors for classification and handling."""
    INPUT = "input"
    VALIDATION = "validation"
    STORAGE = "storage"
    CONFIGURATION = "configuration"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ErrorContext:
    """Context information for an error."""
    operation: str
    component: str
    details: dict[str, Any]


@dataclass(frozen=True)
class UserFriendlyError:
    """User-friendly error representation with suggested actions."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    suggested_actions: list[str]
    technical_details: str | None = None
    recoverable: bool = True


class AppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNEXPECTED,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool = True,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.recoverable = recoverable
        self.context = context

    def to_user_friendly(self) -> UserFriendlyError:
        """Convert to user-friendly error representation."""
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            severity=self.severity,
            suggested_actions=self.suggested_actions,
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


class ValidationError(AppError):
    """Exception for arguments that break a documented constraint."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        constraints: list[str] | None = None,
    ) -> None:
        suggested_actions = ["Review the input requirements"]
        if constraints:
            suggested_actions.extend([f"Ensure: {c}" for c in constraints])

        technical_details = None
        if field:
            technical_details = f"Field: {field}"
        if value is not None:
            value_str = str(value)[:100]
            technical_details = (technical_details or "") + f"\nValue: {value_str}"

        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=True,
        )
        self.field = field
        self.value = value
        self.constraints = constraints or []


class InvalidInputError(ValidationError):
    """A guess that does not parse to an integer.

    The session is left untouched; the player is simply asked again.
    """

    def __init__(self, value: Any) -> None:
        super().__init__(
            message="Please enter a valid whole number",
            field="guess",
            value=value,
            constraints=["the guess is a whole number such as 42"],
        )
        self.category = ErrorCategory.INPUT


class DeserializationError(AppError):
    """Stored leaderboard data could not be decoded."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        technical_details = None
        if key:
            technical_details = f"Key: {key}"
        if original_error:
            technical_details = (technical_details or "") + f"\nError: {type(original_error).__name__}: {original_error}"

        super().__init__(
            message=message,
            category=ErrorCategory.STORAGE,
            severity=ErrorSeverity.WARNING,
            suggested_actions=[
                "The saved leaderboard was reset",
                "New scores will be saved normally",
            ],
            technical_details=technical_details,
            recoverable=True,
        )
        self.key = key
        self.original_error = original_error


class PersistenceWriteError(AppError):
    """The leaderboard could not be written to storage."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        suggested_actions = self._get_suggested_actions(original_error)

        technical_details = None
        if key:
            technical_details = f"Key: {key}"
        if original_error:
            technical_details = (technical_details or "") + f"\nError: {type(original_error).__name__}: {original_error}"

        super().__init__(
            message=message,
            category=ErrorCategory.STORAGE,
            severity=ErrorSeverity.ERROR,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=True,
        )
        self.key = key
        self.original_error = original_error

    @staticmethod
    def _get_suggested_actions(original_error: Exception | None) -> list[str]:
        """Get suggested actions based on the underlying failure."""
        if isinstance(original_error, PermissionError):
            return [
                "Check permissions of the data directory",
                "Choose a different data directory",
            ]
        elif isinstance(original_error, OSError):
            error_str = str(original_error).lower()
            if "no space" in error_str or "disk full" in error_str:
                return ["Free up disk space"]
            elif "read-only" in error_str:
                return [
                    "The file system is read-only",
                    "Choose a different data directory",
                ]

        return [
            "Scores are kept until the game is closed",
            "Check the data directory and try again",
        ]


class ConfigurationError(AppError):
    """Exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        current_value: Any = None,
        expected: str | None = None,
    ) -> None:
        suggested_actions = [
            "Check the configuration settings",
            "Reset to default values if needed",
        ]
        if expected:
            suggested_actions.append(f"Expected: {expected}")

        technical_details = None
        if setting:
            technical_details = f"Setting: {setting}"
        if current_value is not None:
            technical_details = (technical_details or "") + f"\nCurrent: {current_value}"

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.ERROR,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=True,
        )
        self.setting = setting
        self.current_value = current_value
        self.expected = expected


class ErrorHandlingService:
    """Centralized error handling service.

    This service provides:
    - Error classification and user-friendly message generation
    - Error logging with technical details
    - A bounded history of recent errors
    """

    def __init__(self, max_history_size: int = 100) -> None:
        self._error_history: list[tuple[float, AppError]] = []
        self._max_history_size = max_history_size
        log.debug("Error handling service initialized")

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Handle an error and return a user-friendly representation.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            component: The component where the error occurred
            context: Additional context information

        Returns:
            User-friendly error representation
        """
        app_error = self._convert_to_app_error(error, operation, component, context)

        self._log_error(app_error, operation, component, context)

        self._error_history.append((time.time(), app_error))
        if len(self._error_history) > self._max_history_size:
            self._error_history.pop(0)

        return app_error.to_user_friendly()

    def _convert_to_app_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None,
    ) -> AppError:
        """Convert a standard exception to an AppError."""
        if isinstance(error, AppError):
            return error

        key = context.get("key") if context else None

        # Decoding problems have to be checked before ValueError
        if isinstance(error, (json.JSONDecodeError, UnicodeDecodeError)):
            return DeserializationError(
                message="Saved data could not be read and was ignored.",
                key=key,
                original_error=error,
            )
        elif isinstance(error, OSError):
            return PersistenceWriteError(
                message=f"A storage error occurred: {error}",
                key=key,
                original_error=error,
            )
        elif isinstance(error, ValueError):
            return ValidationError(
                message=str(error),
                field=context.get("field") if context else None,
                value=context.get("value") if context else None,
            )
        elif isinstance(error, TypeError):
            return ValidationError(
                message=f"Invalid data type: {error}",
                field=context.get("field") if context else None,
            )

        return AppError(
            message="An unexpected error occurred. Please try again.",
            category=ErrorCategory.UNEXPECTED,
            severity=ErrorSeverity.ERROR,
            technical_details=f"{type(error).__name__}: {error}",
            recoverable=True,
            context=ErrorContext(
                operation=operation,
                component=component,
                details=context or {},
            ),
        )

    def _log_error(
        self,
        error: AppError,
        operation: str,
        component: str,
        context: dict[str, Any] | None,
    ) -> None:
        """Log error with full technical details."""
        log_method = log.warning if error.severity == ErrorSeverity.WARNING else log.error

        log_method(
            "Error occurred",
            error_message=error.message,
            category=error.category.value,
            severity=error.severity.value,
            operation=operation,
            component=component,
            technical_details=error.technical_details,
            recoverable=error.recoverable,
            context=context,
        )

    def get_recent_errors(self, count: int = 10) -> list[AppError]:
        """Get the most recent errors, oldest first."""
        recent = self._error_history[-count:] if self._error_history else []
        return [error for _, error in recent]

    def get_error_count_by_category(self) -> dict[ErrorCategory, int]:
        """Get count of errors by category."""
        counts: dict[ErrorCategory, int] = {}
        for _, error in self._error_history:
            counts[error.category] = counts.get(error.category, 0) + 1
        return counts

    def clear_history(self) -> None:
        self._error_history.clear()

    def create_user_message(
        self,
        error: UserFriendlyError,
        include_suggestions: bool = True,
    ) -> str:
        """Create a formatted user message from an error.

        Args:
            error: The user-friendly error
            include_suggestions: Whether to include suggested actions

        Returns:
            Formatted message string
        """
        parts = [error.message]

        if include_suggestions and error.suggested_actions:
            parts.append("\nSuggested actions:")
            for action in error.suggested_actions[:3]:
                parts.append(f"  • {action}")

        return "\n".join(parts)


# Global error handling service instance
_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Get the global error handling service instance."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service


def handle_error(
    error: Exception,
    operation: str,
    component: str,
    context: dict[str, Any] | None = None,
) -> UserFriendlyError:
    """Convenience function to handle errors using the global service."""
    return get_error_service().handle_error(error, operation, component, context)
