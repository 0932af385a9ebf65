"""Logging configuration for the Guess the Number application."""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LOG_FILE_NAME = "guess-the-number.log"


class LoggingService:
    """Configures structlog on top of the standard library logging handlers."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Path | None = None,
        tui_mode: bool = False,
    ) -> None:
        """Initialize the logging service.

        Args:
            log_level: The minimum log level to capture
            log_dir: Directory for the log file (None for console only)
            tui_mode: If True, never write to the console so the TUI is not corrupted
        """
        self.log_level = log_level.upper()
        self.log_dir = log_dir
        self.tui_mode = tui_mode
        self.is_development = os.getenv("ENVIRONMENT", "development") == "development"

    @property
    def numeric_level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)

    def configure(self) -> None:
        """Configure stdlib handlers, then structlog processors."""
        self._configure_stdlib_logging()

        structlog.configure(
            processors=self._get_processors(),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _configure_stdlib_logging(self) -> None:
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(self.numeric_level)

        if not self.tui_mode:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self.numeric_level)
            console_handler.setFormatter(logging.Formatter("%(message)s"))
            root_logger.addHandler(console_handler)

        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=self.log_dir / LOG_FILE_NAME,
                maxBytes=1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            file_handler.setLevel(self.numeric_level)
            file_handler.setFormatter(logging.Formatter("%(message)s"))
            root_logger.addHandler(file_handler)

        if self.tui_mode and not self.log_dir:
            # Nothing to write to; keep stdlib from falling back to stderr
            root_logger.addHandler(logging.NullHandler())

    def _get_processors(self) -> list[Any]:
        """Get the structlog processor chain for the environment."""
        common_processors = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        # Files always get JSON; the console gets colors only in development
        if self.is_development and not self.log_dir:
            return common_processors + [structlog.dev.ConsoleRenderer(colors=True)]
        return common_processors + [structlog.processors.JSONRenderer()]

    def get_logger(self, name: str | None = None) -> structlog.stdlib.BoundLogger:
        return structlog.stdlib.get_logger(name)


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    environment: str | None = None,
    tui_mode: bool = False,
) -> LoggingService:
    """Set up application logging.

    Args:
        log_level: Minimum log level to capture
        log_dir: Directory for the log file (None for console only)
        environment: Environment name (development/production)
        tui_mode: If True, disable console logging

    Returns:
        Configured LoggingService instance
    """
    if environment:
        os.environ["ENVIRONMENT"] = environment

    service = LoggingService(log_level=log_level, log_dir=log_dir, tui_mode=tui_mode)
    service.configure()
    return service
