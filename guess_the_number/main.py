"""Main entry point for the Guess the Number application.

This module provides:
- Command-line argument parsing
- Application initialization and dependency injection
- A plain-text leaderboard listing for non-TUI use
"""

import argparse
import asyncio
import dataclasses
import sys
from pathlib import Path

import structlog

from guess_the_number import __version__
from guess_the_number.models import AppConfig
from guess_the_number.services.config import VALID_LOG_LEVELS, ConfigurationService
from guess_the_number.services.errors import ConfigurationError
from guess_the_number.services.game_session import GameSession
from guess_the_number.services.leaderboard import LeaderboardStore
from guess_the_number.services.logging import setup_logging
from guess_the_number.services.storage import FileStorage, Storage
from guess_the_number.ui.widgets import format_elapsed, format_score


log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Container for application services.

    Services are built lazily on first access; the leaderboard store is loaded
    from storage when it is first requested.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        data_dir: Path | None = None,
        storage: Storage | None = None,
    ) -> None:
        """Initialize the application context.

        Args:
            config_path: Path to configuration file
            data_dir: Overrides the configured data directory
            storage: Overrides the file storage (used by tests)
        """
        self._config_path: Path | None = config_path
        self._data_dir: Path | None = data_dir

        self._config_service: ConfigurationService | None = None
        self._config: AppConfig | None = None
        self._storage: Storage | None = storage
        self._leaderboard: LeaderboardStore | None = None
        self._session: GameSession | None = None

    @property
    def config_service(self) -> ConfigurationService:
        if self._config_service is None:
            self._config_service = ConfigurationService(config_path=self._config_path)
        return self._config_service

    @property
    def config(self) -> AppConfig:
        """Get the configuration, applying the command-line data directory.

        Raises:
            ConfigurationError: If the data directory override is not absolute
        """
        if self._config is None:
            config = self.config_service.load_config()
            if self._data_dir is not None:
                data_dir = self._data_dir.expanduser()
                if not data_dir.is_absolute():
                    data_dir = data_dir.resolve()
                config = dataclasses.replace(config, data_directory=data_dir)
                validation = self.config_service.validate_config(config)
                if not validation.is_valid:
                    raise ConfigurationError(
                        "Invalid data directory",
                        setting="data_directory",
                        current_value=str(data_dir),
                        expected="an absolute path",
                    )
            self._config = config
        return self._config

    @property
    def storage(self) -> Storage:
        if self._storage is None:
            self._storage = FileStorage(self.config.data_directory)
        return self._storage

    @property
    def leaderboard(self) -> LeaderboardStore:
        """Get the leaderboard store, loading it on first access."""
        if self._leaderboard is None:
            self._leaderboard = LeaderboardStore(self.storage, max_entries=self.config.max_entries)
            self._leaderboard.load()
        return self._leaderboard

    @property
    def session(self) -> GameSession:
        if self._session is None:
            self._session = GameSession()
        return self._session


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        config: Path | None,
        data_dir: Path | None,
        log_level: str,
        log_dir: Path | None,
        no_tui: bool,
    ) -> None:
        self.config: Path | None = config
        self.data_dir: Path | None = data_dir
        self.log_level: str = log_level
        self.log_dir: Path | None = log_dir
        self.no_tui: bool = no_tui


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="guess-the-number",
        description="Find the secret number between 0 and 100 and climb the leaderboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  guess-the-number                        Start the game
  guess-the-number --no-tui               Print the leaderboard and exit
  guess-the-number --data-dir ./scores    Keep the leaderboard in ./scores
        """,
    )

    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/guess-the-number/config.json)",
    )

    _ = parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the saved leaderboard (overrides the configuration)",
    )

    _ = parser.add_argument(
        "--log-level",
        choices=list(VALID_LOG_LEVELS),
        default=None,
        help="Set the logging level (default: from configuration)",
    )

    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: no log files)",
    )

    _ = parser.add_argument(
        "--no-tui",
        action="store_true",
        help="Print the leaderboard as text instead of starting the game",
    )
    return parser


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments."""
    ns = build_parser().parse_args(argv)

    return ParsedArgs(
        config=ns.config,
        data_dir=ns.data_dir,
        log_level=ns.log_level or "",
        log_dir=ns.log_dir,
        no_tui=bool(ns.no_tui),
    )


def render_leaderboard(leaderboard: LeaderboardStore) -> str:
    """Render the leaderboard as plain text."""
    entries = leaderboard.entries
    if not entries:
        return "No scores yet. Play a round to see your results here!"

    lines = [f"{'#':>3}  {'Player':<20} {'Attempts':>8} {'Time':>8} {'Score':>6}"]
    for rank, entry in enumerate(entries, start=1):
        lines.append(
            f"{rank:>3}  {entry.player_name[:20]:<20} {entry.attempts:>8} "
            f"{format_elapsed(entry.elapsed_seconds):>8} {format_score(entry.score):>6}"
        )
    return "\n".join(lines)


async def run_tui(context: ApplicationContext) -> int:
    """Run the TUI application.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    from guess_the_number.ui.app import GuessTheNumberApp

    log.info("Starting TUI application")

    try:
        app = GuessTheNumberApp(
            session=context.session,
            leaderboard=context.leaderboard,
            config=context.config,
            config_service=context.config_service,
        )
        await app.run_async()

        log.info("TUI application exited normally")
        return 0

    except Exception as e:
        log.error("TUI application error", error=str(e), exc_info=True)
        return 1


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the application."""
    args = parse_arguments(argv)

    tui_mode = not args.no_tui
    _ = setup_logging(log_level=args.log_level or "INFO", log_dir=args.log_dir, tui_mode=tui_mode)

    context = ApplicationContext(config_path=args.config, data_dir=args.data_dir)

    try:
        config = context.config
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        sys.exit(2)

    log_level = args.log_level or config.log_level
    if log_level != "INFO":
        _ = setup_logging(log_level=log_level, log_dir=args.log_dir, tui_mode=tui_mode)

    log.info(
        "Starting Guess the Number",
        version=__version__,
        log_level=log_level,
        data_directory=str(config.data_directory),
    )

    try:
        if args.no_tui:
            print(render_leaderboard(context.leaderboard))
            exit_code = 0
        else:
            exit_code = asyncio.run(run_tui(context))

    except KeyboardInterrupt:
        log.info("Application interrupted by user")
        exit_code = 130

    except Exception as e:
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        exit_code = 1

    log.info("Application exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
