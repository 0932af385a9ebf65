"""Configuration service for managing application settings."""

import json
from pathlib import Path

import structlog

from ..models import AppConfig

log = structlog.stdlib.get_logger()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
MAX_LEADERBOARD_SIZE = 100
MAX_REVEAL_DELAY = 10.0
MAX_PLAYER_NAME_LENGTH = 32


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


def default_config_path() -> Path:
    return Path.home() / ".config" / "guess-the-number" / "config.json"


def default_data_directory() -> Path:
    return Path.home() / ".local" / "share" / "guess-the-number"


class ConfigurationService:
    """Service for loading, validating and saving the application configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or default_config_path()
        log.debug("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> AppConfig:
        """Load configuration from file or return the default configuration.

        A missing, unreadable or invalid file never stops the game; the
        defaults are used instead.
        """
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults")
            return self.get_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise ValueError(f"Expected JSON object, got {type(data).__name__}")

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self.get_default_config()

            log.info("Configuration loaded successfully")
            return config

        except (OSError, json.JSONDecodeError, TypeError, ValueError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self.get_default_config()

    def save_config(self, config: AppConfig) -> None:
        """Save configuration to file.

        Raises:
            ValueError: If the configuration does not validate
            OSError: If the file cannot be written
        """
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ValueError(f"Invalid configuration: {', '.join(validation_result.errors)}")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            data = self._config_to_dict(config)
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully")

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: AppConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        if not isinstance(config.data_directory, Path):
            errors.append("data_directory must be a Path object")
        elif not config.data_directory.is_absolute():
            errors.append("data_directory must be an absolute path")

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}")

        if not isinstance(config.player_name, str):
            errors.append("player_name must be a string")
        elif len(config.player_name) > MAX_PLAYER_NAME_LENGTH:
            errors.append(f"player_name should not exceed {MAX_PLAYER_NAME_LENGTH} characters")

        if isinstance(config.max_entries, bool) or not isinstance(config.max_entries, int) or config.max_entries < 1:
            errors.append("max_entries must be a positive integer")
        elif config.max_entries > MAX_LEADERBOARD_SIZE:
            errors.append(f"max_entries should not exceed {MAX_LEADERBOARD_SIZE}")

        if not isinstance(config.reveal_delay, (int, float)) or config.reveal_delay < 0:
            errors.append("reveal_delay must be a non-negative number")
        elif config.reveal_delay > MAX_REVEAL_DELAY:
            errors.append(f"reveal_delay should not exceed {MAX_REVEAL_DELAY:g} seconds")

        return ValidationResult(len(errors) == 0, errors)

    def get_default_config(self) -> AppConfig:
        """Get default configuration."""
        return AppConfig(
            data_directory=default_data_directory(),
            log_level="INFO",
        )

    def _config_to_dict(self, config: AppConfig) -> dict[str, str | int | float]:
        """Convert AppConfig to dictionary for JSON serialization."""
        return {
            "data_directory": str(config.data_directory),
            "log_level": config.log_level,
            "player_name": config.player_name,
            "max_entries": config.max_entries,
            "reveal_delay": config.reveal_delay,
        }

    def _dict_to_config(self, data: dict[str, str | int | float | None]) -> AppConfig:
        """Convert dictionary to AppConfig, filling missing optional keys with defaults."""
        defaults = self.get_default_config()

        data_directory_raw = data.get("data_directory")
        data_directory = Path(str(data_directory_raw)) if data_directory_raw else defaults.data_directory

        log_level_raw = data.get("log_level", defaults.log_level)
        log_level = str(log_level_raw).upper() if isinstance(log_level_raw, str) else defaults.log_level

        player_name_raw = data.get("player_name", "")
        player_name = player_name_raw if isinstance(player_name_raw, str) else ""

        max_entries_raw = data.get("max_entries", defaults.max_entries)
        max_entries = max_entries_raw if isinstance(max_entries_raw, int) and not isinstance(max_entries_raw, bool) else defaults.max_entries

        reveal_delay_raw = data.get("reveal_delay", defaults.reveal_delay)
        reveal_delay = float(reveal_delay_raw) if isinstance(reveal_delay_raw, (int, float)) and not isinstance(reveal_delay_raw, bool) else defaults.reveal_delay

        return AppConfig(
            data_directory=data_directory,
            log_level=log_level,
            player_name=player_name,
            max_entries=max_entries,
            reveal_delay=reveal_delay,
        )
