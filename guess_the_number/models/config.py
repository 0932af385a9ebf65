"""Configuration data models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    data_directory: Path
    log_level: str
    player_name: str = ""  # Empty = ask at startup
    max_entries: int = 10  # Leaderboard size
    reveal_delay: float = 1.5  # Seconds between a win and the leaderboard reveal
