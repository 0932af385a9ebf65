"""Data models for the Guess the Number application."""

from .config import AppConfig
from .game import GameSnapshot, GameState, GuessOutcome, Verdict
from .score import DEFAULT_PLAYER_NAME, ScoreEntry

__all__ = [
    "AppConfig",
    "DEFAULT_PLAYER_NAME",
    "GameSnapshot",
    "GameState",
    "GuessOutcome",
    "ScoreEntry",
    "Verdict",
]
