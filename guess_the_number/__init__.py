"""Guess the Number: a terminal number-guessing game with a persisted leaderboard."""

__version__ = "0.1.0"
