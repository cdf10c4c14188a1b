"""Utility modules for logging, exceptions, and helpers."""

from .exceptions import (
    ConfigurationError,
    DataValidationError,
    HistoryLoadError,
    RookWinProbError,
)
from .helpers import clamp, round_half_up, round_to_tenth
from .logging import setup_logging

__all__ = [
    "RookWinProbError",
    "DataValidationError",
    "ConfigurationError",
    "HistoryLoadError",
    "clamp",
    "round_half_up",
    "round_to_tenth",
    "setup_logging",
]
