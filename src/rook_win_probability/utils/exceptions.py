"""Custom exceptions for the application"""

from typing import Any


class RookWinProbError(Exception):
    """Base exception for the application"""

    pass


class DataValidationError(RookWinProbError):
    """Raised when a game record fails validation"""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message)


class ConfigurationError(RookWinProbError):
    """Raised when configuration is invalid"""

    pass


class HistoryLoadError(RookWinProbError):
    """Raised when saved games cannot be read"""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)
