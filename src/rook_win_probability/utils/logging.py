"""
Structured logging configuration for the application
"""

import logging
import logging.handlers
from pathlib import Path


def setup_logging(
    log_dir: Path | None = None,
    level: str = "INFO",
    app_name: str = "rook-winprob",
) -> logging.Logger:
    """
    Setup structured logging for the application

    Args:
        log_dir: Directory to store log files (console only when None)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        app_name: Application name for log files

    Returns:
        Configured package logger
    """
    logger = logging.getLogger("rook_win_probability")
    logger.setLevel(getattr(logging, level.upper()))

    # Re-running setup replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is None:
        return logger

    log_dir.mkdir(parents=True, exist_ok=True)

    # File handler (rotating)
    log_file = log_dir / f"{app_name}.log"
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Separate error log
    error_log = log_dir / f"{app_name}_errors.log"
    error_handler = logging.handlers.RotatingFileHandler(
        error_log, maxBytes=10 * 1024 * 1024, backupCount=5
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)
    logger.addHandler(error_handler)

    return logger
