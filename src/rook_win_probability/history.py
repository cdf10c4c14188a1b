"""Loading saved games and the current game from JSON exports.

Accepts the shapes the scorekeeping app stores: a bare list of games, or an
object holding them under ``savedGames``.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .models import GameState, HistoricalGame
from .utils.exceptions import DataValidationError, HistoryLoadError

logger = logging.getLogger(__name__)

SAVED_GAMES_KEY = "savedGames"
CURRENT_GAME_KEYS = ("currentGameState", "state")


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise HistoryLoadError(f"File not found: {path}", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise HistoryLoadError(f"Invalid JSON in {path}: {e}", path=str(path)) from e
    except OSError as e:
        raise HistoryLoadError(f"Could not read {path}: {e}", path=str(path)) from e


def parse_saved_games(records: Any) -> list[HistoricalGame]:
    """Validate raw saved-game records.

    Records that fail validation are logged and skipped; incomplete games
    (no rounds or no final score) are kept, since the estimators filter
    those themselves.

    Raises:
        DataValidationError: If ``records`` is not a list or savedGames object
    """
    if isinstance(records, dict) and SAVED_GAMES_KEY in records:
        records = records[SAVED_GAMES_KEY]
    if records is None:
        return []
    if not isinstance(records, list):
        raise DataValidationError(
            "Saved games must be a list or an object with a 'savedGames' list",
            field=SAVED_GAMES_KEY,
            value=type(records).__name__,
        )

    games = []
    skipped = 0
    for position, record in enumerate(records):
        try:
            games.append(HistoricalGame.model_validate(record))
        except ValidationError as e:
            skipped += 1
            logger.warning(f"Skipping saved game #{position}: {e.errors()[0]['msg']}")

    if skipped:
        logger.info(f"Loaded {len(games)} saved games ({skipped} skipped)")
    else:
        logger.info(f"Loaded {len(games)} saved games")
    return games


def load_saved_games(path: Path | str) -> list[HistoricalGame]:
    """Read and validate a saved-games JSON file.

    Raises:
        HistoryLoadError: If the file cannot be read or holds the wrong shape
    """
    path = Path(path)
    try:
        return parse_saved_games(_read_json(path))
    except DataValidationError as e:
        raise HistoryLoadError(f"{path}: {e}", path=str(path)) from e


def load_game_state(path: Path | str) -> GameState:
    """Read the in-progress game from JSON.

    Raises:
        HistoryLoadError: If the file cannot be read or validated
    """
    path = Path(path)
    data = _read_json(path)

    if isinstance(data, dict):
        for key in CURRENT_GAME_KEYS:
            if isinstance(data.get(key), dict):
                data = data[key]
                break

    try:
        return GameState.model_validate(data)
    except ValidationError as e:
        raise HistoryLoadError(
            f"Invalid game state in {path}: {e}", path=str(path)
        ) from e
