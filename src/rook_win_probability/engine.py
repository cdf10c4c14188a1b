"""Estimation method selection.

The caller passes the method explicitly (``"simple"`` by default) instead of
the engine reading a stored preference.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from .complex_estimator import ComplexEstimator
from .config import EngineConfig
from .historical_index import ProbabilityIndexCache
from .models import GameState, HistoricalGame
from .results import ComplexBreakdown, WinProbability
from .simple_estimator import estimate_simple
from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class EstimationMethod(str, Enum):
    """Available win-probability methods."""

    SIMPLE = "simple"
    COMPLEX = "complex"

    @classmethod
    def parse(cls, value: "EstimationMethod | str | None") -> "EstimationMethod":
        """Resolve a stored preference string; None means the default."""
        if value is None:
            return cls.SIMPLE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ConfigurationError(
                f"Unknown estimation method '{value}'. Expected one of: {valid}"
            ) from None


class WinProbabilityEngine:
    """Dispatches to the simple or complex estimator.

    Example:
        ```python
        engine = WinProbabilityEngine(method="complex")
        result = engine.estimate(current_game, saved_games)
        ```
    """

    def __init__(
        self,
        method: EstimationMethod | str | None = None,
        config: EngineConfig | None = None,
        cache: ProbabilityIndexCache | None = None,
    ):
        self.config = config or EngineConfig()
        self.method = EstimationMethod.parse(
            method if method is not None else self.config.method
        )
        self.complex_estimator = ComplexEstimator(
            cache=cache,
            blend=self.config.blend,
            recency=self.config.recency,
        )

    def estimate(
        self,
        game: GameState | Mapping[str, Any] | None,
        historical_games: Iterable[HistoricalGame | Mapping[str, Any]] | None,
        now: datetime | None = None,
    ) -> WinProbability:
        """Win probability for both teams using the configured method."""
        logger.debug(f"Estimating win probability with method={self.method.value}")
        if self.method is EstimationMethod.SIMPLE:
            return estimate_simple(game, historical_games, self.config.heuristic)
        return self.complex_estimator.estimate(game, historical_games, now=now)

    def explain_complex(
        self,
        game: GameState | Mapping[str, Any] | None,
        historical_games: Iterable[HistoricalGame | Mapping[str, Any]] | None,
        now: datetime | None = None,
    ) -> ComplexBreakdown | None:
        """Intermediate values of the complex method, whatever method is set."""
        return self.complex_estimator.explain(game, historical_games, now=now)


def calculate_win_probability(
    game: GameState | Mapping[str, Any] | None,
    historical_games: Iterable[HistoricalGame | Mapping[str, Any]] | None,
    method: EstimationMethod | str | None = EstimationMethod.SIMPLE,
    engine: WinProbabilityEngine | None = None,
) -> WinProbability:
    """Module-level convenience wrapper around WinProbabilityEngine.

    A supplied ``engine`` (and its cache) is reused; its own method wins.
    """
    engine = engine or WinProbabilityEngine(method=method)
    return engine.estimate(game, historical_games)
