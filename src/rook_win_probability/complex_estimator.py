"""Credibility-blended ("complex") win-probability estimator.

Blends two views of the current situation:

1. Empirical: the recency-weighted win rate of past games that stood in the
   same (round, score bucket) cell.
2. Model: the calibrated logistic regression over differential, round index
   and momentum.

The empirical weight ``beta = min(1, ln(n + 1) / ln(K + 1))`` grows with
the number of observations ``n`` in the cell, so sparse history defers to
the model and well-populated cells are trusted outright once ``n`` reaches
``K`` (30 by default).
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from .bucketing import bucket_range, bucket_score
from .config import BlendConfig, RecencyConfig
from .historical_index import ProbabilityIndexCache
from .logistic import LogisticCoefficients, logistic_prob
from .models import GameState, HistoricalGame, as_game_state
from .results import ComplexBreakdown, WinProbability
from .utils.helpers import round_to_tenth

logger = logging.getLogger(__name__)


def credibility_weight(observations: float, confidence_threshold: int = 30) -> float:
    """Weight given to empirical data; 0 with no observations, capped at 1."""
    return min(1.0, math.log(observations + 1) / math.log(confidence_threshold + 1))


class ComplexEstimator:
    """Credibility blend of historical outcomes and the logistic model.

    Owns its probability-index cache, so repeated estimates against the same
    saved-game history only aggregate it once.
    """

    def __init__(
        self,
        cache: ProbabilityIndexCache | None = None,
        blend: BlendConfig | None = None,
        recency: RecencyConfig | None = None,
        coefficients: LogisticCoefficients | None = None,
    ):
        self.blend = blend or BlendConfig()
        self.cache = (
            cache if cache is not None else ProbabilityIndexCache(recency=recency)
        )
        self.coefficients = coefficients

    def explain(
        self,
        game: GameState | Mapping[str, Any] | None,
        historical_games: Iterable[HistoricalGame | Mapping[str, Any]] | None,
        now: datetime | None = None,
    ) -> ComplexBreakdown | None:
        """Every intermediate value of the estimate; None before any round."""
        game = as_game_state(game)
        if not game.rounds:
            return None

        round_index = len(game.rounds) - 1
        current_diff = game.rounds[-1].totals_or_zero.diff
        bucket = bucket_score(current_diff)

        index = self.cache.get_or_build(historical_games, now=now)
        counts = index.lookup(round_index, bucket)
        empirical_prob_us = counts.empirical_prob_us
        observations = counts.observations

        previous_diff = game.rounds[-2].totals_or_zero.diff if round_index > 0 else 0.0
        momentum = current_diff - previous_diff
        model_prob_us = logistic_prob(
            current_diff, round_index, momentum, self.coefficients
        )

        beta = credibility_weight(observations, self.blend.confidence_threshold)
        blended_prob_us = beta * empirical_prob_us + (1 - beta) * model_prob_us

        return ComplexBreakdown(
            round_index=round_index,
            current_diff=current_diff,
            previous_diff=previous_diff,
            momentum=momentum,
            bucket=bucket,
            bucket_range=bucket_range(bucket),
            us_count=counts.us,
            dem_count=counts.dem,
            empirical_prob_us=empirical_prob_us,
            observations=observations,
            model_prob_us=model_prob_us,
            beta=beta,
            blended_prob_us=blended_prob_us,
        )

    def estimate(
        self,
        game: GameState | Mapping[str, Any] | None,
        historical_games: Iterable[HistoricalGame | Mapping[str, Any]] | None,
        now: datetime | None = None,
    ) -> WinProbability:
        """Blended win percentages, each side rounded to one decimal.

        The two sides are rounded independently and may sum to 99.9 or 100.1.
        """
        breakdown = self.explain(game, historical_games, now=now)
        if breakdown is None:
            return WinProbability(us=50, dem=50)

        blended = breakdown.blended_prob_us
        logger.debug(
            f"Complex estimate round={breakdown.round_index} "
            f"bucket={breakdown.bucket} obs={breakdown.observations:.2f} "
            f"beta={breakdown.beta:.3f} empirical={breakdown.empirical_prob_us:.3f} "
            f"model={breakdown.model_prob_us:.3f}"
        )
        return WinProbability(
            us=round_to_tenth(blended * 100),
            dem=round_to_tenth((1 - blended) * 100),
        )


def estimate_complex(
    game: GameState | Mapping[str, Any] | None,
    historical_games: Iterable[HistoricalGame | Mapping[str, Any]] | None,
    cache: ProbabilityIndexCache | None = None,
    now: datetime | None = None,
) -> WinProbability:
    """One-off complex estimate; pass a cache to reuse indexes across calls."""
    return ComplexEstimator(cache=cache).estimate(game, historical_games, now=now)
