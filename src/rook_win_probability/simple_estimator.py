"""Heuristic ("simple") win-probability estimator.

Starts from the score differential and nudges the result with three small
adjustments: recent momentum, how often leaders have been caught in past
games, and who has been making the big bids.

Example:
    ```python
    result = estimate_simple(game, saved_games)
    print(f"Us {result.us:.1f}% / Dem {result.dem:.1f}%")
    for factor in result.factors:
        print(factor.name, factor.value, factor.description)
    ```
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .config import HeuristicConfig
from .models import GameState, HistoricalGame, as_game_state, as_historical_games
from .results import ProbabilityFactor, WinProbability
from .utils.helpers import clamp, round_half_up

logger = logging.getLogger(__name__)

EVEN_ODDS = 50.0


def momentum_factor(game: GameState, config: HeuristicConfig | None = None) -> float:
    """+bonus if us outscored dem over the recent window, -bonus if the reverse.

    Zero until a full window of rounds has been played.
    """
    config = config or HeuristicConfig()
    window = config.momentum_window
    if len(game.rounds) < window:
        return 0.0

    recent = game.rounds[-window:]
    recent_us = sum(r.us_points for r in recent)
    recent_dem = sum(r.dem_points for r in recent)

    if recent_us > recent_dem:
        return config.momentum_bonus
    if recent_dem > recent_us:
        return -config.momentum_bonus
    return 0.0


def count_high_bids(game: GameState, team: str, threshold: int) -> int:
    """Rounds where ``team`` held the bid at or above ``threshold``."""
    return sum(
        1
        for r in game.rounds
        if r.bidding_team == team
        and r.bid_amount is not None
        and r.bid_amount >= threshold
    )


def bid_strength_factor(
    game: GameState, config: HeuristicConfig | None = None
) -> tuple[float, int, int]:
    """Bid-strength adjustment plus the high-bid counts behind it."""
    config = config or HeuristicConfig()
    us_high = count_high_bids(game, "us", config.high_bid_threshold)
    dem_high = count_high_bids(game, "dem", config.high_bid_threshold)

    if us_high > dem_high:
        return config.bid_bonus, us_high, dem_high
    if dem_high > us_high:
        return -config.bid_bonus, us_high, dem_high
    return 0.0, us_high, dem_high


def relevant_history(
    historical_games: list[HistoricalGame], rounds_played: int
) -> list[HistoricalGame]:
    """Finished games that lasted at least as long as the current one.

    A final score object carrying neither team's score does not count as
    finished here.
    """
    return [
        g
        for g in historical_games
        if g.rounds
        and len(g.rounds) >= rounds_played
        and g.final_score is not None
        and g.final_score.is_recorded
    ]


def comeback_factor(
    relevant_games: list[HistoricalGame],
    rounds_played: int,
    config: HeuristicConfig | None = None,
) -> int:
    """Historical rate at which the leader after this round went on to lose.

    Only games that continued past the current round count as a situation.
    The rate is scaled to ``comeback_scale`` and rounded half up, so it is
    always non-negative and at most the scale.
    """
    config = config or HeuristicConfig()
    comebacks = 0
    situations = 0

    for game in relevant_games:
        if len(game.rounds) <= rounds_played:
            continue

        totals = game.rounds[rounds_played - 1].running_totals
        if totals is None:
            continue

        if totals.leader != game.winner:
            comebacks += 1
        situations += 1

    if situations == 0:
        return 0
    return round_half_up(comebacks / situations * config.comeback_scale)


def estimate_simple(
    game: GameState | Mapping[str, Any] | None,
    historical_games: Iterable[HistoricalGame | Mapping[str, Any]] | None,
    config: HeuristicConfig | None = None,
) -> WinProbability:
    """Heuristic win probability for both teams.

    Args:
        game: Current game (model or raw record)
        historical_games: Saved finished games
        config: Heuristic tuning

    Returns:
        WinProbability with us in [1, 99], dem = 100 - us, and four
        explanatory factors. Even odds with no factors before any round.
    """
    config = config or HeuristicConfig()
    game = as_game_state(game)

    if not game.rounds:
        logger.debug("Win probabilities: us=50%, dem=50% (no rounds played)")
        return WinProbability(us=EVEN_ODDS, dem=EVEN_ODDS, factors=[])

    history = as_historical_games(historical_games)
    rounds_played = game.rounds_played
    score_diff = game.rounds[-1].totals_or_zero.diff

    base_prob = EVEN_ODDS + score_diff / config.points_per_percent

    relevant_games = relevant_history(history, rounds_played)
    comeback = comeback_factor(relevant_games, rounds_played, config)
    momentum = momentum_factor(game, config)
    bid_strength, us_high_bids, dem_high_bids = bid_strength_factor(game, config)

    adjusted_prob = clamp(
        base_prob + momentum + comeback + bid_strength,
        config.min_probability,
        config.max_probability,
    )

    factors = [
        ProbabilityFactor(
            name="Score Difference",
            value=round_half_up(score_diff / 20),
            description=f"{abs(score_diff):g} point difference",
        ),
        ProbabilityFactor(
            name="Momentum",
            value=momentum,
            description="Recent rounds trend" if momentum != 0 else "No clear momentum",
        ),
        ProbabilityFactor(
            name="Comeback Tendency",
            value=comeback,
            description=f"Based on {len(relevant_games)} completed games",
        ),
        ProbabilityFactor(
            name="Bid Strength",
            value=bid_strength,
            description=f"High bids: us ({us_high_bids}), dem ({dem_high_bids})",
        ),
    ]

    logger.debug(f"Win probabilities: us={adjusted_prob}%, dem={100 - adjusted_prob}%")
    for factor in factors:
        logger.debug(f"{factor.name}: {factor.value}% - {factor.description}")

    return WinProbability(us=adjusted_prob, dem=100 - adjusted_prob, factors=factors)
