"""Helpers over the in-progress game: running totals and situation text."""

from collections.abc import Sequence

from .models import GameState, Round, Totals

SLIGHT_LEAD_MARGIN = 30
CLEAR_LEAD_MARGIN = 60


def recompute_running_totals(
    rounds: Sequence[Round],
    starting_totals: Totals | None = None,
) -> list[Round]:
    """Rebuild each round's running totals as prefix sums of round points.

    Args:
        rounds: Rounds in play order
        starting_totals: Scores before the first round (resumed games)

    Returns:
        New Round objects; the inputs are left untouched
    """
    totals = starting_totals or Totals()
    rebuilt = []
    for game_round in rounds:
        totals = Totals(
            us=totals.us + game_round.us_points,
            dem=totals.dem + game_round.dem_points,
        )
        rebuilt.append(game_round.model_copy(update={"running_totals": totals}))
    return rebuilt


def last_running_totals(game: GameState) -> Totals:
    """Totals after the latest round, or the starting totals before play."""
    if game.rounds:
        return game.rounds[-1].totals_or_zero
    return game.starting_totals


def describe_situation(
    diff: float, us_label: str = "Us", dem_label: str = "Dem"
) -> str:
    """One-line description of who is ahead and by how much."""
    if diff == 0:
        return "Even game"

    leader = us_label if diff > 0 else dem_label
    margin = abs(diff)
    if margin <= SLIGHT_LEAD_MARGIN:
        return f"{leader} slightly ahead"
    if margin <= CLEAR_LEAD_MARGIN:
        return f"{leader} leading"
    return f"{leader} strongly ahead"
