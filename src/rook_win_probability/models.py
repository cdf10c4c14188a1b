"""Pydantic models for Rook game records.

Field aliases match the camelCase keys the scorekeeping app writes to its
saved-games store, so exported JSON validates directly.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

Team = Literal["us", "dem"]


def _finite_number(value: Any) -> float:
    """Coerce a score value to a finite float, falling back to 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


class Totals(BaseModel):
    """Cumulative (or final) score pair."""

    model_config = ConfigDict(frozen=True)

    us: float = Field(default=0.0, description="Us team score")
    dem: float = Field(default=0.0, description="Dem team score")

    @field_validator("us", "dem", mode="before")
    @classmethod
    def coerce_score(cls, v: Any) -> float:
        """Non-numeric and non-finite scores count as zero."""
        return _finite_number(v)

    @property
    def diff(self) -> float:
        """Us minus dem."""
        return self.us - self.dem

    @property
    def is_recorded(self) -> bool:
        """False when neither score was present in the source record."""
        return bool(self.model_fields_set)

    @property
    def leader(self) -> Team:
        """Team ahead on these totals; an exact tie reads as dem."""
        return "us" if self.us > self.dem else "dem"


class Round(BaseModel):
    """One completed bidding cycle."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bidding_team: Team | None = Field(
        None, alias="biddingTeam", description="Team that won the bid"
    )
    bid_amount: int | None = Field(None, alias="bidAmount", description="Winning bid")
    us_points: float = Field(0.0, alias="usPoints", description="Us points this round")
    dem_points: float = Field(
        0.0, alias="demPoints", description="Dem points this round"
    )
    running_totals: Totals | None = Field(
        None, alias="runningTotals", description="Cumulative totals after this round"
    )

    @field_validator("us_points", "dem_points", mode="before")
    @classmethod
    def coerce_points(cls, v: Any) -> float:
        return _finite_number(v)

    @field_validator("bidding_team", mode="before")
    @classmethod
    def coerce_team(cls, v: Any) -> Team | None:
        return v if v in ("us", "dem") else None

    @field_validator("bid_amount", mode="before")
    @classmethod
    def coerce_bid(cls, v: Any) -> int | None:
        if v is None or v == "":
            return None
        try:
            return int(float(v))
        except (TypeError, ValueError, OverflowError):
            return None

    @field_validator("running_totals", mode="before")
    @classmethod
    def drop_non_mapping_totals(cls, v: Any) -> Any:
        if v is None or isinstance(v, (Mapping, Totals)):
            return v
        return None

    @property
    def totals_or_zero(self) -> Totals:
        """Running totals, or 0/0 when the round carries none."""
        return self.running_totals if self.running_totals is not None else Totals()


class GameState(BaseModel):
    """The in-progress game as the estimators see it."""

    model_config = ConfigDict(populate_by_name=True)

    rounds: list[Round] = Field(default_factory=list, description="Rounds in order")
    starting_totals: Totals = Field(
        default_factory=Totals,
        alias="startingTotals",
        description="Scores before the first round (resumed games)",
    )

    @field_validator("rounds", mode="before")
    @classmethod
    def none_rounds_are_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def rounds_played(self) -> int:
        return len(self.rounds)

    @property
    def last_round(self) -> Round | None:
        return self.rounds[-1] if self.rounds else None


class HistoricalGame(BaseModel):
    """A finished, saved game."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rounds: list[Round] = Field(default_factory=list, description="Rounds in order")
    final_score: Totals | None = Field(
        None, alias="finalScore", description="Score when the game ended"
    )
    timestamp: datetime | None = Field(None, description="When the game was saved")

    @field_validator("rounds", mode="before")
    @classmethod
    def none_rounds_are_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("final_score", mode="before")
    @classmethod
    def drop_non_mapping_score(cls, v: Any) -> Any:
        if v is None or isinstance(v, (Mapping, Totals)):
            return v
        return None

    @field_validator("timestamp", mode="wrap")
    @classmethod
    def drop_unparseable_timestamp(cls, v: Any, handler: Any) -> datetime | None:
        """An unreadable timestamp is treated as missing."""
        try:
            return handler(v)
        except ValidationError:
            return None

    @property
    def is_complete(self) -> bool:
        """Usable for aggregation: has rounds and a final score."""
        return bool(self.rounds) and self.final_score is not None

    @property
    def winner(self) -> Team:
        """Winner by final score. A tie is recorded as a dem win."""
        if self.final_score is None:
            return "dem"
        return self.final_score.leader


def as_game_state(game: GameState | Mapping[str, Any] | None) -> GameState:
    """Accept a model or a raw mapping for the current game."""
    if isinstance(game, GameState):
        return game
    if game is None:
        return GameState()
    return GameState.model_validate(game)


def as_historical_games(
    games: Iterable[HistoricalGame | Mapping[str, Any]] | None,
) -> list[HistoricalGame]:
    """Validate raw historical records, dropping any that fail validation."""
    if not games:
        return []

    validated = []
    for position, game in enumerate(games):
        if isinstance(game, HistoricalGame):
            validated.append(game)
            continue
        try:
            validated.append(HistoricalGame.model_validate(game))
        except ValidationError as e:
            logger.warning(
                f"Skipping historical game #{position}: "
                f"{e.error_count()} invalid field(s)"
            )
    return validated
