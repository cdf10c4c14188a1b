"""Historical probability index.

Aggregates finished games into a frequency table keyed by
``"{round_index}|{bucket}"``. Each cell holds recency-weighted win counts
for both teams, seeded with a Laplace prior of 1 so no cell is ever empty.
"""

import hashlib
import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import pandas as pd

from .bucketing import bucket_score
from .config import RecencyConfig
from .models import HistoricalGame, as_historical_games

logger = logging.getLogger(__name__)

LAPLACE_PRIOR = 1.0
SECONDS_PER_DAY = 86_400


@dataclass
class OutcomeCounts:
    """Weighted win counts for one (round, bucket) cell."""

    us: float = LAPLACE_PRIOR
    dem: float = LAPLACE_PRIOR

    def add(self, winner: str, weight: float) -> None:
        if winner == "us":
            self.us += weight
        else:
            self.dem += weight

    @property
    def observations(self) -> float:
        """Weighted observation count with the prior removed."""
        return (self.us - LAPLACE_PRIOR) + (self.dem - LAPLACE_PRIOR)

    @property
    def empirical_prob_us(self) -> float:
        return self.us / (self.us + self.dem)

    def to_dict(self) -> dict:
        return {"us": self.us, "dem": self.dem}


def make_key(round_index: int, bucket: int) -> str:
    """Composite index key, e.g. ``"3|-40"``."""
    return f"{round_index}|{bucket}"


class ProbabilityIndex(Mapping):
    """Read-only view over the aggregated (round, bucket) table."""

    def __init__(
        self,
        table: dict[str, OutcomeCounts] | None = None,
        games_used: int = 0,
    ):
        self._table = table or {}
        self.games_used = games_used

    def __getitem__(self, key: str) -> OutcomeCounts:
        return self._table[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"ProbabilityIndex(cells={len(self)}, games_used={self.games_used})"

    def lookup(self, round_index: int, bucket: int) -> OutcomeCounts:
        """Counts for a situation, or a fresh uninformed prior when unseen."""
        counts = self._table.get(make_key(round_index, bucket))
        if counts is None:
            return OutcomeCounts()
        return OutcomeCounts(us=counts.us, dem=counts.dem)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per cell, sorted by round then bucket."""
        columns = [
            "round_index",
            "bucket",
            "us",
            "dem",
            "observations",
            "empirical_us",
        ]
        rows = []
        for key, counts in self._table.items():
            round_part, bucket_part = key.split("|")
            rows.append(
                {
                    "round_index": int(round_part),
                    "bucket": int(bucket_part),
                    "us": counts.us,
                    "dem": counts.dem,
                    "observations": counts.observations,
                    "empirical_us": counts.empirical_prob_us,
                }
            )

        df = pd.DataFrame(rows, columns=columns)
        if df.empty:
            return df
        return df.sort_values(["round_index", "bucket"]).reset_index(drop=True)


def recency_weight(
    timestamp: datetime | None,
    now: datetime,
    recency: RecencyConfig | None = None,
) -> float:
    """Exponential recency weight: ``decay_rate ** (age_days / period_days)``.

    Games without a timestamp are weighted as if saved at ``now``. Naive
    datetimes are read as UTC.
    """
    recency = recency or RecencyConfig()
    if timestamp is None:
        return 1.0

    age_days = (_as_utc(now) - _as_utc(timestamp)).total_seconds() / SECONDS_PER_DAY
    return recency.decay_rate ** (age_days / recency.period_days)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def build_probability_index(
    historical_games: Iterable[HistoricalGame | Mapping[str, Any]] | None,
    now: datetime | None = None,
    recency: RecencyConfig | None = None,
) -> ProbabilityIndex:
    """Aggregate finished games into a ProbabilityIndex.

    Args:
        historical_games: Saved games (models or raw records)
        now: Reference time for recency weighting (defaults to current UTC)
        recency: Decay settings

    Returns:
        ProbabilityIndex with every cell's counts >= 1
    """
    now = now or datetime.now(timezone.utc)
    table: dict[str, OutcomeCounts] = {}
    games_used = 0

    for game in as_historical_games(historical_games):
        if not game.is_complete:
            continue

        winner = game.winner
        weight = recency_weight(game.timestamp, now, recency)
        games_used += 1

        for idx, game_round in enumerate(game.rounds):
            if game_round.running_totals is None:
                continue
            key = make_key(idx, bucket_score(game_round.running_totals.diff))
            if key not in table:
                table[key] = OutcomeCounts()
            table[key].add(winner, weight)

    logger.debug(f"Built probability index: {len(table)} cells from {games_used} games")
    return ProbabilityIndex(table, games_used=games_used)


def fingerprint_games(games: list[HistoricalGame]) -> str:
    """Stable content hash of a list of historical games."""
    digest = hashlib.sha256()
    for game in games:
        payload = game.model_dump(mode="json", by_alias=True)
        digest.update(json.dumps(payload, sort_keys=True).encode("utf-8"))
        digest.update(b"\n")
    return digest.hexdigest()


class ProbabilityIndexCache:
    """Memoizes built indexes by the content of the historical list.

    Two different histories of the same size never share an index. Entries
    are also keyed by the UTC date of ``now``, so recency weights are
    rebuilt at most once per day for a given history.

    Example:
        ```python
        cache = ProbabilityIndexCache()
        index = cache.get_or_build(saved_games)
        ```
    """

    def __init__(self, max_entries: int = 8, recency: RecencyConfig | None = None):
        self.max_entries = max_entries
        self.recency = recency
        self._entries: dict[str, ProbabilityIndex] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_build(
        self,
        historical_games: Iterable[HistoricalGame | Mapping[str, Any]] | None,
        now: datetime | None = None,
    ) -> ProbabilityIndex:
        """Return the cached index for this history, building it on a miss.

        A hit returns the index as weighted when it was built earlier on the
        same day as ``now``.
        """
        now = _as_utc(now or datetime.now(timezone.utc))
        games = as_historical_games(historical_games)
        fingerprint = fingerprint_games(games)
        day = now.astimezone(timezone.utc).date()
        key = f"{day.isoformat()}|{fingerprint}"

        index = self._entries.get(key)
        if index is not None:
            self.hits += 1
            logger.debug(f"Probability index cache hit ({fingerprint[:12]})")
            return index

        self.misses += 1
        logger.debug(f"Probability index cache miss ({fingerprint[:12]}), building")
        index = build_probability_index(games, now=now, recency=self.recency)

        if len(self._entries) >= self.max_entries:
            # Drop the oldest entry; dicts keep insertion order
            oldest = next(iter(self._entries))
            del self._entries[oldest]
        self._entries[key] = index
        return index

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0
