"""Shared fixtures for win-probability tests."""

from datetime import datetime, timezone

import pytest

FIXED_NOW = datetime(2025, 1, 15, tzinfo=timezone.utc)


def rounds_from_totals(*totals: tuple[int, int]) -> list[dict]:
    """Raw round records carrying only running totals."""
    return [{"runningTotals": {"us": us, "dem": dem}} for us, dem in totals]


def saved_game(
    final: tuple[int, int],
    *totals: tuple[int, int],
    timestamp: datetime = FIXED_NOW,
) -> dict:
    """Raw saved-game record in the app's export format."""
    return {
        "finalScore": {"us": final[0], "dem": final[1]},
        "rounds": rounds_from_totals(*totals),
        "timestamp": timestamp.isoformat(),
    }


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_saved_game():
    """Factory for raw saved-game records."""
    return saved_game


@pytest.fixture
def make_rounds():
    """Factory for raw rounds carrying only running totals."""
    return rounds_from_totals
