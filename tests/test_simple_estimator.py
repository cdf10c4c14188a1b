"""Tests for the heuristic (simple) estimator."""

import pytest

from rook_win_probability.models import GameState, as_game_state, as_historical_games
from rook_win_probability.results import WinProbability
from rook_win_probability.simple_estimator import (
    bid_strength_factor,
    comeback_factor,
    estimate_simple,
    momentum_factor,
    relevant_history,
)


def played_round(us_total, dem_total, us_points=0, dem_points=0, team=None, bid=None):
    return {
        "runningTotals": {"us": us_total, "dem": dem_total},
        "usPoints": us_points,
        "demPoints": dem_points,
        "biddingTeam": team,
        "bidAmount": bid,
    }


class TestEmptyGame:
    """Test behavior before any round is played."""

    def test_no_rounds_is_even(self):
        result = estimate_simple({"rounds": []}, [])
        assert result == WinProbability(us=50, dem=50, factors=[])
        assert result.to_dict() == {"us": 50, "dem": 50, "factors": []}

    def test_missing_rounds_is_even(self):
        assert estimate_simple({}, None).to_dict() == {"us": 50, "dem": 50, "factors": []}
        assert estimate_simple(None, None).factors == []


class TestBaseProbability:
    """Test the score-differential baseline and clamping."""

    def test_lead_raises_us_probability(self):
        game = {"rounds": [played_round(120, 60, 120, 60, "us", 120)]}
        result = estimate_simple(game, [])
        assert result.us == pytest.approx(54.0)
        assert result.dem == pytest.approx(46.0)

    def test_clamped_high(self):
        game = {"rounds": [played_round(2000, 0)]}
        assert estimate_simple(game, []).us == 99

    def test_clamped_low(self):
        game = {"rounds": [played_round(0, 2000)]}
        result = estimate_simple(game, [])
        assert result.us == 1
        assert result.dem == 99

    def test_missing_running_totals_reads_as_tied(self):
        game = {"rounds": [{"usPoints": 100, "demPoints": 80}]}
        assert estimate_simple(game, []).us == 50

    def test_probabilities_are_complementary(self):
        game = {"rounds": [played_round(95, 180)]}
        result = estimate_simple(game, [])
        assert result.us + result.dem == pytest.approx(100)


class TestMomentumFactor:
    """Test the recent-rounds momentum adjustment."""

    def test_needs_three_rounds(self):
        game = GameState.model_validate(
            {"rounds": [played_round(120, 0, 120, 0), played_round(240, 0, 120, 0)]}
        )
        assert momentum_factor(game) == 0

    def test_us_leaning(self):
        game = GameState.model_validate(
            {
                "rounds": [
                    played_round(0, 180, 0, 180),
                    played_round(100, 260, 100, 80),
                    played_round(220, 300, 120, 40),
                    played_round(300, 400, 80, 100),
                ]
            }
        )
        # Only the last three rounds count: 300 vs 220
        assert momentum_factor(game) == 2

    def test_dem_leaning(self):
        game = GameState.model_validate(
            {"rounds": [played_round(0, 60, 0, 60) for _ in range(3)]}
        )
        assert momentum_factor(game) == -2

    def test_even_split(self):
        game = GameState.model_validate(
            {"rounds": [played_round(0, 0, 90, 90) for _ in range(3)]}
        )
        assert momentum_factor(game) == 0


class TestBidStrengthFactor:
    """Test the high-bid adjustment."""

    def test_counts_high_bids_per_team(self):
        game = GameState.model_validate(
            {
                "rounds": [
                    played_round(0, 0, team="us", bid=140),
                    played_round(0, 0, team="us", bid=150),
                    played_round(0, 0, team="dem", bid=145),
                    played_round(0, 0, team="dem", bid=135),
                ]
            }
        )
        assert bid_strength_factor(game) == (2, 2, 1)

    def test_dem_stronger(self):
        game = GameState.model_validate(
            {"rounds": [played_round(0, 0, team="dem", bid=160)]}
        )
        assert bid_strength_factor(game) == (-2, 0, 1)

    def test_missing_bids_are_ignored(self):
        game = GameState.model_validate({"rounds": [{"biddingTeam": "us"}]})
        assert bid_strength_factor(game) == (0, 0, 0)

    def test_unknown_bidding_team_does_not_raise(self):
        game = {
            "rounds": [
                {"runningTotals": {"us": 40, "dem": 0}, "biddingTeam": 1, "bidAmount": 140}
            ]
        }
        result = estimate_simple(game, [])
        assert bid_strength_factor(as_game_state(game)) == (0, 0, 0)
        assert result.factors[3].description == "High bids: us (0), dem (0)"


class TestComebackFactor:
    """Test the historical comeback adjustment."""

    def test_trailing_position_gets_positive_factor(self, make_saved_game):
        """Test one comeback and one wire-to-wire win give a positive factor."""
        history = [
            # Us trailed after round 1 and won
            make_saved_game((500, 300), (20, 80), (200, 150)),
            # Us led after round 1 and won
            make_saved_game((500, 200), (80, 20), (200, 100)),
        ]
        game = {"rounds": [played_round(40, 100)]}

        result = estimate_simple(game, history)

        comeback = next(f for f in result.factors if f.name == "Comeback Tendency")
        assert comeback.value == 5
        assert comeback.value > 0
        assert result.us == pytest.approx(50 - 60 / 15 + 5)

    def test_games_no_longer_than_current_are_not_situations(self, make_saved_game):
        """Test a history game that ended at the current round only counts as relevant."""
        history = as_historical_games([make_saved_game((200, 500), (100, 40), (150, 300))])
        relevant = relevant_history(history, rounds_played=2)
        assert len(relevant) == 1
        assert comeback_factor(relevant, rounds_played=2) == 0

    def test_short_games_are_not_relevant(self, make_saved_game):
        history = as_historical_games([make_saved_game((200, 500), (100, 40))])
        assert relevant_history(history, rounds_played=3) == []

    def test_rate_rounds_half_up(self, make_saved_game):
        """Test 1 comeback in 4 situations scales 2.5 up to 3."""
        history = as_historical_games(
            [
                make_saved_game((200, 500), (100, 40), (150, 300)),
                make_saved_game((500, 200), (100, 40), (300, 150)),
                make_saved_game((500, 200), (100, 40), (300, 150)),
                make_saved_game((500, 200), (100, 40), (300, 150)),
            ]
        )
        assert comeback_factor(history, rounds_played=1) == 3

    def test_tied_final_score_counts_for_dem(self, make_saved_game):
        """Test a tie is read as a dem win, so an us leader 'lost'."""
        history = as_historical_games([make_saved_game((300, 300), (100, 50), (300, 300))])
        assert comeback_factor(history, rounds_played=1) == 10

    def test_no_history(self):
        assert comeback_factor([], rounds_played=4) == 0

    def test_unparseable_timestamp_keeps_game(self, make_saved_game):
        """Test a bad timestamp does not remove a game from comeback history."""
        record = make_saved_game((500, 300), (20, 80), (200, 150))
        record["timestamp"] = "not a date"
        game = {"rounds": [played_round(40, 100)]}

        comeback = estimate_simple(game, [record]).factors[2]

        assert comeback.value == 10
        assert comeback.description == "Based on 1 completed games"

    def test_empty_final_score_is_not_relevant(self, make_rounds):
        """Test a final score with neither team's points is not a finished game."""
        history = [{"finalScore": {}, "rounds": make_rounds((100, 40), (200, 60))}]
        game = {"rounds": [played_round(40, 0)]}

        comeback = estimate_simple(game, history).factors[2]

        assert comeback.value == 0
        assert comeback.description == "Based on 0 completed games"

    def test_one_sided_final_score_is_relevant(self, make_rounds):
        history = as_historical_games(
            [{"finalScore": {"dem": 500}, "rounds": make_rounds((100, 40), (200, 60))}]
        )
        assert len(relevant_history(history, rounds_played=1)) == 1


class TestFactors:
    """Test the explanatory factor list."""

    def test_factor_names_and_descriptions(self, make_saved_game):
        game = {
            "rounds": [
                played_round(120, 0, 120, 0, "us", 120),
                played_round(120, 150, 0, 150, "dem", 150),
                played_round(260, 150, 140, 0, "us", 140),
            ]
        }
        history = [make_saved_game((500, 300), (20, 80), (200, 150), (300, 200), (500, 300))]

        result = estimate_simple(game, history)

        assert [f.name for f in result.factors] == [
            "Score Difference",
            "Momentum",
            "Comeback Tendency",
            "Bid Strength",
        ]
        score, momentum, comeback, bids = result.factors
        assert score.value == 6
        assert score.description == "110 point difference"
        assert momentum.value == 2
        assert momentum.description == "Recent rounds trend"
        assert comeback.description == "Based on 1 completed games"
        assert bids.value == 0
        assert bids.description == "High bids: us (1), dem (1)"

    def test_score_factor_rounds_half_up(self):
        game = {"rounds": [played_round(0, 50)]}
        score = estimate_simple(game, []).factors[0]
        assert score.value == -2
        assert score.description == "50 point difference"

    def test_no_momentum_description(self):
        game = {"rounds": [played_round(10, 0)]}
        momentum = estimate_simple(game, []).factors[1]
        assert momentum.value == 0
        assert momentum.description == "No clear momentum"
