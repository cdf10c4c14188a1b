"""Rook Win Probability - mid-game win estimates for the card game Rook.

Combines a recency-weighted index of saved games with a calibrated logistic
model, plus a lightweight heuristic estimator.
"""

__version__ = "0.1.0"

# Bucketing
from .bucketing import bucket_range, bucket_score

# Historical index
from .historical_index import (
    OutcomeCounts,
    ProbabilityIndex,
    ProbabilityIndexCache,
    build_probability_index,
)

# Estimators
from .simple_estimator import estimate_simple
from .logistic import LogisticCoefficients, logistic_prob
from .complex_estimator import ComplexEstimator, estimate_complex

# Method selection
from .engine import EstimationMethod, WinProbabilityEngine, calculate_win_probability

# Models
from .models import GameState, HistoricalGame, Round, Totals
from .results import ComplexBreakdown, ProbabilityFactor, WinProbability

# Game helpers
from .game_state import (
    describe_situation,
    last_running_totals,
    recompute_running_totals,
)

# Loading
from .history import load_game_state, load_saved_games, parse_saved_games

# Config
from .config import Config, EngineConfig

# Utils
from .utils import (
    ConfigurationError,
    DataValidationError,
    HistoryLoadError,
    RookWinProbError,
    setup_logging,
)

__all__ = [
    "__version__",
    # Bucketing
    "bucket_score",
    "bucket_range",
    # Historical index
    "OutcomeCounts",
    "ProbabilityIndex",
    "ProbabilityIndexCache",
    "build_probability_index",
    # Estimators
    "estimate_simple",
    "LogisticCoefficients",
    "logistic_prob",
    "ComplexEstimator",
    "estimate_complex",
    # Method selection
    "EstimationMethod",
    "WinProbabilityEngine",
    "calculate_win_probability",
    # Models
    "GameState",
    "HistoricalGame",
    "Round",
    "Totals",
    "ComplexBreakdown",
    "ProbabilityFactor",
    "WinProbability",
    # Game helpers
    "describe_situation",
    "last_running_totals",
    "recompute_running_totals",
    # Loading
    "load_game_state",
    "load_saved_games",
    "parse_saved_games",
    # Config
    "Config",
    "EngineConfig",
    # Utils
    "RookWinProbError",
    "DataValidationError",
    "ConfigurationError",
    "HistoryLoadError",
    "setup_logging",
]
