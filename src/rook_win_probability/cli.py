"""
Command-line interface for Rook win-probability estimates.

Usage:
    rook-winprob estimate --game current.json --history saved_games.json
    rook-winprob estimate --game current.json --method complex --explain
    rook-winprob index --history saved_games.json --round 3
"""

import argparse
import sys

from . import __version__
from .config import Config, load_env_config
from .engine import EstimationMethod, WinProbabilityEngine
from .game_state import describe_situation, last_running_totals
from .historical_index import build_probability_index
from .history import load_game_state, load_saved_games
from .utils.exceptions import RookWinProbError
from .utils.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rook-winprob",
        description="Estimate Rook win probabilities from saved games",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: LOG_LEVEL env or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    estimate = subparsers.add_parser("estimate", help="Estimate the current game")
    estimate.add_argument("--game", required=True, help="Current game JSON file")
    estimate.add_argument("--history", help="Saved games JSON file")
    estimate.add_argument(
        "--method",
        choices=[m.value for m in EstimationMethod],
        default=None,
        help="Estimation method (default: from config, else simple)",
    )
    estimate.add_argument("--us-name", default="Us", help="Label for the us team")
    estimate.add_argument("--dem-name", default="Dem", help="Label for the dem team")
    estimate.add_argument(
        "--explain",
        action="store_true",
        help="Show the factor or blend breakdown",
    )

    index = subparsers.add_parser("index", help="Show the historical probability index")
    index.add_argument("--history", required=True, help="Saved games JSON file")
    index.add_argument("--round", type=int, default=None, help="Only this round index")

    return parser


def run_estimate(args: argparse.Namespace, config: Config) -> int:
    game = load_game_state(args.game)
    history = load_saved_games(args.history) if args.history else []
    engine = WinProbabilityEngine(method=args.method, config=config.engine)

    result = engine.estimate(game, history)
    diff = last_running_totals(game).diff

    print(f"{args.us_name}: {result.us:.1f}%   {args.dem_name}: {result.dem:.1f}%")
    if game.rounds:
        situation = describe_situation(diff, args.us_name, args.dem_name)
        print(f"{situation} - {len(history)} games analyzed")

    if not args.explain or not game.rounds:
        return 0

    print()
    if engine.method is EstimationMethod.SIMPLE:
        print("Factors:")
        for factor in result.factors:
            print(f"  {factor.name:<18} {factor.value:+g}%  {factor.description}")
    else:
        breakdown = engine.explain_complex(game, history)
        print(f"  Round index:        {breakdown.round_index}")
        print(f"  Score bucket:       {breakdown.bucket:+d} ({breakdown.bucket_range})")
        print(f"  Observations:       {breakdown.observations:.2f}")
        print(f"  Empirical (us):     {breakdown.empirical_prob_us:.1%}")
        print(f"  Momentum:           {breakdown.momentum:+g}")
        print(f"  Model (us):         {breakdown.model_prob_us:.1%}")
        print(f"  Empirical weight:   {breakdown.beta:.1%}")
    return 0


def run_index(args: argparse.Namespace) -> int:
    history = load_saved_games(args.history)
    index = build_probability_index(history)
    df = index.to_dataframe()

    if args.round is not None:
        df = df[df["round_index"] == args.round]

    print(f"{index.games_used} games, {len(df)} cells")
    if not df.empty:
        print(df.to_string(index=False, float_format=lambda v: f"{v:.3f}"))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    env_config = load_env_config()
    setup_logging(level=args.log_level or env_config["log_level"])

    try:
        config = Config.from_env()
        if args.command == "estimate":
            return run_estimate(args, config)
        return run_index(args)
    except RookWinProbError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
