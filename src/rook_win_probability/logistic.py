"""Calibrated logistic model for "us" win probability.

Coefficients were fit on 44 completed games against three features taken
after each round: score differential, round index and momentum (change in
differential since the previous round).
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class LogisticCoefficients:
    """Fixed logistic regression coefficients."""

    intercept: float = 0.2084586876141831
    diff: float = 0.00421107
    round_index: float = -0.09520921
    momentum: float = 0.00149416

    def linear_score(self, diff: float, round_index: int, momentum: float) -> float:
        """Log-odds z for the given features."""
        return (
            self.intercept
            + self.diff * diff
            + self.round_index * round_index
            + self.momentum * momentum
        )


DEFAULT_COEFFICIENTS = LogisticCoefficients()


def sigmoid(z: float) -> float:
    """Logistic function that does not overflow for large |z|."""
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    exp_z = math.exp(z)
    return exp_z / (1.0 + exp_z)


def logistic_prob(
    diff: float,
    round_index: int,
    momentum: float,
    coefficients: LogisticCoefficients | None = None,
) -> float:
    """Probability that "us" eventually wins.

    Args:
        diff: Current score differential (us - dem)
        round_index: Zero-based index of the last completed round
        momentum: Differential change since the previous round
        coefficients: Override the calibrated coefficients

    Returns:
        Probability in (0, 1), increasing in diff
    """
    coefficients = coefficients or DEFAULT_COEFFICIENTS
    z = coefficients.linear_score(diff, round_index, momentum)
    return sigmoid(z)
