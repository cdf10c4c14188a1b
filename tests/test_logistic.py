"""Tests for the calibrated logistic model."""

import math

from rook_win_probability.logistic import (
    DEFAULT_COEFFICIENTS,
    LogisticCoefficients,
    logistic_prob,
    sigmoid,
)


def reference_prob(diff, round_index, momentum):
    z = (
        0.2084586876141831
        + 0.00421107 * diff
        - 0.09520921 * round_index
        + 0.00149416 * momentum
    )
    return 1 / (1 + math.exp(-z))


class TestLogisticProb:
    """Test logistic probability outputs."""

    def test_default_coefficients(self):
        """Test the trained coefficients are the defaults."""
        assert DEFAULT_COEFFICIENTS.intercept == 0.2084586876141831
        assert DEFAULT_COEFFICIENTS.diff == 0.00421107
        assert DEFAULT_COEFFICIENTS.round_index == -0.09520921
        assert DEFAULT_COEFFICIENTS.momentum == 0.00149416

    def test_matches_reference_formula(self):
        """Test against the closed-form sigmoid of the linear score."""
        cases = [(0, 0, 0), (60, 1, 0), (50, 1, 30), (200, 8, 80)]
        for diff, round_index, momentum in cases:
            assert math.isclose(
                logistic_prob(diff, round_index, momentum),
                reference_prob(diff, round_index, momentum),
                rel_tol=1e-12,
            )

    def test_negative_scores_match_reference(self):
        """Test the overflow-safe branch agrees for negative log-odds."""
        assert math.isclose(
            logistic_prob(-120, 4, -40), reference_prob(-120, 4, -40), rel_tol=1e-12
        )

    def test_monotonic_in_diff(self):
        """Test probability rises with the differential, other inputs fixed."""
        probs = [logistic_prob(diff, 3, 10) for diff in range(-300, 301, 20)]
        assert all(a < b for a, b in zip(probs, probs[1:]))

    def test_later_rounds_lower_us_probability(self):
        """Test the negative round coefficient at a fixed position."""
        assert logistic_prob(0, 10, 0) < logistic_prob(0, 0, 0)

    def test_extreme_inputs_do_not_overflow(self):
        """Test huge differentials saturate instead of raising."""
        assert logistic_prob(1e6, 0, 0) == 1.0
        assert logistic_prob(-1e6, 0, 0) == 0.0

    def test_custom_coefficients(self):
        """Test that zeroed coefficients give even odds."""
        flat = LogisticCoefficients(intercept=0, diff=0, round_index=0, momentum=0)
        assert logistic_prob(150, 5, 40, coefficients=flat) == 0.5

    def test_nan_propagates(self):
        """Test that NaN input is not silently converted."""
        assert math.isnan(logistic_prob(float("nan"), 0, 0))

    def test_sigmoid_midpoint(self):
        assert sigmoid(0) == 0.5
