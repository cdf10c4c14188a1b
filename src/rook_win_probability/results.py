"""Result containers returned by the win-probability estimators."""

from dataclasses import dataclass, field


@dataclass
class ProbabilityFactor:
    """One named contribution to a heuristic estimate, for display only."""

    name: str
    value: float
    description: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "value": self.value,
            "description": self.description,
        }


@dataclass
class WinProbability:
    """Win percentages for both teams.

    ``us`` and ``dem`` are percentages in [0, 100]. The complex method rounds
    each side to one decimal independently, so the pair can sum to 99.9 or
    100.1.
    """

    us: float
    dem: float
    factors: list[ProbabilityFactor] = field(default_factory=list)

    @property
    def favorite(self) -> str | None:
        """Team with the higher percentage, or None when even."""
        if self.us > self.dem:
            return "us"
        if self.dem > self.us:
            return "dem"
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "us": self.us,
            "dem": self.dem,
            "factors": [f.to_dict() for f in self.factors],
        }


@dataclass
class ComplexBreakdown:
    """Intermediate values of one credibility-blended estimate."""

    round_index: int
    current_diff: float
    previous_diff: float
    momentum: float
    bucket: int
    bucket_range: str
    us_count: float
    dem_count: float
    empirical_prob_us: float
    observations: float
    model_prob_us: float
    beta: float
    blended_prob_us: float

    @property
    def model_weight(self) -> float:
        return 1 - self.beta

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "round_index": self.round_index,
            "current_diff": self.current_diff,
            "previous_diff": self.previous_diff,
            "momentum": self.momentum,
            "bucket": self.bucket,
            "bucket_range": self.bucket_range,
            "us_count": self.us_count,
            "dem_count": self.dem_count,
            "empirical_prob_us": self.empirical_prob_us,
            "observations": self.observations,
            "model_prob_us": self.model_prob_us,
            "beta": self.beta,
            "model_weight": self.model_weight,
            "blended_prob_us": self.blended_prob_us,
        }
