"""
Configuration management for the win-probability engine.
Supports multiple environments: development, testing, production
"""

import os
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .utils.exceptions import ConfigurationError

VALID_METHODS = ("simple", "complex")


@dataclass
class RecencyConfig:
    """Recency weighting of historical games"""

    decay_rate: float = 0.8  # Weight multiplier per period
    period_days: float = 14.0


@dataclass
class BlendConfig:
    """Credibility blending of empirical and model probabilities"""

    confidence_threshold: int = 30  # Observations at which beta saturates


@dataclass
class HeuristicConfig:
    """Simple estimator tuning"""

    points_per_percent: float = 15.0
    momentum_window: int = 3  # Rounds
    momentum_bonus: float = 2.0
    high_bid_threshold: int = 140
    bid_bonus: float = 2.0
    comeback_scale: float = 10.0  # Max comeback adjustment in percent
    min_probability: float = 1.0
    max_probability: float = 99.0


@dataclass
class EngineConfig:
    """Top-level engine configuration"""

    method: str = "simple"
    recency: RecencyConfig = field(default_factory=RecencyConfig)
    blend: BlendConfig = field(default_factory=BlendConfig)
    heuristic: HeuristicConfig = field(default_factory=HeuristicConfig)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Reject values the estimators cannot work with."""
        if self.method not in VALID_METHODS:
            raise ConfigurationError(
                f"Unknown estimation method '{self.method}'. "
                f"Expected one of: {', '.join(VALID_METHODS)}"
            )
        if not 0 < self.recency.decay_rate <= 1:
            raise ConfigurationError("recency.decay_rate must be in (0, 1]")
        if self.recency.period_days <= 0:
            raise ConfigurationError("recency.period_days must be positive")
        if self.blend.confidence_threshold < 1:
            raise ConfigurationError("blend.confidence_threshold must be >= 1")
        if self.heuristic.points_per_percent == 0:
            raise ConfigurationError("heuristic.points_per_percent must be non-zero")
        if self.heuristic.min_probability > self.heuristic.max_probability:
            raise ConfigurationError(
                "heuristic.min_probability must not exceed max_probability"
            )

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any] | None) -> "EngineConfig":
        """Build a config from a (possibly partial) nested dictionary."""
        config = cls()
        if config_dict:
            _apply_config(config, config_dict)
            config.validate()
        return config


def _apply_config(target: Any, config_dict: dict[str, Any]) -> None:
    """Apply configuration from dictionary onto a dataclass, recursively"""
    known = {f.name for f in fields(target)}
    for key, value in config_dict.items():
        if key not in known:
            raise ConfigurationError(
                f"Unknown configuration key '{key}' for {type(target).__name__}"
            )
        current = getattr(target, key)
        if is_dataclass(current):
            if not isinstance(value, dict):
                raise ConfigurationError(
                    f"Configuration section '{key}' must be a mapping"
                )
            _apply_config(current, value)
        else:
            setattr(target, key, _coerce_value(key, value, current))


def _coerce_value(key: str, value: Any, current: Any) -> Any:
    """Convert a YAML scalar to the type of the field's current value."""
    expected = type(current)
    if value is None or isinstance(value, (bool, dict, list)):
        raise ConfigurationError(
            f"Configuration key '{key}' must be a {expected.__name__}, got {value!r}"
        )
    if expected is int and isinstance(value, float) and not value.is_integer():
        raise ConfigurationError(
            f"Configuration key '{key}' must be an integer, got {value!r}"
        )
    try:
        return expected(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Configuration key '{key}' must be a {expected.__name__}, got {value!r}"
        ) from e


def load_env_config(env_path: Path | None = None) -> dict[str, str | None]:
    """Load environment configuration from .env file.

    Returns:
        Dictionary with configuration values.
    """
    env_path = env_path or Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return {
        "env": os.getenv("APP_ENV", "development"),
        "method": os.getenv("ROOK_WINPROB_METHOD"),
        "config_dir": os.getenv("ROOK_WINPROB_CONFIG_DIR"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
    }


class Config:
    """Main configuration class"""

    def __init__(self, env: str = "development", config_dir: Path | None = None):
        self.env = env
        self.root_dir = Path(__file__).parent.parent.parent
        self.config_dir = config_dir or self.root_dir / "config"
        self.engine = EngineConfig()

        # Load environment-specific config
        self._load_environment_config()

    def _load_environment_config(self):
        """Load environment-specific YAML configuration"""
        config_file = self.config_dir / f"{self.env}.yaml"

        if config_file.exists():
            with open(config_file) as f:
                try:
                    env_config = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ConfigurationError(
                        f"Invalid YAML in {config_file}: {e}"
                    ) from e
            if not isinstance(env_config, dict):
                raise ConfigurationError(f"{config_file} must contain a mapping")
            self.engine = EngineConfig.from_dict(env_config.get("engine"))

    @classmethod
    def from_env(cls) -> "Config":
        """Build configuration from APP_ENV / .env, honoring a method override."""
        env_config = load_env_config()
        config_dir = env_config["config_dir"]
        config = cls(
            env=env_config["env"],
            config_dir=Path(config_dir) if config_dir else None,
        )
        if env_config["method"]:
            config.engine.method = env_config["method"].strip().lower()
            config.engine.validate()
        return config

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    @property
    def is_testing(self) -> bool:
        return self.env == "testing"

    @property
    def is_production(self) -> bool:
        return self.env == "production"
