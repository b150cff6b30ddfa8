"""
Statistics Engine Configuration

Thresholds used by the outlier, quality, variance, trend and seasonality
components. Every field can be overridden from a plain dict.
"""

import logging
from dataclasses import dataclass, asdict, fields
from typing import Dict, Any, Optional

from .exceptions import InvalidArgumentException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatisticsConfig:
    """Configuration for statistical thresholds"""
    # IQR fences
    mild_fence_multiplier: float = 1.5
    extreme_fence_multiplier: float = 3.0

    # Variance contribution impact (percent of total)
    high_impact_threshold: float = 20.0
    medium_impact_threshold: float = 10.0
    max_significant_factors: int = 5

    # Group decomposition F-statistic labels
    significant_f_statistic: float = 4.0
    moderate_f_statistic: float = 2.0

    # Trend analysis
    trend_stability_threshold: float = 0.01  # |slope| at or below this is "stable"
    strong_correlation_threshold: float = 0.7
    moderate_correlation_threshold: float = 0.3
    projection_periods: int = 3
    confidence_z_score: float = 1.96  # 95% interval

    # Seasonality
    seasonality_threshold: float = 0.3

    # Data quality recommendations (percentages)
    min_validity_pct: float = 95.0
    min_accuracy_pct: float = 90.0
    max_outlier_pct: float = 5.0

    # Waterfall insights
    waterfall_outlier_insight_pct: float = 10.0
    currency_range_limit: float = 1_000_000.0

    def __post_init__(self):
        if self.mild_fence_multiplier <= 0:
            raise InvalidArgumentException("mild_fence_multiplier must be positive", "mild_fence_multiplier")
        if self.extreme_fence_multiplier < self.mild_fence_multiplier:
            raise InvalidArgumentException(
                "extreme_fence_multiplier must not be smaller than mild_fence_multiplier",
                "extreme_fence_multiplier"
            )
        if self.medium_impact_threshold > self.high_impact_threshold:
            raise InvalidArgumentException(
                "medium_impact_threshold must not exceed high_impact_threshold", "medium_impact_threshold"
            )
        if self.moderate_correlation_threshold > self.strong_correlation_threshold:
            raise InvalidArgumentException(
                "moderate_correlation_threshold must not exceed strong_correlation_threshold",
                "moderate_correlation_threshold"
            )
        if self.max_significant_factors < 0 or self.projection_periods < 0:
            raise InvalidArgumentException("counts must not be negative", "max_significant_factors")

    @classmethod
    def from_dict(cls, overrides: Optional[Dict[str, Any]] = None) -> "StatisticsConfig":
        """
        Build a config by merging a partial dict over the defaults.

        Args:
            overrides: Keys to override; unknown keys are rejected

        Returns:
            StatisticsConfig
        """
        overrides = overrides or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise InvalidArgumentException(f"unknown config keys: {unknown}", "config")
        return cls(**overrides)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def resolve_config(config: Any = None) -> StatisticsConfig:
    """Accept None, a dict of overrides or a StatisticsConfig"""
    if config is None:
        return StatisticsConfig()
    if isinstance(config, StatisticsConfig):
        return config
    if isinstance(config, dict):
        return StatisticsConfig.from_dict(config)
    raise InvalidArgumentException(f"config must be a dict or StatisticsConfig, got {type(config).__name__}", "config")
