"""
Waterfall Statistics

Combines the summary, variance and quality components over waterfall
chart data and derives plain-language insights for chart annotations.
"""

import logging
from typing import Any, List, Optional

from ..config import StatisticsConfig
from ..models.statistics import (
    DataQualityOptions,
    StatisticalSummary,
    VarianceAnalysis,
    WaterfallStatistics,
)
from ..utils.data_quality import assess_data_quality
from ..utils.summary import calculate_summary
from ..utils.validation import parse_labeled_values
from ..utils.variance import analyze_variance

logger = logging.getLogger(__name__)


def _generate_insights(summary: StatisticalSummary,
                       variance: VarianceAnalysis,
                       outlier_percentage: float,
                       total_outliers: int,
                       values: List[float],
                       config: StatisticsConfig) -> List[str]:
    insights = []

    if variance.significant_factors:
        top_factor = variance.significant_factors[0]
        insights.append(
            f"{top_factor.label} is the primary driver of variance ({top_factor.impact.value} impact)"
        )

    if summary.standard_deviation > abs(summary.mean):
        insights.append("High volatility detected - consider risk management strategies")

    positive_count = sum(1 for v in values if v > 0)
    negative_count = sum(1 for v in values if v < 0)
    if negative_count:
        ratio = positive_count / negative_count
    else:
        ratio = float('inf') if positive_count else float('nan')

    if ratio > 2:
        insights.append("Predominantly positive contributors - strong growth pattern")
    elif ratio < 0.5:
        insights.append("Predominantly negative contributors - potential cost management focus needed")

    if outlier_percentage > config.waterfall_outlier_insight_pct:
        insights.append(f"{total_outliers} outliers detected - data validation recommended")

    return insights


def analyze_waterfall_statistics(data: Any,
                                 currency: bool = False,
                                 config: Optional[StatisticsConfig] = None,
                                 log_sink: Optional[logging.Logger] = None) -> WaterfallStatistics:
    """
    Analyze waterfall data and generate insights.

    Args:
        data: Sequence of {label, value} mappings
        currency: Constrain the quality check to +/- the configured currency limit
        config: Statistics configuration
        log_sink: Logger injected by the caller

    Returns:
        WaterfallStatistics
    """
    config = config or StatisticsConfig()
    log = log_sink or logger

    items = parse_labeled_values(data, "data")
    values = [item.value for item in items]

    summary = calculate_summary(values, log_sink=log_sink)
    variance = analyze_variance(items, config=config, log_sink=log_sink)

    expected_range = (-config.currency_range_limit, config.currency_range_limit) if currency else None
    quality = assess_data_quality(
        values,
        DataQualityOptions(expected_range=expected_range),
        config=config,
        log_sink=log_sink
    )

    insights = _generate_insights(
        summary,
        variance,
        quality.anomalies.summary.outlier_percentage,
        quality.anomalies.summary.total_outliers,
        values,
        config
    )

    log.info(f"Waterfall statistics: {len(items)} items, {len(insights)} insights",
             extra={"operation": "analyze_waterfall_statistics", "count": len(items)})

    return WaterfallStatistics(summary=summary, variance=variance, quality=quality, insights=insights)
