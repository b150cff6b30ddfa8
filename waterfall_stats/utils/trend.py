"""
추세 분석

(x, y) 포인트에 최소제곱 직선을 적합하고 상관계수로 추세 강도를 판단하며,
다음 기간들의 예측값과 신뢰구간을 계산합니다.
"""

import logging
from typing import Any, Optional

import numpy as np
from scipy import stats

from ..config import StatisticsConfig
from ..exceptions import InsufficientDataException
from ..models.statistics import (
    ConfidenceInterval,
    TrendAnalysis,
    TrendDirectionEnum,
    TrendProjection,
    TrendStrengthEnum,
)
from .summary import sample_variance
from .validation import parse_points

logger = logging.getLogger(__name__)

MIN_POINTS = 2


def trend_correlation(x: np.ndarray, y: np.ndarray) -> float:
    """
    Σ(x-x̄)(y-ȳ) / (√Σ(x-x̄)² · std(y) · √(n-1))

    std(y)·√(n-1) = √Σ(y-ȳ)² 이므로 Pearson r과 같은 값이 됩니다.
    x 또는 y의 분산이 0이면 0을 반환합니다.
    """
    dx = x - x.mean()
    dy = y - y.mean()
    x_std = np.sqrt(sample_variance(x))
    y_std = np.sqrt(sample_variance(y))
    if x_std * y_std == 0:
        return 0.0
    numerator = float(np.sum(dx * dy))
    return numerator / (np.sqrt(np.sum(dx * dx)) * y_std * np.sqrt(len(x) - 1))


def _classify_direction(slope: float, config: StatisticsConfig) -> TrendDirectionEnum:
    if slope > config.trend_stability_threshold:
        return TrendDirectionEnum.INCREASING
    if slope < -config.trend_stability_threshold:
        return TrendDirectionEnum.DECREASING
    return TrendDirectionEnum.STABLE


def _classify_strength(correlation: float, config: StatisticsConfig) -> TrendStrengthEnum:
    if abs(correlation) > config.strong_correlation_threshold:
        return TrendStrengthEnum.STRONG
    if abs(correlation) > config.moderate_correlation_threshold:
        return TrendStrengthEnum.MODERATE
    return TrendStrengthEnum.WEAK


def analyze_trend(points: Any,
                  config: Optional[StatisticsConfig] = None,
                  log_sink: Optional[logging.Logger] = None) -> TrendAnalysis:
    """
    선형 추세를 분석합니다.

    Args:
        points: {x, y} 매핑, TrendPoint 또는 (x, y) 쌍의 시퀀스
        config: 방향/강도 임계값 및 예측 설정
        log_sink: 호출자가 주입하는 로거

    Returns:
        TrendAnalysis

    Raises:
        InsufficientDataException: 포인트가 2개 미만인 경우
    """
    config = config or StatisticsConfig()
    log = log_sink or logger

    parsed = parse_points(points, "points")
    if len(parsed) < MIN_POINTS:
        raise InsufficientDataException(required=MIN_POINTS, actual=len(parsed))

    x = np.array([p.x for p in parsed], dtype=float)
    y = np.array([p.y for p in parsed], dtype=float)
    n = len(parsed)
    x_mean = float(x.mean())
    y_mean = float(y.mean())

    # linregress는 x가 모두 같으면 실패하므로 그 경우 기울기 0
    if np.sum((x - x_mean) ** 2) > 0:
        regression = stats.linregress(x, y)
        slope = float(regression.slope)
    else:
        slope = 0.0
    intercept = y_mean - slope * x_mean

    correlation = float(trend_correlation(x, y))
    standard_error = np.sqrt(sample_variance(y)) / np.sqrt(n)
    margin = config.confidence_z_score * standard_error

    last_x = float(x.max())
    projections = []
    for step in range(1, config.projection_periods + 1):
        period = last_x + step
        value = y_mean + slope * (period - x_mean)
        projections.append(TrendProjection(
            period=period,
            value=value,
            confidence_interval=ConfidenceInterval(lower=value - margin, upper=value + margin)
        ))

    direction = _classify_direction(slope, config)
    strength = _classify_strength(correlation, config)

    log.debug(f"Trend analysis: {n} points, slope {slope:.4f}, r {correlation:.4f} ({direction.value}, {strength.value})",
              extra={"operation": "analyze_trend", "count": n})

    return TrendAnalysis(
        slope=slope,
        intercept=intercept,
        correlation=correlation,
        r_squared=correlation ** 2,
        direction=direction,
        strength=strength,
        confidence_pct=abs(correlation) * 100,
        projections=projections
    )
