"""
시계열 평활 및 계절성 유틸리티

이동 평균, 지수 평활, 자기상관 기반 계절성 판정을 제공합니다.
"""

import logging
from itertools import accumulate
from typing import Any, List, Optional

import numpy as np

from ..config import StatisticsConfig
from ..exceptions import InvalidAlphaException, InvalidArgumentException, InvalidWindowException
from .validation import is_number, to_float_array

logger = logging.getLogger(__name__)


def _is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def calculate_moving_average(series: Any, window: int) -> List[float]:
    """
    단순 이동 평균

    Args:
        series: 숫자 시퀀스 (None/NaN은 제외)
        window: 윈도우 크기 (1 이상, 시퀀스 길이 이하)

    Returns:
        길이 len(series) - window + 1 의 평균 리스트
    """
    values = to_float_array(series, "series")
    if not _is_integer(window) or window <= 0 or window > len(values):
        raise InvalidWindowException(window, len(values))

    windows = np.lib.stride_tricks.sliding_window_view(values, int(window))
    return [float(v) for v in windows.mean(axis=1)]


def calculate_exponential_smoothing(series: Any, alpha: float) -> List[float]:
    """
    지수 평활: s[0] = x[0], s[i] = alpha * x[i] + (1 - alpha) * s[i-1]
    """
    if not is_number(alpha) or not 0 <= alpha <= 1:
        raise InvalidAlphaException(alpha)

    values = to_float_array(series, "series")
    return [float(v) for v in accumulate(values, lambda previous, current: alpha * current + (1 - alpha) * previous)]


def autocorrelation(values: np.ndarray, lag: int) -> float:
    """lag 자기상관, 분모가 0이면 0"""
    deviations = values - values.mean()
    denominator = float(np.sum(deviations ** 2))
    if denominator == 0:
        return 0.0
    numerator = float(np.sum(deviations[:-lag] * deviations[lag:])) if lag > 0 else denominator
    return numerator / denominator


def detect_seasonality(series: Any, period: int,
                       config: Optional[StatisticsConfig] = None,
                       log_sink: Optional[logging.Logger] = None) -> bool:
    """
    주기 period에서의 자기상관으로 계절성 여부를 판단합니다.

    시퀀스가 2 * period보다 짧으면 오류 대신 False를 반환합니다.
    """
    config = config or StatisticsConfig()
    log = log_sink or logger

    if not _is_integer(period) or period <= 0:
        raise InvalidArgumentException(f"period must be a positive integer, got {period!r}", "period")
    period = int(period)

    values = to_float_array(series, "series")
    if len(values) < 2 * period:
        log.debug(f"Series of length {len(values)} is too short for period {period}",
                  extra={"operation": "detect_seasonality", "count": len(values)})
        return False

    return abs(autocorrelation(values, period)) > config.seasonality_threshold
