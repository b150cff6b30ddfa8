"""
요약 통계 계산기

숫자 시퀀스에서 결측값을 제거한 뒤 개수, 평균, 중앙값, 표본 분산,
사분위수와 백분위수를 계산합니다. 다른 모든 분석 컴포넌트가 이 모듈에 의존합니다.
"""

import logging
from typing import Any, Optional

import numpy as np
import pandas as pd

from ..exceptions import DataEmptyException
from ..models.statistics import StatisticalSummary, Quartiles, Percentiles
from .validation import ensure_sequence, clean_numeric_series

logger = logging.getLogger(__name__)

# 백분위수 이름과 분위 비율
PERCENTILE_LEVELS = {
    'p5': 0.05,
    'p10': 0.10,
    'p25': 0.25,
    'p75': 0.75,
    'p90': 0.90,
    'p95': 0.95,
}


def sample_variance(values: np.ndarray) -> float:
    """표본 분산 (n-1). 값이 2개 미만이면 0"""
    if len(values) < 2:
        return 0.0
    return float(np.var(values, ddof=1))


def interpolated_quantile(sorted_values: np.ndarray, p: float) -> float:
    """
    선형 보간 분위수

    index = p x (n-1)의 내림/올림 위치 값을 소수부로 가중 평균합니다.
    (numpy의 기본 'linear' 방식과 동일)
    """
    return float(np.quantile(sorted_values, p))


def calculate_summary(series: Any, log_sink: Optional[logging.Logger] = None) -> StatisticalSummary:
    """
    요약 통계를 계산합니다.

    Args:
        series: 숫자 시퀀스 (None/NaN은 제외)
        log_sink: 호출자가 주입하는 로거 (없으면 모듈 로거)

    Returns:
        StatisticalSummary

    Raises:
        DataEmptyException: 유효한 값이 하나도 없는 경우
    """
    log = log_sink or logger
    raw = ensure_sequence(series, "series")
    valid = clean_numeric_series(raw, "series")

    if not valid:
        raise DataEmptyException(total_count=len(raw))

    values = np.sort(np.array([value for _, value in valid], dtype=float))
    count = len(values)

    q1 = interpolated_quantile(values, 0.25)
    q2 = float(np.median(values))
    q3 = interpolated_quantile(values, 0.75)

    variance = sample_variance(values)
    minimum = float(values[0])
    maximum = float(values[-1])

    summary = StatisticalSummary(
        count=count,
        sum=float(values.sum()),
        mean=float(values.mean()),
        median=q2,
        mode=[float(v) for v in pd.Series(values).mode().tolist()],
        variance=variance,
        standard_deviation=float(np.sqrt(variance)),
        min=minimum,
        max=maximum,
        range=maximum - minimum,
        quartiles=Quartiles(q1=q1, q2=q2, q3=q3, iqr=q3 - q1),
        percentiles=Percentiles(**{
            name: interpolated_quantile(values, level) for name, level in PERCENTILE_LEVELS.items()
        })
    )

    log.debug(
        f"Summary calculated: {count} valid of {len(raw)} values",
        extra={"operation": "calculate_summary", "count": count}
    )
    return summary
