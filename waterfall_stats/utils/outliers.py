"""
이상치 탐지기

요약 통계의 사분위수와 IQR로 펜스를 계산하고 각 값을
mild/extreme, lower/upper 이상치 또는 정상 값으로 분류합니다.
이상치 목록과 정상 값 목록은 유효한 입력을 정확히 분할합니다.
"""

import logging
from typing import Any, List, Optional, Sequence

from ..config import StatisticsConfig
from ..models.statistics import (
    CleanRecord,
    OutlierAnalysis,
    OutlierDirectionEnum,
    OutlierRecord,
    OutlierSeverityEnum,
    OutlierStatistics,
    OutlierSummary,
    OutlierThresholds,
)
from .summary import calculate_summary
from .validation import ensure_sequence, clean_numeric_series

logger = logging.getLogger(__name__)


def empty_outlier_analysis() -> OutlierAnalysis:
    """숫자 데이터가 없을 때의 빈 분석 결과"""
    return OutlierAnalysis(method="none")


def _label_at(labels: Sequence[Any], index: int) -> Optional[str]:
    if index < len(labels) and labels[index] is not None:
        return str(labels[index])
    return None


def detect_outliers(series: Any,
                    labels: Optional[Any] = None,
                    config: Optional[StatisticsConfig] = None,
                    log_sink: Optional[logging.Logger] = None) -> OutlierAnalysis:
    """
    IQR 펜스를 사용해 이상치를 탐지합니다.

    Args:
        series: 숫자 시퀀스 (None/NaN은 건너뜀)
        labels: series와 평행한 라벨 시퀀스 (선택)
        config: 펜스 배수 설정
        log_sink: 호출자가 주입하는 로거

    Returns:
        OutlierAnalysis (유효한 값이 없으면 method='none'인 빈 결과)
    """
    config = config or StatisticsConfig()
    log = log_sink or logger

    raw = ensure_sequence(series, "series")
    label_list = ensure_sequence(labels, "labels") if labels is not None else []
    valid = clean_numeric_series(raw, "series")

    if not valid:
        log.debug("No valid numeric values; returning empty outlier analysis",
                  extra={"operation": "detect_outliers", "count": 0})
        return empty_outlier_analysis()

    summary = calculate_summary([value for _, value in valid], log_sink=log_sink)
    q1 = summary.quartiles.q1
    q3 = summary.quartiles.q3
    iqr = summary.quartiles.iqr

    thresholds = OutlierThresholds(
        lower_bound=q1 - config.mild_fence_multiplier * iqr,
        upper_bound=q3 + config.mild_fence_multiplier * iqr,
        extreme_lower_bound=q1 - config.extreme_fence_multiplier * iqr,
        extreme_upper_bound=q3 + config.extreme_fence_multiplier * iqr
    )

    outliers: List[OutlierRecord] = []
    clean_data: List[CleanRecord] = []

    for index, value in valid:
        label = _label_at(label_list, index)
        is_outlier = value < thresholds.lower_bound or value > thresholds.upper_bound

        if not is_outlier:
            clean_data.append(CleanRecord(value=value, index=index, label=label))
            continue

        is_extreme = value < thresholds.extreme_lower_bound or value > thresholds.extreme_upper_bound
        outliers.append(OutlierRecord(
            value=value,
            index=index,
            label=label,
            severity=OutlierSeverityEnum.EXTREME if is_extreme else OutlierSeverityEnum.MILD,
            direction=OutlierDirectionEnum.LOWER if value < thresholds.lower_bound else OutlierDirectionEnum.UPPER
        ))

    extreme_count = sum(1 for o in outliers if o.severity == OutlierSeverityEnum.EXTREME)

    analysis = OutlierAnalysis(
        outliers=outliers,
        clean_data=clean_data,
        method="iqr",
        thresholds=thresholds,
        statistics=OutlierStatistics(
            mean=summary.mean,
            median=summary.median,
            q1=q1,
            q3=q3,
            iqr=iqr
        ),
        summary=OutlierSummary(
            total_outliers=len(outliers),
            mild_outliers=len(outliers) - extreme_count,
            extreme_outliers=extreme_count,
            outlier_percentage=len(outliers) / len(raw) * 100
        )
    )

    log.debug(f"Outlier detection: {len(outliers)} outliers ({extreme_count} extreme) in {len(valid)} values",
              extra={"operation": "detect_outliers", "count": len(valid)})
    return analysis
