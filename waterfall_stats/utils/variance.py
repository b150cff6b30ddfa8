"""
분산 기여도 분석

라벨이 붙은 값들이 전체 분산에 얼마나 기여하는지 계산하고
상위 기여 항목을 주요 요인으로 분류합니다.
라벨 접두어 기준의 그룹 분산 분해(F 통계량)도 함께 제공합니다.
"""

import logging
import re
from typing import Any, Dict, List, Optional

import numpy as np

from ..config import StatisticsConfig
from ..models.statistics import (
    ImpactLevelEnum,
    LabeledValue,
    SignificantFactor,
    VarianceAnalysis,
    VarianceContribution,
    VarianceSignificanceEnum,
)
from .summary import sample_variance
from .validation import parse_labeled_values

logger = logging.getLogger(__name__)

CATEGORY_PATTERN = re.compile(r'^([A-Za-z]+)')


def _classify_impact(contribution_pct: float, config: StatisticsConfig) -> ImpactLevelEnum:
    if contribution_pct > config.high_impact_threshold:
        return ImpactLevelEnum.HIGH
    if contribution_pct > config.medium_impact_threshold:
        return ImpactLevelEnum.MEDIUM
    return ImpactLevelEnum.LOW


def _group_key(item: LabeledValue) -> str:
    """라벨 앞의 영문자 부분 ("A1" -> "A"), 없으면 부호로 그룹화"""
    match = CATEGORY_PATTERN.match(item.label)
    if match:
        return match.group(1)
    return 'positive' if item.value > 0 else 'negative'


def _group_decomposition(items: List[LabeledValue], values: np.ndarray,
                         total_variance: float) -> Dict[str, float]:
    """그룹 간/그룹 내 분산과 F 통계량"""
    groups: Dict[str, List[float]] = {}
    for item in items:
        groups.setdefault(_group_key(item), []).append(item.value)

    if not groups:
        return {'between': 0.0, 'within': total_variance, 'f_statistic': 0.0}

    grand_mean = float(values.mean())
    group_arrays = [np.array(group, dtype=float) for group in groups.values()]

    between = 0.0
    if len(group_arrays) > 1:
        between = sum(len(g) * (float(g.mean()) - grand_mean) ** 2 for g in group_arrays) / (len(group_arrays) - 1)

    within = sum(sample_variance(g) * (len(g) - 1) for g in group_arrays) / max(1, len(values) - len(group_arrays))

    f_statistic = between / within if between > 0 and within > 0 else 0.0
    return {'between': float(between), 'within': float(within), 'f_statistic': float(f_statistic)}


def _classify_significance(f_statistic: float, config: StatisticsConfig) -> VarianceSignificanceEnum:
    if f_statistic > config.significant_f_statistic:
        return VarianceSignificanceEnum.SIGNIFICANT
    if f_statistic > config.moderate_f_statistic:
        return VarianceSignificanceEnum.MODERATE
    return VarianceSignificanceEnum.NOT_SIGNIFICANT


def analyze_variance(labeled_values: Any,
                     config: Optional[StatisticsConfig] = None,
                     log_sink: Optional[logging.Logger] = None) -> VarianceAnalysis:
    """
    분산 기여도를 분석합니다.

    Args:
        labeled_values: {label, value} 매핑 또는 LabeledValue 시퀀스
        config: 영향 수준 임계값 설정
        log_sink: 호출자가 주입하는 로거

    Returns:
        VarianceAnalysis
    """
    config = config or StatisticsConfig()
    log = log_sink or logger

    items = parse_labeled_values(labeled_values, "labeled_values")
    if not items:
        log.debug("No labeled values; returning empty variance analysis",
                  extra={"operation": "analyze_variance", "count": 0})
        return VarianceAnalysis(total_variance=0.0, positive_variance=0.0, negative_variance=0.0)

    values = np.array([item.value for item in items], dtype=float)
    total_variance = sample_variance(values)
    positive_variance = sample_variance(values[values > 0])
    negative_variance = sample_variance(values[values < 0])

    mean = float(values.mean())
    squared_deviations = (values - mean) ** 2
    # 기여율 합계가 100%가 되도록 편차 제곱합으로 정규화
    sum_of_squares = float(squared_deviations.sum())

    contributions = [
        VarianceContribution(
            label=item.label,
            value=item.value,
            variance=float(deviation),
            contribution_pct=float(deviation / sum_of_squares * 100) if total_variance > 0 else 0.0
        )
        for item, deviation in zip(items, squared_deviations)
    ]

    ranked = sorted(contributions, key=lambda c: c.contribution_pct, reverse=True)
    significant_factors = [
        SignificantFactor(
            label=c.label,
            impact=_classify_impact(c.contribution_pct, config),
            variance=c.variance
        )
        for c in ranked[:config.max_significant_factors]
    ]

    decomposition = _group_decomposition(items, values, total_variance)

    log.debug(f"Variance analysis: {len(items)} items, total variance {total_variance:.4f}",
              extra={"operation": "analyze_variance", "count": len(items)})

    return VarianceAnalysis(
        total_variance=total_variance,
        positive_variance=positive_variance,
        negative_variance=negative_variance,
        within_group_variance=decomposition['within'],
        between_group_variance=decomposition['between'],
        f_statistic=decomposition['f_statistic'],
        significance=_classify_significance(decomposition['f_statistic'], config),
        contributions=contributions,
        significant_factors=significant_factors
    )
