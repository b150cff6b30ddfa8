"""
데이터 품질 평가

이질적인 입력 항목을 먼저 분류(ClassifiedItem)한 뒤
완전성, 유효성, 정확성, 일관성, 중복, 이상치를 평가하고
임계값을 넘는 항목에 대해 권장사항을 생성합니다.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import numpy as np
import pandas as pd
from pydantic import ValidationError

from ..config import StatisticsConfig
from ..exceptions import InvalidArgumentException
from ..models.statistics import (
    DataQualityOptions,
    ItemKindEnum,
    OutlierAnalysis,
    QualityAssessment,
)
from .outliers import detect_outliers, empty_outlier_analysis
from .summary import sample_variance
from .validation import ensure_sequence, is_missing, is_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifiedItem:
    """분류된 입력 항목"""
    kind: ItemKindEnum
    value: Any


def classify_item(item: Any) -> ClassifiedItem:
    """
    입력 항목 하나를 분류합니다.

    'value' 키를 가진 매핑은 그 값으로 분류합니다.
    """
    value = item['value'] if isinstance(item, Mapping) and 'value' in item else item

    if is_missing(value):
        return ClassifiedItem(ItemKindEnum.MISSING, None)
    if isinstance(value, (bool, np.bool_)):
        return ClassifiedItem(ItemKindEnum.BOOLEAN, bool(value))
    if is_number(value):
        return ClassifiedItem(ItemKindEnum.NUMBER, float(value))
    if isinstance(value, str):
        return ClassifiedItem(ItemKindEnum.STRING, value)
    if isinstance(value, (list, tuple, np.ndarray)):
        return ClassifiedItem(ItemKindEnum.ARRAY, value)
    return ClassifiedItem(ItemKindEnum.OBJECT, value)


def _normalize(value: Any) -> Any:
    """매핑은 키의 repr 기준으로 정렬된 (키, 값) 쌍 목록으로 변환 (키 타입이 섞여도 비교 가능)"""
    if isinstance(value, Mapping):
        return [[repr(key), _normalize(item)] for key, item in sorted(value.items(), key=lambda kv: repr(kv[0]))]
    if isinstance(value, np.ndarray):
        value = value.tolist()
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return value


def _canonical_key(item: ClassifiedItem) -> str:
    """구조적 동등성 비교용 직렬화"""
    return json.dumps([item.kind.value, _normalize(item.value)], default=str)


def _resolve_options(options: Union[DataQualityOptions, Dict[str, Any], None]) -> DataQualityOptions:
    if options is None:
        return DataQualityOptions()
    if isinstance(options, DataQualityOptions):
        return options
    if isinstance(options, Mapping):
        try:
            return DataQualityOptions(**options)
        except ValidationError as e:
            raise InvalidArgumentException(str(e), "options") from e
    raise InvalidArgumentException(f"options must be a mapping, got {type(options).__name__}", "options")


def _percentage(count: int, total: int) -> float:
    return count / total * 100 if total > 0 else 0.0


def _consistency(numeric_values: np.ndarray) -> float:
    """100 - 변동계수 x 100, [0, 100] 범위로 제한"""
    if len(numeric_values) == 0:
        return 100.0
    mean = float(numeric_values.mean())
    std = float(np.sqrt(sample_variance(numeric_values)))
    coefficient_of_variation = std / (abs(mean) or 1.0)
    return min(100.0, max(0.0, 100.0 - coefficient_of_variation * 100))


def assess_data_quality(items: Any,
                        options: Union[DataQualityOptions, Dict[str, Any], None] = None,
                        config: Optional[StatisticsConfig] = None,
                        log_sink: Optional[logging.Logger] = None) -> QualityAssessment:
    """
    데이터 품질을 평가합니다.

    Args:
        items: 이질적인 항목 시퀀스
        options: DataQualityOptions 또는 동일한 키의 딕셔너리
        config: 권장사항 임계값 설정
        log_sink: 호출자가 주입하는 로거

    Returns:
        QualityAssessment
    """
    config = config or StatisticsConfig()
    log = log_sink or logger
    options = _resolve_options(options)

    classified = [classify_item(item) for item in ensure_sequence(items, "items")]
    total = len(classified)

    present = [c for c in classified if c.kind != ItemKindEnum.MISSING]
    numeric = [c.value for c in classified if c.kind == ItemKindEnum.NUMBER]
    missing_count = total - len(present)

    allowed = set(options.allowed_types)
    type_valid_count = sum(1 for c in present if c.kind in allowed)

    if options.expected_range is not None:
        low, high = options.expected_range
        range_valid_count = sum(1 for value in numeric if low <= value <= high)
    else:
        range_valid_count = len(present)

    keys = pd.Series([_canonical_key(c) for c in present], dtype=object)
    duplicate_count = int((keys.value_counts() > 1).sum()) if len(keys) else 0

    numeric_values = np.array(numeric, dtype=float)
    anomalies: OutlierAnalysis = (
        detect_outliers(numeric, config=config, log_sink=log_sink) if numeric else empty_outlier_analysis()
    )

    completeness = _percentage(total - missing_count, total)
    validity = _percentage(type_valid_count, total)
    accuracy = _percentage(range_valid_count, total)
    consistency = _consistency(numeric_values)

    invalid_type_count = total - type_valid_count
    out_of_range_count = total - range_valid_count

    recommendations: List[str] = []
    if completeness < (1 - options.null_tolerance) * 100:
        recommendations.append(f"Improve data completeness: {missing_count} missing values detected")
        recommendations.append("Remove or impute missing values")
    if validity < config.min_validity_pct:
        recommendations.append(f"Validate data types: {invalid_type_count} invalid types found")
    if options.expected_range is not None and accuracy < config.min_accuracy_pct:
        recommendations.append(f"Check data accuracy: {out_of_range_count} values outside expected range")
    if duplicate_count > options.duplicate_tolerance * total:
        recommendations.append(f"Remove duplicates: {duplicate_count} duplicate values detected")
    if anomalies.summary.outlier_percentage > config.max_outlier_pct:
        recommendations.append(
            f"Investigate outliers: {anomalies.summary.total_outliers} outliers detected "
            f"({anomalies.summary.outlier_percentage:.1f}%)"
        )

    issues: List[str] = []
    if missing_count > 0:
        issues.append(f"{missing_count} null or missing values found")
    if invalid_type_count > 0:
        issues.append(f"{invalid_type_count} invalid data types found")
    if options.expected_range is not None and out_of_range_count > 0:
        issues.append(f"{out_of_range_count} values outside expected range")
    if duplicate_count > 0:
        issues.append(f"{duplicate_count} duplicate values found")
    if anomalies.summary.total_outliers > 0:
        issues.append(f"{anomalies.summary.total_outliers} outliers detected")

    log.info(
        f"Data quality assessed: {total} items, completeness {completeness:.1f}%, "
        f"{len(recommendations)} recommendations",
        extra={"operation": "assess_data_quality", "count": total}
    )

    return QualityAssessment(
        completeness=completeness,
        consistency=consistency,
        accuracy=accuracy,
        validity=validity,
        duplicate_count=duplicate_count,
        anomalies=anomalies,
        issues=issues,
        recommendations=recommendations
    )
