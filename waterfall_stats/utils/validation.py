"""
입력 검증 유틸리티

모든 분석 컴포넌트가 동일한 방식으로 입력을 검증하고
동일한 InvalidArgumentException을 발생시키도록 공통 로직을 제공합니다.
"""

import logging
import math
import numbers
from collections.abc import Mapping, Sequence
from typing import Any, List, Tuple

import numpy as np
import pandas as pd

from ..exceptions import InvalidArgumentException
from ..models.statistics import LabeledValue, TrendPoint

logger = logging.getLogger(__name__)


def ensure_sequence(data: Any, name: str = "data") -> List[Any]:
    """
    입력을 리스트로 변환합니다. 원본은 변경하지 않습니다.

    Args:
        data: list, tuple, numpy 1차원 배열 또는 pandas Series
        name: 오류 메시지에 사용할 인자 이름

    Returns:
        입력 요소의 얕은 복사 리스트
    """
    if isinstance(data, pd.Series):
        return data.tolist()
    if isinstance(data, np.ndarray):
        if data.ndim != 1:
            raise InvalidArgumentException(f"{name} must be one-dimensional, got shape {data.shape}", name)
        return data.tolist()
    if data is None or isinstance(data, (str, bytes, bytearray, Mapping)) or not isinstance(data, Sequence):
        raise InvalidArgumentException(f"{name} must be a sequence, got {type(data).__name__}", name)
    return list(data)


def is_number(value: Any) -> bool:
    """bool을 제외한 실수 타입 여부"""
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def is_missing(value: Any) -> bool:
    """None, NaN, pandas NA 여부"""
    if value is None or value is pd.NA:
        return True
    return is_number(value) and math.isnan(value)


def clean_numeric_series(values: List[Any], name: str = "series") -> List[Tuple[int, float]]:
    """
    결측값을 제거하고 (원본 인덱스, 값) 쌍을 반환합니다.

    Raises:
        InvalidArgumentException: 숫자가 아닌 값이 있는 경우
    """
    valid = []
    for index, value in enumerate(values):
        if is_missing(value):
            continue
        if not is_number(value):
            raise InvalidArgumentException(f"{name}[{index}] is not a number: {value!r}", name)
        valid.append((index, float(value)))
    return valid


def to_float_array(data: Any, name: str = "series") -> np.ndarray:
    """시퀀스를 검증하고 결측값을 제거한 float 배열로 변환합니다."""
    values = ensure_sequence(data, name)
    return np.array([value for _, value in clean_numeric_series(values, name)], dtype=float)


def require_number(value: Any, name: str) -> float:
    if not is_number(value) or is_missing(value):
        raise InvalidArgumentException(f"{name} must be a number, got {value!r}", name)
    return float(value)


def parse_labeled_values(data: Any, name: str = "data") -> List[LabeledValue]:
    """{label, value} 매핑 또는 LabeledValue 시퀀스를 파싱합니다."""
    parsed = []
    for index, item in enumerate(ensure_sequence(data, name)):
        if isinstance(item, LabeledValue):
            parsed.append(item)
            continue
        if not isinstance(item, Mapping) or 'label' not in item or 'value' not in item:
            raise InvalidArgumentException(f"{name}[{index}] must have 'label' and 'value'", name)
        value = require_number(item['value'], f"{name}[{index}].value")
        parsed.append(LabeledValue(label=str(item['label']), value=value))
    return parsed


def parse_points(data: Any, name: str = "points") -> List[TrendPoint]:
    """{x, y} 매핑, TrendPoint 또는 (x, y) 쌍의 시퀀스를 파싱합니다."""
    parsed = []
    for index, item in enumerate(ensure_sequence(data, name)):
        if isinstance(item, TrendPoint):
            parsed.append(item)
            continue
        if isinstance(item, Mapping):
            if 'x' not in item or 'y' not in item:
                raise InvalidArgumentException(f"{name}[{index}] must have 'x' and 'y'", name)
            x, y = item['x'], item['y']
        elif isinstance(item, Sequence) and not isinstance(item, str) and len(item) == 2:
            x, y = item
        else:
            raise InvalidArgumentException(f"{name}[{index}] must be an {{x, y}} mapping or pair", name)
        parsed.append(TrendPoint(
            x=require_number(x, f"{name}[{index}].x"),
            y=require_number(y, f"{name}[{index}].y")
        ))
    return parsed
