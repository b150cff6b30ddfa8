"""
최근접 값 검색 인덱스

임의의 레코드를 accessor 값 기준으로 정렬한 불변 사본을 만들고
이진 탐색으로 가장 가까운 레코드를 찾습니다.
"""

import bisect
import logging
from typing import Any, Callable, Generic, Optional, Sequence, Tuple, TypeVar

import numpy as np

from ..exceptions import InvalidArgumentException
from .validation import ensure_sequence, is_missing, is_number, require_number

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Bisector(Generic[T]):
    """accessor 기준으로 정렬된 레코드의 삽입 위치 탐색"""

    def __init__(self, accessor: Callable[[T], float]):
        if not callable(accessor):
            raise InvalidArgumentException("accessor must be callable", "accessor")
        self.accessor = accessor

    def left(self, records: Sequence[T], value: float, lo: int = 0, hi: Optional[int] = None) -> int:
        """accessor 값이 value 이상인 첫 위치"""
        return bisect.bisect_left(records, value, lo, len(records) if hi is None else hi, key=self.accessor)

    def right(self, records: Sequence[T], value: float, lo: int = 0, hi: Optional[int] = None) -> int:
        """accessor 값이 value 초과인 첫 위치"""
        return bisect.bisect_right(records, value, lo, len(records) if hi is None else hi, key=self.accessor)


class SearchIndex(Generic[T]):
    """
    불변 최근접 값 인덱스

    호출자의 시퀀스는 복사만 하고 변경하지 않습니다.
    생성 이후 인덱스도 변경되지 않으므로 동시 조회가 안전합니다.
    """

    def __init__(self, data: Any, accessor: Callable[[T], float],
                 log_sink: Optional[logging.Logger] = None):
        if not callable(accessor):
            raise InvalidArgumentException("accessor must be callable", "accessor")
        log = log_sink or logger

        records = ensure_sequence(data, "data")
        keyed = []
        for index, record in enumerate(records):
            key = accessor(record)
            if not is_number(key) or is_missing(key):
                raise InvalidArgumentException(f"accessor returned a non-numeric value for data[{index}]: {key!r}",
                                               "accessor")
            keyed.append((float(key), record))

        # 안정 정렬: 같은 키는 입력 순서 유지
        keyed.sort(key=lambda pair: pair[0])

        self._accessor = accessor
        self._records: Tuple[T, ...] = tuple(record for _, record in keyed)
        self._keys = np.array([key for key, _ in keyed], dtype=float)
        self._keys.flags.writeable = False

        log.debug(f"SearchIndex built over {len(self._records)} records",
                  extra={"operation": "create_search_index", "count": len(self._records)})

    @property
    def records(self) -> Tuple[T, ...]:
        return self._records

    @property
    def accessor(self) -> Callable[[T], float]:
        return self._accessor

    def __len__(self) -> int:
        return len(self._records)

    def __call__(self, value: float) -> Optional[T]:
        return self.find_nearest(value)

    def find_nearest(self, value: float) -> Optional[T]:
        """
        accessor 값이 value에 가장 가까운 레코드를 반환합니다.

        범위 밖이면 첫/마지막 레코드, 거리가 같으면 아래쪽 레코드.
        인덱스가 비어 있으면 None.
        """
        value = require_number(value, "value")
        if not self._records:
            return None

        index = int(np.searchsorted(self._keys, value, side='left'))
        if index == 0:
            return self._records[0]
        if index >= len(self._records):
            return self._records[-1]

        left_distance = abs(self._keys[index - 1] - value)
        right_distance = abs(self._keys[index] - value)
        return self._records[index - 1] if left_distance <= right_distance else self._records[index]


def create_bisector(accessor: Callable[[T], float]) -> Bisector[T]:
    return Bisector(accessor)


def create_search_index(data: Any, accessor: Callable[[T], float],
                        log_sink: Optional[logging.Logger] = None) -> SearchIndex[T]:
    """SearchIndex 생성, 결과는 index(value) 형태로 호출 가능"""
    return SearchIndex(data, accessor, log_sink=log_sink)
