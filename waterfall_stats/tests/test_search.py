"""
최근접 값 검색 인덱스 단위 테스트

정렬, 경계 클램핑, 동률 처리, 불변성, 로그 싱크 주입을 검증합니다.
"""

import logging

import pytest

from waterfall_stats.exceptions import InvalidArgumentException
from waterfall_stats.utils.search import Bisector, SearchIndex, create_bisector, create_search_index


class TestSearchIndex:
    """create_search_index / SearchIndex 테스트"""

    def setup_method(self):
        self.records = [{"v": 10}, {"v": 20}, {"v": 30}]
        self.index = create_search_index(self.records, lambda r: r["v"])

    def test_nearest_value(self):
        # 20까지 거리 2, 30까지 거리 8
        assert self.index(22) == {"v": 20}
        assert self.index.find_nearest(28) == {"v": 30}

    def test_clamps_to_ends(self):
        assert self.index(5) == {"v": 10}
        assert self.index(1000) == {"v": 30}

    def test_exact_match(self):
        assert self.index(20) == {"v": 20}

    def test_tie_resolves_to_lower(self):
        """거리가 같으면 아래쪽 레코드"""
        assert self.index(15) == {"v": 10}
        assert self.index(25) == {"v": 20}

    def test_unsorted_input_is_sorted(self):
        index = create_search_index([{"v": 30}, {"v": 10}, {"v": 20}], lambda r: r["v"])

        assert [r["v"] for r in index.records] == [10, 20, 30]
        assert index(12) == {"v": 10}

    def test_equal_keys_keep_input_order(self):
        first, second = {"v": 5, "id": "first"}, {"v": 5, "id": "second"}
        index = create_search_index([second, {"v": 1}, first], lambda r: r["v"])

        assert [r.get("id") for r in index.records] == [None, "second", "first"]
        assert index(5)["id"] == "second"

    def test_caller_sequence_untouched(self):
        """호출자의 시퀀스는 변경되지 않음"""
        data = [{"v": 3}, {"v": 1}, {"v": 2}]
        index = create_search_index(data, lambda r: r["v"])

        assert data == [{"v": 3}, {"v": 1}, {"v": 2}]
        assert isinstance(index.records, tuple)
        assert len(index) == 3

    def test_empty_index_returns_none(self):
        index = create_search_index([], lambda r: r)
        assert index(1.5) is None
        assert len(index) == 0

    def test_plain_numbers(self):
        index = SearchIndex([1.5, -2, 7], lambda v: v)
        assert index(0) == 1.5
        assert index.accessor(4) == 4

    def test_non_numeric_accessor_result(self):
        with pytest.raises(InvalidArgumentException):
            create_search_index([{"v": "a"}], lambda r: r["v"])
        with pytest.raises(InvalidArgumentException):
            create_search_index([{"v": float("nan")}], lambda r: r["v"])

    def test_invalid_query(self):
        with pytest.raises(InvalidArgumentException):
            self.index("22")
        with pytest.raises(InvalidArgumentException):
            self.index(float("nan"))

    def test_invalid_construction(self):
        with pytest.raises(InvalidArgumentException):
            create_search_index(self.records, "v")
        with pytest.raises(InvalidArgumentException):
            create_search_index(None, lambda r: r)


class TestBisector:
    """create_bisector 테스트"""

    def test_left_and_right(self):
        bisector = create_bisector(lambda r: r["v"])
        records = [{"v": 1}, {"v": 2}, {"v": 2}, {"v": 3}]

        assert isinstance(bisector, Bisector)
        assert bisector.left(records, 2) == 1
        assert bisector.right(records, 2) == 3
        assert bisector.left(records, 0) == 0
        assert bisector.right(records, 10) == 4

    def test_bounds(self):
        bisector = create_bisector(lambda v: v)
        assert bisector.left([1, 2, 3, 4, 5], 4, lo=1, hi=2) == 2

    def test_accessor_must_be_callable(self):
        with pytest.raises(InvalidArgumentException):
            create_bisector(None)


def test_index_logs_to_injected_sink(caplog):
    """주입된 로거로 인덱스 생성 로그 전달"""
    sink_name = "waterfall_stats.tests.search_sink"
    caplog.set_level(logging.DEBUG, logger=sink_name)

    create_search_index([{"v": 1}, {"v": 2}], lambda r: r["v"], log_sink=logging.getLogger(sink_name))

    records = [r for r in caplog.records if r.name == sink_name]
    assert len(records) == 1
    assert records[0].operation == "create_search_index"
    assert records[0].count == 2
