"""
통계 분석 엔진 통합 테스트

엔진 퍼사드, 설정, 예외 표현, 로그 싱크 주입, 워터폴 인사이트를 검증합니다.
"""

import dataclasses
import logging

import pytest

import waterfall_stats
from waterfall_stats import (
    DataEmptyException,
    InsufficientDataException,
    InvalidArgumentException,
    StatisticalAnalysisEngine,
    StatisticsConfig,
    analyze_waterfall_statistics,
)
from waterfall_stats.utils.search import SearchIndex

SINK_NAME = "waterfall_stats.tests.sink"


class TestStatisticsConfig:
    """설정 테스트"""

    def test_defaults(self):
        config = StatisticsConfig()

        assert config.mild_fence_multiplier == 1.5
        assert config.extreme_fence_multiplier == 3.0
        assert config.projection_periods == 3
        assert config.confidence_z_score == 1.96
        assert config.seasonality_threshold == 0.3

    def test_from_dict_merges_over_defaults(self):
        config = StatisticsConfig.from_dict({"projection_periods": 5})

        assert config.projection_periods == 5
        assert config.mild_fence_multiplier == 1.5
        assert config.to_dict()["projection_periods"] == 5

    def test_unknown_key(self):
        with pytest.raises(InvalidArgumentException) as exc_info:
            StatisticsConfig.from_dict({"window": 3})
        assert "window" in exc_info.value.message

    def test_invalid_values(self):
        with pytest.raises(InvalidArgumentException):
            StatisticsConfig(mild_fence_multiplier=0)
        with pytest.raises(InvalidArgumentException):
            StatisticsConfig(mild_fence_multiplier=2, extreme_fence_multiplier=1)
        with pytest.raises(InvalidArgumentException):
            StatisticsConfig(projection_periods=-1)

    def test_frozen(self):
        config = StatisticsConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.projection_periods = 10


class TestExceptions:
    """예외 표현 테스트"""

    def test_to_dict(self):
        error = InsufficientDataException(required=2, actual=1)

        assert error.to_dict() == {
            "message": "At least 2 data points are required, got 1",
            "type": "InsufficientDataException",
            "details": {"required": 2, "actual": 1},
        }

    def test_invalid_argument_message(self):
        error = InvalidArgumentException("series must be a sequence", "series")

        assert str(error) == "Invalid argument: series must be a sequence"
        assert error.details == {"argument": "series"}

    def test_common_base(self):
        for error in (DataEmptyException(), InsufficientDataException(2, 0), InvalidArgumentException("x")):
            assert isinstance(error, waterfall_stats.BaseStatisticsException)


class TestStatisticalAnalysisEngine:
    """StatisticalAnalysisEngine 테스트"""

    def setup_method(self):
        """테스트 설정"""
        self.engine = StatisticalAnalysisEngine()

    def test_all_operations(self):
        assert self.engine.calculate_summary([1, 2, 3]).mean == 2
        assert self.engine.detect_outliers([1, 2, 3, 4, 5, 6, 7, 8, 9, 100]).summary.total_outliers == 1
        assert self.engine.assess_data_quality([1, 2, 3]).completeness == 100
        assert self.engine.analyze_variance([{"label": "a", "value": 1}, {"label": "b", "value": 3}]).total_variance == 2
        assert self.engine.analyze_trend([(0, 0), (1, 1)]).slope == pytest.approx(1.0)
        assert self.engine.calculate_moving_average([1, 2, 3, 4, 5], 3) == pytest.approx([2, 3, 4])
        assert self.engine.calculate_exponential_smoothing([10, 12, 14], 0.5) == pytest.approx([10, 11, 12.5])
        assert self.engine.detect_seasonality([10, 15, 20, 5] * 3, 4) is True
        assert self.engine.create_bisector(lambda v: v).left([1, 2, 3], 2) == 1

        index = self.engine.create_search_index([{"v": 10}, {"v": 20}, {"v": 30}], lambda r: r["v"])
        assert isinstance(index, SearchIndex)
        assert index(22) == {"v": 20}

    def test_config_dict(self):
        engine = StatisticalAnalysisEngine(config={"projection_periods": 1})

        assert engine.config.projection_periods == 1
        assert len(engine.analyze_trend([(0, 0), (1, 1)]).projections) == 1

    def test_invalid_config(self):
        with pytest.raises(InvalidArgumentException):
            StatisticalAnalysisEngine(config={"unknown": 1})
        with pytest.raises(InvalidArgumentException):
            StatisticalAnalysisEngine(config=[("projection_periods", 1)])

    def test_errors_propagate(self):
        with pytest.raises(DataEmptyException):
            self.engine.calculate_summary([None])
        with pytest.raises(InsufficientDataException):
            self.engine.analyze_trend([])


class TestLogSink:
    """로그 싱크 주입 테스트"""

    def setup_method(self):
        self.sink = logging.getLogger(SINK_NAME)

    def test_records_go_to_injected_logger(self, caplog):
        caplog.set_level(logging.DEBUG, logger=SINK_NAME)

        engine = StatisticalAnalysisEngine(log_sink=self.sink)
        engine.calculate_summary([1, 2, 3])

        sink_records = [r for r in caplog.records if r.name == SINK_NAME]
        assert any(r.getMessage() == "StatisticalAnalysisEngine initialized" for r in sink_records)

        summary_records = [r for r in sink_records if getattr(r, "operation", None) == "calculate_summary"]
        assert len(summary_records) == 1
        assert summary_records[0].count == 3

    def test_function_level_sink(self, caplog):
        caplog.set_level(logging.DEBUG, logger=SINK_NAME)

        waterfall_stats.detect_outliers([1, 2, 3], log_sink=self.sink)

        operations = {getattr(r, "operation", None) for r in caplog.records if r.name == SINK_NAME}
        assert "detect_outliers" in operations

    def test_search_index_uses_engine_logger(self, caplog):
        caplog.set_level(logging.DEBUG, logger=SINK_NAME)
        engine = StatisticalAnalysisEngine(log_sink=self.sink)

        engine.create_search_index([{"v": 10}, {"v": 20}], lambda r: r["v"])

        operations = [getattr(r, "operation", None) for r in caplog.records if r.name == SINK_NAME]
        assert "create_search_index" in operations

    def test_failure_is_logged_as_warning(self, caplog):
        caplog.set_level(logging.DEBUG, logger=SINK_NAME)
        engine = StatisticalAnalysisEngine(log_sink=self.sink)

        with pytest.raises(InsufficientDataException):
            engine.analyze_trend([(1, 1)])

        warnings = [r for r in caplog.records if r.name == SINK_NAME and r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].operation == "analyze_trend"
        assert warnings[0].error_type == "InsufficientDataException"

    def test_package_logger_has_null_handler(self):
        handlers = logging.getLogger("waterfall_stats").handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)


class TestWaterfallStatistics:
    """워터폴 종합 통계 테스트"""

    def setup_method(self):
        self.data = [
            {"label": "Revenue", "value": 100},
            {"label": "Costs", "value": -40},
            {"label": "Tax", "value": -10},
            {"label": "Other", "value": 20},
        ]

    def test_components(self):
        result = analyze_waterfall_statistics(self.data)

        assert result.summary.count == 4
        assert result.summary.mean == pytest.approx(17.5)
        assert result.variance.total_variance == pytest.approx(3625.0)
        assert result.quality.completeness == 100
        assert result.quality.anomalies.outliers == []

    def test_insights(self):
        result = analyze_waterfall_statistics(self.data)

        assert result.insights == [
            "Revenue is the primary driver of variance (high impact)",
            "High volatility detected - consider risk management strategies",
        ]

    def test_positive_pattern(self):
        data = [{"label": label, "value": value} for label, value in
                [("A", 10), ("B", 12), ("C", 11), ("D", -1)]]
        result = analyze_waterfall_statistics(data)

        assert "Predominantly positive contributors - strong growth pattern" in result.insights

    def test_negative_pattern(self):
        data = [{"label": "A", "value": -10}, {"label": "B", "value": -12}, {"label": "C", "value": -11}]
        result = analyze_waterfall_statistics(data)

        assert "Predominantly negative contributors - potential cost management focus needed" in result.insights

    def test_outlier_insight(self):
        values = [1, 2, 3, 4, 5, 6, 7, 8, 9, 100]
        data = [{"label": f"step{i}", "value": v} for i, v in enumerate(values)]
        result = analyze_waterfall_statistics(data)

        assert result.quality.anomalies.summary.outlier_percentage == pytest.approx(10.0)
        # 10%는 임계값을 넘지 않음
        assert not any("outliers detected" in insight for insight in result.insights)

        config = StatisticsConfig(waterfall_outlier_insight_pct=5)
        result = analyze_waterfall_statistics(data, config=config)
        assert "1 outliers detected - data validation recommended" in result.insights

    def test_currency_range(self):
        data = [{"label": "A", "value": 2_000_000}, {"label": "B", "value": 10}]

        assert analyze_waterfall_statistics(data).quality.accuracy == 100

        result = analyze_waterfall_statistics(data, currency=True)
        assert result.quality.accuracy == pytest.approx(50.0)
        assert "1 values outside expected range" in result.quality.issues

    def test_engine_entry_point(self):
        result = StatisticalAnalysisEngine().analyze_waterfall_statistics(self.data)
        assert len(result.insights) == 2

    def test_empty_data(self):
        with pytest.raises(DataEmptyException):
            analyze_waterfall_statistics([])
