"""
Statistical Analysis Engine

Object facade over the statistics components. Holds a configuration and a
caller-injected logger and forwards both to every operation.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from ..config import StatisticsConfig, resolve_config
from ..exceptions import BaseStatisticsException
from ..models.statistics import (
    DataQualityOptions,
    OutlierAnalysis,
    QualityAssessment,
    StatisticalSummary,
    TrendAnalysis,
    VarianceAnalysis,
    WaterfallStatistics,
)
from ..utils import data_quality, outliers, search, smoothing, summary, trend, variance
from .waterfall import analyze_waterfall_statistics

logger = logging.getLogger(__name__)


class StatisticalAnalysisEngine:
    """
    Statistical analysis engine for chart data.

    All operations are pure and reentrant; one engine can be shared between
    threads.
    """

    def __init__(self,
                 config: Union[StatisticsConfig, Dict[str, Any], None] = None,
                 log_sink: Optional[logging.Logger] = None):
        """
        Initialize the statistical analysis engine

        Args:
            config: StatisticsConfig or a dict of overrides merged over the defaults
            log_sink: Log sink for this engine (Logger or LoggerAdapter)
        """
        self.config = resolve_config(config)
        self.logger = log_sink or logger
        self.logger.info("StatisticalAnalysisEngine initialized")

    def _run(self, operation: str, func: Callable[..., Any], *args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except BaseStatisticsException as e:
            self.logger.warning(f"{operation} failed: {e.message}",
                                extra={"operation": operation, "error_type": e.__class__.__name__})
            raise

    def calculate_summary(self, series: Any) -> StatisticalSummary:
        return self._run("calculate_summary", summary.calculate_summary, series, log_sink=self.logger)

    def detect_outliers(self, series: Any, labels: Optional[Any] = None) -> OutlierAnalysis:
        return self._run("detect_outliers", outliers.detect_outliers, series, labels,
                         config=self.config, log_sink=self.logger)

    def assess_data_quality(self, items: Any,
                            options: Union[DataQualityOptions, Dict[str, Any], None] = None) -> QualityAssessment:
        return self._run("assess_data_quality", data_quality.assess_data_quality, items, options,
                         config=self.config, log_sink=self.logger)

    def analyze_variance(self, labeled_values: Any) -> VarianceAnalysis:
        return self._run("analyze_variance", variance.analyze_variance, labeled_values,
                         config=self.config, log_sink=self.logger)

    def analyze_trend(self, points: Any) -> TrendAnalysis:
        return self._run("analyze_trend", trend.analyze_trend, points,
                         config=self.config, log_sink=self.logger)

    def create_search_index(self, data: Any, accessor: Callable[[Any], float]) -> search.SearchIndex:
        return self._run("create_search_index", search.create_search_index, data, accessor,
                         log_sink=self.logger)

    def create_bisector(self, accessor: Callable[[Any], float]) -> search.Bisector:
        return self._run("create_bisector", search.create_bisector, accessor)

    def calculate_moving_average(self, series: Any, window: int) -> List[float]:
        return self._run("calculate_moving_average", smoothing.calculate_moving_average, series, window)

    def calculate_exponential_smoothing(self, series: Any, alpha: float) -> List[float]:
        return self._run("calculate_exponential_smoothing", smoothing.calculate_exponential_smoothing,
                         series, alpha)

    def detect_seasonality(self, series: Any, period: int) -> bool:
        return self._run("detect_seasonality", smoothing.detect_seasonality, series, period,
                         config=self.config, log_sink=self.logger)

    def analyze_waterfall_statistics(self, data: Any, currency: bool = False) -> WaterfallStatistics:
        return self._run("analyze_waterfall_statistics", analyze_waterfall_statistics, data, currency,
                         config=self.config, log_sink=self.logger)
