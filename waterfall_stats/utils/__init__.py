"""
Statistical computation utilities.

Each module is a pure, stateless component:
- summary: count/mean/median/variance/quartiles/percentiles
- outliers: IQR fence classification
- data_quality: completeness/validity/accuracy/consistency scoring
- variance: variance contribution breakdown
- trend: least-squares trend and projections
- search: nearest-value search index
- smoothing: moving average, exponential smoothing, seasonality
"""

from .summary import calculate_summary, sample_variance, interpolated_quantile
from .outliers import detect_outliers, empty_outlier_analysis
from .data_quality import assess_data_quality, classify_item, ClassifiedItem
from .variance import analyze_variance
from .trend import analyze_trend, trend_correlation
from .search import Bisector, SearchIndex, create_bisector, create_search_index
from .smoothing import (
    calculate_moving_average,
    calculate_exponential_smoothing,
    detect_seasonality,
    autocorrelation,
)

__all__ = [
    'calculate_summary',
    'sample_variance',
    'interpolated_quantile',
    'detect_outliers',
    'empty_outlier_analysis',
    'assess_data_quality',
    'classify_item',
    'ClassifiedItem',
    'analyze_variance',
    'analyze_trend',
    'trend_correlation',
    'Bisector',
    'SearchIndex',
    'create_bisector',
    'create_search_index',
    'calculate_moving_average',
    'calculate_exponential_smoothing',
    'detect_seasonality',
    'autocorrelation',
]
