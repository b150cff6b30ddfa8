"""
Waterfall Statistics

In-process statistical analysis engine for waterfall and series chart data:
- Summary statistics (quartiles, percentiles, mode)
- IQR outlier detection
- Data quality assessment with recommendations
- Variance contribution analysis
- Linear trend analysis with projections
- Nearest-value search index
- Moving average, exponential smoothing and seasonality detection

The library never configures logging handlers; pass a logger as ``log_sink``
(or to ``StatisticalAnalysisEngine``) to receive its records.
"""

import logging

from .config import StatisticsConfig
from .exceptions import (
    BaseStatisticsException,
    DataEmptyException,
    InsufficientDataException,
    InvalidWindowException,
    InvalidAlphaException,
    InvalidArgumentException,
)
from .models import (
    StatisticalSummary,
    OutlierAnalysis,
    DataQualityOptions,
    QualityAssessment,
    LabeledValue,
    VarianceAnalysis,
    TrendPoint,
    TrendAnalysis,
    WaterfallStatistics,
)
from .utils import (
    calculate_summary,
    detect_outliers,
    assess_data_quality,
    analyze_variance,
    analyze_trend,
    Bisector,
    SearchIndex,
    create_bisector,
    create_search_index,
    calculate_moving_average,
    calculate_exponential_smoothing,
    detect_seasonality,
)
from .statistical_analysis import StatisticalAnalysisEngine, analyze_waterfall_statistics

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    # Configuration
    'StatisticsConfig',

    # Exceptions
    'BaseStatisticsException',
    'DataEmptyException',
    'InsufficientDataException',
    'InvalidWindowException',
    'InvalidAlphaException',
    'InvalidArgumentException',

    # Models
    'StatisticalSummary',
    'OutlierAnalysis',
    'DataQualityOptions',
    'QualityAssessment',
    'LabeledValue',
    'VarianceAnalysis',
    'TrendPoint',
    'TrendAnalysis',
    'WaterfallStatistics',

    # Operations
    'calculate_summary',
    'detect_outliers',
    'assess_data_quality',
    'analyze_variance',
    'analyze_trend',
    'Bisector',
    'SearchIndex',
    'create_bisector',
    'create_search_index',
    'calculate_moving_average',
    'calculate_exponential_smoothing',
    'detect_seasonality',

    # Engine
    'StatisticalAnalysisEngine',
    'analyze_waterfall_statistics',
]
