"""
Result and option models for the statistics engine.
"""

from .statistics import (
    OutlierSeverityEnum,
    OutlierDirectionEnum,
    ImpactLevelEnum,
    VarianceSignificanceEnum,
    TrendDirectionEnum,
    TrendStrengthEnum,
    ItemKindEnum,
    Quartiles,
    Percentiles,
    StatisticalSummary,
    CleanRecord,
    OutlierRecord,
    OutlierThresholds,
    OutlierStatistics,
    OutlierSummary,
    OutlierAnalysis,
    DataQualityOptions,
    QualityAssessment,
    LabeledValue,
    VarianceContribution,
    SignificantFactor,
    VarianceAnalysis,
    TrendPoint,
    ConfidenceInterval,
    TrendProjection,
    TrendAnalysis,
    WaterfallStatistics,
)

__all__ = [
    'OutlierSeverityEnum',
    'OutlierDirectionEnum',
    'ImpactLevelEnum',
    'VarianceSignificanceEnum',
    'TrendDirectionEnum',
    'TrendStrengthEnum',
    'ItemKindEnum',
    'Quartiles',
    'Percentiles',
    'StatisticalSummary',
    'CleanRecord',
    'OutlierRecord',
    'OutlierThresholds',
    'OutlierStatistics',
    'OutlierSummary',
    'OutlierAnalysis',
    'DataQualityOptions',
    'QualityAssessment',
    'LabeledValue',
    'VarianceContribution',
    'SignificantFactor',
    'VarianceAnalysis',
    'TrendPoint',
    'ConfidenceInterval',
    'TrendProjection',
    'TrendAnalysis',
    'WaterfallStatistics',
]
