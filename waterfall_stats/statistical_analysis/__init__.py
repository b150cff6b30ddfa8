"""
Statistical Analysis Module

This module contains the statistical analysis engine and the waterfall insights.
"""

from .engine import StatisticalAnalysisEngine
from .waterfall import analyze_waterfall_statistics

__all__ = ['StatisticalAnalysisEngine', 'analyze_waterfall_statistics']
