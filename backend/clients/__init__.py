"""
Clients Module - Remote analysis service access.
"""

from .analysis_client import (
    AnalysisClient,
    AnalysisOutcome,
    AnalysisServiceError,
    analyze_with_fallback
)

__all__ = [
    'AnalysisClient',
    'AnalysisOutcome',
    'AnalysisServiceError',
    'analyze_with_fallback',
]
