"""
Models Module - Analysis report data types and the demo dataset.
"""

from .report import (
    AnalysisReport,
    QuestionAnswer
)

from .demo import DEMO_REPORT

__all__ = [
    'AnalysisReport',
    'QuestionAnswer',
    'DEMO_REPORT',
]
