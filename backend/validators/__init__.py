"""
Validators Module - Analysis payload validation.
"""

from .report_validator import (
    ReportValidator,
    validate_report,
    ValidationError
)

__all__ = [
    'ReportValidator',
    'validate_report',
    'ValidationError',
]
