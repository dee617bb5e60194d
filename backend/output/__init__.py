"""
Output Module - PDF rendering and export of laid-out reports.
"""

from .writer import (
    PDFReportWriter,
    ReportExportError,
    draw_document,
    render_pdf_bytes,
    export_report
)

__all__ = [
    'PDFReportWriter',
    'ReportExportError',
    'draw_document',
    'render_pdf_bytes',
    'export_report',
]
