"""
Layout Module - Paginated document layout for analysis reports.
"""

from .document import (
    Block,
    Page,
    Document,
    Cursor
)

from .engine import (
    ReportLayoutEngine,
    render,
    line_height,
    LINE_HEIGHT_FACTOR
)

from .text import (
    text_width,
    wrap_text
)

__all__ = [
    'Block',
    'Page',
    'Document',
    'Cursor',
    'ReportLayoutEngine',
    'render',
    'line_height',
    'LINE_HEIGHT_FACTOR',
    'text_width',
    'wrap_text',
]
