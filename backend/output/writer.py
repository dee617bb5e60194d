"""
PDF Report Writer Module
Draws a laid-out analysis Document onto PDF pages and saves it.
"""

import logging
import os
import tempfile
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional
from reportlab.lib import colors
from reportlab.pdfgen import canvas
from config import config
from layout.document import Document
from layout.engine import ReportLayoutEngine
from models.report import AnalysisReport

logger = logging.getLogger(__name__)


class ReportExportError(Exception):
    """Custom exception for report export errors."""
    pass


def draw_document(document: Document, stream: BinaryIO):
    """
    Draw every page of a Document onto a PDF canvas backed by stream.

    Args:
        document: Finished Document from the layout engine
        stream: Binary file-like object receiving the PDF bytes
    """
    pdf = canvas.Canvas(stream, pagesize=(document.page_width, document.page_height))
    pdf.setTitle(document.title)
    pdf.setCreator("Resume Analysis Reporter")

    for page in document.pages:
        for block in page.blocks:
            pdf.setFont(block.font_name, block.font_size)
            pdf.setFillColor(colors.HexColor(block.color))
            y = document.page_height - block.y
            if block.align == "right":
                pdf.drawRightString(block.x, y, block.text)
            else:
                pdf.drawString(block.x, y, block.text)
        pdf.showPage()
        logger.debug(f"Drew page {page.number} ({len(page.blocks)} blocks)")

    pdf.save()


class PDFReportWriter:
    """Saves laid-out report documents as PDF files."""

    def __init__(self, output_path: str):
        """
        Initialize PDF writer.

        Args:
            output_path: Path where PDF will be saved
        """
        self.output_path = output_path

    def write(self, document: Document) -> Path:
        """
        Save a Document as a PDF.

        The PDF is written to a temporary file next to the target and moved
        into place only once the save has completed, so a failed export never
        leaves a partial file behind.

        Args:
            document: Finished Document from the layout engine

        Returns:
            Path of the saved PDF

        Raises:
            ValueError: If document is None or has no pages
            ReportExportError: If the file cannot be written
        """
        if document is None:
            logger.error("document cannot be None")
            raise ValueError("document cannot be None")

        if not document.pages:
            logger.error("document has no pages")
            raise ValueError("document has no pages")

        output_path = Path(self.output_path)
        logger.info(f"Writing PDF report: {output_path} ({document.page_count} pages)")

        tmp_path = None
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_name = tempfile.mkstemp(suffix=".pdf.part", dir=output_path.parent)
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "wb") as stream:
                draw_document(document, stream)

            os.replace(tmp_path, output_path)
            tmp_path = None
            logger.info(f"PDF report generated successfully: {output_path}")
            return output_path

        except PermissionError as e:
            logger.error(f"Permission denied writing to {output_path}: {e}")
            raise ReportExportError(
                f"Cannot write to {output_path}. File may be open or directory is read-only."
            ) from e

        except OSError as e:
            logger.error(f"OS error writing PDF: {e}", exc_info=True)
            raise ReportExportError(f"Failed to write PDF file: {e}") from e

        finally:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
                logger.debug(f"Removed incomplete export: {tmp_path}")


def render_pdf_bytes(document: Document) -> bytes:
    """
    Draw a Document into memory.

    Args:
        document: Finished Document from the layout engine

    Returns:
        PDF file contents
    """
    buffer = BytesIO()
    try:
        draw_document(document, buffer)
        return buffer.getvalue()
    finally:
        buffer.close()


def export_report(
    report: Optional[AnalysisReport],
    output_dir: Optional[str] = None,
    engine: Optional[ReportLayoutEngine] = None
) -> Optional[Path]:
    """
    Lay out a report and save it under the document's fixed file name.

    Args:
        report: Analysis to export; None means nothing has been analysed yet
        output_dir: Directory to save into (default: OUTPUT_DIR)
        engine: Layout engine to use (default: a fresh ReportLayoutEngine)

    Returns:
        Path of the saved PDF, or None when there was no report to export
    """
    if report is None:
        logger.info("No analysis available - export skipped")
        return None

    engine = engine or ReportLayoutEngine()
    document = engine.render(report)

    if output_dir:
        output_path = Path(output_dir) / document.filename
    else:
        output_path = config.get_output_path(document.filename)
    return PDFReportWriter(str(output_path)).write(document)
