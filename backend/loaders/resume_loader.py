"""
Resume Loader Module
Reads an uploaded resume (PDF or DOCX) and checks it before it is sent for analysis.
PDFs are opened with PyMuPDF (fitz) to reject corrupt or empty documents.
"""

import fitz  # PyMuPDF
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from config import config

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class ResumeLoadError(Exception):
    """Custom exception for resume loading errors."""
    pass


@dataclass(frozen=True)
class ResumeFile:
    """Raw resume upload, ready to be sent to the analysis service."""

    filename: str
    content: bytes
    content_type: str
    page_count: Optional[int] = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)


def _count_pdf_pages(filename: str, data: bytes) -> int:
    """
    Open PDF bytes and return the page count.

    Raises:
        ResumeLoadError: If the PDF is corrupt or has no pages
    """
    doc = None
    try:
        doc = fitz.open(stream=data, filetype="pdf")

        if doc.page_count == 0:
            logger.error(f"PDF has no pages: {filename}")
            raise ResumeLoadError(f"PDF has no pages: {filename}")

        logger.debug(f"{filename}: {doc.page_count} page(s)")
        return doc.page_count

    except fitz.FileDataError as e:
        logger.error(f"Invalid or corrupted PDF file: {filename}", exc_info=True)
        raise ResumeLoadError(f"Invalid or corrupted PDF file: {filename}") from e

    except ResumeLoadError:
        raise

    except Exception as e:
        logger.error(f"Unexpected error opening PDF {filename}: {e}", exc_info=True)
        raise ResumeLoadError(f"Failed to open PDF {filename}: {str(e)}") from e

    finally:
        # Ensure PDF is always closed
        if doc is not None:
            doc.close()


def load_resume_bytes(filename: str, data: bytes) -> ResumeFile:
    """
    Validate an uploaded resume held in memory.

    Args:
        filename: Original file name (its extension selects the type)
        data: File contents

    Returns:
        ResumeFile instance

    Raises:
        ResumeLoadError: If the file type, size or contents are invalid
    """
    if not filename:
        raise ResumeLoadError("Resume file name is required")

    is_valid, error = config.validate_file(filename, len(data or b""))
    if not is_valid:
        logger.error(f"Rejected resume {filename}: {error}")
        raise ResumeLoadError(error)

    suffix = Path(filename).suffix.lower()
    page_count = _count_pdf_pages(filename, data) if suffix == ".pdf" else None

    logger.info(f"Loaded resume {filename} ({len(data)} bytes)")
    return ResumeFile(
        filename=Path(filename).name,
        content=data,
        content_type=CONTENT_TYPES[suffix],
        page_count=page_count,
    )


def load_resume(file_path: str) -> ResumeFile:
    """
    Read and validate a resume file from disk.

    Args:
        file_path: Path to a .pdf or .docx file

    Returns:
        ResumeFile instance

    Raises:
        ResumeLoadError: If the file is missing or invalid
    """
    resume_path = Path(file_path)
    if not resume_path.exists():
        logger.error(f"Resume file not found: {file_path}")
        raise ResumeLoadError(f"Resume file not found: {file_path}")

    try:
        data = resume_path.read_bytes()
    except OSError as e:
        logger.error(f"Cannot read resume {file_path}: {e}")
        raise ResumeLoadError(f"Cannot read resume {file_path}: {e}") from e

    return load_resume_bytes(resume_path.name, data)
