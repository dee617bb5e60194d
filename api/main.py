"""
FastAPI Backend for Resume Analysis Reporter
RESTful API endpoints for analysing resumes and exporting PDF reports
"""

from fastapi import FastAPI, File, UploadFile, Body, HTTPException
from fastapi.responses import Response
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
from datetime import datetime
import base64
import binascii
import logging
import sys

# Add backend to path
backend_path = Path(__file__).parent.parent / 'backend'
sys.path.insert(0, str(backend_path))

# Import backend modules
from config import config
from logging_config import setup_logging
from loaders.resume_loader import load_resume_bytes, ResumeLoadError
from clients.analysis_client import AnalysisClient, analyze_with_fallback
from validators.report_validator import validate_report, ValidationError
from layout.engine import ReportLayoutEngine
from output.writer import render_pdf_bytes

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Resume Analysis Reporter API",
    description="Analyse resumes and export the analysis as a paginated PDF report",
    version=config.VERSION
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

analysis_client = AnalysisClient()
layout_engine = ReportLayoutEngine(
    date_format=config.FOOTER_DATE_FORMAT,
    filename=config.EXPORT_FILENAME
)


def _analyze(filename: str, data: bytes) -> dict:
    """Validate the upload, analyse it and shape the JSON response."""
    try:
        resume = load_resume_bytes(filename, data)
    except ResumeLoadError as e:
        raise HTTPException(status_code=400, detail=str(e))

    outcome = analyze_with_fallback(analysis_client, resume)

    return {
        "status": "fallback" if outcome.used_fallback else "success",
        "used_fallback": outcome.used_fallback,
        "error": outcome.error,
        "analysis": outcome.report.to_dict(),
        "resume": {
            "filename": resume.filename,
            "size_bytes": resume.size_bytes,
            "page_count": resume.page_count
        }
    }


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {
        "message": "Resume Analysis Reporter API",
        "version": config.VERSION,
        "endpoints": {
            "POST /analyze": "Analyse an uploaded resume (multipart)",
            "POST /analyze/base64": "Analyse a base64-encoded resume",
            "POST /export": "Export an analysis as a PDF report",
            "GET /health": "Health check"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "analysis_service_configured": bool(analysis_client.endpoint),
        "timestamp": datetime.now().isoformat()
    }


@app.post("/analyze")
def analyze_upload(
    file: UploadFile = File(..., description="Resume file (.pdf or .docx)")
):
    """
    Analyse an uploaded resume.

    If the analysis service fails, the demonstration dataset is returned with
    `used_fallback` set and the failure described in `error`.
    """
    try:
        logger.info(f"Analysing upload {file.filename}")
        content = file.file.read()
        return _analyze(file.filename or "", content)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error analysing resume: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/analyze/base64")
def analyze_base64(
    file: str = Body(..., description="Base64-encoded resume"),
    filename: str = Body(..., description="Original file name")
):
    """
    Analyse a base64-encoded resume.

    - **file**: base64 file contents
    - **filename**: original file name, used to detect the type
    """
    try:
        content = base64.b64decode(file, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="file is not valid base64")

    try:
        logger.info(f"Analysing base64 upload {filename}")
        return _analyze(filename, content)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error analysing resume: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/export")
def export_pdf(analysis: dict = Body(..., description="Analysis report JSON")):
    """
    Lay out an analysis and return it as a PDF attachment.
    """
    try:
        report = validate_report(analysis, strict_mode=config.STRICT_MODE)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid analysis: {e}")

    try:
        document = layout_engine.render(report)
        pdf_bytes = render_pdf_bytes(document)
        logger.info(f"Exported {document.filename} ({document.page_count} pages, {len(pdf_bytes)} bytes)")

    except Exception as e:
        logger.error(f"Error exporting report: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error exporting report: {str(e)}")

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{document.filename}"',
            "X-Page-Count": str(document.page_count)
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
