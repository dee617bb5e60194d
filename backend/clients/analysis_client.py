"""
Analysis Service Client
Sends a resume to the remote analysis endpoint and returns a validated AnalysisReport.
Falls back to the fixed demonstration dataset when the service cannot be used.
"""

import base64
import logging
from dataclasses import dataclass
from typing import Optional
import requests
from config import config
from loaders.resume_loader import ResumeFile
from models.demo import DEMO_REPORT
from models.report import AnalysisReport
from validators.report_validator import ValidationError, validate_report

logger = logging.getLogger(__name__)

UPLOAD_MODES = ("base64", "multipart")


class AnalysisServiceError(Exception):
    """Custom exception for analysis service failures."""
    pass


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of an analysis request, including whether the demo data was used."""

    report: AnalysisReport
    error: Optional[str] = None
    used_fallback: bool = False


class AnalysisClient:
    """HTTP client for the resume analysis endpoint."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        upload_mode: Optional[str] = None,
        strict_mode: Optional[bool] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize client.

        Args:
            endpoint: Analysis endpoint URL (default: ANALYSIS_API_URL)
            timeout: Request timeout in seconds (default: ANALYSIS_TIMEOUT)
            upload_mode: "base64" (JSON body) or "multipart" (file upload)
            strict_mode: Reject malformed payloads instead of coercing them
            session: requests.Session to send with (default: a new session)
        """
        self.endpoint = config.ANALYSIS_API_URL if endpoint is None else endpoint
        self.timeout = timeout or config.ANALYSIS_TIMEOUT
        self.upload_mode = (upload_mode or config.ANALYSIS_UPLOAD_MODE).lower()
        self.strict_mode = config.STRICT_MODE if strict_mode is None else strict_mode
        self.session = session or requests.Session()

        if self.upload_mode not in UPLOAD_MODES:
            raise ValueError(f"upload_mode must be one of {UPLOAD_MODES}, got {self.upload_mode!r}")

    def analyze(self, resume: ResumeFile) -> AnalysisReport:
        """
        Send a resume for analysis.

        Args:
            resume: Loaded resume file

        Returns:
            Validated AnalysisReport

        Raises:
            AnalysisServiceError: If the endpoint is not configured, the request
                fails, or the response is not a valid analysis payload
        """
        if not self.endpoint:
            raise AnalysisServiceError("Analysis service URL is not configured")

        logger.info(f"Sending {resume.filename} ({resume.size_bytes} bytes) to {self.endpoint} [{self.upload_mode}]")

        try:
            if self.upload_mode == "base64":
                response = self.session.post(
                    self.endpoint,
                    json={
                        "file": base64.b64encode(resume.content).decode("ascii"),
                        "filename": resume.filename,
                    },
                    timeout=self.timeout,
                )
            else:
                response = self.session.post(
                    self.endpoint,
                    files={"file": (resume.filename, resume.content, resume.content_type)},
                    timeout=self.timeout,
                )
            response.raise_for_status()
            payload = response.json()

        except requests.Timeout as e:
            logger.error(f"Analysis request timed out after {self.timeout}s")
            raise AnalysisServiceError(f"Analysis service timed out after {self.timeout:g}s") from e

        except requests.RequestException as e:
            logger.error(f"Analysis request failed: {e}")
            raise AnalysisServiceError(f"Analysis service request failed: {e}") from e

        except ValueError as e:
            logger.error(f"Analysis service returned invalid JSON: {e}")
            raise AnalysisServiceError("Analysis service returned an invalid response") from e

        try:
            return validate_report(payload, strict_mode=self.strict_mode)
        except ValidationError as e:
            raise AnalysisServiceError(f"Analysis service returned a malformed report: {e}") from e


def analyze_with_fallback(client: AnalysisClient, resume: ResumeFile) -> AnalysisOutcome:
    """
    Analyse a resume, falling back to the demonstration dataset on failure.

    Args:
        client: Analysis client
        resume: Loaded resume file

    Returns:
        AnalysisOutcome; on failure it carries DEMO_REPORT and the error message
    """
    try:
        return AnalysisOutcome(report=client.analyze(resume))
    except AnalysisServiceError as e:
        logger.warning(f"Analysis failed, showing demonstration data: {e}")
        return AnalysisOutcome(report=DEMO_REPORT, error=str(e), used_fallback=True)
