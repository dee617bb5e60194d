"""
Resume Analysis Reporter - Main Pipeline
Orchestrates resume loading, analysis (with demo fallback) and PDF export.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from clients.analysis_client import AnalysisClient, AnalysisOutcome, analyze_with_fallback
from config import config
from layout.engine import ReportLayoutEngine
from loaders.resume_loader import ResumeLoadError, load_resume
from logging_config import setup_logging
from output.writer import ReportExportError, export_report
from validators.report_validator import ValidationError, validate_report

logger = logging.getLogger(__name__)


class ResumeReportPipeline:
    """Main orchestrator for the analyse-then-export pipeline."""

    def __init__(
        self,
        client: Optional[AnalysisClient] = None,
        engine: Optional[ReportLayoutEngine] = None
    ):
        """
        Initialize pipeline.

        Args:
            client: Analysis client (default: configured from environment)
            engine: Layout engine (default: configured footer date format)
        """
        self.client = client or AnalysisClient()
        self.engine = engine or ReportLayoutEngine(
            date_format=config.FOOTER_DATE_FORMAT,
            filename=config.EXPORT_FILENAME,
        )
        self.stats = {
            "used_fallback": False,
            "output_path": None,
        }

    def analyze(self, resume_path: str) -> AnalysisOutcome:
        """
        Load a resume and analyse it.

        Raises:
            ResumeLoadError: If the resume cannot be loaded
        """
        logger.info(f"Step 1: Loading resume - {resume_path}")
        resume = load_resume(resume_path)

        logger.info("Step 2: Requesting analysis")
        outcome = analyze_with_fallback(self.client, resume)
        self.stats["used_fallback"] = outcome.used_fallback
        if outcome.used_fallback:
            logger.warning(f"Using demonstration data: {outcome.error}")
        return outcome

    def process(
        self,
        output_dir: str,
        resume_path: Optional[str] = None,
        report_path: Optional[str] = None
    ) -> Path:
        """
        Produce the PDF report from a resume file or a saved analysis JSON.

        Args:
            output_dir: Directory the PDF is saved into
            resume_path: Resume to analyse
            report_path: Saved analysis JSON to render instead

        Returns:
            Path of the saved PDF

        Raises:
            ValueError: If inputs are invalid
            ResumeLoadError: If the resume cannot be loaded
            ValidationError: If the saved analysis is not an object
            ReportExportError: If the PDF cannot be written
        """
        if bool(resume_path) == bool(report_path):
            raise ValueError("Provide exactly one of resume_path or report_path")

        logger.info("=" * 80)
        logger.info("Starting Resume Report Pipeline")
        logger.info("=" * 80)

        if report_path:
            logger.info(f"Loading saved analysis - {report_path}")
            try:
                payload = json.loads(Path(report_path).read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                raise ValueError(f"Cannot read analysis JSON {report_path}: {e}") from e
            report = validate_report(payload, strict_mode=config.STRICT_MODE)
        else:
            report = self.analyze(resume_path).report

        logger.info(f"Step 3: Exporting PDF report to {output_dir}")
        output_path = export_report(report, output_dir=output_dir, engine=self.engine)
        self.stats["output_path"] = output_path

        logger.info("=" * 80)
        logger.info(f"Pipeline completed: {output_path}")
        logger.info("=" * 80)
        return output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Analyse a resume and export the analysis as a paginated PDF report."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--resume", help="Resume file to analyse (.pdf or .docx)")
    source.add_argument("--report", help="Saved analysis JSON to render")
    parser.add_argument("--output-dir", default=str(config.OUTPUT_DIR), help="Directory for the PDF")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    return parser


def main(argv: Optional[list[str]] = None):
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level, log_file="resume_reporter.log")

    pipeline = ResumeReportPipeline()

    try:
        output_path = pipeline.process(
            output_dir=args.output_dir,
            resume_path=args.resume,
            report_path=args.report,
        )
        if pipeline.stats["used_fallback"]:
            print("\n⚠️ Analysis service unavailable - report built from demonstration data")
        print(f"\n✅ Success! Report generated: {output_path}")

    except (ValueError, ValidationError, ResumeLoadError) as e:
        logger.error(f"Invalid input: {e}")
        print(f"\n❌ Input Error: {e}")
        sys.exit(1)

    except ReportExportError as e:
        logger.error(f"Export failed: {e}")
        print(f"\n❌ Export Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
