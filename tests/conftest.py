import sys
from datetime import date
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
BACKEND_ROOT = PROJECT_ROOT / "backend"
for path in (str(PROJECT_ROOT), str(BACKEND_ROOT)):
    if path not in sys.path:
        sys.path.insert(0, path)

from layout.engine import ReportLayoutEngine  # noqa: E402
from models.report import AnalysisReport, QuestionAnswer  # noqa: E402

EXPORT_DATE = date(2026, 3, 14)


@pytest.fixture
def engine():
    return ReportLayoutEngine(clock=lambda: EXPORT_DATE)


@pytest.fixture
def scenario_report():
    summary = (
        "Backend engineer with close to seven years building payment APIs in Python and Go, "
        "who led a platform migration, mentors junior developers and owns services end to end."
    )[:160]
    return AnalysisReport(
        matched=True,
        overall_score=82,
        total_experience_years=6.9,
        impact_score=80,
        skills_score=85,
        summary=summary,
        strengths=(
            "Strong Python and Go fundamentals",
            "Owned payment reconciliation service",
            "Mentors junior engineers",
        ),
        questions_answers=(
            QuestionAnswer("Has five or more years of experience?", "yes", "Career history spans 6.9 years."),
            QuestionAnswer("Has worked on payment systems?", "YES", "Built and ran a payments API for three years."),
        ),
    )


@pytest.fixture
def empty_report():
    return AnalysisReport(
        matched=False,
        overall_score=None,
        total_experience_years=0,
        impact_score=0,
        skills_score=0,
    )


@pytest.fixture
def long_report():
    """Enough entries to spill over several A4 pages."""
    item = "Delivered measurable improvements to service reliability and on-call load across {} teams"
    return AnalysisReport(
        matched=False,
        overall_score=41.6,
        total_experience_years=3,
        impact_score=38,
        skills_score=55.5,
        summary=" ".join(["Generalist engineer with broad but shallow exposure."] * 12),
        strengths=tuple(item.format(i) for i in range(60)),
        weaknesses=tuple(f"Weakness number {i} " + "with a fairly long explanation " * 4 for i in range(20)),
        suggested_roles=tuple(f"Role {i}" for i in range(15)),
        skill_gaps=tuple(f"Gap {i}: " + "missing tooling knowledge " * 3 for i in range(15)),
        questions_answers=tuple(
            QuestionAnswer(
                f"Question {i}: does the candidate meet requirement {i}?",
                "Yes" if i % 2 else "No",
                "Reasoning " + "based on listed projects and stated responsibilities " * 3,
            )
            for i in range(18)
        ),
    )
