"""
Analysis Report Model
Typed, immutable view of the JSON record returned by the analysis service.
"""

from dataclasses import dataclass, field
from typing import Optional

AFFIRMATIVE_ANSWER = "yes"


@dataclass(frozen=True)
class QuestionAnswer:
    """One screening question with the service's yes/no verdict and reasoning."""

    question: str
    answer: str
    reason: str = ""

    @property
    def is_affirmative(self) -> bool:
        """Anything other than a case-insensitive "yes" counts as negative."""
        return self.answer.strip().lower() == AFFIRMATIVE_ANSWER

    def to_dict(self) -> dict:
        return {"question": self.question, "answer": self.answer, "reason": self.reason}


@dataclass(frozen=True)
class AnalysisReport:
    """Structured resume analysis as consumed by the report exporter."""

    matched: bool
    overall_score: Optional[float]
    total_experience_years: float
    impact_score: float
    skills_score: float
    summary: str = ""
    strengths: tuple[str, ...] = field(default_factory=tuple)
    weaknesses: tuple[str, ...] = field(default_factory=tuple)
    suggested_roles: tuple[str, ...] = field(default_factory=tuple)
    skill_gaps: tuple[str, ...] = field(default_factory=tuple)
    questions_answers: tuple[QuestionAnswer, ...] = field(default_factory=tuple)

    @property
    def display_overall_score(self) -> float:
        """Overall score with an absent value rendered as 0."""
        return 0 if self.overall_score is None else self.overall_score

    def to_dict(self) -> dict:
        """Convert report to the service's wire shape (camelCase keys)."""
        return {
            "matched": self.matched,
            "overallScore": self.overall_score,
            "totalExperienceYears": self.total_experience_years,
            "impactScore": self.impact_score,
            "skillsScore": self.skills_score,
            "summary": self.summary,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "suggestedRoles": list(self.suggested_roles),
            "skillGaps": list(self.skill_gaps),
            "questionsAnswers": [qa.to_dict() for qa in self.questions_answers],
        }

    def __repr__(self) -> str:
        return (
            f"AnalysisReport(matched={self.matched}, overall={self.overall_score}, "
            f"strengths={len(self.strengths)}, questions={len(self.questions_answers)})"
        )
