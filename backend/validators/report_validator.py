"""
Report Validator Module
Validates the analysis service payload and converts it into an AnalysisReport.
"""

import logging
import math
from typing import Any, Optional
from models.report import AnalysisReport, QuestionAnswer

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


# Field name on the wire (camelCase) and the snake_case alias we also accept
FIELD_KEYS = {
    "matched": ("matched", "matched"),
    "overall_score": ("overallScore", "overall_score"),
    "total_experience_years": ("totalExperienceYears", "total_experience_years"),
    "impact_score": ("impactScore", "impact_score"),
    "skills_score": ("skillsScore", "skills_score"),
    "summary": ("summary", "summary"),
    "strengths": ("strengths", "strengths"),
    "weaknesses": ("weaknesses", "weaknesses"),
    "suggested_roles": ("suggestedRoles", "suggested_roles"),
    "skill_gaps": ("skillGaps", "skill_gaps"),
    "questions_answers": ("questionsAnswers", "questions_answers"),
}

LIST_FIELDS = ("strengths", "weaknesses", "suggested_roles", "skill_gaps")
PERCENT_FIELDS = ("impact_score", "skills_score")


class ReportValidator:
    """Validates analysis payloads."""

    def __init__(self, strict_mode: bool = False):
        """
        Initialize validator.

        Args:
            strict_mode: If True, raise ValidationError on malformed fields.
                        If False, log warnings and coerce to safe defaults.
        """
        self.strict_mode = strict_mode
        self.validation_stats = {
            "total_validated": 0,
            "coerced_fields": 0,
            "dropped_items": 0,
        }

    def validate_report(self, payload: Any) -> AnalysisReport:
        """
        Validate a decoded JSON payload and build an AnalysisReport.

        Args:
            payload: Decoded JSON object, optionally wrapped as {"analysis": {...}}

        Returns:
            AnalysisReport instance

        Raises:
            ValidationError: If the payload is not an object, or strict_mode
                is on and any field is malformed
        """
        if not isinstance(payload, dict):
            logger.error(f"Analysis payload must be an object, got {type(payload).__name__}")
            raise ValidationError("Analysis payload must be a JSON object")

        if isinstance(payload.get("analysis"), dict):
            payload = payload["analysis"]

        self.validation_stats["total_validated"] += 1

        report = AnalysisReport(
            matched=self._validate_matched(self._get(payload, "matched")),
            overall_score=self._validate_overall_score(self._get(payload, "overall_score")),
            total_experience_years=self._validate_number(
                "total_experience_years", self._get(payload, "total_experience_years")
            ),
            impact_score=self._validate_percent("impact_score", self._get(payload, "impact_score")),
            skills_score=self._validate_percent("skills_score", self._get(payload, "skills_score")),
            summary=self._validate_text("summary", self._get(payload, "summary")),
            strengths=self._validate_list("strengths", self._get(payload, "strengths")),
            weaknesses=self._validate_list("weaknesses", self._get(payload, "weaknesses")),
            suggested_roles=self._validate_list("suggested_roles", self._get(payload, "suggested_roles")),
            skill_gaps=self._validate_list("skill_gaps", self._get(payload, "skill_gaps")),
            questions_answers=self._validate_questions(self._get(payload, "questions_answers")),
        )

        logger.info(f"Validated analysis payload: {report!r}")
        return report

    @staticmethod
    def _get(payload: dict, field_name: str) -> Any:
        camel, snake = FIELD_KEYS[field_name]
        if camel in payload:
            return payload[camel]
        return payload.get(snake)

    def _invalid(self, msg: str):
        """Raise in strict mode, otherwise record the coercion."""
        if self.strict_mode:
            raise ValidationError(msg)
        self.validation_stats["coerced_fields"] += 1
        logger.warning(f"{msg} - using default")

    def _validate_matched(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        self._invalid(f"Invalid matched flag: {value!r}")
        return False

    def _validate_overall_score(self, value: Any) -> Optional[float]:
        # Absent is a legitimate value; it renders as 0 downstream
        if value is None:
            return None
        number = self._to_number(value)
        if number is None:
            self._invalid(f"Invalid overall score: {value!r}")
            return None
        return self._clamp_percent("overall_score", number)

    def _validate_number(self, field_name: str, value: Any) -> float:
        number = self._to_number(value)
        if number is None:
            self._invalid(f"Invalid {field_name}: {value!r}")
            return 0
        if number < 0:
            self._invalid(f"Negative {field_name}: {value!r}")
            return 0
        return number

    def _validate_percent(self, field_name: str, value: Any) -> float:
        number = self._to_number(value)
        if number is None:
            self._invalid(f"Invalid {field_name}: {value!r}")
            return 0
        return self._clamp_percent(field_name, number)

    def _clamp_percent(self, field_name: str, number: float) -> float:
        if 0 <= number <= 100:
            return number
        self._invalid(f"{field_name} out of range 0-100: {number}")
        return min(max(number, 0), 100)

    @staticmethod
    def _to_number(value: Any) -> Optional[float]:
        """Return value as a finite int/float, accepting numeric strings; None otherwise."""
        if isinstance(value, bool):
            return None
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                return None
        if not isinstance(value, (int, float)):
            return None
        # NaN and infinities cannot be rendered as scores
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value

    def _validate_text(self, field_name: str, value: Any) -> str:
        if value is None:
            return ""
        if not isinstance(value, str):
            self._invalid(f"{field_name} must be text, got {type(value).__name__}")
            return str(value)
        return value.strip()

    def _validate_list(self, field_name: str, value: Any) -> tuple[str, ...]:
        """
        Validate a list of text entries.

        Blank entries are dropped; the order of the remaining entries is kept.
        """
        if value is None:
            return ()
        if not isinstance(value, list):
            self._invalid(f"{field_name} must be a list, got {type(value).__name__}")
            return ()

        items = []
        for idx, item in enumerate(value):
            if not isinstance(item, str):
                self._invalid(f"{field_name}[{idx}] must be text, got {type(item).__name__}")
                item = str(item)
            item = item.strip()
            if not item:
                self.validation_stats["dropped_items"] += 1
                logger.debug(f"Dropping blank entry {field_name}[{idx}]")
                continue
            items.append(item)
        return tuple(items)

    def _validate_questions(self, value: Any) -> tuple[QuestionAnswer, ...]:
        if value is None:
            return ()
        if not isinstance(value, list):
            self._invalid(f"questions_answers must be a list, got {type(value).__name__}")
            return ()

        entries = []
        for idx, item in enumerate(value):
            if not isinstance(item, dict):
                self._invalid(f"questions_answers[{idx}] must be an object")
                self.validation_stats["dropped_items"] += 1
                continue

            question = self._validate_text(f"questions_answers[{idx}].question", item.get("question"))
            if not question:
                self._invalid(f"questions_answers[{idx}] has no question")
                self.validation_stats["dropped_items"] += 1
                continue

            # Any answer other than "yes" is rendered as negative, so no check here
            answer = item.get("answer")
            entries.append(QuestionAnswer(
                question=question,
                answer="" if answer is None else str(answer).strip(),
                reason=self._validate_text(f"questions_answers[{idx}].reason", item.get("reason")),
            ))
        return tuple(entries)

    def get_stats(self) -> dict:
        """Get validation statistics."""
        return self.validation_stats.copy()


def validate_report(payload: Any, strict_mode: bool = False) -> AnalysisReport:
    """
    Convenience function to validate an analysis payload.

    Args:
        payload: Decoded JSON object from the analysis service
        strict_mode: If True, raise exceptions on malformed fields

    Returns:
        AnalysisReport instance
    """
    validator = ReportValidator(strict_mode=strict_mode)
    return validator.validate_report(payload)
