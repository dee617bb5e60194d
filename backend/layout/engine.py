"""
Report Layout Engine
Lays an AnalysisReport out into fixed-size pages of positioned blocks.

The engine does its own pagination: every line is measured with the real
font metrics, the cursor is advanced by hand and page breaks are decided
before each section and each list entry. Footers ("Page i of N" and the
export date) are stamped in a second pass once the page count is known.
"""

import logging
import math
from datetime import date
from typing import Callable, Optional
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from models.report import AnalysisReport, QuestionAnswer
from .document import Block, Cursor, Document, Page, GLYPH, TEXT
from .text import text_width, wrap_text

logger = logging.getLogger(__name__)

# Line advance is font_size * LINE_HEIGHT_FACTOR millimetres (dense on purpose)
LINE_HEIGHT_FACTOR = 0.4

MARGIN = 20 * mm
FOOTER_OFFSET = 10 * mm
SECTION_GAP = 4 * mm
ITEM_GAP = 1.5 * mm
LIST_INDENT = 6 * mm
GLYPH_GAP = 3

# Per-section page-break estimates
LIST_ITEM_ESTIMATE = 8 * mm
LIST_ESTIMATE_ITEMS = 3
SCORE_LINES = 4
SUMMARY_MIN_LINES = 2

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
GLYPH_FONT = "ZapfDingbats"

TITLE_SIZE = 20
HEADER_SIZE = 14
STATUS_SIZE = 12
BODY_SIZE = 11
REASON_SIZE = 10
FOOTER_SIZE = 9

DEFAULT_COLOR = "#1a1a1a"
HEADER_COLOR = "#2c5aa0"
MUTED_COLOR = "#808183"
AFFIRMATIVE_COLOR = "#16a34a"
NEGATIVE_COLOR = "#dc2626"

# ZapfDingbats code points
CHECK_GLYPH = "4"
CROSS_GLYPH = "8"
BULLET_GLYPH = "l"

REPORT_TITLE = "Resume Analysis Report"
EXPORT_FILENAME = "resume-analysis.pdf"
FOOTER_DATE_FORMAT = "%Y-%m-%d"


def line_height(font_size: float) -> float:
    """Vertical advance for one line of text at font_size."""
    return font_size * LINE_HEIGHT_FACTOR * mm


def format_score(value: float) -> str:
    """Render a 0-100 score as a rounded integer out of 100."""
    return f"{int(math.floor(value + 0.5))}/100"


def format_years(value: float) -> str:
    """Years of experience as given (6.9 stays 6.9, 7.0 prints as 7)."""
    return f"{value:g}"


class ReportLayoutEngine:
    """
    Turns an AnalysisReport into a paginated Document.

    The engine only holds configuration; every render call builds its own
    cursor and page buffers, so one instance can be reused freely.
    """

    def __init__(
        self,
        page_size: tuple[float, float] = A4,
        margin: float = MARGIN,
        clock: Optional[Callable[[], date]] = None,
        date_format: str = FOOTER_DATE_FORMAT,
        title: str = REPORT_TITLE,
        filename: str = EXPORT_FILENAME
    ):
        """
        Initialize layout engine.

        Args:
            page_size: (width, height) in points (default: A4)
            margin: Left/right/top/bottom margin in points
            clock: Callable returning the export date (default: date.today)
            date_format: strftime format of the footer date
            title: Report title printed on page 1
            filename: File name the finished document is saved under
        """
        self.page_width, self.page_height = page_size
        self.margin = margin
        self.clock = clock or date.today
        self.date_format = date_format
        self.title = title
        self.filename = filename

        if self.content_bottom - self.margin < line_height(TITLE_SIZE) * 2:
            raise ValueError(f"Page size {page_size} leaves no room for content")

    @property
    def usable_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def content_bottom(self) -> float:
        """Lowest baseline allowed for content; the footer lives below it."""
        return self.page_height - self.margin

    def render(self, report: AnalysisReport) -> Document:
        """
        Lay out a report.

        Args:
            report: Analysis record to export

        Returns:
            Finished Document with footers on every page
        """
        if report is None:
            raise ValueError("report cannot be None")

        logger.info(f"Laying out report: {report!r}")
        pages = _ContentPass(self, report).run()
        document = Document(
            pages=self._stamp_footers(pages),
            page_width=self.page_width,
            page_height=self.page_height,
            title=self.title,
            filename=self.filename,
        )
        logger.info(f"Layout complete: {document.page_count} page(s)")
        return document

    def _stamp_footers(self, pages: list[list[Block]]) -> tuple[Page, ...]:
        """Second pass: add "Page i of N" and the export date to every page."""
        total = len(pages)
        export_date = self.clock().strftime(self.date_format)
        y = self.page_height - FOOTER_OFFSET

        stamped = []
        for number, blocks in enumerate(pages, 1):
            footer = (
                Block(TEXT, f"Page {number} of {total}", self.margin, y,
                      FONT, FOOTER_SIZE, MUTED_COLOR, section="footer"),
                Block(TEXT, export_date, self.page_width - self.margin, y,
                      FONT, FOOTER_SIZE, MUTED_COLOR, align="right", section="footer"),
            )
            stamped.append(Page(number=number, blocks=tuple(blocks) + footer))
        return tuple(stamped)


class _ContentPass:
    """Content layout for a single render call (owns the cursor)."""

    def __init__(self, engine: ReportLayoutEngine, report: AnalysisReport):
        self.engine = engine
        self.report = report
        self.cursor = Cursor(top=engine.margin, bottom=engine.content_bottom)
        self.pages: list[list[Block]] = [[]]

    def run(self) -> list[list[Block]]:
        report = self.report

        self._title()
        self._match_status()
        self._scores()
        self._summary()
        self._bullet_list("strengths", "Strengths", report.strengths, CHECK_GLYPH, AFFIRMATIVE_COLOR)
        self._bullet_list("weaknesses", "Weaknesses", report.weaknesses, CROSS_GLYPH, NEGATIVE_COLOR)
        self._bullet_list("suggested_roles", "Suggested Roles", report.suggested_roles, BULLET_GLYPH, HEADER_COLOR)
        self._bullet_list("skill_gaps", "Skill Gaps", report.skill_gaps, BULLET_GLYPH, HEADER_COLOR)
        self._questions(report.questions_answers)

        return self.pages

    # Cursor and emission helpers

    def _ensure_space(self, needed: float):
        """Start a new page if needed doesn't fit; never leaves a page empty."""
        if needed <= self.cursor.remaining or self.cursor.at_page_top:
            return
        self.pages.append([])
        self.cursor.next_page()
        logger.debug(f"Page break before block needing {needed:.1f}pt -> {self.cursor!r}")

    def _emit(
        self,
        text: str,
        x: float,
        font_name: str,
        font_size: float,
        color: str = DEFAULT_COLOR,
        section: str = "",
        entry: Optional[int] = None,
        kind: str = TEXT
    ) -> Block:
        block = Block(kind, text, x, self.cursor.y, font_name, font_size, color,
                      section=section, entry=entry)
        self.pages[self.cursor.page_index].append(block)
        return block

    def _emit_lines(
        self,
        lines: list[str],
        x: float,
        font_name: str,
        font_size: float,
        section: str,
        entry: Optional[int] = None
    ):
        """Emit wrapped lines in the default colour, one line advance each."""
        advance = line_height(font_size)
        for line in lines:
            # Only trips for text taller than a whole page body
            self._ensure_space(advance)
            self._emit(line, x, font_name, font_size, DEFAULT_COLOR, section, entry)
            self.cursor.advance(advance)

    def _reserve_entry(self, height: float):
        """Keep an entry on one page; if it can't fit any page, start it on a fresh one."""
        body_height = self.engine.content_bottom - self.engine.margin
        if height <= body_height:
            self._ensure_space(height)
        elif not self.cursor.at_page_top:
            logger.warning(f"Entry of {height:.1f}pt exceeds a full page and will continue across pages")
            self._ensure_space(math.inf)

    def _section_header(self, section: str, title: str, body_estimate: float):
        advance = line_height(HEADER_SIZE) + ITEM_GAP
        self._ensure_space(advance + body_estimate)
        self._emit(title, self.engine.margin, FONT_BOLD, HEADER_SIZE, HEADER_COLOR, section)
        self.cursor.advance(advance)

    def _status_line(
        self,
        affirmative: bool,
        label: str,
        x: float,
        font_size: float,
        section: str,
        entry: Optional[int] = None
    ):
        """
        Emit glyph + label in the affirmative/negative colour.

        Colour is carried on these two blocks only; everything emitted after
        them goes back to DEFAULT_COLOR.
        """
        glyph = CHECK_GLYPH if affirmative else CROSS_GLYPH
        color = AFFIRMATIVE_COLOR if affirmative else NEGATIVE_COLOR

        self._emit(glyph, x, GLYPH_FONT, font_size, color, section, entry, kind=GLYPH)
        label_x = x + text_width(glyph, GLYPH_FONT, font_size) + GLYPH_GAP
        self._emit(label, label_x, FONT_BOLD, font_size, color, section, entry)
        self.cursor.advance(line_height(font_size))

    # Sections

    def _title(self):
        self._emit(self.engine.title, self.engine.margin, FONT_BOLD, TITLE_SIZE,
                   DEFAULT_COLOR, "title")
        self.cursor.advance(line_height(TITLE_SIZE) + SECTION_GAP)

    def _match_status(self):
        self._ensure_space(line_height(STATUS_SIZE))
        label = "MATCHED" if self.report.matched else "NOT MATCHED"
        self._status_line(self.report.matched, label, self.engine.margin, STATUS_SIZE, "status")
        self.cursor.advance(SECTION_GAP)

    def _scores(self):
        report = self.report
        lines = [
            f"Overall Score: {format_score(report.display_overall_score)}",
            f"Years of Experience: {format_years(report.total_experience_years)}",
            f"Impact Score: {format_score(report.impact_score)}",
            f"Skills Score: {format_score(report.skills_score)}",
        ]
        self._section_header("scores", "Score Breakdown", SCORE_LINES * line_height(BODY_SIZE))
        self._emit_lines(lines, self.engine.margin, FONT, BODY_SIZE, "scores")
        self.cursor.advance(SECTION_GAP)

    def _summary(self):
        lines = wrap_text(self.report.summary, FONT, BODY_SIZE, self.engine.usable_width)
        if not lines:
            return

        estimate = min(len(lines), SUMMARY_MIN_LINES) * line_height(BODY_SIZE)
        self._section_header("summary", "Summary", estimate)
        self._emit_lines(lines, self.engine.margin, FONT, BODY_SIZE, "summary")
        self.cursor.advance(SECTION_GAP)

    def _bullet_list(
        self,
        section: str,
        title: str,
        items: tuple[str, ...],
        glyph: str,
        glyph_color: str
    ):
        """One glyph-marked, wrapped entry per item; each entry is break-checked."""
        if not items:
            return

        margin = self.engine.margin
        text_x = margin + LIST_INDENT
        width = self.engine.usable_width - LIST_INDENT
        advance = line_height(BODY_SIZE)

        estimate = min(len(items), LIST_ESTIMATE_ITEMS) * LIST_ITEM_ESTIMATE
        self._section_header(section, title, estimate)

        for idx, item in enumerate(items):
            lines = wrap_text(item, FONT, BODY_SIZE, width)
            self._reserve_entry(len(lines) * advance + ITEM_GAP)
            self._emit(glyph, margin, GLYPH_FONT, BODY_SIZE - 2, glyph_color, section, idx, kind=GLYPH)
            self._emit_lines(lines, text_x, FONT, BODY_SIZE, section, idx)
            self.cursor.advance(ITEM_GAP)
            logger.debug(f"{section}[{idx}]: {len(lines)} line(s) on page {self.cursor.page_index + 1}")

        self.cursor.advance(SECTION_GAP)

    def _questions(self, entries: tuple[QuestionAnswer, ...]):
        if not entries:
            return

        margin = self.engine.margin
        indent_x = margin + LIST_INDENT
        indent_width = self.engine.usable_width - LIST_INDENT

        self._section_header("questions", "Detailed Analysis", LIST_ITEM_ESTIMATE * 2)

        for idx, qa in enumerate(entries):
            question_lines = wrap_text(f"{idx + 1}. {qa.question}", FONT_BOLD, BODY_SIZE,
                                       self.engine.usable_width)
            reason_lines = wrap_text(qa.reason, FONT, REASON_SIZE, indent_width)
            height = (
                len(question_lines) * line_height(BODY_SIZE)
                + line_height(BODY_SIZE)
                + len(reason_lines) * line_height(REASON_SIZE)
                + 2 * ITEM_GAP
            )
            self._reserve_entry(height)

            self._emit_lines(question_lines, margin, FONT_BOLD, BODY_SIZE, "questions", idx)
            self._ensure_space(line_height(BODY_SIZE))
            self._status_line(qa.is_affirmative, "YES" if qa.is_affirmative else "NO",
                              indent_x, BODY_SIZE, "answers", idx)
            self._emit_lines(reason_lines, indent_x, FONT, REASON_SIZE, "reasons", idx)
            self.cursor.advance(2 * ITEM_GAP)


def render(report: AnalysisReport, **options) -> Document:
    """
    Convenience function to lay out a report with a one-off engine.

    Args:
        report: Analysis record to export
        **options: ReportLayoutEngine keyword arguments

    Returns:
        Finished Document
    """
    return ReportLayoutEngine(**options).render(report)
