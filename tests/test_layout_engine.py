from collections import defaultdict

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm

from layout.engine import (
    AFFIRMATIVE_COLOR,
    BODY_SIZE,
    CHECK_GLYPH,
    CROSS_GLYPH,
    DEFAULT_COLOR,
    NEGATIVE_COLOR,
    REPORT_TITLE,
    ReportLayoutEngine,
    format_score,
    line_height,
    render,
)
from layout.text import text_width
from models.demo import DEMO_REPORT
from models.report import AnalysisReport, QuestionAnswer

from conftest import EXPORT_DATE

LIST_SECTIONS = ("strengths", "weaknesses", "suggested_roles", "skill_gaps")


def entry_text(document, section, entry):
    return " ".join(
        block.text
        for _, block in document.blocks_in(section)
        if block.entry == entry and not block.is_glyph
    )


def entries_in_order(document, section):
    order = []
    for _, block in document.blocks_in(section):
        if block.entry is not None and block.entry not in order:
            order.append(block.entry)
    return order


def normalized(text):
    return " ".join(text.split())


def test_render_is_idempotent(engine, long_report):
    assert engine.render(long_report) == engine.render(long_report)


def test_render_is_idempotent_across_engines(scenario_report):
    first = render(scenario_report, clock=lambda: EXPORT_DATE)
    second = render(scenario_report, clock=lambda: EXPORT_DATE)
    assert first == second


def test_every_list_item_appears_once_in_order(engine, long_report):
    document = engine.render(long_report)

    for section in LIST_SECTIONS:
        items = getattr(long_report, section)
        assert entries_in_order(document, section) == list(range(len(items)))
        for idx, item in enumerate(items):
            assert entry_text(document, section, idx) == normalized(item)


def test_every_question_appears_once_in_order(engine, long_report):
    document = engine.render(long_report)
    entries = long_report.questions_answers

    assert entries_in_order(document, "questions") == list(range(len(entries)))
    assert entries_in_order(document, "answers") == list(range(len(entries)))
    for idx, qa in enumerate(entries):
        assert entry_text(document, "questions", idx) == normalized(f"{idx + 1}. {qa.question}")
        assert entry_text(document, "reasons", idx) == normalized(qa.reason)


def test_footer_reads_page_i_of_n(engine, long_report):
    document = engine.render(long_report)
    total = document.page_count

    assert total > 1
    for page in document.pages:
        footer = page.blocks_in("footer")
        assert [block.text for block in footer] == [
            f"Page {page.number} of {total}",
            EXPORT_DATE.strftime("%Y-%m-%d"),
        ]
        assert footer[0].align == "left"
        assert footer[1].align == "right"
    assert [page.number for page in document.pages] == list(range(1, total + 1))


def test_footer_date_comes_from_clock():
    engine = ReportLayoutEngine(clock=lambda: EXPORT_DATE, date_format="%d/%m/%Y")
    document = engine.render(DEMO_REPORT)
    assert document.pages[0].blocks_in("footer")[1].text == "14/03/2026"


def test_list_entries_never_split_across_pages(engine, long_report):
    document = engine.render(long_report)

    pages_by_entry = defaultdict(set)
    for section in LIST_SECTIONS:
        for page_number, block in document.blocks_in(section):
            if block.entry is not None:
                pages_by_entry[(section, block.entry)].add(page_number)
    for section in ("questions", "answers", "reasons"):
        for page_number, block in document.blocks_in(section):
            if block.entry is not None:
                pages_by_entry[("qa", block.entry)].add(page_number)

    assert pages_by_entry
    for key, pages in pages_by_entry.items():
        assert len(pages) == 1, f"{key} spans pages {sorted(pages)}"


def test_long_list_spans_multiple_pages(engine, long_report):
    # One body line per strength already exceeds the A4 content height
    assert len(long_report.strengths) * line_height(BODY_SIZE) > engine.content_bottom - engine.margin

    document = engine.render(long_report)
    pages = sorted({page_number for page_number, _ in document.blocks_in("strengths")})
    assert len(pages) > 1
    assert pages == list(range(pages[0], pages[-1] + 1))


def test_content_stays_above_footer(engine, long_report):
    document = engine.render(long_report)
    for page in document.pages:
        for block in page.blocks:
            if block.section != "footer":
                assert block.y <= engine.content_bottom


def test_wrapped_lines_fit_usable_width(engine, long_report):
    document = engine.render(long_report)
    right_edge = engine.page_width - engine.margin
    for page in document.pages:
        for block in page.blocks:
            if block.align == "left":
                width = text_width(block.text, block.font_name, block.font_size)
                assert block.x + width <= right_edge + 0.01


def test_status_colour_only_on_glyph_and_label(engine, long_report):
    document = engine.render(long_report)

    for idx, qa in enumerate(long_report.questions_answers):
        expected = AFFIRMATIVE_COLOR if qa.is_affirmative else NEGATIVE_COLOR
        answer_blocks = [b for _, b in document.blocks_in("answers") if b.entry == idx]
        assert [b.color for b in answer_blocks] == [expected, expected]

        reason_blocks = [b for _, b in document.blocks_in("reasons") if b.entry == idx]
        question_blocks = [b for _, b in document.blocks_in("questions") if b.entry == idx]
        assert reason_blocks
        assert all(b.color == DEFAULT_COLOR for b in reason_blocks + question_blocks)


def test_blocks_after_status_line_use_default_colour(engine, scenario_report):
    document = engine.render(scenario_report)
    score_blocks = [b for _, b in document.blocks_in("scores") if b.font_size == BODY_SIZE]
    assert score_blocks
    assert all(b.color == DEFAULT_COLOR for b in score_blocks)


def test_empty_report_is_single_page(engine, empty_report):
    document = engine.render(empty_report)

    assert document.page_count == 1
    page = document.pages[0]
    assert page.blocks_in("title")[0].text == REPORT_TITLE
    status = page.blocks_in("status")
    assert status[0].text == CROSS_GLYPH
    assert status[1].text == "NOT MATCHED"
    assert all(b.color == NEGATIVE_COLOR for b in status)
    assert "Overall Score: 0/100" in page.text
    for section in LIST_SECTIONS + ("summary", "questions"):
        assert page.blocks_in(section) == []
    assert page.blocks_in("footer")[0].text == "Page 1 of 1"


def test_scenario_first_page(engine, scenario_report):
    assert len(scenario_report.summary) == 160
    document = engine.render(scenario_report)
    page = document.pages[0]

    assert page.blocks_in("title")[0].text == REPORT_TITLE

    glyph, label = page.blocks_in("status")
    assert (glyph.text, glyph.color, glyph.is_glyph) == (CHECK_GLYPH, AFFIRMATIVE_COLOR, True)
    assert (label.text, label.color) == ("MATCHED", AFFIRMATIVE_COLOR)

    for line in ("Overall Score: 82/100", "Years of Experience: 6.9",
                 "Impact Score: 80/100", "Skills Score: 85/100"):
        assert line in page.text

    summary_lines = [b for b in page.blocks_in("summary") if b.font_size == BODY_SIZE]
    assert len(summary_lines) > 1
    assert " ".join(b.text for b in summary_lines) == normalized(scenario_report.summary)

    strength_glyphs = [b for b in page.blocks_in("strengths") if b.is_glyph]
    assert len(strength_glyphs) == 3
    assert all(b.text == CHECK_GLYPH and b.color == AFFIRMATIVE_COLOR for b in strength_glyphs)

    answer_glyphs = [b for _, b in document.blocks_in("answers") if b.is_glyph]
    assert len(answer_glyphs) == 2
    assert all(b.text == CHECK_GLYPH and b.color == AFFIRMATIVE_COLOR for b in answer_glyphs)


@pytest.mark.parametrize("answer", ["No", "NO", "no ", "maybe", ""])
def test_non_yes_answers_render_negative(engine, answer):
    report = AnalysisReport(
        matched=True,
        overall_score=50,
        total_experience_years=2,
        impact_score=50,
        skills_score=50,
        questions_answers=(QuestionAnswer("Knows Rust?", answer, "Not mentioned."),),
    )
    glyph, label = [b for _, b in engine.render(report).blocks_in("answers")]
    assert (glyph.text, glyph.color) == (CROSS_GLYPH, NEGATIVE_COLOR)
    assert (label.text, label.color) == ("NO", NEGATIVE_COLOR)


def test_mixed_case_yes_is_affirmative(engine):
    report = AnalysisReport(
        matched=True,
        overall_score=50,
        total_experience_years=2,
        impact_score=50,
        skills_score=50,
        questions_answers=(QuestionAnswer("Knows Python?", "yEs", "Five projects."),),
    )
    glyph, label = [b for _, b in engine.render(report).blocks_in("answers")]
    assert (glyph.text, label.text, label.color) == (CHECK_GLYPH, "YES", AFFIRMATIVE_COLOR)


def test_lines_advance_by_line_height_factor(engine, long_report):
    document = engine.render(long_report)
    summary = [b for b in document.pages[0].blocks_in("summary") if b.font_size == BODY_SIZE]
    assert len(summary) > 2
    for upper, lower in zip(summary, summary[1:]):
        assert lower.y - upper.y == pytest.approx(BODY_SIZE * 0.4 * mm)
    assert line_height(BODY_SIZE) == pytest.approx(BODY_SIZE * 0.4 * mm)


def test_scores_round_to_integers_and_years_stay_raw(engine, long_report):
    text = engine.render(long_report).pages[0].text
    assert "Overall Score: 42/100" in text
    assert "Skills Score: 56/100" in text
    assert "Years of Experience: 3" in text


@pytest.mark.parametrize("value,expected", [(82.5, "83/100"), (0.5, "1/100"), (84.49, "84/100"), (100, "100/100")])
def test_scores_round_half_up(value, expected):
    assert format_score(value) == expected


def test_entry_taller_than_page_continues_without_loss():
    engine = ReportLayoutEngine(page_size=(A4[0], 120 * mm), clock=lambda: EXPORT_DATE)
    huge = " ".join(f"word{i}" for i in range(600))
    report = AnalysisReport(
        matched=True,
        overall_score=70,
        total_experience_years=4,
        impact_score=70,
        skills_score=70,
        strengths=("Short first item", huge, "Short last item"),
    )
    document = engine.render(report)

    assert entry_text(document, "strengths", 1) == huge
    assert entry_text(document, "strengths", 2) == "Short last item"
    pages = {n for n, b in document.blocks_in("strengths") if b.entry == 1}
    assert len(pages) > 1
    for page in document.pages:
        assert [b for b in page.blocks if b.section != "footer"]


def test_small_page_breaks_before_entries(long_report):
    engine = ReportLayoutEngine(page_size=(A4[0], 120 * mm), clock=lambda: EXPORT_DATE)
    document = engine.render(long_report)
    a4_pages = ReportLayoutEngine(clock=lambda: EXPORT_DATE).render(long_report).page_count
    assert document.page_count > a4_pages
    for page in document.pages:
        assert [b for b in page.blocks if b.section != "footer"]


def test_demo_dataset_renders_like_any_report(engine):
    document = engine.render(DEMO_REPORT)
    assert document.page_count >= 1
    assert entries_in_order(document, "strengths") == list(range(len(DEMO_REPORT.strengths)))
    negative = [b for _, b in document.blocks_in("answers") if b.is_glyph and b.text == CROSS_GLYPH]
    assert len(negative) == 1


def test_document_metadata(engine, scenario_report):
    document = engine.render(scenario_report)
    assert document.filename == "resume-analysis.pdf"
    assert (document.page_width, document.page_height) == A4


def test_render_rejects_missing_report(engine):
    with pytest.raises(ValueError):
        engine.render(None)


def test_page_too_small_is_rejected():
    with pytest.raises(ValueError):
        ReportLayoutEngine(page_size=(A4[0], 50 * mm))
