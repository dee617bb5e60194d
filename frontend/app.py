"""
Resume Analysis Reporter - Streamlit Frontend
Resume upload, analysis display and PDF report download
"""

import streamlit as st
import sys
from pathlib import Path

# Add backend to path
backend_path = Path(__file__).parent.parent / 'backend'
sys.path.insert(0, str(backend_path))

# Import backend modules
from config import config
from logging_config import setup_logging, get_logger
from loaders.resume_loader import load_resume_bytes, ResumeLoadError
from clients.analysis_client import AnalysisClient, analyze_with_fallback
from layout.engine import ReportLayoutEngine, format_score, format_years
from output.writer import render_pdf_bytes

setup_logging(log_file="resume_reporter.log")
logger = get_logger(__name__)

# Page configuration
st.set_page_config(
    page_title="Resume Analyzer",
    page_icon="🧠",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #4f46e5;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        font-size: 1.2rem;
        color: #64748b;
        margin-bottom: 2rem;
    }
    .matched-box {
        background-color: #f0fdf4;
        border: 1px solid #16a34a;
        color: #16a34a;
        padding: 1rem;
        border-radius: 0.5rem;
        margin: 1rem 0;
        font-weight: bold;
    }
    .not-matched-box {
        background-color: #fef2f2;
        border: 1px solid #dc2626;
        color: #dc2626;
        padding: 1rem;
        border-radius: 0.5rem;
        margin: 1rem 0;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)

# Initialize session state
if 'report' not in st.session_state:
    st.session_state.report = None
if 'analysis_error' not in st.session_state:
    st.session_state.analysis_error = None


def format_file_size(size_bytes: int) -> str:
    """Human readable file size."""
    if size_bytes == 0:
        return "0 Bytes"
    size = float(size_bytes)
    for unit in ["Bytes", "KB", "MB", "GB"]:
        if size < 1024 or unit == "GB":
            return f"{size:.2f} {unit}".replace(".00 ", " ")
        size /= 1024


def main():
    """Main application function."""

    # Header
    st.markdown('<div class="main-header">🧠 Resume Analyzer</div>', unsafe_allow_html=True)
    st.markdown('<div class="sub-header">Get AI-powered insights about your resume in seconds</div>', unsafe_allow_html=True)

    upload_col, result_col = st.columns(2)

    with upload_col:
        st.subheader("Upload Your Resume")
        uploaded_file = st.file_uploader(
            "Drop your resume here",
            type=[ext.lstrip('.') for ext in config.ALLOWED_FILE_TYPES],
            help=f"PDF or DOCX, up to {config.MAX_FILE_SIZE_MB} MB"
        )

        if uploaded_file is not None:
            st.write(f"📄 **{uploaded_file.name}** ({format_file_size(uploaded_file.size)})")

        analyze_btn = st.button(
            "🧠 Analyze Resume",
            type="primary",
            use_container_width=True,
            disabled=uploaded_file is None
        )

        if analyze_btn and uploaded_file is not None:
            analyze_resume(uploaded_file)

    with result_col:
        if st.session_state.analysis_error:
            st.error(f"❌ {st.session_state.analysis_error}")
            st.info("Showing demonstration results instead.")

        if st.session_state.report is not None:
            display_results(st.session_state.report)
        else:
            st.info("👈 Upload a resume to see the analysis here")


def analyze_resume(uploaded_file):
    """Send the uploaded resume for analysis and store the result."""
    st.session_state.report = None
    st.session_state.analysis_error = None

    try:
        resume = load_resume_bytes(uploaded_file.name, uploaded_file.getvalue())
    except ResumeLoadError as e:
        st.error(f"❌ {e}")
        return

    with st.spinner("Analyzing your resume..."):
        outcome = analyze_with_fallback(AnalysisClient(), resume)

    st.session_state.report = outcome.report
    st.session_state.analysis_error = outcome.error
    logger.info(f"Analysis ready for {resume.filename} (fallback={outcome.used_fallback})")
    st.rerun()


def display_results(report):
    """Display the analysis and the PDF download button."""

    if report.matched:
        st.markdown('<div class="matched-box">✅ MATCHED</div>', unsafe_allow_html=True)
    else:
        st.markdown('<div class="not-matched-box">❌ NOT MATCHED</div>', unsafe_allow_html=True)

    st.subheader("📊 Score Breakdown")
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric("Overall Score", format_score(report.display_overall_score))
        st.progress(min(int(report.display_overall_score), 100))

    with col2:
        st.metric("Experience", f"{format_years(report.total_experience_years)} yrs")

    with col3:
        st.metric("Impact", format_score(report.impact_score))

    with col4:
        st.metric("Skills", format_score(report.skills_score))

    if report.summary:
        st.subheader("🔍 Summary")
        st.write(report.summary)

    sections = [
        ("✅ Strengths", report.strengths),
        ("❌ Weaknesses", report.weaknesses),
        ("💼 Suggested Roles", report.suggested_roles),
        ("🛠️ Skill Gaps", report.skill_gaps),
    ]
    for title, items in sections:
        if items:
            st.subheader(title)
            for item in items:
                st.markdown(f"- {item}")

    if report.questions_answers:
        st.subheader("📋 Detailed Analysis")
        for qa in report.questions_answers:
            with st.expander(f"{'✅' if qa.is_affirmative else '❌'} {qa.question}"):
                st.write(qa.reason)

    st.divider()

    # Download section
    engine = ReportLayoutEngine(
        date_format=config.FOOTER_DATE_FORMAT,
        filename=config.EXPORT_FILENAME
    )
    document = engine.render(report)

    st.download_button(
        label="📄 Download PDF Report",
        data=render_pdf_bytes(document),
        file_name=document.filename,
        mime="application/pdf",
        type="primary",
        use_container_width=True
    )
    st.caption(f"{document.page_count} page(s)")

    # Reset button
    if st.button("🔄 Analyze Another Resume", use_container_width=True):
        st.session_state.report = None
        st.session_state.analysis_error = None
        st.rerun()


if __name__ == "__main__":
    main()
