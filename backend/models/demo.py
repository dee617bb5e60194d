"""
Fixed demonstration dataset shown when the analysis service is unavailable.
"""

from .report import AnalysisReport, QuestionAnswer

DEMO_REPORT = AnalysisReport(
    matched=True,
    overall_score=82,
    total_experience_years=6.9,
    impact_score=80,
    skills_score=85,
    summary=(
        "Experienced software engineer with 5+ years in full-stack development. "
        "Strong background in React, Node.js, and cloud technologies. Shows consistent "
        "career progression and leadership potential."
    ),
    strengths=(
        "Excellent technical skills in modern web technologies",
        "Strong problem-solving abilities",
        "Experience with agile methodologies",
        "Leadership experience managing small teams",
        "Continuous learning mindset",
    ),
    weaknesses=(
        "Limited experience with mobile development",
        "Could benefit from more cloud architecture experience",
        "Missing specific industry domain knowledge",
        "Needs stronger project management certifications",
    ),
    suggested_roles=(
        "Senior Frontend Developer",
        "Full-Stack Engineer",
        "Technical Lead",
        "Software Architect (with additional experience)",
        "Engineering Manager (entry-level)",
    ),
    skill_gaps=(
        "React Native or Flutter for mobile",
        "AWS/Azure advanced certifications",
        "System design for scale",
        "DevOps and CI/CD pipelines",
        "Machine learning fundamentals",
    ),
    questions_answers=(
        QuestionAnswer(
            question="Does the candidate have at least 5 years of professional experience?",
            answer="Yes",
            reason="The resume lists roles spanning roughly 6.9 years of full-time engineering work.",
        ),
        QuestionAnswer(
            question="Has the candidate led a team?",
            answer="Yes",
            reason="Managed a team of four engineers while delivering a customer-facing dashboard.",
        ),
        QuestionAnswer(
            question="Does the candidate have production mobile experience?",
            answer="No",
            reason="No mobile frameworks or app store releases are mentioned anywhere in the resume.",
        ),
    ),
)
