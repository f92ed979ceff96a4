from __future__ import annotations

import html
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from io import BytesIO
from typing import Any
from urllib.parse import quote_plus

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

REPORT_CAREER_LIMIT = 5
JSON_EXPORT_FILENAME = "career_assessment_results.json"
ONET_SEARCH_URL = "https://www.onetonline.org/find/quick?s="

NEXT_STEPS = (
    "Research the recommended career paths in detail",
    "Connect with professionals in your areas of interest",
    "Develop skills aligned with your intelligence strengths",
    "Consider educational or training opportunities",
    "Update your resume to highlight relevant strengths",
)

PERSONALITY_DESCRIPTIONS: dict[str, tuple[str, str]] = {
    "openness": ("Highly creative and open to new experiences", "Prefers routine and familiar approaches"),
    "conscientiousness": ("Highly organized and goal-oriented", "More flexible and spontaneous"),
    "extraversion": ("Energized by social interaction", "Prefers quieter, more focused environments"),
    "agreeableness": ("Highly cooperative and trusting", "More competitive and skeptical"),
    "neuroticism": ("More sensitive to stress", "Emotionally stable and resilient"),
}


def strength_level(score: float) -> str:
    if score >= 4.5:
        return "Exceptional"
    if score >= 4.0:
        return "Strong"
    if score >= 3.5:
        return "Good"
    if score >= 3.0:
        return "Moderate"
    return "Developing"


def personality_description(trait: str, score: float) -> str:
    pair = PERSONALITY_DESCRIPTIONS.get(trait.lower())
    if not pair:
        return "Individual trait profile"
    return pair[0] if score >= 4 else pair[1]


def report_filename(day: date | None = None) -> str:
    return f"career-assessment-report-{(day or date.today()).isoformat()}.pdf"


def build_json_export(
    intelligence_scores: Mapping[str, float],
    personality_insights: Mapping[str, float],
    career_recommendations: Sequence[Mapping[str, Any]],
    *,
    timestamp: datetime | None = None,
) -> dict[str, Any]:
    return {
        "intelligenceScores": dict(intelligence_scores),
        "personalityInsights": dict(personality_insights),
        "careerRecommendations": [dict(item) for item in career_recommendations],
        "timestamp": (timestamp or datetime.utcnow()).isoformat(),
    }


def build_pdf_report(
    intelligence_scores: Mapping[str, float],
    personality_insights: Mapping[str, float],
    career_recommendations: Sequence[Mapping[str, Any]],
    explanations: Mapping[str, Any] | None = None,
    *,
    generated_on: date | None = None,
) -> bytes:
    explanations = explanations or {}
    styles = getSampleStyleSheet()
    normal = styles["Normal"]

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=40,
        leftMargin=40,
        topMargin=40,
        bottomMargin=40,
        title="Career Assessment Report",
    )

    story: list[Any] = [
        Paragraph("Career Assessment Report", styles["Title"]),
        Paragraph(f"Generated on: {(generated_on or date.today()).strftime('%B %d, %Y')}", normal),
        Spacer(1, 16),
    ]

    ranked_intelligences = _ranked(intelligence_scores)
    summary = explanations.get("executiveSummary") or _default_summary(ranked_intelligences)
    story.append(Paragraph("Executive Summary", styles["Heading2"]))
    story.append(Paragraph(_escape(summary), normal))
    story.append(Spacer(1, 12))

    story.append(Paragraph("Intelligence Strengths", styles["Heading2"]))
    intelligence_rows = [["Intelligence Type", "Score", "Level"]] + [
        [name, f"{score:.1f}/5.0", strength_level(score)] for name, score in ranked_intelligences
    ]
    story.append(_table(intelligence_rows, header_color="#4a90e2", col_widths=[220, 90, 140]))
    story.append(Spacer(1, 16))

    story.append(Paragraph("Personality Insights", styles["Heading2"]))
    personality_rows = [["Personality Trait", "Score", "Description"]] + [
        [trait, f"{score:.1f}/5.0", Paragraph(_escape(personality_description(trait, score)), normal)]
        for trait, score in _ranked(personality_insights)
    ]
    story.append(_table(personality_rows, header_color="#8bc34a", col_widths=[140, 70, 240]))
    story.append(Spacer(1, 16))

    story.append(Paragraph("Career Recommendations", styles["Heading2"]))
    careers = sorted(
        career_recommendations,
        key=lambda item: int(item.get("matchPercentage") or 0),
        reverse=True,
    )[:REPORT_CAREER_LIMIT]
    careers_explained = explanations.get("careersExplained") or {}
    for index, career in enumerate(careers, start=1):
        title = str(career.get("title") or "Career")
        story.append(
            Paragraph(
                f"{index}. {_escape(title)} ({int(career.get('matchPercentage') or 0)}% match)",
                styles["Heading3"],
            )
        )
        if career.get("description"):
            story.append(Paragraph(_escape(career["description"]), normal))
        for bullet in (careers_explained.get(title) or {}).get("rationale") or []:
            story.append(Paragraph(f"\u2022 {_escape(bullet)}", normal))
        onet_url = f"{ONET_SEARCH_URL}{quote_plus(title)}"
        story.append(Paragraph(f"O*NET: {_escape(onet_url)}", normal))
        story.append(Spacer(1, 8))

    story.append(Paragraph("Next Steps", styles["Heading2"]))
    for index, step in enumerate(NEXT_STEPS, start=1):
        story.append(Paragraph(f"{index}. {step}", normal))

    doc.build(story)
    return buffer.getvalue()


def _ranked(scores: Mapping[str, float]) -> list[tuple[str, float]]:
    return sorted(((name, float(value)) for name, value in scores.items()), key=lambda item: item[1], reverse=True)


def _default_summary(ranked_intelligences: list[tuple[str, float]]) -> str:
    names = ", ".join(name for name, _score in ranked_intelligences[:3]) or "not yet measured"
    return (
        f"Based on your assessment responses, your top intelligence strengths are {names}. "
        "This report provides detailed insights into your cognitive strengths and personality traits, "
        "along with personalized career recommendations."
    )


def _table(rows: list[list[Any]], *, header_color: str, col_widths: list[int]) -> Table:
    table = Table(rows, hAlign="LEFT", colWidths=col_widths)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(header_color)),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONT", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("BOX", (0, 0), (-1, -1), 0.5, colors.grey),
                ("INNERGRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )
    return table


def _escape(value: Any) -> str:
    return html.escape(str(value), quote=False)
