from datetime import date, datetime

from app.services.career_catalog import CAREER_CATALOG
from app.services.matcher import match_careers
from app.services.report_service import (
    build_json_export,
    build_pdf_report,
    personality_description,
    report_filename,
    strength_level,
)


def test_strength_levels():
    assert strength_level(4.6) == "Exceptional"
    assert strength_level(4.5) == "Exceptional"
    assert strength_level(4.0) == "Strong"
    assert strength_level(3.5) == "Good"
    assert strength_level(3.0) == "Moderate"
    assert strength_level(2.9) == "Developing"


def test_personality_description_switches_at_four():
    assert personality_description("Openness", 4.0).startswith("Highly creative")
    assert personality_description("Openness", 3.9) == "Prefers routine and familiar approaches"
    assert personality_description("Autonomy", 5.0) == "Individual trait profile"


def test_report_filename_uses_iso_date():
    assert report_filename(date(2024, 3, 7)) == "career-assessment-report-2024-03-07.pdf"


def test_pdf_report_renders_with_and_without_explanations():
    careers = [match.to_dict() for match in match_careers(CAREER_CATALOG, {"Linguistic": 4.5}, {"Openness": 4})]
    explanations = {
        "executiveSummary": "You <thrive> with words & ideas.",
        "careersExplained": {careers[0]["title"]: {"rationale": ["Strong writing", "Clear speaker"]}},
    }

    with_explanations = build_pdf_report(
        {"Linguistic": 4.5, "Musical": 2.0},
        {"Openness": 4.0, "Extraversion": 2.5},
        careers,
        explanations,
        generated_on=date(2024, 1, 2),
    )
    bare = build_pdf_report({}, {}, [])

    assert with_explanations.startswith(b"%PDF")
    assert bare.startswith(b"%PDF")


def test_json_export_shape():
    payload = build_json_export(
        {"Linguistic": 4.5},
        {"Openness": 4.0},
        [{"title": "Teacher", "matchPercentage": 90}],
        timestamp=datetime(2024, 1, 2, 3, 4, 5),
    )

    assert payload == {
        "intelligenceScores": {"Linguistic": 4.5},
        "personalityInsights": {"Openness": 4.0},
        "careerRecommendations": [{"title": "Teacher", "matchPercentage": 90}],
        "timestamp": "2024-01-02T03:04:05",
    }
