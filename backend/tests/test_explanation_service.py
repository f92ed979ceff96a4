import asyncio
import time

from app.services.career_catalog import get_career
from app.services.explanation_service import (
    BULLETS_PER_CAREER,
    EXPLAINED_CAREER_LIMIT,
    build_request_payload,
    explain,
    explain_personality,
    explain_with_deadline,
)
from app.services.llm.client import LLMClientError
from app.services.matcher import match_careers

TOP = [("Linguistic", 4.5), ("Interpersonal", 4.0), ("Musical", 3.5)]
PERSONALITY = {"Openness": 4.2, "Conscientiousness": 3.1, "Extraversion": 2.0}


class FakeClient:
    enabled = True

    def __init__(self, result=None, error=None, delay=0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = []

    def generate_json(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return self.result


def _careers():
    careers = match_careers(None, dict(TOP), PERSONALITY)
    # Teacher ties at the top; put it first so it is the headline career.
    return sorted(careers, key=lambda match: match.title != "Teacher")


def _match(title):
    return match_careers([get_career(title)], dict(TOP), PERSONALITY)[0]


def _assert_three_bullets_each(bundle):
    for title, career in bundle.careers_explained.items():
        assert len(career.rationale) == BULLETS_PER_CAREER, title
        assert len(career.skill_gaps) == BULLETS_PER_CAREER, title


def test_disabled_client_returns_template_bundle():
    outcome = explain(TOP, PERSONALITY, _careers(), client=None)

    assert outcome.status == "fallback"
    assert outcome.reason
    bundle = outcome.bundle
    assert set(bundle.intelligences_explained) == {"Linguistic", "Interpersonal", "Musical"}
    assert set(bundle.personality_explained) == set(PERSONALITY)
    assert len(bundle.careers_explained) == EXPLAINED_CAREER_LIMIT
    _assert_three_bullets_each(bundle)


def test_remote_failure_falls_back_with_top_type_and_career_in_summary():
    client = FakeClient(error=LLMClientError("HTTP 500"))

    outcome = explain(TOP, PERSONALITY, _careers(), "I like helping people", client=client)

    assert outcome.status == "fallback"
    assert outcome.reason == "HTTP 500"
    assert "Linguistic" in outcome.bundle.executive_summary
    assert "Teacher" in outcome.bundle.executive_summary
    assert len(outcome.bundle.careers_explained) == EXPLAINED_CAREER_LIMIT
    _assert_three_bullets_each(outcome.bundle)
    assert len(client.calls) == 1


def test_malformed_payload_falls_back():
    client = FakeClient(result={"executiveSummary": ["not", "a", "string"]})

    outcome = explain(TOP, PERSONALITY, _careers(), client=client)

    assert outcome.status == "fallback"
    assert outcome.bundle.executive_summary


def test_unexpected_client_error_falls_back():
    client = FakeClient(error=KeyError("boom"))

    outcome = explain(TOP, PERSONALITY, _careers(), client=client)

    assert outcome.status == "fallback"


def test_model_output_is_normalized_to_known_keys_and_three_items():
    client = FakeClient(
        result={
            "executiveSummary": "  You communicate   well.  ",
            "intelligencesExplained": {"Linguistic": "Strong with words.", "Spatial": "ignored"},
            "personalityExplained": {"Openness": "Curious."},
            "careersExplained": {
                "Teacher": {
                    "rationale": ["One", "Two", "Three", "Four"],
                    "skillGaps": ["Classroom management"],
                },
                "Astronaut": {"rationale": ["ignored"], "skillGaps": []},
            },
        }
    )

    outcome = explain(TOP, PERSONALITY, _careers(), client=client)

    assert outcome.status == "ok"
    bundle = outcome.bundle
    assert bundle.executive_summary == "You communicate well."
    assert bundle.intelligences_explained["Linguistic"] == "Strong with words."
    assert set(bundle.intelligences_explained) == {"Linguistic", "Interpersonal", "Musical"}
    assert bundle.personality_explained["Openness"] == "Curious."
    assert "Astronaut" not in bundle.careers_explained
    teacher = bundle.careers_explained["Teacher"]
    assert teacher.rationale == ["One", "Two", "Three"]
    assert len(teacher.skill_gaps) == BULLETS_PER_CAREER
    assert teacher.skill_gaps[0] == "Classroom management"
    assert list(bundle.careers_explained) == [career.title for career in _careers()[:EXPLAINED_CAREER_LIMIT]]
    _assert_three_bullets_each(bundle)


def test_empty_career_list_gives_empty_career_map():
    outcome = explain(TOP, PERSONALITY, [], client=None)

    assert outcome.bundle.careers_explained == {}
    assert "Linguistic" in outcome.bundle.executive_summary


def test_only_top_careers_are_explained():
    careers = match_careers(None, dict(TOP), PERSONALITY)
    client = FakeClient(error=LLMClientError("timeout"))

    outcome = explain(TOP, PERSONALITY, careers, client=client)

    assert list(outcome.bundle.careers_explained) == [career.title for career in careers[:EXPLAINED_CAREER_LIMIT]]


def test_deadline_returns_fallback_without_waiting_for_client():
    client = FakeClient(result={"executiveSummary": "late"}, delay=1.0)

    outcome = asyncio.run(
        explain_with_deadline(TOP, PERSONALITY, _careers(), client=client, deadline_seconds=0.05)
    )

    assert outcome.status == "fallback"
    assert "deadline" in outcome.reason


def test_request_payload_redacts_contact_details():
    payload = build_request_payload(
        TOP,
        PERSONALITY,
        [_match("Teacher")],
        "Reach me at jane.doe@example.com or +1 (555) 123-4567, portfolio https://jane.dev",
    )

    context = payload["userContext"]
    assert "example.com" not in context
    assert "555" not in context
    assert "[EMAIL]" in context
    assert "[PHONE]" in context
    assert "[URL]" in context
    assert payload["careers"][0]["title"] == "Teacher"
    assert payload["topIntelligences"][0] == {"type": "Linguistic", "score": 4.5}


def test_personality_text_uses_thresholds():
    assert explain_personality("Openness", 4.0) != explain_personality("Openness", 3.9)
    assert explain_personality("Openness", 3.0) != explain_personality("Openness", 2.9)
    assert "2.5" in explain_personality("Grit", 2.5)
