from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from app.services import assessment_service
from app.services.aggregator import aggregate, mean_scores, top_categories
from app.services.career_catalog import CAREER_CATALOG
from app.services.explanation_service import ExplanationOutcome, explain
from app.services.matcher import CareerMatch, match_careers
from app.services.questionnaire import (
    INTELLIGENCE_LAYER,
    PERSONALITY_LAYER,
    REFLECTION_LAYER,
    get_layer,
    layer_key,
)

TOP_INTELLIGENCE_COUNT = 3


@dataclass
class AssessmentResults:
    intelligence_scores: dict[str, float]
    personality_insights: dict[str, float]
    career_recommendations: list[CareerMatch]
    top_intelligences: list[tuple[str, float]]
    explanation: ExplanationOutcome


def score_profile(
    responses_by_layer: Mapping[str, Mapping[str, Any]],
) -> tuple[dict[str, float], dict[str, float], list[CareerMatch]]:
    intelligence = mean_scores(
        aggregate(responses_by_layer.get(layer_key(INTELLIGENCE_LAYER)) or {}, "intelligence")
    )
    personality = mean_scores(
        aggregate(responses_by_layer.get(layer_key(PERSONALITY_LAYER)) or {}, "personality")
    )
    careers = match_careers(CAREER_CATALOG, intelligence, personality)
    return intelligence, personality, careers


def build_results(
    responses_by_layer: Mapping[str, Mapping[str, Any]],
    *,
    client: Any,
    user_context: str | None = None,
    prompt_version: str = "v1",
) -> AssessmentResults:
    intelligence, personality, careers = score_profile(responses_by_layer)
    top = top_categories(intelligence, limit=TOP_INTELLIGENCE_COUNT)

    context = user_context if user_context is not None else reflection_context(responses_by_layer)
    outcome = explain(
        top,
        personality,
        careers,
        context,
        client=client,
        prompt_version=prompt_version,
    )

    return AssessmentResults(
        intelligence_scores=intelligence,
        personality_insights=personality,
        career_recommendations=careers,
        top_intelligences=top,
        explanation=outcome,
    )


def reflection_context(responses_by_layer: Mapping[str, Mapping[str, Any]]) -> str | None:
    answers = responses_by_layer.get(layer_key(REFLECTION_LAYER)) or {}
    layer = get_layer(REFLECTION_LAYER)
    prompts = {question.id: question.text for question in layer.questions} if layer else {}

    lines: list[str] = []
    for question_id, value in answers.items():
        if not isinstance(value, str) or not value.strip():
            continue
        prompt = prompts.get(question_id, question_id)
        lines.append(f"{prompt} {' '.join(value.split())}")
    return "\n".join(lines) or None


def compute_and_store_results(
    db: Session,
    *,
    assessment_id: str,
    client: Any,
    user_context: str | None = None,
    prompt_version: str = "v1",
) -> AssessmentResults | None:
    rows = assessment_service.get_assessment_responses(db, assessment_id=assessment_id)
    results = build_results(
        assessment_service.responses_by_layer(rows),
        client=client,
        user_context=user_context,
        prompt_version=prompt_version,
    )

    saved = assessment_service.save_results(
        db,
        assessment_id=assessment_id,
        intelligence_scores=results.intelligence_scores,
        personality_insights=results.personality_insights,
        career_recommendations=[career.to_dict() for career in results.career_recommendations],
        ai_explanations=results.explanation.bundle.to_dict(),
        explanation_status=results.explanation.status,
        explanation_error=results.explanation.reason,
    )
    if not saved:
        return None
    return results
