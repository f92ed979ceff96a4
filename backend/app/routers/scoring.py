from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.schemas import CategoryScoreOut, ScoringPreviewIn, ScoringPreviewOut, TopIntelligenceOut
from app.services.aggregator import CategoryScore, aggregate, mean_scores, top_categories
from app.services.career_catalog import CAREER_CATALOG
from app.services.matcher import match_careers
from app.services.questionnaire import (
    INTELLIGENCE_LAYER,
    PERSONALITY_LAYER,
    SCALE_MAX,
    SCALE_MIN,
    invalid_scaled_answers,
    layer_key,
    list_layers,
)
from app.services.results_service import TOP_INTELLIGENCE_COUNT

router = APIRouter(prefix="/scoring", tags=["scoring"])


@router.post("/preview", response_model=ScoringPreviewOut)
def preview(payload: ScoringPreviewIn) -> ScoringPreviewOut:
    """Score raw layer answers without touching storage."""
    _reject_out_of_scale(payload.responses)

    intelligence = aggregate(payload.responses.get(layer_key(INTELLIGENCE_LAYER)) or {}, "intelligence")
    personality = aggregate(payload.responses.get(layer_key(PERSONALITY_LAYER)) or {}, "personality")

    intelligence_means = mean_scores(intelligence)
    careers = match_careers(CAREER_CATALOG, intelligence_means, mean_scores(personality))

    return ScoringPreviewOut(
        intelligence=_to_score_list(intelligence),
        personality=_to_score_list(personality),
        top_intelligences=[
            TopIntelligenceOut(type=name, score=score)
            for name, score in top_categories(intelligence_means, limit=TOP_INTELLIGENCE_COUNT)
        ],
        career_recommendations=[career.to_dict() for career in careers],
    )


def _reject_out_of_scale(responses: dict[str, dict]) -> None:
    problems = []
    for layer in list_layers():
        key = layer_key(layer.number)
        bad = invalid_scaled_answers(layer, responses.get(key) or {})
        problems.extend(f"{key}.{question_id}" for question_id in bad)
    if problems:
        raise HTTPException(
            status_code=400,
            detail=f"Answers must be whole numbers from {SCALE_MIN} to {SCALE_MAX}: {', '.join(problems)}",
        )


def _to_score_list(scores: dict[str, CategoryScore]) -> list[CategoryScoreOut]:
    ranked = sorted(scores.values(), key=lambda item: item.mean_value, reverse=True)
    return [
        CategoryScoreOut(
            category=item.category,
            mean_value=item.mean_value,
            percent=item.percent,
            response_count=item.response_count,
        )
        for item in ranked
    ]
