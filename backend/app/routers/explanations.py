from __future__ import annotations

from fastapi import APIRouter

from app.config import settings
from app.schemas import CareerIn, ExplanationOut, ExplanationRequestIn
from app.services.career_catalog import CareerEntry, get_career
from app.services.explanation_service import explain_with_deadline
from app.services.llm import get_llm_client, load_llm_config
from app.services.matcher import CareerMatch

router = APIRouter(prefix="/explanations", tags=["explanations"])


@router.post("", response_model=ExplanationOut)
async def create_explanations(payload: ExplanationRequestIn) -> ExplanationOut:
    config = load_llm_config()
    outcome = await explain_with_deadline(
        [(item.type, item.score) for item in payload.top_intelligences],
        payload.personality_insights,
        [_to_career_match(item) for item in payload.careers],
        payload.user_context,
        client=get_llm_client(config),
        deadline_seconds=settings.explanation_deadline_seconds,
        prompt_version=config.prompt_version,
    )
    return ExplanationOut(
        **outcome.bundle.to_dict(),
        llm_status=outcome.status,
        llm_error=outcome.reason,
    )


def _to_career_match(item: CareerIn) -> CareerMatch:
    known = get_career(item.title)
    entry = CareerEntry(
        title=item.title,
        category=item.category or (known.category if known else "General"),
        description=known.description if known else "",
        match_factors=tuple(item.match_factors),
    )
    return CareerMatch(entry=entry, match_percentage=item.match_percentage)
