from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app import models
from app.db import get_db
from app.schemas import (
    AssessmentCreateIn,
    AssessmentCurrentOut,
    AssessmentHistoryOut,
    AssessmentOut,
    AssessmentResponsesOut,
    LayerResponsesIn,
    LayerResponsesOut,
)
from app.services.assessment_service import (
    complete_assessment,
    create_assessment,
    get_assessment,
    get_assessment_responses,
    get_current_assessment,
    list_user_assessments,
    responses_by_layer,
    save_responses,
    update_assessment_progress,
)
from app.services.questionnaire import (
    LAYER_COUNT,
    SCALE_MAX,
    SCALE_MIN,
    get_layer,
    invalid_scaled_answers,
)

router = APIRouter(prefix="/assessments", tags=["assessments"])

SAVE_FAILED_DETAIL = "Failed to save progress. Please try again."


@router.post("", response_model=AssessmentOut)
def create(payload: AssessmentCreateIn, db: Session = Depends(get_db)) -> AssessmentOut:
    assessment = create_assessment(db, user_id=payload.user_id.strip())
    if not assessment:
        raise HTTPException(status_code=500, detail="Failed to create assessment")
    return _to_assessment_out(assessment)


@router.get("", response_model=AssessmentHistoryOut)
def list_for_user(
    user_id: str = Query(min_length=1),
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
) -> AssessmentHistoryOut:
    items = list_user_assessments(db, user_id=user_id, limit=limit)
    return AssessmentHistoryOut(items=[_to_assessment_out(item) for item in items])


@router.get("/current", response_model=AssessmentCurrentOut)
def get_current(user_id: str = Query(min_length=1), db: Session = Depends(get_db)) -> AssessmentCurrentOut:
    assessment = get_current_assessment(db, user_id=user_id)
    if not assessment:
        return AssessmentCurrentOut(assessment=None)
    return AssessmentCurrentOut(assessment=_to_assessment_out(assessment))


@router.get("/{assessment_id}", response_model=AssessmentOut)
def get_one(assessment_id: str, db: Session = Depends(get_db)) -> AssessmentOut:
    return _to_assessment_out(_require_assessment(db, assessment_id))


@router.put("/{assessment_id}/layers/{layer_number}/responses", response_model=LayerResponsesOut)
def put_layer_responses(
    assessment_id: str,
    layer_number: int,
    payload: LayerResponsesIn,
    db: Session = Depends(get_db),
) -> LayerResponsesOut:
    assessment = _require_assessment(db, assessment_id)
    layer = get_layer(layer_number)
    if not layer:
        raise HTTPException(status_code=400, detail=f"Layer must be between 1 and {LAYER_COUNT}")

    unknown = sorted(set(payload.responses) - layer.question_ids)
    if unknown:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown question ids for layer {layer_number}: {', '.join(unknown)}",
        )

    out_of_scale = invalid_scaled_answers(layer, payload.responses)
    if out_of_scale:
        raise HTTPException(
            status_code=400,
            detail=f"Answers must be whole numbers from {SCALE_MIN} to {SCALE_MAX}: {', '.join(out_of_scale)}",
        )

    if not save_responses(db, assessment_id=assessment_id, layer_number=layer_number, responses=payload.responses):
        raise HTTPException(status_code=500, detail=SAVE_FAILED_DETAIL)

    if layer_number >= LAYER_COUNT:
        advanced = complete_assessment(db, assessment_id=assessment_id)
    else:
        # Re-saving an earlier layer never moves progress backwards.
        next_layer = max(assessment.current_layer, layer_number + 1)
        advanced = update_assessment_progress(db, assessment_id=assessment_id, current_layer=next_layer)
    if not advanced:
        raise HTTPException(status_code=500, detail=SAVE_FAILED_DETAIL)

    db.refresh(assessment)
    return LayerResponsesOut(
        assessment=_to_assessment_out(assessment),
        layer_number=layer_number,
        saved=len(payload.responses),
    )


@router.get("/{assessment_id}/responses", response_model=AssessmentResponsesOut)
def get_responses(assessment_id: str, db: Session = Depends(get_db)) -> AssessmentResponsesOut:
    _require_assessment(db, assessment_id)
    rows = get_assessment_responses(db, assessment_id=assessment_id)
    return AssessmentResponsesOut(assessment_id=assessment_id, responses=responses_by_layer(rows))


def _require_assessment(db: Session, assessment_id: str) -> models.Assessment:
    assessment = get_assessment(db, assessment_id=assessment_id)
    if not assessment:
        raise HTTPException(status_code=404, detail="Assessment not found")
    return assessment


def _to_assessment_out(assessment: models.Assessment) -> AssessmentOut:
    return AssessmentOut(
        assessment_id=assessment.id,
        user_id=assessment.user_id,
        status=assessment.status,
        current_layer=assessment.current_layer,
        created_at=assessment.created_at,
        updated_at=assessment.updated_at,
        completed_at=assessment.completed_at,
    )
