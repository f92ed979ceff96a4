from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import models
from app.services.questionnaire import layer_key

logger = logging.getLogger(__name__)

STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"


def create_assessment(db: Session, *, user_id: str) -> models.Assessment | None:
    assessment = models.Assessment(user_id=user_id, status=STATUS_IN_PROGRESS, current_layer=1)
    db.add(assessment)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating assessment for user %s", user_id)
        return None
    db.refresh(assessment)
    return assessment


def get_assessment(db: Session, *, assessment_id: str) -> models.Assessment | None:
    return db.get(models.Assessment, assessment_id)


def get_current_assessment(db: Session, *, user_id: str) -> models.Assessment | None:
    return db.scalar(
        select(models.Assessment)
        .where(
            models.Assessment.user_id == user_id,
            models.Assessment.status == STATUS_IN_PROGRESS,
        )
        .order_by(desc(models.Assessment.created_at))
        .limit(1)
    )


def list_user_assessments(db: Session, *, user_id: str, limit: int = 50) -> list[models.Assessment]:
    safe_limit = max(1, min(limit, 200))
    return list(
        db.scalars(
            select(models.Assessment)
            .where(models.Assessment.user_id == user_id)
            .order_by(desc(models.Assessment.created_at))
            .limit(safe_limit)
        ).all()
    )


def update_assessment_progress(db: Session, *, assessment_id: str, current_layer: int) -> bool:
    assessment = db.get(models.Assessment, assessment_id)
    if not assessment:
        return False

    assessment.current_layer = current_layer
    db.add(assessment)
    return _commit(db, "updating assessment progress")


def complete_assessment(db: Session, *, assessment_id: str) -> bool:
    assessment = db.get(models.Assessment, assessment_id)
    if not assessment:
        return False

    assessment.status = STATUS_COMPLETED
    assessment.completed_at = datetime.utcnow()
    db.add(assessment)
    return _commit(db, "completing assessment")


def save_responses(
    db: Session,
    *,
    assessment_id: str,
    layer_number: int,
    responses: Mapping[str, Any],
) -> bool:
    """Upsert one row per question; a resubmitted answer replaces the stored one."""
    if not db.get(models.Assessment, assessment_id):
        return False

    existing = {
        row.question_id: row
        for row in db.scalars(
            select(models.AssessmentResponse).where(
                models.AssessmentResponse.assessment_id == assessment_id,
                models.AssessmentResponse.question_id.in_(list(responses.keys())),
            )
        ).all()
    }

    for question_id, value in responses.items():
        row = existing.get(question_id)
        if row is None:
            row = models.AssessmentResponse(
                assessment_id=assessment_id,
                question_id=question_id,
            )
        row.layer_number = layer_number
        row.response_value = value
        db.add(row)

    return _commit(db, "saving assessment responses")


def get_assessment_responses(db: Session, *, assessment_id: str) -> list[models.AssessmentResponse]:
    return list(
        db.scalars(
            select(models.AssessmentResponse)
            .where(models.AssessmentResponse.assessment_id == assessment_id)
            .order_by(models.AssessmentResponse.layer_number, models.AssessmentResponse.created_at)
        ).all()
    )


def responses_by_layer(rows: list[models.AssessmentResponse]) -> dict[str, dict[str, Any]]:
    structured: dict[str, dict[str, Any]] = {}
    for row in rows:
        structured.setdefault(layer_key(row.layer_number), {})[row.question_id] = row.response_value
    return structured


def save_results(
    db: Session,
    *,
    assessment_id: str,
    intelligence_scores: dict[str, float],
    personality_insights: dict[str, float],
    career_recommendations: list[dict[str, Any]],
    ai_explanations: dict[str, Any] | None = None,
    explanation_status: str = "fallback",
    explanation_error: str | None = None,
) -> bool:
    if not db.get(models.Assessment, assessment_id):
        return False

    result = db.scalar(
        select(models.AssessmentResult).where(models.AssessmentResult.assessment_id == assessment_id)
    )
    if result is None:
        result = models.AssessmentResult(assessment_id=assessment_id)

    result.intelligence_scores = intelligence_scores
    result.personality_insights = personality_insights
    result.career_recommendations = career_recommendations
    result.ai_explanations = ai_explanations or {}
    result.explanation_status = explanation_status
    result.explanation_error = explanation_error
    result.updated_at = datetime.utcnow()
    db.add(result)
    return _commit(db, "saving assessment results")


def get_assessment_results(db: Session, *, assessment_id: str) -> models.AssessmentResult | None:
    return db.scalar(
        select(models.AssessmentResult).where(models.AssessmentResult.assessment_id == assessment_id)
    )


def _commit(db: Session, action: str) -> bool:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error %s", action)
        return False
    return True
