from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app import models
from app.db import get_db
from app.schemas import ExplanationBundleOut, ResultsComputeIn, ResultsOut, TopIntelligenceOut
from app.services.aggregator import top_categories
from app.services.assessment_service import get_assessment, get_assessment_results
from app.services.llm import get_llm_client, load_llm_config
from app.services.report_service import (
    JSON_EXPORT_FILENAME,
    build_json_export,
    build_pdf_report,
    report_filename,
)
from app.services.results_service import TOP_INTELLIGENCE_COUNT, compute_and_store_results

router = APIRouter(prefix="/assessments", tags=["results"])


@router.post("/{assessment_id}/results", response_model=ResultsOut)
def compute_results(
    assessment_id: str,
    payload: ResultsComputeIn | None = Body(default=None),
    db: Session = Depends(get_db),
) -> ResultsOut:
    if not get_assessment(db, assessment_id=assessment_id):
        raise HTTPException(status_code=404, detail="Assessment not found")

    config = load_llm_config()
    computed = compute_and_store_results(
        db,
        assessment_id=assessment_id,
        client=get_llm_client(config),
        user_context=payload.user_context if payload else None,
        prompt_version=config.prompt_version,
    )
    if computed is None:
        raise HTTPException(status_code=500, detail="Failed to save results. Please try again.")

    return _to_results_out(_require_results(db, assessment_id))


@router.get("/{assessment_id}/results", response_model=ResultsOut)
def get_results(assessment_id: str, db: Session = Depends(get_db)) -> ResultsOut:
    return _to_results_out(_require_results(db, assessment_id))


@router.get("/{assessment_id}/report.pdf")
def download_report(assessment_id: str, db: Session = Depends(get_db)) -> Response:
    result = _require_results(db, assessment_id)
    pdf = build_pdf_report(
        result.intelligence_scores or {},
        result.personality_insights or {},
        result.career_recommendations or [],
        result.ai_explanations or {},
    )
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report_filename()}"'},
    )


@router.get("/{assessment_id}/export.json")
def export_results(assessment_id: str, db: Session = Depends(get_db)) -> JSONResponse:
    result = _require_results(db, assessment_id)
    payload = build_json_export(
        result.intelligence_scores or {},
        result.personality_insights or {},
        result.career_recommendations or [],
        timestamp=result.updated_at,
    )
    return JSONResponse(
        content=payload,
        headers={"Content-Disposition": f'attachment; filename="{JSON_EXPORT_FILENAME}"'},
    )


def _require_results(db: Session, assessment_id: str) -> models.AssessmentResult:
    if not get_assessment(db, assessment_id=assessment_id):
        raise HTTPException(status_code=404, detail="Assessment not found")
    result = get_assessment_results(db, assessment_id=assessment_id)
    if not result:
        raise HTTPException(status_code=404, detail="Results not found")
    return result


def _to_results_out(result: models.AssessmentResult) -> ResultsOut:
    intelligence = result.intelligence_scores or {}
    return ResultsOut(
        assessment_id=result.assessment_id,
        intelligence_scores=intelligence,
        personality_insights=result.personality_insights or {},
        top_intelligences=[
            TopIntelligenceOut(type=name, score=score)
            for name, score in top_categories(intelligence, limit=TOP_INTELLIGENCE_COUNT)
        ],
        career_recommendations=result.career_recommendations or [],
        explanations=ExplanationBundleOut.model_validate(result.ai_explanations or {}),
        llm_status="ok" if result.explanation_status == "ok" else "fallback",
        llm_error=result.explanation_error,
        created_at=result.created_at,
        updated_at=result.updated_at,
    )
