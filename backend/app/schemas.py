from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class HealthOut(BaseModel):
    status: str
    app: str
    llm_enabled: bool


class QuestionOut(BaseModel):
    id: str
    text: str
    category: str


class QuestionLayerOut(BaseModel):
    number: int
    title: str
    description: str
    is_open_ended: bool = False
    questions: list[QuestionOut] = Field(default_factory=list)


class QuestionnaireOut(BaseModel):
    layer_count: int
    response_scale: dict[str, int]
    layers: list[QuestionLayerOut] = Field(default_factory=list)


class AssessmentCreateIn(BaseModel):
    user_id: str = Field(min_length=1, max_length=128)


class AssessmentOut(BaseModel):
    assessment_id: str
    user_id: str
    status: Literal["in_progress", "completed"]
    current_layer: int
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None


class AssessmentCurrentOut(BaseModel):
    assessment: AssessmentOut | None = None


class AssessmentHistoryOut(BaseModel):
    items: list[AssessmentOut] = Field(default_factory=list)


class LayerResponsesIn(BaseModel):
    responses: dict[str, Any] = Field(default_factory=dict)


class LayerResponsesOut(BaseModel):
    assessment: AssessmentOut
    layer_number: int
    saved: int


class AssessmentResponsesOut(BaseModel):
    assessment_id: str
    responses: dict[str, dict[str, Any]] = Field(default_factory=dict)


class TopIntelligenceOut(BaseModel):
    type: str
    score: float


class CareerExplanationOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rationale: list[str] = Field(default_factory=list)
    skill_gaps: list[str] = Field(default_factory=list, alias="skillGaps")


class ExplanationBundleOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    executive_summary: str = Field(default="", alias="executiveSummary")
    intelligences_explained: dict[str, str] = Field(default_factory=dict, alias="intelligencesExplained")
    personality_explained: dict[str, str] = Field(default_factory=dict, alias="personalityExplained")
    careers_explained: dict[str, CareerExplanationOut] = Field(default_factory=dict, alias="careersExplained")


class ExplanationOut(ExplanationBundleOut):
    llm_status: Literal["ok", "fallback"] = "fallback"
    llm_error: str | None = None


class TopIntelligenceIn(BaseModel):
    type: str
    score: float


class CareerIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    match_percentage: int = Field(default=0, alias="matchPercentage")
    match_factors: list[str] = Field(default_factory=list, alias="matchFactors")
    category: str | None = None


class ExplanationRequestIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    top_intelligences: list[TopIntelligenceIn] = Field(default_factory=list, alias="topIntelligences")
    personality_insights: dict[str, float] = Field(default_factory=dict, alias="personalityInsights")
    careers: list[CareerIn] = Field(default_factory=list)
    user_context: str | None = Field(default=None, alias="userContext")


class ResultsComputeIn(BaseModel):
    user_context: str | None = None


class ResultsOut(BaseModel):
    assessment_id: str
    intelligence_scores: dict[str, float] = Field(default_factory=dict)
    personality_insights: dict[str, float] = Field(default_factory=dict)
    top_intelligences: list[TopIntelligenceOut] = Field(default_factory=list)
    career_recommendations: list[dict[str, Any]] = Field(default_factory=list)
    explanations: ExplanationBundleOut
    llm_status: Literal["ok", "fallback"] = "fallback"
    llm_error: str | None = None
    created_at: datetime
    updated_at: datetime


class ScoringPreviewIn(BaseModel):
    responses: dict[str, dict[str, Any]] = Field(default_factory=dict)


class CategoryScoreOut(BaseModel):
    category: str
    mean_value: float
    percent: float
    response_count: int


class ScoringPreviewOut(BaseModel):
    intelligence: list[CategoryScoreOut] = Field(default_factory=list)
    personality: list[CategoryScoreOut] = Field(default_factory=list)
    top_intelligences: list[TopIntelligenceOut] = Field(default_factory=list)
    career_recommendations: list[dict[str, Any]] = Field(default_factory=list)
