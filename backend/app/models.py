from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class Assessment(Base):
    __tablename__ = "assessments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(120), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="in_progress")
    current_layer: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    responses: Mapped[list[AssessmentResponse]] = relationship(
        "AssessmentResponse", back_populates="assessment", cascade="all, delete-orphan"
    )
    result: Mapped[AssessmentResult | None] = relationship(
        "AssessmentResult", back_populates="assessment", cascade="all, delete-orphan", uselist=False
    )

    __table_args__ = (
        Index("idx_assessments_user_created", "user_id", "created_at"),
        Index("idx_assessments_user_status", "user_id", "status"),
    )


class AssessmentResponse(Base):
    __tablename__ = "assessment_responses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    assessment_id: Mapped[str] = mapped_column(
        ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False
    )
    layer_number: Mapped[int] = mapped_column(Integer, nullable=False)
    question_id: Mapped[str] = mapped_column(String(120), nullable=False)
    response_value: Mapped[Any] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    assessment: Mapped[Assessment] = relationship("Assessment", back_populates="responses")

    __table_args__ = (
        UniqueConstraint("assessment_id", "question_id", name="uq_assessment_responses_question"),
        Index("idx_assessment_responses_layer", "assessment_id", "layer_number"),
    )


class AssessmentResult(Base):
    __tablename__ = "assessment_results"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    assessment_id: Mapped[str] = mapped_column(
        ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    intelligence_scores: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    personality_insights: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    career_recommendations: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    ai_explanations: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    explanation_status: Mapped[str] = mapped_column(String(32), nullable=False, default="fallback")
    explanation_error: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    assessment: Mapped[Assessment] = relationship("Assessment", back_populates="result")
