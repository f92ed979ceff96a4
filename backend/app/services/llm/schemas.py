from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LLMCareerExplanation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rationale: list[str] = Field(default_factory=list)
    skill_gaps: list[str] = Field(default_factory=list, alias="skillGaps")


class LLMExplanationBundle(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    executive_summary: str = Field(default="", alias="executiveSummary")
    intelligences_explained: dict[str, str] = Field(default_factory=dict, alias="intelligencesExplained")
    personality_explained: dict[str, str] = Field(default_factory=dict, alias="personalityExplained")
    careers_explained: dict[str, LLMCareerExplanation] = Field(default_factory=dict, alias="careersExplained")
