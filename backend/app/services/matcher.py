from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from app.services.career_catalog import CAREER_CATALOG, CareerEntry

NO_OVERLAP_MATCH_PERCENT = 60
MAX_MATCH_PERCENT = 95
PERSONALITY_BONUS_WEIGHT = 0.5
SCORE_TO_PERCENT = 20

# (applies-to-entry, personality trait) pairs; bonuses add to the score only.
PERSONALITY_BONUS_RULES: tuple[tuple[Callable[[CareerEntry], bool], str], ...] = (
    (lambda entry: entry.category == "Creative", "Openness"),
    (lambda entry: entry.category == "Technology", "Conscientiousness"),
    (lambda entry: "Interpersonal" in entry.match_factors, "Extraversion"),
)


@dataclass(frozen=True)
class CareerMatch:
    entry: CareerEntry
    match_percentage: int

    @property
    def title(self) -> str:
        return self.entry.title

    @property
    def category(self) -> str:
        return self.entry.category

    @property
    def match_factors(self) -> tuple[str, ...]:
        return self.entry.match_factors

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.entry.title,
            "category": self.entry.category,
            "description": self.entry.description,
            "requiredSkills": list(self.entry.required_skills),
            "salaryRange": self.entry.salary_range,
            "jobOutlook": self.entry.job_outlook,
            "workEnvironment": list(self.entry.work_environment),
            "matchFactors": list(self.entry.match_factors),
            "matchPercentage": self.match_percentage,
        }


def score_career(
    entry: CareerEntry,
    intelligence_scores: Mapping[str, float],
    personality_scores: Mapping[str, float],
) -> int:
    score = 0.0
    factor_count = 0
    for factor in entry.match_factors:
        if factor in intelligence_scores:
            score += float(intelligence_scores[factor])
            factor_count += 1

    for applies, trait in PERSONALITY_BONUS_RULES:
        trait_score = personality_scores.get(trait)
        if trait_score is None or not applies(entry):
            continue
        score += float(trait_score) * PERSONALITY_BONUS_WEIGHT

    if factor_count == 0:
        return NO_OVERLAP_MATCH_PERCENT

    percent = _round_half_up((score / factor_count) * SCORE_TO_PERCENT)
    return min(max(percent, 0), MAX_MATCH_PERCENT)


def match_careers(
    catalog: Iterable[CareerEntry] | None,
    intelligence_scores: Mapping[str, float],
    personality_scores: Mapping[str, float],
) -> list[CareerMatch]:
    entries = list(CAREER_CATALOG if catalog is None else catalog)
    matches = [
        CareerMatch(
            entry=entry,
            match_percentage=score_career(entry, intelligence_scores or {}, personality_scores or {}),
        )
        for entry in entries
    ]
    # sorted() is stable, so ties keep catalog order.
    return sorted(matches, key=lambda item: item.match_percentage, reverse=True)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
