"""Reduce raw questionnaire answers to per-category mean scores.

Answers are on a 1-5 scale. A category score is the plain mean of the numeric
answers whose question key maps to that category; `percent` re-expresses it on
a 0-100 scale.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from app.services.questionnaire import SCALE_MAX, SCALE_MIN

Domain = Literal["intelligence", "personality"]

GENERAL_CATEGORY = "General"
PERCENT_FACTOR = 20


@dataclass(frozen=True)
class Response:
    question_id: str
    value: Any


@dataclass(frozen=True)
class CategoryScore:
    category: str
    mean_value: float
    response_count: int = 1

    @property
    def percent(self) -> float:
        return self.mean_value * PERCENT_FACTOR


CategoryRule = tuple[Callable[[str], bool], str]


def _contains(token: str) -> Callable[[str], bool]:
    def predicate(question_id: str) -> bool:
        return token in question_id

    return predicate


# Evaluated in order; the first matching rule wins.
INTELLIGENCE_RULES: tuple[CategoryRule, ...] = (
    (_contains("linguistic"), "Linguistic"),
    (_contains("logical"), "Logical-Mathematical"),
    (_contains("interpersonal"), "Interpersonal"),
    (_contains("intrapersonal"), "Intrapersonal"),
    (_contains("naturalistic"), "Naturalistic"),
    (_contains("kinesthetic"), "Bodily-Kinesthetic"),
    (_contains("musical"), "Musical"),
    (_contains("spatial"), "Visual-Spatial"),
)

PERSONALITY_RULES: tuple[CategoryRule, ...] = (
    (_contains("mbti"), "MBTI"),
    (_contains("openness"), "Openness"),
    (_contains("conscientiousness"), "Conscientiousness"),
    (_contains("extraversion"), "Extraversion"),
    (_contains("agreeableness"), "Agreeableness"),
    (_contains("autonomy"), "Autonomy"),
    (_contains("competence"), "Competence"),
    (_contains("relatedness"), "Relatedness"),
)

RULES_BY_DOMAIN: dict[str, tuple[CategoryRule, ...]] = {
    "intelligence": INTELLIGENCE_RULES,
    "personality": PERSONALITY_RULES,
}


def categorize(question_id: str, domain: Domain) -> str:
    for predicate, label in RULES_BY_DOMAIN.get(domain, ()):
        if predicate(question_id):
            return label
    return GENERAL_CATEGORY


def aggregate(
    responses: Iterable[Response] | Mapping[str, Any],
    domain: Domain,
) -> dict[str, CategoryScore]:
    """Mean score per category for one domain.

    Non-numeric answers and answers outside the 1-5 scale are skipped;
    categories without any usable answer are left out of the result. This
    never raises on malformed input.
    """
    buckets: dict[str, list[float]] = {}
    for question_id, value in _iter_pairs(responses):
        numeric = _numeric_value(value)
        if numeric is None:
            continue
        buckets.setdefault(categorize(question_id, domain), []).append(numeric)

    return {
        category: CategoryScore(
            category=category,
            mean_value=sum(values) / len(values),
            response_count=len(values),
        )
        for category, values in buckets.items()
    }


def mean_scores(scores: Mapping[str, CategoryScore]) -> dict[str, float]:
    return {category: score.mean_value for category, score in scores.items()}


def top_categories(means: Mapping[str, float], limit: int = 3) -> list[tuple[str, float]]:
    ranked = sorted(means.items(), key=lambda item: item[1], reverse=True)
    return ranked[: max(limit, 0)]


def _iter_pairs(responses: Iterable[Response] | Mapping[str, Any]) -> Iterable[tuple[str, Any]]:
    if isinstance(responses, Mapping):
        items: Iterable[Any] = responses.items()
    else:
        items = responses or ()

    for item in items:
        if isinstance(item, Response):
            question_id, value = item.question_id, item.value
        elif isinstance(item, tuple) and len(item) == 2:
            question_id, value = item
        else:
            continue
        if not isinstance(question_id, str) or not question_id:
            continue
        yield question_id, value


def _numeric_value(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    numeric = float(value)
    if not math.isfinite(numeric) or not SCALE_MIN <= numeric <= SCALE_MAX:
        return None
    return numeric
