"""Natural-language explanations for an assessment result.

The primary path asks the configured LLM for an explanation bundle. Any failure
(client disabled, transport error, bad status, unusable payload) resolves to a
deterministic template bundle of the same shape, so callers always get a
complete result.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from app.services.llm.client import LLMClientError
from app.services.llm.pii import redact_pii
from app.services.llm.prompts import build_explanation_system_prompt, build_explanation_user_prompt
from app.services.llm.schemas import LLMExplanationBundle
from app.services.matcher import CareerMatch

logger = logging.getLogger(__name__)

EXPLAINED_CAREER_LIMIT = 5
BULLETS_PER_CAREER = 3
HIGH_TRAIT_THRESHOLD = 4.0
MODERATE_TRAIT_THRESHOLD = 3.0

INTELLIGENCE_EXPLANATIONS: dict[str, str] = {
    "Linguistic": (
        "You think in words and express ideas clearly, which helps in writing, teaching "
        "and any role where explaining things well matters."
    ),
    "Logical-Mathematical": (
        "You enjoy reasoning through problems, spotting patterns and working with numbers, "
        "a strong base for analytical and technical work."
    ),
    "Interpersonal": (
        "You read people well and work naturally with others, which suits collaborative, "
        "people-facing roles."
    ),
    "Intrapersonal": (
        "You know your own strengths and goals and can work independently with focus "
        "and self-direction."
    ),
    "Naturalistic": (
        "You notice patterns in the natural world and care about the environment, "
        "useful in science, sustainability and field work."
    ),
    "Bodily-Kinesthetic": (
        "You learn by doing and are comfortable with hands-on, physical or practical tasks."
    ),
    "Musical": (
        "You are sensitive to rhythm, sound and pattern, which supports creative and "
        "performance-oriented work."
    ),
    "Visual-Spatial": (
        "You think in images and layouts, a good fit for design, visual communication "
        "and planning spaces."
    ),
}

PERSONALITY_EXPLANATIONS: dict[str, dict[str, str]] = {
    "Openness": {
        "high": "You are curious and open to new ideas, which fits creative and fast-changing fields.",
        "moderate": "You balance curiosity with practicality and adapt to new ideas when they make sense.",
        "lower": "You prefer familiar, proven approaches and bring stability to your work.",
    },
    "Conscientiousness": {
        "high": "You are organized and reliable and follow through on what you start.",
        "moderate": "You are generally dependable while keeping some flexibility in how you work.",
        "lower": "You prefer flexible, spontaneous ways of working over strict structure.",
    },
    "Extraversion": {
        "high": "You gain energy from people and social settings and are comfortable taking the floor.",
        "moderate": "You are comfortable both in groups and working on your own.",
        "lower": "You do your best work in quieter, focused settings.",
    },
    "Agreeableness": {
        "high": "You are cooperative and considerate, which builds trust within teams.",
        "moderate": "You balance cooperation with standing up for your own views.",
        "lower": "You are direct and comfortable with healthy competition and debate.",
    },
    "Autonomy": {
        "high": "You value freedom in how you approach your work and thrive with ownership.",
        "moderate": "You like some independence but are also comfortable with guidance.",
        "lower": "You appreciate clear direction and well-defined expectations.",
    },
    "Competence": {
        "high": "You feel capable and effective, a good base for taking on challenging goals.",
        "moderate": "You feel reasonably confident and can grow further with practice and feedback.",
        "lower": "Building small wins and new skills will help your confidence grow.",
    },
    "Relatedness": {
        "high": "Feeling connected to people matters to you, so supportive teams help you thrive.",
        "moderate": "You value connection while still working well independently.",
        "lower": "You are self-reliant and comfortable working with some distance from others.",
    },
    "MBTI": {
        "high": "Your preferences lean clearly in one direction, giving you a distinct working style.",
        "moderate": "Your preferences are fairly balanced, so you can adapt to different styles.",
        "lower": "Your preferences lean toward the opposite pole of these statements.",
    },
}

FALLBACK_SKILL_GAPS: tuple[str, ...] = (
    "Gain hands-on experience through projects, internships or volunteering.",
    "Deepen the technical knowledge specific to this field.",
    "Build a professional network and find a mentor in the industry.",
)


@dataclass
class CareerExplanation:
    rationale: list[str] = field(default_factory=list)
    skill_gaps: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return {"rationale": list(self.rationale), "skillGaps": list(self.skill_gaps)}


@dataclass
class ExplanationBundle:
    executive_summary: str
    intelligences_explained: dict[str, str] = field(default_factory=dict)
    personality_explained: dict[str, str] = field(default_factory=dict)
    careers_explained: dict[str, CareerExplanation] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "executiveSummary": self.executive_summary,
            "intelligencesExplained": dict(self.intelligences_explained),
            "personalityExplained": dict(self.personality_explained),
            "careersExplained": {title: item.to_dict() for title, item in self.careers_explained.items()},
        }


@dataclass(frozen=True)
class ExplanationOutcome:
    status: Literal["ok", "fallback"]
    bundle: ExplanationBundle
    reason: str | None = None


def explain(
    top_intelligences: Sequence[tuple[str, float]],
    personality_insights: Mapping[str, float],
    careers: Sequence[CareerMatch],
    user_context: str | None = None,
    *,
    client: Any,
    prompt_version: str = "v1",
) -> ExplanationOutcome:
    top = _normalize_top(top_intelligences)
    traits = dict(personality_insights or {})
    explained = list(careers or [])[:EXPLAINED_CAREER_LIMIT]
    fallback = build_fallback_bundle(top, traits, explained)

    if client is None or not getattr(client, "enabled", False):
        return _fallback_outcome(fallback, "LLM disabled or missing provider configuration")

    payload = build_request_payload(top, traits, explained, user_context)
    try:
        raw = client.generate_json(
            build_explanation_system_prompt(),
            build_explanation_user_prompt(prompt_version=prompt_version, payload=payload),
        )
        parsed = LLMExplanationBundle.model_validate(raw)
    except (LLMClientError, ValueError) as exc:
        return _fallback_outcome(fallback, str(exc) or exc.__class__.__name__)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected explanation client failure")
        return _fallback_outcome(fallback, str(exc) or exc.__class__.__name__)

    return ExplanationOutcome(status="ok", bundle=_normalize_bundle(parsed, fallback))


async def explain_with_deadline(
    top_intelligences: Sequence[tuple[str, float]],
    personality_insights: Mapping[str, float],
    careers: Sequence[CareerMatch],
    user_context: str | None = None,
    *,
    client: Any,
    deadline_seconds: float,
    prompt_version: str = "v1",
) -> ExplanationOutcome:
    """Run `explain` off the event loop, giving up on the remote call at the deadline.

    On timeout the template bundle is returned right away; the abandoned call
    is left to finish in its worker thread and its result is discarded.
    """
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(
                explain,
                top_intelligences,
                personality_insights,
                careers,
                user_context,
                client=client,
                prompt_version=prompt_version,
            ),
            timeout=deadline_seconds,
        )
    except asyncio.TimeoutError:
        fallback = build_fallback_bundle(
            _normalize_top(top_intelligences),
            dict(personality_insights or {}),
            list(careers or [])[:EXPLAINED_CAREER_LIMIT],
        )
        return _fallback_outcome(fallback, f"explanation deadline of {deadline_seconds:g}s exceeded")


def build_request_payload(
    top_intelligences: Sequence[tuple[str, float]],
    personality_insights: Mapping[str, float],
    careers: Sequence[CareerMatch],
    user_context: str | None = None,
) -> dict[str, Any]:
    return {
        "topIntelligences": [{"type": name, "score": score} for name, score in top_intelligences],
        "personalityInsights": dict(personality_insights),
        "careers": [
            {
                "title": career.title,
                "matchPercentage": career.match_percentage,
                "matchFactors": list(career.match_factors),
                "category": career.category,
            }
            for career in careers
        ],
        "userContext": redact_pii(user_context) or None,
    }


def build_fallback_bundle(
    top_intelligences: Sequence[tuple[str, float]],
    personality_insights: Mapping[str, float],
    careers: Sequence[CareerMatch],
) -> ExplanationBundle:
    top = _normalize_top(top_intelligences)
    explained = list(careers or [])[:EXPLAINED_CAREER_LIMIT]

    top_type = top[0][0] if top else None
    top_career = explained[0].title if explained else None

    return ExplanationBundle(
        executive_summary=_fallback_summary(top_type, top_career),
        intelligences_explained={name: explain_intelligence(name) for name, _score in top},
        personality_explained={
            trait: explain_personality(trait, score) for trait, score in (personality_insights or {}).items()
        },
        careers_explained={
            career.title: CareerExplanation(
                rationale=_fallback_rationale(career),
                skill_gaps=list(FALLBACK_SKILL_GAPS),
            )
            for career in explained
        },
    )


def explain_intelligence(name: str) -> str:
    text = INTELLIGENCE_EXPLANATIONS.get(name)
    if text:
        return text
    return f"{name} is one of your notable strengths and can shape the kind of work you find rewarding."


def explain_personality(trait: str, score: float) -> str:
    table = PERSONALITY_EXPLANATIONS.get(trait)
    if table:
        return table[trait_level(score)]
    return f"Your {trait} score of {float(score):.1f}/5 is part of what makes your working style your own."


def trait_level(score: float) -> str:
    if score >= HIGH_TRAIT_THRESHOLD:
        return "high"
    if score >= MODERATE_TRAIT_THRESHOLD:
        return "moderate"
    return "lower"


def _fallback_summary(top_type: str | None, top_career: str | None) -> str:
    if top_type and top_career:
        return (
            f"Your strongest area is {top_type} intelligence, and {top_career} stands out as your "
            "closest career match. The sections below show how your strengths and personality "
            "connect to the careers recommended for you."
        )
    if top_type:
        return (
            f"Your strongest area is {top_type} intelligence. The sections below show how your "
            "strengths and personality shape the kind of work that may suit you."
        )
    if top_career:
        return (
            f"{top_career} stands out as your closest career match. The sections below explain "
            "what makes it a good fit."
        )
    return "Here is a concise summary of your strengths and potential career fit."


def _fallback_rationale(career: CareerMatch) -> list[str]:
    factors = [factor for factor in career.match_factors if factor]
    if factors:
        first = f"Builds on your {' and '.join(factors)} strengths."
    else:
        first = "Draws on a broad mix of your strengths."
    return [
        first,
        f"Your responses show a {career.match_percentage}% match with this role.",
        f"Suits people who want to work in the {career.category} field.",
    ]


def _normalize_bundle(parsed: LLMExplanationBundle, fallback: ExplanationBundle) -> ExplanationBundle:
    """Project the model output onto the fallback's keys and list sizes."""
    careers: dict[str, CareerExplanation] = {}
    for title, default in fallback.careers_explained.items():
        remote = parsed.careers_explained.get(title)
        careers[title] = CareerExplanation(
            rationale=_exactly(remote.rationale if remote else [], default.rationale),
            skill_gaps=_exactly(remote.skill_gaps if remote else [], default.skill_gaps),
        )

    return ExplanationBundle(
        executive_summary=_clean_text(parsed.executive_summary) or fallback.executive_summary,
        intelligences_explained={
            key: _clean_text(parsed.intelligences_explained.get(key)) or default
            for key, default in fallback.intelligences_explained.items()
        },
        personality_explained={
            key: _clean_text(parsed.personality_explained.get(key)) or default
            for key, default in fallback.personality_explained.items()
        },
        careers_explained=careers,
    )


def _exactly(primary: Sequence[Any], filler: Sequence[str], size: int = BULLETS_PER_CAREER) -> list[str]:
    out: list[str] = []
    seen: set[str] = set()
    for value in list(primary) + list(filler):
        cleaned = _clean_text(value)
        if not cleaned or cleaned.lower() in seen:
            continue
        seen.add(cleaned.lower())
        out.append(cleaned)
        if len(out) == size:
            break
    return out


def _clean_text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return " ".join(value.split())


def _normalize_top(top_intelligences: Sequence[Any] | None) -> list[tuple[str, float]]:
    out: list[tuple[str, float]] = []
    for item in top_intelligences or []:
        if isinstance(item, (tuple, list)) and len(item) == 2:
            out.append((str(item[0]), float(item[1])))
    return out


def _fallback_outcome(bundle: ExplanationBundle, reason: str) -> ExplanationOutcome:
    logger.warning("Using template explanations: %s", reason)
    return ExplanationOutcome(status="fallback", bundle=bundle, reason=reason)
