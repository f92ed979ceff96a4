from __future__ import annotations

import json
from typing import Any

EXPLANATION_SYSTEM_PROMPT = "\n".join(
    [
        "You are a concise, supportive career guidance assistant.",
        "Return ONLY valid JSON (no markdown) with this exact shape:",
        "{",
        '  "executiveSummary": string,',
        '  "intelligencesExplained": Record<string,string>,',
        '  "personalityExplained": Record<string,string>,',
        '  "careersExplained": Record<string,{ "rationale": string[], "skillGaps": string[] }>',
        "}",
        "Guidelines:",
        "- Keep language plain and encouraging.",
        "- Be specific and practical.",
        "- For intelligences/personality, use the EXACT keys provided in input.",
        "- For careers, use the EXACT career titles provided in input as keys.",
        "- Give exactly 3 concise bullet points for rationale and exactly 3 for skill gaps.",
        "- Do not include sources or external links.",
        "- No duplication across sections.",
    ]
)


def build_explanation_system_prompt() -> str:
    return EXPLANATION_SYSTEM_PROMPT


def build_explanation_user_prompt(*, prompt_version: str, payload: dict[str, Any]) -> str:
    body = {"prompt_version": prompt_version, **payload}
    return (
        "Generate structured explanations for this user profile. Use the exact keys as provided.\n"
        + json.dumps(body, ensure_ascii=True)
    )
