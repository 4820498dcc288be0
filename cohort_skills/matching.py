"""Fuzzy skill matching between a candidate's skills and a role's requirements.

A required skill is satisfied by an exact case-insensitive hit, or failing
that by the first candidate (in the candidate's own order) where one string
is a literal substring of the other. First hit wins; it is not necessarily
the closest candidate.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Sequence

from .models import MatchResult


def _fold(skills: Iterable[str]) -> list[str]:
    folded: dict[str, None] = {}
    for skill in skills:
        text = str(skill).strip().lower()
        if text:
            folded.setdefault(text, None)
    return list(folded)


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def find_satisfying_skill(required: str, candidates: Sequence[str]) -> str | None:
    """Return the folded candidate that satisfies ``required``, if any.

    ``candidates`` must already be folded (lowercased, stripped, unique).
    """
    needle = required.strip().lower()
    if not needle:
        return None
    if needle in candidates:
        return needle
    for candidate in candidates:
        if needle in candidate or candidate in needle:
            return candidate
    return None


def match_skills(
    candidate_skills: Iterable[str],
    required_skills: Sequence[str],
    missing_limit: int | None = None,
) -> MatchResult:
    candidates = _fold(candidate_skills)
    matched = 0
    missing: list[str] = []

    for required in required_skills:
        if find_satisfying_skill(str(required), candidates) is not None:
            matched += 1
        else:
            missing.append(capitalize_first(str(required).strip()))

    total = len(required_skills)
    score = round_half_up(matched / max(1, total) * 100)
    if missing_limit is not None:
        missing = missing[: max(0, missing_limit)]

    return MatchResult(
        match_score=min(100, max(0, score)),
        missing_skills=tuple(missing),
        matched_count=matched,
        total_required=total,
    )


def dedupe_required(required_skills: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for skill in required_skills:
        key = str(skill).strip().lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(str(skill))
    return unique


def bulk_match(
    candidate_skills: Iterable[str],
    required_skills: Sequence[str],
    missing_limit: int = 5,
) -> MatchResult:
    # Upload-time scoring: repeated requirements count once, output is capped.
    return match_skills(candidate_skills, dedupe_required(required_skills), missing_limit=missing_limit)


def skill_comparison(
    candidate_skills: Iterable[str],
    required_skills: Sequence[str],
    limit: int = 6,
) -> list[dict[str, Any]]:
    folded = set(_fold(candidate_skills))
    rows: list[dict[str, Any]] = []
    for required in list(required_skills)[: max(0, limit)]:
        hit = str(required).strip().lower() in folded
        rows.append(
            {
                "subject": str(required),
                "student": 80 if hit else 20,
                "required": 100,
                "fullMark": 100,
            }
        )
    return rows
