from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class NormalizedRecord:
    """One student after column classification and token cleanup.

    ``skills`` is an ordered set: unique title-cased tokens in the order they
    were first seen in the row.
    """

    id: str
    department: str
    skills: tuple[str, ...] = ()

    @property
    def skill_set(self) -> frozenset[str]:
        return frozenset(self.skills)

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "department": self.department, "skills": list(self.skills)}


@dataclass(slots=True)
class RowOutcome:
    record: NormalizedRecord
    has_keys: bool
    empty_cells: int


@dataclass(frozen=True, slots=True)
class SkillCount:
    name: str
    count: int

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "count": self.count}


@dataclass(frozen=True, slots=True)
class MatchResult:
    match_score: int
    missing_skills: tuple[str, ...] = ()
    matched_count: int = 0
    total_required: int = 0

    def to_payload(self) -> dict[str, Any]:
        return {"matchScore": self.match_score, "missingSkills": list(self.missing_skills)}


@dataclass(frozen=True, slots=True)
class CleaningReport:
    total_rows: int
    valid_rows: int
    missing_values_fixed: int
    unique_skills_found: int
    processing_time_ms: int

    def to_payload(self) -> dict[str, int]:
        return {
            "totalRows": self.total_rows,
            "validRows": self.valid_rows,
            "missingValuesFixed": self.missing_values_fixed,
            "uniqueSkillsFound": self.unique_skills_found,
            "processingTimeMs": self.processing_time_ms,
        }


@dataclass(frozen=True, slots=True)
class StudentProfile:
    id: str
    department: str
    raw_skills: tuple[str, ...]
    match_score: int | None
    missing_skills: tuple[str, ...] = ()
    role_title: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "department": self.department,
            "rawSkills": list(self.raw_skills),
            "matchScore": self.match_score,
            "missingSkills": list(self.missing_skills),
            "roleTitle": self.role_title,
        }


@dataclass(slots=True)
class ProfileRecord:
    stage: str
    seconds: float
    details: dict[str, Any] = field(default_factory=dict)
