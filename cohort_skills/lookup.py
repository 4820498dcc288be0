from __future__ import annotations

from rapidfuzz import fuzz, process

from .log import get_logger
from .models import NormalizedRecord
from .taxonomy import DepartmentMapping, RoleRequirement, find_role, role_titles

logger = get_logger(__name__)


class LookupMissError(KeyError):
    def __init__(self, kind: str, query: str, suggestions: list[str]) -> None:
        super().__init__(f"{kind} not found: {query}")
        self.kind = kind
        self.query = query
        self.suggestions = suggestions

    def to_payload(self) -> dict[str, object]:
        return {"kind": self.kind, "query": self.query, "suggestions": list(self.suggestions)}


def suggest(query: str, choices: list[str], *, limit: int = 5, cutoff: int = 60) -> list[str]:
    if not query or not choices:
        return []
    hits = process.extract(
        query,
        choices,
        scorer=fuzz.WRatio,
        limit=max(1, limit),
        score_cutoff=cutoff,
    )
    return [choice for choice, _score, _idx in hits]


def find_student(
    records: list[NormalizedRecord],
    student_id: str,
    *,
    limit: int = 5,
    cutoff: int = 60,
) -> NormalizedRecord:
    # Duplicate ids are possible in raw data; the first row wins.
    for record in records:
        if record.id == student_id:
            return record
    suggestions = suggest(student_id, list(dict.fromkeys(r.id for r in records)), limit=limit, cutoff=cutoff)
    logger.debug("Student %r not found; suggestions=%s", student_id, suggestions)
    raise LookupMissError("student", student_id, suggestions)


def find_role_or_raise(
    taxonomy: list[DepartmentMapping],
    title: str,
    *,
    limit: int = 5,
    cutoff: int = 60,
) -> RoleRequirement:
    role = find_role(taxonomy, title)
    if role is not None:
        return role
    suggestions = suggest(title, role_titles(taxonomy), limit=limit, cutoff=cutoff)
    logger.debug("Role %r not found; suggestions=%s", title, suggestions)
    raise LookupMissError("role", title, suggestions)
