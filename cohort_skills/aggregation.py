from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from .models import NormalizedRecord, SkillCount


@dataclass(slots=True)
class SkillAggregate:
    """Cohort-wide counts for one dataset.

    Both tables keep first-seen insertion order, which is what breaks ties in
    ``top_skills``.
    """

    skill_counts: dict[str, int] = field(default_factory=dict)
    department_counts: dict[str, int] = field(default_factory=dict)
    top_skills: list[SkillCount] = field(default_factory=list)

    @property
    def unique_skills(self) -> int:
        return len(self.skill_counts)

    @property
    def departments(self) -> list[str]:
        return list(self.department_counts)

    def to_payload(self) -> dict[str, Any]:
        return {
            "skillCounts": dict(self.skill_counts),
            "departmentCounts": dict(self.department_counts),
            "topSkills": [item.to_payload() for item in self.top_skills],
        }


def rank_skills(skill_counts: dict[str, int], top_n: int) -> list[SkillCount]:
    # sorted() is stable, so equal counts stay in insertion order.
    ranked = sorted(skill_counts.items(), key=lambda item: item[1], reverse=True)
    return [SkillCount(name=name, count=count) for name, count in ranked[: max(0, top_n)]]


def aggregate(records: Iterable[NormalizedRecord], top_n: int = 50) -> SkillAggregate:
    skill_counts: dict[str, int] = {}
    department_counts: dict[str, int] = {}

    for record in records:
        for skill in record.skills:
            skill_counts[skill] = skill_counts.get(skill, 0) + 1
        department_counts[record.department] = department_counts.get(record.department, 0) + 1

    return SkillAggregate(
        skill_counts=skill_counts,
        department_counts=department_counts,
        top_skills=rank_skills(skill_counts, top_n),
    )
