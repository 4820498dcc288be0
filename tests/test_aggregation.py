from __future__ import annotations

from cohort_skills.aggregation import aggregate
from cohort_skills.models import NormalizedRecord


def _records() -> list[NormalizedRecord]:
    return [
        NormalizedRecord(id="S1", department="CS", skills=("Sql", "Python")),
        NormalizedRecord(id="S2", department="IT", skills=("Python", "Sql")),
        NormalizedRecord(id="S3", department="CS", skills=("Java", "Sql", "Python")),
    ]


def test_counts_skills_and_departments() -> None:
    result = aggregate(_records())
    assert result.skill_counts == {"Sql": 3, "Python": 3, "Java": 1}
    assert result.department_counts == {"CS": 2, "IT": 1}
    assert result.unique_skills == 3
    assert result.departments == ["CS", "IT"]


def test_ties_keep_first_seen_order() -> None:
    result = aggregate(_records())
    assert [(item.name, item.count) for item in result.top_skills] == [
        ("Sql", 3),
        ("Python", 3),
        ("Java", 1),
    ]


def test_top_skills_truncated() -> None:
    records = [
        NormalizedRecord(id=f"S{i}", department="General", skills=(f"Skill{i:02d}",))
        for i in range(60)
    ]
    result = aggregate(records)
    assert len(result.top_skills) == 50
    assert result.unique_skills == 60
    assert result.top_skills[0].name == "Skill00"

    assert len(aggregate(records, top_n=5).top_skills) == 5


def test_aggregate_is_deterministic() -> None:
    first = aggregate(_records()).to_payload()
    second = aggregate(_records()).to_payload()
    assert first == second
    assert list(first["topSkills"]) == list(second["topSkills"])


def test_empty_input() -> None:
    result = aggregate([])
    assert result.skill_counts == {}
    assert result.top_skills == []
