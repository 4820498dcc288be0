from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable

from .context import CohortContext
from .matching import bulk_match
from .models import CleaningReport, NormalizedRecord, ProfileRecord, SkillCount, StudentProfile
from .taxonomy import DepartmentMapping, default_role


@dataclass(slots=True)
class CohortReport:
    cleaning_report: CleaningReport
    top_skills: list[SkillCount]
    department_counts: dict[str, int]
    students: list[StudentProfile]
    taxonomy: list[DepartmentMapping] = field(default_factory=list)
    profile_records: list[ProfileRecord] = field(default_factory=list)

    @property
    def scored(self) -> bool:
        return any(student.match_score is not None for student in self.students)


def json_safe_row(row: dict[str, Any]) -> dict[str, Any]:
    clean: dict[str, Any] = {}
    for key, value in row.items():
        if isinstance(value, float) and math.isnan(value):
            value = None
        clean[str(key)] = value
    return clean


def build_student_profiles(
    records: Iterable[NormalizedRecord],
    taxonomy: list[DepartmentMapping],
    missing_limit: int = 5,
) -> list[StudentProfile]:
    profiles: list[StudentProfile] = []
    for record in records:
        role = default_role(taxonomy, record.department)
        if role is None:
            profiles.append(
                StudentProfile(
                    id=record.id,
                    department=record.department,
                    raw_skills=record.skills,
                    match_score=None,
                )
            )
            continue

        result = bulk_match(record.skills, role.required_skills, missing_limit=missing_limit)
        profiles.append(
            StudentProfile(
                id=record.id,
                department=record.department,
                raw_skills=record.skills,
                match_score=result.match_score,
                missing_skills=result.missing_skills,
                role_title=role.title,
            )
        )
    return profiles


def build_ai_summary(context: CohortContext) -> dict[str, Any]:
    """Payload handed to the taxonomy inference service."""
    return {
        "report": context.cleaning_report.to_payload(),
        "topSkills": [item.to_payload() for item in context.aggregate.top_skills],
        "departments": context.aggregate.departments,
        "rawStudents": [record.to_payload() for record in context.records],
        "sample": [json_safe_row(row) for row in context.sample],
    }


def assemble_report(context: CohortContext, taxonomy: list[DepartmentMapping]) -> CohortReport:
    students = build_student_profiles(
        context.records,
        taxonomy,
        missing_limit=context.config.bulk_missing_limit,
    )
    return CohortReport(
        cleaning_report=context.cleaning_report,
        top_skills=list(context.aggregate.top_skills),
        department_counts=dict(context.aggregate.department_counts),
        students=students,
        taxonomy=list(taxonomy),
    )


def report_to_dict(report: CohortReport) -> dict[str, Any]:
    return {
        "cleaningReport": report.cleaning_report.to_payload(),
        "topSkills": [item.to_payload() for item in report.top_skills],
        "departmentCounts": dict(report.department_counts),
        "departmentMappings": [mapping.to_payload() for mapping in report.taxonomy],
        "students": [student.to_payload() for student in report.students],
    }
