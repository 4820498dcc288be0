from __future__ import annotations

from typing import Any

from .context import CohortContext
from .normalization import is_numeric_token
from .report import CohortReport



def _check_tokens_clean(context: CohortContext) -> tuple[bool, str]:
    bad: list[str] = []
    for record in context.records:
        for skill in record.skills:
            if len(skill.strip()) <= 1 or is_numeric_token(skill):
                bad.append(skill)
    if bad:
        return False, f"found {len(bad)} blank/short/numeric skill tokens (e.g. {bad[0]!r})"
    return True, "ok"



def _check_frequency_consistency(context: CohortContext) -> tuple[bool, str]:
    expected: dict[str, int] = {}
    for record in context.records:
        for skill in set(record.skills):
            expected[skill] = expected.get(skill, 0) + 1
    if expected != context.aggregate.skill_counts:
        drift = sorted(set(expected.items()) ^ set(context.aggregate.skill_counts.items()))
        return False, f"skill counts disagree with records for {len(drift)} entries"
    if sum(context.aggregate.department_counts.values()) != len(context.records):
        return False, "department counts do not sum to record count"
    return True, "ok"



def _check_score_bounds(report: CohortReport, missing_limit: int) -> tuple[bool, str]:
    for student in report.students:
        if student.match_score is not None and not 0 <= student.match_score <= 100:
            return False, f"match score out of range for student_id={student.id}"
        if len(student.missing_skills) > missing_limit:
            return False, f"missing skills over limit for student_id={student.id}"
    return True, "ok"



def run_data_quality_checks(context: CohortContext, report: CohortReport | None = None) -> dict[str, Any]:
    checks = {
        "skill_tokens_clean": _check_tokens_clean(context),
        "frequency_table_consistent": _check_frequency_consistency(context),
    }
    if report is not None:
        checks["student_scores_bounded"] = _check_score_bounds(report, context.config.bulk_missing_limit)

    details = {
        key: {"passed": passed, "message": message}
        for key, (passed, message) in checks.items()
    }
    all_passed = all(item["passed"] for item in details.values())

    return {
        "all_passed": all_passed,
        "checks": details,
    }
