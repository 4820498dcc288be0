from __future__ import annotations

from dataclasses import replace

from cohort_skills.aggregation import SkillAggregate
from cohort_skills.models import NormalizedRecord
from cohort_skills.pipeline import ingest_rows, score_cohort
from cohort_skills.qa import run_data_quality_checks


ROWS = [
    {"ID": "S1", "Dept": "CS", "Skills": "Python; SQL"},
    {"ID": "S2", "Dept": "CS", "Skills": "Python"},
]


def test_data_quality_checks_pass() -> None:
    context = ingest_rows(ROWS)
    report = score_cohort(
        context,
        [{"department": "CS", "possibleRoles": [{"title": "Dev", "requiredSkills": ["Go", "Rust"]}]}],
    )
    qa_report = run_data_quality_checks(context, report)
    assert qa_report["all_passed"] is True
    assert set(qa_report["checks"]) == {
        "skill_tokens_clean",
        "frequency_table_consistent",
        "student_scores_bounded",
    }



def test_data_quality_checks_flag_drift() -> None:
    context = ingest_rows(ROWS)
    context.aggregate = SkillAggregate(
        skill_counts={"Python": 1, "Sql": 1},
        department_counts={"CS": 2},
    )
    context.records.append(replace(context.records[0], id="S3", skills=("7",)))

    qa_report = run_data_quality_checks(context)
    assert qa_report["all_passed"] is False
    assert qa_report["checks"]["frequency_table_consistent"]["passed"] is False
    assert qa_report["checks"]["skill_tokens_clean"]["passed"] is False
    assert isinstance(context.records[-1], NormalizedRecord)
