from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from .aggregation import SkillAggregate
from .report import CohortReport


OUTPUT_FILENAMES = {
    "report": "cohort_report.json",
    "students": "students.csv",
    "top_skills": "top_skills.csv",
    "ai_summary": "ai_summary.json",
    "qa_report": "qa_report.json",
    "profiling": "profiling_summary.csv",
}


def build_students_export(report: CohortReport) -> pd.DataFrame:
    rows: list[dict[str, Any]] = []
    for student in report.students:
        rows.append(
            {
                "student_id": student.id,
                "department": student.department,
                "role_title": student.role_title,
                "match_score": student.match_score,
                "skill_count": len(student.raw_skills),
                "skills": "; ".join(student.raw_skills),
                "missing_skills": "; ".join(student.missing_skills),
            }
        )
    columns = ["student_id", "department", "role_title", "match_score", "skill_count", "skills", "missing_skills"]
    return pd.DataFrame(rows, columns=columns)


def build_top_skills_export(skill_aggregate: SkillAggregate) -> pd.DataFrame:
    rows = [
        {"rank": rank, "skill": item.name, "count": item.count}
        for rank, item in enumerate(skill_aggregate.top_skills, start=1)
    ]
    return pd.DataFrame(rows, columns=["rank", "skill", "count"])


def build_profiling_export(report: CohortReport) -> pd.DataFrame:
    rows = [{"stage": item.stage, "seconds": item.seconds} for item in report.profile_records]
    return pd.DataFrame(rows, columns=["stage", "seconds"])


def write_dataframe(df: pd.DataFrame, path: Path) -> None:
    if df is None:
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)


def write_json(payload: dict[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def output_paths(output_dir: Path) -> dict[str, Path]:
    return {key: output_dir / name for key, name in OUTPUT_FILENAMES.items()}
