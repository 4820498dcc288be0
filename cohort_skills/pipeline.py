from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Sequence

from .aggregation import aggregate
from .config import CohortConfig
from .context import CohortContext
from .log import get_logger
from .lookup import find_role_or_raise, find_student
from .matching import match_skills, skill_comparison
from .models import CleaningReport, MatchResult, NormalizedRecord, ProfileRecord
from .normalization import inspect_row
from .report import CohortReport, assemble_report
from .taxonomy import DepartmentMapping, RoleRequirement, load_taxonomy

ProgressFn = Callable[[str, float], None] | None

logger = get_logger(__name__)


@dataclass(slots=True)
class SelectionResult:
    student: NormalizedRecord
    role: RoleRequirement
    match: MatchResult
    comparison: list[dict[str, Any]]

    def to_payload(self) -> dict[str, Any]:
        return {
            "studentId": self.student.id,
            "department": self.student.department,
            "roleTitle": self.role.title,
            **self.match.to_payload(),
            "comparison": list(self.comparison),
        }


def _progress(progress_fn: ProgressFn, message: str, fraction: float) -> None:
    if progress_fn:
        progress_fn(message, max(0.0, min(1.0, fraction)))


@contextmanager
def _stage(profile: list[ProfileRecord], name: str, **details: Any) -> Iterator[dict[str, Any]]:
    start = time.perf_counter()
    extra: dict[str, Any] = dict(details)
    try:
        yield extra
    finally:
        elapsed = time.perf_counter() - start
        profile.append(ProfileRecord(stage=name, seconds=round(elapsed, 4), details=extra))
        logger.info("Stage %s finished in %.4fs", name, elapsed)


def ingest_rows(
    rows: Sequence[Mapping[str, Any]],
    config: CohortConfig | None = None,
    progress_fn: ProgressFn = None,
) -> CohortContext:
    config = config or CohortConfig()
    profile_records: list[ProfileRecord] = []
    started = time.perf_counter()

    records: list[NormalizedRecord] = []
    valid_rows = 0
    missing_values_fixed = 0

    _progress(progress_fn, f"Normalizing {len(rows):,} rows", 0.05)
    with _stage(profile_records, "normalize_rows") as details:
        for index, row in enumerate(rows):
            outcome = inspect_row(row, index, config)
            if outcome.has_keys:
                valid_rows += 1
            missing_values_fixed += outcome.empty_cells
            records.append(outcome.record)
        details["rows"] = len(records)

    _progress(progress_fn, "Aggregating skill frequencies", 0.6)
    with _stage(profile_records, "aggregate_skills") as details:
        skill_aggregate = aggregate(records, top_n=config.top_skills_limit)
        details["unique_skills"] = skill_aggregate.unique_skills

    cleaning_report = CleaningReport(
        total_rows=len(rows),
        valid_rows=valid_rows,
        missing_values_fixed=missing_values_fixed,
        unique_skills_found=skill_aggregate.unique_skills,
        processing_time_ms=round((time.perf_counter() - started) * 1000),
    )
    _progress(progress_fn, "Ingestion completed", 1.0)

    return CohortContext(
        records=records,
        aggregate=skill_aggregate,
        cleaning_report=cleaning_report,
        sample=[dict(row) for row in rows[: max(0, config.sample_rows)]],
        config=config,
        profile_records=profile_records,
    )


def run_cohort_analysis(
    rows: Sequence[Mapping[str, Any]],
    taxonomy: Any = None,
    config: CohortConfig | None = None,
    progress_fn: ProgressFn = None,
) -> CohortReport:
    context = ingest_rows(
        rows,
        config=config,
        progress_fn=lambda message, fraction: _progress(progress_fn, message, fraction * 0.7),
    )
    return score_cohort(context, taxonomy, progress_fn=progress_fn)


def score_cohort(
    context: CohortContext,
    taxonomy: Any = None,
    progress_fn: ProgressFn = None,
) -> CohortReport:
    mappings = taxonomy if _is_loaded(taxonomy) else load_taxonomy(taxonomy)
    if not mappings:
        logger.warning("No usable department mappings; student match scores are omitted")

    _progress(progress_fn, "Scoring students against default roles", 0.75)
    profile_records = list(context.profile_records)
    with _stage(profile_records, "score_students") as details:
        report = assemble_report(context, mappings)
        details["scored"] = report.scored
    report.profile_records = profile_records

    _progress(progress_fn, "Report completed", 1.0)
    return report


def _is_loaded(taxonomy: Any) -> bool:
    return isinstance(taxonomy, list) and all(isinstance(item, DepartmentMapping) for item in taxonomy)


def evaluate_selection(
    context: CohortContext,
    taxonomy: list[DepartmentMapping],
    student_id: str,
    role_title: str,
) -> SelectionResult:
    """Score one (student, role) pair on demand.

    Reads the ingested records and taxonomy without changing them; the full
    missing list is returned, unlike the capped upload-time profiles.
    """
    config = context.config
    student = find_student(
        context.records,
        student_id,
        limit=config.suggestion_limit,
        cutoff=config.suggestion_cutoff,
    )
    role = find_role_or_raise(
        taxonomy,
        role_title,
        limit=config.suggestion_limit,
        cutoff=config.suggestion_cutoff,
    )
    return SelectionResult(
        student=student,
        role=role,
        match=match_skills(student.skills, role.required_skills),
        comparison=skill_comparison(student.skills, role.required_skills, limit=config.comparison_limit),
    )
