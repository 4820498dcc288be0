"""cohort_skills package."""

from .config import CohortConfig
from .pipeline import SelectionResult, evaluate_selection, ingest_rows, run_cohort_analysis, score_cohort

__all__ = [
    "CohortConfig",
    "SelectionResult",
    "evaluate_selection",
    "ingest_rows",
    "run_cohort_analysis",
    "score_cohort",
]
