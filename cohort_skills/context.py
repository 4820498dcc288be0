from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .aggregation import SkillAggregate
from .config import CohortConfig
from .models import CleaningReport, NormalizedRecord, ProfileRecord


@dataclass(slots=True)
class CohortContext:
    """Everything derived from one uploaded dataset.

    Built once per upload by ``ingest_rows`` and owned by the caller; a new
    upload produces a new context instead of updating this one.
    """

    records: list[NormalizedRecord]
    aggregate: SkillAggregate
    cleaning_report: CleaningReport
    sample: list[dict[str, Any]] = field(default_factory=list)
    config: CohortConfig = field(default_factory=CohortConfig)
    profile_records: list[ProfileRecord] = field(default_factory=list)
