from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ColumnKind = Literal["identifier", "department", "skills"]


@dataclass(slots=True)
class CohortConfig:
    top_skills_limit: int = 50
    bulk_missing_limit: int = 5
    comparison_limit: int = 6
    sample_rows: int = 5
    default_department: str = "General"
    student_id_prefix: str = "Student"

    # Close-match suggestions for student/role lookups.
    suggestion_limit: int = 5
    suggestion_cutoff: int = 60


@dataclass(frozen=True, slots=True)
class ColumnRule:
    kind: ColumnKind
    any_of: tuple[str, ...] = ()
    requires: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    needs_value: bool = False

    def matches(self, column_lower: str, value: str) -> bool:
        if self.any_of and not any(token in column_lower for token in self.any_of):
            return False
        if any(token not in column_lower for token in self.requires):
            return False
        if any(token in column_lower for token in self.excludes):
            return False
        if self.needs_value and len(value) <= 1:
            return False
        return True


# Evaluated top-down; the first rule that matches a column decides its kind.
COLUMN_RULES: tuple[ColumnRule, ...] = (
    ColumnRule(kind="identifier", any_of=("id", "roll")),
    ColumnRule(kind="identifier", requires=("student",), excludes=("name",)),
    ColumnRule(kind="department", any_of=("dept", "branch", "program")),
    ColumnRule(kind="skills", excludes=("name",), needs_value=True),
)

SKILL_SEPARATORS = ",;"
QUOTE_CHARS = "'\""

EMPTY_TEXT_VALUES = {"", "nan", "none", "null"}
