from __future__ import annotations

import math
import re
from typing import Any, Mapping

from .config import (
    COLUMN_RULES,
    EMPTY_TEXT_VALUES,
    QUOTE_CHARS,
    SKILL_SEPARATORS,
    CohortConfig,
    ColumnKind,
)
from .models import NormalizedRecord, RowOutcome

_SEPARATOR_RE = re.compile(f"[{re.escape(SKILL_SEPARATORS)}]")
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def is_empty_cell(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return True
    return str(value).strip().lower() in EMPTY_TEXT_VALUES


def cell_text(value: Any) -> str:
    # Spreadsheet readers hand back whole numbers as floats (101 -> 101.0).
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def is_numeric_token(token: str) -> bool:
    return bool(_NUMBER_RE.match(token.strip()))


def title_case_token(token: str) -> str:
    return token[:1].upper() + token[1:].lower()


def split_skill_cell(value: str) -> list[str]:
    tokens: list[str] = []
    for piece in _SEPARATOR_RE.split(value):
        token = piece.strip().strip(QUOTE_CHARS).strip()
        if len(token) <= 1 or is_numeric_token(token):
            continue
        tokens.append(title_case_token(token))
    return tokens


def classify_column(column: str, value: str) -> ColumnKind | None:
    column_lower = str(column).lower()
    for rule in COLUMN_RULES:
        if rule.matches(column_lower, value):
            return rule.kind
    return None


def inspect_row(
    row: Mapping[str, Any],
    positional_index: int,
    config: CohortConfig | None = None,
) -> RowOutcome:
    config = config or CohortConfig()
    student_id = f"{config.student_id_prefix}-{positional_index + 1}"
    department = config.default_department
    skills: dict[str, None] = {}
    empty_cells = 0

    for column, raw_value in row.items():
        if is_empty_cell(raw_value):
            empty_cells += 1
            continue
        value = cell_text(raw_value)
        kind = classify_column(column, value)
        if kind == "identifier":
            student_id = value
        elif kind == "department":
            department = value
        elif kind == "skills":
            for token in split_skill_cell(value):
                skills.setdefault(token, None)

    record = NormalizedRecord(id=student_id, department=department, skills=tuple(skills))
    return RowOutcome(record=record, has_keys=len(row) > 0, empty_cells=empty_cells)


def normalize_row(
    row: Mapping[str, Any],
    positional_index: int,
    config: CohortConfig | None = None,
) -> NormalizedRecord:
    return inspect_row(row, positional_index, config).record
