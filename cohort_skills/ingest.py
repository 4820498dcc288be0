from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

SUPPORTED_SUFFIXES = {".csv", ".xlsx", ".xls", ".json"}


def detect_encoding(path: Path, candidates: Iterable[str] = ("utf-8-sig", "utf-8", "latin-1")) -> str:
    raw = path.read_bytes()[:512_000]
    for encoding in candidates:
        try:
            raw.decode(encoding)
            return encoding
        except UnicodeDecodeError:
            continue
    return "latin-1"


def rows_from_frame(frame: pd.DataFrame) -> list[dict[str, Any]]:
    """Column order is kept; missing cells become ``None``."""
    cleaned = frame.astype(object).where(frame.notna(), None)
    return [
        {str(column): value for column, value in row.items()}
        for row in cleaned.to_dict(orient="records")
    ]


def _rows_from_json(payload: Any) -> list[dict[str, Any]]:
    if isinstance(payload, dict):
        for key in ("rows", "students", "data"):
            if isinstance(payload.get(key), list):
                payload = payload[key]
                break
    if not isinstance(payload, list):
        raise ValueError("JSON input must be a list of row objects")
    return [dict(item) if isinstance(item, dict) else {} for item in payload]


def read_rows(path: Path) -> list[dict[str, Any]]:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported input type {suffix!r}; expected one of {sorted(SUPPORTED_SUFFIXES)}")
    if not path.exists():
        raise ValueError(f"Input file not found: {path}")

    if suffix == ".json":
        with path.open("r", encoding=detect_encoding(path)) as f:
            return _rows_from_json(json.load(f))
    if suffix in {".xlsx", ".xls"}:
        return rows_from_frame(pd.read_excel(path, sheet_name=0, dtype=str))
    return rows_from_frame(
        pd.read_csv(path, encoding=detect_encoding(path), dtype=str, on_bad_lines="skip")
    )
