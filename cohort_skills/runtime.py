from __future__ import annotations

import os
from dataclasses import asdict, fields
from typing import Any

from .config import CohortConfig

ENV_PREFIX = "COHORT_SKILLS_"

_INT_FIELDS = {
    "top_skills_limit",
    "bulk_missing_limit",
    "comparison_limit",
    "sample_rows",
    "suggestion_limit",
    "suggestion_cutoff",
}


def _int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def env_options() -> dict[str, str]:
    options: dict[str, str] = {}
    for item in fields(CohortConfig):
        raw = os.getenv(f"{ENV_PREFIX}{item.name.upper()}")
        if raw is not None:
            options[item.name] = raw
    return options


def build_config(options: dict[str, Any] | None = None) -> CohortConfig:
    """Defaults, overridden by environment variables, overridden by ``options``."""
    merged: dict[str, Any] = {**env_options(), **(options or {})}
    defaults = asdict(CohortConfig())

    values: dict[str, Any] = {}
    for name, default in defaults.items():
        if name in _INT_FIELDS:
            values[name] = max(0, _int(merged.get(name), default))
        else:
            values[name] = _text(merged.get(name), default)
    return CohortConfig(**values)


def config_to_dict(config: CohortConfig) -> dict[str, Any]:
    return asdict(config)
