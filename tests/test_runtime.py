from __future__ import annotations

from cohort_skills.runtime import build_config, config_to_dict


def test_defaults() -> None:
    config = build_config()
    assert config.top_skills_limit == 50
    assert config.bulk_missing_limit == 5
    assert config.default_department == "General"


def test_env_then_options_override(monkeypatch) -> None:
    monkeypatch.setenv("COHORT_SKILLS_BULK_MISSING_LIMIT", "3")
    monkeypatch.setenv("COHORT_SKILLS_DEFAULT_DEPARTMENT", "Unassigned")
    monkeypatch.setenv("COHORT_SKILLS_TOP_SKILLS_LIMIT", "20")

    config = build_config({"top_skills_limit": "10"})
    assert config.bulk_missing_limit == 3
    assert config.default_department == "Unassigned"
    assert config.top_skills_limit == 10


def test_bad_values_fall_back() -> None:
    config = build_config({"top_skills_limit": "lots", "sample_rows": -4, "student_id_prefix": "  "})
    assert config.top_skills_limit == 50
    assert config.sample_rows == 0
    assert config.student_id_prefix == "Student"
    assert config_to_dict(config)["suggestion_cutoff"] == 60
