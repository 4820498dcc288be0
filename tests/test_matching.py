from __future__ import annotations

import itertools

from cohort_skills.matching import (
    bulk_match,
    find_satisfying_skill,
    match_skills,
    round_half_up,
    skill_comparison,
)


def test_exact_match_scenario() -> None:
    result = match_skills({"Python", "SQL"}, ["Python", "SQL", "Java"])
    assert result.match_score == 67
    assert result.missing_skills == ("Java",)
    assert result.matched_count == 2
    assert result.total_required == 3


def test_zero_requirements_score_zero() -> None:
    result = match_skills(["Python"], [])
    assert result.match_score == 0
    assert result.missing_skills == ()


def test_empty_candidates_miss_everything() -> None:
    result = match_skills([], ["Python", "sql"])
    assert result.match_score == 0
    assert result.missing_skills == ("Python", "Sql")


def test_substring_containment_counts() -> None:
    assert match_skills(["react native"], ["React"]).match_score == 100
    assert match_skills(["Excel"], ["Advanced Excel"]).match_score == 100


def test_non_substring_abbreviation_does_not_count() -> None:
    result = match_skills(["javascript"], ["JS"])
    assert result.match_score == 0
    assert result.missing_skills == ("JS",)


def test_exact_hit_preferred_then_first_in_candidate_order() -> None:
    assert find_satisfying_skill("Java", ["javascript", "java"]) == "java"
    assert find_satisfying_skill("Java", ["javascript", "java script"]) == "javascript"
    assert find_satisfying_skill("Rust", ["python"]) is None


def test_blank_candidates_never_satisfy() -> None:
    assert match_skills(["", "  "], ["Python"]).match_score == 0


def test_missing_keeps_required_order_and_case() -> None:
    result = match_skills(["python"], ["docker", "Python", "AWS", "kubernetes"])
    assert result.missing_skills == ("Docker", "AWS", "Kubernetes")
    assert result.match_score == 25


def test_missing_limit_caps_output_not_score() -> None:
    required = ["A1", "B2", "C3", "D4", "E5", "F6", "G7"]
    capped = match_skills([], required, missing_limit=5)
    assert capped.missing_skills == ("A1", "B2", "C3", "D4", "E5")
    assert capped.total_required == 7
    assert len(match_skills([], required).missing_skills) == 7


def test_bulk_match_dedupes_requirements_and_caps() -> None:
    result = bulk_match(["Python"], ["Python", "python", "SQL"])
    assert result.total_required == 2
    assert result.match_score == 50
    assert result.missing_skills == ("SQL",)

    adhoc = match_skills(["Python"], ["Python", "python", "SQL"])
    assert adhoc.total_required == 3
    assert adhoc.match_score == 67


def test_round_half_up() -> None:
    assert round_half_up(12.5) == 13
    assert round_half_up(66.66) == 67
    assert round_half_up(0.4) == 0
    assert match_skills(["a1"], ["a1", "b2", "c3", "d4", "e5", "f6", "g7", "h8"]).match_score == 13


def test_score_always_within_bounds() -> None:
    pool = ["python", "sql", "java", "react native", "", "go"]
    for size_a, size_b in itertools.product(range(4), range(4)):
        candidates = pool[:size_a]
        required = pool[-size_b:] if size_b else []
        score = match_skills(candidates, required).match_score
        assert 0 <= score <= 100


def test_skill_comparison_rows() -> None:
    rows = skill_comparison(["Python"], ["python", "SQL"], limit=6)
    assert rows == [
        {"subject": "python", "student": 80, "required": 100, "fullMark": 100},
        {"subject": "SQL", "student": 20, "required": 100, "fullMark": 100},
    ]
    assert len(skill_comparison([], [f"s{i}" for i in range(10)])) == 6
