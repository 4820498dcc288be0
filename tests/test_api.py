from __future__ import annotations

from fastapi.testclient import TestClient

from services.api.main import app


ROWS = [
    {"Student ID": "S1", "Dept": "CS", "Skills": "Python, SQL"},
    {"Student ID": "S2", "Dept": "CS", "Skills": "Excel"},
]
TAXONOMY = [
    {
        "department": "CS",
        "possibleRoles": [{"title": "Data Analyst", "requiredSkills": ["Python", "SQL", "Excel"]}],
    }
]


def _client() -> TestClient:
    return TestClient(app)


def test_health() -> None:
    response = _client().get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_summary_endpoint() -> None:
    response = _client().post("/v1/cohorts/summary", json={"rows": ROWS})
    assert response.status_code == 200
    payload = response.json()
    assert payload["report"]["totalRows"] == 2
    assert payload["departments"] == ["CS"]
    assert [s["id"] for s in payload["rawStudents"]] == ["S1", "S2"]


def test_report_endpoint_scores_students() -> None:
    response = _client().post("/v1/cohorts/report", json={"rows": ROWS, "taxonomy": TAXONOMY})
    assert response.status_code == 200
    students = response.json()["students"]
    assert students[0]["matchScore"] == 67
    assert students[0]["missingSkills"] == ["Excel"]
    assert students[1]["matchScore"] == 33


def test_report_endpoint_without_taxonomy() -> None:
    response = _client().post("/v1/cohorts/report", json={"rows": ROWS, "taxonomy": "garbage"})
    assert response.status_code == 200
    assert all(s["matchScore"] is None for s in response.json()["students"])


def test_selection_endpoint_and_miss() -> None:
    client = _client()
    ok = client.post(
        "/v1/cohorts/selection",
        json={"rows": ROWS, "taxonomy": TAXONOMY, "student_id": "S2", "role_title": "Data Analyst"},
    )
    assert ok.status_code == 200
    assert ok.json()["missingSkills"] == ["Python", "SQL"]

    miss = client.post(
        "/v1/cohorts/selection",
        json={"rows": ROWS, "taxonomy": TAXONOMY, "student_id": "S9", "role_title": "Data Analyst"},
    )
    assert miss.status_code == 404
    assert miss.json()["detail"]["kind"] == "student"


def test_match_endpoint() -> None:
    response = _client().post(
        "/v1/match",
        json={"skills": ["react native"], "required_skills": ["React", "Redux"]},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["matchScore"] == 50
    assert payload["missingSkills"] == ["Redux"]
    assert payload["totalRequired"] == 2
