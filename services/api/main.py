from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from cohort_skills.lookup import LookupMissError
from cohort_skills.matching import match_skills, skill_comparison
from cohort_skills.pipeline import evaluate_selection, ingest_rows, score_cohort
from cohort_skills.report import build_ai_summary, report_to_dict
from cohort_skills.runtime import build_config
from cohort_skills.taxonomy import load_taxonomy


app = FastAPI(title="Cohort Skills API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class RowsRequest(BaseModel):
    rows: list[dict[str, Any]] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)


class ReportRequest(RowsRequest):
    # Raw taxonomy output; malformed entries are dropped, not rejected.
    taxonomy: Any = None


class SelectionRequest(ReportRequest):
    student_id: str = Field(min_length=1)
    role_title: str = Field(min_length=1)


class MatchRequest(BaseModel):
    skills: list[str] = Field(default_factory=list)
    required_skills: list[str] = Field(default_factory=list)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/v1/cohorts/summary")
def cohort_summary(request: RowsRequest) -> dict[str, Any]:
    context = ingest_rows(request.rows, config=build_config(request.options))
    return build_ai_summary(context)


@app.post("/v1/cohorts/report")
def cohort_report(request: ReportRequest) -> dict[str, Any]:
    context = ingest_rows(request.rows, config=build_config(request.options))
    report = score_cohort(context, load_taxonomy(request.taxonomy))
    return report_to_dict(report)


@app.post("/v1/cohorts/selection")
def cohort_selection(request: SelectionRequest) -> dict[str, Any]:
    context = ingest_rows(request.rows, config=build_config(request.options))
    try:
        selection = evaluate_selection(
            context,
            load_taxonomy(request.taxonomy),
            request.student_id,
            request.role_title,
        )
    except LookupMissError as exc:
        raise HTTPException(status_code=404, detail=exc.to_payload()) from exc
    return selection.to_payload()


@app.post("/v1/match")
def match(request: MatchRequest) -> dict[str, Any]:
    result = match_skills(request.skills, request.required_skills)
    return {
        **result.to_payload(),
        "matchedCount": result.matched_count,
        "totalRequired": result.total_required,
        "comparison": skill_comparison(request.skills, request.required_skills),
    }
