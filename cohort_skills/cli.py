from __future__ import annotations

import argparse
import json
from pathlib import Path

from .export import (
    build_profiling_export,
    build_students_export,
    build_top_skills_export,
    output_paths,
    write_dataframe,
    write_json,
)
from .ingest import read_rows
from .lookup import LookupMissError
from .pipeline import evaluate_selection, ingest_rows, score_cohort
from .qa import run_data_quality_checks
from .report import build_ai_summary, report_to_dict
from .runtime import build_config
from .taxonomy import load_taxonomy


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cohort-skills",
        description="Normalize student skill records, rank cohort skills and score students against roles.",
    )
    parser.add_argument("--input", required=True, help="Path to student rows (CSV, XLSX or JSON)")
    parser.add_argument("--output-dir", required=True, help="Directory for generated outputs")
    parser.add_argument("--taxonomy", default=None, help="JSON file with department -> role -> skill mappings")
    parser.add_argument("--top-skills", type=int, default=None)
    parser.add_argument("--bulk-missing-limit", type=int, default=None)
    parser.add_argument("--student", default=None, help="Student id for an on-demand role match")
    parser.add_argument("--role", default=None, help="Role title for an on-demand role match")
    return parser


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    options = {}
    if args.top_skills is not None:
        options["top_skills_limit"] = args.top_skills
    if args.bulk_missing_limit is not None:
        options["bulk_missing_limit"] = args.bulk_missing_limit
    config = build_config(options)

    taxonomy = []
    if args.taxonomy:
        taxonomy = load_taxonomy(Path(args.taxonomy).read_text(encoding="utf-8"))

    def progress(message: str, fraction: float) -> None:
        pct = round(fraction * 100, 1)
        print(f"[{pct:>5}%] {message}")

    rows = read_rows(Path(args.input))
    context = ingest_rows(rows, config=config, progress_fn=progress)
    report = score_cohort(context, taxonomy, progress_fn=progress)
    qa_report = run_data_quality_checks(context, report)

    paths = output_paths(Path(args.output_dir))
    write_json(report_to_dict(report), paths["report"])
    write_json(build_ai_summary(context), paths["ai_summary"])
    write_json(qa_report, paths["qa_report"])
    write_dataframe(build_students_export(report), paths["students"])
    write_dataframe(build_top_skills_export(context.aggregate), paths["top_skills"])
    write_dataframe(build_profiling_export(report), paths["profiling"])

    print("\n=== Cleaning report ===")
    print(json.dumps(report.cleaning_report.to_payload(), indent=2))
    print("\nGenerated files:")
    for key, path in paths.items():
        print(f"- {key}: {path}")

    if args.student and args.role:
        try:
            selection = evaluate_selection(context, taxonomy, args.student, args.role)
        except LookupMissError as exc:
            print(f"\n{exc.kind} not found: {exc.query}")
            if exc.suggestions:
                print("Did you mean: " + ", ".join(exc.suggestions))
            raise SystemExit(2)
        print("\n=== Role match ===")
        print(json.dumps(selection.to_payload(), indent=2))


if __name__ == "__main__":
    main()
