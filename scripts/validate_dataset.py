from __future__ import annotations

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    src_str = str(SRC_PATH)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)

from app.aggregations import available_years, list_states
from app.dataset import DatasetUnavailableError, ElderlyRecord, load_records
from app.settings import get_settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sanity-check the elderly-population dataset before serving it."
    )
    parser.add_argument(
        "--path",
        default=None,
        help="Dataset JSON path (default: DATA_ROOT/DATASET_FILENAME from settings).",
    )
    parser.add_argument(
        "--output-json",
        action="store_true",
        help="Emit full JSON report to stdout.",
    )
    return parser


def _record_issues(index: int, record: ElderlyRecord) -> list[dict[str, Any]]:
    issues: list[dict[str, Any]] = []
    if not record.sigla:
        issues.append({"index": index, "issue": "missing_state_code"})
    if record.year is None:
        issues.append({"index": index, "issue": "missing_year", "sigla": record.sigla})
    if record.elder_population < 0 or record.total_population < 0:
        issues.append({"index": index, "issue": "negative_population", "sigla": record.sigla, "year": record.year})
    if record.elder_population > record.total_population:
        issues.append(
            {
                "index": index,
                "issue": "elder_exceeds_total",
                "sigla": record.sigla,
                "year": record.year,
            }
        )
    return issues


def build_report(records: list[ElderlyRecord], path: Path) -> dict[str, Any]:
    issues: list[dict[str, Any]] = []
    for index, record in enumerate(records):
        issues.extend(_record_issues(index, record))
    return {
        "path": str(path),
        "checked_at_utc": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        "records": len(records),
        # list_states always leads with the national code.
        "states": [state["sigla"] for state in list_states(records)][1:],
        "years": available_years(records),
        "issues": issues,
        "valid": not issues,
    }


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    path = Path(args.path) if args.path else get_settings().dataset_path

    try:
        records = load_records(path)
    except DatasetUnavailableError as exc:
        print(f"Dataset validation failed: {exc}")
        return 1

    report = build_report(records, path)
    years = report["years"]
    span = f"{years[0]}-{years[-1]}" if years else "no years"
    print(
        f"Dataset validation: {report['records']} records, {len(report['states'])} states, "
        f"{span}, {len(report['issues'])} issues."
    )
    if args.output_json:
        print(json.dumps(report, ensure_ascii=False, indent=2, default=str))
    return 0 if report["valid"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
