"""
Lightweight regression checks for the selection tracker.

Each case replays a list of UI selection actions against the sample catalog
and checks the derived counts and the submission payload.

Usage:
    python3 -m eval.run_eval                     # run every case in eval/cases
    python3 -m eval.run_eval --case foo          # run just foo.json
    python3 -m eval.run_eval --verbose           # echo extra diagnostics
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from seo_geo_review.loaders import load_sample_products  # noqa
from seo_geo_review.tracker import SelectionTracker, replay  # noqa

CASES_DIR = Path(__file__).resolve().parent / "cases"


def _load_case(path: Path) -> Dict[str, object]:
    with path.open() as f:
        data = json.load(f)
    data.setdefault("name", path.stem)
    return data


def _evaluate_case(case: Dict[str, object]) -> tuple[List[str], Dict[str, object]]:
    """Replay the case's actions and collect human-friendly errors."""
    errors: List[str] = []
    tracker = SelectionTracker(load_sample_products(case.get("data_path")))
    try:
        replay(tracker, case.get("actions") or [])
    except (KeyError, ValueError) as exc:
        errors.append(f"replay error: {exc}")
        return errors, {}

    payload = tracker.build_submission().to_dict()
    entries = {p["id"]: p for p in payload["products"]}
    info: Dict[str, object] = {
        "counts": {p.id: tracker.completed_count(p.id) for p in tracker.products},
        "submission": payload,
    }
    expectations: Dict[str, object] = case.get("expectations", {})

    for pid, want in (expectations.get("completed_count") or {}).items():
        got = tracker.completed_count(pid)
        if got != want:
            errors.append(f"{pid}: completed_count {got} != {want}")

    for pid, want in (expectations.get("submission") or {}).items():
        entry = entries.get(pid)
        if entry is None:
            errors.append(f"{pid}: missing from submission")
            continue
        key = want.get("description_key")
        if key is not None and tracker.description_choice_key(pid) != key:
            errors.append(f"{pid}: description is {tracker.description_choice_key(pid)!r}, expected {key!r}")
        for field in ("selectedDescription", "customDescription"):
            if field in want and entry.get(field) != want[field]:
                errors.append(f"{pid}: {field} {entry.get(field)!r} != {want[field]!r}")
        for field in ("todos", "completedItems"):
            if field in want and sorted(entry.get(field) or []) != sorted(want[field]):
                errors.append(f"{pid}: {field} {entry.get(field)} != {want[field]}")

    return errors, info


def _print_debug(info: Dict[str, object]) -> None:
    if not info:
        return
    print("    counts:", info.get("counts"))
    for entry in (info.get("submission") or {}).get("products", []):
        print(f"      {entry['id']}: todos={entry['todos']} completed={entry['completedItems']}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Replay selection cases for the SEO/GEO review.")
    parser.add_argument(
        "--case",
        metavar="NAME",
        help="Run a single case (matches <NAME>.json inside eval/cases).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print extra diagnostics (always shown on failures).",
    )
    args = parser.parse_args()

    if not CASES_DIR.exists():
        print("No cases found. Add JSON files under eval/cases.", file=sys.stderr)
        return 1

    case_paths = sorted(CASES_DIR.glob("*.json"))
    if args.case:
        matches = [p for p in case_paths if p.stem == args.case]
        if not matches:
            print(f"Case '{args.case}' not found.", file=sys.stderr)
            return 1
        case_paths = matches

    overall_errors = 0
    for path in case_paths:
        case = _load_case(path)
        errors, info = _evaluate_case(case)
        if errors:
            overall_errors += 1
            print(f"[FAIL] {case['name']}")
            for err in errors:
                print(f"  - {err}")
            _print_debug(info)
        else:
            print(f"[PASS] {case['name']}")
            if args.verbose:
                _print_debug(info)

    return 1 if overall_errors else 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
