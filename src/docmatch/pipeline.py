"""
Command line runner for DocMatch

Runs the reconciliation engine on extraction/profile JSON files:
- reconcile:  compare one extraction with a profile
- batch:      reconcile a manifest of documents and write a CSV report
- age:        check a document issue date against the freshness limit
- term:       extract semester and academic year from text
- categories: list the available document categories

Usage:
  poetry run docmatch reconcile --category father_income_cert --extracted doc.json --profile user.json
  poetry run docmatch reconcile --category disbursement_form --extracted doc.json --profile user.json --term 1 --year 2567
  poetry run docmatch batch --manifest manifest.json --output-dir report/
  poetry run docmatch age --date "15 มกราคม 2567" --now 2024-02-01
  poetry run docmatch term "ภาคเรียนที่ 1 ปีการศึกษา 2567"
  poetry run docmatch categories
"""

import argparse
import json
from datetime import date
from pathlib import Path
from typing import Any, List, Mapping, Optional

from .batch import BatchItem, validate_batch, write_batch_report
from .config import EngineConfig
from .document_age import check_age
from .engine import reconcile_document
from .models import build_profile_snapshot
from .rulesets import RULESETS, UnknownCategoryError
from .terms import extract_academic_year, extract_term

EXIT_BAD_INPUT = 2

_USER_DOC_KEYS = ('father_info', 'mother_info', 'guardian_info')
_SNAPSHOT_KEYS = ('student', 'father', 'mother', 'guardian')


class InputError(Exception):
    """An input file is missing or is not valid JSON."""


def load_json(path: Path) -> Any:
    """Load a JSON file, raising InputError with a readable message."""
    path = Path(path)
    if not path.exists():
        raise InputError(f"File not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON in {path}: {e}") from e


def load_profiles(path: Path) -> Mapping:
    """
    Load a profile file.

    Accepts a stored user document (father_info/mother_info/...) or an
    already-built snapshot ({'student': ..., 'father': ...}).
    """
    data = load_json(path)
    if not isinstance(data, Mapping):
        raise InputError(f"Profile must be a JSON object: {path}")
    if any(key in data for key in _SNAPSHOT_KEYS) and not any(key in data for key in _USER_DOC_KEYS):
        return data
    return build_profile_snapshot(data)


def parse_date_arg(value: Optional[str]) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InputError(f"Invalid --now date (expected YYYY-MM-DD): {value}") from e


def print_json(data: Any):
    print(json.dumps(data, ensure_ascii=False, indent=2, default=str))


# =============================================================================
# COMMANDS
# =============================================================================

def run_reconcile(args: argparse.Namespace, config: EngineConfig) -> int:
    extracted = load_json(args.extracted)
    profiles = load_profiles(args.profile)
    raw_text = None
    if args.raw_text:
        raw_path = Path(args.raw_text)
        if not raw_path.exists():
            raise InputError(f"File not found: {raw_path}")
        raw_text = raw_path.read_text(encoding='utf-8')

    submission_period = None
    if args.term and args.year:
        submission_period = (args.term, args.year)

    now = parse_date_arg(args.now) if args.now else None
    result = reconcile_document(
        args.category,
        extracted,
        profiles,
        config=config,
        role_hint=args.role,
        raw_text=raw_text,
        submission_period=submission_period,
        now=now,
    )
    print_json(result.to_dict())
    return 0


def _manifest_items(manifest: Any, base_dir: Path) -> List[BatchItem]:
    if not isinstance(manifest, list):
        raise InputError("Manifest must be a JSON list")

    items = []
    for idx, entry in enumerate(manifest):
        if not isinstance(entry, Mapping) or 'category' not in entry or 'extracted' not in entry:
            raise InputError(f"Manifest entry {idx} needs 'category' and 'extracted'")
        profiles = None
        if entry.get('profile'):
            profiles = load_profiles(base_dir / entry['profile'])
        period = None
        if entry.get('term') and entry.get('year'):
            period = (entry['term'], entry['year'])
        items.append(BatchItem(
            item_id=str(entry.get('id', idx + 1)),
            category=entry['category'],
            source=base_dir / entry['extracted'],
            profiles=profiles,
            role_hint=entry.get('role'),
            submission_period=period,
        ))
    return items


def _extract_from_file(source: Path, category: str) -> Mapping:
    # Extractions were produced upstream and saved as JSON
    with open(source, 'r', encoding='utf-8') as f:
        return json.load(f)


def run_batch(args: argparse.Namespace, config: EngineConfig) -> int:
    manifest_path = Path(args.manifest)
    items = _manifest_items(load_json(manifest_path), manifest_path.parent)

    print("=" * 60)
    print("DocMatch - Batch Validation")
    print("=" * 60)
    print(f"Manifest: {manifest_path}")
    print(f"Output: {args.output_dir}")

    results = validate_batch(
        items,
        _extract_from_file,
        max_workers=args.workers,
        now=parse_date_arg(args.now),
        config=config,
        verbose=True,
    )
    report_path = write_batch_report(results, args.output_dir)

    failed = sum(1 for r in results if not r['success'])
    print("\n" + "=" * 60)
    print(f"Done: {len(results) - failed} succeeded, {failed} failed")
    print(f"Report: {report_path}")
    print("=" * 60)
    return 0


def run_age(args: argparse.Namespace, config: EngineConfig) -> int:
    max_days = args.max_days if args.max_days is not None else config.max_document_age_days
    result = check_age(args.date, max_days, parse_date_arg(args.now))
    print_json(result.to_dict())
    return 0


def run_term(args: argparse.Namespace, config: EngineConfig) -> int:
    print_json({
        'term': extract_term(args.text),
        'academicYear': extract_academic_year(args.text),
    })
    return 0


def run_categories(args: argparse.Namespace, config: EngineConfig) -> int:
    for category, ruleset in sorted(RULESETS.items()):
        print(f"  {category:<28} {ruleset.mode:<14} {ruleset.description}")
    return 0


# =============================================================================
# CLI
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docmatch",
        description="DocMatch - Document/Profile Field Reconciliation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Compare a father's income certificate with the stored profile
  poetry run docmatch reconcile --category father_income_cert --extracted doc.json --profile user.json

  # Single-parent certificate with a known owner
  poetry run docmatch reconcile --category single_parent_income_cert --extracted doc.json --profile user.json --role mother

  # Disbursement form for semester 1/2567
  poetry run docmatch reconcile --category disbursement_form --extracted doc.json --profile user.json --term 1 --year 2567

  # Batch validation with a CSV report
  poetry run docmatch batch --manifest manifest.json --output-dir report/ --workers 4

  # Check document age
  poetry run docmatch age --date 15/01/2567 --now 2024-02-01
        """
    )
    parser.add_argument(
        "--env",
        default=None,
        help="Path to a .env file with DOCMATCH_* settings"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile_parser = subparsers.add_parser("reconcile", help="Compare one extraction with a profile")
    reconcile_parser.add_argument("--category", required=True, help="Document category (see 'categories')")
    reconcile_parser.add_argument("--extracted", required=True, type=Path, help="Extraction JSON file")
    reconcile_parser.add_argument("--profile", required=True, type=Path, help="User document or profile snapshot JSON file")
    reconcile_parser.add_argument("--role", default=None, help="Owner role for single-parent documents (father/mother)")
    reconcile_parser.add_argument("--raw-text", default=None, help="Raw extractor text file (role inference fallback)")
    reconcile_parser.add_argument("--term", default=None, help="Expected semester for semester-bound documents")
    reconcile_parser.add_argument("--year", default=None, help="Expected academic year (B.E.)")
    reconcile_parser.add_argument("--now", default=None, help="Reference date YYYY-MM-DD for the document age check")

    batch_parser = subparsers.add_parser("batch", help="Reconcile a manifest of documents")
    batch_parser.add_argument("--manifest", required=True, help="Manifest JSON list")
    batch_parser.add_argument("--output-dir", required=True, help="Directory for batch_report.csv")
    batch_parser.add_argument("--workers", type=int, default=4, help="Worker threads (default: 4)")
    batch_parser.add_argument("--now", default=None, help="Reference date YYYY-MM-DD (default: today)")

    age_parser = subparsers.add_parser("age", help="Check a document issue date")
    age_parser.add_argument("--date", required=True, help="Issue date as written on the document")
    age_parser.add_argument("--max-days", type=int, default=None, help="Maximum age in days (default: config)")
    age_parser.add_argument("--now", default=None, help="Reference date YYYY-MM-DD (default: today)")

    term_parser = subparsers.add_parser("term", help="Extract semester and academic year")
    term_parser.add_argument("text", help="Text such as 'ภาคเรียนที่ 1 ปีการศึกษา 2567'")

    subparsers.add_parser("categories", help="List document categories")

    return parser


COMMANDS = {
    "reconcile": run_reconcile,
    "batch": run_batch,
    "age": run_age,
    "term": run_term,
    "categories": run_categories,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = EngineConfig.from_env(args.env)

    try:
        return COMMANDS[args.command](args, config)
    except InputError as e:
        print(f"Error: {e}")
        return EXIT_BAD_INPUT
    except UnknownCategoryError as e:
        print(f"Error: unknown category {e}. Run 'docmatch categories' to list them.")
        return EXIT_BAD_INPUT


if __name__ == "__main__":
    raise SystemExit(main())
