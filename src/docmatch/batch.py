"""
Batch validation.

Runs extraction + reconciliation for many documents. The extractor is the
excluded AI layer and is injected as a callable:

    extractor(source, category) -> dict

A failing item is recorded as {'success': False, 'error': ...} and the rest
of the batch keeps going. Results come back in input order.
"""

import csv
import os
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .config import EngineConfig
from .engine import reconcile_document


Extractor = Callable[[Any, str], Mapping]


@dataclass
class BatchItem:
    """One document to validate."""
    item_id: str
    category: str
    source: Any
    profiles: Optional[Mapping] = None
    role_hint: Optional[str] = None
    submission_period: Any = None


REPORT_FIELDS = [
    'item_id',
    'category',
    'success',
    'match_status',
    'match_percentage',
    'fields_compared',
    'fields_matched',
    'fields_mismatched',
    'warnings',
    'document_age_days',
    'document_age_valid',
    'error',
]


def validate_item(item: BatchItem, extractor: Extractor, *,
                  now: Optional[Union[date, datetime]] = None,
                  config: Optional[EngineConfig] = None) -> Dict[str, Any]:
    """Extract and reconcile one document. Exceptions propagate to the caller."""
    extracted = extractor(item.source, item.category)
    result = reconcile_document(
        item.category,
        extracted,
        item.profiles,
        config=config,
        role_hint=item.role_hint,
        submission_period=item.submission_period,
        now=now,
    )
    return {
        'item_id': item.item_id,
        'category': item.category,
        'success': True,
        'extracted': extracted,
        'comparison': result.to_dict(),
    }


def validate_batch(items: Sequence[BatchItem], extractor: Extractor, *,
                   max_workers: int = 1,
                   now: Optional[Union[date, datetime]] = None,
                   config: Optional[EngineConfig] = None,
                   verbose: bool = False) -> List[Dict[str, Any]]:
    """
    Validate many documents, isolating per-item failures.

    Args:
        items: Documents to validate
        extractor: Callable producing the extraction for (source, category)
        max_workers: Thread pool size (1 runs sequentially)
        now: Reference date for document age checks
        config: Engine thresholds
        verbose: Print progress lines

    Returns:
        One result dict per item, in input order
    """
    results: List[Optional[Dict[str, Any]]] = [None] * len(items)
    completed = 0
    completed_lock = threading.Lock()

    def process(idx: int, item: BatchItem):
        try:
            return idx, validate_item(item, extractor, now=now, config=config)
        except Exception as e:
            return idx, {
                'item_id': item.item_id,
                'category': item.category,
                'success': False,
                'error': str(e) or type(e).__name__,
            }

    if verbose:
        print(f"\n[Batch] Validating {len(items)} documents (workers={max_workers})...")

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = {executor.submit(process, i, item): i for i, item in enumerate(items)}

        for future in as_completed(futures):
            idx, outcome = future.result()
            results[idx] = outcome

            with completed_lock:
                completed += 1
                if verbose and not outcome['success']:
                    print(f"  Error [{outcome['item_id']}]: {outcome['error']}")
                if verbose and (completed % 20 == 0 or completed == len(items)):
                    print(f"  Completed {completed}/{len(items)} documents...")

    return results


def _report_row(outcome: Mapping[str, Any]) -> Dict[str, Any]:
    row = {
        'item_id': outcome.get('item_id', ''),
        'category': outcome.get('category', ''),
        'success': outcome.get('success', False),
        'error': outcome.get('error', ''),
    }
    comparison = outcome.get('comparison')
    if comparison:
        details = comparison.get('comparisonDetails', {})
        age = comparison.get('documentAge') or {}
        row.update({
            'match_status': comparison.get('matchStatus', ''),
            'match_percentage': comparison.get('matchPercentage', 0),
            'fields_compared': details.get('fieldsCompared', 0),
            'fields_matched': details.get('fieldsMatched', 0),
            'fields_mismatched': details.get('fieldsMismatched', 0),
            'warnings': ' | '.join(comparison.get('warnings', [])),
            'document_age_days': age.get('ageInDays', ''),
            'document_age_valid': age.get('isValid', ''),
        })
    return row


def write_batch_report(results: Sequence[Mapping[str, Any]], output_dir: str,
                       filename: str = 'batch_report.csv') -> str:
    """
    Write a CSV summary of a batch run.

    Returns:
        Path of the written report
    """
    output_dir = str(output_dir)
    os.makedirs(output_dir, exist_ok=True)
    report_path = os.path.join(output_dir, filename)

    with open(report_path, 'w', encoding='utf-8', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        writer.writerows(_report_row(outcome) for outcome in results)

    return report_path
