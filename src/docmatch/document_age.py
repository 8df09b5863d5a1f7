"""
Document freshness check.

Income and salary certificates must be recent. ``now`` is always passed in
so the check stays deterministic.
"""

from datetime import date, datetime
from typing import Any, Union

from thai_text import find_date_in_text, resolve_date_info

from .models import DocumentAgeResult


def check_age(issue_date_raw: Any, max_age_days: int,
              now: Union[date, datetime]) -> DocumentAgeResult:
    """
    Compute a document's age in days and check it against a limit.

    Args:
        issue_date_raw: Issue date as extracted (string, number, timestamp),
                        or free text containing a date
        max_age_days: Oldest acceptable age in days
        now: Reference date

    Returns:
        DocumentAgeResult; is_valid and age_in_days are None when the date
        cannot be resolved
    """
    resolved, converted = resolve_date_info(issue_date_raw)
    if resolved is None:
        resolved, converted = find_date_in_text(issue_date_raw)

    if resolved is None:
        return DocumentAgeResult(
            is_valid=None,
            age_in_days=None,
            resolved_date=None,
            raw_date=issue_date_raw,
        )

    if isinstance(now, datetime):
        now = now.date()

    age = (now - resolved).days
    return DocumentAgeResult(
        is_valid=0 <= age <= max_age_days,
        age_in_days=age,
        resolved_date=resolved,
        raw_date=issue_date_raw,
        converted_from_buddhist=converted,
    )
