"""
Date resolution for values produced by the extractor and the profile store.

Dates reach the engine in many shapes: ISO strings from the profile store,
'DD/MM/YYYY' strings read off Thai documents (usually in Buddhist Era years),
Thai month names, epoch seconds and timestamp objects from the datastore
client. Everything resolves to a plain ``datetime.date`` or None.
"""

import re
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional, Tuple


# =============================================================================
# CONSTANTS
# =============================================================================

# Buddhist Era year = Common Era year + 543
BUDDHIST_ERA_OFFSET = 543
BUDDHIST_YEAR_THRESHOLD = 2500

# Thai month mapping for date parsing
THAI_MONTHS = {
    'มกราคม': 1, 'ม.ค.': 1, 'ม.ค': 1, 'มค': 1,
    'กุมภาพันธ์': 2, 'ก.พ.': 2, 'ก.พ': 2, 'กพ': 2,
    'มีนาคม': 3, 'มี.ค.': 3, 'มี.ค': 3, 'มีค': 3,
    'เมษายน': 4, 'เม.ย.': 4, 'เม.ย': 4, 'เมย': 4,
    'พฤษภาคม': 5, 'พ.ค.': 5, 'พ.ค': 5, 'พค': 5,
    'มิถุนายน': 6, 'มิ.ย.': 6, 'มิ.ย': 6, 'มิย': 6,
    'กรกฎาคม': 7, 'ก.ค.': 7, 'ก.ค': 7, 'กค': 7,
    'สิงหาคม': 8, 'ส.ค.': 8, 'ส.ค': 8, 'สค': 8,
    'กันยายน': 9, 'ก.ย.': 9, 'ก.ย': 9, 'กย': 9,
    'ตุลาคม': 10, 'ต.ค.': 10, 'ต.ค': 10, 'ตค': 10,
    'พฤศจิกายน': 11, 'พ.ย.': 11, 'พ.ย': 11, 'พย': 11,
    'ธันวาคม': 12, 'ธ.ค.': 12, 'ธ.ค': 12, 'ธค': 12,
}

THAI_MONTH_NAMES = [
    'มกราคม', 'กุมภาพันธ์', 'มีนาคม', 'เมษายน', 'พฤษภาคม', 'มิถุนายน',
    'กรกฎาคม', 'สิงหาคม', 'กันยายน', 'ตุลาคม', 'พฤศจิกายน', 'ธันวาคม',
]

# Methods exposed by datastore timestamp objects
_TIMESTAMP_METHODS = ('to_datetime', 'toDate', 'to_date')

_ISO_PATTERN = re.compile(r'^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T\s].*)?$')
_DMY_PATTERN = re.compile(r'^(\d{1,2})\s*[/\-\s]\s*(\d{1,2})\s*[/\-\s]\s*(\d{4})$')
_THAI_MONTH_PATTERN = re.compile(r'^(\d{1,2})\s*([ก-๙\.]+?)\s*(\d{4})$')

# Patterns used to find a date embedded in free text (first hit wins)
_EMBEDDED_PATTERNS = [
    re.compile(r'\d{1,2}\s*/\s*\d{1,2}\s*/\s*\d{4}'),
    re.compile(r'\d{4}-\d{1,2}-\d{1,2}'),
    re.compile(r'\d{1,2}\s*[ก-๙][ก-๙\.]*\s*\d{4}'),
    re.compile(r'\d{1,2}-\d{1,2}-\d{4}'),
]


# =============================================================================
# DATE RESOLUTION
# =============================================================================

def to_common_era(year: int) -> int:
    """Convert a Buddhist Era year to Common Era; CE years pass through."""
    if year > BUDDHIST_YEAR_THRESHOLD:
        return year - BUDDHIST_ERA_OFFSET
    return year


def _build_date(year: int, month: int, day: int) -> Tuple[Optional[date], bool]:
    converted = year > BUDDHIST_YEAR_THRESHOLD
    try:
        return date(to_common_era(year), month, day), converted
    except ValueError:
        return None, False


def _lookup_thai_month(month_str: str) -> Optional[int]:
    month_str = month_str.strip()
    month = THAI_MONTHS.get(month_str) or THAI_MONTHS.get(month_str.rstrip('.'))
    if month:
        return month
    return THAI_MONTHS.get(month_str.rstrip('.') + '.')


def _from_epoch(seconds: Any) -> Optional[date]:
    try:
        return datetime.fromtimestamp(float(seconds), tz=timezone.utc).date()
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def _parse_date_string(text: str) -> Tuple[Optional[date], bool]:
    text = re.sub(r'\s+', ' ', text.strip())
    if not text:
        return None, False

    # Pattern 1: ISO "2022-01-15" (optionally followed by a time part)
    match = _ISO_PATTERN.match(text)
    if match:
        return _build_date(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    # Pattern 2: "15/01/2565", "15-01-2565" or "15 01 2565"
    match = _DMY_PATTERN.match(text)
    if match:
        return _build_date(int(match.group(3)), int(match.group(2)), int(match.group(1)))

    # Pattern 3: "15 มกราคม 2565" or "5 มิ.ย.2562"
    match = _THAI_MONTH_PATTERN.match(text)
    if match:
        month = _lookup_thai_month(match.group(2))
        if month:
            return _build_date(int(match.group(3)), month, int(match.group(1)))

    return None, False


def resolve_date_info(value: Any) -> Tuple[Optional[date], bool]:
    """
    Resolve a date and report whether a Buddhist Era year was converted.

    Returns:
        Tuple of (date or None, converted_from_buddhist)
    """
    if value is None or isinstance(value, bool):
        return None, False

    if isinstance(value, datetime):
        return value.date(), False
    if isinstance(value, date):
        return value, False

    for method_name in _TIMESTAMP_METHODS:
        method = getattr(value, method_name, None)
        if callable(method):
            try:
                converted = method()
            except (TypeError, ValueError, OverflowError):
                return None, False
            if isinstance(converted, (datetime, date)):
                return resolve_date_info(converted)
            return None, False

    if isinstance(value, Mapping):
        seconds = value.get('seconds', value.get('_seconds'))
        if seconds is None:
            return None, False
        return _from_epoch(seconds), False

    if isinstance(value, (int, float)):
        return _from_epoch(value), False

    if isinstance(value, str):
        return _parse_date_string(value)

    return None, False


def resolve_date(value: Any) -> Optional[date]:
    """
    Resolve any supported date representation to a ``date``.

    Accepts datetime/date instances, timestamp objects exposing
    ``to_datetime()``/``toDate()``, serialized timestamps
    ({'seconds': ...}), epoch seconds, ISO strings, 'DD/MM/YYYY'-shaped
    strings and Thai month names. Years above 2500 are Buddhist Era.

    Never raises; returns None when no interpretation gives a valid date.
    """
    return resolve_date_info(value)[0]


def find_date_in_text(text: Any) -> Tuple[Optional[date], bool]:
    """
    Scan free text for the first embedded date substring.

    Handles extractor output like 'ออกให้ ณ วันที่ 15 มกราคม 2567'.
    """
    if not isinstance(text, str) or not text.strip():
        return None, False

    for pattern in _EMBEDDED_PATTERNS:
        for match in pattern.finditer(text):
            resolved, converted = _parse_date_string(match.group(0))
            if resolved is not None:
                return resolved, converted

    return None, False


def compare_dates(date1: Any, date2: Any) -> bool:
    """Compare two date values by year, month and day only."""
    d1 = resolve_date(date1)
    d2 = resolve_date(date2)
    if d1 is None or d2 is None:
        return False
    return (d1.year, d1.month, d1.day) == (d2.year, d2.month, d2.day)


def format_thai_date(value: Any) -> Optional[str]:
    """Format a date as '15 มกราคม 2565' (Buddhist Era) for mismatch reports."""
    resolved = resolve_date(value)
    if resolved is None:
        return None
    month = THAI_MONTH_NAMES[resolved.month - 1]
    return f"{resolved.day} {month} {resolved.year + BUDDHIST_ERA_OFFSET}"
