"""
Semester and academic year extraction.

Disbursement and tuition documents state which semester they are for in
many phrasings ('ภาคเรียนที่ 1', 'ภาคการศึกษาที่ 2', 'เทอม 1',
'Semester 2', '1/2567'). Both extractors return strings or None and never
raise.
"""

import re
from typing import Any, List, Optional, Pattern

from .models import TermCheckResult


TERM_PATTERNS: List[Pattern] = [
    re.compile(r'ภาค(?:เรียน)?(?:การศึกษา)?(?:ที่)?\s*(\d+)'),
    re.compile(r'semester\s*(\d+)'),
    re.compile(r'term\s*(\d+)'),
    re.compile(r'เทอม\s*(\d+)'),
    re.compile(r'ภาคที่\s*(\d+)'),
    re.compile(r'(?<!\d)([123])\s*/\s*25\d{2}(?!\d)'),
]

YEAR_PATTERNS: List[Pattern] = [
    re.compile(r'ปีการศึกษา\s*(\d{4})'),
    re.compile(r'academic\s*year\s*(\d{4})'),
    re.compile(r'(?<!\d)(\d{4})\s*-\s*\d{4}(?!\d)'),
]

_BARE_TERM = re.compile(r'^[123]$')
_BUDDHIST_YEAR = re.compile(r'(?<!\d)25\d{2}(?!\d)')
_TERM_WORDS = ('ภาค', 'เทอม')

NOT_SPECIFIED = 'ไม่ระบุ'


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ''
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def extract_term(text: Any) -> Optional[str]:
    """
    Extract the semester number.

    >>> extract_term('ภาคเรียนที่ 2')
    '2'
    >>> extract_term(1)
    '1'
    """
    raw = _as_text(text)
    if not raw:
        return None
    if _BARE_TERM.match(raw):
        return raw

    normalized = raw.lower()
    for pattern in TERM_PATTERNS:
        match = pattern.search(normalized)
        if match:
            return match.group(1)

    # Last resort: the first number in a string that talks about terms
    if any(word in normalized for word in _TERM_WORDS):
        numbers = re.findall(r'\d+', normalized)
        if numbers and numbers[0] in ('1', '2', '3'):
            return numbers[0]

    return None


def extract_academic_year(text: Any) -> Optional[str]:
    """
    Extract the academic year (as written, usually Buddhist Era).

    >>> extract_academic_year('ปีการศึกษา 2567')
    '2567'
    >>> extract_academic_year('2567-2568')
    '2567'
    """
    raw = _as_text(text)
    if not raw:
        return None

    normalized = raw.lower()
    for pattern in YEAR_PATTERNS:
        match = pattern.search(normalized)
        if match:
            return match.group(1)

    match = _BUDDHIST_YEAR.search(normalized)
    if match:
        return match.group(0)

    return None


def check_submission_period(semester_text: Any, year_text: Any,
                            expected_term: Any, expected_year: Any) -> TermCheckResult:
    """Compare the semester/year written on a document with the open submission period."""
    extracted_term = extract_term(semester_text)
    extracted_year = extract_academic_year(year_text)
    expected_term = _as_text(expected_term) or None
    expected_year = _as_text(expected_year) or None

    return TermCheckResult(
        term_matches=extracted_term is not None and extracted_term == expected_term,
        year_matches=extracted_year is not None and extracted_year == expected_year,
        expected_term=expected_term,
        expected_year=expected_year,
        extracted_term=extracted_term,
        extracted_year=extracted_year,
    )


def describe_period(term: Optional[str], year: Optional[str]) -> str:
    """'ภาคเรียนที่ 1 ปีการศึกษา 2567', with ไม่ระบุ for unknown parts."""
    return f"ภาคเรียนที่ {term or NOT_SPECIFIED} ปีการศึกษา {year or NOT_SPECIFIED}"


def describe_term_mismatch(result: TermCheckResult) -> Optional[str]:
    """User-facing message for a failed period check, or None when it passed."""
    if result.overall:
        return None
    if not result.term_matches and not result.year_matches:
        return (
            f"เอกสารเป็นของ{describe_period(result.extracted_term, result.extracted_year)} "
            f"แต่ระบบเปิดรับเฉพาะ{describe_period(result.expected_term, result.expected_year)}"
        )
    if not result.term_matches:
        return (
            f"เอกสารเป็นของภาคเรียนที่ {result.extracted_term or NOT_SPECIFIED} "
            f"แต่ระบบเปิดรับเฉพาะภาคเรียนที่ {result.expected_term}"
        )
    return (
        f"เอกสารเป็นของปีการศึกษา {result.extracted_year or NOT_SPECIFIED} "
        f"แต่ระบบเปิดรับเฉพาะปีการศึกษา {result.expected_year}"
    )
