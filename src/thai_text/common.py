"""
Common text helpers shared by every comparator.

This module consolidates the text handling that each document validator used
to carry on its own:
- Text normalization for comparison (Thai block, ASCII letters, digits)
- Thai honorific prefix canonicalization
- Placeholder / empty value detection
- Digit extraction for identifiers and phone numbers
"""

import re
from typing import Any, List, Tuple


# =============================================================================
# CONSTANTS
# =============================================================================

# Thai honorific prefixes mapped to their canonical full-word form.
# Ordered longest/most specific first: นางสาว must be tried before นาง,
# and every abbreviated form before the bare นาง/นาย.
TITLE_PREFIXES: List[Tuple[str, str]] = [
    ('เด็กหญิง', 'เด็กหญิง'),
    ('เด็กชาย', 'เด็กชาย'),
    ('นางสาว', 'นางสาว'),
    ('น.ส.', 'นางสาว'),
    ('นส.', 'นางสาว'),
    ('น.ส', 'นางสาว'),
    ('ด.ช.', 'เด็กชาย'),
    ('ด.ช', 'เด็กชาย'),
    ('ด.ญ.', 'เด็กหญิง'),
    ('ด.ญ', 'เด็กหญิง'),
    ('นาง', 'นาง'),
    ('นาย', 'นาย'),
]

# Values the extractor emits when a field is blank on the document
PLACEHOLDER_VALUES = {
    '-', '--', '—', '–', 'n/a', 'na', 'none', 'null',
    'ไม่ระบุ', 'ไม่มี', 'ไม่มีข้อมูล',
}

# Anything outside the Thai block, lowercase ASCII letters, digits and whitespace
_NON_COMPARABLE = re.compile(r'[^\u0e00-\u0e7fa-z0-9\s]')
_WHITESPACE = re.compile(r'\s+')
_NUMERIC_LIKE = re.compile(r'^[0-9\s\-+().]+$')


# =============================================================================
# TEXT NORMALIZATION
# =============================================================================

def normalize_text(text: Any) -> str:
    """
    Canonicalize free text for comparison.

    Trims, lowercases, collapses whitespace runs and drops every character
    outside the Thai block, ASCII letters, digits and whitespace. Dropping
    characters can leave doubled spaces, so whitespace is collapsed again
    afterwards to keep the function idempotent.

    Args:
        text: Any value; None and empty values yield ''

    Returns:
        Normalized string
    """
    if text is None:
        return ''
    text = str(text)
    if not text:
        return ''

    text = _WHITESPACE.sub(' ', text.strip().lower())
    text = _NON_COMPARABLE.sub('', text)
    # NIKHAHIT + SARA AA is how OCR often spells SARA AM
    text = text.replace('\u0e4d\u0e32', '\u0e33')
    text = _WHITESPACE.sub(' ', text)
    return text.strip()


def digits_only(value: Any) -> str:
    """Keep only ASCII digits, e.g. '1-2345-67890-12-3' -> '1234567890123'."""
    if value is None:
        return ''
    return re.sub(r'[^0-9]', '', str(value))


def is_numeric_like(value: Any) -> bool:
    """Check if a value is an identifier/phone style string (digits and separators only)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if not isinstance(value, str):
        return False
    text = value.strip()
    return bool(text) and bool(_NUMERIC_LIKE.match(text)) and bool(re.search(r'[0-9]', text))


def is_placeholder(value: Any) -> bool:
    """
    Check if an extracted value means "nothing on the document".

    None, empty containers, blank strings and sentinel strings like '-' count
    as absent. Numbers (including 0) are real values.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return False
    if isinstance(value, (dict, list, tuple, set)):
        return len(value) == 0
    text = str(value).strip()
    if not text:
        return True
    return text.lower() in PLACEHOLDER_VALUES


# =============================================================================
# NAME / TITLE HANDLING
# =============================================================================

def split_title(name: Any) -> Tuple[str, str]:
    """
    Split a Thai full name into (canonical title, remainder).

    Args:
        name: Full name, possibly starting with an honorific prefix

    Returns:
        Tuple of (canonical_title, name_without_title); title is '' when none
    """
    if name is None:
        return '', ''
    text = _WHITESPACE.sub(' ', str(name)).strip()
    if not text:
        return '', ''

    for prefix, canonical in TITLE_PREFIXES:
        if text.startswith(prefix):
            remainder = text[len(prefix):].strip()
            # OCR sometimes leaves the trailing dot of an abbreviation detached
            remainder = remainder.lstrip('.').strip()
            return canonical, remainder

    return '', text


def strip_title(name: Any) -> str:
    """
    Rewrite a leading honorific to its canonical form.

    'น.ส. สมหญิง ใจดี' and 'นางสาวสมหญิง ใจดี' both become
    'นางสาว สมหญิง ใจดี'. Names without a title are returned trimmed.
    """
    title, remainder = split_title(name)
    if not title:
        return remainder
    if not remainder:
        return title
    return f"{title} {remainder}"


def remove_title(name: Any) -> str:
    """Return the name with any honorific prefix removed."""
    return split_title(name)[1]


def normalize_name(name: Any) -> str:
    """Canonical title + normalized text, ready for equality checks."""
    return normalize_text(strip_title(name))
