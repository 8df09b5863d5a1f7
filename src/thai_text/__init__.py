"""
Thai text helpers shared by the reconciliation engine.

Contains:
- Text normalization and honorific canonicalization (common.py)
- Date resolution with Buddhist Era handling (dates.py)
- Address normalization and two-tier matching (address.py)
"""

from .common import (
    TITLE_PREFIXES,
    PLACEHOLDER_VALUES,
    normalize_text,
    digits_only,
    is_numeric_like,
    is_placeholder,
    split_title,
    strip_title,
    remove_title,
    normalize_name,
)

from .dates import (
    THAI_MONTHS,
    to_common_era,
    resolve_date,
    resolve_date_info,
    find_date_in_text,
    compare_dates,
    format_thai_date,
)

from .address import (
    ADDRESS_ABBREVIATIONS,
    BANGKOK,
    normalize_location_name,
    canonical_province,
    flatten_address,
    expand_abbreviations,
    normalize_address,
    extract_key_elements,
    compare_addresses,
)

__all__ = [
    # common
    'TITLE_PREFIXES',
    'PLACEHOLDER_VALUES',
    'normalize_text',
    'digits_only',
    'is_numeric_like',
    'is_placeholder',
    'split_title',
    'strip_title',
    'remove_title',
    'normalize_name',
    # dates
    'THAI_MONTHS',
    'to_common_era',
    'resolve_date',
    'resolve_date_info',
    'find_date_in_text',
    'compare_dates',
    'format_thai_date',
    # address
    'ADDRESS_ABBREVIATIONS',
    'BANGKOK',
    'normalize_location_name',
    'canonical_province',
    'flatten_address',
    'expand_abbreviations',
    'normalize_address',
    'extract_key_elements',
    'compare_addresses',
]
