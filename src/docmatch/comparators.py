"""
Field comparators.

One function per comparison kind, plus ``compare_field`` which dispatches on
a rule's kind and turns the comparator output into (matched, warning).
"""

import math
import re
from typing import Any, Callable, Dict, NamedTuple, Optional

from thai_text import (
    compare_addresses,
    digits_only,
    is_numeric_like,
    normalize_address,
    normalize_name,
    normalize_text,
    remove_title,
    resolve_date,
)

from .config import DEFAULT_CONFIG, EngineConfig
from .models import ComparisonKind, FieldRule
from .occupation import compare_occupation


# Trailing satang fraction ('25,000.50 บาท' -> '25,000 บาท')
_DECIMAL_FRACTION = re.compile(r"\.\d{1,2}(?=\D*$)")


class NumericComparison(NamedTuple):
    match: bool
    warn: bool
    difference: int


class NameComparison(NamedTuple):
    match: bool
    warn: bool


class FieldComparison(NamedTuple):
    matched: bool
    warning: Optional[str] = None


# =============================================================================
# NUMBERS
# =============================================================================

def parse_amount(value: Any) -> Optional[int]:
    """
    Parse a money amount like '240,000 บาท' or 20000.0 to an int.

    Returns None when there are no digits at all, or for NaN and infinity.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return int(round(value))

    text = _DECIMAL_FRACTION.sub('', str(value).strip())
    digits = digits_only(text)
    if not digits:
        return None
    return int(digits)


def compare_numeric(extracted: Any, profile: Any,
                    config: EngineConfig = DEFAULT_CONFIG) -> Optional[NumericComparison]:
    """
    Compare amounts with graduated tolerance bands.

    Returns:
        NumericComparison, or None when the profile amount is zero or
        unparseable (insufficient data, not a mismatch)
    """
    profile_amount = parse_amount(profile)
    if not profile_amount:
        return None

    extracted_amount = parse_amount(extracted)
    if extracted_amount is None:
        return NumericComparison(False, False, profile_amount)

    difference = abs(extracted_amount - profile_amount)
    if difference <= profile_amount * config.numeric_tolerance:
        return NumericComparison(True, False, difference)
    if difference <= profile_amount * config.numeric_warn_tolerance:
        return NumericComparison(True, True, difference)
    return NumericComparison(False, False, difference)


# =============================================================================
# NAMES / TEXT
# =============================================================================

def compare_name(extracted: Any, profile: Any) -> NameComparison:
    """
    Compare two person names.

    Titles are canonicalized first. Equal names (with or without the title)
    match outright; one name containing the other matches with a warning.
    A title with no name after it never matches.
    """
    bare1 = normalize_text(remove_title(extracted))
    bare2 = normalize_text(remove_title(profile))
    if not bare1 or not bare2:
        return NameComparison(False, False)

    full1 = normalize_name(extracted)
    full2 = normalize_name(profile)
    if full1 == full2:
        return NameComparison(True, False)

    # One side may carry a title the other lacks
    if bare1 == bare2:
        return NameComparison(True, False)

    if full1 in full2 or full2 in full1:
        return NameComparison(True, True)
    if bare1 in bare2 or bare2 in bare1:
        return NameComparison(True, True)

    return NameComparison(False, False)


def compare_exact(extracted: Any, profile: Any, identifier: bool = False) -> bool:
    """
    Digit-only equality for IDs and phone numbers, normalized text equality otherwise.

    With ``identifier`` set, any two values that both carry digits are
    compared on their digits alone ('B6641214' == '6641214').
    """
    if is_numeric_like(extracted) and is_numeric_like(profile):
        return digits_only(extracted) == digits_only(profile)
    if identifier:
        digits1 = digits_only(extracted)
        digits2 = digits_only(profile)
        if digits1 and digits2:
            return digits1 == digits2
    text1 = normalize_text(extracted)
    return bool(text1) and text1 == normalize_text(profile)


# =============================================================================
# DISPATCH
# =============================================================================

def _compare_fuzzy_name(rule: FieldRule, extracted: Any, profile: Any,
                        config: EngineConfig) -> FieldComparison:
    result = compare_name(extracted, profile)
    if result.warn:
        return FieldComparison(True, f"{rule.label} ใกล้เคียงกัน แต่ไม่ตรงทุกตัวอักษร")
    return FieldComparison(result.match)


def _compare_exact(rule: FieldRule, extracted: Any, profile: Any,
                   config: EngineConfig) -> FieldComparison:
    return FieldComparison(compare_exact(extracted, profile, rule.identifier))


def _compare_date(rule: FieldRule, extracted: Any, profile: Any,
                  config: EngineConfig) -> FieldComparison:
    extracted_date = resolve_date(extracted)
    if extracted_date is None:
        return FieldComparison(False, f"ไม่สามารถอ่าน{rule.label}ในเอกสารได้")
    profile_date = resolve_date(profile)
    if profile_date is None:
        return FieldComparison(False, f"ไม่สามารถอ่าน{rule.label}ในโปรไฟล์ได้")
    return FieldComparison(extracted_date == profile_date)


def _compare_address(rule: FieldRule, extracted: Any, profile: Any,
                     config: EngineConfig) -> FieldComparison:
    if not normalize_address(extracted):
        return FieldComparison(False, f"ไม่สามารถอ่าน{rule.label}ในเอกสารได้")
    return FieldComparison(compare_addresses(extracted, profile))


def _compare_numeric(rule: FieldRule, extracted: Any, profile: Any,
                     config: EngineConfig) -> Optional[FieldComparison]:
    result = compare_numeric(extracted, profile, config)
    if result is None:
        return None
    if result.warn:
        return FieldComparison(True, f"{rule.label} ใกล้เคียงกัน แต่ต่างกัน {result.difference:,} บาท")
    return FieldComparison(result.match)


def _compare_occupation(rule: FieldRule, extracted: Any, profile: Any,
                        config: EngineConfig) -> FieldComparison:
    result = compare_occupation(extracted, profile)
    if result.warn:
        return FieldComparison(True, f'{rule.label} ใกล้เคียงกัน: เอกสาร="{extracted}" โปรไฟล์="{profile}"')
    return FieldComparison(result.match)


COMPARATORS: Dict[ComparisonKind, Callable[..., Optional[FieldComparison]]] = {
    ComparisonKind.EXACT: _compare_exact,
    ComparisonKind.FUZZY_NAME: _compare_fuzzy_name,
    ComparisonKind.NUMERIC_TOLERANT: _compare_numeric,
    ComparisonKind.DATE: _compare_date,
    ComparisonKind.ADDRESS: _compare_address,
    ComparisonKind.FLEXIBLE_OCCUPATION: _compare_occupation,
}


def compare_field(rule: FieldRule, extracted: Any, profile: Any,
                  config: EngineConfig = DEFAULT_CONFIG) -> Optional[FieldComparison]:
    """
    Compare one extracted value with one profile value according to the rule.

    Both values are expected to be present. Returns None only for numeric
    rules whose profile amount is unusable (insufficient data).
    """
    return COMPARATORS[rule.kind](rule, extracted, profile, config)
