"""
Thai address normalization and matching.

Addresses arrive either as one free-text line ('123 ม.4 ต.คลองเนื้อ
อ.คลองสามวา กทม. 10510') or as a structured object from the profile store.
Matching is two-tiered:

1. Direct: normalize both sides, accept equality or containment.
2. Key elements: pull sub-district, district, province and postal code out of
   both sides; an element missing on either side is a wildcard, and all four
   must agree.
"""

import re
from typing import Any, Dict, List, Mapping, Tuple

from .common import normalize_text


# =============================================================================
# CONSTANTS
# =============================================================================

# Object keys for each address part, in output order
ADDRESS_PARTS: List[Tuple[str, Tuple[str, ...]]] = [
    ('house_no', ('houseNumber', 'house_no', 'houseNo', 'address_no')),
    ('moo', ('moo', 'villageNo', 'village_no')),
    ('street', ('street', 'road', 'soi')),
    ('sub_district', ('subDistrict', 'sub_district', 'subdistrict', 'tambon')),
    ('district', ('district', 'amphoe')),
    ('province', ('province',)),
    ('post_code', ('postalCode', 'zipcode', 'zip_code', 'post_code', 'postcode')),
]

# Abbreviation expansion, applied in order. Full words with a trailing period
# are handled before the one-letter abbreviations so 'ถนน.' never becomes
# 'ถนนนน'.
ADDRESS_ABBREVIATIONS: List[Tuple[str, str]] = [
    (r'ถนน\.', 'ถนน'),
    (r'ตำบล\.', 'ตำบล'),
    (r'แขวง\.', 'แขวง'),
    (r'อำเภอ\.', 'อำเภอ'),
    (r'เขต\.', 'เขต'),
    (r'จังหวัด\.', 'จังหวัด'),
    (r'รหัสไปรษณีย์\.', 'รหัสไปรษณีย์'),
    (r'ร\.\s?ป\.', 'รหัสไปรษณีย์'),
    (r'รป\.', 'รหัสไปรษณีย์'),
    (r'ถ\.', 'ถนน'),
    (r'ต\.', 'ตำบล'),
    (r'อ\.', 'อำเภอ'),
    (r'จ\.', 'จังหวัด'),
]

# Bangkok is usually written without 'จังหวัด' and in several short forms
BANGKOK = 'กรุงเทพมหานคร'
PROVINCE_ALIASES = {
    'กทม': BANGKOK,
    'กรุงเทพ': BANGKOK,
    'กรุงเทพฯ': BANGKOK,
    'กรุงเทพมหานคร': BANGKOK,
}

_SUB_DISTRICT_PATTERN = re.compile(r'(?:ตำบล|แขวง)\s*([^\s,]+)')
_DISTRICT_PATTERN = re.compile(r'(?:อำเภอ|เขต)\s*([^\s,]+)')
_PROVINCE_PATTERN = re.compile(r'จังหวัด\s*([^\s,]+)')
_BANGKOK_PATTERN = re.compile(r'(กรุงเทพมหานคร|กรุงเทพฯ|กรุงเทพ|กทม)')
_POST_CODE_PATTERN = re.compile(r'(?<!\d)(\d{5})(?!\d)')

_LOCATION_PREFIX = re.compile(r'^(ตำบล|แขวง|อำเภอ|เขต|จังหวัด|ต\.|อ\.|จ\.)\s*')


# =============================================================================
# NORMALIZATION
# =============================================================================

def normalize_location_name(name: str) -> str:
    """Normalize a location name for matching."""
    if not name:
        return ''

    # Remove common prefixes
    name = _LOCATION_PREFIX.sub('', name.strip())
    # Remove trailing dots
    name = name.rstrip('.')
    return name.strip()


def canonical_province(name: str) -> str:
    """Map Bangkok short forms to the full province name."""
    name = normalize_location_name(name)
    return PROVINCE_ALIASES.get(name, name)


def _address_value(address: Mapping, keys: Tuple[str, ...]) -> str:
    for key in keys:
        value = address.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ''


def _with_label(value: str, label: str) -> str:
    """Prefix a bare location name with its label ('คลองเนื้อ' -> 'ตำบลคลองเนื้อ')."""
    if not value or _LOCATION_PREFIX.match(value):
        return value
    return f"{label}{value}"


def flatten_address(address: Any) -> str:
    """
    Turn an address object into one line of text.

    Strings pass through trimmed. Mappings are joined from house number,
    moo, street, sub-district, district, province and postal code, skipping
    empty parts. Bare sub-district/district/province names get their label
    (แขวง/เขต for Bangkok, ตำบล/อำเภอ/จังหวัด elsewhere) so they can be found
    again by key-element matching.
    """
    if address is None:
        return ''
    if isinstance(address, str):
        return address.strip()
    if not isinstance(address, Mapping):
        return str(address).strip()

    values = {name: _address_value(address, keys) for name, keys in ADDRESS_PARTS}

    in_bangkok = canonical_province(values['province']) == BANGKOK
    values['sub_district'] = _with_label(values['sub_district'], 'แขวง' if in_bangkok else 'ตำบล')
    values['district'] = _with_label(values['district'], 'เขต' if in_bangkok else 'อำเภอ')
    if not in_bangkok:
        values['province'] = _with_label(values['province'], 'จังหวัด')
    if values['moo'] and not values['moo'].startswith(('หมู่', 'ม.')):
        values['moo'] = f"หมู่ {values['moo']}"

    parts = [values[name] for name, _ in ADDRESS_PARTS]
    return ' '.join(part for part in parts if part)


def expand_abbreviations(text: str) -> str:
    """Expand Thai address abbreviations to their full words."""
    for pattern, replacement in ADDRESS_ABBREVIATIONS:
        text = re.sub(pattern, replacement, text)
    return text


def normalize_address(address: Any) -> str:
    """
    Normalize an address (string or object) for comparison.

    Flatten, expand abbreviations, then apply the common text normalizer.
    Idempotent: the normalized form contains no periods, so a second pass
    finds no abbreviations left to expand.
    """
    text = flatten_address(address)
    if not text:
        return ''
    return normalize_text(expand_abbreviations(text))


# =============================================================================
# MATCHING
# =============================================================================

def extract_key_elements(address: Any) -> Dict[str, str]:
    """
    Extract sub-district, district, province and postal code.

    Args:
        address: Address string or object (normalized internally)

    Returns:
        Dict with sub_district, district, province, post_code ('' if not found)
    """
    text = normalize_address(address)
    result = {
        'sub_district': '',
        'district': '',
        'province': '',
        'post_code': '',
    }
    if not text:
        return result

    match = _SUB_DISTRICT_PATTERN.search(text)
    if match:
        result['sub_district'] = match.group(1)

    match = _DISTRICT_PATTERN.search(text)
    if match:
        result['district'] = match.group(1)

    match = _PROVINCE_PATTERN.search(text)
    if match:
        result['province'] = canonical_province(match.group(1))
    else:
        match = _BANGKOK_PATTERN.search(text)
        if match:
            result['province'] = BANGKOK

    match = _POST_CODE_PATTERN.search(text)
    if match:
        result['post_code'] = match.group(1)

    return result


def _element_matches(value1: str, value2: str) -> bool:
    return not value1 or not value2 or value1 == value2


def compare_addresses(address1: Any, address2: Any) -> bool:
    """
    Compare two addresses with direct matching, then key-element matching.

    Symmetric: compare_addresses(a, b) == compare_addresses(b, a).
    An address that normalizes to nothing never matches.
    """
    norm1 = normalize_address(address1)
    norm2 = normalize_address(address2)
    if not norm1 or not norm2:
        return False

    # Tier 1: direct string match
    if norm1 == norm2 or norm1 in norm2 or norm2 in norm1:
        return True

    # Tier 2: key element comparison
    key1 = extract_key_elements(norm1)
    key2 = extract_key_elements(norm2)

    return all(
        _element_matches(key1[name], key2[name])
        for name in ('sub_district', 'district', 'province', 'post_code')
    )
