"""
Reconciliation engine.

Compares an AI extraction of one document with the applicant's stored
profile, rule by rule, and classifies the overall result:

    extracted + profile + ruleset -> ComparisonResult

Three entry points share the same rule loop and classifier:
- reconcile:               one extraction against one profile section
- reconcile_single_person: the document belongs to one of several people
                           (father or mother) and the role has to be found
- reconcile_family:        father and mother on the same document

``reconcile_document`` picks the right one from a category name.

Data problems (missing values, unreadable dates, unknown roles) are always
reported inside the result. Only programmer errors raise.
"""

import math
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

from thai_text import format_thai_date, is_placeholder, normalize_text, remove_title

from .comparators import compare_field
from .config import DEFAULT_CONFIG, EngineConfig
from .document_age import check_age
from .models import (
    ComparisonKind,
    ComparisonResult,
    FieldOutcome,
    FieldRule,
    MatchStatus,
    Ruleset,
    Severity,
)
from .rulesets import UnknownCategoryError, get_ruleset
from .terms import check_submission_period, describe_period, describe_term_mismatch


# =============================================================================
# MESSAGES
# =============================================================================

NO_DATA = 'ไม่มีข้อมูล'
NO_PROFILE_WARNING = 'ไม่มีข้อมูลโปรไฟล์สำหรับเปรียบเทียบ'
INSUFFICIENT_DATA_WARNING = 'ข้อมูลในเอกสารไม่เพียงพอสำหรับการเปรียบเทียบ'
UNKNOWN_ROLE_WARNING = (
    'AI ไม่สามารถระบุว่าเอกสารนี้เป็นของบิดาหรือมารดาได้ '
    'และไม่สามารถจับคู่ชื่อกับข้อมูลในโปรไฟล์ได้ กรุณาตรวจสอบชื่อในเอกสาร'
)
TERM_FIELD = 'term'
TERM_LABEL = 'ภาคการศึกษา/ปีการศึกษา'

# Labels used when a rule matched on an alternate profile key
PROFILE_KEY_LABELS = {
    'addressCurrent': 'ที่อยู่ปัจจุบัน',
    'addressPermanent': 'ที่อยู่ตามทะเบียนบ้าน',
}

# Role tags the extractor may emit in 'matchedProfile'
ROLE_ALIASES = {
    'father': 'father',
    'บิดา': 'father',
    'mother': 'mother',
    'มารดา': 'mother',
    'guardian': 'guardian',
    'ผู้ปกครอง': 'guardian',
}

# Phrases printed before the person's name on income certificates
ROLE_MARKERS = {
    'father': 'บิดาของผู้ขอกู้ยืมเงิน',
    'mother': 'มารดาของผู้ขอกู้ยืมเงิน',
    'guardian': 'ผู้ปกครองของผู้ขอกู้ยืมเงิน',
}

# (role, key of the person's sub-object in the extraction, Thai label)
FAMILY_SECTIONS: Tuple[Tuple[str, str, str], ...] = (
    ('father', 'fatherData', 'บิดา'),
    ('mother', 'motherData', 'มารดา'),
)


# =============================================================================
# HELPERS
# =============================================================================

def get_value(data: Any, key: str) -> Any:
    """Look up a key, following dotted paths ('father.annualIncome') into nested mappings."""
    if not isinstance(data, Mapping):
        return None
    if key in data:
        return data[key]

    current = data
    for part in key.split('.'):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def is_absent(value: Any) -> bool:
    """None, blank, placeholder, or a mapping whose every value is absent."""
    if isinstance(value, Mapping):
        return all(is_absent(v) for v in value.values())
    return is_placeholder(value)


def _percentage(matched: int, compared: int) -> int:
    # Half-up rounding
    return int(math.floor(100 * matched / compared + 0.5))


def _rules_of(ruleset: Union[Ruleset, Iterable[FieldRule]]) -> Tuple[FieldRule, ...]:
    if isinstance(ruleset, Ruleset):
        return ruleset.rules
    return tuple(ruleset)


# =============================================================================
# CLASSIFIER
# =============================================================================

def classify_match(fields_compared: int, fields_matched: int, mismatch_count: int,
                   warning_count: int,
                   config: EngineConfig = DEFAULT_CONFIG) -> Tuple[MatchStatus, int]:
    """
    Classify a comparison from its counts.

    Returns:
        Tuple of (MatchStatus, match percentage)
    """
    if fields_compared <= 0:
        return MatchStatus.INSUFFICIENT_DATA, 0

    percentage = _percentage(fields_matched, fields_compared)

    if mismatch_count == 0:
        if warning_count == 0:
            return MatchStatus.FULL_MATCH, percentage
        if warning_count <= config.good_match_max_warnings:
            return MatchStatus.GOOD_MATCH, percentage
        return MatchStatus.PARTIAL_MATCH, percentage

    if percentage >= config.good_match_percent:
        return MatchStatus.GOOD_MATCH, percentage
    if percentage >= config.partial_match_percent:
        return MatchStatus.PARTIAL_MATCH, percentage
    return MatchStatus.MISMATCH, percentage


def _finalize(result: ComparisonResult, config: EngineConfig) -> ComparisonResult:
    if result.fields_compared == 0:
        result.warnings.append(INSUFFICIENT_DATA_WARNING)

    status, percentage = classify_match(
        result.fields_compared,
        result.fields_matched,
        result.fields_mismatched,
        len(result.warnings),
        config,
    )
    result.match_status = status
    result.match_percentage = percentage
    return result


# =============================================================================
# RULE LOOP
# =============================================================================

def _profile_candidates(profile: Mapping, rule: FieldRule) -> list:
    candidates = []
    for key in (rule.profile_key,) + rule.alternate_profile_keys:
        value = get_value(profile, key)
        if not is_absent(value):
            candidates.append((key, value))
    return candidates


def _profile_display(rule: FieldRule, value: Any) -> Any:
    # Dates are shown to the applicant as Thai Buddhist Era dates
    if rule.kind == ComparisonKind.DATE:
        return format_thai_date(value) or value
    return value


def _apply_rule(result: ComparisonResult, extracted: Mapping, profile: Mapping,
                rule: FieldRule, config: EngineConfig, key_prefix: str = ''):
    field_key = f"{key_prefix}{rule.extracted_key}"
    extracted_value = get_value(extracted, rule.extracted_key)
    candidates = _profile_candidates(profile, rule)

    if is_absent(extracted_value):
        if candidates and rule.required:
            result.matches[field_key] = False
            result.mismatches.append(FieldOutcome(
                field=field_key,
                label=rule.label,
                matched=False,
                extracted_value=NO_DATA,
                profile_value=_profile_display(rule, candidates[0][1]),
                severity=Severity.HIGH,
            ))
        return

    if not candidates:
        if rule.required:
            result.warnings.append(f"ไม่มีข้อมูล {rule.label} ในโปรไฟล์เพื่อเปรียบเทียบ")
        return

    comparison = None
    for profile_key, profile_value in candidates:
        comparison = compare_field(rule, extracted_value, profile_value, config)
        if comparison is None or comparison.matched:
            break

    if comparison is None:
        # Profile amount is zero or unreadable
        result.warnings.append(f"ไม่มีข้อมูล {rule.label} ในโปรไฟล์เพื่อเปรียบเทียบ")
        return

    result.matches[field_key] = comparison.matched
    if comparison.warning:
        result.warnings.append(comparison.warning)

    if comparison.matched:
        if profile_key != rule.profile_key:
            matched_label = PROFILE_KEY_LABELS.get(profile_key, profile_key)
            result.warnings.append(f"{rule.label}ตรงกับ{matched_label}ในโปรไฟล์")
        return

    result.mismatches.append(FieldOutcome(
        field=field_key,
        label=rule.label,
        matched=False,
        extracted_value=extracted_value,
        profile_value=_profile_display(rule, candidates[0][1]),
        severity=Severity.MEDIUM if rule.required else Severity.LOW,
    ))


def _apply_rules(result: ComparisonResult, extracted: Mapping, profile: Mapping,
                 rules: Sequence[FieldRule], config: EngineConfig, key_prefix: str = ''):
    for rule in rules:
        _apply_rule(result, extracted, profile, rule, config, key_prefix)


def _apply_term_check(result: ComparisonResult, extracted: Mapping, submission_period: Any):
    if isinstance(submission_period, Mapping):
        expected_term = submission_period.get('term')
        expected_year = submission_period.get('academicYear', submission_period.get('academic_year'))
    else:
        expected_term, expected_year = submission_period

    # Only a fully open period (term and year) can be checked
    if is_absent(expected_term) or is_absent(expected_year):
        return

    semester = get_value(extracted, 'semester')
    year = get_value(extracted, 'academic_year')
    if year is None:
        year = get_value(extracted, 'academicYear')

    check = check_submission_period(semester, year, expected_term, expected_year)
    result.term_check = check
    result.matches[TERM_FIELD] = check.overall
    if check.overall:
        return

    result.mismatches.append(FieldOutcome(
        field=TERM_FIELD,
        label=TERM_LABEL,
        matched=False,
        extracted_value=describe_period(check.extracted_term, check.extracted_year),
        profile_value=describe_period(check.expected_term, check.expected_year),
        severity=Severity.HIGH,
    ))
    result.warnings.append(describe_term_mismatch(check))


# =============================================================================
# ENTRY POINTS
# =============================================================================

def reconcile(extracted: Optional[Mapping], profile: Optional[Mapping],
              ruleset: Union[Ruleset, Iterable[FieldRule]], *,
              config: Optional[EngineConfig] = None,
              person_type: Optional[str] = None,
              submission_period: Any = None) -> ComparisonResult:
    """
    Compare one extraction with one profile section.

    Args:
        extracted: Fields produced by the extractor (sparse, may hold '-')
        profile: Profile section (keys may be dotted paths in the rules)
        ruleset: Ruleset or iterable of FieldRule, applied in order
        config: Thresholds (default EngineConfig())
        person_type: Role recorded in comparisonDetails
        submission_period: Optional (term, academic_year) or
                           {'term', 'academicYear'}; adds a semester check
                           against the extraction's semester/academic_year

    Returns:
        New ComparisonResult
    """
    config = config or DEFAULT_CONFIG
    if extracted is None or not profile:
        return ComparisonResult(
            match_status=MatchStatus.NO_PROFILE_DATA,
            warnings=[NO_PROFILE_WARNING],
            person_type=person_type,
        )

    result = ComparisonResult(person_type=person_type)
    _apply_rules(result, extracted, profile, _rules_of(ruleset), config)
    if submission_period:
        _apply_term_check(result, extracted, submission_period)
    return _finalize(result, config)


def _name_key(rules: Sequence[FieldRule]) -> str:
    for rule in rules:
        if rule.kind == ComparisonKind.FUZZY_NAME:
            return rule.extracted_key
    return 'name'


def _profile_name_key(rules: Sequence[FieldRule]) -> str:
    for rule in rules:
        if rule.kind == ComparisonKind.FUZZY_NAME:
            return rule.profile_key
    return 'name'


def infer_role(extracted: Mapping, profiles: Mapping, candidate_roles: Sequence[str], *,
               role_hint: Optional[str] = None,
               raw_text: Optional[str] = None,
               name_key: str = 'name',
               profile_name_key: str = 'name') -> Optional[str]:
    """
    Decide which candidate person a single-person document belongs to.

    Order: explicit hint, the extractor's 'matchedProfile' tag, name
    containment against each candidate's profile name, then marker phrases
    in the raw extractor text. Returns None when nothing decides it.
    """
    for tag in (role_hint, get_value(extracted, 'matchedProfile')):
        if isinstance(tag, str):
            role = ROLE_ALIASES.get(tag.strip().lower())
            if role in candidate_roles:
                return role

    extracted_name = normalize_text(remove_title(get_value(extracted, name_key)))
    if extracted_name:
        for role in candidate_roles:
            profile_name = normalize_text(remove_title(get_value(profiles.get(role), profile_name_key)))
            if profile_name and (extracted_name in profile_name or profile_name in extracted_name):
                return role

    if raw_text is None:
        raw_text = get_value(extracted, 'rawResponse')
    text = normalize_text(raw_text)
    if text:
        for role in candidate_roles:
            marker = ROLE_MARKERS.get(role)
            if marker and normalize_text(marker) in text:
                return role

    return None


def reconcile_single_person(extracted: Optional[Mapping], profiles: Optional[Mapping],
                            ruleset: Union[Ruleset, Iterable[FieldRule]], *,
                            config: Optional[EngineConfig] = None,
                            candidate_roles: Optional[Sequence[str]] = None,
                            role_hint: Optional[str] = None,
                            raw_text: Optional[str] = None,
                            name_key: Optional[str] = None) -> ComparisonResult:
    """
    Reconcile a document that belongs to exactly one of several people.

    The role comes from ``role_hint`` or the extractor's 'matchedProfile'
    tag; name and marker-phrase inference are fallbacks. An undecidable
    role gives ``no_match`` with a warning.
    """
    config = config or DEFAULT_CONFIG
    rules = _rules_of(ruleset)
    if candidate_roles is None:
        candidate_roles = ruleset.candidate_roles if isinstance(ruleset, Ruleset) else ('father', 'mother')

    if extracted is None or not profiles:
        return reconcile(extracted, None, rules, config=config)

    role = infer_role(
        extracted, profiles, candidate_roles,
        role_hint=role_hint,
        raw_text=raw_text,
        name_key=name_key or _name_key(rules),
        profile_name_key=_profile_name_key(rules),
    )
    if role is None:
        return ComparisonResult(
            match_status=MatchStatus.NO_MATCH,
            warnings=[UNKNOWN_ROLE_WARNING],
        )

    return reconcile(extracted, profiles.get(role), rules, config=config, person_type=role)


def reconcile_family(extracted: Optional[Mapping], profiles: Optional[Mapping],
                     ruleset: Union[Ruleset, Iterable[FieldRule]], *,
                     config: Optional[EngineConfig] = None) -> ComparisonResult:
    """
    Reconcile a certificate listing both father and mother.

    Each parent's sub-object ('fatherData' / 'motherData') is compared with
    the matching profile section. Match keys are prefixed 'father_' /
    'mother_' and everything is classified together.
    """
    config = config or DEFAULT_CONFIG
    if extracted is None or not profiles:
        return reconcile(extracted, None, (), config=config, person_type='family')

    rules = _rules_of(ruleset)
    result = ComparisonResult(person_type='family')

    for role, data_key, role_label in FAMILY_SECTIONS:
        person_data = get_value(extracted, data_key)
        if is_absent(person_data):
            continue
        profile = profiles.get(role)
        if is_absent(profile):
            result.warnings.append(f"พบข้อมูล{role_label}ในเอกสาร แต่ไม่มีข้อมูล{role_label}ในโปรไฟล์")
            continue
        labelled = [replace(rule, label=f"{rule.label} ({role_label})") for rule in rules]
        _apply_rules(result, person_data, profile, labelled, config, key_prefix=f"{role}_")

    return _finalize(result, config)


def reconcile_document(category: str, extracted: Optional[Mapping],
                       profiles: Optional[Mapping], *,
                       config: Optional[EngineConfig] = None,
                       role_hint: Optional[str] = None,
                       raw_text: Optional[str] = None,
                       submission_period: Any = None,
                       now: Optional[Union[date, datetime]] = None) -> ComparisonResult:
    """
    Reconcile a document by category name.

    Args:
        category: Key in RULESETS (e.g. 'father_income_cert')
        extracted: Extractor output for the document
        profiles: Profile snapshot with 'student'/'father'/'mother'/'guardian'
        role_hint: Known owner role for single-person documents
        raw_text: Raw extractor text used as a last-resort role hint
        submission_period: (term, academic_year) for semester-bound documents
        now: Reference date; when given, the issue date is age-checked

    Raises:
        UnknownCategoryError: category has no ruleset
    """
    config = config or DEFAULT_CONFIG
    ruleset = get_ruleset(category)

    if ruleset.mode == 'single_person':
        result = reconcile_single_person(
            extracted, profiles, ruleset,
            config=config, role_hint=role_hint, raw_text=raw_text,
        )
    elif ruleset.mode == 'family':
        result = reconcile_family(extracted, profiles, ruleset, config=config)
    else:
        profile = profiles
        if ruleset.role is not None:
            profile = get_value(profiles, ruleset.role)
        result = reconcile(
            extracted, profile, ruleset,
            config=config,
            person_type=ruleset.role,
            submission_period=submission_period,
        )

    if result.match_status == MatchStatus.NO_PROFILE_DATA and ruleset.person_label:
        result.warnings.append(f"ไม่มีข้อมูล{ruleset.person_label}ในโปรไฟล์")

    if ruleset.issue_date_key and now is not None and isinstance(extracted, Mapping):
        issue_date = get_value(extracted, ruleset.issue_date_key)
        if not is_absent(issue_date):
            result.document_age = check_age(issue_date, config.max_document_age_days, now)

    return result


__all__ = [
    'UnknownCategoryError',
    'classify_match',
    'get_value',
    'infer_role',
    'is_absent',
    'reconcile',
    'reconcile_document',
    'reconcile_family',
    'reconcile_single_person',
]
