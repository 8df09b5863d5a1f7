"""
DocMatch - Document/Profile Field Reconciliation

Compares AI-extracted fields of loan application documents (ID cards,
consent forms, income and salary certificates, form 101, disbursement
forms) with the applicant's stored profile.

Contains:
- Data model and per-category rulesets (models.py, rulesets.py)
- Field comparators and occupation matching (comparators.py, occupation.py)
- Document age and semester checks (document_age.py, terms.py)
- Reconciliation engine and classifier (engine.py)
- Batch runner and CLI (batch.py, pipeline.py)
"""

__version__ = "0.1.0"

from .config import EngineConfig, DEFAULT_CONFIG
from .models import (
    ComparisonKind,
    ComparisonResult,
    DocumentAgeResult,
    FieldOutcome,
    FieldRule,
    MatchStatus,
    ProfileRecord,
    Ruleset,
    Severity,
    TermCheckResult,
    build_profile_snapshot,
)
from .comparators import compare_exact, compare_field, compare_name, compare_numeric, parse_amount
from .occupation import compare_occupation
from .document_age import check_age
from .terms import check_submission_period, extract_academic_year, extract_term
from .rulesets import RULESETS, UnknownCategoryError, get_ruleset, list_categories
from .engine import (
    classify_match,
    infer_role,
    reconcile,
    reconcile_document,
    reconcile_family,
    reconcile_single_person,
)
from .batch import BatchItem, validate_batch, write_batch_report

__all__ = [
    '__version__',
    # config
    'EngineConfig',
    'DEFAULT_CONFIG',
    # models
    'ComparisonKind',
    'ComparisonResult',
    'DocumentAgeResult',
    'FieldOutcome',
    'FieldRule',
    'MatchStatus',
    'ProfileRecord',
    'Ruleset',
    'Severity',
    'TermCheckResult',
    'build_profile_snapshot',
    # comparators
    'compare_exact',
    'compare_field',
    'compare_name',
    'compare_numeric',
    'parse_amount',
    'compare_occupation',
    'check_age',
    'check_submission_period',
    'extract_academic_year',
    'extract_term',
    # rulesets / engine
    'RULESETS',
    'UnknownCategoryError',
    'get_ruleset',
    'list_categories',
    'classify_match',
    'infer_role',
    'reconcile',
    'reconcile_document',
    'reconcile_family',
    'reconcile_single_person',
    # batch
    'BatchItem',
    'validate_batch',
    'write_batch_report',
]
