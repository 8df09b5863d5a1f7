"""
Data model for document/profile reconciliation.

Rules are declarative: a ``FieldRule`` names one extracted key, one profile
key and how to compare them. Results are new objects built per call and
serialize to the camelCase JSON shape the presentation and audit layers read.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


# =============================================================================
# ENUMS
# =============================================================================

class ComparisonKind(str, Enum):
    EXACT = 'exact'
    FUZZY_NAME = 'fuzzyName'
    NUMERIC_TOLERANT = 'numericTolerant'
    DATE = 'date'
    ADDRESS = 'address'
    FLEXIBLE_OCCUPATION = 'flexibleOccupation'


class Severity(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


class MatchStatus(str, Enum):
    NO_PROFILE_DATA = 'no_profile_data'
    INSUFFICIENT_DATA = 'insufficient_data'
    NO_MATCH = 'no_match'
    FULL_MATCH = 'full_match'
    GOOD_MATCH = 'good_match'
    PARTIAL_MATCH = 'partial_match'
    MISMATCH = 'mismatch'
    UNKNOWN = 'unknown'


# =============================================================================
# RULES
# =============================================================================

@dataclass(frozen=True)
class FieldRule:
    """
    How to compare one extracted field against one profile field.

    identifier marks ID-style exact fields (citizen ID, student ID, phone)
    whose letters and separators are ignored.
    """
    extracted_key: str
    profile_key: str
    label: str
    kind: ComparisonKind
    required: bool = False
    alternate_profile_keys: Tuple[str, ...] = ()
    identifier: bool = False

    def __post_init__(self):
        # Raises ValueError for anything that is not a known kind
        object.__setattr__(self, 'kind', ComparisonKind(self.kind))
        object.__setattr__(self, 'alternate_profile_keys', tuple(self.alternate_profile_keys))


@dataclass(frozen=True)
class Ruleset:
    """
    Ordered rules for one document category.

    mode is 'plain' (compare against one profile section), 'single_person'
    (the document belongs to one of ``candidate_roles``, role inferred) or
    'family' (father and mother sub-objects compared side by side).
    """
    category: str
    rules: Tuple[FieldRule, ...]
    role: Optional[str] = None
    person_label: str = ''
    mode: str = 'plain'
    candidate_roles: Tuple[str, ...] = ('father', 'mother')
    issue_date_key: Optional[str] = None
    description: str = ''

    def __iter__(self):
        return iter(self.rules)

    def __len__(self):
        return len(self.rules)


# =============================================================================
# PROFILE
# =============================================================================

# Snake_case / Firebase aliases accepted by ProfileRecord.from_dict
_PROFILE_ALIASES = {
    'name': ('name', 'fullName', 'full_name'),
    'citizen_id': ('citizenId', 'citizen_id', 'idCard', 'id_card'),
    'birth_date': ('birthDate', 'birth_date', 'dob'),
    'phone': ('phone', 'phone_num', 'phone_number', 'phoneNumber'),
    'email': ('email',),
    'address_current': ('addressCurrent', 'address_current', 'currentAddress'),
    'address_permanent': ('addressPermanent', 'address_perm', 'address_permanent', 'permanentAddress'),
    'occupation': ('occupation',),
    'monthly_income': ('monthlyIncome', 'monthly_income', 'income'),
    'annual_income': ('annualIncome', 'annual_income'),
    'student_id': ('studentId', 'student_id'),
}

_CAMEL_KEYS = {
    'name': 'name',
    'citizen_id': 'citizenId',
    'birth_date': 'birthDate',
    'phone': 'phone',
    'email': 'email',
    'address_current': 'addressCurrent',
    'address_permanent': 'addressPermanent',
    'occupation': 'occupation',
    'monthly_income': 'monthlyIncome',
    'annual_income': 'annualIncome',
    'student_id': 'studentId',
}


def _first_present(data: Mapping, keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None and value != '':
            return value
    return None


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).replace(',', '').strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class ProfileRecord:
    """Read-only snapshot of one person (student, father, mother or guardian)."""
    name: Optional[str] = None
    citizen_id: Optional[str] = None
    birth_date: Any = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address_current: Any = None
    address_permanent: Any = None
    occupation: Optional[str] = None
    monthly_income: Any = None
    annual_income: Any = None
    student_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> "ProfileRecord":
        """Build from camelCase or Firebase snake_case keys."""
        if not data:
            return cls()
        values = {name: _first_present(data, keys) for name, keys in _PROFILE_ALIASES.items()}

        if values['annual_income'] is None:
            monthly = _to_number(values['monthly_income'])
            if monthly:
                annual = monthly * 12
                values['annual_income'] = int(annual) if float(annual).is_integer() else annual

        return cls(**values)

    def as_dict(self) -> Dict[str, Any]:
        """camelCase dict of the populated fields, as rulesets address them."""
        result = {}
        for attr, key in _CAMEL_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        return result

    def is_empty(self) -> bool:
        return not self.as_dict()


def build_profile_snapshot(user_doc: Optional[Mapping]) -> Dict[str, Optional[Dict[str, Any]]]:
    """
    Build per-role profile sections from a user document.

    Args:
        user_doc: Stored user document with top-level student fields and
                  father_info / mother_info / guardian_info sub-documents

    Returns:
        Dict with 'student', 'father', 'mother', 'guardian' sections (plain
        dicts, or None when the section is empty). The guardian section is
        None when the student lives with their parents.
    """
    if not user_doc:
        return {'student': None, 'father': None, 'mother': None, 'guardian': None}

    def section(data: Optional[Mapping]) -> Optional[Dict[str, Any]]:
        record = ProfileRecord.from_dict(data)
        return None if record.is_empty() else record.as_dict()

    guardian = None
    if not user_doc.get('livesWithParents'):
        guardian = section(user_doc.get('guardian_info'))

    return {
        'student': section(user_doc),
        'father': section(user_doc.get('father_info')),
        'mother': section(user_doc.get('mother_info')),
        'guardian': guardian,
    }


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class FieldOutcome:
    """A mismatched field, as shown to the user."""
    field: str
    label: str
    matched: bool
    extracted_value: Any
    profile_value: Any
    severity: Severity

    def to_dict(self) -> Dict[str, Any]:
        return {
            'field': self.field,
            'label': self.label,
            'matched': self.matched,
            'extractedValue': self.extracted_value,
            'profileValue': self.profile_value,
            'severity': self.severity.value,
        }


@dataclass
class DocumentAgeResult:
    """Freshness check of a document issue date. is_valid is None when unknown."""
    is_valid: Optional[bool]
    age_in_days: Optional[int]
    resolved_date: Optional[date]
    raw_date: Any = None
    converted_from_buddhist: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'isValid': self.is_valid,
            'ageInDays': self.age_in_days,
            'resolvedDate': self.resolved_date.isoformat() if self.resolved_date else None,
            'rawDate': self.raw_date,
            'convertedFromBuddhist': self.converted_from_buddhist,
        }


@dataclass
class TermCheckResult:
    """Semester/academic year on a document against the expected submission period."""
    term_matches: bool
    year_matches: bool
    expected_term: Optional[str]
    expected_year: Optional[str]
    extracted_term: Optional[str]
    extracted_year: Optional[str]

    @property
    def overall(self) -> bool:
        return self.term_matches and self.year_matches

    def to_dict(self) -> Dict[str, Any]:
        return {
            'termMatches': self.term_matches,
            'yearMatches': self.year_matches,
            'expectedTerm': self.expected_term,
            'expectedYear': self.expected_year,
            'extractedTerm': self.extracted_term,
            'extractedYear': self.extracted_year,
            'overallMatch': self.overall,
        }


@dataclass
class ComparisonResult:
    """Verdict of one extraction/profile comparison."""
    match_status: MatchStatus = MatchStatus.UNKNOWN
    matches: Dict[str, bool] = field(default_factory=dict)
    mismatches: List[FieldOutcome] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    match_percentage: int = 0
    person_type: Optional[str] = None
    term_check: Optional[TermCheckResult] = None
    document_age: Optional[DocumentAgeResult] = None

    @property
    def fields_compared(self) -> int:
        return len(self.matches)

    @property
    def fields_matched(self) -> int:
        return sum(1 for matched in self.matches.values() if matched)

    @property
    def fields_mismatched(self) -> int:
        return len(self.mismatches)

    @property
    def comparison_details(self) -> Dict[str, Any]:
        details = {
            'fieldsCompared': self.fields_compared,
            'fieldsMatched': self.fields_matched,
            'fieldsMismatched': self.fields_mismatched,
        }
        if self.person_type:
            details['personType'] = self.person_type
        return details

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'matchStatus': self.match_status.value,
            'matches': dict(self.matches),
            'mismatches': [outcome.to_dict() for outcome in self.mismatches],
            'warnings': list(self.warnings),
            'comparisonDetails': self.comparison_details,
            'matchPercentage': self.match_percentage,
        }
        if self.term_check is not None:
            result['termCheck'] = self.term_check.to_dict()
        if self.document_age is not None:
            result['documentAge'] = self.document_age.to_dict()
        return result
