"""
Comparison rulesets per document category.

Each category maps extractor keys to profile keys. Rulesets for documents
about one person compare against that person's profile section. Form 101 and
the family and legal status certificates compare against the whole snapshot
through dotted keys.

Categories:
- id_card / consent_form            (student, father, mother, guardian)
- income_cert                       (father, mother, guardian, single_parent)
- famo_income_cert                  (father and mother on one certificate)
- salary_cert                       (father, mother, guardian, single_parent)
- form_101                          (whole family)
- family_status                     (student, father and mother names)
- legal_status                      (father and mother names and IDs)
- disbursement_form                 (student, semester-bound)
- tuition_expense                   (student)
"""

from typing import Dict, List

from .models import ComparisonKind, FieldRule, Ruleset


class UnknownCategoryError(KeyError):
    """No ruleset is registered under the requested category."""


EXACT = ComparisonKind.EXACT
NAME = ComparisonKind.FUZZY_NAME
NUMBER = ComparisonKind.NUMERIC_TOLERANT
DATE = ComparisonKind.DATE
ADDRESS = ComparisonKind.ADDRESS
OCCUPATION = ComparisonKind.FLEXIBLE_OCCUPATION

ROLE_LABELS = {
    'student': 'นักศึกษา',
    'father': 'บิดา',
    'mother': 'มารดา',
    'guardian': 'ผู้ปกครอง',
}


# =============================================================================
# RULE BUILDERS
# =============================================================================

def _id_card_rules(role: str) -> tuple:
    if role == 'student':
        # Students may register either address; house registration is primary
        address = FieldRule('address', 'addressPermanent', 'ที่อยู่', ADDRESS,
                            alternate_profile_keys=('addressCurrent',))
    else:
        address = FieldRule('address', 'addressCurrent', 'ที่อยู่', ADDRESS)
    return (
        FieldRule('name', 'name', 'ชื่อ-นามสกุล', NAME, required=True),
        FieldRule('idNumber', 'citizenId', 'เลขบัตรประชาชน', EXACT, required=True, identifier=True),
        FieldRule('dateOfBirth', 'birthDate', 'วันเกิด', DATE),
        address,
    )


def _consent_rules(role: str) -> tuple:
    if role == 'student':
        address = FieldRule('address', 'addressPermanent', 'ที่อยู่', ADDRESS,
                            alternate_profile_keys=('addressCurrent',))
    else:
        address = FieldRule('address', 'addressCurrent', 'ที่อยู่', ADDRESS)
    return (
        FieldRule('name', 'name', 'ชื่อ-นามสกุล', NAME, required=True),
        FieldRule('idCard', 'citizenId', 'เลขบัตรประชาชน', EXACT, required=True, identifier=True),
        FieldRule('birthDate', 'birthDate', 'วันเกิด', DATE),
        FieldRule('phone', 'phone', 'เบอร์โทรศัพท์', EXACT, identifier=True),
        FieldRule('email', 'email', 'อีเมล', EXACT),
        address,
    )


INCOME_CERT_RULES = (
    FieldRule('personName', 'name', 'ชื่อ-นามสกุล', NAME, required=True),
    FieldRule('occupation', 'occupation', 'อาชีพ', OCCUPATION),
    FieldRule('annualIncome', 'annualIncome', 'รายได้ต่อปี', NUMBER, required=True),
)

SALARY_CERT_RULES = (
    FieldRule('employeeName', 'name', 'ชื่อ-นามสกุล', NAME, required=True),
    FieldRule('occupation', 'occupation', 'อาชีพ', OCCUPATION),
    FieldRule('salary', 'monthlyIncome', 'เงินเดือน', NUMBER),
)

FORM_101_RULES = (
    FieldRule('studentName', 'student.name', 'ชื่อนักศึกษา', NAME, required=True),
    FieldRule('studentId', 'student.studentId', 'รหัสนักศึกษา', EXACT, identifier=True),
    FieldRule('citizenId', 'student.citizenId', 'เลขบัตรประชาชน', EXACT, required=True, identifier=True),
    FieldRule('phone', 'student.phone', 'เบอร์โทรศัพท์', EXACT, identifier=True),
    FieldRule('email', 'student.email', 'อีเมล', EXACT),
    FieldRule('fatherName', 'father.name', 'ชื่อบิดา', NAME),
    FieldRule('fatherIncome', 'father.annualIncome', 'รายได้บิดา', NUMBER),
    FieldRule('motherName', 'mother.name', 'ชื่อมารดา', NAME),
    FieldRule('motherIncome', 'mother.annualIncome', 'รายได้มารดา', NUMBER),
    FieldRule('guardianName', 'guardian.name', 'ชื่อผู้ปกครอง', NAME),
    FieldRule('guardianIncome', 'guardian.annualIncome', 'รายได้ผู้ปกครอง', NUMBER),
)

DISBURSEMENT_RULES = (
    FieldRule('studentName', 'name', 'ชื่อ-นามสกุล', NAME, required=True),
    FieldRule('studentId', 'studentId', 'รหัสนักศึกษา', EXACT, identifier=True),
)

TUITION_RULES = (
    FieldRule('studentName', 'name', 'ชื่อ-นามสกุล', NAME, required=True),
    FieldRule('studentId', 'studentId', 'รหัสนักศึกษา', EXACT, identifier=True),
)

# Family status certificate: borrower block plus the parents named on it
FAMILY_STATUS_RULES = (
    FieldRule('borrowerInfo.name', 'student.name', 'ชื่อนักศึกษา', NAME, required=True),
    FieldRule('borrowerInfo.studentId', 'student.studentId', 'รหัสนักศึกษา', EXACT, identifier=True),
    FieldRule('borrowerInfo.idCard', 'student.citizenId', 'เลขบัตรประชาชนนักศึกษา', EXACT, identifier=True),
    FieldRule('fatherInfo.name', 'father.name', 'ชื่อบิดา', NAME, required=True),
    FieldRule('motherInfo.name', 'mother.name', 'ชื่อมารดา', NAME, required=True),
)

# Legal status certificate: the named person is the father, the spouse the mother
LEGAL_STATUS_RULES = (
    FieldRule('personName', 'father.name', 'ชื่อบิดา', NAME, required=True),
    FieldRule('personIDNumber', 'father.citizenId', 'เลขบัตรประชาชนบิดา', EXACT, identifier=True),
    FieldRule('spouseName', 'mother.name', 'ชื่อมารดา', NAME),
    FieldRule('spouseIDNumber', 'mother.citizenId', 'เลขบัตรประชาชนมารดา', EXACT, identifier=True),
)


def _build_rulesets() -> Dict[str, Ruleset]:
    rulesets: List[Ruleset] = []

    for role, label in ROLE_LABELS.items():
        rulesets.append(Ruleset(
            category=f'{role}_id_card',
            rules=_id_card_rules(role),
            role=role,
            person_label=label,
            description=f'บัตรประชาชน{label}',
        ))
        rulesets.append(Ruleset(
            category=f'{role}_consent_form',
            rules=_consent_rules(role),
            role=role,
            person_label=label,
            description=f'หนังสือยินยอมเปิดเผยข้อมูล{label}',
        ))

    for role in ('father', 'mother', 'guardian'):
        label = ROLE_LABELS[role]
        rulesets.append(Ruleset(
            category=f'{role}_income_cert',
            rules=INCOME_CERT_RULES,
            role=role,
            person_label=label,
            issue_date_key='issueDate',
            description=f'หนังสือรับรองรายได้{label}',
        ))
        rulesets.append(Ruleset(
            category=f'{role}_salary_cert',
            rules=SALARY_CERT_RULES,
            role=role,
            person_label=label,
            issue_date_key='issueDate',
            description=f'หนังสือรับรองเงินเดือน{label}',
        ))

    rulesets.extend([
        Ruleset(
            category='single_parent_income_cert',
            rules=INCOME_CERT_RULES,
            person_label='ผู้ปกครองเดี่ยว',
            mode='single_person',
            issue_date_key='issueDate',
            description='หนังสือรับรองรายได้ผู้ปกครองเดี่ยว',
        ),
        Ruleset(
            category='single_parent_salary_cert',
            rules=SALARY_CERT_RULES,
            person_label='ผู้ปกครองเดี่ยว',
            mode='single_person',
            issue_date_key='issueDate',
            description='หนังสือรับรองเงินเดือนผู้ปกครองเดี่ยว',
        ),
        Ruleset(
            category='famo_income_cert',
            rules=INCOME_CERT_RULES,
            person_label='บิดาและมารดา',
            mode='family',
            issue_date_key='issueDate',
            description='หนังสือรับรองรายได้บิดาและมารดา',
        ),
        Ruleset(
            category='form_101',
            rules=FORM_101_RULES,
            person_label='ครอบครัว',
            description='แบบฟอร์ม กยศ. 101',
        ),
        Ruleset(
            category='family_status',
            rules=FAMILY_STATUS_RULES,
            person_label='ครอบครัว',
            description='หนังสือรับรองสถานภาพครอบครัว',
        ),
        Ruleset(
            category='legal_status',
            rules=LEGAL_STATUS_RULES,
            person_label='บิดาและมารดา',
            description='เอกสารสถานภาพทางกฎหมาย (ทะเบียนสมรส หย่า มรณบัตร)',
        ),
        Ruleset(
            category='disbursement_form',
            rules=DISBURSEMENT_RULES,
            role='student',
            person_label=ROLE_LABELS['student'],
            description='แบบยืนยันการเบิกเงินกู้ยืม',
        ),
        Ruleset(
            category='tuition_expense',
            rules=TUITION_RULES,
            role='student',
            person_label=ROLE_LABELS['student'],
            description='ใบแจ้งค่าเล่าเรียน',
        ),
    ])

    return {ruleset.category: ruleset for ruleset in rulesets}


RULESETS: Dict[str, Ruleset] = _build_rulesets()


def get_ruleset(category: str) -> Ruleset:
    """Return the ruleset for a category or raise UnknownCategoryError."""
    try:
        return RULESETS[category]
    except KeyError:
        raise UnknownCategoryError(category) from None


def list_categories() -> List[str]:
    return sorted(RULESETS)
