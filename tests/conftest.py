from datetime import date

import pytest

from docmatch import FieldRule, build_profile_snapshot


@pytest.fixture
def identity_rules():
    """Name, citizen ID and birth date: the basic identity ruleset."""
    return [
        FieldRule('name', 'name', 'ชื่อ-นามสกุล', 'fuzzyName'),
        FieldRule('citizenId', 'citizenId', 'เลขบัตรประชาชน', 'exact'),
        FieldRule('birthDate', 'birthDate', 'วันเกิด', 'date'),
    ]


@pytest.fixture
def student_profile():
    return {
        'name': 'สมชาย ใจดี',
        'citizenId': '1234567890123',
        'birthDate': '1997-05-01',
    }


@pytest.fixture
def parent_profiles():
    """Profile snapshot with both parents and no guardian."""
    return {
        'student': {'name': 'นายสมปอง ใจดี', 'studentId': '6401234'},
        'father': {
            'name': 'นายสมชาย ใจดี',
            'occupation': 'รับจ้าง',
            'annualIncome': 240000,
        },
        'mother': {
            'name': 'นางสมศรี ใจดี',
            'occupation': 'ค้าขาย',
            'annualIncome': 120000,
        },
        'guardian': None,
    }


@pytest.fixture
def user_doc():
    """Stored user document as the sign-up flow saves it."""
    return {
        'name': 'นายสมปอง ใจดี',
        'student_id': '6401234',
        'citizen_id': '1-1037-00012-34-5',
        'birth_date': '2004-08-12',
        'phone_num': '081-234-5678',
        'email': 'sompong@example.com',
        'address_perm': {
            'houseNumber': '99',
            'moo': '5',
            'subDistrict': 'บางพลีใหญ่',
            'district': 'บางพลี',
            'province': 'สมุทรปราการ',
            'postalCode': '10540',
        },
        'address_current': '45/2 ซอยลาดพร้าว 1 แขวงจอมพล เขตจตุจักร กรุงเทพมหานคร 10900',
        'livesWithParents': True,
        'father_info': {
            'name': 'นายสมชาย ใจดี',
            'citizen_id': '3100500123456',
            'occupation': 'รับจ้าง',
            'income': 20000,
        },
        'mother_info': {
            'name': 'นางสมศรี ใจดี',
            'occupation': 'ค้าขาย',
            'income': '10,000',
        },
        'guardian_info': {
            'name': 'นายประยุทธ์ มั่นคง',
            'income': 30000,
        },
    }


@pytest.fixture
def snapshot(user_doc):
    return build_profile_snapshot(user_doc)


@pytest.fixture
def today():
    return date(2024, 2, 1)
