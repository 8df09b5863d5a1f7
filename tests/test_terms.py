# =============================================================================
# Tests for docmatch.terms: semester / academic year extraction
# =============================================================================

import pytest

from docmatch import check_submission_period, extract_academic_year, extract_term
from docmatch.terms import describe_term_mismatch


# =============================================================================
# SECTION 1 -- extract_term
# =============================================================================

class TestExtractTerm:

    @pytest.mark.parametrize('text, expected', [
        ('1', '1'),
        (' 2 ', '2'),
        (3, '3'),
        ('ภาคเรียนที่ 2', '2'),
        ('ภาคการศึกษาที่ 1', '1'),
        ('ภาคที่ 3', '3'),
        ('เทอม 1', '1'),
        ('Semester 2', '2'),
        ('TERM 1', '1'),
        ('1/2567', '1'),
        ('ภาคเรียนที่ 1/2567', '1'),
        ('ภาค ปลาย 2', '2'),
    ])
    def test_patterns(self, text, expected):
        assert extract_term(text) == expected

    @pytest.mark.parametrize('text', [None, '', 'ไม่ระบุ', 'ปีการศึกษา 2567', 'ภาคฤดูร้อน'])
    def test_no_term(self, text):
        assert extract_term(text) is None


# =============================================================================
# SECTION 2 -- extract_academic_year
# =============================================================================

class TestExtractAcademicYear:

    @pytest.mark.parametrize('text, expected', [
        ('ปีการศึกษา 2567', '2567'),
        ('ปีการศึกษา2566', '2566'),
        ('Academic Year 2024', '2024'),
        ('2567-2568', '2567'),
        ('ภาคเรียนที่ 1/2567', '2567'),
        (2567, '2567'),
    ])
    def test_patterns(self, text, expected):
        assert extract_academic_year(text) == expected

    @pytest.mark.parametrize('text', [None, '', 'ไม่ระบุ', 'ภาคเรียนที่ 1'])
    def test_no_year(self, text):
        assert extract_academic_year(text) is None


# =============================================================================
# SECTION 3 -- submission period
# =============================================================================

class TestSubmissionPeriod:

    def test_matching_period(self):
        result = check_submission_period('ภาคเรียนที่ 1', 'ปีการศึกษา 2567', 1, 2567)
        assert result.term_matches is True
        assert result.year_matches is True
        assert result.overall is True
        assert describe_term_mismatch(result) is None

    def test_wrong_term(self):
        result = check_submission_period('ภาคเรียนที่ 2', '2567', '1', '2567')
        assert result.overall is False
        assert describe_term_mismatch(result) == 'เอกสารเป็นของภาคเรียนที่ 2 แต่ระบบเปิดรับเฉพาะภาคเรียนที่ 1'

    def test_wrong_term_and_year(self):
        result = check_submission_period('2', '2566', '1', '2567')
        assert (result.term_matches, result.year_matches) == (False, False)
        assert describe_term_mismatch(result) == (
            'เอกสารเป็นของภาคเรียนที่ 2 ปีการศึกษา 2566 '
            'แต่ระบบเปิดรับเฉพาะภาคเรียนที่ 1 ปีการศึกษา 2567'
        )

    def test_missing_values(self):
        result = check_submission_period(None, None, '1', '2567')
        assert result.extracted_term is None
        assert result.overall is False
        assert 'ไม่ระบุ' in describe_term_mismatch(result)


class TestYearBoundaries:

    @pytest.mark.parametrize('text', ['เลขที่เอกสาร 1256789', 'โทร 025671234', '12567-25689'])
    def test_year_inside_longer_number_is_ignored(self, text):
        assert extract_academic_year(text) is None

    def test_year_next_to_text(self):
        assert extract_academic_year('ปี2567') == '2567'
