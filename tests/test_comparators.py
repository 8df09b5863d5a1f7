# =============================================================================
# Tests for docmatch.comparators
# =============================================================================

import dataclasses

import pytest

from docmatch import ComparisonKind, EngineConfig, FieldRule
from docmatch.comparators import (
    FieldComparison,
    compare_exact,
    compare_field,
    compare_name,
    compare_numeric,
    parse_amount,
)


# =============================================================================
# SECTION 1 -- FieldRule construction
# =============================================================================

class TestFieldRule:

    def test_kind_string_is_coerced(self):
        rule = FieldRule('name', 'name', 'ชื่อ', 'fuzzyName')
        assert rule.kind is ComparisonKind.FUZZY_NAME

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            FieldRule('name', 'name', 'ชื่อ', 'soundex')

    def test_rule_is_frozen(self):
        rule = FieldRule('name', 'name', 'ชื่อ', ComparisonKind.FUZZY_NAME)
        with pytest.raises(dataclasses.FrozenInstanceError):
            rule.required = True

    def test_alternate_keys_become_tuple(self):
        rule = FieldRule('address', 'addressPermanent', 'ที่อยู่', 'address',
                         alternate_profile_keys=['addressCurrent'])
        assert rule.alternate_profile_keys == ('addressCurrent',)


# =============================================================================
# SECTION 2 -- numbers
# =============================================================================

class TestParseAmount:

    @pytest.mark.parametrize('value, expected', [
        ('240,000', 240000),
        ('240,000 บาท', 240000),
        ('25,000.50 บาท', 25000),
        ('฿ 12,345.00', 12345),
        (20000.0, 20000),
        (18000, 18000),
    ])
    def test_amounts(self, value, expected):
        assert parse_amount(value) == expected

    @pytest.mark.parametrize('value', [None, '', 'ไม่มีรายได้', True])
    def test_no_digits(self, value):
        assert parse_amount(value) is None


class TestCompareNumeric:

    def test_within_twenty_percent(self):
        result = compare_numeric(216000, 240000)
        assert (result.match, result.warn) == (True, False)

    def test_within_thirty_percent_warns(self):
        result = compare_numeric(180000, 240000)
        assert (result.match, result.warn) == (True, True)
        assert result.difference == 60000

    def test_outside_thirty_percent(self):
        result = compare_numeric(100000, 240000)
        assert (result.match, result.warn) == (False, False)

    def test_string_amounts(self):
        assert compare_numeric('240,000 บาท', '240000').match is True

    @pytest.mark.parametrize('profile', [0, '0', None, '-'])
    def test_unusable_profile_is_insufficient(self, profile):
        assert compare_numeric(100000, profile) is None

    def test_unparseable_extracted_is_mismatch(self):
        result = compare_numeric('ไม่ระบุจำนวน', 240000)
        assert result.match is False

    def test_bands_come_from_config(self):
        config = EngineConfig(numeric_tolerance=0.1, numeric_warn_tolerance=0.15)
        result = compare_numeric(210000, 240000, config)
        assert (result.match, result.warn) == (True, True)


# =============================================================================
# SECTION 3 -- names and exact values
# =============================================================================

class TestCompareName:

    def test_title_forms_match(self):
        assert compare_name('น.ส. สมหญิง ใจดี', 'นางสาวสมหญิง ใจดี') == (True, False)

    def test_title_on_one_side_only(self):
        assert compare_name('นายสมชาย ใจดี', 'สมชาย ใจดี') == (True, False)

    def test_containment_warns(self):
        assert compare_name('สมชาย ใจดี', 'นายสมชาย ใจดีมาก') == (True, True)

    def test_different_names(self):
        assert compare_name('สมชาย ใจดี', 'สมหญิง รักดี') == (False, False)

    def test_empty_side(self):
        assert compare_name('', 'สมชาย ใจดี') == (False, False)


class TestCompareExact:

    def test_citizen_id_with_dashes(self):
        assert compare_exact('1-2345-67890-12-3', '1234567890123') is True

    def test_phone_with_separators(self):
        assert compare_exact('081-234-5678', '0812345678') is True

    def test_text_is_normalized(self):
        assert compare_exact('Sompong@Example.com', 'sompong@example.com') is True

    def test_different_ids(self):
        assert compare_exact('1234567890123', '1234567890124') is False

    def test_empty_never_matches(self):
        assert compare_exact('', '') is False


# =============================================================================
# SECTION 4 -- dispatch
# =============================================================================

class TestCompareField:

    def test_name_warning_uses_label(self):
        rule = FieldRule('name', 'name', 'ชื่อ-นามสกุล', 'fuzzyName')
        result = compare_field(rule, 'สมชาย ใจดี', 'สมชาย ใจดีมาก')
        assert result == FieldComparison(True, 'ชื่อ-นามสกุล ใกล้เคียงกัน แต่ไม่ตรงทุกตัวอักษร')

    def test_numeric_warning_mentions_difference(self):
        rule = FieldRule('annualIncome', 'annualIncome', 'รายได้ต่อปี', 'numericTolerant')
        result = compare_field(rule, 180000, 240000)
        assert result.matched is True
        assert result.warning == 'รายได้ต่อปี ใกล้เคียงกัน แต่ต่างกัน 60,000 บาท'

    def test_numeric_insufficient_profile(self):
        rule = FieldRule('annualIncome', 'annualIncome', 'รายได้ต่อปี', 'numericTolerant')
        assert compare_field(rule, 180000, 0) is None

    def test_unparseable_date_is_mismatch_with_warning(self):
        rule = FieldRule('birthDate', 'birthDate', 'วันเกิด', 'date')
        result = compare_field(rule, 'ไม่ชัดเจน', '1997-05-01')
        assert result.matched is False
        assert result.warning == 'ไม่สามารถอ่านวันเกิดในเอกสารได้'

    def test_date_match(self):
        rule = FieldRule('birthDate', 'birthDate', 'วันเกิด', 'date')
        assert compare_field(rule, '01/05/2540', '1997-05-01') == FieldComparison(True)

    def test_address_match(self):
        rule = FieldRule('address', 'addressCurrent', 'ที่อยู่', 'address')
        result = compare_field(
            rule,
            '123 หมู่4 ต.คลองเนื้อ อ.คลองสามวา กรุงเทพ 10510',
            '123 หมู่ 4 ตำบลคลองเนื้อ อำเภอคลองสามวา กรุงเทพมหานคร 10510',
        )
        assert result == FieldComparison(True)

    def test_unreadable_address_warns(self):
        rule = FieldRule('address', 'addressCurrent', 'ที่อยู่', 'address')
        result = compare_field(rule, '...', '1 ตำบลคลองเนื้อ')
        assert result.matched is False
        assert result.warning is not None

    def test_occupation_group_warning(self):
        rule = FieldRule('occupation', 'occupation', 'อาชีพ', 'flexibleOccupation')
        result = compare_field(rule, 'ค้าขาย', 'ธุรกิจส่วนตัว')
        assert result.matched is True
        assert result.warning == 'อาชีพ ใกล้เคียงกัน: เอกสาร="ค้าขาย" โปรไฟล์="ธุรกิจส่วนตัว"'


# =============================================================================
# SECTION 5 -- unreadable values
# =============================================================================

class TestNonFiniteAmounts:

    @pytest.mark.parametrize('value', [float('nan'), float('inf'), float('-inf')])
    def test_parse_amount(self, value):
        assert parse_amount(value) is None

    def test_extracted_nan_is_mismatch(self):
        result = compare_numeric(float('nan'), 240000)
        assert (result.match, result.warn) == (False, False)

    def test_profile_infinity_is_insufficient(self):
        assert compare_numeric(240000, float('inf')) is None


class TestTitleOnlyNames:

    @pytest.mark.parametrize('extracted, profile', [
        ('นาย', 'นายสมชาย ใจดี'),
        ('นายสมชาย ใจดี', 'นาง'),
        ('น.ส.', 'นางสาว'),
    ])
    def test_never_matches(self, extracted, profile):
        assert compare_name(extracted, profile) == (False, False)


class TestIdentifierExact:

    def test_letter_prefixed_student_id(self):
        assert compare_exact('B6641214', '6641214', identifier=True) is True
        assert compare_exact('B6641214', '6641215', identifier=True) is False

    def test_plain_exact_keeps_text_equality(self):
        assert compare_exact('B6641214', '6641214') is False

    def test_identifier_without_digits_falls_back_to_text(self):
        assert compare_exact('ไม่ทราบ', 'ไม่ทราบ', identifier=True) is True

    def test_rule_flag_reaches_comparator(self):
        rule = FieldRule('studentId', 'studentId', 'รหัสนักศึกษา', 'exact', identifier=True)
        assert compare_field(rule, 'B6641214', '6641214') == FieldComparison(True)
