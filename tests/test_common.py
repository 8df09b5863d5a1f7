# =============================================================================
# Tests for thai_text.common: normalization, placeholders, honorific titles
# =============================================================================

import pytest

from thai_text import (
    digits_only,
    is_numeric_like,
    is_placeholder,
    normalize_name,
    normalize_text,
    remove_title,
    split_title,
    strip_title,
)


# =============================================================================
# SECTION 1 -- normalize_text
# =============================================================================

class TestNormalizeText:

    def test_trims_lowercases_and_collapses(self):
        assert normalize_text('  Hello    World  ') == 'hello world'

    def test_strips_punctuation(self):
        assert normalize_text('สมชาย, ใจดี!') == 'สมชาย ใจดี'

    def test_keeps_thai_digits_letters(self):
        assert normalize_text('ABC 123 กขค') == 'abc 123 กขค'

    def test_punctuation_between_spaces_leaves_single_space(self):
        assert normalize_text('a - b') == 'a b'

    def test_none_and_empty(self):
        assert normalize_text(None) == ''
        assert normalize_text('') == ''
        assert normalize_text('   ') == ''

    def test_non_string_input(self):
        assert normalize_text(240000) == '240000'

    def test_nikhahit_sara_aa_folds_to_sara_am(self):
        assert normalize_text('ตําบล') == normalize_text('ตำบล')

    @pytest.mark.parametrize('text', [
        '  Hello    World  ',
        'น.ส. สมหญิง  ใจดี',
        'a - b . c',
        '123/4 ม.5 ต.คลองเนื้อ',
        'ตํ.า',
        '\t\nMixed ไทย English 99 ​',
        '',
    ])
    def test_idempotent(self, text):
        once = normalize_text(text)
        assert normalize_text(once) == once


# =============================================================================
# SECTION 2 -- digits / placeholders
# =============================================================================

class TestDigitsAndPlaceholders:

    def test_digits_only_citizen_id(self):
        assert digits_only('1-2345-67890-12-3') == '1234567890123'

    def test_digits_only_none(self):
        assert digits_only(None) == ''

    def test_is_numeric_like(self):
        assert is_numeric_like('081-234-5678') is True
        assert is_numeric_like('(02) 123 4567') is True
        assert is_numeric_like(1234) is True
        assert is_numeric_like('abc') is False
        assert is_numeric_like('---') is False
        assert is_numeric_like(True) is False

    @pytest.mark.parametrize('value', [None, '', '   ', '-', '—', 'N/A', 'ไม่ระบุ', 'ไม่มีข้อมูล', {}, []])
    def test_placeholders(self, value):
        assert is_placeholder(value) is True

    @pytest.mark.parametrize('value', [0, 240000, 'สมชาย', '0', {'a': 1}])
    def test_real_values(self, value):
        assert is_placeholder(value) is False


# =============================================================================
# SECTION 3 -- titles
# =============================================================================

class TestTitles:

    def test_abbreviated_and_full_miss_are_equal(self):
        assert strip_title('น.ส. สมหญิง ใจดี') == strip_title('นางสาวสมหญิง ใจดี')
        assert strip_title('นางสาวสมหญิง ใจดี') == 'นางสาว สมหญิง ใจดี'

    def test_miss_is_not_mistaken_for_mrs(self):
        assert split_title('นางสาวสมศรี') == ('นางสาว', 'สมศรี')
        assert split_title('นางสมศรี') == ('นาง', 'สมศรี')

    @pytest.mark.parametrize('name, expected', [
        ('นส.สมหญิง ใจดี', 'นางสาว สมหญิง ใจดี'),
        ('น.ส สมหญิง ใจดี', 'นางสาว สมหญิง ใจดี'),
        ('ด.ช.สมปอง ใจดี', 'เด็กชาย สมปอง ใจดี'),
        ('ด.ญ. สมใจ ใจดี', 'เด็กหญิง สมใจ ใจดี'),
        ('เด็กชายสมปอง ใจดี', 'เด็กชาย สมปอง ใจดี'),
        ('นายสมชาย  ใจดี', 'นาย สมชาย ใจดี'),
    ])
    def test_canonical_forms(self, name, expected):
        assert strip_title(name) == expected

    def test_name_without_title_is_trimmed(self):
        assert strip_title('  สมชาย ใจดี ') == 'สมชาย ใจดี'

    def test_remove_title(self):
        assert remove_title('นายสมชาย ใจดี') == 'สมชาย ใจดี'
        assert remove_title('สมชาย ใจดี') == 'สมชาย ใจดี'

    def test_none(self):
        assert strip_title(None) == ''
        assert split_title(None) == ('', '')

    def test_normalize_name(self):
        assert normalize_name('น.ส. สมหญิง ใจดี') == normalize_name('นางสาวสมหญิง  ใจดี')
