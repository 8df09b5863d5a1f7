# =============================================================================
# Tests for docmatch.rulesets
# =============================================================================

import pytest

from docmatch import ComparisonKind, RULESETS, UnknownCategoryError, get_ruleset, list_categories


class TestRulesets:

    @pytest.mark.parametrize('category', [
        'student_id_card', 'father_id_card', 'mother_id_card', 'guardian_id_card',
        'student_consent_form', 'father_consent_form',
        'father_income_cert', 'mother_income_cert', 'guardian_income_cert',
        'father_salary_cert', 'single_parent_income_cert', 'single_parent_salary_cert',
        'famo_income_cert', 'form_101', 'disbursement_form', 'tuition_expense',
        'family_status', 'legal_status',
    ])
    def test_registered(self, category):
        assert get_ruleset(category).category == category

    def test_unknown_category(self):
        with pytest.raises(UnknownCategoryError):
            get_ruleset('passport')

    def test_list_is_sorted(self):
        categories = list_categories()
        assert categories == sorted(RULESETS)

    def test_every_ruleset_names_a_person(self):
        for ruleset in RULESETS.values():
            assert len(ruleset) > 0
            assert any(rule.kind is ComparisonKind.FUZZY_NAME and rule.required for rule in ruleset)

    def test_modes(self):
        assert get_ruleset('single_parent_income_cert').mode == 'single_person'
        assert get_ruleset('famo_income_cert').mode == 'family'
        assert get_ruleset('form_101').role is None
        assert get_ruleset('mother_salary_cert').role == 'mother'

    def test_student_address_falls_back_to_current(self):
        address = [rule for rule in get_ruleset('student_id_card') if rule.extracted_key == 'address'][0]
        assert address.profile_key == 'addressPermanent'
        assert address.alternate_profile_keys == ('addressCurrent',)

    def test_certificates_are_age_checked(self):
        assert get_ruleset('father_income_cert').issue_date_key == 'issueDate'
        assert get_ruleset('student_id_card').issue_date_key is None
