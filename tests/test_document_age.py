# =============================================================================
# Tests for docmatch.document_age
# =============================================================================

from datetime import date, datetime

from docmatch import check_age


class TestCheckAge:

    def test_recent_buddhist_date(self, today):
        result = check_age('15/01/2567', 90, today)
        assert result.is_valid is True
        assert result.age_in_days == 17
        assert result.resolved_date == date(2024, 1, 15)
        assert result.converted_from_buddhist is True

    def test_too_old(self, today):
        result = check_age('2023-01-01', 90, today)
        assert result.is_valid is False
        assert result.age_in_days == 396

    def test_future_date_is_invalid(self, today):
        result = check_age('2024-03-01', 90, today)
        assert result.is_valid is False
        assert result.age_in_days == -29

    def test_limit_is_inclusive(self):
        assert check_age('2024-01-01', 90, date(2024, 3, 31)).is_valid is True
        assert check_age('2024-01-01', 90, date(2024, 4, 1)).is_valid is False

    def test_date_embedded_in_text(self, today):
        result = check_age('ออกให้ ณ วันที่ 15 มกราคม 2567', 90, today)
        assert result.resolved_date == date(2024, 1, 15)
        assert result.is_valid is True

    def test_now_as_datetime(self):
        result = check_age('2024-01-31', 90, datetime(2024, 2, 1, 23, 59))
        assert result.age_in_days == 1

    def test_unresolvable_is_unknown_not_invalid(self, today):
        for raw in (None, '', 'ไม่ทราบวันที่', '31/02/2567'):
            result = check_age(raw, 90, today)
            assert result.is_valid is None
            assert result.age_in_days is None
            assert result.resolved_date is None

    def test_to_dict(self, today):
        data = check_age('15/01/2567', 90, today).to_dict()
        assert data == {
            'isValid': True,
            'ageInDays': 17,
            'resolvedDate': '2024-01-15',
            'rawDate': '15/01/2567',
            'convertedFromBuddhist': True,
        }
