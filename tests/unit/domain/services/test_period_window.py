"""
Unit tests for PeriodWindowGenerator.

Tests window ordering, labeling, idempotence and fiscal year end variations.
"""

from datetime import date

import pytest

from fiscalmetrics.domain.models.periods import PeriodType
from fiscalmetrics.domain.services.period_window import PeriodWindowGenerator


def _summary(periods):
    return [(p.period_end_date, p.display_label) for p in periods]


class TestQuarterlyWindow:
    """Tests for quarterly period generation."""

    def test_december_fye_mid_quarter(self):
        """Test the window starts at the last completed quarter."""
        periods = PeriodWindowGenerator(12).generate_periods(4, PeriodType.QUARTERLY, date(2024, 3, 15))

        assert _summary(periods) == [
            (date(2023, 12, 31), "FY2023"),
            (date(2023, 9, 30), "Q3 2023"),
            (date(2023, 6, 30), "Q2 2023"),
            (date(2023, 3, 31), "Q1 2023"),
        ]

    def test_quarter_fields(self):
        """Test fiscal year and quarter are populated."""
        newest = PeriodWindowGenerator(12).generate_periods(1, "quarterly", date(2024, 3, 15))[0]

        assert newest.fiscal_year == 2023
        assert newest.fiscal_quarter == 4
        assert newest.period_type is PeriodType.QUARTERLY

    def test_march_fye(self):
        """Test quarters for a March FYE company."""
        periods = PeriodWindowGenerator(3).generate_periods(3, PeriodType.QUARTERLY, date(2024, 6, 30))

        assert _summary(periods) == [
            (date(2024, 6, 30), "Q1 2025"),
            (date(2024, 3, 31), "FY2024"),
            (date(2023, 12, 31), "Q3 2024"),
        ]

    def test_february_fye_leap_day(self):
        """Test a February FYE window includes the leap day."""
        periods = PeriodWindowGenerator(2).generate_periods(2, PeriodType.QUARTERLY, date(2024, 3, 10))

        assert _summary(periods) == [
            (date(2024, 2, 29), "FY2024"),
            (date(2023, 11, 30), "Q3 2024"),
        ]

    def test_january_fye(self):
        """Test a January FYE window."""
        periods = PeriodWindowGenerator(1).generate_periods(2, PeriodType.QUARTERLY, date(2024, 2, 15))

        assert _summary(periods) == [
            (date(2024, 1, 31), "FY2024"),
            (date(2023, 10, 31), "Q3 2024"),
        ]


class TestAnnualWindow:
    """Tests for annual period generation."""

    def test_before_fye_month_uses_prior_year(self):
        """Test an as-of date before the FYE month starts at last year."""
        periods = PeriodWindowGenerator(12).generate_periods(3, PeriodType.ANNUAL, date(2024, 3, 15))

        assert _summary(periods) == [
            (date(2023, 12, 31), "FY2023"),
            (date(2022, 12, 31), "FY2022"),
            (date(2021, 12, 31), "FY2021"),
        ]
        assert all(p.fiscal_quarter is None for p in periods)

    def test_in_fye_month_uses_current_year(self):
        """Test the FYE month itself starts at the current year."""
        periods = PeriodWindowGenerator(12).generate_periods(1, "annual", date(2024, 12, 31))

        assert _summary(periods) == [(date(2024, 12, 31), "FY2024")]

    def test_march_fye_after_year_end(self):
        """Test an as-of date after a March FYE."""
        periods = PeriodWindowGenerator(3).generate_periods(2, PeriodType.ANNUAL, date(2024, 6, 30))

        assert _summary(periods) == [
            (date(2024, 3, 31), "FY2024"),
            (date(2023, 3, 31), "FY2023"),
        ]

    def test_february_fye_leap_years(self):
        """Test annual February year ends alternate between 28 and 29 days."""
        periods = PeriodWindowGenerator(2).generate_periods(2, PeriodType.ANNUAL, date(2024, 5, 1))

        assert [p.period_end_date for p in periods] == [date(2024, 2, 29), date(2023, 2, 28)]


class TestWindowProperties:
    """Property-style checks across every FYE month."""

    @pytest.mark.parametrize("fye_month", range(1, 13))
    @pytest.mark.parametrize("period_type", [PeriodType.QUARTERLY, PeriodType.ANNUAL])
    def test_strictly_descending_without_duplicates(self, fye_month, period_type):
        """Test exact count, strict descending order and unique dates."""
        for as_of in (date(2024, 1, 1), date(2024, 2, 29), date(2024, 7, 15), date(2023, 12, 31)):
            periods = PeriodWindowGenerator(fye_month).generate_periods(12, period_type, as_of)
            dates = [p.period_end_date for p in periods]

            assert len(periods) == 12
            assert all(a > b for a, b in zip(dates, dates[1:]))
            assert len(set(dates)) == 12

    @pytest.mark.parametrize("fye_month", range(1, 13))
    def test_fourth_quarter_always_labeled_fiscal_year(self, fye_month):
        """Test Q4 labels render as FY{year}."""
        periods = PeriodWindowGenerator(fye_month).generate_periods(8, PeriodType.QUARTERLY, date(2024, 7, 15))

        for period in periods:
            if period.fiscal_quarter == 4:
                assert period.display_label == f"FY{period.fiscal_year}"
            else:
                assert period.display_label == f"Q{period.fiscal_quarter} {period.fiscal_year}"

    @pytest.mark.parametrize("fye_month", range(1, 13))
    def test_quarterly_window_never_exceeds_as_of(self, fye_month):
        """Test the newest quarter has already ended."""
        as_of = date(2024, 5, 17)
        newest = PeriodWindowGenerator(fye_month).generate_periods(1, PeriodType.QUARTERLY, as_of)[0]

        assert newest.period_end_date <= as_of

    def test_idempotent(self):
        """Test identical inputs produce identical output."""
        generator = PeriodWindowGenerator(9)
        first = generator.generate_periods(10, PeriodType.QUARTERLY, date(2024, 3, 15))
        second = generator.generate_periods(10, PeriodType.QUARTERLY, date(2024, 3, 15))

        assert first == second
        assert [p.to_dict() for p in first] == [p.to_dict() for p in second]


class TestWindowEdgeCases:
    """Tests for degenerate and invalid inputs."""

    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_count_returns_empty(self, count):
        """Test a non-positive count yields no periods."""
        assert PeriodWindowGenerator(12).generate_periods(count, PeriodType.QUARTERLY, date(2024, 3, 15)) == []

    def test_unknown_period_type(self):
        """Test an unknown period type raises."""
        with pytest.raises(ValueError):
            PeriodWindowGenerator(12).generate_periods(4, "monthly", date(2024, 3, 15))

    def test_invalid_fye_month(self):
        """Test an invalid FYE month raises at construction."""
        with pytest.raises(ValueError):
            PeriodWindowGenerator(13)
