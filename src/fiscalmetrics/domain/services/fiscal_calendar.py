# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Fiscal Calendar Math - date arithmetic for arbitrary fiscal-year-end months.

Fiscal Year Labeling Convention:
- The fiscal year is labeled by the calendar year in which it ENDS
- A March FYE company's FY2025 runs April 2024 through March 2025
- Quarter 1 is the first three months after the fiscal year end month

All period end dates are month ends; February honors the Gregorian
leap-year rule.

Usage:
    from fiscalmetrics.domain.services.fiscal_calendar import FiscalCalendar

    calendar = FiscalCalendar(fiscal_year_end_month=3)
    calendar.quarter_end(2025, 1)   # date(2024, 6, 30)
"""

import logging
from datetime import date
from typing import Tuple

logger = logging.getLogger(__name__)

_THIRTY_DAY_MONTHS = (4, 6, 9, 11)


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def last_day_of_month(year: int, month: int) -> int:
    """
    Number of days in a calendar month.

    Examples:
        >>> last_day_of_month(2024, 2)
        29
        >>> last_day_of_month(1900, 2)
        28
    """
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in _THIRTY_DAY_MONTHS:
        return 30
    return 31


def validate_fiscal_year_end_month(month: int) -> int:
    """
    Check the caller contract for a fiscal-year-end month.

    Raises:
        ValueError: If month is not an integer in 1-12
    """
    if isinstance(month, bool) or not isinstance(month, int):
        raise ValueError(f"fiscal_year_end_month must be an int, got {type(month).__name__}")
    if not 1 <= month <= 12:
        raise ValueError(f"fiscal_year_end_month must be 1-12, got {month}")
    return month


def fiscal_year_end(year: int, fye_month: int) -> date:
    """
    Last calendar day of the fiscal-year-end month in the given year.

    Examples:
        >>> fiscal_year_end(2024, 2)
        datetime.date(2024, 2, 29)
        >>> fiscal_year_end(2023, 6)
        datetime.date(2023, 6, 30)
    """
    return date(year, fye_month, last_day_of_month(year, fye_month))


def fiscal_quarter_of(day: date, fye_month: int) -> Tuple[int, int]:
    """
    Fiscal (year, quarter) containing a date.

    The fiscal year starts the month after fye_month. A date belongs to the
    fiscal year ending in its own calendar year when its month is on or
    before fye_month, otherwise to the next one.

    Examples:
        >>> fiscal_quarter_of(date(2024, 3, 15), 12)
        (2024, 1)
        >>> fiscal_quarter_of(date(2024, 5, 10), 3)   # April start
        (2025, 1)
    """
    start_month = (fye_month % 12) + 1
    fiscal_year = day.year if day.month <= fye_month else day.year + 1

    if day.month >= start_month:
        months_since_start = day.month - start_month
    else:
        months_since_start = day.month + 12 - start_month

    return fiscal_year, months_since_start // 3 + 1


def quarter_end(fiscal_year: int, quarter: int, fye_month: int) -> date:
    """
    End date of a fiscal quarter.

    If FYE is Dec (12): Q1=Mar, Q2=Jun, Q3=Sep, Q4=Dec of the same year.
    If FYE is Mar (3): Q1=Jun, Q2=Sep, Q3=Dec of the prior calendar year, Q4=Mar.

    Examples:
        >>> quarter_end(2025, 3, 3)
        datetime.date(2024, 12, 31)
    """
    target_month = ((fye_month + quarter * 3 - 1) % 12) + 1
    target_year = fiscal_year if target_month <= fye_month else fiscal_year - 1
    return date(target_year, target_month, last_day_of_month(target_year, target_month))


def previous_quarter(fiscal_year: int, quarter: int) -> Tuple[int, int]:
    """Step back one fiscal quarter, wrapping Q1 to Q4 of the prior year."""
    if quarter == 1:
        return fiscal_year - 1, 4
    return fiscal_year, quarter - 1


class FiscalCalendar:
    """
    Fiscal calendar bound to one company's fiscal-year-end month.

    Construction is the only place the month is validated; every method
    afterwards is pure date arithmetic.
    """

    def __init__(self, fiscal_year_end_month: int = 12):
        self.fiscal_year_end_month = validate_fiscal_year_end_month(fiscal_year_end_month)

    def fiscal_year_end(self, year: int) -> date:
        return fiscal_year_end(year, self.fiscal_year_end_month)

    def fiscal_quarter_of(self, day: date) -> Tuple[int, int]:
        return fiscal_quarter_of(day, self.fiscal_year_end_month)

    def quarter_end(self, fiscal_year: int, quarter: int) -> date:
        if not 1 <= quarter <= 4:
            raise ValueError(f"quarter must be 1-4, got {quarter}")
        return quarter_end(fiscal_year, quarter, self.fiscal_year_end_month)

    def last_completed_quarter(self, as_of_date: date) -> Tuple[int, int]:
        """
        Most recent fiscal quarter that has ended on or before as_of_date.

        Examples:
            >>> FiscalCalendar(12).last_completed_quarter(date(2024, 3, 15))
            (2023, 4)
            >>> FiscalCalendar(12).last_completed_quarter(date(2024, 3, 31))
            (2024, 1)
        """
        fiscal_year, quarter = self.fiscal_quarter_of(as_of_date)
        if self.quarter_end(fiscal_year, quarter) > as_of_date:
            fiscal_year, quarter = previous_quarter(fiscal_year, quarter)
        return fiscal_year, quarter

    def __repr__(self) -> str:
        return f"FiscalCalendar(fiscal_year_end_month={self.fiscal_year_end_month})"
