# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Period Window Generator - consistent period windows for metrics and documents.

Emits N labeled reporting periods counting backward from an as-of date,
newest first. The sequence depends only on the fiscal-year-end month, the
granularity and the as-of date, never on which statements happen to exist,
so it is strictly descending with no gaps and no duplicates.
"""

import logging
from datetime import date
from typing import List, Union

from fiscalmetrics.domain.models.periods import FiscalPeriod, PeriodType
from fiscalmetrics.domain.services.fiscal_calendar import FiscalCalendar, previous_quarter

logger = logging.getLogger(__name__)


class PeriodWindowGenerator:
    """
    Generates display periods for a company's fiscal calendar.

    Example:
        generator = PeriodWindowGenerator(fiscal_year_end_month=12)
        periods = generator.generate_periods(4, PeriodType.QUARTERLY, date(2024, 3, 15))
        [p.display_label for p in periods]
        # ["FY2023", "Q3 2023", "Q2 2023", "Q1 2023"]
    """

    def __init__(self, fiscal_year_end_month: int = 12):
        self.calendar = FiscalCalendar(fiscal_year_end_month)

    @property
    def fiscal_year_end_month(self) -> int:
        return self.calendar.fiscal_year_end_month

    def generate_periods(
        self,
        period_count: int,
        period_type: Union[PeriodType, str],
        as_of_date: date,
    ) -> List[FiscalPeriod]:
        """
        Generate periods for display, newest first.

        Args:
            period_count: Number of periods to emit (non-positive yields none)
            period_type: PeriodType or "annual"/"quarterly"
            as_of_date: Date the window counts back from

        Returns:
            List of FiscalPeriod in strictly descending period_end_date order
        """
        period_type = PeriodType.parse(period_type)
        if period_count <= 0:
            return []

        if period_type is PeriodType.ANNUAL:
            periods = self._annual_periods(period_count, as_of_date)
        else:
            periods = self._quarterly_periods(period_count, as_of_date)

        logger.debug(
            f"Generated {len(periods)} {period_type.value} periods as of {as_of_date} "
            f"(FYE month {self.fiscal_year_end_month}): {periods[0].display_label} .. {periods[-1].display_label}"
        )
        return periods

    def _annual_periods(self, period_count: int, as_of_date: date) -> List[FiscalPeriod]:
        # Before the fiscal year end month, the current year's fiscal year is last year
        start_year = as_of_date.year
        if as_of_date.month < self.fiscal_year_end_month:
            start_year -= 1

        return [
            FiscalPeriod.build(
                period_end_date=self.calendar.fiscal_year_end(start_year - offset),
                period_type=PeriodType.ANNUAL,
                fiscal_year=start_year - offset,
            )
            for offset in range(period_count)
        ]

    def _quarterly_periods(self, period_count: int, as_of_date: date) -> List[FiscalPeriod]:
        fiscal_year, quarter = self.calendar.last_completed_quarter(as_of_date)

        periods = []
        for _ in range(period_count):
            periods.append(
                FiscalPeriod.build(
                    period_end_date=self.calendar.quarter_end(fiscal_year, quarter),
                    period_type=PeriodType.QUARTERLY,
                    fiscal_year=fiscal_year,
                    fiscal_quarter=quarter,
                )
            )
            fiscal_year, quarter = previous_quarter(fiscal_year, quarter)
        return periods
