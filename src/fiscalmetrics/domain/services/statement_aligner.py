# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Statement Aligner - maps irregular statement records onto generated periods.

Alignment policy:
- The trailing N income records of the requested period type are the
  "current" series, paired with the N newest periods (oldest to newest).
- Prior-year comparable is a fixed index offset into the full sorted income
  sequence (4 back for quarterly, 1 back for annual). It is NOT a date match:
  a missing quarter upstream shifts every later comparable by one record.
- Prior-period comparable is the previous record within the current series.
- Balance sheet and cash flow records are matched on the exact period end
  date (and period type) of the current income record.
- Price is the latest quote on or before the period end date.

The aligner never fabricates values. Anything it cannot find is None.

Example:
    aligner = StatementAligner()
    bundles = aligner.align(periods, incomes, balances, cash_flows, prices)
    bundles[-1].current.revenue   # newest period
"""

import logging
from bisect import bisect_right
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar, Union

from fiscalmetrics.domain.models.periods import FiscalPeriod, PeriodType
from fiscalmetrics.domain.models.statements import (
    BalanceSheet,
    CashFlowStatement,
    DailyPrice,
    IncomeStatement,
    StatementRecord,
)
from fiscalmetrics.domain.services.safe_formatters import to_finite_float

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", IncomeStatement, BalanceSheet, CashFlowStatement)


def record_value(record: Optional[Any], field_name: str) -> Optional[float]:
    """
    Look up a numeric field with the missing-data policy applied.

    Returns None when the record is absent, the field is absent or None, or
    the stored value is not a finite number. This is the only place the
    engine unwraps statement fields.
    """
    if record is None:
        return None
    return to_finite_float(getattr(record, field_name, None))


def required_record_count(period_count: int, period_type: Union[PeriodType, str]) -> int:
    """
    Number of records the persistence collaborator should fetch per kind so
    every displayed period can have a prior-year comparable.
    """
    period_type = PeriodType.parse(period_type)
    return max(period_count, 0) + period_type.prior_year_offset


@dataclass(frozen=True)
class AlignedPeriodBundle:
    """Statement records resolved for one requested period"""

    period: FiscalPeriod
    current: Optional[IncomeStatement] = None
    prior_year: Optional[IncomeStatement] = None
    prior_period: Optional[IncomeStatement] = None
    balance_sheet: Optional[BalanceSheet] = None
    cash_flow: Optional[CashFlowStatement] = None
    price: Optional[DailyPrice] = None

    @property
    def has_data(self) -> bool:
        return self.current is not None


class StatementAligner:
    """Builds AlignedPeriodBundles from unsorted statement collections."""

    def align(
        self,
        periods: Sequence[FiscalPeriod],
        incomes: Iterable[IncomeStatement],
        balance_sheets: Iterable[BalanceSheet] = (),
        cash_flows: Iterable[CashFlowStatement] = (),
        prices: Iterable[DailyPrice] = (),
    ) -> List[AlignedPeriodBundle]:
        """
        Align statements onto periods.

        Args:
            periods: Generated periods in any order (all of one period type)
            incomes: Income statements, any order, any period type
            balance_sheets: Balance sheets, any order
            cash_flows: Cash flow statements, any order
            prices: Daily prices, any order

        Returns:
            One bundle per period, oldest period first
        """
        if not periods:
            return []

        ordered_periods = sorted(periods, key=lambda p: p.period_end_date)
        period_type = ordered_periods[0].period_type

        sorted_incomes = self.sort_records(incomes, period_type)
        balance_by_date = self._index_by_date(self.sort_records(balance_sheets, period_type))
        cash_flow_by_date = self._index_by_date(self.sort_records(cash_flows, period_type))
        price_dates, sorted_prices = self._sort_prices(prices)

        period_count = len(ordered_periods)
        start_idx = max(len(sorted_incomes) - period_count, 0)
        current_series = sorted_incomes[start_idx:]
        # Right-align so the newest record lands on the newest period
        padding = period_count - len(current_series)
        offset = period_type.prior_year_offset

        bundles = []
        for position, period in enumerate(ordered_periods):
            series_idx = position - padding
            if series_idx < 0:
                bundles.append(AlignedPeriodBundle(period=period))
                continue

            current = current_series[series_idx]
            prior_year_idx = start_idx + series_idx - offset
            prior_year = sorted_incomes[prior_year_idx] if prior_year_idx >= 0 else None
            prior_period = current_series[series_idx - 1] if series_idx > 0 else None

            bundles.append(
                AlignedPeriodBundle(
                    period=period,
                    current=current,
                    prior_year=prior_year,
                    prior_period=prior_period,
                    balance_sheet=balance_by_date.get(current.period_end_date),
                    cash_flow=cash_flow_by_date.get(current.period_end_date),
                    price=self._price_on_or_before(price_dates, sorted_prices, current.period_end_date),
                )
            )

        if padding > 0:
            logger.debug(
                f"Only {len(current_series)} {period_type.value} income records for {period_count} periods; "
                f"{padding} oldest periods left empty"
            )
        return bundles

    @staticmethod
    def sort_records(records: Iterable[RecordT], period_type: PeriodType) -> List[RecordT]:
        """Keep records of the requested period type, sorted ascending by period end date."""
        matching = []
        dropped = 0
        for record in records:
            if record is None:
                continue
            if record.period_type is period_type:
                matching.append(record)
            else:
                dropped += 1
        if dropped:
            logger.debug(f"Ignored {dropped} records not of period type {period_type.value}")
        return sorted(matching, key=lambda r: r.period_end_date)

    @staticmethod
    def _index_by_date(records: Sequence[StatementRecord]) -> Dict[date, StatementRecord]:
        indexed: Dict[date, StatementRecord] = {}
        for record in records:
            # First record on a date wins
            indexed.setdefault(record.period_end_date, record)
        return indexed

    @staticmethod
    def _sort_prices(prices: Iterable[DailyPrice]) -> Tuple[List[date], List[DailyPrice]]:
        ordered = sorted((p for p in prices if p is not None), key=lambda p: p.price_date)
        return [p.price_date for p in ordered], ordered

    @staticmethod
    def _price_on_or_before(
        price_dates: List[date], prices: List[DailyPrice], target: date
    ) -> Optional[DailyPrice]:
        idx = bisect_right(price_dates, target)
        return prices[idx - 1] if idx > 0 else None
