"""Test configuration helpers and fixtures."""

import sys
from datetime import date
from pathlib import Path
from typing import List

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

for candidate in (SRC, ROOT):
    candidate_str = str(candidate)
    if candidate.exists() and candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from fiscalmetrics.domain.models.periods import PeriodType  # noqa: E402
from fiscalmetrics.domain.models.statements import (  # noqa: E402
    BalanceSheet,
    CashFlowStatement,
    DailyPrice,
    IncomeStatement,
)

# Calendar-year quarter ends 2022-2023
QUARTER_ENDS = [
    date(2022, 3, 31),
    date(2022, 6, 30),
    date(2022, 9, 30),
    date(2022, 12, 31),
    date(2023, 3, 31),
    date(2023, 6, 30),
    date(2023, 9, 30),
    date(2023, 12, 31),
]


@pytest.fixture
def quarter_ends() -> List[date]:
    return list(QUARTER_ENDS)


@pytest.fixture
def quarterly_incomes() -> List[IncomeStatement]:
    """Eight quarters, revenue 1000 rising by 100 per quarter, 40/20/10 margins."""
    incomes = []
    for i, end in enumerate(QUARTER_ENDS):
        revenue = 1000.0 + 100.0 * i
        incomes.append(
            IncomeStatement(
                period_end_date=end,
                period_type=PeriodType.QUARTERLY,
                revenue=revenue,
                gross_profit=revenue * 0.4,
                operating_income=revenue * 0.2,
                net_income=revenue * 0.1,
                eps=5.0,
                shares_outstanding=15_550_000,
            )
        )
    return incomes


@pytest.fixture
def quarterly_balance_sheets() -> List[BalanceSheet]:
    return [
        BalanceSheet(period_end_date=end, period_type=PeriodType.QUARTERLY, net_debt=500.0)
        for end in QUARTER_ENDS
    ]


@pytest.fixture
def quarterly_cash_flows() -> List[CashFlowStatement]:
    return [
        CashFlowStatement(
            period_end_date=end,
            period_type=PeriodType.QUARTERLY,
            operating_cash_flow=300.0,
            capital_expenditures=-100.0,
            free_cash_flow=200.0,
        )
        for end in QUARTER_ENDS
    ]


@pytest.fixture
def quarterly_prices() -> List[DailyPrice]:
    """One quote two days before each quarter end."""
    return [
        DailyPrice(
            price_date=date(end.year, end.month, end.day - 2),
            open=148.0,
            high=155.0,
            low=145.0,
            close=150.0,
        )
        for end in QUARTER_ENDS
    ]
