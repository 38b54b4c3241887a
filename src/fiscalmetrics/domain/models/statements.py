# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Financial statement records supplied by the persistence collaborator.

Records arrive already fetched and in no particular order; sorting and
alignment are the engine's job. Every numeric field is nullable because
upstream filings routinely omit line items.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional, Union

from fiscalmetrics.domain.models.periods import PeriodType

Number = Union[float, int, Decimal]


@dataclass(frozen=True)
class IncomeStatement:
    """Income statement line items for one reporting period"""

    period_end_date: date
    period_type: PeriodType
    revenue: Optional[Number] = None
    gross_profit: Optional[Number] = None
    operating_income: Optional[Number] = None
    net_income: Optional[Number] = None
    eps: Optional[Number] = None  # basic EPS
    shares_outstanding: Optional[Number] = None


@dataclass(frozen=True)
class BalanceSheet:
    """Balance sheet snapshot at a period end"""

    period_end_date: date
    period_type: PeriodType
    total_assets: Optional[Number] = None
    total_liabilities: Optional[Number] = None
    total_equity: Optional[Number] = None
    cash_and_equivalents: Optional[Number] = None
    short_term_investments: Optional[Number] = None
    short_term_debt: Optional[Number] = None
    long_term_debt: Optional[Number] = None
    net_debt: Optional[Number] = None
    shares_outstanding: Optional[Number] = None


@dataclass(frozen=True)
class CashFlowStatement:
    """Cash flow line items for one reporting period"""

    period_end_date: date
    period_type: PeriodType
    operating_cash_flow: Optional[Number] = None
    capital_expenditures: Optional[Number] = None
    free_cash_flow: Optional[Number] = None


@dataclass(frozen=True)
class DailyPrice:
    """End-of-day OHLC quote"""

    price_date: date
    open: Optional[Number] = None
    high: Optional[Number] = None
    low: Optional[Number] = None
    close: Optional[Number] = None


StatementRecord = Union[IncomeStatement, BalanceSheet, CashFlowStatement]


@dataclass
class CompanyStatements:
    """Everything the persistence collaborator fetched for one company."""

    fiscal_year_end_month: Optional[int] = None
    currency: Optional[str] = None
    incomes: List[IncomeStatement] = field(default_factory=list)
    balance_sheets: List[BalanceSheet] = field(default_factory=list)
    cash_flows: List[CashFlowStatement] = field(default_factory=list)
    prices: List[DailyPrice] = field(default_factory=list)
    symbol: Optional[str] = None
