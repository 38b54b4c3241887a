# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Domain Models

Value objects for fiscal periods, statement records and computed metrics.
"""

from fiscalmetrics.domain.models.metrics import (
    NOT_AVAILABLE,
    DerivedMetric,
    MetricRow,
    MetricsReport,
    MetricValue,
)
from fiscalmetrics.domain.models.periods import FiscalPeriod, PeriodType, format_label
from fiscalmetrics.domain.models.statements import (
    BalanceSheet,
    CashFlowStatement,
    DailyPrice,
    IncomeStatement,
    CompanyStatements,
    StatementRecord,
)

__all__ = [
    "PeriodType",
    "FiscalPeriod",
    "format_label",
    "CompanyStatements",
    "StatementRecord",
    "IncomeStatement",
    "BalanceSheet",
    "CashFlowStatement",
    "DailyPrice",
    "MetricValue",
    "MetricRow",
    "MetricsReport",
    "DerivedMetric",
    "NOT_AVAILABLE",
]
