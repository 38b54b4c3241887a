# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Domain Services

Pure fiscal-calendar, alignment and metric computations.
"""

from fiscalmetrics.domain.services.fiscal_calendar import (
    FiscalCalendar,
    fiscal_quarter_of,
    fiscal_year_end,
    is_leap_year,
    last_day_of_month,
    quarter_end,
)
from fiscalmetrics.domain.services.metrics_calculator import MetricsCalculator
from fiscalmetrics.domain.services.period_window import PeriodWindowGenerator
from fiscalmetrics.domain.services.quartile_ranker import apply_heat_map, calculate_quartiles
from fiscalmetrics.domain.services.statement_aligner import (
    AlignedPeriodBundle,
    StatementAligner,
    record_value,
    required_record_count,
)

__all__ = [
    "FiscalCalendar",
    "fiscal_year_end",
    "fiscal_quarter_of",
    "quarter_end",
    "is_leap_year",
    "last_day_of_month",
    "PeriodWindowGenerator",
    "StatementAligner",
    "AlignedPeriodBundle",
    "record_value",
    "required_record_count",
    "MetricsCalculator",
    "calculate_quartiles",
    "apply_heat_map",
]
