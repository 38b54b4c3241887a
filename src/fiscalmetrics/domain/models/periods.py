# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Fiscal period value objects.

A FiscalPeriod is generated fresh per request and never persisted. Its
display label is derived from the period type, fiscal year and quarter so
two periods with the same coordinates always render identically.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional


class PeriodType(Enum):
    """Reporting granularity"""

    ANNUAL = "annual"
    QUARTERLY = "quarterly"

    @classmethod
    def parse(cls, value: Any) -> "PeriodType":
        """
        Parse a period type from user or collaborator input.

        Examples:
            >>> PeriodType.parse("Quarterly")
            <PeriodType.QUARTERLY: 'quarterly'>

        Raises:
            ValueError: If the value is not "annual" or "quarterly"
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Period type cannot be empty, got {value!r}")

        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member

        raise ValueError(f"Unknown period type: '{value}'. Supported: {[m.value for m in cls]}")

    @property
    def prior_year_offset(self) -> int:
        """Number of records between a period and its same-period-prior-year comparable."""
        return 4 if self is PeriodType.QUARTERLY else 1


def format_label(period_type: PeriodType, fiscal_year: int, fiscal_quarter: Optional[int] = None) -> str:
    """
    Build the display label for a period.

    Annual periods and the fourth fiscal quarter both render as "FY{year}";
    other quarters render as "Q{q} {year}".
    """
    if period_type is PeriodType.ANNUAL:
        return f"FY{fiscal_year}"

    quarter = fiscal_quarter if fiscal_quarter is not None else 4
    if quarter == 4:
        return f"FY{fiscal_year}"
    return f"Q{quarter} {fiscal_year}"


@dataclass(frozen=True)
class FiscalPeriod:
    """A single labeled reporting period"""

    period_end_date: date
    period_type: PeriodType
    fiscal_year: int
    fiscal_quarter: Optional[int]  # None for annual
    display_label: str  # e.g. "FY2024", "Q3 2024"

    @classmethod
    def build(
        cls,
        period_end_date: date,
        period_type: PeriodType,
        fiscal_year: int,
        fiscal_quarter: Optional[int] = None,
    ) -> "FiscalPeriod":
        """Create a period with its label derived from the other fields."""
        return cls(
            period_end_date=period_end_date,
            period_type=period_type,
            fiscal_year=fiscal_year,
            fiscal_quarter=fiscal_quarter,
            display_label=format_label(period_type, fiscal_year, fiscal_quarter),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period_end_date": self.period_end_date.isoformat(),
            "period_type": self.period_type.value,
            "fiscal_year": self.fiscal_year,
            "fiscal_quarter": self.fiscal_quarter,
            "display_label": self.display_label,
        }

    def __str__(self) -> str:
        return self.display_label
