# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Metric value objects returned to the presentation collaborator.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, List, Optional

from fiscalmetrics.domain.models.periods import FiscalPeriod, PeriodType

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class MetricValue:
    """One computed metric for one period"""

    value: Optional[float]
    formatted_value: str
    unit: str
    heat_map_quartile: Optional[int] = None  # 1-4

    @classmethod
    def missing(cls, unit: str) -> "MetricValue":
        return cls(value=None, formatted_value=NOT_AVAILABLE, unit=unit)

    @property
    def is_available(self) -> bool:
        return self.value is not None

    def with_quartile(self, quartile: Optional[int]) -> "MetricValue":
        return replace(self, heat_map_quartile=quartile)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "formatted": self.formatted_value,
            "unit": self.unit,
            "heat_map_quartile": self.heat_map_quartile,
        }


@dataclass(frozen=True)
class MetricRow:
    """A named metric across every requested period"""

    metric_name: str
    display_name: str
    values: List[MetricValue]
    heat_map_enabled: bool = True

    def to_dict(self, labels: Optional[List[str]] = None) -> Dict[str, Any]:
        labels = labels or []
        values = []
        for i, metric in enumerate(self.values):
            entry = metric.to_dict()
            entry["period"] = labels[i] if i < len(labels) else ""
            values.append(entry)
        return {
            "metric_name": self.metric_name,
            "display_name": self.display_name,
            "values": values,
            "heat_map_enabled": self.heat_map_enabled,
        }


@dataclass(frozen=True)
class DerivedMetric:
    """Flat metric record handed to the persistence collaborator"""

    period_end_date: date
    period_type: PeriodType
    metric_name: str
    value: float


@dataclass
class MetricsReport:
    """Metrics for one company request, grouped into display sections."""

    period_type: PeriodType
    fiscal_periods: List[FiscalPeriod]  # newest first
    sections: Dict[str, List[MetricRow]] = field(default_factory=dict)
    snapshot: Dict[str, MetricValue] = field(default_factory=dict)
    derived_metrics: List[DerivedMetric] = field(default_factory=list)
    currency: str = "USD"

    @property
    def periods(self) -> List[str]:
        return [p.display_label for p in self.fiscal_periods]

    def row(self, metric_name: str) -> Optional[MetricRow]:
        for rows in self.sections.values():
            for row in rows:
                if row.metric_name == metric_name:
                    return row
        return None

    def to_dict(self) -> Dict[str, Any]:
        labels = self.periods
        return {
            "period_type": self.period_type.value,
            "currency": self.currency,
            "periods": labels,
            "period_end_dates": [p.period_end_date.isoformat() for p in self.fiscal_periods],
            "sections": {
                name: [row.to_dict(labels) for row in rows] for name, rows in self.sections.items()
            },
            "snapshot": {name: metric.to_dict() for name, metric in self.snapshot.items()},
        }
