# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Metrics Service

High-level entry point for one company's metrics request. Runs the period
window, alignment, calculation and heat-map steps and groups the resulting
rows into display sections.

Usage:
    from fiscalmetrics.application.metrics_service import MetricsRequest, get_metrics_service
    from fiscalmetrics.domain.models import CompanyStatements

    service = get_metrics_service()
    report = service.compute(
        CompanyStatements(fiscal_year_end_month=12, currency="USD", incomes=incomes),
        MetricsRequest(period_type="quarterly", period_count=8, as_of_date=date(2024, 3, 15)),
    )
    report.to_dict()
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple, Union

from fiscalmetrics.config.settings import MetricsSettings, get_settings
from fiscalmetrics.domain.models.metrics import DerivedMetric, MetricRow, MetricsReport, MetricValue
from fiscalmetrics.domain.models.periods import PeriodType
from fiscalmetrics.domain.models.statements import CompanyStatements
from fiscalmetrics.domain.services.metrics_calculator import MetricsCalculator
from fiscalmetrics.domain.services.period_window import PeriodWindowGenerator
from fiscalmetrics.domain.services.quartile_ranker import apply_heat_map
from fiscalmetrics.domain.services.safe_formatters import resolve_currency_symbol
from fiscalmetrics.domain.services.statement_aligner import AlignedPeriodBundle, StatementAligner

logger = logging.getLogger(__name__)

SECTION_GROWTH_AND_MARGINS = "growth_and_margins"
SECTION_CASH_AND_LEVERAGE = "cash_and_leverage"
SECTION_VALUATION = "valuation"

# metric_name -> name used for the flat derived-metric records
DERIVED_METRIC_NAMES = {
    "revenue_growth_yoy": "yoy_revenue_growth_pct",
    "revenue_growth_qoq": "qoq_revenue_growth_pct",
    "revenue_acceleration": "growth_acceleration",
    "gross_margin": "gross_margin_pct",
    "operating_margin": "operating_margin_pct",
    "net_margin": "net_margin_pct",
    "ocf_margin": "ocf_revenue_pct",
    "fcf_margin": "fcf_revenue_pct",
    "leverage_ratio": "revenue_minus_net_debt_pct",
    "pe_ratio": "pe_ratio_historical",
}


@dataclass
class MetricsRequest:
    """Request parameters; None falls back to configured defaults."""

    period_type: Optional[Union[PeriodType, str]] = None
    period_count: Optional[int] = None
    as_of_date: Optional[date] = None
    heat_map: Optional[bool] = None


class MetricsService:
    """
    Coordinates the metrics pipeline for one company at a time.

    The service holds only configuration; every call builds its own
    generator, aligner and calculator, so one instance can serve
    concurrent requests.
    """

    def __init__(self, settings: Optional[MetricsSettings] = None):
        self.settings = settings or get_settings().metrics
        self.aligner = StatementAligner()

    def resolve_request(
        self, statements: CompanyStatements, request: Optional[MetricsRequest] = None
    ) -> Tuple[PeriodType, int, date, int, str, bool]:
        """
        Apply configured defaults to a request.

        Returns:
            (period_type, period_count, as_of_date, fye_month, currency_code, heat_map)

        Raises:
            ValueError: On an unknown period type or a non-positive period count
                (an out-of-range FYE month fails when the calendar is built)
        """
        request = request or MetricsRequest()
        period_type = PeriodType.parse(request.period_type or self.settings.default_period_type)
        period_count = request.period_count if request.period_count is not None else self.settings.default_period_count
        if period_count < 1:
            raise ValueError(f"period_count must be at least 1, got {period_count}")

        as_of_date = request.as_of_date or date.today()
        fye_month = (
            statements.fiscal_year_end_month
            if statements.fiscal_year_end_month is not None
            else self.settings.default_fiscal_year_end_month
        )
        currency = statements.currency or self.settings.default_currency
        heat_map = request.heat_map if request.heat_map is not None else self.settings.heat_map_enabled
        return period_type, period_count, as_of_date, fye_month, currency, heat_map

    def compute(self, statements: CompanyStatements, request: Optional[MetricsRequest] = None) -> MetricsReport:
        """
        Compute the metrics report for one company.

        Args:
            statements: Unsorted statement collections plus company metadata
            request: Period type, count, as-of date and heat-map switch

        Returns:
            MetricsReport whose rows follow the generated (newest first) period order
        """
        period_type, period_count, as_of_date, fye_month, currency, heat_map = self.resolve_request(
            statements, request
        )
        symbol = resolve_currency_symbol(currency, self.settings.currency_symbols)

        periods = PeriodWindowGenerator(fye_month).generate_periods(period_count, period_type, as_of_date)
        bundles = self.aligner.align(
            periods,
            statements.incomes,
            statements.balance_sheets,
            statements.cash_flows,
            statements.prices,
        )
        calculator = MetricsCalculator(currency=symbol)

        series = self._calculate_series(calculator, bundles)
        sections = self._build_sections(series, heat_map)
        latest_income = next((b.current for b in reversed(bundles) if b.current is not None), None)
        snapshot = calculator.calculate_snapshot_metrics(statements.prices, latest_income)

        report = MetricsReport(
            period_type=period_type,
            fiscal_periods=periods,
            sections=sections,
            snapshot=snapshot,
            derived_metrics=self._derived_metrics(series, bundles),
            currency=currency,
        )

        populated = sum(1 for b in bundles if b.has_data)
        logger.info(
            f"Computed {period_type.value} metrics{' for ' + statements.symbol if statements.symbol else ''}: "
            f"{populated}/{len(bundles)} periods with statements, FYE month {fye_month}, as of {as_of_date}"
        )
        return report

    @staticmethod
    def _calculate_series(
        calculator: MetricsCalculator, bundles: Sequence[AlignedPeriodBundle]
    ) -> Dict[str, List[MetricValue]]:
        """All metric series in ascending period order, keyed by metric name."""
        revenue, yoy, qoq = calculator.calculate_revenue_metrics(bundles)
        gross, operating, net = calculator.calculate_margin_metrics(bundles)
        ocf, fcf = calculator.calculate_cash_metrics(bundles)
        leverage, shares = calculator.calculate_leverage_metrics(bundles)
        valuation = calculator.calculate_valuation_metrics(bundles)

        return {
            "revenue": revenue,
            "revenue_growth_yoy": yoy,
            "revenue_growth_qoq": qoq,
            "revenue_acceleration": calculator.calculate_revenue_acceleration(yoy),
            "gross_margin": gross,
            "operating_margin": operating,
            "net_margin": net,
            "gross_margin_expansion": calculator.calculate_expansion_metrics(gross),
            "operating_margin_expansion": calculator.calculate_expansion_metrics(operating),
            "net_margin_expansion": calculator.calculate_expansion_metrics(net),
            "ocf_margin": ocf,
            "fcf_margin": fcf,
            "leverage_ratio": leverage,
            "shares_outstanding": shares,
            "open_to_revenue": valuation["open_ratios"],
            "high_to_revenue": valuation["high_ratios"],
            "low_to_revenue": valuation["low_ratios"],
            "close_to_revenue": valuation["close_ratios"],
            "pe_ratio": valuation["pe_ratios"],
        }

    @staticmethod
    def _build_sections(series: Dict[str, List[MetricValue]], heat_map: bool) -> Dict[str, List[MetricRow]]:
        layout = {
            SECTION_GROWTH_AND_MARGINS: [
                ("revenue", "Revenue"),
                ("revenue_growth_yoy", "Revenue Growth (YoY)"),
                ("revenue_growth_qoq", "Revenue Growth (QoQ)"),
                ("revenue_acceleration", "Revenue Acceleration"),
                ("gross_margin", "Gross Margin"),
                ("operating_margin", "Operating Margin"),
                ("net_margin", "Net Margin"),
                ("gross_margin_expansion", "Gross Margin Expansion"),
                ("operating_margin_expansion", "Operating Margin Expansion"),
                ("net_margin_expansion", "Net Margin Expansion"),
            ],
            SECTION_CASH_AND_LEVERAGE: [
                ("ocf_margin", "OCF Margin"),
                ("fcf_margin", "FCF Margin"),
                ("leverage_ratio", "Leverage Ratio"),
                ("shares_outstanding", "Shares Outstanding"),
            ],
            SECTION_VALUATION: [
                ("open_to_revenue", "Open Price / Revenue"),
                ("high_to_revenue", "High Price / Revenue"),
                ("low_to_revenue", "Low Price / Revenue"),
                ("close_to_revenue", "Close Price / Revenue"),
                ("pe_ratio", "P/E Ratio"),
            ],
        }

        sections: Dict[str, List[MetricRow]] = {}
        for section, rows in layout.items():
            sections[section] = []
            for metric_name, display_name in rows:
                # Display order is newest first, matching the period labels
                values = list(reversed(series[metric_name]))
                if heat_map:
                    values = apply_heat_map(values)
                sections[section].append(
                    MetricRow(
                        metric_name=metric_name,
                        display_name=display_name,
                        values=values,
                        heat_map_enabled=heat_map,
                    )
                )
        return sections

    @staticmethod
    def _derived_metrics(
        series: Dict[str, List[MetricValue]], bundles: Sequence[AlignedPeriodBundle]
    ) -> List[DerivedMetric]:
        """Non-null metric values keyed by the statement's own period end date."""
        derived = []
        for i, bundle in enumerate(bundles):
            if bundle.current is None:
                continue
            for metric_name, stored_name in DERIVED_METRIC_NAMES.items():
                value = series[metric_name][i].value
                if value is None:
                    continue
                derived.append(
                    DerivedMetric(
                        period_end_date=bundle.current.period_end_date,
                        period_type=bundle.current.period_type,
                        metric_name=stored_name,
                        value=value,
                    )
                )
        return derived


_metrics_service: Optional[MetricsService] = None


def get_metrics_service() -> MetricsService:
    """
    Get the singleton MetricsService instance.

    Usage:
        from fiscalmetrics.application.metrics_service import get_metrics_service

        report = get_metrics_service().compute(statements, request)
    """
    global _metrics_service
    if _metrics_service is None:
        _metrics_service = MetricsService()
    return _metrics_service
