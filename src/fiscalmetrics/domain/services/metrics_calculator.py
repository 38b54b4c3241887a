# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Metrics Calculator - per-period financial metrics with deterministic null handling.

Every method takes aligned bundles in ascending period order and returns one
MetricValue per bundle in the same order. Nothing here raises on missing
inputs or zero denominators: the value becomes None and the display string
becomes "N/A".

Example:
    from fiscalmetrics.domain.services.metrics_calculator import MetricsCalculator

    calc = MetricsCalculator(currency="$")
    revenue, yoy, qoq = calc.calculate_revenue_metrics(bundles)
    gross, operating, net = calc.calculate_margin_metrics(bundles)
"""

import logging
from datetime import timedelta
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from fiscalmetrics.domain.models.metrics import MetricValue
from fiscalmetrics.domain.models.statements import DailyPrice, IncomeStatement
from fiscalmetrics.domain.services.safe_formatters import (
    format_basis_points,
    format_currency_value,
    format_percentage,
    format_ratio,
    format_shares_millions,
    to_finite_float,
)
from fiscalmetrics.domain.services.statement_aligner import AlignedPeriodBundle, record_value

logger = logging.getLogger(__name__)

UNIT_PERCENT = "%"
UNIT_BPS = "bps"
UNIT_RATIO = "x"
UNIT_SHARES = "shares"

# Lookback windows for price momentum, in calendar days
MOMENTUM_WINDOWS = (
    ("momentum_1m", 30),
    ("momentum_3m", 90),
    ("momentum_6m", 180),
)


def _metric(value: Optional[float], unit: str, formatter: Callable[[Optional[float]], str]) -> MetricValue:
    value = to_finite_float(value)
    if value is None:
        return MetricValue.missing(unit)
    return MetricValue(value=value, formatted_value=formatter(value), unit=unit)


def _percent(value: Optional[float]) -> MetricValue:
    return _metric(value, UNIT_PERCENT, format_percentage)


def _bps(value: Optional[float]) -> MetricValue:
    return _metric(value, UNIT_BPS, format_basis_points)


class MetricsCalculator:
    """
    Computes growth, margin, cash, leverage and valuation metrics.

    Args:
        currency: Display symbol used for currency values and as their unit
    """

    def __init__(self, currency: str = "$"):
        self.currency = currency

    # ------------------------------------------------------------------
    # Primitive calculations
    # ------------------------------------------------------------------

    @staticmethod
    def format_currency_value(value: float, currency: str) -> str:
        return format_currency_value(value, currency)

    @staticmethod
    def calculate_yoy_change(current: Optional[float], prior: Optional[float]) -> Optional[float]:
        """
        Percentage change against a comparable, using the absolute prior as base.

        Examples:
            >>> MetricsCalculator.calculate_yoy_change(120.0, 100.0)
            20.0
            >>> MetricsCalculator.calculate_yoy_change(100.0, 0.0) is None
            True
        """
        current = to_finite_float(current)
        prior = to_finite_float(prior)
        if current is None or prior is None or prior == 0:
            return None
        return to_finite_float((current - prior) / abs(prior) * 100.0)

    @staticmethod
    def calculate_margin(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
        """numerator / denominator as a percentage; None on a missing input or zero denominator."""
        numerator = to_finite_float(numerator)
        denominator = to_finite_float(denominator)
        if numerator is None or denominator is None or denominator == 0:
            return None
        return to_finite_float(numerator / denominator * 100.0)

    @staticmethod
    def calculate_acceleration_delta(values: Sequence[Optional[float]]) -> List[Optional[float]]:
        """
        Period-over-period change in basis points of a percentage series.

        The first period has nothing to compare against and is always None.
        """
        deltas: List[Optional[float]] = []
        for i, value in enumerate(values):
            previous = values[i - 1] if i > 0 else None
            if value is None or previous is None:
                deltas.append(None)
            else:
                deltas.append(to_finite_float((value - previous) * 100.0))
        return deltas

    @staticmethod
    def calculate_pe_ratio(close: Optional[float], eps: Optional[float]) -> Optional[float]:
        """
        Price / EPS, only for positive EPS.

        A zero or negative EPS yields None rather than an undefined or
        negative multiple.
        """
        close = to_finite_float(close)
        eps = to_finite_float(eps)
        if close is None or eps is None or eps <= 0:
            return None
        return to_finite_float(close / eps)

    # ------------------------------------------------------------------
    # Per-period metric series
    # ------------------------------------------------------------------

    def calculate_revenue_metrics(
        self, bundles: Sequence[AlignedPeriodBundle]
    ) -> Tuple[List[MetricValue], List[MetricValue], List[MetricValue]]:
        """Revenue, YoY growth and sequential growth."""
        revenues, yoy_growths, qoq_growths = [], [], []

        for bundle in bundles:
            revenue = record_value(bundle.current, "revenue")
            revenues.append(
                _metric(revenue, self.currency, lambda v: format_currency_value(v, self.currency))
            )
            yoy_growths.append(
                _percent(self.calculate_yoy_change(revenue, record_value(bundle.prior_year, "revenue")))
            )
            qoq_growths.append(
                _percent(self.calculate_yoy_change(revenue, record_value(bundle.prior_period, "revenue")))
            )

        return revenues, yoy_growths, qoq_growths

    def calculate_margin_metrics(
        self, bundles: Sequence[AlignedPeriodBundle]
    ) -> Tuple[List[MetricValue], List[MetricValue], List[MetricValue]]:
        """Gross, operating and net margin."""
        gross, operating, net = [], [], []

        for bundle in bundles:
            revenue = record_value(bundle.current, "revenue")
            gross.append(_percent(self.calculate_margin(record_value(bundle.current, "gross_profit"), revenue)))
            operating.append(
                _percent(self.calculate_margin(record_value(bundle.current, "operating_income"), revenue))
            )
            net.append(_percent(self.calculate_margin(record_value(bundle.current, "net_income"), revenue)))

        return gross, operating, net

    def calculate_expansion_metrics(self, margins: Sequence[MetricValue]) -> List[MetricValue]:
        """Margin expansion in basis points; first period is always N/A."""
        return [_bps(delta) for delta in self.calculate_acceleration_delta([m.value for m in margins])]

    def calculate_revenue_acceleration(self, yoy_growths: Sequence[MetricValue]) -> List[MetricValue]:
        """Change in YoY growth in basis points; first period is always N/A."""
        return [_bps(delta) for delta in self.calculate_acceleration_delta([g.value for g in yoy_growths])]

    def calculate_cash_metrics(
        self, bundles: Sequence[AlignedPeriodBundle]
    ) -> Tuple[List[MetricValue], List[MetricValue]]:
        """Operating and free cash flow as a percentage of revenue."""
        ocf_ratios, fcf_ratios = [], []

        for bundle in bundles:
            revenue = record_value(bundle.current, "revenue")
            ocf = record_value(bundle.cash_flow, "operating_cash_flow")
            fcf = record_value(bundle.cash_flow, "free_cash_flow")
            ocf_ratios.append(_percent(self.calculate_margin(ocf, revenue)))
            fcf_ratios.append(_percent(self.calculate_margin(fcf, revenue)))

        return ocf_ratios, fcf_ratios

    def calculate_leverage_metrics(
        self, bundles: Sequence[AlignedPeriodBundle]
    ) -> Tuple[List[MetricValue], List[MetricValue]]:
        """(Revenue - Net Debt) / Revenue percentage and shares outstanding."""
        leverage_ratios, shares_outstanding = [], []

        for bundle in bundles:
            revenue = record_value(bundle.current, "revenue")
            net_debt = record_value(bundle.balance_sheet, "net_debt")

            ratio = None
            if revenue is not None and net_debt is not None and revenue != 0:
                ratio = (revenue - net_debt) / revenue * 100.0
            leverage_ratios.append(_percent(ratio))

            shares = record_value(bundle.current, "shares_outstanding")
            if shares is None:
                shares = record_value(bundle.balance_sheet, "shares_outstanding")
            shares_outstanding.append(_metric(shares, UNIT_SHARES, format_shares_millions))

        return leverage_ratios, shares_outstanding

    def calculate_valuation_metrics(self, bundles: Sequence[AlignedPeriodBundle]) -> Dict[str, List[MetricValue]]:
        """
        Price-to-revenue percentages for each OHLC field and the period P/E.

        Returns:
            Dict with keys open_ratios, high_ratios, low_ratios, close_ratios, pe_ratios
        """
        result: Dict[str, List[MetricValue]] = {
            "open_ratios": [],
            "high_ratios": [],
            "low_ratios": [],
            "close_ratios": [],
            "pe_ratios": [],
        }

        for bundle in bundles:
            revenue = record_value(bundle.current, "revenue")
            for field_name in ("open", "high", "low", "close"):
                price_value = record_value(bundle.price, field_name)
                result[f"{field_name}_ratios"].append(_percent(self.calculate_margin(price_value, revenue)))

            pe = self.calculate_pe_ratio(record_value(bundle.price, "close"), record_value(bundle.current, "eps"))
            result["pe_ratios"].append(_metric(pe, UNIT_RATIO, format_ratio))

        return result

    # ------------------------------------------------------------------
    # Point-in-time metrics
    # ------------------------------------------------------------------

    def calculate_snapshot_metrics(
        self,
        prices: Sequence[DailyPrice],
        latest_income: Optional[IncomeStatement],
    ) -> Dict[str, MetricValue]:
        """
        Metrics from the most recent quote: TTM P/E and 1m/3m/6m momentum.

        Momentum compares the latest close with the last close on or before
        the lookback date and is only computed for a positive past close.
        """
        ordered = sorted((p for p in prices if p is not None), key=lambda p: p.price_date)
        snapshot: Dict[str, MetricValue] = {}

        latest = ordered[-1] if ordered else None
        close = record_value(latest, "close")
        snapshot["pe_ratio_ttm"] = _metric(
            self.calculate_pe_ratio(close, record_value(latest_income, "eps")), UNIT_RATIO, format_ratio
        )

        for name, days in MOMENTUM_WINDOWS:
            momentum = None
            if latest is not None and close is not None:
                target = latest.price_date - timedelta(days=days)
                past = None
                for candidate in ordered:
                    if candidate.price_date > target:
                        break
                    past = candidate
                past_close = record_value(past, "close")
                if past_close is not None and past_close > 0:
                    momentum = (close / past_close - 1.0) * 100.0
            snapshot[name] = _percent(momentum)

        return snapshot
