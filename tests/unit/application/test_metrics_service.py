"""
Unit tests for MetricsService.

Runs the full window -> align -> calculate -> heat map pipeline over the
eight-quarter fixtures.
"""

from datetime import date

import pytest

from fiscalmetrics.application.metrics_service import MetricsRequest, MetricsService, get_metrics_service
from fiscalmetrics.config.settings import MetricsSettings
from fiscalmetrics.domain.models.periods import PeriodType
from fiscalmetrics.domain.models.statements import CompanyStatements, IncomeStatement

AS_OF = date(2024, 3, 15)


@pytest.fixture
def service():
    return MetricsService(MetricsSettings())


@pytest.fixture
def statements(quarterly_incomes, quarterly_balance_sheets, quarterly_cash_flows, quarterly_prices):
    return CompanyStatements(
        fiscal_year_end_month=12,
        currency="USD",
        incomes=list(reversed(quarterly_incomes)),
        balance_sheets=quarterly_balance_sheets,
        cash_flows=quarterly_cash_flows,
        prices=quarterly_prices,
        symbol="ACME",
    )


def _request(**kwargs):
    defaults = dict(period_type="quarterly", period_count=4, as_of_date=AS_OF)
    defaults.update(kwargs)
    return MetricsRequest(**defaults)


class TestResolveRequest:
    """Tests for default resolution."""

    def test_defaults_from_settings(self, service):
        """Test unset request fields fall back to settings."""
        period_type, count, as_of, fye, currency, heat_map = service.resolve_request(
            CompanyStatements(), MetricsRequest(as_of_date=AS_OF)
        )

        assert period_type is PeriodType.QUARTERLY
        assert count == 8
        assert as_of == AS_OF
        assert fye == 12
        assert currency == "USD"
        assert heat_map is True

    def test_company_values_win(self, service):
        """Test the company's FYE month and currency override defaults."""
        _, _, _, fye, currency, _ = service.resolve_request(
            CompanyStatements(fiscal_year_end_month=3, currency="EUR"), MetricsRequest()
        )

        assert fye == 3
        assert currency == "EUR"

    def test_rejects_non_positive_count(self, service):
        """Test a zero period count is rejected."""
        with pytest.raises(ValueError):
            service.resolve_request(CompanyStatements(), MetricsRequest(period_count=0))

    @pytest.mark.parametrize("fye_month", [0, 13])
    def test_out_of_range_fye_month_is_not_defaulted(self, service, fye_month):
        """Test an invalid company FYE month fails instead of falling back to December."""
        statements = CompanyStatements(fiscal_year_end_month=fye_month)

        assert service.resolve_request(statements, MetricsRequest())[3] == fye_month
        with pytest.raises(ValueError, match="fiscal_year_end_month"):
            service.compute(statements, _request())


class TestCompute:
    """Tests for MetricsService.compute."""

    def test_periods_newest_first(self, service, statements):
        """Test report periods follow the generated window."""
        report = service.compute(statements, _request())

        assert report.periods == ["FY2023", "Q3 2023", "Q2 2023", "Q1 2023"]
        assert report.period_type is PeriodType.QUARTERLY

    def test_sections(self, service, statements):
        """Test the three display sections and their rows."""
        report = service.compute(statements, _request())

        assert list(report.sections) == ["growth_and_margins", "cash_and_leverage", "valuation"]
        assert len(report.sections["growth_and_margins"]) == 10
        assert len(report.sections["cash_and_leverage"]) == 4
        assert len(report.sections["valuation"]) == 5
        for rows in report.sections.values():
            for row in rows:
                assert len(row.values) == 4

    def test_values_match_labels(self, service, statements):
        """Test each value sits under the label of its own period."""
        report = service.compute(statements, _request())

        revenue = report.row("revenue")
        assert [v.formatted_value for v in revenue.values] == ["$1.70K", "$1.60K", "$1.50K", "$1.40K"]

    def test_growth_and_heat_map(self, service, statements):
        """Test YoY growth and its quartile annotation."""
        report = service.compute(statements, _request())

        yoy = report.row("revenue_growth_yoy")
        assert yoy.values[-1].formatted_value == "40.00%"
        assert yoy.values[0].value == pytest.approx(400.0 / 1300.0 * 100.0)
        assert [v.heat_map_quartile for v in yoy.values] == [1, 2, 3, 4]
        assert yoy.heat_map_enabled is True

    def test_first_period_deltas_are_missing(self, service, statements):
        """Test the oldest period has no sequential comparisons."""
        report = service.compute(statements, _request())

        assert report.row("revenue_growth_qoq").values[-1].formatted_value == "N/A"
        assert report.row("revenue_acceleration").values[-1].formatted_value == "N/A"
        assert report.row("gross_margin_expansion").values[-1].formatted_value == "N/A"

    def test_margins_cash_and_valuation(self, service, statements):
        """Test margin, cash, leverage and valuation rows."""
        report = service.compute(statements, _request())

        assert report.row("gross_margin").values[0].formatted_value == "40.00%"
        assert report.row("net_margin").values[0].formatted_value == "10.00%"
        assert report.row("ocf_margin").values[-1].formatted_value == "21.43%"
        assert report.row("leverage_ratio").values[0].formatted_value == "70.59%"
        assert report.row("shares_outstanding").values[0].formatted_value == "15.55M"
        assert report.row("pe_ratio").values[0].formatted_value == "30.00x"

    def test_snapshot(self, service, statements):
        """Test snapshot metrics use the latest quote."""
        report = service.compute(statements, _request())

        assert report.snapshot["pe_ratio_ttm"].formatted_value == "30.00x"
        assert set(report.snapshot) == {"pe_ratio_ttm", "momentum_1m", "momentum_3m", "momentum_6m"}

    def test_heat_map_disabled(self, service, statements):
        """Test disabling the heat map leaves quartiles empty."""
        report = service.compute(statements, _request(heat_map=False))

        for rows in report.sections.values():
            for row in rows:
                assert row.heat_map_enabled is False
                assert all(v.heat_map_quartile is None for v in row.values)

    def test_currency_symbol(self, service, statements):
        """Test the company currency drives revenue formatting."""
        statements.currency = "EUR"
        report = service.compute(statements, _request())

        assert report.currency == "EUR"
        assert report.row("revenue").values[0].formatted_value == "€1.70K"

    def test_no_statements(self, service):
        """Test an empty company yields labeled periods with N/A values."""
        report = service.compute(CompanyStatements(fiscal_year_end_month=12), _request())

        assert len(report.periods) == 4
        for rows in report.sections.values():
            for row in rows:
                assert all(v.formatted_value == "N/A" for v in row.values)
        assert report.derived_metrics == []

    def test_idempotent(self, service, statements):
        """Test repeated computation gives identical output."""
        first = service.compute(statements, _request()).to_dict()
        second = service.compute(statements, _request()).to_dict()

        assert first == second

    def test_annual(self, service):
        """Test an annual report with one-record comparables."""
        incomes = [
            IncomeStatement(period_end_date=date(year, 12, 31), period_type=PeriodType.ANNUAL, revenue=rev)
            for year, rev in ((2021, 800.0), (2022, 1000.0), (2023, 1200.0))
        ]
        report = service.compute(
            CompanyStatements(fiscal_year_end_month=12, incomes=incomes),
            _request(period_type="annual", period_count=2),
        )

        assert report.periods == ["FY2023", "FY2022"]
        assert [v.formatted_value for v in report.row("revenue_growth_yoy").values] == ["20.00%", "25.00%"]


class TestDerivedMetrics:
    """Tests for the flat derived-metric records."""

    def test_keyed_by_statement_date(self, service, statements):
        """Test records carry the statement period end date and stored name."""
        report = service.compute(statements, _request())

        gross = [m for m in report.derived_metrics if m.metric_name == "gross_margin_pct"]
        assert [m.period_end_date for m in gross] == [
            date(2023, 3, 31),
            date(2023, 6, 30),
            date(2023, 9, 30),
            date(2023, 12, 31),
        ]
        assert all(m.period_type is PeriodType.QUARTERLY for m in gross)
        assert gross[0].value == pytest.approx(40.0)

    def test_missing_values_skipped(self, service, statements):
        """Test None values produce no record."""
        report = service.compute(statements, _request())

        qoq = [m for m in report.derived_metrics if m.metric_name == "qoq_revenue_growth_pct"]
        assert len(qoq) == 3
        assert all(m.value is not None for m in report.derived_metrics)


class TestSingleton:
    """Tests for get_metrics_service."""

    def test_same_instance(self):
        """Test the accessor returns one shared service."""
        assert get_metrics_service() is get_metrics_service()
