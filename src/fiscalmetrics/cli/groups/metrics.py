# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Metrics computation commands for FiscalMetrics CLI
"""

import json
import sys

import click

from fiscalmetrics.cli.utils import validate_date, validate_fye_month


@click.group()
@click.pass_context
def metrics(ctx):
    """Financial metrics computation

    Examples:
        fiscalmetrics metrics compute data/acme.json --as-of 2024-03-15
        fiscalmetrics metrics compute data/acme/ --period-type annual --count 5 --format json
    """
    pass


@metrics.command("compute")
@click.argument("source", type=click.Path(exists=True))
@click.option("--fye-month", "-m", type=int, callback=validate_fye_month, help="Override fiscal year end month")
@click.option("--period-type", "-t", type=click.Choice(["quarterly", "annual"]), help="Period granularity")
@click.option("--count", "-n", type=click.IntRange(min=1), help="Number of periods")
@click.option("--as-of", "as_of_date", callback=validate_date, help="As-of date (YYYY-MM-DD, default today)")
@click.option("--currency", help="Override currency code (e.g. USD, EUR)")
@click.option("--no-heat-map", is_flag=True, help="Skip quartile annotation")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table", help="Output format")
@click.option("--derived", is_flag=True, help="Output flat derived-metric records instead of the report")
@click.pass_context
def compute(ctx, source, fye_month, period_type, count, as_of_date, currency, no_heat_map, output_format, derived):
    """Compute the metrics report for the statements in SOURCE

    SOURCE is a JSON file or a directory of CSV statement files.
    """
    from fiscalmetrics.application.metrics_service import MetricsRequest, MetricsService
    from fiscalmetrics.infrastructure.loaders.statement_loader import StatementLoadError, load_company_statements

    try:
        statements = load_company_statements(source, default_period_type=period_type)
    except StatementLoadError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if fye_month:
        statements.fiscal_year_end_month = fye_month
    if currency:
        statements.currency = currency

    service = MetricsService(ctx.obj["config"].metrics)
    request = MetricsRequest(
        period_type=period_type,
        period_count=count,
        as_of_date=as_of_date,
        heat_map=False if no_heat_map else None,
    )
    try:
        report = service.compute(statements, request)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if derived:
        records = [
            {
                "period_end_date": m.period_end_date.isoformat(),
                "period_type": m.period_type.value,
                "metric_name": m.metric_name,
                "value": m.value,
            }
            for m in report.derived_metrics
        ]
        click.echo(json.dumps(records, indent=2))
        return

    if output_format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
        return

    _print_table(report, symbol=statements.symbol)


def _print_table(report, symbol=None):
    labels = report.periods
    name_width = 28
    col_width = 12

    title = f"METRICS: {symbol}" if symbol else "METRICS"
    click.echo("\n" + "=" * 70)
    click.echo(f"{title} ({report.period_type.value}, {report.currency})")
    click.echo("=" * 70)
    click.echo(" " * name_width + "".join(f"{label:>{col_width}s}" for label in labels))

    for section, rows in report.sections.items():
        click.echo(f"\n{section.replace('_', ' ').upper()}")
        click.echo("-" * (name_width + col_width * len(labels)))
        for row in rows:
            cells = "".join(f"{v.formatted_value:>{col_width}s}" for v in row.values)
            click.echo(f"{row.display_name:{name_width}s}{cells}")

    if report.snapshot:
        click.echo("\nSNAPSHOT")
        click.echo("-" * 40)
        for name, metric in report.snapshot.items():
            click.echo(f"  {name:20s} {metric.formatted_value}")
