# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Period window commands for FiscalMetrics CLI
"""

import json
from datetime import date

import click

from fiscalmetrics.cli.utils import validate_date, validate_fye_month


@click.group()
@click.pass_context
def periods(ctx):
    """Fiscal period windows

    Examples:
        fiscalmetrics periods generate --fye-month 3 --count 8
        fiscalmetrics periods generate --period-type annual --as-of 2024-06-30 --json
    """
    pass


@periods.command("generate")
@click.option("--fye-month", "-m", type=int, callback=validate_fye_month, help="Fiscal year end month (1-12)")
@click.option("--period-type", "-t", type=click.Choice(["quarterly", "annual"]), help="Period granularity")
@click.option("--count", "-n", type=click.IntRange(min=1), help="Number of periods")
@click.option("--as-of", "as_of_date", callback=validate_date, help="As-of date (YYYY-MM-DD, default today)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def generate(ctx, fye_month, period_type, count, as_of_date, json_output):
    """Generate labeled reporting periods, newest first"""
    from fiscalmetrics.domain.services.period_window import PeriodWindowGenerator

    metrics_settings = ctx.obj["config"].metrics
    generator = PeriodWindowGenerator(fye_month or metrics_settings.default_fiscal_year_end_month)
    generated = generator.generate_periods(
        count or metrics_settings.default_period_count,
        period_type or metrics_settings.default_period_type,
        as_of_date or date.today(),
    )

    if json_output:
        click.echo(json.dumps([p.to_dict() for p in generated], indent=2))
        return

    for period in generated:
        click.echo(f"  {period.display_label:10s} {period.period_end_date.isoformat()}")
