# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Quartile ranking commands for FiscalMetrics CLI
"""

import json

import click


def _parse_value(raw: str):
    if raw.strip().lower() in ("", "none", "null", "n/a", "na"):
        return None
    try:
        return float(raw)
    except ValueError:
        raise click.BadParameter(f"Not a number: {raw}")


@click.group()
def quartiles():
    """Heat-map quartile ranking"""
    pass


@quartiles.command("rank")
@click.argument("values", nargs=-1, required=True)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def rank(values, json_output):
    """Rank VALUES into heat-map buckets 1-4 (use "null" for missing values)

    Examples:
        fiscalmetrics quartiles rank 10 20 30 40
        fiscalmetrics quartiles rank 1.5 null 3.2 --json
    """
    from fiscalmetrics.domain.services.quartile_ranker import calculate_quartiles

    parsed = [_parse_value(v) for v in values]
    buckets = calculate_quartiles(parsed)

    if json_output:
        click.echo(json.dumps([{"value": v, "quartile": q} for v, q in zip(parsed, buckets)]))
        return

    for value, bucket in zip(parsed, buckets):
        shown = "N/A" if value is None else f"{value:g}"
        click.echo(f"  {shown:>12s}  Q{bucket if bucket is not None else '-'}")
