# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Shared CLI utilities for FiscalMetrics
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from fiscalmetrics.config.settings import FiscalMetricsConfig, LoggingSettings


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None, log_format: Optional[str] = None):
    """
    Configure application logging.

    Logs go to stderr so command output on stdout stays machine-readable.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    handlers = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=numeric_level,
        format=log_format or LoggingSettings().format,
        handlers=handlers,
        force=True,
    )


def load_config(config_file: str = "config.yaml") -> FiscalMetricsConfig:
    """Load configuration from YAML file, falling back to defaults when it is absent"""
    config_path = Path(config_file)

    if not config_path.exists():
        return FiscalMetricsConfig()

    return FiscalMetricsConfig.from_yaml(config_path)


def validate_date(ctx, param, value):
    """Validate date format YYYY-MM-DD"""
    if not value:
        return value

    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Invalid date format: {value}. Use YYYY-MM-DD")


def validate_fye_month(ctx, param, value):
    """Validate fiscal year end month is 1-12"""
    if value is None:
        return value
    if not 1 <= value <= 12:
        raise click.BadParameter(f"Fiscal year end month must be 1-12, got {value}")
    return value
