# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Configuration Layer

Application configuration with environment variable support.
"""

from fiscalmetrics.config.settings import (
    ApplicationSettings,
    FiscalMetricsConfig,
    LoggingSettings,
    MetricsSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "ApplicationSettings",
    "FiscalMetricsConfig",
    "LoggingSettings",
    "MetricsSettings",
    "get_settings",
    "reset_settings",
]
