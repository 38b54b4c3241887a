# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Application Layer

Request-level orchestration of the metrics pipeline.
"""

from fiscalmetrics.application.metrics_service import (
    MetricsRequest,
    MetricsService,
    get_metrics_service,
)

__all__ = [
    "MetricsRequest",
    "MetricsService",
    "get_metrics_service",
]
