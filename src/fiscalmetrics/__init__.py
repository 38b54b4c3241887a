# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
FiscalMetrics - Fiscal Period Alignment & Financial Metrics Engine

Generates labeled fiscal period windows, aligns irregular statement records
onto them and derives growth, margin, cash, leverage and valuation metrics.
"""

__version__ = "0.1.0"
