# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
FiscalMetrics command-line interface
"""

from .main import cli, main

__all__ = ["cli", "main"]
