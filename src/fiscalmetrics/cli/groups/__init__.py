# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
CLI command groups for FiscalMetrics
"""

from .metrics import metrics
from .periods import periods
from .quartiles import quartiles

__all__ = ["metrics", "periods", "quartiles"]
