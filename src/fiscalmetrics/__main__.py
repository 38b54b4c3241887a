# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
FiscalMetrics CLI Entry Point

Enables running FiscalMetrics as a module:
    python -m fiscalmetrics [command] [options]
"""

from fiscalmetrics.cli.main import main

if __name__ == "__main__":
    main()
