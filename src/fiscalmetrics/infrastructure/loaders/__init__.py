# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""Statement loaders for JSON and CSV sources."""

from fiscalmetrics.infrastructure.loaders.statement_loader import (
    StatementLoadError,
    build_record,
    load_company_statements,
    statements_from_payload,
)

__all__ = [
    "StatementLoadError",
    "build_record",
    "load_company_statements",
    "statements_from_payload",
]
