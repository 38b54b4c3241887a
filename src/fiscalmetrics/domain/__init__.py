# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Domain Layer

Fiscal period models and the pure services that align statements and
compute metrics over them.
"""
