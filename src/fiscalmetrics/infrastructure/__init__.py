# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Infrastructure Layer

Boundary adapters that turn external payloads into domain records.
"""
