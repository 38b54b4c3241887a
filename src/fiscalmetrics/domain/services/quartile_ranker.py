# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Quartile Ranker - heat-map buckets for a cross-sectional set of values.

Boundaries are taken at floor-divided indices n//4, n//2 and 3n//4 of the
sorted non-null values (not interpolated quartiles).

Ties resolve upward: a value must be strictly below a boundary to land in
the lower bucket, so a value equal to a boundary moves up one. This is the
reverse of a <= comparison and is what ranks [10, 20, 30, 40] as
[1, 2, 3, 4]. Degenerate rows show the cost: a constant row ranks all 4,
and with two values the minimum lands in bucket 2 ([10, 20] -> [2, 4]).
Small samples populate the buckets unevenly.
"""

import logging
from typing import List, Optional, Sequence

from fiscalmetrics.domain.models.metrics import MetricValue
from fiscalmetrics.domain.services.safe_formatters import to_finite_float

logger = logging.getLogger(__name__)

MIN_RANKABLE_VALUES = 2


def quartile_boundaries(values: Sequence[float]) -> Optional[List[float]]:
    """
    Bucket upper bounds for buckets 1-3, or None for fewer than two values.

    Examples:
        >>> quartile_boundaries([40, 10, 30, 20])
        [20, 30, 40]
    """
    if len(values) < MIN_RANKABLE_VALUES:
        return None
    ordered = sorted(values)
    n = len(ordered)
    return [ordered[n // 4], ordered[n // 2], ordered[3 * n // 4]]


def calculate_quartiles(values: Sequence[Optional[float]]) -> List[Optional[int]]:
    """
    Assign each value a heat-map bucket 1-4.

    Null (or non-finite) inputs map to None. With fewer than two usable
    values every output is None.

    Examples:
        >>> calculate_quartiles([10, 20, 30, 40])
        [1, 2, 3, 4]
        >>> calculate_quartiles([None, 5.0])
        [None, None]
    """
    cleaned = [to_finite_float(v) for v in values]
    boundaries = quartile_boundaries([v for v in cleaned if v is not None])
    if boundaries is None:
        return [None] * len(values)

    q1, q2, q3 = boundaries
    buckets: List[Optional[int]] = []
    for value in cleaned:
        if value is None:
            buckets.append(None)
        elif value < q1:
            buckets.append(1)
        elif value < q2:
            buckets.append(2)
        elif value < q3:
            buckets.append(3)
        else:
            buckets.append(4)
    return buckets


def apply_heat_map(metric_values: Sequence[MetricValue]) -> List[MetricValue]:
    """Return copies of the metric values annotated with their quartile."""
    quartiles = calculate_quartiles([m.value for m in metric_values])
    return [metric.with_quartile(q) for metric, q in zip(metric_values, quartiles)]
