# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Prometheus metrics for the transformer engine."""

from prometheus_client import Counter, Histogram

from .config import get_settings

settings = get_settings()
prefix = settings.metrics_prefix

TRANSFORMATIONS_TOTAL = Counter(
    f"{prefix}_transformations_total",
    "Top-level transformations executed",
    ["transformer", "result"],  # result: "success", "error"
)

TRANSFORMATION_DURATION = Histogram(
    f"{prefix}_transformation_duration_seconds",
    "Duration of top-level transformations",
    ["transformer"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

INCLUDES_RESOLVED_TOTAL = Counter(
    f"{prefix}_includes_resolved_total",
    "Include resolvers invoked",
    ["transformer", "include"],
)

EAGER_LOADS_TOTAL = Counter(
    f"{prefix}_eager_loads_total",
    "Eager-load calls issued to data-layer loaders",
    ["loader"],
)
