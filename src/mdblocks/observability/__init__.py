"""Observability: structured logging and metrics hooks for mdblocks."""

from __future__ import annotations

from .logger import StructuredFormatter, get_logger
from .metrics import InMemoryMetricsHook, MetricPoint, MetricsHook, NoopMetricsHook

__all__ = [
    "InMemoryMetricsHook",
    "MetricPoint",
    "MetricsHook",
    "NoopMetricsHook",
    "StructuredFormatter",
    "get_logger",
]
