"""Structural metrics providers."""

from .provider import MetricsProvider, StaticMetricsProvider
from .report import ReportMetricsProvider

__all__ = [
    "MetricsProvider",
    "ReportMetricsProvider",
    "StaticMetricsProvider",
]
