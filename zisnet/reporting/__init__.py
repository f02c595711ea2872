"""Reporting utilities for zisnet."""

from .metrics import CsvSink, JsonlSink, MetricsCapture
from .plots import PlotAdapter, render_topology

__all__ = ["CsvSink", "JsonlSink", "MetricsCapture", "PlotAdapter", "render_topology"]
