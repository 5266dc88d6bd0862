"""Observability helpers for ingestion workers."""

from __future__ import annotations

from ..utils.logging import configure_logging
from .registries import AdmissionMetricRegistry, BaseMetricRegistry

__all__ = ["AdmissionMetricRegistry", "BaseMetricRegistry", "configure_logging"]
