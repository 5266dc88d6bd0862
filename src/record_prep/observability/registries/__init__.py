"""Domain-specific Prometheus metric registries."""

from .admission import ROWS_IGNORED_TOTAL, AdmissionMetricRegistry
from .base import BaseMetricRegistry

__all__ = ["ROWS_IGNORED_TOTAL", "AdmissionMetricRegistry", "BaseMetricRegistry"]
