"""Unit tests for AdmissionMetricRegistry."""

import pytest
from prometheus_client import CollectorRegistry, Gauge

from record_prep.observability.registries import ROWS_IGNORED_TOTAL, AdmissionMetricRegistry


class TestAdmissionMetricRegistry:
    """Test cases for AdmissionMetricRegistry."""

    def test_gauges_read_current_values(self) -> None:
        registry = CollectorRegistry()
        counts = {"too_many_labels": 0}
        AdmissionMetricRegistry({"too_many_labels": lambda: counts["too_many_labels"]}, registry)

        counts["too_many_labels"] = 7

        assert registry.get_sample_value(ROWS_IGNORED_TOTAL, {"reason": "too_many_labels"}) == 7.0

    def test_get_collector(self) -> None:
        metrics = AdmissionMetricRegistry({}, CollectorRegistry())

        assert isinstance(metrics.get_collector(ROWS_IGNORED_TOTAL), Gauge)
        assert metrics.domain == "admission"
        with pytest.raises(KeyError):
            metrics.get_collector("missing")

    def test_duplicate_registration_is_rejected(self) -> None:
        registry = CollectorRegistry()
        AdmissionMetricRegistry({}, registry)

        with pytest.raises(ValueError):
            AdmissionMetricRegistry({}, registry)
