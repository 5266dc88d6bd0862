"""Admission control metric registry."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from prometheus_client import CollectorRegistry, Gauge

from .base import BaseMetricRegistry

ROWS_IGNORED_TOTAL = "rows_ignored_total"


class AdmissionMetricRegistry(BaseMetricRegistry):
    """Metric registry for samples rejected before reaching storage.

    The gauge family is exported as ``rows_ignored_total`` without the ``vm_``
    namespace prefix; deployments that need one should add it with a relabel
    rule at scrape time.

    Scope:
        - Cumulative ignored-sample counts per rejection reason, exported as
          gauges that read exact in-process counters at scrape time

    Out of Scope:
        - Malformed log lines (counted by the ingestion pipeline)
    """

    def __init__(
        self,
        readers: Mapping[str, Callable[[], float]],
        registry: CollectorRegistry | None = None,
    ) -> None:
        """Initialize the admission metric registry.

        Args:
            readers: Mapping of ``reason`` label value to a callable returning
                the current count for that reason.
            registry: Prometheus collector registry to use (default registry if None)
        """
        super().__init__(domain="admission", registry=registry)
        self._readers = dict(readers)
        self.initialize_collectors()

    def initialize_collectors(self) -> None:
        gauge = Gauge(
            ROWS_IGNORED_TOTAL,
            "Number of ignored rows by rejection reason",
            ["reason"],
            registry=self._registry,
        )
        for reason, read in self._readers.items():
            gauge.labels(reason=reason).set_function(read)
        self._collectors[ROWS_IGNORED_TOTAL] = gauge
