"""Abstract base class for domain-specific Prometheus metric registries."""

from __future__ import annotations

from abc import ABC, abstractmethod

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram


class BaseMetricRegistry(ABC):
    """Abstract base class for domain-specific Prometheus metric registries."""

    _domain: str
    _collectors: dict[str, Counter | Gauge | Histogram]

    def __init__(self, domain: str | None = None, registry: CollectorRegistry | None = None):
        """Initialize the metric registry.

        Args:
            domain: Domain name for this registry (e.g., "admission")
            registry: Prometheus collector registry to use (default registry if None)
        """
        self._domain = domain or "unknown"
        self._collectors = {}
        self._registry = registry if registry is not None else REGISTRY

    @abstractmethod
    def initialize_collectors(self) -> None:
        """Initialize domain-specific Prometheus collectors."""
        ...

    def get_collector(self, name: str) -> Counter | Gauge | Histogram:
        """Retrieve a registered collector by name.

        Raises:
            KeyError: If collector with given name is not found
        """
        if name not in self._collectors:
            raise KeyError(f"Collector '{name}' not found in {self._domain} registry")
        return self._collectors[name]

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry
