"""Record preparation between raw ingested data and the storage engine."""

__all__ = ["__version__"]

__version__ = "0.1.0"
