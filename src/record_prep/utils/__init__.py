"""Utility modules for the record preparation layer."""

from .counters import AtomicCounter
from .errors import InvariantViolation, ProblemDetail, RecordPrepError
from .pool import ResourcePool
from .throttle import IntervalThrottle


__all__ = [
    "AtomicCounter",
    "IntervalThrottle",
    "InvariantViolation",
    "ProblemDetail",
    "RecordPrepError",
    "ResourcePool",
]
