"""Admission limits for labeled samples.

Key Responsibilities:
    - Reject label sets with too many labels, too long label names or too
      long label values before they reach the storage engine
    - Count every rejection exactly, per reason, and export the counts as
      ``rows_ignored_total{reason=...}`` gauges
    - Explain rejections in warning logs, at most once per throttle interval
      per reason regardless of the rejection rate

Collaborators:
    - Upstream: Ingestion handlers call :meth:`LabelLimitsValidator.exceeds`
      for every sample before building storage rows
    - Downstream: ``prometheus_client`` for the gauges, ``structlog`` for the
      warnings

Side Effects:
    - Increments in-process counters and emits throttled warning logs

Thread Safety:
    - Limits are immutable after construction. ``exceeds`` may be called
      concurrently from any number of threads; counters stay exact and
      throttles never block.
"""

from __future__ import annotations

# ============================================================================
# IMPORTS
# ============================================================================

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

import structlog
from prometheus_client import CollectorRegistry

from record_prep.config.settings import AppSettings, get_settings
from record_prep.observability.registries import AdmissionMetricRegistry
from record_prep.utils.counters import AtomicCounter
from record_prep.utils.throttle import IntervalThrottle

from .labels import Label, label_len, labels_to_string

logger = structlog.get_logger(__name__)

# The maximum length of label name.
#
# Samples with longer names are ignored.
MAX_LABEL_NAME_LEN = 256

DEFAULT_LOG_THROTTLE_SECONDS = 5.0


# ============================================================================
# DATA MODELS
# ============================================================================


@dataclass(frozen=True, slots=True)
class LabelLimits:
    """Immutable admission limits shared by every validator call site.

    Attributes:
        max_labels_per_timeseries: Samples with more labels are ignored.
        max_label_value_len: Samples with a longer label value (in bytes) are
            ignored.
        max_label_name_len: Fixed at :data:`MAX_LABEL_NAME_LEN`.
    """

    max_labels_per_timeseries: int = 40
    max_label_value_len: int = 4 * 1024
    max_label_name_len: int = field(default=MAX_LABEL_NAME_LEN, init=False)

    def __post_init__(self) -> None:
        if self.max_labels_per_timeseries < 1:
            raise ValueError(
                f"max_labels_per_timeseries must be positive; got {self.max_labels_per_timeseries}"
            )
        if self.max_label_value_len < 1:
            raise ValueError(f"max_label_value_len must be positive; got {self.max_label_value_len}")


class ViolationKind(str, Enum):
    """Reasons for ignoring a sample; values double as metric label values."""

    TOO_MANY_LABELS = "too_many_labels"
    LABEL_NAME_TOO_LONG = "too_long_label_name"
    LABEL_VALUE_TOO_LONG = "too_long_label_value"


# ============================================================================
# VALIDATOR
# ============================================================================


class LabelLimitsValidator:
    """Checks label sets against :class:`LabelLimits`."""

    def __init__(
        self,
        limits: LabelLimits | None = None,
        *,
        throttle_interval: float = DEFAULT_LOG_THROTTLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limits = limits or LabelLimits()
        self._counters = {kind: AtomicCounter() for kind in ViolationKind}
        self._throttles = {
            kind: IntervalThrottle(throttle_interval, clock=clock) for kind in ViolationKind
        }

    def exceeds(self, labels: Sequence[Label]) -> bool:
        """Return ``True`` when ``labels`` exceed one of the limits.

        The checks run in order and stop at the first violation: the number
        of labels, then for each label its name length and its value length.
        Every violation increments the counter for its reason and may log a
        warning.
        """
        limits = self.limits
        if len(labels) > limits.max_labels_per_timeseries:
            self._track_too_many_labels(labels)
            return True
        for label in labels:
            if label_len(label.name) > limits.max_label_name_len:
                self._track_too_long_label_name(label, labels)
                return True
            if label_len(label.value) > limits.max_label_value_len:
                self._track_too_long_label_value(label, labels)
                return True
        return False

    def ignored_count(self, kind: ViolationKind) -> int:
        """Return the number of samples ignored so far for ``kind``."""
        return self._counters[kind].get()

    def register_metrics(self, registry: CollectorRegistry | None = None) -> AdmissionMetricRegistry:
        """Expose the ignored-sample counters as ``rows_ignored_total`` gauges."""
        readers = {kind.value: self._counters[kind].get for kind in ViolationKind}
        return AdmissionMetricRegistry(readers, registry=registry)

    # ------------------------------------------------------------------
    # rejection tracking
    #
    # labels_to_string() is only called once the throttle lets a warning
    # through, so rejected samples do not pay for rendering.
    # ------------------------------------------------------------------
    def _track_too_many_labels(self, labels: Sequence[Label]) -> None:
        kind = ViolationKind.TOO_MANY_LABELS
        self._counters[kind].add()
        if not self._throttles[kind].allow():
            return
        logger.warning(
            "admission.too_many_labels",
            labels=labels_to_string(labels),
            label_count=len(labels),
            limit=self.limits.max_labels_per_timeseries,
            hint="reduce the number of labels for this metric or increase max_labels_per_timeseries",
        )

    def _track_too_long_label_name(self, label: Label, labels: Sequence[Label]) -> None:
        kind = ViolationKind.LABEL_NAME_TOO_LONG
        self._counters[kind].add()
        if not self._throttles[kind].allow():
            return
        logger.warning(
            "admission.label_name_too_long",
            label_name=label.name,
            labels=labels_to_string(labels),
            name_length=label_len(label.name),
            limit=self.limits.max_label_name_len,
            hint="consider reducing label name length",
        )

    def _track_too_long_label_value(self, label: Label, labels: Sequence[Label]) -> None:
        kind = ViolationKind.LABEL_VALUE_TOO_LONG
        self._counters[kind].add()
        if not self._throttles[kind].allow():
            return
        logger.warning(
            "admission.label_value_too_long",
            label_name=label.name,
            label_value=label.value,
            labels=labels_to_string(labels),
            value_length=label_len(label.value),
            limit=self.limits.max_label_value_len,
            hint="reduce the label value length or increase max_label_value_len",
        )


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================


def init_label_limits(
    max_labels_per_timeseries: int,
    max_label_value_len: int,
    *,
    registry: CollectorRegistry | None = None,
    throttle_interval: float = DEFAULT_LOG_THROTTLE_SECONDS,
) -> LabelLimitsValidator:
    """Build the process validator and register its gauges.

    Call once during startup, before ingestion workers start.
    """
    limits = LabelLimits(
        max_labels_per_timeseries=max_labels_per_timeseries,
        max_label_value_len=max_label_value_len,
    )
    validator = LabelLimitsValidator(limits, throttle_interval=throttle_interval)
    validator.register_metrics(registry)
    logger.info(
        "admission.limits.initialised",
        max_labels_per_timeseries=limits.max_labels_per_timeseries,
        max_label_name_len=limits.max_label_name_len,
        max_label_value_len=limits.max_label_value_len,
    )
    return validator


def build_label_limits_validator(
    settings: AppSettings | None = None,
    *,
    registry: CollectorRegistry | None = None,
) -> LabelLimitsValidator:
    """Construct the validator from application settings.

    Args:
        settings: Optional application settings override.
        registry: Prometheus registry receiving the gauges.

    Returns:
        Configured :class:`LabelLimitsValidator` ready for dependency injection.
    """
    cfg = (settings or get_settings()).label_limits
    return init_label_limits(
        cfg.max_labels_per_timeseries,
        cfg.max_label_value_len,
        registry=registry,
        throttle_interval=cfg.log_throttle_seconds,
    )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "MAX_LABEL_NAME_LEN",
    "LabelLimits",
    "LabelLimitsValidator",
    "ViolationKind",
    "build_label_limits_validator",
    "init_label_limits",
]
