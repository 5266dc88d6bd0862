"""Admission control for samples headed to the storage engine."""

from .labels import Label, label_len, labels_to_string
from .labels_limits import (
    MAX_LABEL_NAME_LEN,
    LabelLimits,
    LabelLimitsValidator,
    ViolationKind,
    build_label_limits_validator,
    init_label_limits,
)

__all__ = [
    "MAX_LABEL_NAME_LEN",
    "Label",
    "LabelLimits",
    "LabelLimitsValidator",
    "ViolationKind",
    "build_label_limits_validator",
    "init_label_limits",
    "label_len",
    "labels_to_string",
]
