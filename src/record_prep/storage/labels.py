"""Timeseries label types."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import orjson

__all__ = ["Label", "label_len", "labels_to_string"]


@dataclass(frozen=True, slots=True)
class Label:
    """One dimension of a timeseries identity."""

    name: str
    value: str


def label_len(text: str) -> int:
    """Return the storage length of ``text`` in UTF-8 bytes."""
    if text.isascii():
        return len(text)
    return len(text.encode("utf-8", "surrogatepass"))


def labels_to_string(labels: Sequence[Label]) -> str:
    """Render ``labels`` as ``{name="value",...}`` in their given order.

    An empty label name is the metric name and is rendered as ``__name__``.
    """
    parts = [
        f"{label.name or '__name__'}={orjson.dumps(label.value).decode()}" for label in labels
    ]
    return "{" + ",".join(parts) + "}"
