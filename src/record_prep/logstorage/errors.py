"""Errors raised by the JSON field extractor."""

from __future__ import annotations

from typing import TYPE_CHECKING

from record_prep.utils.errors import RecordPrepError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .json_types import JSONType

__all__ = [
    "MalformedJSONError",
    "ParserReleasedError",
    "StaleFieldError",
    "UnexpectedRootTypeError",
]


class MalformedJSONError(RecordPrepError):
    """The log line could not be parsed as JSON."""

    def __init__(self, detail: str) -> None:
        super().__init__("cannot parse json", status=400, detail=detail)


class UnexpectedRootTypeError(RecordPrepError):
    """The log line is valid JSON but its top-level value is not an object."""

    def __init__(self, observed_type: JSONType) -> None:
        super().__init__(
            "expecting json dictionary",
            status=422,
            detail=f"got {observed_type.value}",
            extra={"observed_type": observed_type.value},
        )
        self.observed_type = observed_type


class ParserReleasedError(RecordPrepError):
    """A parser was used or released again after being returned to its pool."""

    def __init__(self) -> None:
        super().__init__("parser has already been returned to the pool", status=500)


class StaleFieldError(RecordPrepError):
    """A field was read after the backing buffer it points into was reset."""

    def __init__(self) -> None:
        super().__init__(
            "field is no longer valid",
            status=500,
            detail="the parser buffer was reset by a later parse or by release",
        )
