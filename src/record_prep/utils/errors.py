"""Problem detail helpers for consistent error reporting across the ingestion layer.

Key Responsibilities:
    - Provide RFC 7807 compliant data structures used when rejecting input
      records, so that ingestion front-ends can surface a uniform payload
    - Supply a base exception that carries problem details
    - Define the fatal invariant violation raised on impossible internal states

Collaborators:
    - Upstream: The JSON field extractor raises ``RecordPrepError`` subclasses
      for malformed or wrongly shaped lines
    - Downstream: Ingestion pipelines count, log, or serialise the attached
      :class:`ProblemDetail`

Side Effects:
    - None; helpers are pure data containers

Thread Safety:
    - Thread-safe; instances are not shared between callers
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

# ==============================================================================
# TYPE DEFINITIONS
# ==============================================================================

__all__ = ["InvariantViolation", "ProblemDetail", "RecordPrepError"]


@dataclass(slots=True)
class ProblemDetail:
    """Lightweight problem details object compliant with RFC 7807."""

    title: str
    status: int
    detail: str | None = None
    type: str = "about:blank"
    instance: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def model_dump(self) -> dict[str, Any]:
        """Return a dictionary representation with optional fields dropped."""
        payload = {key: value for key, value in asdict(self).items() if value is not None}
        if not payload.get("extra"):
            payload.pop("extra", None)
        return payload


class RecordPrepError(RuntimeError):
    """Base exception for recoverable record preparation failures."""

    def __init__(
        self,
        message: str,
        *,
        status: int = 400,
        detail: str | None = None,
        type: str = "about:blank",
        extra: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialise the exception with structured problem detail attributes.

        Args:
            message: Human readable error summary.
            status: HTTP-style status code associated with the problem.
            detail: Optional detailed description of the failure.
            type: Problem type URI, defaults to ``about:blank``.
            extra: Additional attributes included in the serialized payload.
        """
        super().__init__(message if detail is None else f"{message}: {detail}")
        self.problem = ProblemDetail(
            title=message,
            status=status,
            detail=detail,
            type=type,
            extra=extra or {},
        )


class InvariantViolation(AssertionError):
    """Raised when an internal invariant no longer holds.

    This indicates a bug rather than bad input and must not be caught by
    library code.
    """
