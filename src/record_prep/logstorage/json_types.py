"""Closed taxonomy of JSON value types produced by the tokenizer."""

from __future__ import annotations

from enum import Enum
from typing import Any

import structlog

from record_prep.utils.errors import InvariantViolation

logger = structlog.get_logger(__name__)

__all__ = ["JSONType", "json_type_of"]


class JSONType(str, Enum):
    """Types a decoded JSON value can have."""

    NULL = "null"
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"


def json_type_of(value: Any) -> JSONType:
    """Classify a value decoded by ``orjson.loads``.

    Raises:
        InvariantViolation: ``value`` is not something the tokenizer can produce.
    """
    if value is None:
        return JSONType.NULL
    # bool must be checked before int, since bool is an int subclass
    if value is True:
        return JSONType.TRUE
    if value is False:
        return JSONType.FALSE
    if isinstance(value, str):
        return JSONType.STRING
    if isinstance(value, dict):
        return JSONType.OBJECT
    if isinstance(value, list):
        return JSONType.ARRAY
    if isinstance(value, (int, float)):
        return JSONType.NUMBER
    kind = type(value).__name__
    logger.critical("logstorage.json.unexpected_type", type=kind)
    raise InvariantViolation(f"BUG: unexpected JSON value of type {kind}")
