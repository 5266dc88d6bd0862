"""Flattening of JSON log lines into name/value fields.

Key Responsibilities:
    - Parse a single JSON object log line with ``orjson`` and flatten it into
      an ordered list of :class:`~record_prep.logstorage.fields.Field` views
    - Reuse the field list, the backing buffer and the prefix buffer across
      calls, pooling parsers so that hot ingestion paths do not reallocate

Collaborators:
    - Upstream: Log ingestion handlers obtain a parser with
      :func:`get_json_parser` (or :func:`json_parser`) per line or batch
    - Downstream: Storage writers read ``parser.fields`` before the next
      parse or before returning the parser

Flattening rules:
    - ``null`` values are skipped
    - nested objects are flattened with dotted names, so
      ``{"foo":{"bar":"baz"}}`` becomes ``foo.bar=baz``
    - arrays, numbers and booleans keep their compact JSON text
      (``[1,2]``, ``123``, ``true``)
    - strings are stored decoded, without JSON quoting or escapes
    - repeated names are not merged; ``{"a.b":1,"a":{"b":2}}`` yields two
      ``a.b`` fields

Thread Safety:
    - A parser must be used by one caller at a time. The pool hands each
      parser to a single caller until it is released.

Performance Characteristics:
    - Names and values are appended to one ``bytearray`` whose capacity is
      kept across resets; fields store offsets into it instead of strings
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache
from typing import Any

import orjson

from record_prep.config.settings import get_settings
from record_prep.utils.pool import ResourcePool

from .errors import MalformedJSONError, ParserReleasedError, UnexpectedRootTypeError
from .fields import Field
from .json_types import JSONType, json_type_of

__all__ = [
    "JSONParser",
    "get_json_parser",
    "get_parser_pool",
    "json_parser",
    "put_json_parser",
]

_ENCODING = "utf-8"
# lone surrogates survive the round trip through the buffer unchanged
_ERRORS = "surrogatepass"

# orjson decodes integers outside the 64-bit range as floats. Lines holding a
# run of 19 or more digits are decoded again with an integer hook that keeps
# such values exact.
_LONG_DIGITS = re.compile(rb"[0-9]{19,}")
_LONG_DIGITS_TEXT = re.compile(r"[0-9]{19,}")
_INT64_MIN = -(2**63)
_UINT64_MAX = 2**64 - 1


class _WideInt(int):
    """Integer that orjson cannot encode natively."""


def _parse_int(text: str) -> int:
    value = int(text)
    if _INT64_MIN <= value <= _UINT64_MAX:
        return value
    return _WideInt(value)


def _decode(raw: bytes | bytearray | memoryview | str) -> Any:
    if isinstance(raw, memoryview):
        raw = raw.tobytes()
    try:
        root = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise MalformedJSONError(str(exc)) from exc
    pattern = _LONG_DIGITS_TEXT if isinstance(raw, str) else _LONG_DIGITS
    if pattern.search(raw) is None:
        return root
    try:
        return json.loads(raw, parse_int=_parse_int)
    except (RecursionError, ValueError) as exc:
        # int() refuses literals longer than sys.get_int_max_str_digits()
        raise MalformedJSONError(str(exc)) from exc


def _dump_wide_int(value: Any) -> orjson.Fragment:
    if isinstance(value, _WideInt):
        return orjson.Fragment(int.__repr__(value).encode())
    raise TypeError(f"unexpected value of type {type(value).__name__}")


def _dump_array(value: list[Any]) -> bytes:
    return orjson.dumps(value, default=_dump_wide_int, option=orjson.OPT_PASSTHROUGH_SUBCLASS)


class JSONParser:
    """Parses a single JSON log message into :attr:`fields`.

    Obtain instances with :func:`get_json_parser` and return them with
    :func:`put_json_parser`. The fields are valid until the next resetting
    parse or until the parser is returned to the pool.
    """

    def __init__(self) -> None:
        self.fields: list[Field] = []
        # bumped whenever _buf is logically cleared; fields from an older
        # generation are stale
        self.generation = 0
        self.released = False
        self._buf = bytearray()
        self._buf_len = 0
        self._prefix = bytearray()

    # ------------------------------------------------------------------
    # buffer management
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Clear fields, prefix and backing buffer, keeping buffer capacity."""
        self._reset_nobuf()
        self._buf_len = 0
        self.generation += 1

    def _reset_nobuf(self) -> None:
        self.fields.clear()
        self._prefix.clear()

    def _append(self, data: bytes | bytearray) -> int:
        # overwrite in place up to the current capacity, then grow
        start = self._buf_len
        end = start + len(data)
        self._buf[start:end] = data
        self._buf_len = end
        return end

    def buffer_text(self, start: int, end: int) -> str:
        return self._buf[start:end].decode(_ENCODING, _ERRORS)

    @property
    def prefix_len(self) -> int:
        """Length in bytes of the prefix currently held in the prefix buffer."""
        return len(self._prefix)

    # ------------------------------------------------------------------
    # parsing
    # ------------------------------------------------------------------
    def parse_log_message(
        self, msg: bytes | bytearray | memoryview | str, prefix: str = ""
    ) -> list[Field]:
        """Parse ``msg`` into :attr:`fields`, prefixing every field name.

        The fields remain valid until the next call to
        :meth:`parse_log_message` or :func:`put_json_parser`.
        """
        return self.parse(msg, prefix, reset_buffer=True)

    def parse_log_message_no_reset_buf(
        self, msg: bytes | bytearray | memoryview | str, prefix: str = ""
    ) -> list[Field]:
        """Parse ``msg`` without invalidating fields returned by earlier calls.

        Only the field list is cleared; earlier fields stay readable until
        :func:`put_json_parser` or a resetting parse.
        """
        return self.parse(msg, prefix, reset_buffer=False)

    def parse(
        self,
        raw: bytes | bytearray | memoryview | str,
        prefix: str = "",
        reset_buffer: bool = True,
    ) -> list[Field]:
        """Parse one JSON object and flatten it into :attr:`fields`.

        Args:
            raw: Buffer holding exactly one JSON value.
            prefix: String prepended verbatim to every produced field name.
            reset_buffer: When ``True`` the backing buffer is cleared and all
                earlier fields become stale; when ``False`` only the field
                list is cleared.

        Returns:
            The parser's field list.

        Raises:
            MalformedJSONError: ``raw`` is not valid JSON.
            UnexpectedRootTypeError: the top-level value is not an object.
            ParserReleasedError: the parser has been returned to its pool.
        """
        if self.released:
            raise ParserReleasedError()
        if reset_buffer:
            self.reset()
        else:
            self._reset_nobuf()

        root = _decode(raw)
        root_type = json_type_of(root)
        if root_type is not JSONType.OBJECT:
            raise UnexpectedRootTypeError(root_type)

        self._prefix += prefix.encode(_ENCODING, _ERRORS)
        self._append_object_fields(root)
        return self.fields

    def _append_object_fields(self, root: dict[str, Any]) -> None:
        # Depth-first walk with an explicit stack, so deeply nested lines are
        # bounded by the tokenizer's depth limit rather than the recursion limit.
        # Each frame remembers the prefix length to restore once its object
        # has been fully visited.
        stack: list[tuple[Iterator[tuple[str, Any]], int]] = [
            (iter(root.items()), len(self._prefix))
        ]
        while stack:
            items, prefix_len = stack[-1]
            for key, value in items:
                kind = json_type_of(value)
                match kind:
                    case JSONType.NULL:
                        continue
                    case JSONType.OBJECT:
                        nested_len = len(self._prefix)
                        self._prefix += key.encode(_ENCODING, _ERRORS)
                        self._prefix += b"."
                        stack.append((iter(value.items()), nested_len))
                        break
                    case JSONType.ARRAY:
                        self._append_field(key, _dump_array(value))
                    case JSONType.TRUE | JSONType.FALSE:
                        self._append_field(key, orjson.dumps(value))
                    case JSONType.NUMBER:
                        text = str(value).encode() if isinstance(value, int) else orjson.dumps(value)
                        self._append_field(key, text)
                    case JSONType.STRING:
                        self._append_field(key, value.encode(_ENCODING, _ERRORS))
            else:
                stack.pop()
                del self._prefix[prefix_len:]

    def _append_field(self, key: str, value: bytes) -> None:
        value_start = self._buf_len
        value_end = self._append(value)
        self._append(self._prefix)
        name_end = self._append(key.encode(_ENCODING, _ERRORS))
        self.fields.append(Field(self, value_end, name_end, value_start, value_end))

    # ------------------------------------------------------------------
    # post-processing
    # ------------------------------------------------------------------
    def rename_field(self, old_name: str, new_name: str) -> None:
        """Rename the first field named ``old_name`` to ``new_name``."""
        if not old_name:
            return
        for field in self.fields:
            if field.name == old_name:
                field.name = new_name
                return

    def field_pairs(self) -> list[tuple[str, str]]:
        """Return a copy of the current fields that outlives the parser buffer."""
        return [field.as_tuple() for field in self.fields]


# ==============================================================================
# POOL
# ==============================================================================


def _prepare_parser(parser: JSONParser) -> None:
    parser.released = False


def _release_parser(parser: JSONParser) -> None:
    if parser.released:
        raise ParserReleasedError()
    parser.reset()
    parser.released = True


@lru_cache(maxsize=1)
def get_parser_pool() -> ResourcePool[JSONParser]:
    """Return the process-wide parser pool."""
    settings = get_settings().parser_pool
    return ResourcePool(
        JSONParser,
        prepare=_prepare_parser,
        reset=_release_parser,
        max_idle=settings.max_idle,
    )


def get_json_parser() -> JSONParser:
    """Return a :class:`JSONParser` ready to parse JSON lines.

    Return the parser to the pool with :func:`put_json_parser` when it is no
    longer needed.
    """
    return get_parser_pool().acquire()


def put_json_parser(parser: JSONParser) -> None:
    """Return ``parser`` to the pool. It cannot be used afterwards."""
    get_parser_pool().release(parser)


@contextmanager
def json_parser() -> Iterator[JSONParser]:
    """Lease a parser from the pool for the duration of a ``with`` block."""
    with get_parser_pool().lease() as parser:
        yield parser
