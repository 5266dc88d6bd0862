"""Field views into a parser's backing buffer.

A :class:`Field` does not own its text. It records where its name and value
were appended in the parser's backing buffer and decodes them on access, so
producing a field costs no per-field string allocation. A field is valid until
the parser's buffer is reset, which happens on the next resetting parse or
when the parser is returned to its pool; reading it after that raises
:class:`~record_prep.logstorage.errors.StaleFieldError`. Use
:meth:`Field.as_tuple` to keep a value beyond that point.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import StaleFieldError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .json_parser import JSONParser

__all__ = ["Field"]


class Field:
    """A flattened ``(name, value)`` pair produced by :class:`JSONParser`."""

    __slots__ = (
        "_owner",
        "_generation",
        "_name_start",
        "_name_end",
        "_value_start",
        "_value_end",
        "_renamed",
    )

    def __init__(
        self,
        owner: JSONParser,
        name_start: int,
        name_end: int,
        value_start: int,
        value_end: int,
    ) -> None:
        self._owner = owner
        self._generation = owner.generation
        self._name_start = name_start
        self._name_end = name_end
        self._value_start = value_start
        self._value_end = value_end
        self._renamed: str | None = None

    def _text(self, start: int, end: int) -> str:
        if self._owner.generation != self._generation:
            raise StaleFieldError()
        return self._owner.buffer_text(start, end)

    @property
    def name(self) -> str:
        if self._renamed is not None:
            # renaming does not extend the validity window
            if self._owner.generation != self._generation:
                raise StaleFieldError()
            return self._renamed
        return self._text(self._name_start, self._name_end)

    @name.setter
    def name(self, new_name: str) -> None:
        self._renamed = new_name

    @property
    def value(self) -> str:
        return self._text(self._value_start, self._value_end)

    @property
    def is_valid(self) -> bool:
        return self._owner.generation == self._generation

    def as_tuple(self) -> tuple[str, str]:
        """Copy the field out of the parser buffer."""
        return self.name, self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Field):
            return self.as_tuple() == other.as_tuple()
        if isinstance(other, tuple):
            return self.as_tuple() == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if not self.is_valid:
            return "Field(<stale>)"
        return f"Field(name={self.name!r}, value={self.value!r})"
