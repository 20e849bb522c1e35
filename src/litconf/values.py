"""Values produced by converting document nodes."""

from __future__ import annotations

from dataclasses import dataclass
import sys
from typing import Any, NamedTuple, TypeAlias


@dataclass(frozen=True, slots=True)
class StringValue:
    """Literal text taken verbatim from a span."""

    text: str


@dataclass(frozen=True, slots=True)
class DatumValue:
    """A datum read from a code span, never evaluated."""

    datum: Any


@dataclass(frozen=True, slots=True)
class ListValue:
    """Ordered sequence of values."""

    items: tuple[Value, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


@dataclass(frozen=True, slots=True)
class PairValue:
    """Key/rest association built from a tagged list item."""

    key: Value
    rest: Value


@dataclass(frozen=True, slots=True)
class ArbitraryValue:
    """Whatever an evaluated code block returned."""

    value: Any


Value: TypeAlias = StringValue | DatumValue | ListValue | PairValue | ArbitraryValue


class Binding(NamedTuple):
    """Name bound to a converted value."""

    name: str
    value: Value

    @classmethod
    def create(cls, name: str, value: Value) -> Binding:
        """Build a binding with an interned name."""
        return cls(sys.intern(name), value)


def to_python(value: Value) -> Any:
    """Unwrap a value into plain Python objects.

    Lists become lists, pairs become ``(key, rest)`` tuples and the remaining
    variants return their payload unchanged.
    """
    if isinstance(value, StringValue):
        return value.text
    if isinstance(value, DatumValue):
        return value.datum
    if isinstance(value, ListValue):
        return [to_python(item) for item in value.items]
    if isinstance(value, PairValue):
        return (to_python(value.key), to_python(value.rest))
    if isinstance(value, ArbitraryValue):
        return value.value
    msg = f"Not a converted value: {value!r}"
    raise TypeError(msg)


__all__ = [
    "ArbitraryValue",
    "Binding",
    "DatumValue",
    "ListValue",
    "PairValue",
    "StringValue",
    "Value",
    "to_python",
]
