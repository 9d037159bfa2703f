"""Generic tree shape and the describe capability of domain values."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

type Scalar = None | bool | int | float | str
type GenericNode = Scalar | list[GenericNode] | dict[str, GenericNode]

type Constructor[T] = Callable[[Any], T]
"""Builds a domain value from an already-decoded payload."""

type Describer[T] = Callable[[T], tuple[str, Any]]
"""Returns the (tag, payload) pair for a domain value."""

SCALAR_TYPES: tuple[type, ...] = (type(None), bool, int, float, str)


@runtime_checkable
class Describable(Protocol):
    """A domain value that knows its own tag and payload.

    The payload may contain generic nodes and further describable values;
    the encoder walks it.
    """

    def describe(self) -> tuple[str, Any]:
        """Return the (tag, payload) pair for this value."""
        ...


def is_scalar(value: object) -> bool:
    """Check if value is a leaf of the generic tree."""
    return isinstance(value, SCALAR_TYPES)


def is_describable(value: object) -> bool:
    """Check if value is an instance whose class defines a describe() method."""
    if isinstance(value, type):
        return False
    return callable(getattr(type(value), "describe", None))
