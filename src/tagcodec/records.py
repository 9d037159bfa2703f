"""Equip plain dataclasses with the describe capability.

A record is an ordinary dataclass. The ``tagged`` decorator attaches a tag,
a ``describe`` method and a ``from_payload`` constructor built from the
dataclass fields. Classes that define either method themselves keep their
own version, so payload shapes can be customized one type at a time.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields, is_dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tagcodec.registry import TypeRegistry


def record_payload(obj: Any) -> dict[str, Any]:
    """Collect the init fields of a dataclass instance into a payload dict."""
    return {
        f.name: getattr(obj, f.name)
        for f in fields(obj)
        if f.init and not f.name.startswith("_")
    }


def build_record[T](cls: type[T], payload: Any) -> T:
    """Construct a dataclass from a decoded payload mapping.

    Raises:
        TypeError: If payload is not a mapping, has unexpected keys, or lacks
            required fields

    """
    if not isinstance(payload, Mapping):
        msg = f"{cls.__name__} payload must be a mapping, got {type(payload).__name__}"
        raise TypeError(msg)
    known = {f.name for f in fields(cls) if f.init}  # type: ignore[arg-type]
    if unexpected := sorted(set(payload) - known):
        msg = f"{cls.__name__} got unexpected fields: {unexpected}"
        raise TypeError(msg)
    return cls(**payload)


def _describe(self: Any) -> tuple[str, Any]:
    return type(self).__tag__, record_payload(self)


def tagged[C: type](tag: str | None = None) -> Callable[[C], C]:
    """Class decorator turning a class into a tagged record.

    Non-dataclasses are converted with ``dataclass(frozen=True)``. The tag
    defaults to the class name.

    Example:
        @tagged("Car")
        class Car:
            wheels: int
            year: int

        registry.register_type(Car)

    Raises:
        TypeError: If tag is not a string, e.g. when written as bare @tagged

    """
    if tag is not None and not isinstance(tag, str):
        msg = f"tagged() takes a tag string or nothing, got {tag!r}; use @tagged()"
        raise TypeError(msg)

    def decorate(cls: C) -> C:
        if not is_dataclass(cls):
            cls = dataclass(frozen=True)(cls)
        cls.__tag__ = tag if tag is not None else cls.__name__  # type: ignore[attr-defined]
        if "describe" not in cls.__dict__:
            cls.describe = _describe  # type: ignore[attr-defined]
        if "from_payload" not in cls.__dict__:
            cls.from_payload = classmethod(build_record)  # type: ignore[attr-defined]
        return cls

    return decorate


def register_records(registry: TypeRegistry, *classes: type) -> TypeRegistry:
    """Register each tagged record class under its tag and return the registry."""
    for cls in classes:
        registry.register_type(cls)
    return registry
