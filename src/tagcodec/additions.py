"""Tagged encodings for standard library value types.

None of these types has a native JSON form. Registering them lets dates,
decimals, sets and the like survive a round trip:

    registry = TypeRegistry()
    add_core_types(registry)               # every type below
    add_core_types(registry, date, Decimal)  # only some
"""

from __future__ import annotations

import base64
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from tagcodec.registry import TypeRegistry


def _timedelta(data: list[int]) -> timedelta:
    days, seconds, microseconds = data
    return timedelta(days=days, seconds=seconds, microseconds=microseconds)


def _fraction(data: list[int]) -> Fraction:
    numerator, denominator = data
    return Fraction(numerator, denominator)


def _complex(data: list[float]) -> complex:
    real, imag = data
    return complex(real, imag)


def _range(data: list[int]) -> range:
    start, stop, step = data
    return range(start, stop, step)


# type -> (tag, encode, decode); encode output may hold further values to encode
CORE_ADDITIONS: dict[type, tuple[str, Callable[[Any], Any], Callable[[Any], Any]]] = {
    datetime: ("datetime", datetime.isoformat, datetime.fromisoformat),
    date: ("date", date.isoformat, date.fromisoformat),
    time: ("time", time.isoformat, time.fromisoformat),
    timedelta: (
        "timedelta",
        lambda td: [td.days, td.seconds, td.microseconds],
        _timedelta,
    ),
    Decimal: ("Decimal", str, Decimal),
    Fraction: ("Fraction", lambda f: [f.numerator, f.denominator], _fraction),
    complex: ("complex", lambda c: [c.real, c.imag], _complex),
    range: ("range", lambda r: [r.start, r.stop, r.step], _range),
    set: ("set", list, set),
    frozenset: ("frozenset", list, frozenset),
    tuple: ("tuple", list, tuple),
    bytes: (
        "bytes",
        lambda b: base64.b64encode(b).decode("ascii"),
        base64.b64decode,
    ),
}


def _describer(
    tag: str,
    encode: Callable[[Any], Any],
) -> Callable[[Any], tuple[str, Any]]:
    return lambda value: (tag, encode(value))


def add_core_types(registry: TypeRegistry, *types: type) -> TypeRegistry:
    """Register encoders and constructors for standard library types.

    Args:
        registry: Registry to populate
        *types: Types to add; all of ``CORE_ADDITIONS`` when omitted

    Returns:
        The same registry, for chaining

    Raises:
        ValueError: If a requested type has no core addition

    """
    selected = types or tuple(CORE_ADDITIONS)
    for typ in selected:
        if typ not in CORE_ADDITIONS:
            available = [t.__name__ for t in CORE_ADDITIONS]
            msg = f"No core addition for {typ.__name__}. Available: {available}"
            raise ValueError(msg)
        tag, encode, decode = CORE_ADDITIONS[typ]
        registry.register(tag, decode)
        registry.register_encoder(typ, _describer(tag, encode))
    return registry
