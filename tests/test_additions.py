"""Tests for tagcodec.additions module."""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta
from decimal import Decimal
from fractions import Fraction
from typing import Any

import pytest

from tagcodec.additions import CORE_ADDITIONS, add_core_types
from tagcodec.decoder import decode
from tagcodec.encoder import encode
from tagcodec.errors import ConstructionError
from tagcodec.registry import TypeRegistry


@pytest.fixture
def registry() -> TypeRegistry:
    return add_core_types(TypeRegistry())


class TestRoundTrip:
    """Test every core type survives encode then decode."""

    @pytest.mark.parametrize(
        "value",
        [
            datetime(2024, 2, 29, 13, 45, 7, 120, tzinfo=UTC),
            datetime(2024, 2, 29, 13, 45),
            date(1999, 12, 31),
            time(23, 59, 1),
            timedelta(days=-2, seconds=5, microseconds=7),
            Decimal("1.10"),
            Fraction(3, 7),
            complex(1.5, -2.0),
            range(1, 10, 3),
            {1, 2, 3},
            frozenset({"a", "b"}),
            (1, "two", 3.0),
            b"\x00\xffbinary",
        ],
        ids=lambda v: type(v).__name__,
    )
    def test_round_trip(self, registry: TypeRegistry, value: Any) -> None:
        """Test decode(encode(v)) == v with matching type."""
        result = decode(encode(value, registry), registry)

        assert result == value
        assert type(result) is type(value)

    def test_nested_tuples(self, registry: TypeRegistry) -> None:
        """Test container additions recurse into their elements."""
        value = (1, (2, frozenset({3})), [date(2020, 1, 1)])

        assert decode(encode(value, registry), registry) == value

    def test_values_inside_plain_containers(self, registry: TypeRegistry) -> None:
        """Test additions inside generic dicts and lists."""
        value = {"when": date(2021, 6, 1), "amounts": [Decimal("0.1"), Decimal(2)]}

        assert decode(encode(value, registry), registry) == value


class TestWireFormat:
    """Test the encoded shape of core types."""

    def test_decimal_keeps_exact_text(self, registry: TypeRegistry) -> None:
        """Test decimals are carried as strings."""
        assert encode(Decimal("1.10"), registry) == {
            "json_class": "Decimal",
            "data": "1.10",
        }

    def test_date_is_iso_formatted(self, registry: TypeRegistry) -> None:
        """Test dates use ISO 8601."""
        assert encode(date(2023, 5, 1), registry) == {
            "json_class": "date",
            "data": "2023-05-01",
        }

    def test_datetime_not_confused_with_date(self, registry: TypeRegistry) -> None:
        """Test subclasses dispatch on their exact type."""
        wire = encode(datetime(2023, 5, 1, 8, 0), registry)

        assert wire == {"json_class": "datetime", "data": "2023-05-01T08:00:00"}

    def test_range_and_fraction(self, registry: TypeRegistry) -> None:
        """Test numeric structures encode as lists."""
        assert encode(range(0, 6, 2), registry)["data"] == [0, 6, 2]  # type: ignore[index]
        assert encode(Fraction(1, 3), registry)["data"] == [1, 3]  # type: ignore[index]

    def test_custom_keys(self) -> None:
        """Test additions honour the configured keys."""
        registry = add_core_types(TypeRegistry(), date)

        wire = encode(date(2000, 1, 1), registry, tag_key="type", data_key="value")

        assert wire == {"type": "date", "value": "2000-01-01"}
        assert decode(wire, registry, tag_key="type", data_key="value") == date(2000, 1, 1)


class TestSelection:
    """Test registering a subset of core types."""

    def test_only_requested_types(self) -> None:
        """Test that only the given types are registered."""
        registry = add_core_types(TypeRegistry(), date, Decimal)

        assert registry.tags() == ["date", "Decimal"]
        assert registry.describer_for(set) is None

    def test_all_types_by_default(self, registry: TypeRegistry) -> None:
        """Test every core addition is registered."""
        assert len(registry) == len(CORE_ADDITIONS)

    def test_unknown_type_rejected(self) -> None:
        """Test requesting a type without an addition fails."""
        with pytest.raises(ValueError, match="No core addition for list"):
            add_core_types(TypeRegistry(), list)


class TestBadPayloads:
    """Test malformed payloads surface as construction errors."""

    @pytest.mark.parametrize(
        ("tag", "payload"),
        [
            ("date", "not-a-date"),
            ("Fraction", [1]),
            ("range", "0..5"),
            ("Decimal", "abc"),
            ("set", [[1, 2]]),
        ],
    )
    def test_bad_payload(self, registry: TypeRegistry, tag: str, payload: Any) -> None:
        """Test each constructor rejects a wrong payload shape."""
        with pytest.raises(ConstructionError) as exc_info:
            decode({"json_class": tag, "data": payload}, registry)

        assert exc_info.value.tag == tag
