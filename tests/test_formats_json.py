"""Tests for tagcodec.formats.json module."""

import json
from datetime import date

import pytest

from tagcodec.additions import add_core_types
from tagcodec.config import CodecConfig
from tagcodec.errors import DepthExceededError, TagCodecError, UnknownTagError
from tagcodec.formats import from_json, to_json
from tagcodec.records import register_records, tagged
from tagcodec.registry import TypeRegistry


@tagged("Book")
class Book:
    """Record used for JSON tests."""

    title: str
    published: date


def make_registry() -> TypeRegistry:
    return register_records(add_core_types(TypeRegistry(), date), Book)


class TestToJson:
    """Test to_json()."""

    def test_indented_by_default(self) -> None:
        """Test default output uses a two-space indent."""
        assert to_json({"a": 1}) == '{\n  "a": 1\n}'

    def test_compact(self) -> None:
        """Test indent=None gives compact output."""
        assert to_json([1, {"b": None}], indent=None) == '[1, {"b": null}]'

    def test_domain_value(self) -> None:
        """Test the JSON text carries the tagged wrapper."""
        text = to_json(Book("Dune", date(1965, 8, 1)), make_registry(), indent=None)  # type: ignore[call-arg]

        assert json.loads(text) == {
            "json_class": "Book",
            "data": {
                "title": "Dune",
                "published": {"json_class": "date", "data": "1965-08-01"},
            },
        }


class TestFromJson:
    """Test from_json()."""

    def test_round_trip(self) -> None:
        """Test from_json(to_json(v)) == v."""
        registry = make_registry()
        books = [Book("Emma", date(1815, 12, 23)), Book("Ulysses", date(1922, 2, 2))]  # type: ignore[call-arg]

        assert from_json(to_json(books, registry), registry) == books

    def test_plain_json(self) -> None:
        """Test untagged documents decode to plain structures."""
        assert from_json('{"a": [1, 2.5, "x", true, null]}', make_registry()) == {
            "a": [1, 2.5, "x", True, None],
        }

    def test_custom_tag_key(self) -> None:
        """Test the configured tag key is used for both directions."""
        registry = make_registry()
        config = CodecConfig(tag_key="resource_type")
        book = Book("Kim", date(1901, 10, 1))  # type: ignore[call-arg]

        text = to_json(book, registry, config)

        assert '"resource_type": "Book"' in text
        assert from_json(text, registry, config) == book

    def test_invalid_json(self) -> None:
        """Test syntax errors propagate from the json module."""
        with pytest.raises(json.JSONDecodeError):
            from_json("{not json", make_registry())

    def test_unknown_tag(self) -> None:
        """Test hydration errors propagate."""
        with pytest.raises(UnknownTagError):
            from_json('{"json_class": "Ghost", "data": {}}', make_registry())


class TestDepthGuard:
    """Test nesting limits surface as DepthExceededError through the adapter."""

    def test_very_deep_text(self) -> None:
        """Test 100,000-level JSON text fails with DepthExceededError."""
        depth = 100_000
        text = '{"json_class": "Box", "data": ' * depth + "1" + "}" * depth

        with pytest.raises(DepthExceededError) as exc_info:
            from_json(text, make_registry())

        assert exc_info.value.limit == 1000
        assert isinstance(exc_info.value.__cause__, RecursionError)

    def test_very_deep_value_with_large_budget(self) -> None:
        """Test the json module's own limit is reported the same way."""
        value: list[object] = []
        for _ in range(100_000):
            value = [value]
        config = CodecConfig(max_depth=200_000)

        with pytest.raises(DepthExceededError) as exc_info:
            to_json(value, config=config, indent=None)

        assert exc_info.value.limit == 200_000

    def test_depth_errors_are_codec_errors(self) -> None:
        """Test callers can catch adapter depth failures as TagCodecError."""
        text = "[" * 100_000 + "]" * 100_000

        with pytest.raises(TagCodecError):
            from_json(text, make_registry())
