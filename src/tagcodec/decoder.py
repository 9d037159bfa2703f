"""Hydrate generic trees into domain values.

The walk uses an explicit stack of frames rather than Python recursion, so
arbitrarily deep input fails with DepthExceededError instead of exhausting
the interpreter stack. Children are completed before their parents, which
makes construction innermost-first: a constructor always receives a fully
decoded payload.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from tagcodec.config import DEFAULT_CONFIG, CodecConfig, UnknownTagPolicy
from tagcodec.errors import (
    ConstructionError,
    DepthExceededError,
    MalformedTagError,
    UnknownTagError,
)

if TYPE_CHECKING:
    from tagcodec.nodes import Constructor, GenericNode
    from tagcodec.registry import TypeRegistry

_LOG = logging.getLogger(__name__)

# Sentinels for the frame protocol
_PENDING = object()
_DONE = object()


class _SequenceFrame:
    __slots__ = ("_items", "result")

    def __init__(self, items: list[Any] | tuple[Any, ...]) -> None:
        self._items = iter(items)
        self.result: list[Any] = []

    def next_child(self) -> Any:
        return next(self._items, _DONE)

    def accept(self, value: Any) -> None:
        self.result.append(value)

    def finish(self) -> list[Any]:
        return self.result


class _MappingFrame:
    __slots__ = ("_items", "_key", "result")

    def __init__(self, mapping: dict[str, Any]) -> None:
        self._items: Iterator[tuple[str, Any]] = iter(mapping.items())
        self._key: str | None = None
        self.result: dict[str, Any] = {}

    def next_child(self) -> Any:
        item = next(self._items, None)
        if item is None:
            return _DONE
        self._key, value = item
        return value

    def accept(self, value: Any) -> None:
        self.result[self._key] = value  # type: ignore[index]

    def finish(self) -> dict[str, Any]:
        return self.result


class _TaggedFrame:
    __slots__ = ("_constructor", "_payload", "_sent", "tag")

    def __init__(self, tag: str, constructor: Constructor[Any], payload: Any) -> None:
        self.tag = tag
        self._constructor = constructor
        self._payload = payload
        self._sent = False

    def next_child(self) -> Any:
        if self._sent:
            return _DONE
        self._sent = True
        return self._payload

    def accept(self, value: Any) -> None:
        self._payload = value

    def finish(self) -> Any:
        try:
            return self._constructor(self._payload)
        except Exception as exc:
            raise ConstructionError(self.tag, exc) from exc


type _Frame = _SequenceFrame | _MappingFrame | _TaggedFrame


class Decoder:
    """Reusable decoder bound to a registry and configuration.

    Holds no per-call state, so one instance can serve concurrent calls as
    long as the registry is not mutated meanwhile.
    """

    def __init__(
        self,
        registry: TypeRegistry,
        config: CodecConfig = DEFAULT_CONFIG,
    ) -> None:
        self.registry = registry
        self.config = config

    def decode(self, node: GenericNode) -> Any:
        """Decode a generic tree.

        Args:
            node: Tree of dicts, lists and scalars as produced by a parser

        Returns:
            The tree with every tagged mapping replaced by a domain value

        Raises:
            MalformedTagError: Tag value is not a string (strict mode)
            UnknownTagError: Tag is not registered (strict mode)
            ConstructionError: A constructor raised
            DepthExceededError: Nesting exceeds ``config.max_depth``

        """
        stack: list[_Frame] = []
        result = self._enter(node, stack)
        while stack:
            frame = stack[-1]
            if result is not _PENDING:
                frame.accept(result)
            child = frame.next_child()
            if child is _DONE:
                stack.pop()
                result = frame.finish()
            else:
                result = self._enter(child, stack)
        return result

    def _enter(self, value: Any, stack: list[_Frame]) -> Any:
        """Return value if it is a leaf, otherwise push a frame for it."""
        if isinstance(value, dict):
            frame = self._mapping_frame(value)
            if frame is None:
                return value
        elif isinstance(value, list | tuple):
            frame = _SequenceFrame(value)
        else:
            return value

        if len(stack) >= self.config.max_depth:
            raise DepthExceededError(self.config.max_depth)
        stack.append(frame)
        return _PENDING

    def _mapping_frame(
        self,
        mapping: dict[str, Any],
    ) -> _MappingFrame | _TaggedFrame | None:
        """Choose how to decode a mapping; None means keep it untouched."""
        config = self.config
        if config.tag_key not in mapping:
            return _MappingFrame(mapping)

        tag = mapping[config.tag_key]
        if not isinstance(tag, str):
            if config.unknown_tags is UnknownTagPolicy.STRICT:
                raise MalformedTagError(config.tag_key, tag)
            _LOG.debug("Ignoring non-string tag %r", tag)
            return _MappingFrame(mapping)

        constructor = self.registry.resolve(tag)
        if constructor is None:
            if config.unknown_tags is UnknownTagPolicy.STRICT:
                raise UnknownTagError(tag, self.registry.tags())
            _LOG.debug("Leaving mapping with unknown tag %r undecoded", tag)
            return None

        payload = mapping.get(config.data_key, {})
        return _TaggedFrame(tag, constructor, payload)


def decode(
    node: GenericNode,
    registry: TypeRegistry,
    config: CodecConfig = DEFAULT_CONFIG,
    *,
    tag_key: str | None = None,
    data_key: str | None = None,
) -> Any:
    """Decode a generic tree into domain values.

    Args:
        node: Tree of dicts, lists and scalars as produced by a parser
        registry: Tag to constructor registry
        config: Codec options
        tag_key: Override ``config.tag_key`` for this call
        data_key: Override ``config.data_key`` for this call

    Returns:
        Decoded tree. Untagged containers become new lists and dicts.

    Example:
        registry = TypeRegistry()
        registry.register("Point", lambda data: Point(*data))
        decode({"json_class": "Point", "data": [1, 2]}, registry)  # Point(1, 2)

    """
    overrides = {
        name: override
        for name, override in (("tag_key", tag_key), ("data_key", data_key))
        if override is not None
    }
    if overrides:
        config = config.replace(**overrides)
    return Decoder(registry, config).decode(node)
