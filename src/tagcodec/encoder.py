"""Convert domain values back into tagged generic trees."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from tagcodec.config import DEFAULT_CONFIG, CodecConfig
from tagcodec.errors import DepthExceededError, EncodeError
from tagcodec.nodes import GenericNode, is_describable, is_scalar
from tagcodec.registry import TypeRegistry

_PENDING = object()
_DONE = object()


class _ListFrame:
    __slots__ = ("_items", "result")

    def __init__(self, items: Any) -> None:
        self._items = iter(items)
        self.result: list[GenericNode] = []

    def next_child(self) -> Any:
        return next(self._items, _DONE)

    def accept(self, value: GenericNode) -> None:
        self.result.append(value)

    def finish(self) -> GenericNode:
        return self.result


class _DictFrame:
    __slots__ = ("_items", "_key", "result")

    def __init__(self, mapping: Mapping[Any, Any]) -> None:
        self._items: Iterator[tuple[Any, Any]] = iter(mapping.items())
        self._key = ""
        self.result: dict[str, GenericNode] = {}

    def next_child(self) -> Any:
        for key, value in self._items:
            if not isinstance(key, str):
                msg = f"Mapping keys must be strings, got {type(key).__name__} ({key!r})"
                raise EncodeError(msg)
            self._key = key
            return value
        return _DONE

    def accept(self, value: GenericNode) -> None:
        self.result[self._key] = value

    def finish(self) -> GenericNode:
        return self.result


class _WrapFrame:
    """Encodes a payload, then wraps it as {tag_key: tag, data_key: payload}."""

    __slots__ = ("_config", "_payload", "_sent", "_tag")

    def __init__(self, tag: str, payload: Any, config: CodecConfig) -> None:
        self._tag = tag
        self._payload = payload
        self._config = config
        self._sent = False

    def next_child(self) -> Any:
        if self._sent:
            return _DONE
        self._sent = True
        return self._payload

    def accept(self, value: GenericNode) -> None:
        self._payload = value

    def finish(self) -> GenericNode:
        return {self._config.tag_key: self._tag, self._config.data_key: self._payload}


type _Frame = _ListFrame | _DictFrame | _WrapFrame


class Encoder:
    """Reusable encoder bound to a registry and configuration."""

    def __init__(
        self,
        registry: TypeRegistry | None = None,
        config: CodecConfig = DEFAULT_CONFIG,
    ) -> None:
        self.registry = registry if registry is not None else TypeRegistry()
        self.config = config

    def encode(self, value: Any) -> GenericNode:
        """Encode a value tree.

        Args:
            value: Domain value, generic node, or containers mixing both

        Returns:
            Generic tree with each domain value wrapped under the tag and
            data keys

        Raises:
            EncodeError: A value is neither generic nor describable
            DepthExceededError: Nesting exceeds ``config.max_depth``

        """
        stack: list[_Frame] = []
        result = self._enter(value, stack)
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
        frame: _Frame
        # 1. Registered hooks and describable domain values
        has_hook = self.registry.describer_for(type(value)) is not None
        if has_hook or is_describable(value):
            tag, payload = self.registry.describe(value)
            frame = _WrapFrame(tag, payload, self.config)
        # 2. Scalars pass through
        elif is_scalar(value):
            return value
        # 3. Containers
        elif isinstance(value, Mapping):
            frame = _DictFrame(value)
        elif isinstance(value, list | tuple):
            frame = _ListFrame(value)
        else:
            msg = f"Cannot encode object of type {type(value).__name__}"
            raise EncodeError(msg)

        if len(stack) >= self.config.max_depth:
            raise DepthExceededError(self.config.max_depth)
        stack.append(frame)
        return _PENDING


def encode(
    value: Any,
    registry: TypeRegistry | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
    *,
    tag_key: str | None = None,
    data_key: str | None = None,
) -> GenericNode:
    """Encode domain values into a tagged generic tree.

    Args:
        value: Domain value, generic node, or containers mixing both
        registry: Registry consulted for encoder hooks (optional)
        config: Codec options
        tag_key: Override ``config.tag_key`` for this call
        data_key: Override ``config.data_key`` for this call

    Returns:
        Generic tree ready for a serializer such as ``json.dumps``

    """
    overrides = {
        name: override
        for name, override in (("tag_key", tag_key), ("data_key", data_key))
        if override is not None
    }
    if overrides:
        config = config.replace(**overrides)
    return Encoder(registry, config).encode(value)
