"""JSON format adapter."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from tagcodec.config import DEFAULT_CONFIG, CodecConfig
from tagcodec.decoder import decode
from tagcodec.encoder import encode
from tagcodec.errors import DepthExceededError

if TYPE_CHECKING:
    from tagcodec.registry import TypeRegistry


def to_json(
    value: Any,
    registry: TypeRegistry | None = None,
    config: CodecConfig = DEFAULT_CONFIG,
    *,
    indent: int | None = 2,
) -> str:
    """Serialize a value tree to a JSON string.

    Args:
        value: Domain values and/or generic nodes
        registry: Registry consulted for encoder hooks
        config: Codec options
        indent: JSON indentation level (default 2, None for compact)

    Returns:
        JSON string representation

    Raises:
        EncodeError: If a value cannot be encoded
        DepthExceededError: If nesting exceeds ``config.max_depth`` or the
            json module's own recursion limit

    """
    tree = encode(value, registry, config)
    try:
        return json.dumps(tree, indent=indent)
    except RecursionError as exc:
        raise DepthExceededError(config.max_depth) from exc


def from_json(
    s: str | bytes,
    registry: TypeRegistry,
    config: CodecConfig = DEFAULT_CONFIG,
) -> Any:
    """Deserialize a JSON string, hydrating tagged objects.

    Raises:
        json.JSONDecodeError: If string is not valid JSON
        DecodeError: If hydration fails
        DepthExceededError: If nesting exceeds ``config.max_depth`` or the
            json module's own recursion limit

    """
    try:
        tree = json.loads(s)
    except RecursionError as exc:
        raise DepthExceededError(config.max_depth) from exc
    return decode(tree, registry, config)
