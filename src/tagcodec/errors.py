"""Exception hierarchy for tagged-value encoding and decoding."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

_MAX_TAGS_IN_ERROR = 10  # Maximum number of tags to show in error messages


class TagCodecError(Exception):
    """Base class for all tagcodec errors."""


class DecodeError(TagCodecError, ValueError):
    """A generic tree could not be hydrated."""


class MalformedTagError(DecodeError):
    """The tag key is present but its value is not a string."""

    def __init__(self, tag_key: str, value: Any) -> None:
        self.tag_key = tag_key
        self.value = value
        msg = (
            f"Malformed tag: '{tag_key}' must be a string, "
            f"got {type(value).__name__} ({value!r})"
        )
        super().__init__(msg)


class UnknownTagError(DecodeError):
    """The tag names no registered constructor."""

    def __init__(self, tag: str, known: Iterable[str] = ()) -> None:
        self.tag = tag
        self.known = sorted(known)
        available = self.known[:_MAX_TAGS_IN_ERROR]
        suffix = "..." if len(self.known) > _MAX_TAGS_IN_ERROR else ""
        msg = f"Unknown tag '{tag}'. Registered tags: {available}{suffix}"
        super().__init__(msg)


class ConstructionError(DecodeError):
    """A registered constructor rejected its payload.

    The original exception is available as ``cause`` and as ``__cause__``.
    """

    def __init__(self, tag: str, cause: BaseException) -> None:
        self.tag = tag
        self.cause = cause
        msg = f"Constructor for tag '{tag}' failed: {type(cause).__name__}: {cause}"
        super().__init__(msg)


class DepthExceededError(TagCodecError, RecursionError):
    """Nesting of the input exceeds the configured depth budget."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        msg = f"Maximum nesting depth of {limit} exceeded"
        super().__init__(msg)


class EncodeError(TagCodecError, ValueError):
    """A value cannot be converted to a generic tree."""


class RegistryFrozenError(TagCodecError, RuntimeError):
    """Attempted to mutate a frozen registry."""
