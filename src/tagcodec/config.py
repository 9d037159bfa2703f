"""Codec configuration threaded explicitly through encode and decode."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

DEFAULT_TAG_KEY = "json_class"
DEFAULT_DATA_KEY = "data"
DEFAULT_MAX_DEPTH = 1000


class UnknownTagPolicy(StrEnum):
    """What the decoder does with a tag it cannot resolve.

    STRICT raises. LENIENT leaves the mapping exactly as it was found.
    """

    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True)
class CodecConfig:
    """Options shared by the encoder and decoder.

    Attributes:
        tag_key: Mapping key that marks a tagged node
        data_key: Mapping key holding the constructor payload
        unknown_tags: Policy for unresolvable or malformed tags
        max_depth: Deepest container nesting accepted before failing

    """

    tag_key: str = DEFAULT_TAG_KEY
    data_key: str = DEFAULT_DATA_KEY
    unknown_tags: UnknownTagPolicy = UnknownTagPolicy.STRICT
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate option values."""
        if not isinstance(self.tag_key, str) or not isinstance(self.data_key, str):
            msg = (
                "tag_key and data_key must be strings, got "
                f"{type(self.tag_key).__name__} and {type(self.data_key).__name__}"
            )
            raise TypeError(msg)
        if not self.tag_key or not self.data_key:
            msg = "tag_key and data_key must be non-empty strings"
            raise ValueError(msg)
        if self.tag_key == self.data_key:
            msg = f"tag_key and data_key must differ, both are '{self.tag_key}'"
            raise ValueError(msg)
        if self.max_depth < 1:
            msg = f"max_depth must be at least 1, got {self.max_depth}"
            raise ValueError(msg)
        # Accept plain strings ("strict" / "lenient") for convenience
        object.__setattr__(self, "unknown_tags", UnknownTagPolicy(self.unknown_tags))

    @property
    def strict(self) -> bool:
        """Whether unknown and malformed tags are errors."""
        return self.unknown_tags is UnknownTagPolicy.STRICT

    def replace(self, **changes: Any) -> CodecConfig:
        """Return a copy with the given options changed."""
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = CodecConfig()
