"""tagcodec - Tagged-value hydration for JSON-like trees."""

from tagcodec.additions import (
    CORE_ADDITIONS,
    add_core_types,
)
from tagcodec.config import (
    DEFAULT_CONFIG,
    CodecConfig,
    UnknownTagPolicy,
)
from tagcodec.decoder import (
    Decoder,
    decode,
)
from tagcodec.encoder import (
    Encoder,
    encode,
)
from tagcodec.errors import (
    ConstructionError,
    DecodeError,
    DepthExceededError,
    EncodeError,
    MalformedTagError,
    RegistryFrozenError,
    TagCodecError,
    UnknownTagError,
)
from tagcodec.formats.json import (
    from_json,
    to_json,
)
from tagcodec.nodes import (
    Describable,
    GenericNode,
)
from tagcodec.records import (
    register_records,
    tagged,
)
from tagcodec.registry import TypeRegistry

__all__ = [
    "CORE_ADDITIONS",
    # Configuration
    "DEFAULT_CONFIG",
    "CodecConfig",
    # Errors
    "ConstructionError",
    "DecodeError",
    # Codec
    "Decoder",
    "DepthExceededError",
    # Core types
    "Describable",
    "EncodeError",
    "Encoder",
    "GenericNode",
    "MalformedTagError",
    "RegistryFrozenError",
    "TagCodecError",
    "TypeRegistry",
    "UnknownTagError",
    "UnknownTagPolicy",
    # Additions and records
    "add_core_types",
    "decode",
    "encode",
    # Serialization
    "from_json",
    "register_records",
    "tagged",
    "to_json",
]
