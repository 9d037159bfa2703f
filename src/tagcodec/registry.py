"""Tag to constructor registry used by the decoder and encoder."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tagcodec.errors import EncodeError, RegistryFrozenError
from tagcodec.nodes import is_describable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tagcodec.nodes import Constructor, Describer

_LOG = logging.getLogger(__name__)


class TypeRegistry:
    """Registry mapping tags to constructors.

    Each registry is an ordinary object owned by the caller and passed to
    ``decode``/``encode``. There is no process-wide instance.

    Usage:
        registry = TypeRegistry()
        registry.register("Car", lambda data: Car(**data))

        # Types the application cannot modify get an encoder hook
        registry.register_encoder(Fraction, lambda f: ("Rational", [f.numerator, f.denominator]))

        # Share across threads once populated
        registry.freeze()
    """

    def __init__(self) -> None:
        self._constructors: dict[str, Constructor[Any]] = {}
        self._describers: dict[type, Describer[Any]] = {}
        self._frozen = False

    def register[T](self, tag: str, constructor: Constructor[T]) -> None:
        """Register a constructor for a tag.

        Re-registering a tag replaces the previous constructor.

        Args:
            tag: Tag string as it appears in serialized data
            constructor: Callable receiving the decoded payload

        Raises:
            TypeError: If tag is not a string or constructor is not callable
            RegistryFrozenError: If the registry has been frozen

        """
        self._check_mutable()
        if not isinstance(tag, str):
            msg = f"Tag must be a string, got {type(tag).__name__}"
            raise TypeError(msg)
        if not callable(constructor):
            msg = f"Constructor for tag '{tag}' is not callable: {constructor!r}"
            raise TypeError(msg)
        if tag in self._constructors:
            _LOG.debug("Replacing constructor for tag %r", tag)
        self._constructors[tag] = constructor

    def register_type(self, cls: type[Any], tag: str | None = None) -> None:
        """Register ``cls.from_payload`` under ``tag`` or ``cls.__tag__``.

        Raises:
            TypeError: If no tag is given and the class declares none, or if
                the class has no ``from_payload`` constructor

        """
        if tag is None:
            tag = getattr(cls, "__tag__", None)
            if tag is None:
                msg = f"{cls.__name__} declares no __tag__; pass tag explicitly"
                raise TypeError(msg)
        constructor = getattr(cls, "from_payload", None)
        if constructor is None:
            msg = f"{cls.__name__} has no from_payload constructor"
            raise TypeError(msg)
        self.register(tag, constructor)

    def register_encoder[T](self, typ: type[T], describe: Describer[T]) -> None:
        """Register a describe hook for a type that cannot implement it.

        Hooks are matched by exact type and take precedence over the value's
        own ``describe`` method.
        """
        self._check_mutable()
        if typ in self._describers:
            _LOG.debug("Replacing encoder for type %s", typ.__qualname__)
        self._describers[typ] = describe

    def resolve(self, tag: str) -> Constructor[Any] | None:
        """Get the constructor for a tag, or None if not registered."""
        return self._constructors.get(tag)

    def describer_for(self, typ: type) -> Describer[Any] | None:
        """Get the encoder hook registered for exactly ``typ``."""
        return self._describers.get(typ)

    def describe(self, value: Any) -> tuple[str, Any]:
        """Get the (tag, payload) pair for a domain value.

        Raises:
            EncodeError: If the value is not describable or its describe
                capability fails or returns a malformed result

        """
        describe = self._describers.get(type(value))
        if describe is None:
            if not is_describable(value):
                msg = f"Cannot encode object of type {type(value).__name__}"
                raise EncodeError(msg)
            describe = type(value).describe
        try:
            result = describe(value)
        except Exception as exc:
            msg = f"Describing {type(value).__name__} failed: {exc}"
            raise EncodeError(msg) from exc

        if not (isinstance(result, tuple) and len(result) == 2):  # noqa: PLR2004
            msg = (
                f"describe() of {type(value).__name__} must return a "
                f"(tag, payload) pair, got {result!r}"
            )
            raise EncodeError(msg)
        tag, payload = result
        if not isinstance(tag, str):
            msg = f"Tag of {type(value).__name__} must be a string, got {tag!r}"
            raise EncodeError(msg)
        return tag, payload

    def unregister(self, tag: str) -> bool:
        """Unregister a tag's constructor.

        Returns:
            True if the tag was registered and removed, False otherwise.

        """
        self._check_mutable()
        if tag in self._constructors:
            del self._constructors[tag]
            return True
        return False

    def tags(self) -> list[str]:
        """Registered tags in registration order."""
        return list(self._constructors)

    def freeze(self) -> TypeRegistry:
        """Make the registry read-only and return it."""
        if not self._frozen:
            _LOG.debug("Freezing registry with %d tags", len(self._constructors))
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        """Whether the registry rejects further mutation."""
        return self._frozen

    def copy(self) -> TypeRegistry:
        """Return a mutable copy of this registry."""
        clone = TypeRegistry()
        clone._constructors = dict(self._constructors)
        clone._describers = dict(self._describers)
        return clone

    def _check_mutable(self) -> None:
        if self._frozen:
            msg = "Registry is frozen; use copy() to derive a mutable registry"
            raise RegistryFrozenError(msg)

    def __contains__(self, tag: object) -> bool:
        return tag in self._constructors

    def __len__(self) -> int:
        return len(self._constructors)

    def __iter__(self) -> Iterator[str]:
        return iter(self._constructors)

    def __repr__(self) -> str:
        state = ", frozen" if self._frozen else ""
        return f"TypeRegistry({self.tags()!r}{state})"
