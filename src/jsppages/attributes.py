"""Typed access to context attributes.

A container stores arbitrary objects under string keys.  Reading one back
through ``ContextAttribute`` checks its type instead of trusting it, and
``get_or_create`` gives initialize-once semantics on top of the
container's atomic insert-if-absent.

Usage::

    REGISTRY = ContextAttribute(
        "jsppages.repository.instances",
        RepositoryRegistry,
        factory=lambda context: RepositoryRegistry(),
    )

    registry = REGISTRY.get_or_create(context)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Generic, TypeVar, cast

from jsppages.errors import AttributeTypeError, ConfigurationError

if TYPE_CHECKING:
    from jsppages.container import ServletContext

T = TypeVar("T")


class ContextAttribute(Generic[T]):
    """A named, typed slot in a context's attribute storage.

    Thread safety:
        ``get_or_create`` may build more than one candidate under a race,
        but the container's ``set_attribute_if_absent`` keeps exactly one
        and every caller receives that one.
    """

    __slots__ = ("_factory", "kind", "name")

    def __init__(
        self,
        name: str,
        kind: type[T],
        *,
        factory: Callable[[ServletContext], T] | None = None,
    ) -> None:
        self.name = name
        self.kind = kind
        self._factory = factory

    def _checked(self, value: object) -> T | None:
        if value is None:
            return None
        if not isinstance(value, self.kind):
            msg = (
                f"Context attribute {self.name!r} holds {type(value).__name__}, "
                f"expected {self.kind.__name__}"
            )
            raise AttributeTypeError(msg)
        return value

    def get(self, context: ServletContext) -> T | None:
        """Return the stored value, or ``None`` when the slot is empty."""
        return self._checked(context.get_attribute(self.name))

    def get_or_create(self, context: ServletContext) -> T:
        """Return the stored value, creating it on first access."""
        existing = self.get(context)
        if existing is not None:
            return existing
        if self._factory is None:
            msg = f"Context attribute {self.name!r} is not set and has no factory"
            raise ConfigurationError(msg)
        candidate = self._factory(context)
        winner = self._checked(context.set_attribute_if_absent(self.name, candidate))
        return cast(T, winner)

    def set(self, context: ServletContext, value: T) -> None:
        """Store *value*, replacing any previous one."""
        context.set_attribute(self.name, self._checked(value))

    def remove(self, context: ServletContext) -> None:
        """Empty the slot."""
        context.remove_attribute(self.name)

    def __repr__(self) -> str:
        return f"ContextAttribute({self.name!r}, {self.kind.__name__})"
