"""Adapter registry: which ModelAdapter serves which model classes.

Architecture:
- RegistryBuilder → .build() → Registry (immutable)
- Factories are plain callables: () → ModelAdapter
- adapter_for() walks the model's MRO, so registering a base class covers
  every subclass; registering ``object`` provides a catch-all

Example::

    builder = RegistryBuilder()
    builder.adapter(MyOrmBase, MyOrmAdapter)
    registry = builder.build()

    matcher = validate_presence_of("name").using(registry)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias

from modelmatch._adapter import ConventionAdapter
from modelmatch._errors import UnknownModelError

if TYPE_CHECKING:
    from collections.abc import Callable

    from modelmatch._types import ModelAdapter

AdapterFactory: TypeAlias = "Callable[[], ModelAdapter]"


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register adapter factories against model base classes, then call
    build() to produce an immutable Registry.
    """

    def __init__(self) -> None:
        self._factories: dict[type, AdapterFactory] = {}

    def adapter(self, model: type, factory: AdapterFactory) -> RegistryBuilder:
        """Register an adapter factory for ``model`` and its subclasses."""
        self._factories[model] = factory
        return self

    def build(self) -> Registry:
        """Freeze the registry. No further registration is possible."""
        return Registry(_factories=MappingProxyType(dict(self._factories)))


def register_convention_adapter(builder: RegistryBuilder) -> RegistryBuilder:
    """Register ConventionAdapter as the catch-all for every model."""
    return builder.adapter(object, ConventionAdapter)


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable mapping from model classes to adapter factories."""

    _factories: MappingProxyType[type, AdapterFactory] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def adapter_for(self, model: type) -> ModelAdapter:
        """Build the adapter registered for the closest class in ``model``'s MRO.

        Raises:
            UnknownModelError: No class in the MRO is registered.
        """
        for klass in model.__mro__:
            factory = self._factories.get(klass)
            if factory is not None:
                return factory()
        raise UnknownModelError(model, self.model_names())

    @property
    def adapter_count(self) -> int:
        """Number of registered model classes."""
        return len(self._factories)

    def contains(self, model: type) -> bool:
        """Check if ``model`` itself (not a base) is registered."""
        return model in self._factories

    def model_names(self) -> list[str]:
        """Return the qualified names of all registered classes (sorted)."""
        return sorted(klass.__qualname__ for klass in self._factories)


DEFAULT_REGISTRY = register_convention_adapter(RegistryBuilder()).build()
