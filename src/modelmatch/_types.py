"""Core protocols and value types for modelmatch.

The matcher never talks to a model framework directly:
- ModelAdapter is the port to the host framework (assign, validate, reflect)
- MessageMatcher decides whether a validation failure is the expected one
- ValidationFailure is the framework-neutral error value (code + message)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Literal, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

Cardinality: TypeAlias = Literal["one", "many"]

_COLLECTION_MACROS = frozenset({"has_many", "has_and_belongs_to_many"})


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """A single validation error attached to an attribute.

    code is the structured key (e.g. "blank", "required") when the host
    framework provides one; message is the human-readable text.
    """

    message: str
    code: str | None = None


@dataclass(frozen=True, slots=True)
class Relationship:
    """Reflection metadata for an attribute that references other models."""

    name: str
    macro: str
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def cardinality(self) -> Cardinality:
        return "many" if self.macro in _COLLECTION_MACROS else "one"

    @property
    def collection(self) -> bool:
        return self.cardinality == "many"

    @property
    def belongs_to(self) -> bool:
        return self.macro == "belongs_to"

    @property
    def configured_required(self) -> bool:
        """True when the relationship itself was declared as required."""
        return self.options.get("optional") is False or self.options.get("required") is True


@runtime_checkable
class MessageMatcher(Protocol):
    """Decide whether a validation failure carries the expected message."""

    def matches(self, failure: ValidationFailure, /) -> bool: ...

    def describe(self) -> str: ...


@runtime_checkable
class ModelAdapter(Protocol):
    """Port to the host model/validation framework.

    Instance operations mutate and inspect the subject; class operations
    answer reflection questions about the model type.
    """

    def set_attribute(self, subject: Any, name: str, value: Any, /) -> None: ...

    def read_attribute(self, subject: Any, name: str, /) -> Any: ...

    def validate(self, subject: Any, context: str | None = None, /) -> None: ...

    def errors(self, subject: Any, /) -> Mapping[str, tuple[ValidationFailure, ...]]: ...

    def error_messages_for(
        self, subject: Any, name: str, /
    ) -> tuple[ValidationFailure, ...]: ...

    def reflect_on_relationship(self, model: type, name: str, /) -> Relationship | None: ...

    def is_write_sensitive_attribute(self, model: type, name: str, /) -> bool: ...

    def existing_validator_registered(self, model: type, name: str, /) -> bool: ...
