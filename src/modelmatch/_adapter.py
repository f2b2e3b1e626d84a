"""ConventionAdapter — the default ModelAdapter.

Works with any model that follows a small duck-typed convention:

Instances:
- ``is_valid(context=None)`` runs validation and populates ``errors``
- ``errors`` maps attribute names to iterables of messages, either plain
  strings or ValidationFailure values

Classes, all optional (a missing capability means "no"):
- ``reflect_on_relationship(name)`` returns a Relationship or None
- ``write_sensitive_attributes()`` returns the names of intercepted attributes
- ``validators_on(name)`` returns validators; ``kind == "presence"`` counts
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from modelmatch._types import ValidationFailure

if TYPE_CHECKING:
    from collections.abc import Mapping

    from modelmatch._types import Relationship


@dataclass(frozen=True, slots=True)
class ConventionAdapter:
    """ModelAdapter over plain attribute access and capability lookups."""

    def set_attribute(self, subject: Any, name: str, value: Any, /) -> None:
        setattr(subject, name, value)

    def read_attribute(self, subject: Any, name: str, /) -> Any:
        return getattr(subject, name)

    def validate(self, subject: Any, context: str | None = None, /) -> None:
        subject.is_valid(context)

    def errors(self, subject: Any, /) -> Mapping[str, tuple[ValidationFailure, ...]]:
        return {
            attribute: tuple(_to_failure(item) for item in items)
            for attribute, items in subject.errors.items()
            if items
        }

    def error_messages_for(self, subject: Any, name: str, /) -> tuple[ValidationFailure, ...]:
        return self.errors(subject).get(name, ())

    def reflect_on_relationship(self, model: type, name: str, /) -> Relationship | None:
        reflect = getattr(model, "reflect_on_relationship", None)
        if reflect is None:
            return None
        return reflect(name)

    def is_write_sensitive_attribute(self, model: type, name: str, /) -> bool:
        sensitive = getattr(model, "write_sensitive_attributes", None)
        return sensitive is not None and name in sensitive()

    def existing_validator_registered(self, model: type, name: str, /) -> bool:
        validators_on = getattr(model, "validators_on", None)
        if validators_on is None:
            return False
        return any(getattr(v, "kind", None) == "presence" for v in validators_on(name))


def _to_failure(item: ValidationFailure | str) -> ValidationFailure:
    if isinstance(item, ValidationFailure):
        return item
    return ValidationFailure(message=str(item))
