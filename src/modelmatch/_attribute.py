"""Attribute capabilities and probe-value planning.

An attribute is resolved once per match run into exactly one variant:
- WriteSensitiveAttribute: its writer is known to intercept assignments
- RelationshipAttribute: it references other models (one or many)
- PlainAttribute: everything else

The variant alone decides which empty values are probed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from modelmatch._types import ModelAdapter, Relationship


@dataclass(frozen=True, slots=True)
class PlainAttribute:
    name: str


@dataclass(frozen=True, slots=True)
class WriteSensitiveAttribute:
    """An attribute whose writer normalizes values (e.g. a hashed password)."""

    name: str


@dataclass(frozen=True, slots=True)
class RelationshipAttribute:
    name: str
    relationship: Relationship


AttributeKind: TypeAlias = PlainAttribute | WriteSensitiveAttribute | RelationshipAttribute


def resolve_attribute(adapter: ModelAdapter, model: type, name: str) -> AttributeKind:
    """Query the model's capabilities for ``name`` and pick its variant."""
    if adapter.is_write_sensitive_attribute(model, name):
        return WriteSensitiveAttribute(name)
    relationship = adapter.reflect_on_relationship(model, name)
    if relationship is not None:
        return RelationshipAttribute(name, relationship)
    return PlainAttribute(name)


def disallowed_values(kind: AttributeKind, *, allow_nil: bool) -> tuple[Any, ...]:
    """Values a presence validation must reject for this attribute.

    - To-many relationship -> a fresh empty list, nothing else
    - Any other relationship -> None (unless allow_nil)
    - Scalars -> "" and None (unless allow_nil)
    """
    match kind:
        case RelationshipAttribute(relationship=r) if r.collection:
            return ([],)
        case RelationshipAttribute():
            values: list[Any] = []
        case _:
            values = [""]
    if not allow_nil:
        values.append(None)
    return tuple(values)
