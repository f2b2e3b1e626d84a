"""Test utilities for modelmatch.

A deliberately small model framework following the ConventionAdapter
convention. It exists to exercise the matcher in tests and examples and
is NOT a general-purpose validation library.

>>> from modelmatch import validate_presence_of
>>> from modelmatch.testing import Model, Presence
>>> class Robot(Model):
...     attributes = ("arms",)
...     validations = (Presence("arms"),)
>>> validate_presence_of("arms").matches(Robot())
True
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar

from modelmatch._interference import is_blank
from modelmatch._messages import DEFAULT_MESSAGES
from modelmatch._types import Relationship, ValidationFailure


@dataclass(frozen=True, slots=True)
class Presence:
    """Presence validator for one attribute.

    With a custom ``message`` the failure carries no code: it is identified
    by its text alone.
    """

    attribute: str
    allow_nil: bool = False
    on: str | None = None
    code: str = "blank"
    message: str | None = None
    kind: str = field(default="presence", init=False)

    def validate(
        self, record: Any, context: str | None, errors: dict[str, list[ValidationFailure]]
    ) -> None:
        if self.on is not None and self.on != context:
            return
        value = getattr(record, self.attribute, None)
        if value is None and self.allow_nil:
            return
        if is_blank(value):
            if self.message is not None:
                failure = ValidationFailure(self.message)
            else:
                failure = ValidationFailure(DEFAULT_MESSAGES.get(self.code, self.code), self.code)
            errors.setdefault(self.attribute, []).append(failure)


def belongs_to(name: str, **options: Any) -> Relationship:
    """Declare a to-one foreign-key relationship (``optional``/``required`` options)."""
    return Relationship(name, "belongs_to", MappingProxyType(options))


def has_one(name: str) -> Relationship:
    return Relationship(name, "has_one")


def has_many(name: str) -> Relationship:
    return Relationship(name, "has_many")


class SecurePassword:
    """Password attribute that keeps a digest next to the plain value.

    Assigning "" is ignored and None clears both, so the attribute can
    never be set to an empty string.
    """

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Any, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return obj.__dict__.get(self.name)

    def __set__(self, obj: Any, value: str | None) -> None:
        if value is None:
            obj.__dict__[self.name] = None
            obj.__dict__[f"{self.name}_digest"] = None
        elif value != "":
            obj.__dict__[self.name] = value
            obj.__dict__[f"{self.name}_digest"] = hashlib.sha256(value.encode()).hexdigest()


class Model:
    """Base class for test models.

    Subclasses declare ``attributes``, ``relationships`` and ``validations``.
    A ``belongs_to`` relationship adds its own presence validation ("must
    exist") unless it is declared ``optional=True`` or ``required=False``.
    """

    attributes: ClassVar[tuple[str, ...]] = ()
    relationships: ClassVar[tuple[Relationship, ...]] = ()
    validations: ClassVar[tuple[Presence, ...]] = ()

    def __init__(self, **values: Any) -> None:
        self.errors: dict[str, list[ValidationFailure]] = {}
        for name in (*self.attributes, *sorted(self.write_sensitive_attributes())):
            setattr(self, name, None)
        for relationship in self.relationships:
            setattr(self, relationship.name, [] if relationship.collection else None)
        for name, value in values.items():
            setattr(self, name, value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"

    def is_valid(self, context: str | None = None) -> bool:
        errors: dict[str, list[ValidationFailure]] = {}
        for validator in self.all_validators():
            validator.validate(self, context, errors)
        self.errors = errors
        return not errors

    @classmethod
    def all_validators(cls) -> tuple[Presence, ...]:
        implicit = tuple(
            Presence(r.name, code="required")
            for r in cls.relationships
            if r.belongs_to
            and r.options.get("optional") is not True
            and r.options.get("required") is not False
        )
        return implicit + tuple(cls.validations)

    @classmethod
    def reflect_on_relationship(cls, name: str) -> Relationship | None:
        return next((r for r in cls.relationships if r.name == name), None)

    @classmethod
    def write_sensitive_attributes(cls) -> frozenset[str]:
        return frozenset(
            name
            for klass in cls.__mro__
            for name, value in vars(klass).items()
            if isinstance(value, SecurePassword)
        )

    @classmethod
    def validators_on(cls, name: str) -> tuple[Presence, ...]:
        return tuple(v for v in cls.all_validators() if v.attribute == name)
