"""Shared sample models and the conformance fixture loader.

Conformance fixtures live in tests/fixtures/*.yaml. Each YAML document names
a sample model from MODELS, the attribute values to build the subject with,
a matcher config (the parse_presence_config shape) and the expected verdicts.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from modelmatch.testing import (
    Model,
    Presence,
    SecurePassword,
    belongs_to,
    has_many,
)

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


# ─── Sample models ──────────────────────────────────────────────────────────


class Robot(Model):
    attributes = ("arms", "nickname", "legs")
    validations = (
        Presence("arms"),
        Presence("nickname", allow_nil=True),
        Presence("legs", message="Robot has no legs"),
    )


class Gadget(Model):
    attributes = ("name",)


class Signup(Model):
    attributes = ("email",)
    validations = (Presence("email", on="create"),)


class Child(Model):
    relationships = (belongs_to("parent"),)


class RequiredChild(Model):
    relationships = (belongs_to("parent", optional=False),)


class OptionalChild(Model):
    relationships = (belongs_to("parent", optional=True),)


class ValidatedChild(Model):
    relationships = (belongs_to("parent", optional=True),)
    validations = (Presence("parent"),)


class Post(Model):
    relationships = (has_many("comments"),)
    validations = (Presence("comments"),)


class Topic(Model):
    relationships = (has_many("comments"),)


class User(Model):
    password = SecurePassword()
    validations = (Presence("password"),)


class Slugged(Model):
    """Writer replaces an empty slug with a placeholder."""

    attributes = ("slug",)
    validations = (Presence("slug"),)

    @property
    def slug(self) -> str | None:
        return self._slug

    @slug.setter
    def slug(self, value: str | None) -> None:
        self._slug = "untitled" if value == "" else value


MODELS: dict[str, type[Model]] = {
    model.__name__: model
    for model in (
        Robot,
        Gadget,
        Signup,
        Child,
        RequiredChild,
        OptionalChild,
        ValidatedChild,
        Post,
        Topic,
        User,
        Slugged,
    )
}


def squish(text: str) -> str:
    """Collapse whitespace so assertions ignore word wrapping."""
    return " ".join(text.split())


# ─── Fixture loading ────────────────────────────────────────────────────────


@dataclass
class PresenceCase:
    """A single conformance case."""

    fixture_name: str
    case_name: str
    model: type[Model]
    values: dict[str, Any]
    matcher: dict[str, Any]
    expect: dict[str, Any]

    def subject(self) -> Model:
        return self.model(**self.values)


def load_presence_fixtures() -> list[PresenceCase]:
    """Load every conformance case from tests/fixtures."""
    cases: list[PresenceCase] = []
    for yaml_file in sorted(FIXTURES_DIR.glob("*.yaml")):
        cases.extend(_load_file(yaml_file))
    return cases


def _load_file(path: Path) -> list[PresenceCase]:
    """Load a fixture file (may contain multiple documents)."""
    cases: list[PresenceCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            cases.append(
                PresenceCase(
                    fixture_name=path.stem,
                    case_name=doc["name"],
                    model=MODELS[doc["model"]],
                    values=doc.get("values") or {},
                    matcher=doc["matcher"],
                    expect=doc["expect"],
                )
            )
    return cases
