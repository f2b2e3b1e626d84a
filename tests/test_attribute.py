"""Tests for attribute resolution and probe-value planning."""

from __future__ import annotations

from conftest import Child, Post, Robot, User

from modelmatch import (
    ConventionAdapter,
    PlainAttribute,
    Relationship,
    RelationshipAttribute,
    WriteSensitiveAttribute,
    disallowed_values,
    resolve_attribute,
)

ADAPTER = ConventionAdapter()


class TestResolveAttribute:
    def test_plain(self) -> None:
        assert resolve_attribute(ADAPTER, Robot, "arms") == PlainAttribute("arms")

    def test_write_sensitive(self) -> None:
        assert resolve_attribute(ADAPTER, User, "password") == WriteSensitiveAttribute("password")

    def test_relationship(self) -> None:
        kind = resolve_attribute(ADAPTER, Post, "comments")
        assert isinstance(kind, RelationshipAttribute)
        assert kind.relationship.cardinality == "many"

    def test_class_without_capabilities(self) -> None:
        class Bare:
            pass

        assert resolve_attribute(ADAPTER, Bare, "anything") == PlainAttribute("anything")


class TestDisallowedValues:
    def test_scalar(self) -> None:
        assert disallowed_values(PlainAttribute("a"), allow_nil=False) == ("", None)

    def test_scalar_allow_nil(self) -> None:
        assert disallowed_values(PlainAttribute("a"), allow_nil=True) == ("",)

    def test_write_sensitive_is_scalar(self) -> None:
        assert disallowed_values(WriteSensitiveAttribute("p"), allow_nil=False) == ("", None)

    def test_to_one_relationship(self) -> None:
        kind = RelationshipAttribute("parent", Relationship("parent", "belongs_to"))
        assert disallowed_values(kind, allow_nil=False) == (None,)
        assert disallowed_values(kind, allow_nil=True) == ()

    def test_to_many_relationship(self) -> None:
        kind = RelationshipAttribute("tags", Relationship("tags", "has_and_belongs_to_many"))
        values = disallowed_values(kind, allow_nil=False)
        assert values == ([],)
        assert disallowed_values(kind, allow_nil=True) == ([],)

    def test_fresh_list_per_plan(self) -> None:
        kind = RelationshipAttribute("tags", Relationship("tags", "has_many"))
        assert disallowed_values(kind, allow_nil=False)[0] is not disallowed_values(
            kind, allow_nil=False
        )[0]


class TestRelationship:
    def test_cardinality(self) -> None:
        assert Relationship("a", "belongs_to").cardinality == "one"
        assert Relationship("a", "has_one").cardinality == "one"
        assert Relationship("a", "has_many").collection is True

    def test_configured_required(self) -> None:
        assert Relationship("a", "belongs_to", {"optional": False}).configured_required
        assert Relationship("a", "belongs_to", {"required": True}).configured_required
        assert not Relationship("a", "belongs_to").configured_required
        assert not Relationship("a", "belongs_to", {"optional": True}).configured_required

    def test_child_reflection(self) -> None:
        relationship = Child.reflect_on_relationship("parent")
        assert relationship is not None
        assert relationship.belongs_to
        assert Child.reflect_on_relationship("missing") is None
