"""Tests for the writer-interference policy."""

from __future__ import annotations

import pytest

from modelmatch import WriterInterference, is_blank


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, False, "", "   ", "\n", [], {}, (), set()])
    def test_blank(self, value: object) -> None:
        assert is_blank(value) is True

    @pytest.mark.parametrize("value", ["x", 0, 1, True, [None], {"a": 1}, object()])
    def test_not_blank(self, value: object) -> None:
        assert is_blank(value) is False


class TestWriterInterference:
    def test_default_tolerates_everything(self) -> None:
        policy = WriterInterference()
        assert policy.considering("anything") is True
        assert policy.changed is False

    def test_never(self) -> None:
        policy = WriterInterference.build(False)
        assert policy.never is True
        assert policy.considering(None) is False

    def test_named_condition(self) -> None:
        policy = WriterInterference.build("blank")
        assert policy.considering("") is True
        assert policy.considering("abc") is False

    def test_callable_condition(self) -> None:
        policy = WriterInterference.build(lambda value: value == "untitled")
        assert policy.considering("untitled") is True
        assert policy.considering("") is False

    def test_unknown_condition(self) -> None:
        with pytest.raises(ValueError, match="unknown interference condition"):
            WriterInterference.build("shiny")

    def test_default_to_applies_when_unchanged(self) -> None:
        policy = WriterInterference().default_to(when=is_blank)
        assert policy.setting == "sometimes"
        assert policy.considering(None) is True
        assert policy.considering("secret") is False

    def test_default_to_keeps_explicit_policy(self) -> None:
        explicit = WriterInterference.build(True)
        assert explicit.default_to(when=is_blank) is explicit
        assert explicit.default_to(when=is_blank).considering("secret") is True
