"""Match benchmarks for modelmatch.

Measures the full matches() path (planning, probing, validation) per
attribute kind, and config parsing.

Run: uv run pytest tests/bench/test_bench_match.py --benchmark-only
"""

from __future__ import annotations

from typing import Any

from conftest import Child, Post, Robot, User

from modelmatch import load_presence_matcher, validate_presence_of


# ── Matching ────────────────────────────────────────────────────────────────


def test_plain_attribute(benchmark: Any) -> None:
    matcher = validate_presence_of("arms")
    subject = Robot()
    assert benchmark(matcher.matches, subject) is True


def test_plain_attribute_allow_nil(benchmark: Any) -> None:
    matcher = validate_presence_of("nickname").allow_nil()
    subject = Robot()
    assert benchmark(matcher.matches, subject) is True


def test_to_many_relationship(benchmark: Any) -> None:
    matcher = validate_presence_of("comments")
    subject = Post()
    assert benchmark(matcher.matches, subject) is True


def test_belongs_to_with_failure_message(benchmark: Any) -> None:
    matcher = validate_presence_of("parent")
    subject = Child()

    def run() -> str:
        matcher.matches(subject)
        return matcher.failure_message()

    assert "belong_to" in benchmark(run)


def test_write_sensitive_attribute(benchmark: Any) -> None:
    matcher = validate_presence_of("password")
    subject = User()
    assert benchmark(matcher.matches, subject) is True


# ── Config ──────────────────────────────────────────────────────────────────


def test_load_from_config(benchmark: Any) -> None:
    data = {
        "attribute": "legs",
        "on": "create",
        "message": {"Regex": "no legs$"},
        "ignoring_interference_by_writer": {"when": "blank"},
    }
    matcher = benchmark(load_presence_matcher, data)
    assert matcher.config.custom_message is True
