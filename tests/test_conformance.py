"""Conformance tests driven by the YAML fixtures in tests/fixtures/.

Each case is evaluated through the config loading path:
dict → load_presence_matcher() → matches() / does_not_match().

Run with: uv run pytest tests/test_conformance.py -v
"""

from __future__ import annotations

import pytest
from conftest import PresenceCase, load_presence_fixtures

import modelmatch
from modelmatch import load_presence_matcher

CASES = load_presence_fixtures()


def _case_id(case: PresenceCase) -> str:
    return f"{case.fixture_name}::{case.case_name}"


@pytest.mark.parametrize("case", CASES, ids=_case_id)
def test_matches(case: PresenceCase) -> None:
    matcher = load_presence_matcher(case.matcher)
    if "error" in case.expect:
        with pytest.raises(getattr(modelmatch, case.expect["error"])):
            matcher.matches(case.subject())
    else:
        assert matcher.matches(case.subject()) is case.expect["matches"]


@pytest.mark.parametrize("case", CASES, ids=_case_id)
def test_does_not_match(case: PresenceCase) -> None:
    matcher = load_presence_matcher(case.matcher)
    if "error" in case.expect:
        with pytest.raises(getattr(modelmatch, case.expect["error"])):
            matcher.does_not_match(case.subject())
    else:
        assert matcher.does_not_match(case.subject()) is case.expect["does_not_match"]


@pytest.mark.parametrize("case", CASES, ids=_case_id)
def test_matches_is_repeatable(case: PresenceCase) -> None:
    """Matching the same subject twice gives the same verdict."""
    if "error" in case.expect:
        pytest.skip("raises instead of returning a verdict")
    matcher = load_presence_matcher(case.matcher)
    subject = case.subject()
    first = matcher.matches(subject)
    assert matcher.matches(subject) is first


def test_fixtures_found() -> None:
    assert len(CASES) >= 20
