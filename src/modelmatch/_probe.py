"""Mutation-and-check engine.

A Probe assigns one value to the subject's attribute, validates the
subject, and reports whether the expected error appeared:

- expect="invalid" (disallows): passes if a matching error is on the attribute
- expect="valid" (allows): passes if no matching error is on the attribute

Assignment yields a tagged result, Applied or Intercepted. An interception
the WriterInterference policy does not tolerate stops the probe before
validation; the caller decides how to report it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal, TypeAlias

from modelmatch._formatting import format_errors, inspect_value
from modelmatch._interference import WriterInterference

if TYPE_CHECKING:
    from collections.abc import Mapping

    from modelmatch._types import MessageMatcher, ModelAdapter, ValidationFailure

logger = logging.getLogger(__name__)

Expectation: TypeAlias = Literal["valid", "invalid"]


@dataclass(frozen=True, slots=True)
class Applied:
    """The attribute reads back exactly what was written."""

    value: Any


@dataclass(frozen=True, slots=True)
class Intercepted:
    """The attribute writer stored something else."""

    written: Any
    read: Any


Assignment: TypeAlias = Applied | Intercepted


def assign(adapter: ModelAdapter, subject: Any, name: str, value: Any) -> Assignment:
    """Write ``value`` and read it back."""
    adapter.set_attribute(subject, name, value)
    read = adapter.read_attribute(subject, name)
    if read != value:
        return Intercepted(written=value, read=read)
    return Applied(value)


@dataclass(frozen=True, slots=True)
class Probe:
    """One value to try against one attribute, with one expectation."""

    adapter: ModelAdapter
    attribute: str
    value: Any
    expect: Expectation
    message: MessageMatcher
    context: str | None = None
    interference: WriterInterference = field(default_factory=WriterInterference)

    def run(self, subject: Any) -> ProbeResult:
        assignment = assign(self.adapter, subject, self.attribute, self.value)
        model = type(subject)

        if isinstance(assignment, Intercepted) and not self.interference.considering(
            assignment.read
        ):
            logger.debug(
                "%s.%s: writer stored %r instead of %r, not tolerated",
                model.__name__,
                self.attribute,
                assignment.read,
                assignment.written,
            )
            return ProbeResult(self, model, assignment, interfered=True)

        self.adapter.validate(subject, self.context)
        errors = dict(self.adapter.errors(subject))
        matching = tuple(
            f
            for f in self.adapter.error_messages_for(subject, self.attribute)
            if self.message.matches(f)
        )
        result = ProbeResult(self, model, assignment, errors=errors, matching=matching)
        logger.debug(
            "%s.%s = %r, expected %s: %s",
            model.__name__,
            self.attribute,
            self.value,
            self.expect,
            "passed" if result.passed else "failed",
        )
        return result


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Outcome of a single probe.

    ``errors`` holds every validation error on the subject after the probe;
    ``matching`` holds the errors on the probed attribute that satisfy the
    expected message.
    """

    probe: Probe
    model: type
    assignment: Assignment
    interfered: bool = False
    errors: Mapping[str, tuple[ValidationFailure, ...]] = field(default_factory=dict)
    matching: tuple[ValidationFailure, ...] = ()

    @property
    def passed(self) -> bool:
        if self.interfered:
            return False
        if self.probe.expect == "invalid":
            return bool(self.matching)
        return not self.matching

    def failure_message(self) -> str:
        """Explain why the probe's expectation was not met."""
        model = self.model.__name__
        attribute = self.probe.attribute
        lead = f"After setting :{attribute} to {inspect_value(self.probe.value)}"
        if isinstance(self.assignment, Intercepted):
            lead += f" -- which was read back as {inspect_value(self.assignment.read)} --"
        else:
            lead += ","

        if self.interfered:
            return (
                f"{lead} the matcher stopped, because the {model} writer changed "
                f"the value and this was not tolerated."
            )

        if self.probe.expect == "invalid":
            if not self.errors:
                message = (
                    f"{lead} the matcher expected the {model} to be invalid, "
                    f"but it was valid instead."
                )
            else:
                message = (
                    f"{lead} the matcher expected the {model} to be invalid and to "
                    f"produce {self.probe.message.describe()} on :{attribute}. The "
                    f"record was indeed invalid, but it produced these validation "
                    f"errors instead:\n\n{format_errors(self.errors)}"
                )
        else:
            message = (
                f"{lead} the matcher expected the {model} to be valid, but it was "
                f"invalid instead, producing these validation errors:\n\n"
                f"{format_errors(self.errors)}"
            )

        if isinstance(self.assignment, Intercepted):
            message += (
                f"\n\nAs indicated in the message above, :{attribute} seems to be "
                f"changing certain values as they are set, and this could have "
                f"something to do with why this test is failing. If you've "
                f"overridden the writer method for this attribute, then you may "
                f"need to change it to make this test pass, or do something else "
                f"entirely."
            )
        return message
