"""Error types raised by modelmatch.

A matcher that simply does not match returns False; these exceptions are
reserved for tests that cannot be evaluated meaningfully.
"""

from __future__ import annotations

from typing import Any


class MatcherError(Exception):
    """Base class for matcher errors."""


class AttributeChangedValueError(MatcherError):
    """The attribute writer stored something other than the probe value."""

    def __init__(self, model: type, attribute: str, value_written: Any, value_read: Any) -> None:
        self.model = model
        self.attribute = attribute
        self.value_written = value_written
        self.value_read = value_read
        super().__init__(
            f"The matcher attempted to set :{attribute} on {model.__name__} to "
            f"{value_written!r}, but when the attribute was read back, it had "
            f"stored {value_read!r} instead. This creates a problem because it "
            f"means that the model is behaving in a way that is interfering with "
            f"the test. Use ignoring_interference_by_writer() if this is expected."
        )


class CouldNotSetValueError(MatcherError):
    """A write-sensitive attribute silently discarded the probe value."""

    def __init__(self, model: type, attribute: str, value_written: Any, value_read: Any) -> None:
        self.model = model
        self.attribute = attribute
        self.value_written = value_written
        self.value_read = value_read
        record = model.__name__.lower()
        super().__init__(
            f"The validation failed because your {model.__name__} model treats "
            f":{attribute} as write-sensitive, and validate_presence_of was called "
            f"on a {record} which has :{attribute} already set to a value. Please "
            f"use a {record} with an empty :{attribute} instead."
        )


class InvalidMessagePatternError(MatcherError):
    """An expected-message pattern is not valid RE2 syntax."""


class UnknownModelError(MatcherError):
    """No ModelAdapter is registered for a model type."""

    def __init__(self, model: type, available: list[str]) -> None:
        self.model = model
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"no adapter registered for {model.__name__!r} (registered: {registered})"
        else:
            msg = f"no adapter registered for {model.__name__!r} (no adapters are registered)"
        super().__init__(msg)
