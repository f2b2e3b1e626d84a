"""Expected-message matchers implementing the MessageMatcher protocol.

Each matcher is a frozen dataclass, immutable after construction.

CodeMessage matches by structured error code (falling back to the catalog
text for frameworks that only report strings). ExactMessage and RegexMessage
match the human-readable text; regexes use ``google-re2`` for guaranteed
linear-time matching, so backreferences and lookaround are rejected at
construction time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

import re2

from modelmatch._errors import InvalidMessagePatternError

if TYPE_CHECKING:
    from modelmatch._types import ValidationFailure

# Default human-readable text for the error codes the matcher knows about.
DEFAULT_MESSAGES = MappingProxyType(
    {
        "blank": "can't be blank",
        "required": "must exist",
    }
)


@dataclass(frozen=True, slots=True)
class CodeMessage:
    """Match a failure by its error code.

    Failures without a code are compared against the catalog text for
    the code, so string-only frameworks still work.
    """

    code: str

    def matches(self, failure: ValidationFailure, /) -> bool:
        if failure.code is not None:
            return failure.code == self.code
        return failure.message == self.text

    @property
    def text(self) -> str:
        return DEFAULT_MESSAGES.get(self.code, self.code)

    def describe(self) -> str:
        return f'the validation error "{self.text}"'


@dataclass(frozen=True, slots=True)
class ExactMessage:
    """Exact message text equality.

    When ignore_case is True, comparison is case-insensitive.
    """

    text: str
    ignore_case: bool = False
    _cmp_text: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_cmp_text", self.text.casefold() if self.ignore_case else self.text
        )

    def matches(self, failure: ValidationFailure, /) -> bool:
        message = failure.message.casefold() if self.ignore_case else failure.message
        return message == self._cmp_text

    def describe(self) -> str:
        return f'the validation error "{self.text}"'


@dataclass(frozen=True, slots=True)
class RegexMessage:
    """Regular expression search over the message text.

    Raises:
        InvalidMessagePatternError: If the pattern is not valid RE2 syntax.
    """

    pattern: str
    _compiled: re2.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            compiled = re2.compile(self.pattern)
        except re2.error as e:
            msg = f'invalid message pattern "{self.pattern}": {e}'
            raise InvalidMessagePatternError(msg) from e
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, failure: ValidationFailure, /) -> bool:
        return self._compiled.search(failure.message) is not None

    def describe(self) -> str:
        return f"a validation error matching /{self.pattern}/"
