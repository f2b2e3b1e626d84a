"""PresenceMatcher — tests that a model validates presence of an attribute.

A match run moves through INIT → PLANNING → PROBING → DECIDED:
- PLANNING resolves the adapter, the attribute's kind and the probe values
- PROBING assigns each value to the subject and validates it
- DECIDED records the boolean verdict

matches() needs EVERY disallowed value to be rejected (and None to be
accepted under allow_nil). does_not_match() needs ANY counterexample.

Usage::

    matcher = validate_presence_of("arms")
    assert matcher.matches(Robot()), matcher.failure_message()

    validate_presence_of("nickname").allow_nil()
    validate_presence_of("legs").with_message("Robot has no legs")
    validate_presence_of("arms").on("create")

The subject is mutated in place: after a run the attribute holds the last
probe value.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from modelmatch._attribute import (
    RelationshipAttribute,
    WriteSensitiveAttribute,
    disallowed_values,
    resolve_attribute,
)
from modelmatch._config import PresenceConfig, parse_presence_config
from modelmatch._errors import AttributeChangedValueError, CouldNotSetValueError
from modelmatch._formatting import word_wrap
from modelmatch._interference import WriterInterference, is_blank
from modelmatch._messages import ExactMessage
from modelmatch._probe import Intercepted, Probe
from modelmatch._registry import DEFAULT_REGISTRY, Registry

if TYPE_CHECKING:
    from collections.abc import Callable

    from modelmatch._attribute import AttributeKind
    from modelmatch._probe import Expectation, ProbeResult
    from modelmatch._types import MessageMatcher, ModelAdapter

logger = logging.getLogger(__name__)


class MatchState(enum.Enum):
    INIT = "init"
    PLANNING = "planning"
    PROBING = "probing"
    DECIDED = "decided"


@dataclass(slots=True)
class MatchRun:
    """Everything one matches()/does_not_match() call decided and observed."""

    model: type
    negated: bool = False
    state: MatchState = MatchState.INIT
    adapter: ModelAdapter | None = None
    kind: AttributeKind | None = None
    interference: WriterInterference = field(default_factory=WriterInterference)
    values: tuple[Any, ...] = ()
    results: list[ProbeResult] = field(default_factory=list)
    verdict: bool | None = None

    def advance(self, state: MatchState) -> None:
        logger.debug("%s: %s -> %s", self.model.__name__, self.state.value, state.value)
        self.state = state

    def decide(self, verdict: bool) -> bool:
        self.verdict = verdict
        self.advance(MatchState.DECIDED)
        return verdict

    @property
    def last_result(self) -> ProbeResult | None:
        return self.results[-1] if self.results else None


class PresenceMatcher:
    """Matcher for a presence validation on one attribute.

    Qualifier methods never modify the matcher; each returns a new one
    built on a replaced PresenceConfig.
    """

    __slots__ = ("_adapter", "_config", "_registry", "_run")

    def __init__(
        self,
        config: PresenceConfig,
        *,
        registry: Registry = DEFAULT_REGISTRY,
        adapter: ModelAdapter | None = None,
    ) -> None:
        self._config = config
        self._registry = registry
        self._adapter = adapter
        self._run: MatchRun | None = None

    @classmethod
    def from_config(cls, config: PresenceConfig) -> PresenceMatcher:
        return cls(config)

    @property
    def config(self) -> PresenceConfig:
        return self._config

    @property
    def run(self) -> MatchRun | None:
        """The most recent match run, if any."""
        return self._run

    def __repr__(self) -> str:
        parts = [f"validate_presence_of({self._config.attribute!r})"]
        if self._config.allow_nil:
            parts.append(".allow_nil()")
        if self._config.custom_message:
            parts.append(f".with_message({self._config.expected_message!r})")
        if self._config.context is not None:
            parts.append(f".on({self._config.context!r})")
        return "".join(parts)

    # ── Qualifiers ─────────────────────────────────────────────────────────

    def allow_nil(self) -> PresenceMatcher:
        """Expect None to be accepted; only the other empty values must fail."""
        return self._with(allow_nil=True)

    def with_message(self, message: str | MessageMatcher) -> PresenceMatcher:
        """Expect a custom validation message (text or a MessageMatcher)."""
        if isinstance(message, str):
            message = ExactMessage(message)
        return self._with(expected_message=message, custom_message=True)

    def on(self, context: str) -> PresenceMatcher:
        """Validate under the given validation context."""
        return self._with(context=context)

    def ignoring_interference_by_writer(
        self, when: bool | str | Callable[[Any], bool] = True
    ) -> PresenceMatcher:
        """Tolerate a writer that changes probe values (always, never, or conditionally)."""
        return self._with(interference=WriterInterference.build(when))

    def using(self, target: Registry | ModelAdapter) -> PresenceMatcher:
        """Resolve adapters from ``target`` (a Registry) or use ``target`` directly."""
        if isinstance(target, Registry):
            return PresenceMatcher(self._config, registry=target)
        return PresenceMatcher(self._config, registry=self._registry, adapter=target)

    def _with(self, **changes: Any) -> PresenceMatcher:
        return PresenceMatcher(
            replace(self._config, **changes), registry=self._registry, adapter=self._adapter
        )

    # ── Verdicts ───────────────────────────────────────────────────────────

    def matches(self, subject: Any) -> bool:
        """True if the subject's model enforces the presence validation.

        Raises:
            CouldNotSetValueError: A write-sensitive attribute discarded a probe value.
            AttributeChangedValueError: A writer changed a probe value and the
                interference policy does not tolerate it.
        """
        run = self._plan(subject)
        if isinstance(run.kind, WriteSensitiveAttribute):
            verdict = all(self._check(run, subject, v, "invalid") for v in run.values)
        else:
            verdict = (
                not self._config.allow_nil or self._check(run, subject, None, "valid")
            ) and all(self._check(run, subject, v, "invalid") for v in run.values)
        return run.decide(verdict)

    def does_not_match(self, subject: Any) -> bool:
        """True if the subject's model does NOT enforce the presence validation."""
        run = self._plan(subject, negated=True)
        if isinstance(run.kind, WriteSensitiveAttribute):
            verdict = any(self._check(run, subject, v, "valid") for v in run.values)
        else:
            verdict = (
                self._config.allow_nil and not self._check(run, subject, None, "valid")
            ) or any(self._check(run, subject, v, "valid") for v in run.values)
        return run.decide(verdict)

    def _plan(self, subject: Any, *, negated: bool = False) -> MatchRun:
        run = MatchRun(model=type(subject), negated=negated)
        self._run = run
        run.advance(MatchState.PLANNING)

        attribute = self._config.attribute
        run.adapter = (
            self._adapter if self._adapter is not None else self._registry.adapter_for(run.model)
        )
        run.kind = resolve_attribute(run.adapter, run.model, attribute)
        run.interference = self._config.interference
        if isinstance(run.kind, WriteSensitiveAttribute):
            run.interference = run.interference.default_to(when=is_blank)
        run.values = disallowed_values(run.kind, allow_nil=self._config.allow_nil)
        logger.debug(
            "%s.%s resolved as %s, probing %r",
            run.model.__name__,
            attribute,
            type(run.kind).__name__,
            run.values,
        )

        run.advance(MatchState.PROBING)
        return run

    def _check(self, run: MatchRun, subject: Any, value: Any, expect: Expectation) -> bool:
        assert run.adapter is not None
        probe = Probe(
            adapter=run.adapter,
            attribute=self._config.attribute,
            value=value,
            expect=expect,
            message=self._config.expected_message,
            context=self._config.context,
            interference=run.interference,
        )
        result = probe.run(subject)
        run.results.append(result)

        if result.interfered:
            assert isinstance(result.assignment, Intercepted)
            error_type = (
                CouldNotSetValueError
                if isinstance(run.kind, WriteSensitiveAttribute)
                else AttributeChangedValueError
            )
            raise error_type(
                run.model,
                self._config.attribute,
                result.assignment.written,
                result.assignment.read,
            )
        return result.passed

    # ── Messages ───────────────────────────────────────────────────────────

    def simple_description(self) -> str:
        return f"validate that :{self._config.attribute} cannot be empty/falsy"

    def description(self) -> str:
        description = self.simple_description()
        if self._config.context is not None:
            description += f" on :{self._config.context}"
        if self._config.custom_message:
            description += ", producing a custom validation error on failure"
        return description

    def failure_message(self) -> str:
        message = word_wrap(
            f"Expected {self._model_name} to {self.description()}, "
            f"but this could not be proved."
        )
        reason = self._failure_reason()
        if reason:
            message += "\n" + word_wrap(reason, indent=2)
        if self._should_add_footnote_about_belongs_to():
            message += "\n\n" + word_wrap(self._belongs_to_footnote(), indent=2)
        return message

    def failure_message_when_negated(self) -> str:
        message = word_wrap(
            f"Expected {self._model_name} not to {self.description()}, "
            f"but this could not be proved."
        )
        reason = self._failure_reason()
        if reason:
            message += "\n" + word_wrap(reason, indent=2)
        return message

    @property
    def _model_name(self) -> str:
        return self._run.model.__name__ if self._run is not None else "the model"

    def _failure_reason(self) -> str | None:
        if self._run is None:
            return None
        result = self._run.last_result
        if result is None or result.passed:
            return None
        return result.failure_message()

    def _should_add_footnote_about_belongs_to(self) -> bool:
        run = self._run
        if run is None or run.adapter is None or run.negated or run.verdict is not False:
            return False
        return (
            isinstance(run.kind, RelationshipAttribute)
            and run.kind.relationship.belongs_to
            and run.adapter.existing_validator_registered(run.model, self._config.attribute)
        )

    def _belongs_to_footnote(self) -> str:
        assert self._run is not None
        assert isinstance(self._run.kind, RelationshipAttribute)
        relationship = self._run.kind.relationship

        if relationship.configured_required:
            reason = (
                "you've instructed your `belongs_to` relationship to add a "
                "presence validation to the attribute"
            )
        else:
            reason = (
                "the model framework is configured to add a presence validation "
                "to all `belongs_to` relationships, and this includes yours"
            )

        representation = f"belong_to({self._config.attribute!r})"
        if "optional" in relationship.options:
            representation += f".optional({relationship.options['optional']!r})"

        return (
            f"You're getting this error because {reason}. *This* presence "
            f'validation doesn\'t use "can\'t be blank", the usual validation '
            f'message, but "must exist" instead.\n\n'
            f"With that said, did you know that the `belong_to` matcher can test "
            f"this validation for you? Instead of using `validate_presence_of`, "
            f"try the following:\n\n"
            f"    {representation}"
        )


def validate_presence_of(attribute: str) -> PresenceMatcher:
    """Build a matcher expecting a presence validation on ``attribute``."""
    return PresenceMatcher(PresenceConfig(attribute=attribute))


def load_presence_matcher(data: dict[str, Any]) -> PresenceMatcher:
    """Parse a config dict and build a ready matcher.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    return PresenceMatcher.from_config(parse_presence_config(data))
