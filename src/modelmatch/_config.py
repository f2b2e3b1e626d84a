"""Presence matcher configuration.

PresenceConfig is the immutable qualifier state of a PresenceMatcher. Each
qualifier call produces a new config; the final one is what a match run
uses. Configs can also be built from JSON/YAML-shaped dicts:

    dict → parse_presence_config() → PresenceConfig → PresenceMatcher.from_config()

Accepted shape::

    attribute: arms
    allow_nil: false
    on: create
    message: "Robot has no legs"      # or {Exact: ...}, {Regex: ...}, {Code: ...}
    ignoring_interference_by_writer: true   # or false, or {when: blank}
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from modelmatch._errors import InvalidMessagePatternError
from modelmatch._interference import WriterInterference
from modelmatch._messages import CodeMessage, ExactMessage, RegexMessage

if TYPE_CHECKING:
    from modelmatch._types import MessageMatcher

DEFAULT_MESSAGE_CODE = "blank"


@dataclass(frozen=True, slots=True)
class PresenceConfig:
    """Everything a presence match run needs to know about the expectation."""

    attribute: str
    expected_message: MessageMatcher = field(
        default_factory=lambda: CodeMessage(DEFAULT_MESSAGE_CODE)
    )
    allow_nil: bool = False
    context: str | None = None
    custom_message: bool = False
    interference: WriterInterference = field(default_factory=WriterInterference)


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → PresenceConfig)
# ═══════════════════════════════════════════════════════════════════════════════

_KNOWN_FIELDS = frozenset(
    {"attribute", "allow_nil", "on", "message", "ignoring_interference_by_writer"}
)
_MESSAGE_VARIANTS = frozenset({"Exact", "Regex", "Code"})


class ConfigParseError(Exception):
    """Error parsing a config dict into a PresenceConfig."""


def parse_presence_config(data: dict[str, Any]) -> PresenceConfig:
    """Parse a dict into a PresenceConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = sorted(set(data) - _KNOWN_FIELDS)
    if unknown:
        msg = f"unknown fields: {unknown}"
        raise ConfigParseError(msg)

    attribute = data.get("attribute")
    if attribute is None:
        msg = "missing required field 'attribute'"
        raise ConfigParseError(msg)
    if not isinstance(attribute, str) or not attribute:
        msg = f"'attribute' must be a non-empty string, got {attribute!r}"
        raise ConfigParseError(msg)

    allow_nil = data.get("allow_nil", False)
    if not isinstance(allow_nil, bool):
        msg = f"'allow_nil' must be a bool, got {type(allow_nil).__name__}"
        raise ConfigParseError(msg)

    context = data.get("on")
    if context is not None and not isinstance(context, str):
        msg = f"'on' must be a string, got {type(context).__name__}"
        raise ConfigParseError(msg)

    config = PresenceConfig(attribute=attribute, allow_nil=allow_nil, context=context)

    if "message" in data:
        config = replace(
            config, expected_message=_parse_message(data["message"]), custom_message=True
        )
    if "ignoring_interference_by_writer" in data:
        config = replace(
            config,
            interference=_parse_interference(data["ignoring_interference_by_writer"]),
        )

    return config


def _parse_message(data: str | dict[str, Any]) -> MessageMatcher:
    """Parse a message entry.

    A bare string is an exact message; otherwise one of
    { "Exact": "..." }, { "Regex": "..." } or { "Code": "blank" }.
    """
    if isinstance(data, str):
        return ExactMessage(data)
    if not isinstance(data, dict):
        msg = f"'message' must be a string or dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    for variant in sorted(_MESSAGE_VARIANTS):
        if variant in data:
            value = data[variant]
            if not isinstance(value, str):
                msg = f"message {variant} value must be a string, got {type(value).__name__}"
                raise ConfigParseError(msg)
            match variant:
                case "Exact":
                    return ExactMessage(value, ignore_case=bool(data.get("ignore_case", False)))
                case "Code":
                    return CodeMessage(value)
                case _:
                    try:
                        return RegexMessage(value)
                    except InvalidMessagePatternError as e:
                        raise ConfigParseError(str(e)) from e

    expected = sorted(_MESSAGE_VARIANTS)
    msg = f"'message' must contain one of {expected}, got keys: {sorted(data.keys())}"
    raise ConfigParseError(msg)


def _parse_interference(data: bool | dict[str, Any]) -> WriterInterference:
    if isinstance(data, bool):
        return WriterInterference.build(data)
    if not isinstance(data, dict) or "when" not in data:
        msg = "'ignoring_interference_by_writer' must be a bool or a dict with 'when'"
        raise ConfigParseError(msg)
    try:
        return WriterInterference.build(str(data["when"]))
    except ValueError as e:
        raise ConfigParseError(str(e)) from e
