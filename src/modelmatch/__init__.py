"""modelmatch — Fluent test matchers for model presence validations.

All public types are exported from this module for flat imports:

    from modelmatch import validate_presence_of, PresenceMatcher, ModelAdapter
"""

__version__ = "0.1.0"

# Default adapter
from modelmatch._adapter import ConventionAdapter

# Attribute kinds and planning
from modelmatch._attribute import (
    AttributeKind,
    PlainAttribute,
    RelationshipAttribute,
    WriteSensitiveAttribute,
    disallowed_values,
    resolve_attribute,
)

# Config: see modelmatch._config for the accepted dict shape
from modelmatch._config import ConfigParseError, PresenceConfig, parse_presence_config
from modelmatch._errors import (
    AttributeChangedValueError,
    CouldNotSetValueError,
    InvalidMessagePatternError,
    MatcherError,
    UnknownModelError,
)
from modelmatch._interference import WriterInterference, is_blank

# Matcher
from modelmatch._matcher import (
    MatchRun,
    MatchState,
    PresenceMatcher,
    load_presence_matcher,
    validate_presence_of,
)
from modelmatch._messages import DEFAULT_MESSAGES, CodeMessage, ExactMessage, RegexMessage

# Probing
from modelmatch._probe import Applied, Assignment, Intercepted, Probe, ProbeResult, assign

# Registry: see modelmatch._registry for details
from modelmatch._registry import (
    DEFAULT_REGISTRY,
    Registry,
    RegistryBuilder,
    register_convention_adapter,
)

# Protocols and values
from modelmatch._types import (
    MessageMatcher,
    ModelAdapter,
    Relationship,
    ValidationFailure,
)

__all__ = [
    # Protocols and values
    "ModelAdapter",
    "MessageMatcher",
    "Relationship",
    "ValidationFailure",
    # Matcher
    "PresenceMatcher",
    "MatchRun",
    "MatchState",
    "validate_presence_of",
    "load_presence_matcher",
    # Attribute kinds
    "AttributeKind",
    "PlainAttribute",
    "RelationshipAttribute",
    "WriteSensitiveAttribute",
    "resolve_attribute",
    "disallowed_values",
    # Probing
    "Probe",
    "ProbeResult",
    "Applied",
    "Intercepted",
    "Assignment",
    "assign",
    "WriterInterference",
    "is_blank",
    # Messages
    "CodeMessage",
    "ExactMessage",
    "RegexMessage",
    "DEFAULT_MESSAGES",
    # Config
    "PresenceConfig",
    "ConfigParseError",
    "parse_presence_config",
    # Registry
    "ConventionAdapter",
    "RegistryBuilder",
    "Registry",
    "register_convention_adapter",
    "DEFAULT_REGISTRY",
    # Errors
    "MatcherError",
    "AttributeChangedValueError",
    "CouldNotSetValueError",
    "InvalidMessagePatternError",
    "UnknownModelError",
]
