"""Writer-interference tolerance policy.

Some models transform values in their attribute writers, so the value read
back after an assignment is not the value that was written. The policy
decides, from the read-back value, whether that is acceptable.
"""

from __future__ import annotations

from collections.abc import Callable, Collection
from dataclasses import dataclass, replace
from typing import Any, Literal, TypeAlias

Setting: TypeAlias = Literal["always", "never", "sometimes"]


def is_blank(value: Any) -> bool:
    """Emptiness predicate: None, False, whitespace-only strings, empty collections."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Collection):
        return len(value) == 0
    return False


_NAMED_CONDITIONS: dict[str, Callable[[Any], bool]] = {"blank": is_blank}


@dataclass(frozen=True, slots=True)
class WriterInterference:
    """When to tolerate a writer that changes the assigned value.

    ``changed`` records whether the policy was configured explicitly;
    default_to() only replaces policies that were not.
    """

    setting: Setting = "always"
    condition: Callable[[Any], bool] | None = None
    changed: bool = False

    @classmethod
    def build(cls, argument: bool | str | Callable[[Any], bool] = True) -> WriterInterference:
        """Build a policy from a qualifier argument.

        True/"always" and False/"never" fix the setting; a condition name
        (e.g. "blank") or a callable tolerates values satisfying it.
        """
        match argument:
            case True | "always":
                return cls(setting="always", changed=True)
            case False | "never":
                return cls(setting="never", changed=True)
            case str(name):
                condition = _NAMED_CONDITIONS.get(name)
                if condition is None:
                    known = sorted(_NAMED_CONDITIONS)
                    msg = f"unknown interference condition {name!r} (known: {known})"
                    raise ValueError(msg)
                return cls(setting="sometimes", condition=condition, changed=True)
            case _ if callable(argument):
                return cls(setting="sometimes", condition=argument, changed=True)
        msg = f"cannot build an interference policy from {argument!r}"
        raise TypeError(msg)

    def default_to(self, when: Callable[[Any], bool]) -> WriterInterference:
        """Return a conditional policy unless this one was set explicitly."""
        if self.changed:
            return self
        return replace(self, setting="sometimes", condition=when)

    @property
    def never(self) -> bool:
        return self.setting == "never"

    def considering(self, value: Any) -> bool:
        """True if a changed value read back as ``value`` is tolerated."""
        match self.setting:
            case "always":
                return True
            case "never":
                return False
        return self.condition is not None and bool(self.condition(value))
