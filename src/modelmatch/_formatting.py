"""Text helpers for failure messages."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from modelmatch._types import ValidationFailure

DEFAULT_WIDTH = 72


def word_wrap(text: str, *, indent: int = 0, width: int = DEFAULT_WIDTH) -> str:
    """Wrap prose paragraphs to ``width`` columns and indent every line.

    Paragraphs are separated by blank lines. A paragraph containing a
    bullet ("* ") or an already-indented line is kept verbatim.
    """
    prefix = " " * indent
    paragraphs = []
    for paragraph in text.split("\n\n"):
        lines = paragraph.splitlines()
        if any(line.startswith((" ", "* ")) for line in lines):
            paragraphs.append("\n".join(prefix + line if line else line for line in lines))
        else:
            paragraphs.append(
                textwrap.fill(
                    " ".join(line.strip() for line in lines),
                    width=width,
                    initial_indent=prefix,
                    subsequent_indent=prefix,
                    break_long_words=False,
                    break_on_hyphens=False,
                )
            )
    return "\n\n".join(paragraphs)


def inspect_value(value: Any) -> str:
    return f"‹{value!r}›"


def format_errors(errors: Mapping[str, tuple[ValidationFailure, ...]]) -> str:
    """Render errors as a bullet list, one attribute per line."""
    lines = []
    for attribute, failures in errors.items():
        messages = ", ".join(f'"{f.message}"' for f in failures)
        lines.append(f"* {attribute}: [{messages}]")
    return "\n".join(lines)
