"""Structural matcher for the outer shape of a call expression.

The matcher does not tokenize. It checks, with a single anchored pattern,
that the text looks like ``Name(...)`` or a bare ``Name`` and hands back the
name and the raw text between the outer parentheses.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from cqlpolicy.exceptions import MalformedExpressionError

# Name is letters and dots; everything between the first "(" and the final
# ")" is taken verbatim as the argument text.
_CALL_RE = re.compile(
    r"\s*(?P<name>[A-Za-z.]+)\s*(?:\((?P<args>.*)\))?\s*",
    re.DOTALL,
)
_NAME_PREFIX_RE = re.compile(r"\s*[A-Za-z.]*\s*")


@dataclass(frozen=True)
class CallMatch:
    """Result of matching the outer shape of a call expression."""

    name: str
    arguments: str
    arguments_offset: int  # position of `arguments` within the full source


def match_call(text: str, source: str = "", offset: int = 0) -> CallMatch:
    """Match ``text`` against the call-expression shape.

    Text without any ``(`` is a bare name and matches with empty arguments.

    Args:
        text: Expression text to match (the whole input or a nested fragment).
        source: Full expression text, used for error reporting.
        offset: Position of ``text`` within ``source``.

    Returns:
        CallMatch with the name and raw argument text.

    Raises:
        MalformedExpressionError: If the text is empty or does not match.
    """
    source = source or text
    if not text or not text.strip():
        raise MalformedExpressionError(
            "Empty expression", source=source, position=offset
        )

    m = _CALL_RE.fullmatch(text)
    if m is None:
        prefix = _NAME_PREFIX_RE.match(text)
        raise MalformedExpressionError(
            f"Not a call expression: '{text.strip()}'",
            source=source,
            position=offset + (prefix.end() if prefix else 0),
        )

    if m.group("args") is None:
        return CallMatch(m.group("name"), "", offset + len(text))
    return CallMatch(m.group("name"), m.group("args"), offset + m.start("args"))
