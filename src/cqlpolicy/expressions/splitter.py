"""Split raw argument text into top-level argument fragments.

A fragment such as ``TokenAwarePolicy(RoundRobinPolicy())`` is kept whole
even though it contains parentheses, and ``DCAwareRoundRobinPolicy("a", 2)``
is kept whole even though it contains a comma: only commas outside every
parenthesis pair and outside quoted strings separate arguments.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from cqlpolicy.exceptions import MalformedExpressionError

_QUOTED = r"\"[^\"]*\"|'[^']*'"

# Every character of the input falls into exactly one of these groups.
# A lone quote with no partner is passed through as text.
_SCAN_RE = re.compile(
    rf"(?P<string>{_QUOTED})"
    r"|(?P<open>\()"
    r"|(?P<close>\))"
    r"|(?P<comma>,)"
    r"|(?P<text>[^(),\"']+)"
    r"|(?P<quote>[\"'])"
)


@dataclass(frozen=True)
class Fragment:
    """One trimmed top-level argument and where it starts."""

    text: str
    position: int


def split_arguments(
    arguments: str,
    source: str = "",
    offset: int = 0,
) -> list[Fragment]:
    """Split argument text on top-level commas.

    Args:
        arguments: Text between the outer parentheses of a call.
        source: Full expression text, used for error reporting.
        offset: Position of ``arguments`` within ``source``.

    Returns:
        Trimmed fragments in order. Empty or blank text yields no fragments.

    Raises:
        MalformedExpressionError: On unbalanced parentheses or an empty
            argument (``a,,b`` or a trailing comma).
    """
    if not arguments.strip():
        return []

    source = source or arguments
    fragments: list[Fragment] = []
    depth = 0
    start = 0

    for m in _SCAN_RE.finditer(arguments):
        kind = m.lastgroup
        if kind == "open":
            depth += 1
        elif kind == "close":
            depth -= 1
            if depth < 0:
                raise MalformedExpressionError(
                    "Unbalanced ')'",
                    source=source,
                    position=offset + m.start(),
                )
        elif kind == "comma" and depth == 0:
            fragments.append(_fragment(arguments, start, m.start(), source, offset))
            start = m.end()

    if depth > 0:
        raise MalformedExpressionError(
            "Unclosed '('",
            source=source,
            position=offset + len(arguments),
        )

    fragments.append(_fragment(arguments, start, len(arguments), source, offset))
    return fragments


def _fragment(
    arguments: str, start: int, end: int, source: str, offset: int
) -> Fragment:
    """Trim arguments[start:end] into a Fragment, rejecting blanks."""
    raw = arguments[start:end]
    text = raw.strip()
    if not text:
        raise MalformedExpressionError(
            "Empty argument",
            source=source,
            position=offset + start,
        )
    leading = len(raw) - len(raw.lstrip())
    return Fragment(text, offset + start + leading)
