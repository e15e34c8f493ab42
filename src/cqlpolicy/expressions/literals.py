"""Classification and conversion of single argument fragments.

Classification is purely syntactic and runs in this order:

1. ``name(...)`` or a bare ``name`` is a nested call.
2. Anything containing a quote character is a string (quotes removed).
3. A ``(double)``/``(float)`` marker, or a dot, makes a floating value:
   double with ``(double)``, float otherwise.
4. Everything else is an integer: long with ``(long)``, int otherwise.

Markers are case-insensitive and removed before the numeric parse.
"""

from __future__ import annotations

import math
import re
import struct
from collections.abc import Callable

from cqlpolicy.exceptions import NumericFormatError
from cqlpolicy.expressions.nodes import Argument, ArgumentKind, CallExpression

# Signature of the callback used to parse a nested call: (text, position).
ChildParser = Callable[[str, int], CallExpression]

_BARE_NAME_RE = re.compile(r"[A-Za-z][A-Za-z.]*")
_MARKER_RE = re.compile(r"\(\s*(double|float|long|int)\s*\)\s*", re.IGNORECASE)
_INTEGER_RE = re.compile(r"[+-]?\d+")
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

INT_MIN, INT_MAX = -(2**31), 2**31 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1
FLOAT_MAX = 3.4028234663852886e38  # largest finite 32-bit float

_INTEGER_RANGES: dict[ArgumentKind, tuple[int, int]] = {
    ArgumentKind.INT: (INT_MIN, INT_MAX),
    ArgumentKind.LONG: (LONG_MIN, LONG_MAX),
}


def coerce_literal(
    text: str,
    parse_child: ChildParser,
    source: str = "",
    position: int = 0,
) -> Argument:
    """Classify a trimmed fragment and convert it to an Argument.

    Args:
        text: The trimmed argument fragment.
        parse_child: Called with (text, position) when the fragment is a
            nested call; its result becomes the CALL argument value.
        source: Full expression text, used for error reporting.
        position: Position of ``text`` within ``source``.

    Returns:
        The classified Argument.

    Raises:
        NumericFormatError: If a numeric fragment does not parse as its kind.
        MalformedExpressionError: Propagated from ``parse_child``.
    """
    if is_call_fragment(text):
        return Argument(ArgumentKind.CALL, parse_child(text, position))
    return coerce_value(text, source, position)


def coerce_value(text: str, source: str = "", position: int = 0) -> Argument:
    """Convert a fragment that is not a nested call.

    Raises:
        NumericFormatError: If a numeric fragment does not parse as its kind.
    """
    if "'" in text or '"' in text:
        return Argument(ArgumentKind.STRING, text.replace("'", "").replace('"', ""))

    marker, body = split_marker(text)

    if marker in ("double", "float") or (marker is None and "." in body):
        kind = ArgumentKind.DOUBLE if marker == "double" else ArgumentKind.FLOAT
        return Argument(kind, _parse_decimal(body, kind, source, position))

    kind = ArgumentKind.LONG if marker == "long" else ArgumentKind.INT
    return Argument(kind, _parse_integer(body, kind, source, position))


def split_marker(text: str) -> tuple[str | None, str]:
    """Split a leading type marker such as ``(long)`` from a fragment.

    Returns:
        Tuple of (lowercase marker name or None, remaining text).
    """
    m = _MARKER_RE.match(text)
    if m is None:
        return None, text
    return m.group(1).lower(), text[m.end() :].strip()


def is_call_fragment(text: str) -> bool:
    """True if the fragment is a nested call (``name(...)`` or a bare name)."""
    if "(" in text and not text.startswith(("(", "'", "\"")):
        return True
    return _BARE_NAME_RE.fullmatch(text) is not None


def _parse_integer(body: str, kind: ArgumentKind, source: str, position: int) -> int:
    if not _INTEGER_RE.fullmatch(body):
        raise NumericFormatError(body, kind.value, source=source, position=position)
    value = int(body)
    low, high = _INTEGER_RANGES[kind]
    if not low <= value <= high:
        raise NumericFormatError(body, kind.value, source=source, position=position)
    return value


def _parse_decimal(
    body: str, kind: ArgumentKind, source: str, position: int
) -> float:
    if not _DECIMAL_RE.fullmatch(body):
        raise NumericFormatError(body, kind.value, source=source, position=position)
    value = float(body)
    limit = FLOAT_MAX if kind is ArgumentKind.FLOAT else math.inf
    if not math.isfinite(value) or abs(value) > limit:
        raise NumericFormatError(body, kind.value, source=source, position=position)
    if kind is ArgumentKind.FLOAT:
        return _to_single_precision(value)
    return value


def _to_single_precision(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]
