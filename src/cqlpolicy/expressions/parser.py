"""Parser for policy call expressions.

Turns an expression string into a CallExpression tree without building any
policy objects. The grammar is:

    expr     = name ( '(' arglist? ')' )?
    arglist  = arg ( ',' arg )*
    arg      = expr | string | typed_num | num
    typed_num = '(double)' num | '(float)' num | '(long)' num | '(int)' num
    name     = ( letter | '.' )+

Each level is handled by the matcher (outer shape), the splitter (top-level
commas) and the literal coercer (one argument). Descent into nested calls
uses an explicit stack of open calls rather than the Python call stack, so
nesting depth is limited only by the length of the input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from cqlpolicy.expressions.literals import coerce_value, is_call_fragment
from cqlpolicy.expressions.matcher import match_call
from cqlpolicy.expressions.nodes import Argument, ArgumentKind, CallExpression
from cqlpolicy.expressions.splitter import Fragment, split_arguments

logger = logging.getLogger(__name__)


def parse_call_expression(source: str) -> CallExpression:
    """Parse an expression string into a CallExpression tree.

    Args:
        source: The expression string to parse.

    Returns:
        Root CallExpression of the parsed tree.

    Raises:
        MalformedExpressionError: If the text is not a call expression.
        NumericFormatError: If a numeric argument is invalid.
    """
    tree = _Parser(source).parse()
    logger.debug("Parsed '%s' into %s (depth %d)", source, tree.name, tree.depth())
    return tree


@dataclass
class _OpenCall:
    """A call whose argument fragments are still being converted."""

    name: str
    fragments: list[Fragment]
    arguments: list[Argument] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return len(self.arguments) == len(self.fragments)

    def next_fragment(self) -> Fragment:
        return self.fragments[len(self.arguments)]


class _Parser:
    """Parser state for one expression string."""

    def __init__(self, source: str) -> None:
        self._source = source

    def parse(self) -> CallExpression:
        """Parse the whole source, depth first, left to right."""
        stack = [self._open(self._source, 0)]
        while True:
            current = stack[-1]
            if not current.complete:
                fragment = current.next_fragment()
                if is_call_fragment(fragment.text):
                    stack.append(self._open(fragment.text, fragment.position))
                else:
                    current.arguments.append(
                        coerce_value(
                            fragment.text,
                            source=self._source,
                            position=fragment.position,
                        )
                    )
                continue

            stack.pop()
            call = CallExpression(current.name, tuple(current.arguments))
            if not stack:
                return call
            stack[-1].arguments.append(Argument(ArgumentKind.CALL, call))

    def _open(self, text: str, offset: int) -> _OpenCall:
        """Match ``text`` (at ``offset`` in the source) and split its arguments."""
        match = match_call(text, self._source, offset)
        fragments = split_arguments(
            match.arguments, self._source, match.arguments_offset
        )
        return _OpenCall(match.name, fragments)
