"""Call-expression language for driver policies.

Provides parse_call_expression() to convert strings like
'TokenAwarePolicy(DCAwareRoundRobinPolicy("dc1"))' into CallExpression
trees. Building objects from a tree is the registry's job.
"""

from cqlpolicy.expressions.literals import coerce_literal, coerce_value
from cqlpolicy.expressions.matcher import CallMatch, match_call
from cqlpolicy.expressions.nodes import Argument, ArgumentKind, CallExpression
from cqlpolicy.expressions.parser import parse_call_expression
from cqlpolicy.expressions.splitter import Fragment, split_arguments

__all__ = [
    "Argument",
    "ArgumentKind",
    "CallExpression",
    "CallMatch",
    "Fragment",
    "coerce_literal",
    "coerce_value",
    "match_call",
    "parse_call_expression",
    "split_arguments",
]
