"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Expression errors (syntax, numeric literals)
    20-29: Construction errors (lookup, constructor, singleton)
    30-39: Configuration errors
"""

from enum import IntEnum

from cqlpolicy.exceptions import (
    MalformedExpressionError,
    MissingSingletonError,
    NoMatchingConstructorError,
    NumericFormatError,
    PolicyConstructionError,
    UnknownPolicyError,
)


class ExitCode(IntEnum):
    """Exit codes for cqlpolicy CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1

    # Expression errors (10-19)
    MALFORMED_EXPRESSION = 10
    NUMERIC_FORMAT_ERROR = 11

    # Construction errors (20-29)
    UNKNOWN_POLICY = 20
    NO_MATCHING_CONSTRUCTOR = 21
    MISSING_SINGLETON = 22
    CONSTRUCTION_FAILED = 23

    # Configuration errors (30-39)
    CONFIG_ERROR = 30


_ERROR_EXIT_CODES: dict[type[Exception], ExitCode] = {
    MalformedExpressionError: ExitCode.MALFORMED_EXPRESSION,
    NumericFormatError: ExitCode.NUMERIC_FORMAT_ERROR,
    UnknownPolicyError: ExitCode.UNKNOWN_POLICY,
    NoMatchingConstructorError: ExitCode.NO_MATCHING_CONSTRUCTOR,
    MissingSingletonError: ExitCode.MISSING_SINGLETON,
    PolicyConstructionError: ExitCode.CONSTRUCTION_FAILED,
}


def exit_code_for(error: Exception) -> ExitCode:
    """Return the exit code for an error, matching the nearest base class.

    A PolicyFamilyMismatchError maps to UNKNOWN_POLICY through its base.
    Anything unrecognized is a GENERAL_ERROR.
    """
    for cls in type(error).__mro__:
        code = _ERROR_EXIT_CODES.get(cls)
        if code is not None:
            return code
    return ExitCode.GENERAL_ERROR
