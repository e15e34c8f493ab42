"""Tests for cli/output.py module."""

import json

import pytest

from cqlpolicy.cli.exit_codes import ExitCode
from cqlpolicy.cli.output import echo_json, error_exit, resolution_error_exit
from cqlpolicy.exceptions import MalformedExpressionError, UnknownPolicyError


class TestErrorExit:
    """Tests for error_exit function."""

    def test_human_format_exit(self, capsys) -> None:
        """Human format should print 'Error: message' and exit."""
        with pytest.raises(SystemExit) as exc_info:
            error_exit("Something failed", ExitCode.GENERAL_ERROR, json_output=False)

        assert exc_info.value.code == 1
        assert capsys.readouterr().err == "Error: Something failed\n"

    def test_json_format_exit(self, capsys) -> None:
        """JSON format should print JSON error and exit."""
        with pytest.raises(SystemExit) as exc_info:
            error_exit("Something failed", ExitCode.UNKNOWN_POLICY, json_output=True)

        assert exc_info.value.code == 20

        parsed = json.loads(capsys.readouterr().err)
        assert parsed == {
            "status": "failed",
            "error": {"code": "UNKNOWN_POLICY", "message": "Something failed"},
        }


class TestResolutionErrorExit:
    """Tests for resolution_error_exit function."""

    def test_expression_error_shows_caret(self, capsys) -> None:
        error = MalformedExpressionError("Empty argument", source="A(1,,2)", position=4)
        with pytest.raises(SystemExit) as exc_info:
            resolution_error_exit(error)

        assert exc_info.value.code == ExitCode.MALFORMED_EXPRESSION
        assert capsys.readouterr().err.splitlines() == [
            "Error: Empty argument",
            "  A(1,,2)",
            "      ^",
        ]

    def test_json_uses_plain_message(self, capsys) -> None:
        error = MalformedExpressionError("Empty argument", source="A(1,,2)", position=4)
        with pytest.raises(SystemExit):
            resolution_error_exit(error, json_output=True)

        parsed = json.loads(capsys.readouterr().err)
        assert parsed["error"]["code"] == "MALFORMED_EXPRESSION"
        assert parsed["error"]["message"] == "Empty argument"

    def test_other_errors_use_mapped_code(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            resolution_error_exit(UnknownPolicyError("acme.Nope"))

        assert exc_info.value.code == ExitCode.UNKNOWN_POLICY
        assert "Unknown policy: acme.Nope" in capsys.readouterr().err


def test_echo_json(capsys) -> None:
    echo_json({"policies": []})
    assert json.loads(capsys.readouterr().out) == {"policies": []}
