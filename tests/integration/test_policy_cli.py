"""Integration tests for the cqlpolicy command line."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cqlpolicy.cli import main
from cqlpolicy.cli.exit_codes import ExitCode


@pytest.fixture
def invoke(missing_config: Path):
    """Run the CLI against a config file that does not exist."""
    runner = CliRunner()

    def _invoke(*args: str):
        return runner.invoke(main, ["--config", str(missing_config), *args])

    return _invoke


class TestHelp:
    """Tests for --help output."""

    def test_main_help(self, invoke) -> None:
        result = invoke("--help")
        assert result.exit_code == 0
        for command in ("parse", "resolve", "policies"):
            assert command in result.output

    def test_resolve_help(self, invoke) -> None:
        result = invoke("resolve", "--help")
        assert result.exit_code == 0
        assert "FAMILY" in result.output
        assert "--schedule" in result.output


class TestParseCommand:
    """Tests for cqlpolicy parse."""

    def test_tree_output(self, invoke) -> None:
        result = invoke("parse", 'TokenAwarePolicy(DCAwareRoundRobinPolicy("dc1", 2))')
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "TokenAwarePolicy",
            "  DCAwareRoundRobinPolicy",
            "    'dc1' (string)",
            "    2 (int)",
        ]

    def test_json_output(self, invoke) -> None:
        result = invoke("parse", "ConstantReconnectionPolicy((long)10)", "--json")
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "name": "ConstantReconnectionPolicy",
            "arguments": [{"kind": "long", "value": 10}],
        }

    def test_parse_does_not_look_up_names(self, invoke) -> None:
        result = invoke("parse", "fakeLbPolicy()")
        assert result.exit_code == 0
        assert result.output.strip() == "fakeLbPolicy"

    def test_malformed_shows_caret(self, invoke) -> None:
        result = invoke("parse", "A(1,,2)")
        assert result.exit_code == ExitCode.MALFORMED_EXPRESSION
        assert "Error: Empty argument" in result.output
        assert "      ^" in result.output

    def test_deeply_nested_tree(self, invoke) -> None:
        depth = 1500
        expression = "TokenAwarePolicy(" * depth + "RoundRobinPolicy" + ")" * depth
        result = invoke("parse", expression)
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == depth + 1
        assert lines[-1] == "  " * depth + "RoundRobinPolicy"

    def test_numeric_error(self, invoke) -> None:
        result = invoke("parse", "A((int)99999999999)")
        assert result.exit_code == ExitCode.NUMERIC_FORMAT_ERROR


class TestResolveCommand:
    """Tests for cqlpolicy resolve."""

    def test_load_balancing(self, invoke) -> None:
        result = invoke("resolve", "load-balancing", "TokenAwarePolicy(RoundRobinPolicy())")
        assert result.exit_code == 0
        assert result.output.strip() == "TokenAwarePolicy(child=RoundRobinPolicy())"

    def test_retry(self, invoke) -> None:
        result = invoke("resolve", "retry", "DefaultRetryPolicy")
        assert result.exit_code == 0
        assert result.output.strip() == "DefaultRetryPolicy.INSTANCE"

    def test_json_output(self, invoke) -> None:
        result = invoke(
            "resolve", "reconnection", "ConstantReconnectionPolicy((long)500)", "--json"
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "family": "reconnection",
            "expression": "ConstantReconnectionPolicy((long)500)",
            "policy": {"policy": "ConstantReconnectionPolicy", "delay_ms": 500},
        }

    def test_schedule(self, invoke) -> None:
        result = invoke(
            "resolve",
            "reconnection",
            "ExponentialReconnectionPolicy((long)10,(Long)100)",
            "--schedule",
            "5",
        )
        assert result.exit_code == 0
        assert "Schedule (ms): 10, 20, 40, 80, 100" in result.output

    def test_schedule_only_for_reconnection(self, invoke) -> None:
        result = invoke("resolve", "retry", "DefaultRetryPolicy", "--schedule", "3")
        assert result.exit_code == 2
        assert "reconnection policies only" in result.output

    @pytest.mark.parametrize(
        "family, expression, code",
        [
            ("load-balancing", "fakeLbPolicy()", ExitCode.UNKNOWN_POLICY),
            ("reconnection", "fakeReconnectionPolicy()", ExitCode.UNKNOWN_POLICY),
            ("retry", "fakeRetryPolicy", ExitCode.UNKNOWN_POLICY),
            ("retry", "RoundRobinPolicy", ExitCode.UNKNOWN_POLICY),
            ("retry", "LoggingRetryPolicy", ExitCode.MISSING_SINGLETON),
            ("retry", "DefaultRetryPolicy()", ExitCode.MALFORMED_EXPRESSION),
            (
                "reconnection",
                "ConstantReconnectionPolicy(10)",
                ExitCode.NO_MATCHING_CONSTRUCTOR,
            ),
            (
                "reconnection",
                "ConstantReconnectionPolicy((long)-5)",
                ExitCode.CONSTRUCTION_FAILED,
            ),
            (
                "reconnection",
                "ConstantReconnectionPolicy((int)2147483648)",
                ExitCode.NUMERIC_FORMAT_ERROR,
            ),
        ],
    )
    def test_failures(self, invoke, family: str, expression: str, code: ExitCode) -> None:
        result = invoke("resolve", family, expression)
        assert result.exit_code == code
        assert "Error:" in result.output

    def test_json_failure(self, invoke) -> None:
        result = invoke("resolve", "load-balancing", "fakeLbPolicy()", "--json")
        assert result.exit_code == ExitCode.UNKNOWN_POLICY
        data = json.loads(result.output)
        assert data["status"] == "failed"
        assert data["error"]["code"] == "UNKNOWN_POLICY"
        assert "fakeLbPolicy" in data["error"]["message"]

    def test_unknown_family(self, invoke) -> None:
        result = invoke("resolve", "speculative", "RoundRobinPolicy")
        assert result.exit_code == 2


class TestPoliciesCommand:
    """Tests for cqlpolicy policies."""

    def test_table(self, invoke) -> None:
        result = invoke("policies")
        assert result.exit_code == 0
        assert "LatencyAwarePolicy" in result.output
        assert "(policy, double, long, long, long, int)" in result.output
        assert "Found 10 policy type(s)" in result.output

    def test_retry_family_json(self, invoke) -> None:
        result = invoke("policies", "--family", "retry", "--json")
        assert result.exit_code == 0
        policies = {p["name"]: p for p in json.loads(result.output)["policies"]}
        assert len(policies) == 4
        assert policies["cqlpolicy.policies.DefaultRetryPolicy"]["singleton"] is True
        logging_retry = policies["cqlpolicy.policies.LoggingRetryPolicy"]
        assert logging_retry["singleton"] is False
        assert logging_retry["signatures"] == []


class TestConfiguration:
    """Tests for config file, environment and CLI layering."""

    def test_invalid_config_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.toml"
        config_file.write_text("[resolver\n")
        result = CliRunner().invoke(main, ["--config", str(config_file), "policies"])
        assert result.exit_code == ExitCode.CONFIG_ERROR

    def test_invalid_value_in_config_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.toml"
        config_file.write_text('[logging]\nformat = "xml"\n')
        result = CliRunner().invoke(main, ["--config", str(config_file), "policies"])
        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Invalid configuration" in result.output

    @pytest.mark.parametrize(
        "content",
        [
            "[logging]\nlevel = 5\n",
            '[logging]\nmax_bytes = "big"\n',
            "[logging]\ninclude_stderr = 1\n",
            'resolver = "x"\n',
            "[resolver]\ndefault_namespace = 7\n",
        ],
    )
    def test_wrongly_typed_value_in_config_file(
        self, tmp_path: Path, content: str
    ) -> None:
        config_file = tmp_path / "config.toml"
        config_file.write_text(content)
        result = CliRunner().invoke(main, ["--config", str(config_file), "policies"])
        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Invalid configuration" in result.output

    def test_invalid_value_in_environment(self, missing_config: Path) -> None:
        result = CliRunner().invoke(
            main,
            ["--config", str(missing_config), "policies"],
            env={"CQLPOLICY_LOG_MAX_BYTES": "big"},
        )
        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "CQLPOLICY_LOG_MAX_BYTES" in result.output

    def test_namespace_from_config_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.toml"
        config_file.write_text('[resolver]\ndefault_namespace = "acme"\n')
        result = CliRunner().invoke(
            main, ["--config", str(config_file), "resolve", "retry", "DefaultRetryPolicy"]
        )
        assert result.exit_code == ExitCode.UNKNOWN_POLICY
        assert "acme.DefaultRetryPolicy" in result.output

    def test_namespace_from_environment(self, missing_config: Path) -> None:
        result = CliRunner().invoke(
            main,
            ["--config", str(missing_config), "resolve", "retry", "DefaultRetryPolicy"],
            env={"CQLPOLICY_DEFAULT_NAMESPACE": "acme"},
        )
        assert result.exit_code == ExitCode.UNKNOWN_POLICY

    def test_namespace_option_allows_qualified_names(self, invoke) -> None:
        result = invoke(
            "--namespace",
            "acme",
            "resolve",
            "retry",
            "cqlpolicy.policies.FallthroughRetryPolicy",
        )
        assert result.exit_code == 0
        assert result.output.strip() == "FallthroughRetryPolicy.INSTANCE"

    def test_invalid_namespace_option(self, invoke) -> None:
        result = invoke("--namespace", "1acme", "policies")
        assert result.exit_code == ExitCode.CONFIG_ERROR


class TestLoggingOptions:
    """Tests for --log-level, --log-file and --log-json."""

    def test_debug_log_file(self, invoke, tmp_path: Path) -> None:
        log_file = tmp_path / "cqlpolicy.log"
        result = invoke(
            "--log-level",
            "debug",
            "--log-file",
            str(log_file),
            "resolve",
            "load-balancing",
            "RoundRobinPolicy",
        )
        assert result.exit_code == 0
        assert "[load-balancing]" in log_file.read_text()
        assert "Resolved 'RoundRobinPolicy'" in log_file.read_text()

    def test_json_log_file(self, invoke, tmp_path: Path) -> None:
        log_file = tmp_path / "cqlpolicy.log"
        result = invoke(
            "--log-level",
            "debug",
            "--log-file",
            str(log_file),
            "--log-json",
            "resolve",
            "reconnection",
            "ConstantReconnectionPolicy((long)10)",
        )
        assert result.exit_code == 0
        entries = [json.loads(line) for line in log_file.read_text().splitlines()]
        resolved = [e for e in entries if e["message"].startswith("Resolved")]
        assert resolved[0]["policy_family"] == "reconnection"
        assert resolved[0]["expression"] == "ConstantReconnectionPolicy((long)10)"
