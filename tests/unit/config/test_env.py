"""Tests for EnvReader class."""

from __future__ import annotations

from pathlib import Path

import pytest

from cqlpolicy.config.env import EnvReader


class TestEnvReaderText:
    """Tests for EnvReader.text method."""

    def test_reads_prefixed_variable(self) -> None:
        reader = EnvReader(env={"CQLPOLICY_LOG_LEVEL": "debug"})
        assert reader.text("LOG_LEVEL") == "debug"

    def test_unset_is_none(self) -> None:
        assert EnvReader(env={}).text("LOG_LEVEL") is None

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_is_none(self, value: str) -> None:
        assert EnvReader(env={"CQLPOLICY_LOG_LEVEL": value}).text("LOG_LEVEL") is None

    def test_custom_prefix(self) -> None:
        reader = EnvReader(env={"APP_LOG_LEVEL": "error"}, prefix="APP_")
        assert reader.variable("LOG_LEVEL") == "APP_LOG_LEVEL"
        assert reader.text("LOG_LEVEL") == "error"

    def test_defaults_to_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CQLPOLICY_DEFAULT_NAMESPACE", "acme")
        assert EnvReader().text("DEFAULT_NAMESPACE") == "acme"


class TestEnvReaderInteger:
    """Tests for EnvReader.integer method."""

    def test_parses_value(self) -> None:
        reader = EnvReader(env={"CQLPOLICY_LOG_MAX_BYTES": " 1024 "})
        assert reader.integer("LOG_MAX_BYTES") == 1024

    def test_unset_is_none(self) -> None:
        assert EnvReader(env={}).integer("LOG_MAX_BYTES") is None

    def test_invalid_value_names_variable(self) -> None:
        reader = EnvReader(env={"CQLPOLICY_LOG_MAX_BYTES": "big"})
        with pytest.raises(ValueError, match="CQLPOLICY_LOG_MAX_BYTES"):
            reader.integer("LOG_MAX_BYTES")


class TestEnvReaderFlag:
    """Tests for EnvReader.flag method."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "on"])
    def test_true_words(self, value: str) -> None:
        reader = EnvReader(env={"CQLPOLICY_LOG_INCLUDE_STDERR": value})
        assert reader.flag("LOG_INCLUDE_STDERR") is True

    @pytest.mark.parametrize("value", ["false", "False", "0", "no", "off"])
    def test_false_words(self, value: str) -> None:
        reader = EnvReader(env={"CQLPOLICY_LOG_INCLUDE_STDERR": value})
        assert reader.flag("LOG_INCLUDE_STDERR") is False

    def test_other_words_rejected(self) -> None:
        reader = EnvReader(env={"CQLPOLICY_LOG_INCLUDE_STDERR": "maybe"})
        with pytest.raises(ValueError, match="CQLPOLICY_LOG_INCLUDE_STDERR"):
            reader.flag("LOG_INCLUDE_STDERR")

    def test_unset_is_none(self) -> None:
        assert EnvReader(env={}).flag("LOG_INCLUDE_STDERR") is None


class TestEnvReaderPath:
    """Tests for EnvReader.path method."""

    def test_path_need_not_exist(self, tmp_path: Path) -> None:
        missing = tmp_path / "logs" / "cqlpolicy.log"
        reader = EnvReader(env={"CQLPOLICY_LOG_FILE": str(missing)})
        assert reader.path("LOG_FILE") == missing

    def test_expands_tilde(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        reader = EnvReader(env={"CQLPOLICY_LOG_FILE": "~/cqlpolicy.log"})
        assert reader.path("LOG_FILE") == tmp_path / "cqlpolicy.log"

    def test_unset_is_none(self) -> None:
        assert EnvReader(env={}).path("LOG_FILE") is None
