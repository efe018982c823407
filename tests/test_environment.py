"""Tests for environment access implementations."""

import os

import pytest

from envaction.runtime.environment import MappingEnvironment, ProcessEnvironment
from envaction.runtime.errors import ActionValidationError


class TestMappingEnvironment:
    """Tests for the isolated dict-backed environment."""

    def test_initial_values_are_copied(self):
        source = {"A": "1"}
        env = MappingEnvironment(source)
        env.set("B", "2")
        assert "B" not in source
        assert env.get("A") == "1"
        assert env.get("B") == "2"

    def test_get_default(self):
        env = MappingEnvironment()
        assert env.get("MISSING") is None
        assert env.get("MISSING", "x") == "x"

    def test_contains_is_case_sensitive(self):
        env = MappingEnvironment({"FOO": "1"})
        assert "FOO" in env
        assert "foo" not in env


class TestProcessEnvironment:
    """Tests for the os.environ-backed environment."""

    def test_reads_and_writes_os_environ(self, monkeypatch):
        monkeypatch.setenv("ENVACTION_ENV_CHECK", "before")
        env = ProcessEnvironment()
        assert env.get("ENVACTION_ENV_CHECK") == "before"
        assert "ENVACTION_ENV_CHECK" in env
        env.set("ENVACTION_ENV_CHECK", "after")
        assert os.environ["ENVACTION_ENV_CHECK"] == "after"

    def test_empty_name_rejected(self):
        with pytest.raises(ActionValidationError) as exc_info:
            ProcessEnvironment().set("", "x")
        assert 'environment variable "" cannot be set' in str(exc_info.value)

    def test_nul_value_rejected(self, monkeypatch):
        monkeypatch.delenv("ENVACTION_ENV_CHECK", raising=False)
        with pytest.raises(ActionValidationError) as exc_info:
            ProcessEnvironment().set("ENVACTION_ENV_CHECK", "a\x00b")
        assert "ENVACTION_ENV_CHECK" in str(exc_info.value)
        assert "ENVACTION_ENV_CHECK" not in os.environ
