"""Tests for the heredoc-framed file-command protocol."""

import re

import pytest

from envaction.runtime import file_commands
from envaction.runtime.environment import MappingEnvironment
from envaction.runtime.errors import (
    ActionValidationError,
    CommandConfigurationError,
    DelimiterCollisionError,
    MissingCommandFileError,
)
from envaction.runtime.file_commands import (
    generate_delimiter,
    issue_file_command,
    prepare_key_value_message,
    resolve_command_file,
)

FIXED_DELIMITER = "ghadelimiter_00000000-0000-4000-8000-000000000000"


@pytest.fixture
def fixed_delimiter(monkeypatch):
    """Pin the delimiter so collisions can be provoked."""
    monkeypatch.setattr(file_commands, "generate_delimiter", lambda: FIXED_DELIMITER)
    return FIXED_DELIMITER


@pytest.fixture
def output_env(command_files):
    return MappingEnvironment({"GITHUB_OUTPUT": str(command_files["OUTPUT"])})


# =============================================================================
# Delimiters
# =============================================================================


class TestGenerateDelimiter:
    """Tests for delimiter token generation."""

    def test_format(self):
        assert re.fullmatch(r"ghadelimiter_[0-9a-f-]{36}", generate_delimiter())

    def test_fresh_per_call(self):
        assert generate_delimiter() != generate_delimiter()


# =============================================================================
# Message Framing
# =============================================================================


class TestPrepareKeyValueMessage:
    """Tests for heredoc framing and collision checks."""

    def test_framing(self, fixed_delimiter):
        message = prepare_key_value_message("x", "line1\nline2")
        assert message == f"x<<{fixed_delimiter}\nline1\nline2\n{fixed_delimiter}"

    def test_structured_value(self, fixed_delimiter):
        message = prepare_key_value_message("data", {"a": 1})
        assert message == f'data<<{fixed_delimiter}\n{{"a":1}}\n{fixed_delimiter}'

    def test_none_value(self, fixed_delimiter):
        assert prepare_key_value_message("k", None) == f"k<<{fixed_delimiter}\n\n{fixed_delimiter}"

    def test_delimiter_prefix_in_value_is_allowed(self):
        """Only the exact token is rejected, not its fixed prefix."""
        message = prepare_key_value_message("x", "a\nghadelimiter_\nb")
        assert message.startswith("x<<ghadelimiter_")
        assert "\na\nghadelimiter_\nb\n" in message

    def test_key_collision(self, fixed_delimiter):
        with pytest.raises(DelimiterCollisionError) as exc_info:
            prepare_key_value_message(f"x{fixed_delimiter}", "v")
        assert exc_info.value.field == "name"
        assert fixed_delimiter in str(exc_info.value)

    def test_value_collision(self, fixed_delimiter):
        with pytest.raises(DelimiterCollisionError) as exc_info:
            prepare_key_value_message("x", f"before\n{fixed_delimiter}\nafter")
        assert exc_info.value.field == "value"

    def test_collision_is_validation_error(self, fixed_delimiter):
        with pytest.raises(ActionValidationError):
            prepare_key_value_message("x", fixed_delimiter)


# =============================================================================
# Command File Resolution and Append
# =============================================================================


class TestResolveCommandFile:
    """Tests for locating the runner command file."""

    def test_unset_env_var(self):
        with pytest.raises(CommandConfigurationError) as exc_info:
            resolve_command_file("OUTPUT", MappingEnvironment())
        assert exc_info.value.env_var == "GITHUB_OUTPUT"
        assert "file command OUTPUT" in str(exc_info.value)

    def test_empty_env_var(self):
        with pytest.raises(CommandConfigurationError):
            resolve_command_file("ENV", MappingEnvironment({"GITHUB_ENV": ""}))

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "nope.txt"
        env = MappingEnvironment({"GITHUB_STATE": str(missing)})
        with pytest.raises(MissingCommandFileError) as exc_info:
            resolve_command_file("STATE", env)
        assert exc_info.value.path == str(missing)
        assert str(exc_info.value) == f"Missing file at path: {missing}"

    def test_missing_file_is_configuration_error(self, tmp_path):
        env = MappingEnvironment({"GITHUB_STATE": str(tmp_path / "nope.txt")})
        with pytest.raises(CommandConfigurationError):
            resolve_command_file("STATE", env)


class TestIssueFileCommand:
    """Tests for appending framed records."""

    def test_appends_record(self, output_env, command_files, fixed_delimiter):
        issue_file_command("OUTPUT", "x", "multi\nline", output_env)
        content = command_files["OUTPUT"].read_text(encoding="utf-8")
        assert content == f"x<<{fixed_delimiter}\nmulti\nline\n{fixed_delimiter}\n"

    def test_appends_without_truncating(self, output_env, command_files):
        command_files["OUTPUT"].write_text("existing\n", encoding="utf-8")
        issue_file_command("OUTPUT", "a", "1", output_env)
        issue_file_command("OUTPUT", "b", "2", output_env)
        lines = command_files["OUTPUT"].read_text(encoding="utf-8").splitlines()
        assert lines[0] == "existing"
        assert lines[1].startswith("a<<ghadelimiter_")
        assert lines[2] == "1"
        assert lines[4].startswith("b<<ghadelimiter_")
        assert len(lines) == 7

    def test_fresh_delimiter_per_record(self, output_env, command_files):
        issue_file_command("OUTPUT", "a", "1", output_env)
        issue_file_command("OUTPUT", "b", "2", output_env)
        lines = command_files["OUTPUT"].read_text(encoding="utf-8").splitlines()
        assert lines[0].split("<<")[1] != lines[3].split("<<")[1]

    def test_collision_writes_nothing(self, output_env, command_files, fixed_delimiter):
        with pytest.raises(DelimiterCollisionError):
            issue_file_command("OUTPUT", "x", fixed_delimiter, output_env)
        assert command_files["OUTPUT"].read_text(encoding="utf-8") == ""

    def test_unset_env_var(self):
        with pytest.raises(CommandConfigurationError):
            issue_file_command("ENV", "x", "y", MappingEnvironment())
