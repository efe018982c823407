"""Command protocol facade.

``ActionsCore`` is what action code talks to: it reads inputs and state the
runner injected as environment variables, and sends outputs, annotations,
environment exports and saved state back to the runner.

For outputs, exports and state, newer runners provide a command file
(``GITHUB_OUTPUT``, ``GITHUB_ENV``, ``GITHUB_STATE``). Which of these are
available is detected once, when the core is constructed; operations then
use the file-command framer when the matching file exists and fall back to
legacy stdout commands otherwise.

Usage:
    from envaction.runtime.core import get_core

    core = get_core()
    names = core.get_multiline_input("names", required=True)
    core.set_output("count", len(names))
    with core.group("Exporting"):
        core.export_variable("GREETING", "hello")
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, TextIO, Union

from envaction.config.runtime_config import get_file_command_env_var
from envaction.runtime.command_value import to_command_value
from envaction.runtime.commands import issue, issue_command
from envaction.runtime.environment import EnvironmentAccess, ProcessEnvironment
from envaction.runtime.errors import BooleanInputError, RequiredInputError
from envaction.runtime.file_commands import issue_file_command

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")

# Process exit code used by set_failed
EXIT_FAILURE = 1


@dataclass(frozen=True)
class CommandChannels:
    """Which file-command kinds the runner supports for this process.

    A kind without a file falls back to its legacy stdout command.
    """

    output: bool = False
    env: bool = False
    state: bool = False

    @classmethod
    def detect(cls, env: EnvironmentAccess) -> "CommandChannels":
        """Snapshot channel availability from the file-command env vars."""
        return cls(
            output=bool(env.get(get_file_command_env_var("OUTPUT"))),
            env=bool(env.get(get_file_command_env_var("ENV"))),
            state=bool(env.get(get_file_command_env_var("STATE"))),
        )


@dataclass
class AnnotationProperties:
    """Optional location details attached to error/warning/notice annotations."""

    title: Optional[str] = None
    file: Optional[str] = None
    start_line: Optional[int] = None
    end_line: Optional[int] = None
    start_column: Optional[int] = None
    end_column: Optional[int] = None

    def to_command_properties(self) -> Dict[str, Any]:
        """Map to the runner's property names, dropping unset fields."""
        props = {
            "title": self.title,
            "file": self.file,
            "line": self.start_line,
            "endLine": self.end_line,
            "col": self.start_column,
            "endColumn": self.end_column,
        }
        return {key: value for key, value in props.items() if value is not None}


Properties = Union[AnnotationProperties, Mapping[str, Any], None]


def _to_properties(properties: Properties) -> Dict[str, Any]:
    if properties is None:
        return {}
    if isinstance(properties, AnnotationProperties):
        return properties.to_command_properties()
    return dict(properties)


def _input_env_name(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


class ActionsCore:
    """Runner-facing operations for a single action process.

    Args:
        env: Environment to read inputs from and export into.
            Defaults to the live process environment.
        stream: Where legacy commands are written. Defaults to the
            current ``sys.stdout`` at write time.
    """

    _instance: Optional["ActionsCore"] = None

    def __init__(
        self,
        env: Optional[EnvironmentAccess] = None,
        stream: Optional[TextIO] = None,
    ):
        self.env = env if env is not None else ProcessEnvironment()
        self._stream = stream
        self.channels = CommandChannels.detect(self.env)
        self.exit_code = 0
        logger.debug("Resolved command channels: %s", self.channels)

    @classmethod
    def get_instance(cls) -> "ActionsCore":
        """Get the process-wide instance bound to the real environment."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the process-wide instance (for testing)."""
        cls._instance = None

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    # =========================================================================
    # Inputs
    # =========================================================================

    def get_input(
        self,
        name: str,
        required: bool = False,
        trim_whitespace: bool = True,
    ) -> str:
        """Read the value of input *name* from ``INPUT_<NAME>``.

        Raises:
            RequiredInputError: If *required* and the value is empty after
                whitespace handling.
        """
        value = self.env.get(_input_env_name(name)) or ""
        if trim_whitespace:
            value = value.strip()
        if required and not value:
            raise RequiredInputError(name)
        return value

    def get_multiline_input(
        self,
        name: str,
        required: bool = False,
        trim_whitespace: bool = True,
    ) -> List[str]:
        """Read input *name* as a list of non-empty lines."""
        lines = [
            line
            for line in self.get_input(name, required, trim_whitespace).split("\n")
            if line != ""
        ]
        if not trim_whitespace:
            return lines
        return [line.strip() for line in lines]

    def get_boolean_input(
        self,
        name: str,
        required: bool = False,
        trim_whitespace: bool = True,
    ) -> bool:
        """Read input *name* as a YAML 1.2 core-schema boolean.

        Raises:
            BooleanInputError: If the value is not one of
                ``true|True|TRUE|false|False|FALSE``.
        """
        value = self.get_input(name, required, trim_whitespace)
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise BooleanInputError(name)

    # =========================================================================
    # Outputs, environment and state
    # =========================================================================

    def set_output(self, name: str, value: Any) -> None:
        """Set step output *name* to *value*."""
        if self.channels.output:
            issue_file_command("OUTPUT", name, value, self.env)
            return
        # Legacy consumers expect a blank line before set-output.
        self.stream.write("\n")
        issue_command("set-output", {"name": name}, to_command_value(value), stream=self.stream)

    def export_variable(self, name: str, value: Any) -> None:
        """Set *name* for this process and for all later steps of the job."""
        converted = to_command_value(value)
        self.env.set(name, converted)
        if self.channels.env:
            issue_file_command("ENV", name, value, self.env)
            return
        issue_command("set-env", {"name": name}, converted, stream=self.stream)

    def save_state(self, name: str, value: Any) -> None:
        """Persist *value* for the post step of this action."""
        if self.channels.state:
            issue_file_command("STATE", name, value, self.env)
            return
        issue_command("save-state", {"name": name}, to_command_value(value), stream=self.stream)

    def get_state(self, name: str) -> str:
        """Read state saved by an earlier ``save_state`` call."""
        return self.env.get(f"STATE_{name}") or ""

    def set_secret(self, secret: str) -> None:
        """Ask the runner to mask *secret* in all later log output."""
        issue_command("add-mask", {}, secret, stream=self.stream)

    # =========================================================================
    # Results and logging commands
    # =========================================================================

    def set_failed(self, message: Union[str, BaseException]) -> None:
        """Mark the action as failed and emit an error annotation."""
        self.exit_code = EXIT_FAILURE
        self.error(message)

    def is_debug(self) -> bool:
        """True when the runner has step debug logging enabled."""
        return self.env.get("RUNNER_DEBUG") == "1"

    def debug(self, message: str) -> None:
        issue_command("debug", {}, message, stream=self.stream)

    def error(self, message: Union[str, BaseException], properties: Properties = None) -> None:
        issue_command("error", _to_properties(properties), str(message), stream=self.stream)

    def warning(self, message: Union[str, BaseException], properties: Properties = None) -> None:
        issue_command("warning", _to_properties(properties), str(message), stream=self.stream)

    def notice(self, message: Union[str, BaseException], properties: Properties = None) -> None:
        issue_command("notice", _to_properties(properties), str(message), stream=self.stream)

    def info(self, message: str) -> None:
        """Write *message* to the log without any command framing."""
        self.stream.write(message + "\n")

    def set_command_echo(self, enabled: bool) -> None:
        issue("echo", "on" if enabled else "off", stream=self.stream)

    def start_group(self, name: str) -> None:
        """Begin a collapsible log group."""
        issue("group", name, stream=self.stream)

    def end_group(self) -> None:
        issue("endgroup", stream=self.stream)

    @contextmanager
    def group(self, name: str) -> Iterator[None]:
        """Wrap a block in a log group; the group is closed even on error."""
        self.start_group(name)
        try:
            yield
        finally:
            self.end_group()


def get_core() -> ActionsCore:
    """Get the process-wide ``ActionsCore``."""
    return ActionsCore.get_instance()
