"""File-command protocol: heredoc-framed records appended to runner files.

Newer runners hand each step a file path per command kind (``GITHUB_OUTPUT``,
``GITHUB_ENV``, ``GITHUB_STATE``). A record looks like::

    <key><<<delimiter>
    <value>
    <delimiter>

The delimiter is generated fresh for every record, so values may contain
newlines without any escaping. The only thing that can corrupt a record is
the key or value containing the delimiter itself, which is rejected.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Any

from envaction.config.runtime_config import (
    get_delimiter_prefix,
    get_file_command_env_var,
)
from envaction.runtime.command_value import to_command_value
from envaction.runtime.environment import EnvironmentAccess
from envaction.runtime.errors import (
    CommandConfigurationError,
    DelimiterCollisionError,
    MissingCommandFileError,
)

logger = logging.getLogger(__name__)


def generate_delimiter() -> str:
    """Return a fresh delimiter token, e.g. ``ghadelimiter_<uuid4>``."""
    return f"{get_delimiter_prefix()}{uuid.uuid4()}"


def prepare_key_value_message(key: str, value: Any) -> str:
    """Frame *key* and *value* as a heredoc record (without trailing newline).

    Raises:
        DelimiterCollisionError: If *key* or the canonical value contains
            the generated delimiter.
    """
    delimiter = generate_delimiter()
    converted = to_command_value(value)

    if delimiter in key:
        raise DelimiterCollisionError("name", delimiter)
    if delimiter in converted:
        raise DelimiterCollisionError("value", delimiter)

    return f"{key}<<{delimiter}\n{converted}\n{delimiter}"


def resolve_command_file(command_kind: str, env: EnvironmentAccess) -> Path:
    """Find the runner file for *command_kind*.

    Raises:
        CommandConfigurationError: If the env var naming the file is unset.
        MissingCommandFileError: If the named file does not exist.
    """
    env_var = get_file_command_env_var(command_kind)
    file_path = env.get(env_var) or ""
    if not file_path:
        raise CommandConfigurationError(command_kind, env_var)

    path = Path(file_path)
    if not path.exists():
        raise MissingCommandFileError(command_kind, env_var, file_path)
    return path


def issue_file_command(
    command_kind: str,
    key: str,
    value: Any,
    env: EnvironmentAccess,
) -> None:
    """Append one framed key/value record to the runner file for *command_kind*.

    The record is written with a single ``write`` call on a file opened in
    append mode.
    """
    path = resolve_command_file(command_kind, env)
    message = prepare_key_value_message(key, value)

    with open(path, "a", encoding="utf-8") as f:
        f.write(message + "\n")

    logger.debug("Appended %s file command for '%s' to %s", command_kind, key, path)
