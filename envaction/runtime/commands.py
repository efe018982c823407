"""Legacy stdout workflow commands.

A command is one line on standard output::

    ::<name> <key>=<value>,<key>=<value>::<message>

The runner parses these lines out of the step log. Message bodies and
property values are percent-escaped so that a single command can never
span more than one line or break the property list.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, TextIO

from envaction.runtime.command_value import to_command_value

logger = logging.getLogger(__name__)

CMD_STRING = "::"

# Percent must come first so later substitutions are not re-escaped.
_DATA_ESCAPES = (("%", "%25"), ("\r", "%0D"), ("\n", "%0A"))
_PROPERTY_ESCAPES = _DATA_ESCAPES + ((":", "%3A"), (",", "%2C"))


def escape_data(value: Any) -> str:
    """Escape a message body."""
    text = to_command_value(value)
    for raw, escaped in _DATA_ESCAPES:
        text = text.replace(raw, escaped)
    return text


def escape_property(value: Any) -> str:
    """Escape a property value; also escapes ``:`` and ``,``."""
    text = to_command_value(value)
    for raw, escaped in _PROPERTY_ESCAPES:
        text = text.replace(raw, escaped)
    return text


@dataclass
class Command:
    """A single legacy workflow command.

    Attributes:
        name: Command identifier (e.g. "warning", "set-env").
        properties: Named properties; entries whose value is None are skipped.
        message: Body value, canonicalized through ``to_command_value``.
    """

    name: str
    properties: Dict[str, Any] = field(default_factory=dict)
    message: Any = ""

    def render(self) -> str:
        """Format the command line without its line terminator."""
        line = CMD_STRING + self.name
        props = [
            f"{key}={escape_property(value)}"
            for key, value in self.properties.items()
            if value is not None
        ]
        if props:
            line += " " + ",".join(props)
        return f"{line}{CMD_STRING}{escape_data(self.message)}"

    def __str__(self) -> str:
        return self.render()


def issue_command(
    name: str,
    properties: Optional[Mapping[str, Any]] = None,
    message: Any = "",
    stream: Optional[TextIO] = None,
) -> None:
    """Write one command line to *stream* (stdout by default)."""
    command = Command(name=name, properties=dict(properties or {}), message=message)
    out = stream if stream is not None else sys.stdout
    out.write(command.render() + "\n")
    logger.debug("Issued legacy command '%s'", name)


def issue(name: str, message: Any = "", stream: Optional[TextIO] = None) -> None:
    """Write a command that carries no properties."""
    issue_command(name, {}, message, stream=stream)
