"""Canonical string form for values sent to the runner.

Every outbound workflow command, stdout or file based, carries its value
through ``to_command_value``.
"""

from __future__ import annotations

import json
from typing import Any


def to_command_value(value: Any) -> str:
    """Convert *value* into the string sent on the wire.

    - ``None`` becomes the empty string.
    - Strings pass through unchanged (no quoting).
    - Anything else is serialized as compact JSON, matching the runner's
      own ``JSON.stringify`` output.

    Serialization errors (e.g. cyclic structures) propagate to the caller.

    Examples:
        >>> to_command_value(None)
        ''
        >>> to_command_value("a b")
        'a b'
        >>> to_command_value({"a": [1, True]})
        '{"a":[1,true]}'
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
