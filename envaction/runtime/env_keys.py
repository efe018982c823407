"""Environment variable key normalization.

Turns arbitrary user-supplied keys into shell-safe variable names::

    >>> normalize_env_key("helloWorld.LolHAHAOkay!")
    'hello_world_lol_haha_okay'
    >>> normalize_env_key("foo", prefix="bar", upcase=True)
    'BAR_FOO'

Result invariants: only ``[A-Za-z0-9_]``, no doubled underscores, no
leading or trailing underscore. Only ASCII letters count as word-boundary
characters, so the result does not depend on the locale.
"""

from __future__ import annotations

import re
from typing import List, Optional

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")
_UNDERSCORE_RUNS = re.compile(r"_+")


def _is_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def _is_lower(char: str) -> bool:
    return "a" <= char <= "z"


def split_word_boundaries(key: str) -> str:
    """Insert ``_`` at camelCase and acronym boundaries.

    An underscore goes before an uppercase letter when:
    - it starts the string or follows a lowercase letter (``helloWorld``), or
    - it follows an uppercase letter and precedes a lowercase one, i.e. it is
      the first letter of a word after an acronym (``HTTPServer``).

    Examples:
        >>> split_word_boundaries("helloWorld")
        'hello_World'
        >>> split_word_boundaries("HTTPServer")
        '_HTTP_Server'
    """
    out: List[str] = []
    last = len(key) - 1
    for i, char in enumerate(key):
        if _is_upper(char):
            prev = key[i - 1] if i > 0 else ""
            nxt = key[i + 1] if i < last else ""
            if i == 0 or _is_lower(prev):
                out.append("_")
            elif _is_upper(prev) and _is_lower(nxt):
                out.append("_")
        out.append(char)
    return "".join(out)


def normalize_env_key(
    key: str,
    prefix: Optional[str] = None,
    upcase: bool = False,
) -> str:
    """Map *key* to a canonical environment variable name.

    Args:
        key: Arbitrary textual key.
        prefix: Optional prefix, joined to the key with ``_``.
        upcase: Uppercase the result; lowercase it otherwise.

    Returns:
        The normalized name. Deterministic for the same arguments.
    """
    name = f"{prefix}_{key}" if prefix else key
    name = split_word_boundaries(name)
    name = name.upper() if upcase else name.lower()
    name = _INVALID_CHARS.sub("_", name)
    name = _UNDERSCORE_RUNS.sub("_", name)
    if name.startswith("_"):
        name = name[1:]
    if name.endswith("_"):
        name = name[:-1]
    return name
