"""Environment access for the workflow-command runtime.

Every read and write of process environment variables goes through an
``EnvironmentAccess`` object, so tests can hand the runtime an isolated
mapping instead of mutating ``os.environ``.

Two implementations:
    - ``ProcessEnvironment`` reads and writes the live ``os.environ``.
    - ``MappingEnvironment`` wraps a private dict (copied on construction).
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

from envaction.runtime.errors import ActionValidationError


class EnvironmentAccess(ABC):
    """Abstract key/value view over a process environment."""

    @abstractmethod
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value for *key*, or *default* if not set."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Set *key* to *value* (creates or overwrites)."""
        ...

    @abstractmethod
    def __contains__(self, key: object) -> bool:
        """Exact, case-sensitive membership test."""
        ...


class ProcessEnvironment(EnvironmentAccess):
    """The real environment of the current process."""

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return os.environ.get(key, default)

    def set(self, key: str, value: str) -> None:
        """Set *key* in os.environ.

        Raises:
            ActionValidationError: If the OS rejects the name or value
                (empty name, "=" in the name, embedded NUL).
        """
        try:
            os.environ[key] = value
        except (ValueError, OSError) as exc:
            raise ActionValidationError(
                f'environment variable "{key}" cannot be set: {exc}'
            ) from exc

    def __contains__(self, key: object) -> bool:
        return key in os.environ


class MappingEnvironment(EnvironmentAccess):
    """An isolated environment backed by a plain dict.

    Each instance is an independent copy; modifying one does not affect
    the mapping it was created from.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._vars: Dict[str, str] = dict(initial) if initial else {}

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._vars.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._vars[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._vars
