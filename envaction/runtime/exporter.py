"""Conflict-aware batch export of environment variables.

Each key of a batch is normalized, checked against the current environment
and exported through ``ActionsCore.export_variable``. The batch is not
transactional: keys exported before a failure stay exported.

Conflict policies (applied per key):
- overwrite: warn, then export the new value
- preserve: warn, keep the existing value, continue with the next key
- error: stop the batch with ``EnvConflictError``
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from envaction.runtime.core import ActionsCore
from envaction.runtime.env_keys import normalize_env_key
from envaction.runtime.errors import ActionValidationError, EnvConflictError
from envaction.runtime.models import ConflictPolicy, ExportOptions

logger = logging.getLogger(__name__)


@dataclass
class ExportReport:
    """Names touched by one batch, in iteration order."""

    exported: List[str] = field(default_factory=list)
    overwritten: List[str] = field(default_factory=list)
    preserved: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "exported": list(self.exported),
            "overwritten": list(self.overwritten),
            "preserved": list(self.preserved),
        }


def export_batch(
    core: ActionsCore,
    entries: Mapping[str, Any],
    options: Optional[ExportOptions] = None,
) -> ExportReport:
    """Export every entry of *entries* under its normalized name.

    Args:
        core: Facade used for warnings and for the export itself.
        entries: Flat key -> string mapping.
        options: Prefix, case and conflict policy. Defaults to ExportOptions().

    Returns:
        An ExportReport describing what happened to each name.

    Raises:
        ActionValidationError: If a value is not a string, a key normalizes
            to an empty name, or the environment rejects the assignment.
        EnvConflictError: If the policy is ``error`` and a name already exists.
    """
    options = options or ExportOptions()
    report = ExportReport()

    for key, value in entries.items():
        if not isinstance(value, str):
            raise ActionValidationError(
                f'variable value for key "{key}" must be a string'
            )

        name = normalize_env_key(key, prefix=options.prefix, upcase=options.upcase)
        if not name:
            raise ActionValidationError(
                f'variable key "{key}" does not produce a valid environment variable name'
            )

        if name in core.env:
            if options.on_conflict == ConflictPolicy.ERROR:
                raise EnvConflictError(name)
            if options.on_conflict == ConflictPolicy.OVERWRITE:
                core.warning(
                    f'Environment variable "{name}" already exists, overwriting with new value'
                )
                report.overwritten.append(name)
            elif options.on_conflict == ConflictPolicy.PRESERVE:
                core.warning(
                    f'Environment variable "{name}" already exists, preserving existing value'
                )
                report.preserved.append(name)
                continue

        core.export_variable(name, value)
        report.exported.append(name)
        logger.debug("Exported '%s' as %s", key, name)

    logger.info(
        "Exported %d variable(s) (%d overwritten, %d preserved)",
        len(report.exported),
        len(report.overwritten),
        len(report.preserved),
    )
    return report
