#!/usr/bin/env python3
"""
set_env_vars.py - Export a JSON object of variables into the job environment.

Action inputs (read from INPUT_* environment variables):
    variables    JSON object of key -> string value (required)
    prefix       Prefix joined to every key with "_"
    upcase       "true" to uppercase names (lowercase otherwise)
    on-conflict  overwrite | preserve | error

Every key is normalized into a shell-safe name before export. Invalid input
and conflicts under the "error" policy are reported as an error annotation
and a non-zero exit status, never as a traceback.

Usage:
    python -m envaction.tools.set_env_vars
    python -m envaction.tools.set_env_vars --log-level DEBUG
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from envaction.config.runtime_config import get_default_options, get_log_level
from envaction.runtime.core import ActionsCore, get_core
from envaction.runtime.errors import ActionError, ActionValidationError
from envaction.runtime.exporter import export_batch
from envaction.runtime.models import ExportOptions

logger = logging.getLogger(__name__)


def read_variables(core: ActionsCore) -> Dict[str, Any]:
    """Parse the ``variables`` input as a JSON object."""
    raw = core.get_input("variables")
    try:
        variables = json.loads(raw)
    except ValueError:
        variables = None
    if not isinstance(variables, dict):
        raise ActionValidationError("variables input must be a valid JSON object")
    return variables


def read_options(core: ActionsCore) -> ExportOptions:
    """Build ExportOptions from the action inputs, falling back to config defaults."""
    defaults = get_default_options()

    upcase_input = core.get_input("upcase")
    try:
        return ExportOptions(
            prefix=core.get_input("prefix") or defaults["prefix"],
            upcase=(upcase_input == "true") if upcase_input else defaults["upcase"],
            on_conflict=core.get_input("on-conflict") or defaults["on_conflict"],
        )
    except PydanticValidationError as exc:
        messages: List[str] = []
        for err in exc.errors():
            cause = (err.get("ctx") or {}).get("error")
            messages.append(str(cause) if cause is not None else err["msg"])
        raise ActionValidationError("; ".join(messages)) from exc


def run(core: ActionsCore) -> int:
    """Run the action against *core*; return the process exit code."""
    try:
        variables = read_variables(core)
        options = read_options(core)
        report = export_batch(core, variables, options)
    except ActionError as exc:
        logger.debug("Action failed: %s", exc)
        core.set_failed(exc)
        return core.exit_code

    logger.info("Export summary: %s", report.to_dict())
    return core.exit_code


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Export a JSON object of variables into the job environment",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Diagnostic log level (written to stderr); defaults to config",
    )
    args = parser.parse_args(argv)

    level = getattr(logging, args.log_level) if args.log_level else get_log_level()
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    return run(get_core())


if __name__ == "__main__":
    sys.exit(main())
