"""Exception types raised by the workflow-command runtime.

Library code raises these; the action entry point converts them into a
failure annotation via ``set_failed`` so the runner never sees a traceback.
"""

from __future__ import annotations

from typing import Optional


class ActionError(Exception):
    """Base exception for all workflow-command errors."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class CommandConfigurationError(ActionError):
    """Raised when the runner did not provide a file-command path."""

    def __init__(
        self,
        command_kind: str,
        env_var: str,
        message: Optional[str] = None,
    ):
        self.command_kind = command_kind
        self.env_var = env_var
        super().__init__(
            message
            or f"Unable to find environment variable for file command {command_kind}"
        )


class MissingCommandFileError(CommandConfigurationError):
    """Raised when the file-command path does not exist on disk."""

    def __init__(self, command_kind: str, env_var: str, path: str):
        self.path = path
        super().__init__(command_kind, env_var, f"Missing file at path: {path}")


# =============================================================================
# Validation Errors
# =============================================================================


class ActionValidationError(ActionError, ValueError):
    """Raised for malformed batch input or invalid option values."""

    pass


class DelimiterCollisionError(ActionValidationError):
    """Raised when a key or value contains the generated delimiter token."""

    def __init__(self, field: str, delimiter: str):
        self.field = field
        self.delimiter = delimiter
        super().__init__(
            f'Unexpected input: {field} should not contain the delimiter "{delimiter}"'
        )


# =============================================================================
# Input Errors
# =============================================================================


class InputError(ActionError, ValueError):
    """Raised when an action input cannot be read as requested."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)


class RequiredInputError(InputError):
    """Raised when a required input is absent or empty."""

    def __init__(self, name: str):
        super().__init__(name, f"Input required and not supplied: {name}")


class BooleanInputError(InputError):
    """Raised when a boolean input is not one of the YAML 1.2 core literals."""

    def __init__(self, name: str):
        super().__init__(
            name,
            f'Input does not meet YAML 1.2 "Core Schema" specification: {name}\n'
            "Support boolean input list: `true | True | TRUE | false | False | FALSE`",
        )


# =============================================================================
# Conflict Errors
# =============================================================================


class EnvConflictError(ActionError):
    """Raised when the ``error`` conflict policy meets an existing variable."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Environment variable "{name}" already exists')
