# envaction/runtime package
# Client side of the runner's workflow-command protocol.
#
# Core components:
#   - command_value: canonical string form of outbound values
#   - commands: legacy ``::name props::message`` stdout commands
#   - file_commands: heredoc-framed records appended to runner files
#   - core: ActionsCore facade (inputs, outputs, exports, state, annotations)
#   - env_keys: environment variable key normalization
#   - exporter: conflict-aware batch export
#
# Usage:
#     from envaction.runtime import get_core, export_batch, ExportOptions
#     core = get_core()
#     export_batch(core, {"apiUrl": "https://example.test"}, ExportOptions(upcase=True))

from .command_value import to_command_value
from .commands import Command, escape_data, escape_property, issue, issue_command
from .core import ActionsCore, AnnotationProperties, CommandChannels, get_core
from .env_keys import normalize_env_key
from .environment import EnvironmentAccess, MappingEnvironment, ProcessEnvironment
from .errors import (
    ActionError,
    ActionValidationError,
    BooleanInputError,
    CommandConfigurationError,
    DelimiterCollisionError,
    EnvConflictError,
    InputError,
    MissingCommandFileError,
    RequiredInputError,
)
from .exporter import ExportReport, export_batch
from .file_commands import issue_file_command, prepare_key_value_message
from .models import ConflictPolicy, ExportOptions

__all__ = [
    # Codec and encoders
    "to_command_value",
    "Command",
    "escape_data",
    "escape_property",
    "issue",
    "issue_command",
    "issue_file_command",
    "prepare_key_value_message",
    # Facade
    "ActionsCore",
    "AnnotationProperties",
    "CommandChannels",
    "get_core",
    # Environment
    "EnvironmentAccess",
    "MappingEnvironment",
    "ProcessEnvironment",
    # Export
    "normalize_env_key",
    "export_batch",
    "ExportReport",
    "ExportOptions",
    "ConflictPolicy",
    # Errors
    "ActionError",
    "ActionValidationError",
    "BooleanInputError",
    "CommandConfigurationError",
    "DelimiterCollisionError",
    "EnvConflictError",
    "InputError",
    "MissingCommandFileError",
    "RequiredInputError",
]
