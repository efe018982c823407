"""
Test fixtures for the envaction runtime tests.

Provides an isolated environment mapping, an in-memory stdout stream and
temporary runner command files so no test touches the real process state.
"""

import io
import sys
from pathlib import Path
from typing import Dict, Optional

import pytest

_REPO_ROOT = Path(__file__).resolve().parent.parent
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from envaction.config import runtime_config
from envaction.runtime.core import ActionsCore
from envaction.runtime.environment import MappingEnvironment


@pytest.fixture(autouse=True)
def _reset_caches():
    """Clear cached config and the process-wide core around every test."""
    runtime_config.reset_config()
    ActionsCore.reset()
    yield
    runtime_config.reset_config()
    ActionsCore.reset()


@pytest.fixture
def stream() -> io.StringIO:
    """Captures legacy command output."""
    return io.StringIO()


@pytest.fixture
def command_files(tmp_path) -> Dict[str, Path]:
    """Empty runner command files keyed by command kind."""
    files = {}
    for kind in ("OUTPUT", "ENV", "STATE"):
        path = tmp_path / f"{kind.lower()}_commands.txt"
        path.write_text("", encoding="utf-8")
        files[kind] = path
    return files


@pytest.fixture
def make_core(stream):
    """Build an ActionsCore over an isolated environment.

    Usage:
        core = make_core({"INPUT_NAME": "value"})
    """

    def _make(initial: Optional[Dict[str, str]] = None) -> ActionsCore:
        return ActionsCore(env=MappingEnvironment(initial), stream=stream)

    return _make


@pytest.fixture
def file_core(make_core, command_files):
    """An ActionsCore whose runner supports all file commands."""

    def _make(initial: Optional[Dict[str, str]] = None) -> ActionsCore:
        env = {f"GITHUB_{kind}": str(path) for kind, path in command_files.items()}
        env.update(initial or {})
        return make_core(env)

    return _make
