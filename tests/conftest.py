"""Shared test fixtures."""
import io
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `valman.*` imports work
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from valman.core.editor import Editor      # noqa: E402
from valman.core.registry import Registry  # noqa: E402


@pytest.fixture
def registry():
    reg = Registry()
    reg.add("alpha", 1)
    reg.add("alice", 2)
    reg.add("beta", 3)
    return reg


@pytest.fixture
def editor(registry):
    """Editor on the sample registry, writing into a StringIO."""
    return Editor(registry, output=io.StringIO())
