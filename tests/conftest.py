"""Shared fixtures for the analysis server tests."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from codesight.analysis_server.config import reset_config
from codesight.analysis_server.semantic.index_loader import load_workspace_index
from codesight.analysis_server.semantic.workspace import WorkspaceHost, reset_workspace_host

FIXTURES_DIR = Path(__file__).parent / "analysis_server" / "fixtures"
SAMPLE_INDEX = FIXTURES_DIR / "sample_workspace.yaml"
EXAMPLE_INDEX = Path(__file__).parent.parent / "examples" / "sample_workspace.yaml"


@pytest.fixture(autouse=True)
def clean_globals(monkeypatch):
    """Each test starts with default configuration and no global workspace."""
    for name in ("CODESIGHT_WORKSPACE", "CODESIGHT_DEFAULT_PAGE_SIZE", "CODESIGHT_DEFAULT_TIMEOUT_MS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    reset_workspace_host()
    yield
    reset_config()
    reset_workspace_host()


@pytest.fixture
def sample_index_path() -> Path:
    return SAMPLE_INDEX


@pytest.fixture
def example_index_path() -> Path:
    return EXAMPLE_INDEX


@pytest.fixture
def snapshot():
    """Snapshot of the sample solution."""
    return load_workspace_index(SAMPLE_INDEX)


@pytest.fixture
def host(snapshot):
    """A workspace host serving the sample snapshot."""
    return WorkspaceHost(snapshot)


@pytest.fixture
def source_file():
    """Absolute path of a fixture source file, as the snapshot stores it."""

    def _source_file(relative: str) -> str:
        return str((FIXTURES_DIR / relative).resolve())

    return _source_file
