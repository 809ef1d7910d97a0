"""
Holder of the current workspace snapshot.

Requests call ``require_snapshot()`` once at start and keep using that object.
``load()`` builds a complete new snapshot before swapping it in, so a request
that is already running never sees a half-loaded workspace.
"""

import logging
import threading

from ..errors import BackendUnavailableError
from .index_loader import load_workspace_index
from .snapshot import WorkspaceSnapshot

logger = logging.getLogger(__name__)


class WorkspaceHost:
    """Owns the reference to the active ``WorkspaceSnapshot``."""

    def __init__(self, snapshot: WorkspaceSnapshot | None = None):
        self._lock = threading.Lock()
        self._snapshot = snapshot
        self._generation = 0 if snapshot is None else 1

    @property
    def snapshot(self) -> WorkspaceSnapshot | None:
        with self._lock:
            return self._snapshot

    @property
    def generation(self) -> int:
        """Number of snapshots swapped in so far."""
        with self._lock:
            return self._generation

    def require_snapshot(self) -> WorkspaceSnapshot:
        snapshot = self.snapshot
        if snapshot is None:
            raise BackendUnavailableError(
                "No workspace is loaded. Call load_workspace with a semantic index file "
                "or set CODESIGHT_WORKSPACE before starting the server."
            )
        return snapshot

    def swap(self, snapshot: WorkspaceSnapshot) -> WorkspaceSnapshot | None:
        """Replace the active snapshot, returning the previous one."""
        with self._lock:
            previous = self._snapshot
            self._snapshot = snapshot
            self._generation += 1
            generation = self._generation
        logger.info(f"Workspace '{snapshot.name}' is now active (generation {generation})")
        return previous

    def load(self, path: str) -> WorkspaceSnapshot:
        # Build outside the lock; readers keep the old snapshot meanwhile
        snapshot = load_workspace_index(path)
        self.swap(snapshot)
        return snapshot

    def clear(self) -> None:
        with self._lock:
            self._snapshot = None


# Global host instance used by the MCP tools
_host: WorkspaceHost | None = None
_host_lock = threading.Lock()


def get_workspace_host() -> WorkspaceHost:
    """Get the global workspace host, creating it on first use."""
    global _host
    with _host_lock:
        if _host is None:
            _host = WorkspaceHost()
        return _host


def set_workspace_host(host: WorkspaceHost) -> None:
    """Replace the global workspace host (used by tests)."""
    global _host
    with _host_lock:
        _host = host


def reset_workspace_host() -> None:
    """Drop the global workspace host."""
    global _host
    with _host_lock:
        _host = None
