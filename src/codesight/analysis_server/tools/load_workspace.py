"""Load a semantic index file and make it the active workspace."""

import logging

from ..errors import InvalidInputError
from ..models.response_models import LoadWorkspaceResponse
from ..semantic.workspace import WorkspaceHost, get_workspace_host

logger = logging.getLogger(__name__)


def load_workspace_impl(path: str, host: WorkspaceHost | None = None) -> LoadWorkspaceResponse:
    """
    Build a snapshot from ``path`` and swap it in.

    Requests already running keep the snapshot they started with.

    Args:
        path: Index file (.yaml, .yml or .json)
        host: Workspace host to update (defaults to the global one)

    Returns:
        LoadWorkspaceResponse with the size of the loaded workspace
    """
    if not path or not path.strip():
        raise InvalidInputError("path cannot be empty")

    host = host or get_workspace_host()
    snapshot = host.load(path.strip())
    stats = snapshot.stats()

    logger.info(f"Loaded workspace '{snapshot.name}' from {snapshot.source_path}")
    return LoadWorkspaceResponse(
        workspace=snapshot.name,
        index_path=snapshot.source_path or path,
        root=snapshot.root,
        types=stats["types"],
        symbols=stats["symbols"],
        method_bodies=stats["method_bodies"],
        generation=host.generation,
    )
