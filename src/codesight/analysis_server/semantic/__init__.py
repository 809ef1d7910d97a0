"""Semantic Service interface and the index-backed workspace snapshot."""

from .index_loader import build_snapshot, load_workspace_index
from .service import SemanticService
from .snapshot import Span, SymbolTables, WorkspaceSnapshot
from .workspace import WorkspaceHost, get_workspace_host, reset_workspace_host, set_workspace_host

__all__ = [
    "SemanticService",
    "Span",
    "SymbolTables",
    "WorkspaceSnapshot",
    "WorkspaceHost",
    "build_snapshot",
    "get_workspace_host",
    "load_workspace_index",
    "reset_workspace_host",
    "set_workspace_host",
]
