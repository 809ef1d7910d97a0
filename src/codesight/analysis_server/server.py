"""Analysis MCP Server - Semantic code-intelligence tools over a compiled workspace."""

import logging
import sys

from fastmcp import FastMCP

from .config import AnalysisServerConfig, get_config
from .errors import AnalysisToolError
from .semantic.workspace import WorkspaceHost, get_workspace_host
from .tools import register_analysis_tools

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Initialize the Analysis MCP server
mcp = FastMCP(
    name="Codesight Analysis Server",
    version=__version__,
    instructions="""
        Analysis server answers semantic questions about a compiled workspace:

        Core Tools:
        - load_workspace: Load a semantic index and make it the active workspace
        - describe_symbol: Display string, kind and location of a symbol
        - find_references: Every reference to a symbol across the workspace
        - get_method_dependencies: Calls, reads and writes of a method (optionally transitive)
        - get_inheritance_tree: Ancestors, interfaces, descendants and overrides of a type
        - get_all_implementations: Implementations of an interface or interface member
        - goto_definition: Source definition of a symbol, or its metadata origin
        - get_type_info: Members of a type with kinds, types and parameters

        Targets:
        - Pass fully_qualified_name ("Ns.Type.Member" or "Ns.Type.Member(int, string)")
        - Or pass file + line + column (1-based)

        All tools return {"success": true, ...} or {"success": false, "error": {"code": ...}}.
        List results are paginated: follow next_cursor while has_more is true.

        Best Practices:
        - Add a parameter list when an AMBIGUOUS error lists overloads
        - Use depth > 1 on get_method_dependencies only for focused investigations
    """,
)

# Register all analysis tools
register_analysis_tools(mcp)


def configure_logging(config: AnalysisServerConfig) -> None:
    """Send log records to stderr; stdout carries the MCP stdio transport."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(getattr(logging, config.log_level))


def autoload_workspace(config: AnalysisServerConfig, host: WorkspaceHost | None = None) -> bool:
    """Load the configured workspace index, if any. Returns True when one was loaded."""
    if not config.workspace_index_path:
        logger.info("No CODESIGHT_WORKSPACE configured; waiting for load_workspace")
        return False

    host = host or get_workspace_host()
    try:
        host.load(config.workspace_index_path)
    except AnalysisToolError as e:
        logger.error(f"Failed to load workspace {config.workspace_index_path}: {e.message}")
        return False
    return True


def main():
    """Entry point for the analysis server."""
    config = get_config()
    configure_logging(config)
    logger.info(f"Starting {config.server_name} on {config.transport}")

    autoload_workspace(config)

    try:
        mcp.run(transport=config.transport)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
        sys.exit(0)


if __name__ == "__main__":
    main()
