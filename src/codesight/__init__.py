"""codesight: code-intelligence MCP servers."""

__version__ = "0.1.0"
