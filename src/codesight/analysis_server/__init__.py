"""Codesight analysis server: semantic code-intelligence tools exposed over MCP."""
