"""Test analysis server tool registration and startup."""

import logging

import pytest
from fastmcp import FastMCP

from codesight.analysis_server.config import AnalysisServerConfig
from codesight.analysis_server.semantic.workspace import WorkspaceHost, set_workspace_host
from codesight.analysis_server.tools import register_analysis_tools

EXPECTED_TOOLS = [
    "load_workspace",
    "describe_symbol",
    "find_references",
    "get_method_dependencies",
    "get_inheritance_tree",
    "get_all_implementations",
    "goto_definition",
    "get_type_info",
]


class TestServerRegistration:
    """Test suite for analysis server tool registration."""

    @pytest.mark.asyncio
    async def test_analysis_server_registration(self):
        """Test that analysis server tools register correctly."""
        mcp = FastMCP(name="Test Analysis Server")
        register_analysis_tools(mcp)

        tools = await mcp.get_tools()
        tool_names = list(tools)

        assert len(tool_names) == 8, f"Expected 8 analysis tools, got {len(tool_names)}"
        for tool in EXPECTED_TOOLS:
            assert tool in tool_names, f"Analysis tool '{tool}' not registered"

    @pytest.mark.asyncio
    async def test_registered_tool_returns_envelope(self, host):
        """Test that a registered tool function answers from the active workspace."""
        set_workspace_host(host)
        mcp = FastMCP(name="Test Analysis Server")
        register_analysis_tools(mcp)

        tools = await mcp.get_tools()
        result = tools["describe_symbol"].fn(fully_qualified_name="Sample.Foo.DoWork")

        assert result["success"] is True
        assert result["symbol"]["display"] == "Sample.Foo.DoWork()"

    @pytest.mark.asyncio
    async def test_server_module(self):
        """Test that the server module exposes a configured FastMCP instance."""
        from codesight.analysis_server.server import mcp

        assert mcp.name == "Codesight Analysis Server"
        assert hasattr(mcp, "run")
        tools = await mcp.get_tools()
        assert sorted(tools) == sorted(EXPECTED_TOOLS)


class TestServerStartup:
    """Test workspace autoload and logging setup."""

    def test_autoload_without_configured_workspace(self):
        from codesight.analysis_server.server import autoload_workspace

        host = WorkspaceHost()

        assert autoload_workspace(AnalysisServerConfig(), host) is False
        assert host.snapshot is None

    def test_autoload_configured_workspace(self, sample_index_path):
        from codesight.analysis_server.server import autoload_workspace

        host = WorkspaceHost()
        config = AnalysisServerConfig(workspace_index_path=str(sample_index_path))

        assert autoload_workspace(config, host) is True
        assert host.require_snapshot().name == "SampleApp"

    def test_autoload_failure_is_logged(self, tmp_path, caplog):
        from codesight.analysis_server.server import autoload_workspace

        host = WorkspaceHost()
        config = AnalysisServerConfig(workspace_index_path=str(tmp_path / "missing.yaml"))

        with caplog.at_level(logging.ERROR):
            assert autoload_workspace(config, host) is False

        assert "Failed to load workspace" in caplog.text
        assert host.snapshot is None

    def test_configure_logging_applies_level(self):
        from codesight.analysis_server.server import configure_logging

        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging(AnalysisServerConfig(log_level="DEBUG"))
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)

    def test_main_runs_configured_transport(self, monkeypatch):
        from codesight.analysis_server import server

        calls = []
        monkeypatch.setenv("CODESIGHT_TRANSPORT", "sse")
        monkeypatch.setattr(server.mcp, "run", lambda **kwargs: calls.append(kwargs))

        root = logging.getLogger()
        previous = root.level
        try:
            server.main()
        finally:
            root.setLevel(previous)

        assert calls == [{"transport": "sse"}]
