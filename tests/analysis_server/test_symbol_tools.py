"""
Tests for the symbol lookup tools: load_workspace, describe_symbol,
find_references, goto_definition and get_type_info.

Tools are exercised through run_tool so the structured success/error
envelopes are checked exactly as MCP clients receive them.
"""

import pytest

from codesight.analysis_server.errors import AnalysisTimeoutError
from codesight.analysis_server.semantic.workspace import WorkspaceHost, set_workspace_host
from codesight.analysis_server.tools._common import run_tool
from codesight.analysis_server.tools.describe_symbol import describe_symbol_impl
from codesight.analysis_server.tools.find_references import find_references_impl
from codesight.analysis_server.tools.get_type_info import get_type_info_impl
from codesight.analysis_server.tools.goto_definition import goto_definition_impl
from codesight.analysis_server.tools.load_workspace import load_workspace_impl
from codesight.analysis_server.tools.symbol_resolver import SYMBOL_HINT


class TestLoadWorkspace:
    """Test loading a workspace through the tool."""

    def test_load_success(self, sample_index_path):
        host = WorkspaceHost()

        result = run_tool("load_workspace", load_workspace_impl, path=str(sample_index_path), host=host)

        assert result["success"] is True
        assert result["workspace"] == "SampleApp"
        assert result["types"] == 18
        assert result["method_bodies"] == 7
        assert result["generation"] == 1
        assert host.snapshot is not None

    def test_load_uses_global_host(self, sample_index_path):
        result = run_tool("load_workspace", load_workspace_impl, path=str(sample_index_path))

        assert result["success"] is True
        follow_up = run_tool("describe_symbol", describe_symbol_impl, fully_qualified_name="Sample.Foo")
        assert follow_up["symbol"]["display"] == "Sample.Foo"

    @pytest.mark.parametrize("path", ["", "   ", "/does/not/exist.yaml"])
    def test_invalid_path(self, path):
        result = run_tool("load_workspace", load_workspace_impl, path=path, host=WorkspaceHost())

        assert result["success"] is False
        assert result["error"]["code"] == "INVALID_INPUT"

    @pytest.mark.parametrize(
        "member",
        [
            "{name: M, parameters: [{type: int, ref_kind: bogus}]}",
            "{name: M, line: abc}",
        ],
    )
    def test_malformed_values_are_invalid_input(self, tmp_path, member):
        path = tmp_path / "index.yaml"
        path.write_text(f"types:\n  - name: A.B\n    file: B.cs\n    members:\n      - {member}\n")

        result = run_tool("load_workspace", load_workspace_impl, path=str(path), host=WorkspaceHost())

        assert result["error"]["code"] == "INVALID_INPUT"
        assert "details" not in result["error"]


class TestToolErrors:
    """Test error envelopes shared by every tool."""

    def test_no_workspace_loaded(self):
        result = run_tool("describe_symbol", describe_symbol_impl, fully_qualified_name="Sample.Foo")

        assert result == {
            "success": False,
            "error": {
                "code": "BACKEND_UNAVAILABLE",
                "message": result["error"]["message"],
            },
        }
        assert "load_workspace" in result["error"]["message"]

    def test_name_and_position_together(self, host):
        result = run_tool(
            "describe_symbol",
            describe_symbol_impl,
            fully_qualified_name="Sample.Foo",
            file="src/Foo.cs",
            line=1,
            column=1,
            host=host,
        )

        assert result["error"]["code"] == "INVALID_INPUT"
        assert "not both" in result["error"]["message"]

    def test_missing_target(self, host):
        result = run_tool("describe_symbol", describe_symbol_impl, file="src/Foo.cs", line=1, host=host)

        assert result["error"]["code"] == "INVALID_INPUT"

    def test_zero_based_position_rejected(self, host):
        result = run_tool("describe_symbol", describe_symbol_impl, file="src/Foo.cs", line=0, column=1, host=host)

        assert result["error"]["code"] == "INVALID_INPUT"
        assert "1-based" in result["error"]["message"]

    def test_not_found(self, host):
        result = run_tool("describe_symbol", describe_symbol_impl, fully_qualified_name="Sample.Nope", host=host)

        assert result["error"]["code"] == "NOT_FOUND"

    def test_ambiguous_lists_candidates(self, host):
        result = run_tool(
            "describe_symbol", describe_symbol_impl, fully_qualified_name="Sample.Foo.Overloaded", host=host
        )

        error = result["error"]
        assert error["code"] == "AMBIGUOUS"
        assert error["hint"] == SYMBOL_HINT
        assert [c["display"] for c in error["candidates"]] == [
            "Sample.Foo.Overloaded(int)",
            "Sample.Foo.Overloaded(string)",
        ]
        assert "file" not in error

    def test_timeout_keeps_details(self):
        def impl():
            raise AnalysisTimeoutError("Operation canceled (timeout after 5 ms).", timeout_ms=5)

        result = run_tool("slow_tool", impl)

        assert result["error"] == {
            "code": "TIMEOUT",
            "message": "Operation canceled (timeout after 5 ms).",
            "details": {"timeout_ms": 5},
        }

    def test_unexpected_exception_is_internal(self):
        def impl():
            raise RuntimeError("boom")

        result = run_tool("broken_tool", impl)

        assert result["success"] is False
        assert result["error"]["code"] == "INTERNAL"
        assert result["error"]["details"]["exception"] == "builtins.RuntimeError"
        assert "boom" in result["error"]["details"]["stack"]


class TestDescribeSymbol:
    """Test describe_symbol payloads."""

    def test_type(self, host, source_file):
        result = run_tool(
            "describe_symbol", describe_symbol_impl, fully_qualified_name="Sample.Shapes.Circle", host=host
        )

        assert result["success"] is True
        assert result["symbol"]["kind"] == "NamedType"
        assert result["symbol"]["type_kind"] == "Class"
        assert result["symbol"]["file"] == source_file("src/Shapes.cs")
        assert result["base_type"]["display"] == "Sample.Shapes.Shape"
        assert [i["display"] for i in result["interfaces"]] == ["Sample.Shapes.IDrawable"]
        assert result["property_accessors"] is None

    def test_property(self, host):
        result = run_tool("describe_symbol", describe_symbol_impl, fully_qualified_name="Sample.Foo.Name", host=host)

        assert result["symbol"]["kind"] == "Property"
        assert result["symbol"]["member_type"] == "string"
        assert [a["display"] for a in result["property_accessors"]] == ["Sample.Foo.Name.get", "Sample.Foo.Name.set"]

    def test_method_by_position(self, host):
        result = run_tool("describe_symbol", describe_symbol_impl, file="src/Foo.cs", line=19, column=14, host=host)

        symbol = result["symbol"]
        assert symbol["display"] == "Sample.Foo.Callee(int)"
        assert symbol["method_kind"] == "Ordinary"
        assert symbol["containing_type"] == "Sample.Foo"
        assert symbol["parameters"] == [{"name": "value", "type": "int", "ref_kind": "none"}]

    def test_metadata_symbol_has_no_location(self, host):
        result = run_tool("describe_symbol", describe_symbol_impl, fully_qualified_name="System.Console", host=host)

        assert result["symbol"]["file"] is None
        assert result["symbol"]["line"] is None


class TestFindReferences:
    """Test find_references payloads and pagination."""

    def test_references_with_context(self, host, source_file):
        result = run_tool(
            "find_references", find_references_impl, fully_qualified_name="Sample.Foo.DoWork", host=host
        )

        assert result["success"] is True
        assert result["references"] == [
            {"file": source_file("src/Caller.cs"), "line": 7, "column": 23, "text": "new Foo().DoWork();"}
        ]
        assert result["total"] == 1
        assert result["has_more"] is False

    def test_pagination_with_cursor(self, host):
        first = run_tool(
            "find_references",
            find_references_impl,
            fully_qualified_name="Sample.Bar.Static",
            page_size=1,
            host=host,
        )

        assert first["total"] == 2
        assert first["has_more"] is True
        assert first["references"][0]["line"] == 21

        second = run_tool(
            "find_references",
            find_references_impl,
            fully_qualified_name="Sample.Bar.Static",
            page_size=1,
            cursor=first["next_cursor"],
            host=host,
        )

        assert second["page"] == 2
        assert second["has_more"] is False
        assert second["next_cursor"] is None
        assert second["references"][0]["line"] == 4

    def test_field_references_by_position(self, host):
        result = run_tool("find_references", find_references_impl, file="src/Foo.cs", line=16, column=14, host=host)

        assert result["symbol"]["display"] == "Sample.Foo.count"
        assert [(r["line"], r["column"]) for r in result["references"]] == [(16, 13), (17, 13), (31, 22)]

    def test_type_references(self, host):
        result = run_tool("find_references", find_references_impl, fully_qualified_name="Sample.Bar", host=host)

        assert [(r["line"], r["column"]) for r in result["references"]] == [(20, 17)]


class TestGotoDefinition:
    """Test goto_definition payloads."""

    def test_source_symbol(self, host):
        result = run_tool("goto_definition", goto_definition_impl, file="src/Foo.cs", line=19, column=13, host=host)

        assert result["definition"]["display"] == "Sample.Foo.Callee(int)"
        assert result["definition"]["line"] == 10
        assert result["is_source_definition"] is True
        assert result["is_from_metadata"] is False

    def test_metadata_symbol_with_source_definition(self, host):
        result = run_tool(
            "goto_definition", goto_definition_impl, fully_qualified_name="SampleLib.Helper", host=host
        )

        assert result["symbol"]["display"] == "SampleLib.Helper"
        assert result["definition"]["display"] == "Sample.Helper"
        assert result["is_source_definition"] is True

    def test_metadata_only_symbol(self, host):
        result = run_tool(
            "goto_definition",
            goto_definition_impl,
            fully_qualified_name="System.Console.WriteLine(string)",
            host=host,
        )

        assert result["definition"]["display"] == "System.Console.WriteLine(string)"
        assert result["is_source_definition"] is False
        assert result["is_from_metadata"] is True


class TestGetTypeInfo:
    """Test get_type_info payloads."""

    def test_members_in_declaration_order(self, host):
        result = run_tool("get_type_info", get_type_info_impl, fully_qualified_name="Sample.Bar", host=host)

        assert result["type"]["display"] == "Sample.Bar"
        assert [(m["name"], m["kind"], m["method_kind"]) for m in result["members"]] == [
            (".ctor", "Method", "Constructor"),
            ("Static", "Method", "Ordinary"),
            ("Compute", "Method", "Ordinary"),
        ]
        compute = result["members"][2]
        assert compute["is_static"] is True
        assert compute["type"] == "int"
        assert compute["parameters"] == [{"name": "x", "type": "int", "ref_kind": "none"}]

    def test_member_pagination(self, host):
        result = run_tool(
            "get_type_info", get_type_info_impl, fully_qualified_name="Sample.Foo", page=3, page_size=5, host=host
        )

        assert result["total"] == 12
        assert result["page"] == 3
        assert len(result["members"]) == 2
        assert result["has_more"] is False

    def test_field_metadata(self, host):
        result = run_tool("get_type_info", get_type_info_impl, fully_qualified_name="Sample.Foo", host=host)

        count = result["members"][0]
        assert count["name"] == "count"
        assert count["kind"] == "Field"
        assert count["accessibility"] == "Private"
        assert count["parameters"] is None

    def test_member_target_resolves_to_type(self, host):
        result = run_tool("get_type_info", get_type_info_impl, file="src/Foo.cs", line=15, column=9, host=host)

        assert result["type"]["display"] == "Sample.Foo"


@pytest.fixture
def global_host(host):
    set_workspace_host(host)
    return host


class TestGlobalHost:
    def test_tools_default_to_global_host(self, global_host):
        result = run_tool("get_type_info", get_type_info_impl, fully_qualified_name="Sample.Bar")

        assert result["success"] is True
