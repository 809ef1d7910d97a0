"""Analysis server tools implementations.

Code-intelligence tools over the loaded workspace snapshot.
"""

from typing import Any

from ._common import run_tool
from .describe_symbol import describe_symbol_impl
from .find_references import find_references_impl
from .get_all_implementations import get_all_implementations_impl
from .get_inheritance_tree import get_inheritance_tree_impl
from .get_method_dependencies import get_method_dependencies_impl
from .get_type_info import get_type_info_impl
from .goto_definition import goto_definition_impl
from .load_workspace import load_workspace_impl


def register_analysis_tools(mcp):
    """Register code-intelligence tools with the MCP server."""

    @mcp.tool
    def load_workspace(path: str) -> dict[str, Any]:
        """
        Load a semantic index file and make it the active workspace.

        Use this tool when:
        - Starting to analyze a codebase
        - The index was regenerated after code changes

        Args:
            path: Index file exported by the compiler front-end (.yaml, .yml or .json)

        Example:
            load_workspace("/repo/.codesight/index.yaml")
            → {"success": true, "workspace": "SampleApp", "types": 42, ...}

        Note: Requests already in flight finish against the previous workspace
        """
        return run_tool("load_workspace", load_workspace_impl, path=path)

    @mcp.tool
    def describe_symbol(
        fully_qualified_name: str | None = None,
        file: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> dict[str, Any]:
        """
        Describe a type or member: display string, kind, location, containing type.

        Use this tool when:
        - Checking what a qualified name or cursor position refers to
        - Looking up the declaration site of a symbol

        Args:
            fully_qualified_name: e.g. "Sample.Services.OrderService.PlaceOrder"
            file: Source file (alternative to fully_qualified_name)
            line: 1-based line in file
            column: 1-based column in file

        Example:
            describe_symbol("Sample.Core.MathUtils")
            → {"success": true, "symbol": {"display": "Sample.Core.MathUtils", "kind": "NamedType", ...}}
        """
        return run_tool(
            "describe_symbol",
            describe_symbol_impl,
            fully_qualified_name=fully_qualified_name,
            file=file,
            line=line,
            column=column,
        )

    @mcp.tool
    def find_references(
        fully_qualified_name: str | None = None,
        file: str | None = None,
        line: int | None = None,
        column: int | None = None,
        page: int = 1,
        page_size: int | None = None,
        cursor: str | None = None,
        timeout_ms: int | None = None,
    ) -> dict[str, Any]:
        """
        Find all references to a symbol across the workspace.

        Use this tool when:
        - Tracking where a method, property or type is used
        - Estimating the impact of a change before refactoring

        Replaces bash commands: grep -rn "SymbolName"

        Args:
            fully_qualified_name: Symbol to search for (or use file/line/column)
            file: Source file of a position on the symbol
            line: 1-based line
            column: 1-based column
            page: Page number (default: 1)
            page_size: References per page (default: 200, max: 500)
            cursor: next_cursor from a previous response; overrides page
            timeout_ms: Time budget (default: 60000, range 1000-300000)

        Example:
            find_references("Sample.Core.MathUtils.Add(int, int)")
            → {"success": true, "references": [{"file": ..., "line": 12, "column": 9, "text": ...}], ...}
        """
        return run_tool(
            "find_references",
            find_references_impl,
            fully_qualified_name=fully_qualified_name,
            file=file,
            line=line,
            column=column,
            page=page,
            page_size=page_size,
            cursor=cursor,
            timeout_ms=timeout_ms,
        )

    @mcp.tool
    def get_method_dependencies(
        fully_qualified_name: str | None = None,
        file: str | None = None,
        line: int | None = None,
        column: int | None = None,
        depth: int | None = None,
        include_callers: bool = False,
        treat_properties_as_methods: bool = True,
        page: int = 1,
        page_size: int | None = None,
        cursor: str | None = None,
        timeout_ms: int | None = None,
    ) -> dict[str, Any]:
        """
        List what a method calls, reads and writes, optionally following calls.

        Use this tool when:
        - Understanding what a method touches before changing it
        - Finding the fields and properties a method mutates
        - Listing the callers of a method

        Args:
            fully_qualified_name: "Ns.Type.Method", "Ns.Type.Method(int, string)",
                "Ns.Type..ctor" or a type name (selects its only constructor)
            file: Source file of a position inside the method
            line: 1-based line
            column: 1-based column
            depth: 1 = direct dependencies, >1 = transitive (default: 1, max: 10)
            include_callers: Also list the direct callers of the method
            treat_properties_as_methods: Report property getters/setters as calls
            page: Page number over calls (default: 1)
            page_size: Calls per page (default: 200, max: 500)
            cursor: next_cursor from a previous response; overrides page
            timeout_ms: Time budget (default: 60000, range 1000-300000)

        Example:
            get_method_dependencies("Sample.Foo.DoWork")
            → {"success": true, "calls": [...], "reads": [...], "writes": [...], ...}

        Note: Ambiguous names return AMBIGUOUS with candidates and a hint
        """
        return run_tool(
            "get_method_dependencies",
            get_method_dependencies_impl,
            fully_qualified_name=fully_qualified_name,
            file=file,
            line=line,
            column=column,
            depth=depth,
            include_callers=include_callers,
            treat_properties_as_methods=treat_properties_as_methods,
            page=page,
            page_size=page_size,
            cursor=cursor,
            timeout_ms=timeout_ms,
        )

    @mcp.tool
    def get_inheritance_tree(
        fully_qualified_name: str | None = None,
        file: str | None = None,
        line: int | None = None,
        column: int | None = None,
        direction: str = "both",
        include_interfaces: bool = True,
        include_overrides: bool = False,
        max_depth: int | None = None,
        solution_only: bool = True,
        page: int = 1,
        page_size: int | None = None,
        cursor: str | None = None,
        timeout_ms: int | None = None,
    ) -> dict[str, Any]:
        """
        Show the inheritance hierarchy around a type.

        Use this tool when:
        - Finding base classes and implemented interfaces of a type
        - Finding every class derived from a base class
        - Checking which members are overridden further down

        Args:
            fully_qualified_name: Type name, or a member name (uses its type)
            file: Source file of a position inside the type
            line: 1-based line
            column: 1-based column
            direction: "both", "ancestors" or "descendants"
            include_interfaces: Include the transitive interface set
            include_overrides: Include overriding members of virtual/abstract members
            max_depth: Depth bound of the descendants tree (default: 10, max: 100)
            solution_only: Skip types declared outside the loaded sources
            page: Page number over the flat descendants list (default: 1)
            page_size: Descendants per page (default: 200, max: 500)
            cursor: next_cursor from a previous response; overrides page
            timeout_ms: Time budget (default: 60000, range 1000-300000)

        Example:
            get_inheritance_tree("Sample.Shapes.Shape", direction="descendants", max_depth=1)
            → {"success": true, "descendants_tree": {"symbol": ..., "children": [...]}, ...}
        """
        return run_tool(
            "get_inheritance_tree",
            get_inheritance_tree_impl,
            fully_qualified_name=fully_qualified_name,
            file=file,
            line=line,
            column=column,
            direction=direction,
            include_interfaces=include_interfaces,
            include_overrides=include_overrides,
            max_depth=max_depth,
            solution_only=solution_only,
            page=page,
            page_size=page_size,
            cursor=cursor,
            timeout_ms=timeout_ms,
        )

    @mcp.tool
    def get_all_implementations(
        fully_qualified_name: str | None = None,
        file: str | None = None,
        line: int | None = None,
        column: int | None = None,
        member: str | None = None,
        include_derived_interfaces: bool = True,
        solution_only: bool = True,
        page: int = 1,
        page_size: int | None = None,
        cursor: str | None = None,
        timeout_ms: int | None = None,
    ) -> dict[str, Any]:
        """
        Find all implementations of an interface or an interface member.

        Use this tool when:
        - Finding every class that implements an interface
        - Finding the concrete methods behind an interface method

        Args:
            fully_qualified_name: Interface or interface member
            file: Source file of a position on the interface or member
            line: 1-based line
            column: 1-based column
            member: Member name when the target is the interface itself
            include_derived_interfaces: Also list interfaces extending it
            solution_only: Skip results declared outside the loaded sources
            page: Page number over implementations (default: 1)
            page_size: Implementations per page (default: 200, max: 500)
            cursor: next_cursor from a previous response; overrides page
            timeout_ms: Time budget (default: 60000, range 1000-300000)

        Example:
            get_all_implementations("Sample.Data.IRepository", member="Save")
            → {"success": true, "implementations": [...], ...}
        """
        return run_tool(
            "get_all_implementations",
            get_all_implementations_impl,
            fully_qualified_name=fully_qualified_name,
            file=file,
            line=line,
            column=column,
            member=member,
            include_derived_interfaces=include_derived_interfaces,
            solution_only=solution_only,
            page=page,
            page_size=page_size,
            cursor=cursor,
            timeout_ms=timeout_ms,
        )

    @mcp.tool
    def goto_definition(
        fully_qualified_name: str | None = None,
        file: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> dict[str, Any]:
        """
        Go to the source definition of a symbol.

        Use this tool when:
        - Jumping from a usage to the declaration
        - Checking whether a symbol comes from source or from a referenced library

        Args:
            fully_qualified_name: Symbol name (or use file/line/column)
            file: Source file of a position on a usage
            line: 1-based line
            column: 1-based column

        Example:
            goto_definition(file="src/Foo.cs", line=14, column=13)
            → {"success": true, "definition": {...}, "is_source_definition": true, "is_from_metadata": false}
        """
        return run_tool(
            "goto_definition",
            goto_definition_impl,
            fully_qualified_name=fully_qualified_name,
            file=file,
            line=line,
            column=column,
        )

    @mcp.tool
    def get_type_info(
        fully_qualified_name: str | None = None,
        file: str | None = None,
        line: int | None = None,
        column: int | None = None,
        page: int = 1,
        page_size: int | None = None,
        cursor: str | None = None,
    ) -> dict[str, Any]:
        """
        List the members of a type with their kinds, types and parameters.

        Use this tool when:
        - Getting an overview of a class before using it
        - Checking the available overloads of a method

        Args:
            fully_qualified_name: Type name (or use file/line/column)
            file: Source file of a position inside the type
            line: 1-based line
            column: 1-based column
            page: Page number over members (default: 1)
            page_size: Members per page (default: 200, max: 500)
            cursor: next_cursor from a previous response; overrides page

        Example:
            get_type_info("Sample.Services.OrderService")
            → {"success": true, "members": [{"name": "PlaceOrder", "kind": "Method", ...}], ...}
        """
        return run_tool(
            "get_type_info",
            get_type_info_impl,
            fully_qualified_name=fully_qualified_name,
            file=file,
            line=line,
            column=column,
            page=page,
            page_size=page_size,
            cursor=cursor,
        )


__all__ = ["register_analysis_tools"]
