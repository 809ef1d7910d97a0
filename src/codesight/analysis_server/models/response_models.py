"""
Response models for the analysis tools.

These dataclasses define the payload of each tool. The tool layer serializes a
payload as ``{"success": true, ...fields}`` and a failure as
``{"success": false, "error": AnalysisError}``.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AnalysisError:
    """Standard error information for analysis operations."""

    code: str  # "INVALID_INPUT", "NOT_FOUND", "AMBIGUOUS", "TIMEOUT", ...
    message: str  # Human-readable error message
    file: str | None = None  # File path the error relates to
    line: int | None = None  # Line number the error relates to
    candidates: list["SymbolInfo"] | None = None  # Only for AMBIGUOUS
    hint: str | None = None  # How to disambiguate
    details: dict[str, Any] | None = None  # Diagnostics (INTERNAL, TIMEOUT)


@dataclass
class LocationInfo:
    """A 1-based source position."""

    file: str
    line: int
    column: int


@dataclass
class ParameterInfo:
    name: str
    type: str
    ref_kind: str = "none"


@dataclass
class SymbolInfo:
    """Presentation of a symbol."""

    display: str  # Fully qualified display string
    name: str
    kind: str  # "NamedType", "Method", "Property", "Field", "Event"
    file: str | None = None  # None for metadata-only symbols
    line: int | None = None
    column: int | None = None
    containing_type: str | None = None
    containing_namespace: str | None = None
    type_kind: str | None = None  # Only for named types
    method_kind: str | None = None  # Only for methods
    member_type: str | None = None  # Return type for methods
    accessibility: str = "Public"
    is_static: bool = False
    is_abstract: bool = False
    is_virtual: bool = False
    is_override: bool = False
    parameters: list[ParameterInfo] | None = None  # Only for methods


@dataclass
class ReferenceInfo:
    """A location where a symbol is referenced."""

    file: str
    line: int  # 1-based
    column: int  # 1-based
    text: str  # Trimmed source line containing the reference


@dataclass
class CallerEntry:
    """A method calling the analyzed method."""

    caller: SymbolInfo
    is_direct: bool  # False when the call dispatches through an override or interface
    call_sites: list[LocationInfo] = field(default_factory=list)


@dataclass
class TraversalStats:
    """Statistics about the dependency traversal."""

    methods_visited: int
    max_level_reached: int
    call_edges: int
    is_cyclic: bool
    skipped_methods: int = 0  # Nodes whose classification failed


@dataclass
class TreeNode:
    """A node of the descendants tree."""

    symbol: SymbolInfo
    children: list["TreeNode"] = field(default_factory=list)


@dataclass
class OverrideEntry:
    """An overridable member and the members overriding it."""

    member: SymbolInfo
    overrides: list[SymbolInfo]


@dataclass
class LoadWorkspaceResponse:
    """Response for load_workspace tool."""

    workspace: str
    index_path: str
    root: str
    types: int
    symbols: int
    method_bodies: int
    generation: int


@dataclass
class DescribeSymbolResponse:
    """Response for describe_symbol tool."""

    symbol: SymbolInfo
    base_type: SymbolInfo | None = None  # Only for named types
    interfaces: list[SymbolInfo] | None = None  # Only for named types, direct ones
    property_accessors: list[SymbolInfo] | None = None  # Only for properties


@dataclass
class FindReferencesResponse:
    """Response for find_references tool."""

    symbol: SymbolInfo
    references: list[ReferenceInfo]
    # Standard pagination fields
    total: int = 0
    page: int = 1
    page_size: int | None = None
    next_cursor: str | None = None
    has_more: bool | None = None


@dataclass
class MethodDependenciesResponse:
    """Response for get_method_dependencies tool. Only ``calls`` is paginated."""

    symbol: SymbolInfo
    depth: int
    calls: list[SymbolInfo]
    reads: list[SymbolInfo]
    writes: list[SymbolInfo]
    callers: list[CallerEntry] | None = None  # Only when include_callers
    stats: TraversalStats | None = None
    # Standard pagination fields (over calls)
    total: int = 0
    page: int = 1
    page_size: int | None = None
    next_cursor: str | None = None
    has_more: bool | None = None


@dataclass
class InheritanceTreeResponse:
    """Response for get_inheritance_tree tool. Only ``descendants`` is paginated."""

    type: SymbolInfo
    direction: str
    max_depth: int
    ancestors: list[SymbolInfo] | None = None
    interfaces: list[SymbolInfo] | None = None
    descendants: list[SymbolInfo] | None = None
    descendants_tree: TreeNode | None = None
    overrides: list[OverrideEntry] | None = None
    # Standard pagination fields (over descendants)
    total: int = 0
    page: int = 1
    page_size: int | None = None
    next_cursor: str | None = None
    has_more: bool | None = None


@dataclass
class ImplementationsResponse:
    """Response for get_all_implementations tool."""

    target: SymbolInfo
    implementations: list[SymbolInfo]
    derived_interfaces: list[SymbolInfo] | None = None  # Only when requested for an interface
    # Standard pagination fields (over implementations)
    total: int = 0
    page: int = 1
    page_size: int | None = None
    next_cursor: str | None = None
    has_more: bool | None = None


@dataclass
class DefinitionResponse:
    """Response for goto_definition tool."""

    symbol: SymbolInfo
    definition: SymbolInfo
    is_source_definition: bool  # True when a declaration in source was found
    is_from_metadata: bool  # True when only metadata is available


@dataclass
class MemberInfo:
    """A member listed by get_type_info."""

    name: str
    display: str
    kind: str
    accessibility: str
    is_static: bool
    type: str | None = None
    method_kind: str | None = None
    parameters: list[ParameterInfo] | None = None
    file: str | None = None
    line: int | None = None
    column: int | None = None


@dataclass
class TypeInfoResponse:
    """Response for get_type_info tool."""

    type: SymbolInfo
    base_type: SymbolInfo | None
    interfaces: list[SymbolInfo]
    members: list[MemberInfo]
    # Standard pagination fields (over members)
    total: int = 0
    page: int = 1
    page_size: int | None = None
    next_cursor: str | None = None
    has_more: bool | None = None
