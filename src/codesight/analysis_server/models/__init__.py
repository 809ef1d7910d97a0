"""Analysis server models."""

from .operations import (
    Argument,
    CompoundAssignment,
    EventReference,
    FieldReference,
    IncrementOrDecrement,
    Invocation,
    MemberReference,
    ObjectCreation,
    Operation,
    OperationNode,
    PropertyReference,
    SimpleAssignment,
)
from .response_models import (
    AnalysisError,
    CallerEntry,
    DefinitionResponse,
    DescribeSymbolResponse,
    FindReferencesResponse,
    ImplementationsResponse,
    InheritanceTreeResponse,
    LoadWorkspaceResponse,
    LocationInfo,
    MemberInfo,
    MethodDependenciesResponse,
    OverrideEntry,
    ParameterInfo,
    ReferenceInfo,
    SymbolInfo,
    TraversalStats,
    TreeNode,
    TypeInfoResponse,
)
from .symbol_models import (
    Ambiguous,
    CallerInfo,
    Location,
    MethodKind,
    NotFound,
    Parameter,
    ReferenceLocation,
    RefKind,
    Resolved,
    ResolutionResult,
    SymbolKind,
    SymbolRef,
    TargetDescriptor,
    TypeKind,
)

__all__ = [
    # Symbol vocabulary
    "SymbolRef",
    "SymbolKind",
    "TypeKind",
    "MethodKind",
    "RefKind",
    "Location",
    "Parameter",
    "ReferenceLocation",
    "CallerInfo",
    "TargetDescriptor",
    "Resolved",
    "Ambiguous",
    "NotFound",
    "ResolutionResult",
    # Operation trees
    "Operation",
    "OperationNode",
    "Argument",
    "Invocation",
    "ObjectCreation",
    "PropertyReference",
    "FieldReference",
    "EventReference",
    "MemberReference",
    "SimpleAssignment",
    "CompoundAssignment",
    "IncrementOrDecrement",
    # Tool responses
    "AnalysisError",
    "LocationInfo",
    "ParameterInfo",
    "SymbolInfo",
    "ReferenceInfo",
    "CallerEntry",
    "TraversalStats",
    "TreeNode",
    "OverrideEntry",
    "MemberInfo",
    "LoadWorkspaceResponse",
    "DescribeSymbolResponse",
    "FindReferencesResponse",
    "MethodDependenciesResponse",
    "InheritanceTreeResponse",
    "ImplementationsResponse",
    "DefinitionResponse",
    "TypeInfoResponse",
]
