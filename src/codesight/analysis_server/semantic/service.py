"""
Interface of the semantic analysis engine consumed by the analysis layer.

Anything that can answer these queries (an in-memory index snapshot, a bridge
to a compiler process) can back the tools. Implementations must be safe to
read from several threads at once and must never mutate shared state while
answering.
"""

from typing import Protocol, runtime_checkable

from ..models.operations import Operation
from ..models.symbol_models import CallerInfo, ReferenceLocation, SymbolRef


@runtime_checkable
class SemanticService(Protocol):
    """Read-only view of one workspace state."""

    name: str

    # Lookup

    def find_type_by_qualified_name(self, name: str) -> SymbolRef | None: ...

    def find_members_by_name(self, type_symbol: SymbolRef, name: str) -> list[SymbolRef]: ...

    def find_symbol_at_position(self, file: str, line: int, column: int) -> SymbolRef | None: ...

    def find_enclosing_symbol(self, file: str, line: int, column: int) -> SymbolRef | None: ...

    def find_declarations(self, simple_name: str) -> list[SymbolRef]: ...

    # Symbol model navigation

    def get_members(self, type_symbol: SymbolRef) -> list[SymbolRef]: ...

    def get_base_type(self, type_symbol: SymbolRef) -> SymbolRef | None: ...

    def get_interfaces(self, type_symbol: SymbolRef, transitive: bool = True) -> list[SymbolRef]: ...

    def get_accessors(self, property_symbol: SymbolRef) -> tuple[SymbolRef | None, SymbolRef | None]: ...

    def get_containing_symbol(self, symbol: SymbolRef) -> SymbolRef | None: ...

    # Bodies and cross references

    def get_operation_tree(self, method: SymbolRef) -> Operation | None: ...

    def find_references(self, symbol: SymbolRef) -> list[ReferenceLocation]: ...

    def find_callers(self, method: SymbolRef) -> list[CallerInfo]: ...

    def find_source_definition(self, symbol: SymbolRef) -> SymbolRef | None: ...

    # Hierarchy

    def find_derived_types(self, type_symbol: SymbolRef, transitive: bool = True) -> list[SymbolRef]: ...

    def find_derived_interfaces(self, type_symbol: SymbolRef, transitive: bool = True) -> list[SymbolRef]: ...

    def find_implementations(self, interface_or_member: SymbolRef) -> list[SymbolRef]: ...

    def find_overrides(self, member: SymbolRef) -> list[SymbolRef]: ...
