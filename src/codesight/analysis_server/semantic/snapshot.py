"""
Immutable in-memory workspace snapshot.

A ``WorkspaceSnapshot`` answers every ``SemanticService`` query from tables
built once by the index loader. Derived indexes (references, callers, override
chains, name lookups) are computed in the constructor; nothing is written
after that, so one snapshot can serve any number of concurrent requests.
"""

import logging
import os
from collections import defaultdict, deque
from dataclasses import dataclass

from ..models.operations import (
    FieldReference,
    EventReference,
    Invocation,
    ObjectCreation,
    Operation,
    PropertyReference,
    walk,
)
from ..models.symbol_models import (
    CallerInfo,
    Location,
    ReferenceLocation,
    SymbolKind,
    SymbolRef,
    TypeKind,
)

logger = logging.getLogger(__name__)

_LINE_END = 10**9


@dataclass(frozen=True)
class Span:
    """Extent of a declaration, 1-based and inclusive."""

    file: str
    start_line: int
    start_column: int
    end_line: int
    end_column: int = _LINE_END

    def contains(self, line: int, column: int) -> bool:
        if (line, column) < (self.start_line, self.start_column):
            return False
        return (line, column) <= (self.end_line, self.end_column)

    def nesting_key(self) -> tuple[int, int, int, int]:
        # Inner spans start later and end earlier
        return (-self.start_line, -self.start_column, self.end_line, self.end_column)


@dataclass(frozen=True)
class SymbolTables:
    """Raw tables produced by the index loader."""

    symbols: dict[str, SymbolRef]
    type_names: dict[str, str]  # qualified type name -> type id
    members: dict[str, tuple[str, ...]]  # type id -> member ids in declaration order
    containing: dict[str, str]  # symbol id -> containing symbol id
    base_types: dict[str, str]  # type id -> base type id
    declared_interfaces: dict[str, tuple[str, ...]]  # type id -> interface ids
    accessors: dict[str, tuple[str | None, str | None]]  # property id -> (getter id, setter id)
    overridden: dict[str, str]  # member id -> id of the member it overrides
    explicit_implementations: dict[str, tuple[str, ...]]  # member id -> interface member ids
    bodies: dict[str, Operation]  # method id -> operation tree
    spans: dict[str, Span]
    explicit_references: dict[str, tuple[Location, ...]]
    source_definitions: dict[str, str]  # metadata symbol id -> source symbol id
    source_lines: dict[str, tuple[str, ...]]  # file -> lines


class WorkspaceSnapshot:
    """A read-only ``SemanticService`` over one loaded workspace."""

    def __init__(self, name: str, root: str, tables: SymbolTables, source_path: str | None = None):
        self.name = name
        self.root = root
        self.source_path = source_path
        self._t = tables

        self._declarations_by_name: dict[str, list[str]] = defaultdict(list)
        self._spans_by_file: dict[str, list[tuple[Span, str]]] = defaultdict(list)
        self._derived_direct: dict[str, list[str]] = defaultdict(list)
        self._derived_interfaces_direct: dict[str, list[str]] = defaultdict(list)
        self._overriders_direct: dict[str, list[str]] = defaultdict(list)
        self._references: dict[str, list[Location]] = defaultdict(list)
        self._call_sites: dict[str, list[tuple[str, Location | None]]] = defaultdict(list)
        self._reference_tokens: dict[str, list[tuple[Location, int, str]]] = defaultdict(list)

        self._index_declarations()
        self._index_hierarchy()
        self._index_bodies()
        for symbol_id, locations in tables.explicit_references.items():
            for location in locations:
                self._add_reference(symbol_id, location)

        logger.info(
            f"Workspace snapshot '{name}' ready: {len(tables.type_names)} types, "
            f"{len(tables.symbols)} symbols, {len(tables.bodies)} method bodies"
        )

    # Index construction

    def _index_declarations(self) -> None:
        for symbol_id, symbol in self._t.symbols.items():
            if not symbol.is_accessor:
                self._declarations_by_name[symbol.name].append(symbol_id)
            span = self._t.spans.get(symbol_id)
            if span is not None:
                self._spans_by_file[span.file].append((span, symbol_id))

    def _index_hierarchy(self) -> None:
        for type_id, base_id in self._t.base_types.items():
            self._derived_direct[base_id].append(type_id)
        for type_id, interface_ids in self._t.declared_interfaces.items():
            symbol = self._t.symbols[type_id]
            if symbol.type_kind == TypeKind.INTERFACE:
                for interface_id in interface_ids:
                    self._derived_interfaces_direct[interface_id].append(type_id)
        for member_id, overridden_id in self._t.overridden.items():
            self._overriders_direct[overridden_id].append(member_id)

    def _index_bodies(self) -> None:
        for method_id, body in self._t.bodies.items():
            for op in walk(body):
                match op:
                    case Invocation(target=target, location=location) if target is not None:
                        self._call_sites[target.id].append((method_id, location))
                        self._add_reference(target.id, location, token=target.name)
                    case ObjectCreation(constructor=ctor, location=location) if ctor is not None:
                        self._call_sites[ctor.id].append((method_id, location))
                        type_id = self._t.containing.get(ctor.id)
                        if type_id is not None:
                            # The type name token resolves to the type, not the constructor
                            self._add_reference(type_id, location, token=self._t.symbols[type_id].name)
                        self._add_reference(ctor.id, location, register_token=False)
                    case PropertyReference(property=symbol, location=location):
                        self._add_reference(symbol.id, location, token=symbol.name)
                    case FieldReference(field=symbol, location=location):
                        self._add_reference(symbol.id, location, token=symbol.name)
                    case EventReference(event=symbol, location=location):
                        self._add_reference(symbol.id, location, token=symbol.name)

    def _add_reference(
        self, symbol_id: str, location: Location | None, token: str | None = None, register_token: bool = True
    ) -> None:
        if location is None:
            return
        if location in self._references[symbol_id]:
            return
        self._references[symbol_id].append(location)
        if register_token:
            length = len(token or self._t.symbols[symbol_id].name)
            self._reference_tokens[location.file].append((location, length, symbol_id))

    # Helpers

    def _sym(self, symbol_id: str | None) -> SymbolRef | None:
        if symbol_id is None:
            return None
        return self._t.symbols.get(symbol_id)

    def _sorted(self, ids) -> list[SymbolRef]:
        unique = dict.fromkeys(ids)
        return sorted((self._t.symbols[i] for i in unique), key=lambda s: s.display)

    def _base_chain(self, type_id: str):
        seen = set()
        current = self._t.base_types.get(type_id)
        while current is not None and current not in seen:
            seen.add(current)
            yield current
            current = self._t.base_types.get(current)

    def _all_interface_ids(self, type_id: str) -> list[str]:
        result: dict[str, None] = {}
        queue = deque([type_id, *self._base_chain(type_id)])
        while queue:
            current = queue.popleft()
            for interface_id in self._t.declared_interfaces.get(current, ()):
                if interface_id not in result:
                    result[interface_id] = None
                    queue.append(interface_id)
        result.pop(type_id, None)
        return list(result)

    def _transitive(self, start: str, edges: dict[str, list[str]], transitive: bool) -> list[str]:
        if not transitive:
            return list(edges.get(start, ()))
        found: dict[str, None] = {}
        queue = deque(edges.get(start, ()))
        while queue:
            current = queue.popleft()
            if current in found or current == start:
                continue
            found[current] = None
            queue.extend(edges.get(current, ()))
        return list(found)

    def _signature(self, symbol: SymbolRef) -> tuple:
        return (symbol.name, tuple(p.type for p in symbol.parameters))

    def _overridden_chain(self, member_id: str) -> list[str]:
        chain = []
        current = self._t.overridden.get(member_id)
        while current is not None and current not in chain:
            chain.append(current)
            current = self._t.overridden.get(current)
        return chain

    # Lookup

    def find_type_by_qualified_name(self, name: str) -> SymbolRef | None:
        return self._sym(self._t.type_names.get(name))

    def find_members_by_name(self, type_symbol: SymbolRef, name: str) -> list[SymbolRef]:
        return [
            self._t.symbols[member_id]
            for member_id in self._t.members.get(type_symbol.id, ())
            if self._t.symbols[member_id].name == name
        ]

    def normalize_path(self, file: str) -> str:
        """Absolute, normalized form of a path given relative to the workspace root."""
        if not os.path.isabs(file):
            file = os.path.join(self.root, file)
        return os.path.normpath(file)

    def find_symbol_at_position(self, file: str, line: int, column: int) -> SymbolRef | None:
        file = self.normalize_path(file)
        for location, length, symbol_id in self._reference_tokens.get(file, ()):
            if location.line == line and location.column <= column < location.column + length:
                return self._t.symbols[symbol_id]
        return self.find_enclosing_symbol(file, line, column)

    def find_enclosing_symbol(self, file: str, line: int, column: int) -> SymbolRef | None:
        """Innermost declaration whose span contains the position."""
        file = self.normalize_path(file)
        enclosing = [(span, symbol_id) for span, symbol_id in self._spans_by_file.get(file, ()) if span.contains(line, column)]
        if not enclosing:
            return None
        _, symbol_id = min(enclosing, key=lambda item: item[0].nesting_key())
        return self._t.symbols[symbol_id]

    def find_declarations(self, simple_name: str) -> list[SymbolRef]:
        return self._sorted(self._declarations_by_name.get(simple_name, ()))

    # Symbol model navigation

    def get_members(self, type_symbol: SymbolRef) -> list[SymbolRef]:
        return [self._t.symbols[member_id] for member_id in self._t.members.get(type_symbol.id, ())]

    def get_base_type(self, type_symbol: SymbolRef) -> SymbolRef | None:
        return self._sym(self._t.base_types.get(type_symbol.id))

    def get_interfaces(self, type_symbol: SymbolRef, transitive: bool = True) -> list[SymbolRef]:
        if transitive:
            ids = self._all_interface_ids(type_symbol.id)
        else:
            ids = list(self._t.declared_interfaces.get(type_symbol.id, ()))
        return [self._t.symbols[i] for i in ids]

    def get_accessors(self, property_symbol: SymbolRef) -> tuple[SymbolRef | None, SymbolRef | None]:
        getter_id, setter_id = self._t.accessors.get(property_symbol.id, (None, None))
        return self._sym(getter_id), self._sym(setter_id)

    def get_containing_symbol(self, symbol: SymbolRef) -> SymbolRef | None:
        return self._sym(self._t.containing.get(symbol.id))

    # Bodies and cross references

    def get_operation_tree(self, method: SymbolRef) -> Operation | None:
        return self._t.bodies.get(method.id)

    def find_references(self, symbol: SymbolRef) -> list[ReferenceLocation]:
        locations = sorted(self._references.get(symbol.id, ()), key=Location.sort_key)
        return [ReferenceLocation(location=loc, text=self._line_text(loc)) for loc in locations]

    def _line_text(self, location: Location) -> str:
        lines = self._t.source_lines.get(location.file)
        if not lines or not 1 <= location.line <= len(lines):
            return ""
        return lines[location.line - 1].strip()

    def find_callers(self, method: SymbolRef) -> list[CallerInfo]:
        # Calls to a member this method overrides or implements dispatch to it indirectly
        indirect_targets = self._overridden_chain(method.id)
        indirect_targets += [
            interface_member.id
            for interface_member in self._implemented_interface_members(method)
            if interface_member.id not in indirect_targets
        ]

        sites: dict[tuple[str, bool], list[Location]] = {}
        for target_id, is_direct in [(method.id, True)] + [(t, False) for t in indirect_targets]:
            for caller_id, location in self._call_sites.get(target_id, ()):
                bucket = sites.setdefault((caller_id, is_direct), [])
                if location is not None and location not in bucket:
                    bucket.append(location)

        callers = [
            CallerInfo(
                caller=self._t.symbols[caller_id],
                is_direct=is_direct,
                call_sites=tuple(sorted(locations, key=Location.sort_key)),
            )
            for (caller_id, is_direct), locations in sites.items()
        ]
        return sorted(callers, key=lambda c: (c.caller.display, not c.is_direct))

    def _implemented_interface_members(self, member: SymbolRef) -> list[SymbolRef]:
        explicit = self._t.explicit_implementations.get(member.id)
        if explicit:
            return [self._t.symbols[i] for i in explicit]
        type_id = self._t.containing.get(member.id)
        if type_id is None:
            return []
        signature = self._signature(member)
        found = []
        for interface_id in self._all_interface_ids(type_id):
            for candidate_id in self._t.members.get(interface_id, ()):
                if self._signature(self._t.symbols[candidate_id]) == signature:
                    found.append(self._t.symbols[candidate_id])
        return found

    def find_source_definition(self, symbol: SymbolRef) -> SymbolRef | None:
        if symbol.in_source:
            return symbol
        source_id = self._t.source_definitions.get(symbol.id)
        return self._sym(source_id)

    # Hierarchy

    def find_derived_types(self, type_symbol: SymbolRef, transitive: bool = True) -> list[SymbolRef]:
        return self._sorted(self._transitive(type_symbol.id, self._derived_direct, transitive))

    def find_derived_interfaces(self, type_symbol: SymbolRef, transitive: bool = True) -> list[SymbolRef]:
        return self._sorted(self._transitive(type_symbol.id, self._derived_interfaces_direct, transitive))

    def find_implementations(self, interface_or_member: SymbolRef) -> list[SymbolRef]:
        if interface_or_member.kind == SymbolKind.NAMED_TYPE:
            interface_id = interface_or_member.id
            return self._sorted(
                type_id
                for type_id in self._t.type_names.values()
                if self._t.symbols[type_id].type_kind in (TypeKind.CLASS, TypeKind.STRUCT)
                and interface_id in self._all_interface_ids(type_id)
            )

        interface_id = self._t.containing.get(interface_or_member.id)
        if interface_id is None:
            return []
        implementing: list[str] = []
        for member_id, targets in self._t.explicit_implementations.items():
            if interface_or_member.id in targets:
                implementing.append(member_id)
        signature = self._signature(interface_or_member)
        for type_symbol in self.find_implementations(self._t.symbols[interface_id]):
            for owner_id in [type_symbol.id, *self._base_chain(type_symbol.id)]:
                match_id = next(
                    (
                        m
                        for m in self._t.members.get(owner_id, ())
                        if self._signature(self._t.symbols[m]) == signature and m not in self._t.explicit_implementations
                    ),
                    None,
                )
                if match_id is not None:
                    implementing.append(match_id)
                    break
        return self._sorted(implementing)

    def find_overrides(self, member: SymbolRef) -> list[SymbolRef]:
        return self._sorted(self._transitive(member.id, self._overriders_direct, transitive=True))

    # Convenience for tools

    def stats(self) -> dict[str, int]:
        return {
            "types": len(set(self._t.type_names.values())),
            "symbols": len(self._t.symbols),
            "method_bodies": len(self._t.bodies),
        }
