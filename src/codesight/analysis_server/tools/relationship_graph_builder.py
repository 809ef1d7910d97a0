"""
Type hierarchy exploration: ancestors, interfaces, descendants and overrides.

Descendants are fetched once as a flat transitive set and rebuilt into a tree
by linking every descendant to its immediate parents (base type for classes,
declared interfaces for interfaces). The tree is bounded by ``max_depth``;
the root sits at depth 0, so ``max_depth=1`` keeps direct children only.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

import networkx as nx

from ..cancellation import CancellationToken
from ..errors import InvalidInputError, SymbolNotFoundError
from ..models.symbol_models import SymbolKind, SymbolRef, TypeKind
from ..semantic.service import SemanticService

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    BOTH = "both"
    ANCESTORS = "ancestors"
    DESCENDANTS = "descendants"

    @classmethod
    def parse(cls, value: str | None) -> "Direction":
        text = (value or cls.BOTH.value).strip().lower()
        try:
            return cls(text)
        except ValueError as e:
            raise InvalidInputError(
                f"direction must be one of {[d.value for d in cls]} (got '{value}')"
            ) from e


@dataclass
class DescendantNode:
    symbol: SymbolRef
    children: list["DescendantNode"] = field(default_factory=list)

    def depth(self) -> int:
        """Levels below this node (0 for a leaf)."""
        if not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children)


@dataclass
class RelationshipGraph:
    """Hierarchy around one named type."""

    root: SymbolRef
    ancestors: list[SymbolRef] = field(default_factory=list)  # nearest first
    interfaces: list[SymbolRef] = field(default_factory=list)
    descendants_flat: list[SymbolRef] = field(default_factory=list)
    descendants_tree: DescendantNode | None = None
    overrides: list[tuple[SymbolRef, list[SymbolRef]]] | None = None


@dataclass
class ImplementationSet:
    """Implementations of an interface or of one interface member."""

    interface: SymbolRef
    member: SymbolRef | None
    implementations: list[SymbolRef]
    derived_interfaces: list[SymbolRef] | None = None


def _by_display(symbols) -> list[SymbolRef]:
    return sorted(dict.fromkeys(symbols), key=lambda s: s.display)


class RelationshipGraphBuilder:
    """Builds hierarchy views over one Semantic Service snapshot."""

    def __init__(self, service: SemanticService, token: CancellationToken | None = None):
        self.service = service
        self.token = token or CancellationToken.none()

    def build(
        self,
        type_symbol: SymbolRef,
        direction: Direction = Direction.BOTH,
        max_depth: int = 10,
        include_interfaces: bool = True,
        include_overrides: bool = False,
        solution_only: bool = True,
    ) -> RelationshipGraph:
        if type_symbol.kind != SymbolKind.NAMED_TYPE:
            raise InvalidInputError(f"{type_symbol.display} is not a type")

        graph = RelationshipGraph(root=type_symbol)
        keep = (lambda s: s.in_source) if solution_only else (lambda s: True)

        if direction in (Direction.BOTH, Direction.ANCESTORS):
            graph.ancestors = [a for a in self.ancestors(type_symbol) if keep(a)]

        if include_interfaces:
            graph.interfaces = _by_display(i for i in self.service.get_interfaces(type_symbol, transitive=True) if keep(i))

        if direction in (Direction.BOTH, Direction.DESCENDANTS):
            self.token.check()
            graph.descendants_flat = self.descendants(type_symbol, solution_only)
            graph.descendants_tree = self.descendants_tree(type_symbol, graph.descendants_flat, max_depth)

        if include_overrides:
            graph.overrides = self.overrides(type_symbol, solution_only)

        return graph

    def ancestors(self, type_symbol: SymbolRef) -> list[SymbolRef]:
        """Base-type chain, nearest first."""
        chain = []
        seen = {type_symbol}
        current = self.service.get_base_type(type_symbol)
        while current is not None and current not in seen:
            seen.add(current)
            chain.append(current)
            current = self.service.get_base_type(current)
        return chain

    def descendants(self, type_symbol: SymbolRef, solution_only: bool = True) -> list[SymbolRef]:
        if type_symbol.type_kind == TypeKind.INTERFACE:
            found = self.service.find_derived_interfaces(type_symbol, transitive=True)
        else:
            found = self.service.find_derived_types(type_symbol, transitive=True)
        if solution_only:
            found = [d for d in found if d.in_source]
        return _by_display(found)

    def _parents(self, type_symbol: SymbolRef, is_interface: bool) -> list[SymbolRef]:
        if is_interface:
            return self.service.get_interfaces(type_symbol, transitive=False)
        base = self.service.get_base_type(type_symbol)
        return [base] if base is not None else []

    def descendants_tree(self, root: SymbolRef, flat: list[SymbolRef], max_depth: int) -> DescendantNode:
        is_interface = root.type_kind == TypeKind.INTERFACE
        members = set(flat) | {root}

        hierarchy = nx.DiGraph()
        hierarchy.add_node(root)
        for descendant in flat:
            for parent in self._parents(descendant, is_interface):
                if parent in members:
                    hierarchy.add_edge(parent, descendant)

        def to_node(symbol: SymbolRef, depth: int, path: frozenset) -> DescendantNode:
            node = DescendantNode(symbol=symbol)
            if depth < max_depth:
                for child in sorted(hierarchy.successors(symbol), key=lambda s: (s.name, s.display)):
                    if child not in path:
                        node.children.append(to_node(child, depth + 1, path | {child}))
            return node

        return to_node(root, 0, frozenset({root}))

    def overrides(self, type_symbol: SymbolRef, solution_only: bool = True) -> list[tuple[SymbolRef, list[SymbolRef]]]:
        """Overriding members for each overridable member of a class or struct."""
        if type_symbol.type_kind not in (TypeKind.CLASS, TypeKind.STRUCT):
            return []
        result = []
        for member in self.service.get_members(type_symbol):
            if not member.is_overridable or member.is_accessor:
                continue
            self.token.check()
            overriders = self.service.find_overrides(member)
            if solution_only:
                overriders = [o for o in overriders if o.in_source]
            result.append((member, _by_display(overriders)))
        return result

    # Implementations

    def _containing_type(self, symbol: SymbolRef) -> SymbolRef | None:
        current = self.service.get_containing_symbol(symbol)
        while current is not None and current.kind != SymbolKind.NAMED_TYPE:
            current = self.service.get_containing_symbol(current)
        return current

    def implementations(
        self,
        target: SymbolRef,
        member_name: str | None = None,
        include_derived_interfaces: bool = True,
        solution_only: bool = True,
    ) -> ImplementationSet:
        """
        Implementations of an interface, or of one of its members.

        Args:
            target: Interface type or interface member
            member_name: When ``target`` is an interface, restrict to this member
            include_derived_interfaces: Also list interfaces extending the interface
            solution_only: Drop results without a source declaration

        Raises:
            InvalidInputError: target is neither an interface nor an interface member
            SymbolNotFoundError: member_name is not a member of the interface
        """
        interface: SymbolRef | None = None
        member: SymbolRef | None = None

        if target.kind == SymbolKind.NAMED_TYPE and target.type_kind == TypeKind.INTERFACE:
            interface = target
            if member_name:
                matches = [m for m in self.service.find_members_by_name(target, member_name) if not m.is_accessor]
                if not matches:
                    raise SymbolNotFoundError(f"Interface {target.display} has no member '{member_name}'")
                member = matches[0]
        elif target.kind in (SymbolKind.METHOD, SymbolKind.PROPERTY, SymbolKind.EVENT):
            owner = self._containing_type(target)
            if owner is not None and owner.type_kind == TypeKind.INTERFACE:
                interface, member = owner, target

        if interface is None:
            raise InvalidInputError("Target must be an interface type or an interface member.")

        derived = None
        if include_derived_interfaces:
            self.token.check()
            derived = self.descendants(interface, solution_only)

        self.token.check()
        found = self.service.find_implementations(member or interface)
        if member is None:
            found = [t for t in found if t.type_kind in (TypeKind.CLASS, TypeKind.STRUCT)]
        if solution_only:
            found = [s for s in found if s.in_source]

        return ImplementationSet(
            interface=interface,
            member=member,
            implementations=_by_display(found),
            derived_interfaces=derived,
        )
