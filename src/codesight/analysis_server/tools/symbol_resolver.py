"""
Symbol resolution from qualified names and source positions.

Three entry points share the lookup rules:
1. resolve: any symbol (describe, references, goto definition)
2. resolve_method: a method to analyze; type-only names default to the constructor
3. resolve_type: a named type for hierarchy queries

Every entry point returns a ``ResolutionResult``. Ambiguity and absence are
results, not exceptions; ``require_resolved`` turns them into tool errors.
"""

import logging

from ..errors import AmbiguousSymbolError, SymbolNotFoundError
from ..models.symbol_models import (
    Ambiguous,
    MethodKind,
    NotFound,
    Resolved,
    ResolutionResult,
    SymbolKind,
    SymbolRef,
    TargetDescriptor,
)
from ..semantic.names import (
    CONSTRUCTOR_NAME,
    parameters_match,
    split_member,
    split_parameter_list,
    split_signature,
)
from ..semantic.service import SemanticService

logger = logging.getLogger(__name__)

METHOD_HINT = (
    'Try fully_qualified_name: "My.Namespace.Type..ctor" or "My.Namespace.Type.MethodName" '
    '(optionally with signature, e.g. "My.Namespace.Type.MethodName(int, string)").'
)
SYMBOL_HINT = 'Add a parameter list to pick an overload, e.g. "My.Namespace.Type.MethodName(int)".'


def choose_by_signature(methods: list[SymbolRef], parameter_list: str | None) -> SymbolRef | None:
    """
    Pick the overload whose parameters match ``parameter_list`` positionally.

    Without a parameter list only a single method is a match.
    """
    if not methods:
        return None
    if parameter_list is None:
        return methods[0] if len(methods) == 1 else None
    wanted = split_parameter_list(parameter_list)
    for method in methods:
        if parameters_match(wanted, [p.type for p in method.parameters]):
            return method
    return None


def _no_overload(owner: SymbolRef, member_name: str, parameter_list: str | None) -> NotFound:
    signature = f"({parameter_list})" if parameter_list is not None else ""
    return NotFound(f"No {member_name}{signature} declared on {owner.display}")


class SymbolResolver:
    """Resolves target descriptors against one Semantic Service snapshot."""

    def __init__(self, service: SemanticService):
        self.service = service

    # General symbols

    def resolve(self, descriptor: TargetDescriptor, treat_accessors: bool = False) -> ResolutionResult:
        if descriptor.is_position:
            symbol = self.service.find_symbol_at_position(descriptor.file, descriptor.line, descriptor.column)
            if symbol is None:
                return NotFound(f"No symbol found at {descriptor}")
            if symbol.is_accessor and not treat_accessors:
                symbol = self.service.get_containing_symbol(symbol) or symbol
            return Resolved(symbol)
        return self._resolve_name(descriptor.qualified_name)

    def _resolve_name(self, qualified_name: str) -> ResolutionResult:
        base, parameter_list = split_signature(qualified_name)

        type_symbol = self.service.find_type_by_qualified_name(base)
        if type_symbol is not None:
            if parameter_list is None:
                return Resolved(type_symbol)
            # "Ns.Type(int)" names a constructor
            chosen = choose_by_signature(self._constructors(type_symbol), parameter_list)
            if chosen is not None:
                return Resolved(chosen)

        parts = split_member(base)
        if parts is not None:
            owner = self.service.find_type_by_qualified_name(parts[0])
            if owner is not None:
                members = self._members_named(owner, parts[1])
                if members:
                    if parameter_list is None and len(members) == 1:
                        return Resolved(members[0])
                    chosen = choose_by_signature(members, parameter_list)
                    if chosen is not None:
                        return Resolved(chosen)
                    if parameter_list is not None:
                        return _no_overload(owner, parts[1], parameter_list)
                    return Ambiguous(tuple(members))

        return self._resolve_declaration(base, parameter_list, methods_only=False)

    def _members_named(self, owner: SymbolRef, member_name: str) -> list[SymbolRef]:
        if member_name == CONSTRUCTOR_NAME:
            return [c for c in self._constructors(owner) if not c.is_implicit] or self._constructors(owner)
        return self.service.find_members_by_name(owner, member_name)

    def _resolve_declaration(self, base: str, parameter_list: str | None, methods_only: bool) -> ResolutionResult:
        """Fall back to declarations whose simple name matches."""
        parts = split_member(base)
        simple_name = parts[1] if parts is not None else base
        candidates = [
            symbol
            for symbol in self.service.find_declarations(simple_name)
            if self._qualified_path(symbol) == base or self._qualified_path(symbol).endswith("." + base)
        ]
        if methods_only:
            candidates = [c for c in candidates if c.kind == SymbolKind.METHOD]
        if parameter_list is not None:
            wanted = split_parameter_list(parameter_list)
            candidates = [c for c in candidates if parameters_match(wanted, [p.type for p in c.parameters])]

        if not candidates:
            return NotFound(f"Symbol not found: {base if parameter_list is None else f'{base}({parameter_list})'}")
        if len(candidates) == 1:
            logger.debug(f"Resolved '{base}' through declaration search")
            return Resolved(candidates[0])
        return Ambiguous(tuple(candidates))

    def _qualified_path(self, symbol: SymbolRef) -> str:
        if symbol.kind == SymbolKind.NAMED_TYPE or symbol.containing_type is None:
            return symbol.display
        return f"{symbol.containing_type}.{symbol.name}"

    # Methods

    def resolve_method(self, descriptor: TargetDescriptor, treat_accessors: bool = True) -> ResolutionResult:
        if descriptor.is_position:
            return self._resolve_method_at(descriptor, treat_accessors)
        return self._resolve_method_name(descriptor.qualified_name)

    def _constructors(self, type_symbol: SymbolRef) -> list[SymbolRef]:
        return [m for m in self.service.get_members(type_symbol) if m.is_constructor]

    def _resolve_type_as_method(self, type_symbol: SymbolRef, parameter_list: str | None = None) -> ResolutionResult:
        constructors = [c for c in self._constructors(type_symbol) if not c.is_implicit]
        if parameter_list is not None:
            chosen = choose_by_signature(constructors or self._constructors(type_symbol), parameter_list)
            if chosen is not None:
                return Resolved(chosen)
            return _no_overload(type_symbol, CONSTRUCTOR_NAME, parameter_list)

        # A single explicit constructor wins even when ordinary methods exist
        if len(constructors) == 1:
            return Resolved(constructors[0])
        methods = [
            m
            for m in self.service.get_members(type_symbol)
            if m.kind == SymbolKind.METHOD and m.method_kind == MethodKind.ORDINARY and not m.is_implicit
        ]
        candidates = constructors + methods
        if not candidates:
            return NotFound(f"Type {type_symbol.display} declares no constructors or methods")
        return Ambiguous(tuple(candidates), type=type_symbol)

    def _resolve_method_name(self, qualified_name: str) -> ResolutionResult:
        base, parameter_list = split_signature(qualified_name)

        type_symbol = self.service.find_type_by_qualified_name(base)
        if type_symbol is not None:
            return self._resolve_type_as_method(type_symbol, parameter_list)

        parts = split_member(base)
        if parts is not None:
            owner = self.service.find_type_by_qualified_name(parts[0])
            if owner is not None:
                result = self._resolve_member_as_method(owner, parts[1], parameter_list)
                if result is not None:
                    return result

        return self._resolve_declaration(base, parameter_list, methods_only=True)

    def _resolve_member_as_method(
        self, owner: SymbolRef, member_name: str, parameter_list: str | None
    ) -> ResolutionResult | None:
        if member_name == CONSTRUCTOR_NAME:
            constructors = [c for c in self._constructors(owner) if not c.is_implicit]
            candidates = constructors or self._constructors(owner)
            chosen = choose_by_signature(candidates, parameter_list)
            if chosen is not None:
                return Resolved(chosen)
            if parameter_list is not None or not candidates:
                return _no_overload(owner, CONSTRUCTOR_NAME, parameter_list)
            return Ambiguous(tuple(candidates), type=owner)

        members = self.service.find_members_by_name(owner, member_name)
        for member in members:
            if member.kind == SymbolKind.PROPERTY:
                getter, setter = self.service.get_accessors(member)
                accessor = getter or setter
                if accessor is not None:
                    return Resolved(accessor)

        methods = [m for m in members if m.kind == SymbolKind.METHOD and not m.is_implicit]
        if len(methods) == 1 and parameter_list is None:
            return Resolved(methods[0])
        chosen = choose_by_signature(methods, parameter_list)
        if chosen is not None:
            return Resolved(chosen)
        if methods and parameter_list is not None:
            return _no_overload(owner, member_name, parameter_list)
        if methods:
            return Ambiguous(tuple(methods), type=owner)
        return None

    def _resolve_method_at(self, descriptor: TargetDescriptor, treat_accessors: bool) -> ResolutionResult:
        symbol = self.service.find_symbol_at_position(descriptor.file, descriptor.line, descriptor.column)
        if symbol is not None:
            if symbol.kind == SymbolKind.METHOD:
                return Resolved(symbol)
            if symbol.kind == SymbolKind.PROPERTY and treat_accessors:
                getter, setter = self.service.get_accessors(symbol)
                if getter or setter:
                    return Resolved(getter or setter)
            if symbol.kind == SymbolKind.NAMED_TYPE:
                return self._resolve_type_as_method(symbol)

        enclosing = self.service.find_enclosing_symbol(descriptor.file, descriptor.line, descriptor.column)
        if enclosing is not None and enclosing.kind == SymbolKind.METHOD:
            return Resolved(enclosing)
        return NotFound(f"No method found at {descriptor}")

    # Types

    def resolve_type(self, descriptor: TargetDescriptor) -> ResolutionResult:
        if descriptor.is_position:
            symbol = self.service.find_symbol_at_position(descriptor.file, descriptor.line, descriptor.column)
            type_symbol = self._enclosing_type(symbol)
            if type_symbol is None:
                return NotFound(f"No type found at {descriptor}")
            return Resolved(type_symbol)

        base, _ = split_signature(descriptor.qualified_name)
        type_symbol = self.service.find_type_by_qualified_name(base)
        if type_symbol is not None:
            return Resolved(type_symbol)

        match self._resolve_name(descriptor.qualified_name):
            case Resolved(symbol=symbol):
                type_symbol = self._enclosing_type(symbol)
            case Ambiguous(type=owner) if owner is not None:
                type_symbol = owner
            case Ambiguous(candidates=candidates):
                types = {t for t in (self._enclosing_type(c) for c in candidates) if t is not None}
                if len(types) > 1:
                    return Ambiguous(tuple(sorted(types, key=lambda t: t.display)))
                type_symbol = next(iter(types), None)
            case NotFound() as not_found:
                return not_found

        if type_symbol is None:
            return NotFound(f"Type not found: {descriptor.qualified_name}")
        return Resolved(type_symbol)

    def _enclosing_type(self, symbol: SymbolRef | None) -> SymbolRef | None:
        seen = set()
        while symbol is not None and symbol.kind != SymbolKind.NAMED_TYPE and symbol.id not in seen:
            seen.add(symbol.id)
            symbol = self.service.get_containing_symbol(symbol)
        return symbol


def require_resolved(result: ResolutionResult, descriptor: TargetDescriptor, hint: str = SYMBOL_HINT) -> SymbolRef:
    """Unwrap a resolution result, raising the matching tool error otherwise."""
    match result:
        case Resolved(symbol=symbol):
            return symbol
        case Ambiguous(candidates=candidates, type=owner):
            if owner is not None:
                message = f"Ambiguous: {descriptor} resolves to {owner.display} with multiple candidates."
            else:
                message = f"Ambiguous: {descriptor} matches {len(candidates)} symbols."
            raise AmbiguousSymbolError(message, candidates=list(candidates), hint=hint)
        case NotFound(reason=reason):
            raise SymbolNotFoundError(reason or f"Symbol not found: {descriptor}")
    raise TypeError(f"Unexpected resolution result: {result!r}")
