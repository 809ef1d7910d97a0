"""
Classification of a method body into calls, reads and writes.

The classifier walks the operation tree of one method once, carrying a write
context flag. It never follows calls into other methods; the dependency graph
builder does that.
"""

from dataclasses import dataclass, field

from ..models.operations import (
    Argument,
    CompoundAssignment,
    EventReference,
    FieldReference,
    IncrementOrDecrement,
    Invocation,
    ObjectCreation,
    Operation,
    PropertyReference,
    SimpleAssignment,
    child_operations,
)
from ..models.symbol_models import RefKind, SymbolKind, SymbolRef
from ..semantic.service import SemanticService

_WRITING_REF_KINDS = (RefKind.REF, RefKind.OUT)


@dataclass
class OperationClassification:
    """Symbols a method body calls, reads and writes. Sets are keyed on symbol identity."""

    calls: set[SymbolRef] = field(default_factory=set)
    reads: set[SymbolRef] = field(default_factory=set)
    writes: set[SymbolRef] = field(default_factory=set)

    def merge(self, other: "OperationClassification") -> None:
        self.calls |= other.calls
        self.reads |= other.reads
        self.writes |= other.writes

    @property
    def is_empty(self) -> bool:
        return not (self.calls or self.reads or self.writes)


class OperationClassifier:
    """
    Partitions the operation tree of a method.

    Args:
        service: Semantic Service the method belongs to
        treat_accessors_as_calls: Also report property getters/setters as calls
    """

    def __init__(self, service: SemanticService, treat_accessors_as_calls: bool = True):
        self.service = service
        self.treat_accessors_as_calls = treat_accessors_as_calls

    def classify(self, method: SymbolRef) -> OperationClassification:
        tree = self.service.get_operation_tree(method)
        if tree is None:
            return OperationClassification()
        return self.classify_tree(tree)

    def classify_tree(self, tree: Operation) -> OperationClassification:
        result = OperationClassification()
        self._visit(tree, False, result)
        return result

    def _visit(self, op: Operation | None, write: bool, result: OperationClassification) -> None:
        if op is None:
            return

        match op:
            case Invocation(target=target, instance=instance, arguments=arguments):
                if target is not None:
                    result.calls.add(target)
                self._visit(instance, False, result)
                for argument in arguments:
                    self._visit(argument, write, result)
            case ObjectCreation(constructor=constructor):
                if constructor is not None:
                    result.calls.add(constructor)
                for child in child_operations(op):
                    self._visit(child, write, result)
            case PropertyReference(property=symbol) | FieldReference(field=symbol) | EventReference(event=symbol):
                self._record(symbol, write, result)
                self._visit_member_children(op, result)
            case SimpleAssignment(target=target, value=value):
                self._visit(target, True, result)
                self._visit(value, False, result)
            case CompoundAssignment(target=target, value=value):
                self._mark_read_write(target, result)
                self._visit(value, False, result)
            case IncrementOrDecrement(target=target):
                self._mark_read_write(target, result)
            case Argument(value=value, ref_kind=ref_kind):
                self._visit(value, ref_kind in _WRITING_REF_KINDS, result)
            case _:
                for child in child_operations(op):
                    self._visit(child, write, result)

    def _visit_member_children(self, op: Operation, result: OperationClassification) -> None:
        # Receivers and indexer arguments are evaluated, never assigned
        for child in child_operations(op):
            self._visit(child, False, result)

    def _record(self, symbol: SymbolRef, write: bool, result: OperationClassification) -> None:
        if write:
            result.writes.add(symbol)
        else:
            result.reads.add(symbol)
        if symbol.kind == SymbolKind.PROPERTY and self.treat_accessors_as_calls:
            getter, setter = self.service.get_accessors(symbol)
            accessor = setter if write else getter
            if accessor is not None:
                result.calls.add(accessor)

    def _mark_read_write(self, target: Operation, result: OperationClassification) -> None:
        match target:
            case PropertyReference(property=symbol) | FieldReference(field=symbol) | EventReference(event=symbol):
                self._record(symbol, False, result)
                self._record(symbol, True, result)
                self._visit_member_children(target, result)
            case _:
                self._visit(target, False, result)
                self._visit(target, True, result)
