"""
Operation tree of a method body.

A closed set of frozen dataclasses. The classifier matches over them; any kind
that needs no special treatment is an ``OperationNode`` carrying its children.
"""

from dataclasses import dataclass

from .symbol_models import Location, RefKind, SymbolRef


@dataclass(frozen=True)
class OperationNode:
    """Generic operation (block, return, literal, binary, conditional, ...)."""

    kind: str
    children: tuple["Operation", ...] = ()
    location: Location | None = None


@dataclass(frozen=True)
class Argument:
    value: "Operation"
    ref_kind: RefKind = RefKind.NONE
    location: Location | None = None


@dataclass(frozen=True)
class Invocation:
    target: SymbolRef | None
    instance: "Operation | None" = None
    arguments: tuple[Argument, ...] = ()
    location: Location | None = None


@dataclass(frozen=True)
class ObjectCreation:
    constructor: SymbolRef | None
    arguments: tuple[Argument, ...] = ()
    initializer: "Operation | None" = None
    location: Location | None = None


@dataclass(frozen=True)
class PropertyReference:
    property: SymbolRef
    instance: "Operation | None" = None
    arguments: tuple[Argument, ...] = ()  # indexer arguments
    location: Location | None = None


@dataclass(frozen=True)
class FieldReference:
    field: SymbolRef
    instance: "Operation | None" = None
    location: Location | None = None


@dataclass(frozen=True)
class EventReference:
    event: SymbolRef
    instance: "Operation | None" = None
    location: Location | None = None


@dataclass(frozen=True)
class SimpleAssignment:
    target: "Operation"
    value: "Operation"
    location: Location | None = None


@dataclass(frozen=True)
class CompoundAssignment:
    target: "Operation"
    value: "Operation"
    operator: str = "+"
    location: Location | None = None


@dataclass(frozen=True)
class IncrementOrDecrement:
    target: "Operation"
    is_decrement: bool = False
    is_postfix: bool = True
    location: Location | None = None


Operation = (
    OperationNode
    | Argument
    | Invocation
    | ObjectCreation
    | PropertyReference
    | FieldReference
    | EventReference
    | SimpleAssignment
    | CompoundAssignment
    | IncrementOrDecrement
)

MemberReference = PropertyReference | FieldReference | EventReference


def child_operations(op: Operation) -> tuple[Operation, ...]:
    """Direct children of an operation in evaluation order."""
    match op:
        case OperationNode(children=children):
            return children
        case Argument(value=value):
            return (value,)
        case Invocation(instance=instance, arguments=arguments):
            return ((instance,) if instance is not None else ()) + arguments
        case ObjectCreation(arguments=arguments, initializer=initializer):
            return arguments + ((initializer,) if initializer is not None else ())
        case PropertyReference(instance=instance, arguments=arguments):
            return ((instance,) if instance is not None else ()) + arguments
        case FieldReference(instance=instance) | EventReference(instance=instance):
            return (instance,) if instance is not None else ()
        case SimpleAssignment(target=target, value=value) | CompoundAssignment(target=target, value=value):
            return (target, value)
        case IncrementOrDecrement(target=target):
            return (target,)
    return ()


def walk(op: Operation):
    """Yield ``op`` and every operation below it, depth first."""
    stack = [op]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(child_operations(current)))
