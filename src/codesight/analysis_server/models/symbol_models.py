"""
Symbol-level models shared by the resolver, builders and tool responses.

These dataclasses are the request-scoped vocabulary of the analysis layer:
immutable symbol handles, source locations, target descriptors and the tagged
resolution outcome.
"""

from dataclasses import dataclass, field
from enum import Enum


class SymbolKind(str, Enum):
    """Kind of a symbol, named the way compiler front-ends report them."""

    NAMED_TYPE = "NamedType"
    METHOD = "Method"
    PROPERTY = "Property"
    FIELD = "Field"
    EVENT = "Event"


class TypeKind(str, Enum):
    """Kind of a named type."""

    CLASS = "Class"
    STRUCT = "Struct"
    INTERFACE = "Interface"
    ENUM = "Enum"
    DELEGATE = "Delegate"


class MethodKind(str, Enum):
    """Kind of a method symbol."""

    ORDINARY = "Ordinary"
    CONSTRUCTOR = "Constructor"
    STATIC_CONSTRUCTOR = "StaticConstructor"
    PROPERTY_GET = "PropertyGet"
    PROPERTY_SET = "PropertySet"


class RefKind(str, Enum):
    """Passing mode of a parameter or argument."""

    NONE = "none"
    REF = "ref"
    OUT = "out"
    IN = "in"


@dataclass(frozen=True)
class Location:
    """A source position. Line and column are both 1-based."""

    file: str
    line: int
    column: int

    def sort_key(self) -> tuple[str, int, int]:
        return (self.file, self.line, self.column)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Parameter:
    """A method parameter."""

    name: str
    type: str
    ref_kind: RefKind = RefKind.NONE


@dataclass(frozen=True)
class SymbolRef:
    """
    Immutable handle to a symbol of the Semantic Service.

    Identity is the ``id`` key alone: two handles with the same id are the same
    symbol even when they were produced by different lookups.
    """

    id: str
    name: str
    kind: SymbolKind
    display: str = field(compare=False)
    location: Location | None = field(default=None, compare=False)
    containing_type: str | None = field(default=None, compare=False)
    containing_namespace: str | None = field(default=None, compare=False)
    type_kind: TypeKind | None = field(default=None, compare=False)
    method_kind: MethodKind | None = field(default=None, compare=False)
    parameters: tuple[Parameter, ...] = field(default=(), compare=False)
    member_type: str | None = field(default=None, compare=False)  # return type for methods
    accessibility: str = field(default="Public", compare=False)
    is_static: bool = field(default=False, compare=False)
    is_virtual: bool = field(default=False, compare=False)
    is_abstract: bool = field(default=False, compare=False)
    is_override: bool = field(default=False, compare=False)
    is_sealed: bool = field(default=False, compare=False)
    is_implicit: bool = field(default=False, compare=False)

    @property
    def in_source(self) -> bool:
        """True when the symbol has a declaration in the loaded sources."""
        return self.location is not None

    @property
    def is_constructor(self) -> bool:
        return self.method_kind in (MethodKind.CONSTRUCTOR, MethodKind.STATIC_CONSTRUCTOR)

    @property
    def is_accessor(self) -> bool:
        return self.method_kind in (MethodKind.PROPERTY_GET, MethodKind.PROPERTY_SET)

    @property
    def is_overridable(self) -> bool:
        return self.is_virtual or self.is_abstract or self.is_override

    def __str__(self) -> str:
        if self.location is not None:
            return f"{self.display} at {self.location}"
        return self.display


@dataclass(frozen=True)
class ReferenceLocation:
    """A location where a symbol is referenced, with its source line."""

    location: Location
    text: str = ""


@dataclass(frozen=True)
class CallerInfo:
    """A method that calls a given method, and where it does so."""

    caller: SymbolRef
    is_direct: bool
    call_sites: tuple[Location, ...] = ()


@dataclass(frozen=True)
class TargetDescriptor:
    """
    What a request is about: a qualified name or a (file, line, column) triple.

    Use ``from_arguments`` to build one from raw tool arguments; it enforces
    that exactly one form is present.
    """

    qualified_name: str | None = None
    file: str | None = None
    line: int | None = None
    column: int | None = None

    @property
    def is_position(self) -> bool:
        return self.qualified_name is None

    @classmethod
    def from_arguments(
        cls,
        fully_qualified_name: str | None = None,
        file: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> "TargetDescriptor":
        # Imported here to keep models free of an import cycle with errors
        from ..errors import InvalidInputError

        name = fully_qualified_name.strip() if fully_qualified_name else None
        has_position = bool(file) and line is not None and column is not None

        if name and (file or line is not None or column is not None):
            raise InvalidInputError("Provide either fully_qualified_name OR file+line+column, not both.")
        if name:
            return cls(qualified_name=name)
        if not has_position:
            raise InvalidInputError("Provide either fully_qualified_name OR file+line+column.")
        if line < 1 or column < 1:
            raise InvalidInputError(f"line and column are 1-based (got {line}:{column}).")
        return cls(file=file, line=line, column=column)

    def __str__(self) -> str:
        if self.qualified_name is not None:
            return self.qualified_name
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Resolved:
    """The descriptor identifies exactly one symbol."""

    symbol: SymbolRef


@dataclass(frozen=True)
class Ambiguous:
    """The descriptor matches several equally valid symbols."""

    candidates: tuple[SymbolRef, ...]
    type: SymbolRef | None = None


@dataclass(frozen=True)
class NotFound:
    """Nothing matches the descriptor."""

    reason: str | None = None


ResolutionResult = Resolved | Ambiguous | NotFound
