"""
Build a ``WorkspaceSnapshot`` from a semantic index file.

The index is YAML (JSON documents load too) exported by a compiler front-end:
declared types with their members, method bodies as operation trees, and
optional explicit reference lists. See ``examples/sample_workspace.yaml``.

Types and members that bodies mention without declaring (framework APIs) are
added as metadata-only symbols: they have no source location and no body.
"""

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from ..errors import InvalidInputError
from ..models.operations import (
    Argument,
    CompoundAssignment,
    EventReference,
    FieldReference,
    IncrementOrDecrement,
    Invocation,
    ObjectCreation,
    Operation,
    OperationNode,
    PropertyReference,
    SimpleAssignment,
)
from ..models.symbol_models import (
    Location,
    MethodKind,
    Parameter,
    RefKind,
    SymbolKind,
    SymbolRef,
    TypeKind,
)
from .names import (
    CONSTRUCTOR_NAME,
    normalize_type_name,
    parameters_match,
    simple_type_name,
    split_member,
    split_parameter_list,
    split_signature,
)
from .snapshot import Span, SymbolTables, WorkspaceSnapshot

logger = logging.getLogger(__name__)

INDEX_SUFFIXES = (".yaml", ".yml", ".json")

_TYPE_KINDS = {
    "class": TypeKind.CLASS,
    "struct": TypeKind.STRUCT,
    "interface": TypeKind.INTERFACE,
    "enum": TypeKind.ENUM,
    "delegate": TypeKind.DELEGATE,
}

_OP_ALIASES = {
    "call": "invocation",
    "new": "object_creation",
    "property": "property_reference",
    "field": "field_reference",
    "event": "event_reference",
    "assign": "assignment",
    "compound": "compound_assignment",
}


def load_workspace_index(path: str | os.PathLike) -> WorkspaceSnapshot:
    """
    Load an index file into a new snapshot.

    Raises:
        InvalidInputError: the file is missing, unreadable or malformed
    """
    index_path = Path(path).expanduser().resolve()
    if not index_path.is_file():
        raise InvalidInputError(f"Workspace index not found: {path}")
    if index_path.suffix.lower() not in INDEX_SUFFIXES:
        raise InvalidInputError(f"Unsupported workspace index extension: {index_path.suffix}")

    try:
        with open(index_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise InvalidInputError(f"Failed to read workspace index {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidInputError(f"Workspace index {path} must contain a mapping at top level")

    root = index_path.parent
    if data.get("root"):
        root = (index_path.parent / str(data["root"])).resolve()

    logger.info(f"Loading workspace index {index_path}")
    return build_snapshot(data, root=str(root), source_path=str(index_path))


def build_snapshot(data: dict[str, Any], root: str, source_path: str | None = None) -> WorkspaceSnapshot:
    """Build a snapshot from an already parsed index document."""
    builder = _IndexBuilder(data, root)
    tables = builder.build()
    name = str(data.get("name") or Path(root).name or "workspace")
    return WorkspaceSnapshot(name=name, root=root, tables=tables, source_path=source_path)


def _require(mapping: dict, key: str, where: str) -> Any:
    value = mapping.get(key)
    if value in (None, ""):
        raise InvalidInputError(f"Missing '{key}' in {where}")
    return value


def _integer(value: Any, key: str, where: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"'{key}' in {where} must be an integer (got {value!r})") from e


def _ref_kind(value: Any, where: str) -> RefKind:
    try:
        return RefKind(str(value).lower())
    except ValueError as e:
        allowed = ", ".join(k.value for k in RefKind)
        raise InvalidInputError(f"Unknown ref_kind '{value}' in {where} (expected one of: {allowed})") from e


class _IndexBuilder:
    """Two passes: declare every symbol, then link hierarchy and bodies."""

    def __init__(self, data: dict[str, Any], root: str):
        self.data = data
        self.root = root
        self.symbols: dict[str, SymbolRef] = {}
        self.type_names: dict[str, str] = {}
        self.members: dict[str, list[str]] = {}
        self.containing: dict[str, str] = {}
        self.base_types: dict[str, str] = {}
        self.declared_interfaces: dict[str, tuple[str, ...]] = {}
        self.accessors: dict[str, tuple[str | None, str | None]] = {}
        self.overridden: dict[str, str] = {}
        self.explicit_implementations: dict[str, tuple[str, ...]] = {}
        self.bodies: dict[str, Operation] = {}
        self.spans: dict[str, Span] = {}
        self.explicit_references: dict[str, tuple[Location, ...]] = {}
        self.source_definitions: dict[str, str] = {}
        self.metadata_types: set[str] = set()

        # Deferred work for the second pass
        self._pending_bodies: list[tuple[str, str | None, Any]] = []
        self._pending_links: list[tuple[str, dict[str, Any]]] = []
        self._pending_members: list[tuple[str, dict[str, Any]]] = []

    # Entry point

    def build(self) -> SymbolTables:
        types = self.data.get("types") or []
        if not isinstance(types, list):
            raise InvalidInputError("'types' must be a list")

        for type_data in types:
            self._declare_type(type_data)
        for type_id, type_data in self._pending_links:
            self._link_type(type_id, type_data)
        for member_id, member_data in self._pending_members:
            self._link_member(member_id, member_data)
        for method_id, file, body in self._pending_bodies:
            self.bodies[method_id] = self._operation(body, file, f"body of {self.symbols[method_id].display}")

        for entry in self.data.get("references") or []:
            self._declare_references(entry)

        return SymbolTables(
            symbols=self.symbols,
            type_names=self.type_names,
            members={k: tuple(v) for k, v in self.members.items()},
            containing=self.containing,
            base_types=self.base_types,
            declared_interfaces=self.declared_interfaces,
            accessors=self.accessors,
            overridden=self.overridden,
            explicit_implementations=self.explicit_implementations,
            bodies=self.bodies,
            spans=self.spans,
            explicit_references=self.explicit_references,
            source_definitions=self.source_definitions,
            source_lines=self._source_lines(),
        )

    # Paths and locations

    def _path(self, file: str) -> str:
        if os.path.isabs(file):
            return os.path.normpath(file)
        return os.path.normpath(os.path.join(self.root, file))

    def _location(self, data: dict[str, Any], file: str | None, where: str = "workspace index") -> Location | None:
        own_file = data.get("file")
        target_file = self._path(own_file) if own_file else file
        if target_file is None or data.get("line") is None:
            return None
        return Location(
            file=target_file,
            line=_integer(data["line"], "line", where),
            column=_integer(data.get("column", 1), "column", where),
        )

    def _span(self, data: dict[str, Any], location: Location | None, where: str = "workspace index") -> Span | None:
        if location is None:
            return None
        end_line = _integer(data.get("end_line", location.line), "end_line", where)
        span = Span(file=location.file, start_line=location.line, start_column=1, end_line=end_line)
        if "end_column" in data:
            end_column = _integer(data["end_column"], "end_column", where)
            span = Span(span.file, span.start_line, span.start_column, span.end_line, end_column)
        return span

    def _parse_location_text(self, value: Any, where: str) -> Location:
        if isinstance(value, dict):
            location = self._location(value, None, where)
            if location is None:
                raise InvalidInputError(f"Location in {where} needs file and line")
            return location
        text = str(value)
        try:
            file, line, column = text.rsplit(":", 2)
            return Location(file=self._path(file), line=int(line), column=int(column))
        except ValueError as e:
            raise InvalidInputError(f"Location '{text}' in {where} must look like file:line:column") from e

    # Declarations

    def _register_type_name(self, qualified_name: str, type_id: str) -> None:
        self.type_names[qualified_name] = type_id
        if "+" in qualified_name:
            self.type_names.setdefault(qualified_name.replace("+", "."), type_id)

    def _declare_type(self, data: dict[str, Any]) -> str:
        if not isinstance(data, dict):
            raise InvalidInputError("Each entry in 'types' must be a mapping")
        qualified = str(_require(data, "name", "type declaration"))
        if qualified in self.type_names:
            raise InvalidInputError(f"Type declared twice: {qualified}")

        kind = _TYPE_KINDS.get(str(data.get("kind", "class")).lower())
        if kind is None:
            raise InvalidInputError(f"Unknown type kind '{data.get('kind')}' for {qualified}")

        is_metadata = bool(data.get("metadata", False))
        file = None if is_metadata or not data.get("file") else self._path(str(data["file"]))
        location = None if is_metadata else self._location(data, file, f"type {qualified}")
        modifiers = {str(m).lower() for m in data.get("modifiers") or []}

        type_id = f"T:{qualified}"
        symbol = self._new_type_symbol(qualified, kind, location, modifiers, data.get("namespace"))
        symbol = replace(symbol, accessibility=str(data.get("access", "Public")).capitalize())
        self.symbols[type_id] = symbol
        self._register_type_name(qualified, type_id)
        self.members[type_id] = []
        if is_metadata:
            self.metadata_types.add(type_id)
        span = self._span(data, location, f"type {qualified}")
        if span is not None:
            self.spans[type_id] = span

        # Nested types live under their outer type
        if "+" in qualified:
            outer_id = self.type_names.get(qualified.rsplit("+", 1)[0])
            if outer_id is not None:
                self.containing[type_id] = outer_id

        for member_data in data.get("members") or []:
            self._declare_member(type_id, member_data, file, is_metadata)

        has_constructor = any(self.symbols[m].method_kind == MethodKind.CONSTRUCTOR for m in self.members[type_id])
        if not has_constructor and kind in (TypeKind.CLASS, TypeKind.STRUCT) and "static" not in modifiers:
            self._declare_implicit_constructor(type_id)

        self._pending_links.append((type_id, data))
        return type_id

    def _new_type_symbol(
        self,
        qualified: str,
        kind: TypeKind,
        location: Location | None,
        modifiers: set[str],
        namespace: str | None = None,
    ) -> SymbolRef:
        outer, _, _ = qualified.rpartition("+")
        container_path = outer if outer else qualified
        if namespace is None:
            namespace = container_path.rpartition(".")[0] if "." in container_path else None
        containing_type = outer.replace("+", ".") if outer else None
        return SymbolRef(
            id=f"T:{qualified}",
            name=simple_type_name(qualified),
            kind=SymbolKind.NAMED_TYPE,
            display=qualified.replace("+", "."),
            location=location,
            containing_type=containing_type,
            containing_namespace=namespace or None,
            type_kind=kind,
            is_static="static" in modifiers,
            is_abstract="abstract" in modifiers or kind == TypeKind.INTERFACE,
            is_sealed="sealed" in modifiers or kind in (TypeKind.STRUCT, TypeKind.ENUM),
        )

    def _ensure_metadata_type(self, qualified: str, kind: TypeKind = TypeKind.CLASS) -> str:
        type_id = self.type_names.get(qualified)
        if type_id is not None:
            return type_id
        type_id = f"T:{qualified}"
        self.symbols[type_id] = self._new_type_symbol(qualified, kind, None, set())
        self._register_type_name(qualified, type_id)
        self.members[type_id] = []
        self.metadata_types.add(type_id)
        logger.debug(f"Added metadata-only type {qualified}")
        return type_id

    def _parameters(self, raw: Any, where: str) -> tuple[Parameter, ...]:
        params = []
        for i, item in enumerate(raw or []):
            if isinstance(item, dict):
                ref_kind = _ref_kind(item.get("ref_kind", "none"), where)
                params.append(Parameter(name=str(item.get("name", f"p{i}")), type=str(_require(item, "type", where)), ref_kind=ref_kind))
                continue
            tokens = str(item).split()
            ref_kind = RefKind.NONE
            if tokens and tokens[0] in ("ref", "out", "in"):
                ref_kind = RefKind(tokens.pop(0))
            if not tokens:
                raise InvalidInputError(f"Empty parameter in {where}")
            name = tokens.pop() if len(tokens) > 1 else f"p{i}"
            params.append(Parameter(name=name, type=" ".join(tokens), ref_kind=ref_kind))
        return tuple(params)

    def _method_id(self, qualified_type: str, name: str, params: tuple[Parameter, ...]) -> str:
        member = "#ctor" if name == CONSTRUCTOR_NAME else "#cctor" if name == ".cctor" else name
        signature = ",".join(normalize_type_name(p.type) for p in params)
        return f"M:{qualified_type}.{member}({signature})"

    def _add_member(self, type_id: str, symbol: SymbolRef, span: Span | None = None) -> None:
        if symbol.id in self.symbols:
            raise InvalidInputError(f"Member declared twice: {symbol.display}")
        self.symbols[symbol.id] = symbol
        self.members[type_id].append(symbol.id)
        self.containing[symbol.id] = type_id
        if span is not None:
            self.spans[symbol.id] = span

    def _declare_implicit_constructor(self, type_id: str) -> None:
        type_symbol = self.symbols[type_id]
        qualified = type_id[2:]
        ctor = SymbolRef(
            id=self._method_id(qualified, CONSTRUCTOR_NAME, ()),
            name=CONSTRUCTOR_NAME,
            kind=SymbolKind.METHOD,
            display=f"{type_symbol.display}.{type_symbol.name}()",
            location=type_symbol.location,
            containing_type=type_symbol.display,
            containing_namespace=type_symbol.containing_namespace,
            method_kind=MethodKind.CONSTRUCTOR,
            member_type="void",
            is_implicit=True,
        )
        self._add_member(type_id, ctor)

    def _declare_member(self, type_id: str, data: dict[str, Any], file: str | None, is_metadata: bool) -> None:
        type_symbol = self.symbols[type_id]
        qualified = type_id[2:]
        where = f"member of {qualified}"
        if not isinstance(data, dict):
            raise InvalidInputError(f"Each {where} must be a mapping")

        member_kind = str(data.get("kind", "method")).lower()
        modifiers = {str(m).lower() for m in data.get("modifiers") or []}
        if type_symbol.type_kind == TypeKind.INTERFACE and "static" not in modifiers:
            modifiers.add("abstract")
        location = None if is_metadata else self._location(data, file, where)
        span = self._span(data, location, where)
        common = dict(
            containing_type=type_symbol.display,
            containing_namespace=type_symbol.containing_namespace,
            accessibility=str(data.get("access", "Public")).capitalize(),
            is_static="static" in modifiers,
            is_virtual="virtual" in modifiers,
            is_abstract="abstract" in modifiers,
            is_override="override" in modifiers,
            is_sealed="sealed" in modifiers,
            location=location,
        )

        if member_kind in ("constructor", "ctor", "static_constructor"):
            is_static_ctor = member_kind == "static_constructor"
            name = ".cctor" if is_static_ctor else CONSTRUCTOR_NAME
            params = self._parameters(data.get("parameters"), where)
            symbol = SymbolRef(
                id=self._method_id(qualified, name, params),
                name=name,
                kind=SymbolKind.METHOD,
                display=f"{type_symbol.display}.{type_symbol.name}({', '.join(p.type for p in params)})",
                method_kind=MethodKind.STATIC_CONSTRUCTOR if is_static_ctor else MethodKind.CONSTRUCTOR,
                parameters=params,
                member_type="void",
                is_implicit=bool(data.get("implicit", False)),
                **common,
            )
            self._add_member(type_id, symbol, span)
            member_id = symbol.id
            self._queue_body(symbol.id, file, data)
        elif member_kind == "method":
            name = str(_require(data, "name", where))
            params = self._parameters(data.get("parameters"), where)
            symbol = SymbolRef(
                id=self._method_id(qualified, name, params),
                name=name,
                kind=SymbolKind.METHOD,
                display=f"{type_symbol.display}.{name}({', '.join(p.type for p in params)})",
                method_kind=MethodKind.ORDINARY,
                parameters=params,
                member_type=str(data.get("returns", "void")),
                is_implicit=bool(data.get("implicit", False)),
                **common,
            )
            self._add_member(type_id, symbol, span)
            member_id = symbol.id
            self._queue_body(symbol.id, file, data)
        elif member_kind == "property":
            member_id = self._declare_property(type_id, data, file, is_metadata, common, span)
        elif member_kind in ("field", "event"):
            name = str(_require(data, "name", where))
            prefix, kind = ("F", SymbolKind.FIELD) if member_kind == "field" else ("E", SymbolKind.EVENT)
            symbol = SymbolRef(
                id=f"{prefix}:{qualified}.{name}",
                name=name,
                kind=kind,
                display=f"{type_symbol.display}.{name}",
                member_type=str(data.get("type", "object")),
                **common,
            )
            self._add_member(type_id, symbol, span)
            member_id = symbol.id
        else:
            raise InvalidInputError(f"Unknown member kind '{member_kind}' in {where}")

        self._pending_members.append((member_id, data))

    def _declare_property(
        self,
        type_id: str,
        data: dict[str, Any],
        file: str | None,
        is_metadata: bool,
        common: dict[str, Any],
        span: Span | None,
    ) -> str:
        type_symbol = self.symbols[type_id]
        qualified = type_id[2:]
        name = str(_require(data, "name", f"property of {qualified}"))
        property_type = str(data.get("type", "object"))
        prop = SymbolRef(
            id=f"P:{qualified}.{name}",
            name=name,
            kind=SymbolKind.PROPERTY,
            display=f"{type_symbol.display}.{name}",
            member_type=property_type,
            **common,
        )
        self._add_member(type_id, prop, span)

        accessor_ids: list[str | None] = []
        has_explicit_accessors = "get" in data or "set" in data
        for keyword, method_kind in (("get", MethodKind.PROPERTY_GET), ("set", MethodKind.PROPERTY_SET)):
            raw = data.get(keyword, keyword == "get" and not has_explicit_accessors)
            if not raw:
                accessor_ids.append(None)
                continue
            accessor_data = raw if isinstance(raw, dict) else {}
            accessor_where = f"property {qualified}.{name}"
            accessor_location = None if is_metadata else self._location(accessor_data, file, accessor_where) or common["location"]
            params = (Parameter(name="value", type=property_type),) if keyword == "set" else ()
            accessor = SymbolRef(
                id=f"M:{qualified}.{keyword}_{name}",
                name=f"{keyword}_{name}",
                kind=SymbolKind.METHOD,
                display=f"{type_symbol.display}.{name}.{keyword}",
                method_kind=method_kind,
                parameters=params,
                member_type=property_type if keyword == "get" else "void",
                **{**common, "location": accessor_location},
            )
            accessor_span = (
                self._span(accessor_data, self._location(accessor_data, file, accessor_where), accessor_where)
                if accessor_data
                else None
            )
            self._add_member(type_id, accessor, accessor_span)
            self.containing[accessor.id] = prop.id
            self._queue_body(accessor.id, file, accessor_data)
            accessor_ids.append(accessor.id)

        self.accessors[prop.id] = (accessor_ids[0], accessor_ids[1])
        return prop.id

    def _queue_body(self, method_id: str, file: str | None, data: dict[str, Any]) -> None:
        body = data.get("body")
        if body is not None:
            self._pending_bodies.append((method_id, file, body))

    # Second pass: hierarchy

    def _link_type(self, type_id: str, data: dict[str, Any]) -> None:
        base = data.get("base")
        if base:
            self.base_types[type_id] = self._ensure_metadata_type(str(base))
        interfaces = []
        for interface_name in data.get("interfaces") or []:
            interfaces.append(self._ensure_metadata_type(str(interface_name), TypeKind.INTERFACE))
        if interfaces:
            self.declared_interfaces[type_id] = tuple(dict.fromkeys(interfaces))
        if data.get("source_definition"):
            source_id = self.type_names.get(str(data["source_definition"]))
            if source_id is None:
                raise InvalidInputError(f"Unknown source_definition '{data['source_definition']}' for {type_id[2:]}")
            self.source_definitions[type_id] = source_id

    def _link_member(self, member_id: str, data: dict[str, Any]) -> None:
        symbol = self.symbols[member_id]
        where = symbol.display

        overrides = data.get("overrides")
        if overrides:
            target = self._resolve_member(str(overrides), where, expected_kind=symbol.kind)
            self.overridden[member_id] = target.id
        elif symbol.is_override:
            inherited = self._find_inherited(member_id)
            if inherited is not None:
                self.overridden[member_id] = inherited
        if symbol.kind == SymbolKind.PROPERTY and member_id in self.overridden:
            self._link_accessor_overrides(member_id, self.overridden[member_id])

        implements = data.get("implements")
        if implements:
            names = implements if isinstance(implements, list) else [implements]
            self.explicit_implementations[member_id] = tuple(
                self._resolve_member(str(n), where, expected_kind=symbol.kind).id for n in names
            )

    def _find_inherited(self, member_id: str) -> str | None:
        symbol = self.symbols[member_id]
        type_id = self.containing[member_id]
        signature = [p.type for p in symbol.parameters]
        current = self.base_types.get(type_id)
        seen = set()
        while current is not None and current not in seen:
            seen.add(current)
            for candidate_id in self.members.get(current, ()):
                candidate = self.symbols[candidate_id]
                if (
                    candidate.name == symbol.name
                    and candidate.kind == symbol.kind
                    and parameters_match(signature, [p.type for p in candidate.parameters])
                ):
                    return candidate_id
            current = self.base_types.get(current)
        return None

    def _link_accessor_overrides(self, property_id: str, overridden_property_id: str) -> None:
        own = self.accessors.get(property_id, (None, None))
        base = self.accessors.get(overridden_property_id, (None, None))
        for accessor_id, base_accessor_id in zip(own, base):
            if accessor_id and base_accessor_id:
                self.overridden[accessor_id] = base_accessor_id

    # Member references inside bodies

    def _resolve_member(
        self,
        reference: str,
        where: str,
        expected_kind: SymbolKind | None = None,
        argument_count: int | None = None,
    ) -> SymbolRef:
        base, parameter_list = split_signature(reference)
        parts = split_member(base)
        if parts is None:
            raise InvalidInputError(f"'{reference}' in {where} is not a Type.Member reference")
        type_name, member_name = parts
        type_id = self.type_names.get(type_name)
        if type_id is None:
            type_id = self._ensure_metadata_type(type_name)

        candidates = [
            self.symbols[m]
            for m in self.members[type_id]
            if self.symbols[m].name == member_name and (expected_kind is None or self.symbols[m].kind == expected_kind)
        ]
        if parameter_list is not None:
            wanted = split_parameter_list(parameter_list)
            candidates = [c for c in candidates if parameters_match(wanted, [p.type for p in c.parameters])]
        elif len(candidates) > 1 and argument_count is not None:
            candidates = [c for c in candidates if len(c.parameters) == argument_count]

        if len(candidates) == 1:
            return candidates[0]
        if len(candidates) > 1:
            raise InvalidInputError(f"'{reference}' in {where} matches several overloads; add a parameter list")
        if type_id not in self.metadata_types:
            raise InvalidInputError(f"'{reference}' in {where} does not name a member of {type_name}")
        return self._declare_metadata_member(type_id, member_name, parameter_list, expected_kind, argument_count)

    def _declare_metadata_member(
        self,
        type_id: str,
        member_name: str,
        parameter_list: str | None,
        expected_kind: SymbolKind | None,
        argument_count: int | None,
    ) -> SymbolRef:
        type_symbol = self.symbols[type_id]
        qualified = type_id[2:]
        kind = expected_kind or SymbolKind.METHOD
        common = dict(
            containing_type=type_symbol.display,
            containing_namespace=type_symbol.containing_namespace,
        )
        if kind == SymbolKind.METHOD:
            if parameter_list is not None:
                types = split_parameter_list(parameter_list)
            else:
                types = ["object"] * (argument_count or 0)
            params = tuple(Parameter(name=f"p{i}", type=t) for i, t in enumerate(types))
            is_ctor = member_name == CONSTRUCTOR_NAME
            display_name = type_symbol.name if is_ctor else member_name
            symbol = SymbolRef(
                id=self._method_id(qualified, member_name, params),
                name=member_name,
                kind=kind,
                display=f"{type_symbol.display}.{display_name}({', '.join(types)})",
                method_kind=MethodKind.CONSTRUCTOR if is_ctor else MethodKind.ORDINARY,
                parameters=params,
                **common,
            )
            self._add_member(type_id, symbol)
            return symbol

        prefix = {SymbolKind.PROPERTY: "P", SymbolKind.FIELD: "F", SymbolKind.EVENT: "E"}[kind]
        symbol = SymbolRef(
            id=f"{prefix}:{qualified}.{member_name}",
            name=member_name,
            kind=kind,
            display=f"{type_symbol.display}.{member_name}",
            **common,
        )
        self._add_member(type_id, symbol)
        if kind == SymbolKind.PROPERTY:
            getter = SymbolRef(
                id=f"M:{qualified}.get_{member_name}",
                name=f"get_{member_name}",
                kind=SymbolKind.METHOD,
                display=f"{type_symbol.display}.{member_name}.get",
                method_kind=MethodKind.PROPERTY_GET,
                **common,
            )
            setter = SymbolRef(
                id=f"M:{qualified}.set_{member_name}",
                name=f"set_{member_name}",
                kind=SymbolKind.METHOD,
                display=f"{type_symbol.display}.{member_name}.set",
                method_kind=MethodKind.PROPERTY_SET,
                parameters=(Parameter(name="value", type="object"),),
                **common,
            )
            for accessor in (getter, setter):
                self._add_member(type_id, accessor)
                self.containing[accessor.id] = symbol.id
            self.accessors[symbol.id] = (getter.id, setter.id)
        return symbol

    def _resolve_constructor(self, data: dict[str, Any], argument_count: int, where: str) -> SymbolRef:
        if data.get("constructor"):
            reference = str(data["constructor"])
            base, parameter_list = split_signature(reference)
            if split_member(base) is None or split_member(base)[1] != CONSTRUCTOR_NAME:
                reference = f"{base}.{CONSTRUCTOR_NAME}" + (f"({parameter_list})" if parameter_list is not None else "")
            return self._resolve_member(reference, where, SymbolKind.METHOD, argument_count)
        type_name = str(_require(data, "type", where))
        return self._resolve_member(f"{type_name}.{CONSTRUCTOR_NAME}", where, SymbolKind.METHOD, argument_count)

    # Operation trees

    def _operation(self, node: Any, file: str | None, where: str) -> Operation:
        if isinstance(node, list):
            return OperationNode(kind="block", children=tuple(self._operation(n, file, where) for n in node))
        if not isinstance(node, dict):
            return OperationNode(kind="literal")

        op = str(node.get("op", "block")).lower()
        op = _OP_ALIASES.get(op, op)
        location = self._location(node, file, where)

        def child(key: str) -> Operation | None:
            value = node.get(key)
            return None if value is None else self._operation(value, file, where)

        match op:
            case "invocation":
                raw_arguments = node.get("arguments") or []
                target = self._resolve_member(str(_require(node, "target", where)), where, SymbolKind.METHOD, len(raw_arguments))
                return Invocation(
                    target=target,
                    instance=child("instance"),
                    arguments=self._arguments(raw_arguments, target, file, where),
                    location=location,
                )
            case "object_creation":
                raw_arguments = node.get("arguments") or []
                ctor = self._resolve_constructor(node, len(raw_arguments), where)
                return ObjectCreation(
                    constructor=ctor,
                    arguments=self._arguments(raw_arguments, ctor, file, where),
                    initializer=child("initializer"),
                    location=location,
                )
            case "property_reference":
                prop = self._resolve_member(str(_require(node, "property", where)), where, SymbolKind.PROPERTY)
                return PropertyReference(
                    property=prop,
                    instance=child("instance"),
                    arguments=self._arguments(node.get("arguments") or [], None, file, where),
                    location=location,
                )
            case "field_reference":
                field = self._resolve_member(str(_require(node, "field", where)), where, SymbolKind.FIELD)
                return FieldReference(field=field, instance=child("instance"), location=location)
            case "event_reference":
                event = self._resolve_member(str(_require(node, "event", where)), where, SymbolKind.EVENT)
                return EventReference(event=event, instance=child("instance"), location=location)
            case "assignment":
                return SimpleAssignment(
                    target=self._operation(_require(node, "target", where), file, where),
                    value=self._operation(_require(node, "value", where), file, where),
                    location=location,
                )
            case "compound_assignment":
                return CompoundAssignment(
                    target=self._operation(_require(node, "target", where), file, where),
                    value=self._operation(_require(node, "value", where), file, where),
                    operator=str(node.get("operator", "+")),
                    location=location,
                )
            case "increment" | "decrement":
                return IncrementOrDecrement(
                    target=self._operation(_require(node, "target", where), file, where),
                    is_decrement=op == "decrement",
                    is_postfix=bool(node.get("postfix", True)),
                    location=location,
                )
            case "argument":
                return self._argument(node, RefKind.NONE, file, where)
            case _:
                children = node.get("children") or []
                if not isinstance(children, list):
                    children = [children]
                return OperationNode(
                    kind=op,
                    children=tuple(self._operation(c, file, where) for c in children),
                    location=location,
                )

    def _argument(self, node: dict[str, Any], parameter_ref_kind: RefKind, file: str | None, where: str) -> Argument:
        raw_kind = node.get("ref_kind")
        ref_kind = _ref_kind(raw_kind, where) if raw_kind else parameter_ref_kind
        return Argument(
            value=self._operation(_require(node, "value", where), file, where),
            ref_kind=ref_kind,
            location=self._location(node, file, where),
        )

    def _arguments(self, raw: list[Any], target: SymbolRef | None, file: str | None, where: str) -> tuple[Argument, ...]:
        arguments = []
        for i, item in enumerate(raw):
            parameter_ref_kind = RefKind.NONE
            if target is not None and i < len(target.parameters):
                parameter_ref_kind = target.parameters[i].ref_kind
            is_argument_node = isinstance(item, dict) and (item.get("op") == "argument" or ("value" in item and "op" not in item))
            if is_argument_node:
                arguments.append(self._argument(item, parameter_ref_kind, file, where))
            else:
                arguments.append(Argument(value=self._operation(item, file, where), ref_kind=parameter_ref_kind))
        return tuple(arguments)

    # References and sources

    def _declare_references(self, entry: dict[str, Any]) -> None:
        if not isinstance(entry, dict):
            raise InvalidInputError("Each entry in 'references' must be a mapping")
        name = str(_require(entry, "symbol", "references entry"))
        symbol_id = self.type_names.get(name)
        if symbol_id is None:
            symbol_id = self._resolve_member(name, "references").id
        where = f"references of {name}"
        locations = tuple(self._parse_location_text(value, where) for value in entry.get("locations") or [])
        self.explicit_references[symbol_id] = self.explicit_references.get(symbol_id, ()) + locations

    def _source_lines(self) -> dict[str, tuple[str, ...]]:
        lines: dict[str, tuple[str, ...]] = {}
        for file, text in (self.data.get("files") or {}).items():
            lines[self._path(str(file))] = tuple(str(text).splitlines())

        files = {s.location.file for s in self.symbols.values() if s.location is not None}
        files.update(span.file for span in self.spans.values())
        for file in files:
            if file in lines or not os.path.isfile(file):
                continue
            try:
                with open(file, encoding="utf-8", errors="replace") as f:
                    lines[file] = tuple(f.read().splitlines())
            except OSError as e:
                logger.warning(f"Could not read source file {file}: {e}")
        return lines
