"""Qualified-name parsing and type-name normalization."""

import re

# Keyword aliases mapped to their canonical runtime type names
PRIMITIVE_ALIASES = {
    "bool": "System.Boolean",
    "byte": "System.Byte",
    "sbyte": "System.SByte",
    "char": "System.Char",
    "decimal": "System.Decimal",
    "double": "System.Double",
    "float": "System.Single",
    "int": "System.Int32",
    "uint": "System.UInt32",
    "long": "System.Int64",
    "ulong": "System.UInt64",
    "short": "System.Int16",
    "ushort": "System.UInt16",
    "object": "System.Object",
    "string": "System.String",
    "void": "System.Void",
    "nint": "System.IntPtr",
    "nuint": "System.UIntPtr",
}

CONSTRUCTOR_NAME = ".ctor"

_IDENTIFIER = re.compile(r"[A-Za-z_][\w.]*")
_PASSING_MODIFIERS = ("ref ", "out ", "in ", "params ", "this ")


def normalize_type_name(name: str) -> str:
    """
    Canonical spelling of a type name for signature comparison.

    ``global::`` prefixes, passing modifiers and whitespace are dropped and every
    keyword alias is replaced, including inside generic arguments and arrays:
    ``List<int>[]`` becomes ``List<System.Int32>[]``.
    """
    text = name.strip().replace("global::", "")
    stripped = True
    while stripped:
        stripped = False
        for modifier in _PASSING_MODIFIERS:
            if text.startswith(modifier):
                text = text[len(modifier):].lstrip()
                stripped = True
    text = re.sub(r"\s+", "", text)
    return _IDENTIFIER.sub(lambda m: PRIMITIVE_ALIASES.get(m.group(0), m.group(0)), text)


def split_parameter_list(parameter_list: str) -> list[str]:
    """Split a parameter list on top-level commas, keeping generic arguments intact."""
    parts = []
    depth = 0
    current = []
    for char in parameter_list:
        if char in "<[(":
            depth += 1
        elif char in ">])":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    tail = "".join(current).strip()
    if tail or parts:
        parts.append(tail)
    return [p for p in parts if p]


def split_signature(qualified_name: str) -> tuple[str, str | None]:
    """
    Separate an optional trailing parameter list.

    Returns:
        (name without parameters, parameter list text or None when absent)
    """
    open_index = qualified_name.find("(")
    if open_index < 0:
        return qualified_name.strip(), None
    close_index = qualified_name.rfind(")")
    base = qualified_name[:open_index].strip()
    if close_index > open_index:
        return base, qualified_name[open_index + 1 : close_index].strip()
    return base, qualified_name[open_index + 1 :].strip()


def split_member(base_name: str) -> tuple[str, str] | None:
    """
    Split ``Type.Member`` at the last separator.

    ``Ns.Type..ctor`` splits into ``("Ns.Type", ".ctor")``. Returns None when the
    name has no separator.
    """
    if base_name.endswith("." + CONSTRUCTOR_NAME):
        type_name = base_name[: -len(CONSTRUCTOR_NAME) - 1]
        return (type_name, CONSTRUCTOR_NAME) if type_name else None
    last_dot = base_name.rfind(".")
    if last_dot <= 0:
        return None
    return base_name[:last_dot], base_name[last_dot + 1 :]


def simple_type_name(qualified_name: str) -> str:
    """Last segment of a type name (``Ns.Outer+Inner`` gives ``Inner``)."""
    return re.split(r"[.+]", qualified_name)[-1]


def parameters_match(expected: list[str], actual: list[str]) -> bool:
    """Positional comparison of parameter type names after normalization."""
    if len(expected) != len(actual):
        return False
    return all(normalize_type_name(e) == normalize_type_name(a) for e, a in zip(expected, actual))
