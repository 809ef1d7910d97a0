"""Describe the symbol behind a qualified name or source position."""

from ..models.response_models import DescribeSymbolResponse
from ..models.symbol_models import SymbolKind
from ..semantic.workspace import WorkspaceHost
from ._common import begin_request, symbol_info, symbol_infos, target_descriptor
from .symbol_resolver import require_resolved


def describe_symbol_impl(
    fully_qualified_name: str | None = None,
    file: str | None = None,
    line: int | None = None,
    column: int | None = None,
    host: WorkspaceHost | None = None,
) -> DescribeSymbolResponse:
    descriptor = target_descriptor(fully_qualified_name, file, line, column)
    context = begin_request(host=host)
    service = context.snapshot

    symbol = require_resolved(context.resolver.resolve(descriptor), descriptor)
    response = DescribeSymbolResponse(symbol=symbol_info(symbol))

    if symbol.kind == SymbolKind.NAMED_TYPE:
        base = service.get_base_type(symbol)
        response.base_type = symbol_info(base) if base is not None else None
        response.interfaces = symbol_infos(service.get_interfaces(symbol, transitive=False))
    elif symbol.kind == SymbolKind.PROPERTY:
        response.property_accessors = [symbol_info(a) for a in service.get_accessors(symbol) if a is not None]

    return response
