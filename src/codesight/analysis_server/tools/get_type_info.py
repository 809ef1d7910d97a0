"""Member listing of a type, in declaration order."""

from ..models.response_models import MemberInfo, ParameterInfo, TypeInfoResponse
from ..models.symbol_models import SymbolKind, SymbolRef
from ..semantic.workspace import WorkspaceHost
from ._common import begin_request, page_fields, symbol_info, symbol_infos, target_descriptor
from .symbol_resolver import require_resolved


def _member_info(member: SymbolRef) -> MemberInfo:
    info = MemberInfo(
        name=member.name,
        display=member.display,
        kind=member.kind.value,
        accessibility=member.accessibility,
        is_static=member.is_static,
        type=member.member_type,
        method_kind=member.method_kind.value if member.method_kind else None,
    )
    if member.kind == SymbolKind.METHOD:
        info.parameters = [ParameterInfo(name=p.name, type=p.type, ref_kind=p.ref_kind.value) for p in member.parameters]
    if member.location is not None:
        info.file = member.location.file
        info.line = member.location.line
        info.column = member.location.column
    return info


def get_type_info_impl(
    fully_qualified_name: str | None = None,
    file: str | None = None,
    line: int | None = None,
    column: int | None = None,
    page: int | None = 1,
    page_size: int | None = None,
    cursor: str | None = None,
    host: WorkspaceHost | None = None,
) -> TypeInfoResponse:
    descriptor = target_descriptor(fully_qualified_name, file, line, column)
    context = begin_request(host=host)
    service = context.snapshot

    type_symbol = require_resolved(context.resolver.resolve_type(descriptor), descriptor)
    members = [_member_info(m) for m in service.get_members(type_symbol) if m.kind != SymbolKind.NAMED_TYPE]
    members_page = context.page(members, page, page_size, cursor)

    base = service.get_base_type(type_symbol)
    return TypeInfoResponse(
        type=symbol_info(type_symbol),
        base_type=symbol_info(base) if base is not None else None,
        interfaces=symbol_infos(service.get_interfaces(type_symbol, transitive=False)),
        members=members_page.items,
        **page_fields(members_page),
    )
