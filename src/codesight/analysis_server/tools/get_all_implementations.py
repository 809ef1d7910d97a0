"""Implementations of an interface or of one interface member."""

from ..models.response_models import ImplementationsResponse
from ..semantic.workspace import WorkspaceHost
from ._common import begin_request, page_fields, symbol_info, target_descriptor
from .relationship_graph_builder import RelationshipGraphBuilder
from .symbol_resolver import require_resolved


def get_all_implementations_impl(
    fully_qualified_name: str | None = None,
    file: str | None = None,
    line: int | None = None,
    column: int | None = None,
    member: str | None = None,
    include_derived_interfaces: bool = True,
    solution_only: bool = True,
    page: int | None = 1,
    page_size: int | None = None,
    cursor: str | None = None,
    timeout_ms: int | None = None,
    host: WorkspaceHost | None = None,
) -> ImplementationsResponse:
    """
    List the classes and structs implementing an interface, or the members
    implementing an interface member.

    Args:
        fully_qualified_name: Interface ("Ns.IRepo") or interface member ("Ns.IRepo.Save")
        file: Source file of a position on the interface or member
        line: 1-based line of that position
        column: 1-based column of that position
        member: Member name to restrict an interface target to
        include_derived_interfaces: Also list interfaces extending the interface
        solution_only: Drop results declared outside the loaded sources
        page: Page number over implementations
        page_size: Implementations per page
        cursor: Continuation token from a previous page (overrides page)
        timeout_ms: Time budget for the request
    """
    descriptor = target_descriptor(fully_qualified_name, file, line, column)
    context = begin_request(timeout_ms, host=host)

    target = require_resolved(context.resolver.resolve(descriptor), descriptor)
    result = RelationshipGraphBuilder(context.snapshot, token=context.token).implementations(
        target,
        member_name=member,
        include_derived_interfaces=include_derived_interfaces,
        solution_only=solution_only,
    )

    implementations_page = context.page([symbol_info(s) for s in result.implementations], page, page_size, cursor)
    derived = None
    if result.derived_interfaces is not None:
        derived = [symbol_info(s) for s in result.derived_interfaces]

    return ImplementationsResponse(
        target=symbol_info(result.member or result.interface),
        implementations=implementations_page.items,
        derived_interfaces=derived,
        **page_fields(implementations_page),
    )
