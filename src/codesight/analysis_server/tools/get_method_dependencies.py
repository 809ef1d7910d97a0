"""
Calls, reads and writes of a method, optionally transitive, plus its callers.

Only ``calls`` is paginated; reads and writes are returned whole.
"""

import logging

from ..models.response_models import CallerEntry, MethodDependenciesResponse, TraversalStats
from ..semantic.workspace import WorkspaceHost
from ._common import begin_request, location_info, page_fields, symbol_info, symbol_infos, target_descriptor
from .dependency_graph_builder import DependencyGraphBuilder
from .symbol_resolver import METHOD_HINT, require_resolved

logger = logging.getLogger(__name__)


def get_method_dependencies_impl(
    fully_qualified_name: str | None = None,
    file: str | None = None,
    line: int | None = None,
    column: int | None = None,
    depth: int | None = None,
    include_callers: bool = False,
    treat_properties_as_methods: bool = True,
    page: int | None = 1,
    page_size: int | None = None,
    cursor: str | None = None,
    timeout_ms: int | None = None,
    host: WorkspaceHost | None = None,
) -> MethodDependenciesResponse:
    """
    Analyze the dependencies of a method.

    A type name without a member selects its constructor when the type has
    exactly one; otherwise the candidates are reported as AMBIGUOUS.

    Args:
        fully_qualified_name: "Ns.Type.Method", "Ns.Type.Method(int)", "Ns.Type..ctor" or "Ns.Type"
        file: Source file of a position inside the method
        line: 1-based line of that position
        column: 1-based column of that position
        depth: 1 for direct dependencies, more to follow calls transitively
        include_callers: Also report the direct callers of the method
        treat_properties_as_methods: Report property getters/setters as calls
        page: Page number over ``calls``
        page_size: Calls per page
        cursor: Continuation token from a previous page (overrides page)
        timeout_ms: Time budget for the request

    Returns:
        MethodDependenciesResponse with one page of calls
    """
    descriptor = target_descriptor(fully_qualified_name, file, line, column)
    context = begin_request(timeout_ms, host=host)
    depth = context.config.clamp_dependency_depth(depth)

    resolution = context.resolver.resolve_method(descriptor, treat_accessors=treat_properties_as_methods)
    root = require_resolved(resolution, descriptor, hint=METHOD_HINT)

    builder = DependencyGraphBuilder(
        context.snapshot,
        treat_accessors_as_calls=treat_properties_as_methods,
        token=context.token,
    )
    graph = builder.build(root, depth=depth, include_callers=include_callers)

    calls_page = context.page(symbol_infos(graph.calls), page, page_size, cursor)

    callers = None
    if graph.callers is not None:
        callers = [
            CallerEntry(
                caller=symbol_info(c.caller),
                is_direct=c.is_direct,
                call_sites=[location_info(site) for site in c.call_sites],
            )
            for c in graph.callers
        ]

    return MethodDependenciesResponse(
        symbol=symbol_info(root),
        depth=depth,
        calls=calls_page.items,
        reads=symbol_infos(graph.reads),
        writes=symbol_infos(graph.writes),
        callers=callers,
        stats=TraversalStats(
            methods_visited=graph.methods_visited,
            max_level_reached=graph.max_level_reached,
            call_edges=graph.call_edges,
            is_cyclic=graph.is_cyclic,
            skipped_methods=len(graph.skipped),
        ),
        **page_fields(calls_page),
    )
