"""
Inheritance view of a type: ancestors, interfaces, descendants and overrides.

The flat descendant list is paginated; the tree is bounded by max_depth instead.
"""

from ..models.response_models import InheritanceTreeResponse, OverrideEntry, TreeNode
from ..semantic.workspace import WorkspaceHost
from ._common import begin_request, page_fields, symbol_info, symbol_infos, target_descriptor
from .relationship_graph_builder import DescendantNode, Direction, RelationshipGraphBuilder
from .symbol_resolver import require_resolved


def _tree(node: DescendantNode) -> TreeNode:
    return TreeNode(symbol=symbol_info(node.symbol), children=[_tree(child) for child in node.children])


def get_inheritance_tree_impl(
    fully_qualified_name: str | None = None,
    file: str | None = None,
    line: int | None = None,
    column: int | None = None,
    direction: str = "both",
    include_interfaces: bool = True,
    include_overrides: bool = False,
    max_depth: int | None = None,
    solution_only: bool = True,
    page: int | None = 1,
    page_size: int | None = None,
    cursor: str | None = None,
    timeout_ms: int | None = None,
    host: WorkspaceHost | None = None,
) -> InheritanceTreeResponse:
    descriptor = target_descriptor(fully_qualified_name, file, line, column)
    parsed_direction = Direction.parse(direction)
    context = begin_request(timeout_ms, host=host)
    max_depth = context.config.clamp_tree_depth(max_depth)

    type_symbol = require_resolved(context.resolver.resolve_type(descriptor), descriptor)
    graph = RelationshipGraphBuilder(context.snapshot, token=context.token).build(
        type_symbol,
        direction=parsed_direction,
        max_depth=max_depth,
        include_interfaces=include_interfaces,
        include_overrides=include_overrides,
        solution_only=solution_only,
    )

    descendants_page = context.page(symbol_infos(graph.descendants_flat), page, page_size, cursor)
    response = InheritanceTreeResponse(
        type=symbol_info(type_symbol),
        direction=parsed_direction.value,
        max_depth=max_depth,
        descendants=descendants_page.items,
        **page_fields(descendants_page),
    )
    if parsed_direction in (Direction.BOTH, Direction.ANCESTORS):
        response.ancestors = [symbol_info(a) for a in graph.ancestors]
    if include_interfaces:
        response.interfaces = [symbol_info(i) for i in graph.interfaces]
    if graph.descendants_tree is not None:
        response.descendants_tree = _tree(graph.descendants_tree)
    if graph.overrides is not None:
        response.overrides = [
            OverrideEntry(member=symbol_info(member), overrides=[symbol_info(o) for o in overriders])
            for member, overriders in graph.overrides
        ]
    return response
