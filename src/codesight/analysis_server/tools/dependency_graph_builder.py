"""
Bounded breadth-first dependency traversal over the call graph.

Level 1 is the root method. Each dequeued method is classified and merged into
the aggregate; its call targets are expanded while ``level < depth``. Call
edges are kept in a networkx DiGraph for traversal statistics.
"""

import logging
from collections import deque
from dataclasses import dataclass, field

import networkx as nx

from ..cancellation import CancellationToken
from ..errors import AnalysisToolError
from ..models.symbol_models import CallerInfo, SymbolRef
from ..semantic.service import SemanticService
from .operation_classifier import OperationClassification, OperationClassifier

logger = logging.getLogger(__name__)


@dataclass
class DependencyGraph:
    """Aggregated dependencies of a root method."""

    root: SymbolRef
    calls: set[SymbolRef] = field(default_factory=set)
    reads: set[SymbolRef] = field(default_factory=set)
    writes: set[SymbolRef] = field(default_factory=set)
    callers: list[CallerInfo] | None = None
    methods_visited: int = 0
    max_level_reached: int = 0
    call_edges: int = 0
    is_cyclic: bool = False
    skipped: list[str] = field(default_factory=list)  # displays of methods whose classification failed


class DependencyGraphBuilder:
    """Builds a ``DependencyGraph`` for one request."""

    def __init__(
        self,
        service: SemanticService,
        treat_accessors_as_calls: bool = True,
        token: CancellationToken | None = None,
    ):
        self.service = service
        self.classifier = OperationClassifier(service, treat_accessors_as_calls=treat_accessors_as_calls)
        self.token = token or CancellationToken.none()

    def build(self, root: SymbolRef, depth: int = 1, include_callers: bool = False) -> DependencyGraph:
        """
        Traverse the call graph from ``root``.

        Args:
            root: Method to analyze
            depth: 1 for direct dependencies only, more for transitive ones
            include_callers: Also query the direct callers of ``root``

        Returns:
            DependencyGraph with deduplicated calls/reads/writes

        Raises:
            AnalysisTimeoutError: the request deadline passed
        """
        depth = max(1, depth)
        result = DependencyGraph(root=root)
        aggregate = OperationClassification()
        call_graph = nx.DiGraph()
        call_graph.add_node(root.id)

        visited = {root}
        queue = deque([(root, 1)])
        while queue:
            self.token.check()
            method, level = queue.popleft()
            result.methods_visited += 1
            result.max_level_reached = max(result.max_level_reached, level)

            try:
                classification = self.classifier.classify(method)
            except AnalysisToolError:
                raise
            except Exception as e:
                logger.warning(f"Skipping {method.display}: classification failed: {e}")
                result.skipped.append(method.display)
                continue

            aggregate.merge(classification)
            for callee in classification.calls:
                call_graph.add_edge(method.id, callee.id)

            if level < depth:
                for callee in sorted(classification.calls - visited, key=lambda s: s.display):
                    visited.add(callee)
                    queue.append((callee, level + 1))

        result.calls = aggregate.calls
        result.reads = aggregate.reads
        result.writes = aggregate.writes
        result.call_edges = call_graph.number_of_edges()
        result.is_cyclic = not nx.is_directed_acyclic_graph(call_graph)

        if include_callers:
            self.token.check()
            result.callers = self.service.find_callers(root)

        logger.debug(
            f"Dependencies of {root.display}: {len(result.calls)} calls, {len(result.reads)} reads, "
            f"{len(result.writes)} writes across {result.methods_visited} methods"
        )
        return result
