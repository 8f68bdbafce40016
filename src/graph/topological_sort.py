"""Depth-first topological sorting with directed cycle detection.

This module provides the CycleAwareTopologicalSorter, which classifies a
Digraph as acyclic or cyclic in a single depth-first pass. Acyclic graphs
yield their reversed post-order as a topological order; cyclic graphs yield
the first cycle met along the fixed traversal order.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

import structlog

from src.graph.digraph import Digraph

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Acyclic:
    """Sort result for a graph without directed cycles.

    Attributes:
        order: Every vertex exactly once; each edge ``(u, w)`` has ``u``
            before ``w``
    """

    order: tuple[int, ...]

    @property
    def has_cycle(self) -> bool:
        """Always False for an acyclic result."""
        return False


@dataclass(frozen=True)
class Cyclic:
    """Sort result for a graph containing a directed cycle.

    Attributes:
        cycle: Vertices along the cycle in edge direction, starting and
            ending at the same vertex (``(v, v)`` for a self-loop)
    """

    cycle: tuple[int, ...]

    @property
    def has_cycle(self) -> bool:
        """Always True for a cyclic result."""
        return True


SortResult = Acyclic | Cyclic


@dataclass
class _TraversalState:
    """Mutable bookkeeping owned by a single sort invocation."""

    visited: list[bool]
    on_stack: list[bool]
    parent: list[int]
    post_order: list[int] = field(default_factory=list)
    cycle: tuple[int, ...] | None = None

    @classmethod
    def for_graph(cls, graph: Digraph) -> "_TraversalState":
        size = graph.vertex_count
        return cls(visited=[False] * size, on_stack=[False] * size, parent=[-1] * size)

    def enter(self, vertex: int) -> None:
        self.visited[vertex] = True
        self.on_stack[vertex] = True

    def finish(self, vertex: int) -> None:
        self.post_order.append(vertex)
        self.on_stack[vertex] = False

    def trace_cycle(self, vertex: int, ancestor: int) -> tuple[int, ...]:
        """Rebuild the cycle closed by the back-edge ``vertex -> ancestor``.

        Walks parent links from ``vertex`` up to ``ancestor`` and returns the
        path in edge direction, closed on ``ancestor``.
        """
        path = []
        current = vertex
        while current != ancestor:
            path.append(current)
            current = self.parent[current]
        path.append(ancestor)
        path.reverse()
        path.append(ancestor)
        return tuple(path)


class CycleAwareTopologicalSorter:
    """Topological sorter that reports a cycle instead of failing.

    Vertices are used as DFS entry points in increasing index order and
    successors are explored in adjacency order, so results are fully
    deterministic for a given graph. Traversal uses an explicit stack of
    ``(vertex, successor iterator)`` frames and visits vertices in exactly the
    order a recursive DFS would, without being bound by the recursion limit.

    Thread-safety:
        Each call to sort() owns its traversal state, so one sorter may be
        shared freely. Graphs are never mutated.

    Example:
        >>> sorter = CycleAwareTopologicalSorter()
        >>> sorter.sort(Digraph(3, [[1], [2], []]))
        Acyclic(order=(0, 1, 2))
        >>> sorter.sort(Digraph(3, [[1], [2], [0]]))
        Cyclic(cycle=(0, 1, 2, 0))
    """

    def sort(self, graph: Digraph) -> SortResult:
        """Classify ``graph`` and return a topological order or a cycle.

        Args:
            graph: The graph to sort; assumed well-formed

        Returns:
            Acyclic with the topological order, or Cyclic with one cycle
        """
        logger.debug(
            "topological_sort_started",
            vertex_count=graph.vertex_count,
            edge_count=graph.edge_count,
        )

        state = _TraversalState.for_graph(graph)

        for root in range(graph.vertex_count):
            if state.cycle is not None:
                break
            if not state.visited[root]:
                self._explore(graph, root, state)

        if state.cycle is not None:
            logger.info("cycle_detected", cycle=list(state.cycle), length=len(state.cycle))
            return Cyclic(cycle=state.cycle)

        order = tuple(reversed(state.post_order))
        logger.debug("topological_sort_completed", vertex_count=len(order))
        return Acyclic(order=order)

    def _explore(self, graph: Digraph, root: int, state: _TraversalState) -> None:
        """Run one DFS tree rooted at ``root``.

        Args:
            graph: The graph being sorted
            root: Unvisited entry vertex
            state: Traversal state shared across trees of this sort call
        """
        state.enter(root)
        frames: list[tuple[int, Iterator[int]]] = [(root, iter(graph.successors(root)))]

        while frames:
            vertex, successors = frames[-1]

            # Once a cycle is known, every open frame unwinds without exploring
            successor = next(successors, None) if state.cycle is None else None

            if successor is None:
                frames.pop()
                state.finish(vertex)
            elif not state.visited[successor]:
                state.parent[successor] = vertex
                state.enter(successor)
                frames.append((successor, iter(graph.successors(successor))))
            elif state.on_stack[successor]:
                state.cycle = state.trace_cycle(vertex, successor)
                logger.debug("back_edge_found", source=vertex, target=successor)
