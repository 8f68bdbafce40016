"""Immutable directed graph over integer vertices.

This module provides the Digraph value consumed by the topological sorter.
Vertices are the integers ``0 .. vertex_count - 1`` and each vertex keeps its
successors in insertion order, which fixes DFS tie-breaking.
"""

from collections.abc import Iterable, Iterator, Sequence

import structlog

logger = structlog.get_logger(__name__)


class MalformedGraphError(ValueError):
    """Exception raised when a graph's shape or adjacency is invalid.

    Covers negative vertex counts, a row count that differs from the vertex
    count, and successors outside ``[0, vertex_count)``.
    """

    def __init__(self, message: str):
        """Initialize the exception with a descriptive message.

        Args:
            message: Description of the structural problem
        """
        super().__init__(message)
        self.message = message


class Digraph:
    """Directed graph with a fixed vertex count and ordered adjacency.

    Instances are read-only once constructed and may be shared across any
    number of sort calls.

    Example:
        >>> graph = Digraph(3, [[1], [2], []])
        >>> graph.successors(0)
        (1,)
        >>> list(graph.edges())
        [(0, 1), (1, 2)]
    """

    __slots__ = ("_adjacency", "_vertex_count")

    def __init__(self, vertex_count: int, adjacency: Sequence[Iterable[int]]):
        """Build and validate a graph.

        Args:
            vertex_count: Number of vertices (V)
            adjacency: One successor sequence per vertex, in traversal order

        Raises:
            MalformedGraphError: If the vertex count is negative, the row count
                differs from it, or a successor is out of range
        """
        if vertex_count < 0:
            msg = f"Vertex count must be non-negative, got {vertex_count}"
            raise MalformedGraphError(msg)

        rows = tuple(tuple(row) for row in adjacency)
        if len(rows) != vertex_count:
            msg = f"Expected {vertex_count} adjacency rows, got {len(rows)}"
            raise MalformedGraphError(msg)

        for vertex, successors in enumerate(rows):
            for successor in successors:
                if not 0 <= successor < vertex_count:
                    msg = (
                        f"Vertex {vertex} references {successor}, "
                        f"outside [0, {vertex_count})"
                    )
                    raise MalformedGraphError(msg)

        self._vertex_count = vertex_count
        self._adjacency = rows

        logger.debug(
            "digraph_constructed",
            vertex_count=vertex_count,
            edge_count=self.edge_count,
        )

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[object]]) -> "Digraph":
        """Build a graph from a square adjacency matrix.

        A truthy cell at row ``i``, column ``j`` is an edge ``i -> j``.
        Successors keep column order.

        Args:
            matrix: Square matrix of truthy/falsy cells

        Returns:
            The corresponding Digraph

        Raises:
            MalformedGraphError: If the matrix is not square
        """
        size = len(matrix)
        for index, row in enumerate(matrix):
            if len(row) != size:
                msg = f"Matrix row {index} has {len(row)} columns, expected {size}"
                raise MalformedGraphError(msg)

        return cls(size, [[col for col, cell in enumerate(row) if cell] for row in matrix])

    @property
    def vertex_count(self) -> int:
        """Number of vertices in the graph."""
        return self._vertex_count

    @property
    def adjacency(self) -> tuple[tuple[int, ...], ...]:
        """Successor tuples indexed by vertex."""
        return self._adjacency

    @property
    def edge_count(self) -> int:
        """Total number of directed edges."""
        return sum(len(successors) for successors in self._adjacency)

    def successors(self, vertex: int) -> tuple[int, ...]:
        """Return the successors of ``vertex`` in adjacency order."""
        return self._adjacency[vertex]

    def has_edge(self, source: int, target: int) -> bool:
        """Check whether the edge ``source -> target`` exists."""
        if not 0 <= source < self._vertex_count:
            return False
        return target in self._adjacency[source]

    def edges(self) -> Iterator[tuple[int, int]]:
        """Yield every edge as ``(source, target)`` in row-major order."""
        for source, successors in enumerate(self._adjacency):
            for target in successors:
                yield source, target

    def __len__(self) -> int:
        return self._vertex_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Digraph):
            return NotImplemented
        return self._adjacency == other._adjacency

    def __hash__(self) -> int:
        return hash(self._adjacency)

    def __repr__(self) -> str:
        return f"Digraph(vertex_count={self._vertex_count}, edge_count={self.edge_count})"
