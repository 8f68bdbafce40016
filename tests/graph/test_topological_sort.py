"""Unit tests for CycleAwareTopologicalSorter.

Tests cover:
- Topological order on acyclic graphs
- Cycle reporting and its traversal-order witness
- Short-circuiting once a cycle is found
- Determinism and graph reuse
- Deep graphs beyond the recursion limit
"""

import random
import sys

import pytest

from src.graph.digraph import Digraph
from src.graph.topological_sort import Acyclic, CycleAwareTopologicalSorter, Cyclic

DEEP_CHAIN_LENGTH = sys.getrecursionlimit() * 5


def assert_topological(graph: Digraph, order: tuple[int, ...]) -> None:
    """Assert that ``order`` is complete and respects every edge."""
    assert sorted(order) == list(range(graph.vertex_count))
    position = {vertex: index for index, vertex in enumerate(order)}
    for source, target in graph.edges():
        assert position[source] < position[target], f"{source} -> {target} out of order"


def assert_cycle(graph: Digraph, cycle: tuple[int, ...]) -> None:
    """Assert that ``cycle`` is closed and follows real edges."""
    assert len(cycle) >= 2
    assert cycle[0] == cycle[-1]
    for source, target in zip(cycle, cycle[1:]):
        assert graph.has_edge(source, target), f"missing edge {source} -> {target}"


@pytest.fixture
def sorter() -> CycleAwareTopologicalSorter:
    """Fixture providing a sorter instance."""
    return CycleAwareTopologicalSorter()


class TestAcyclicGraphs:
    """Test topological ordering of DAGs."""

    def test_empty_graph(self, sorter):
        """Test that zero vertices yields an empty order."""
        result = sorter.sort(Digraph(0, []))

        assert result == Acyclic(order=())
        assert not result.has_cycle

    def test_single_vertex(self, sorter):
        """Test a lone vertex without edges."""
        assert sorter.sort(Digraph(1, [[]])) == Acyclic(order=(0,))

    def test_chain(self, sorter, chain_graph):
        """Test that 0 -> 1 -> 2 sorts to (0, 1, 2)."""
        assert sorter.sort(chain_graph) == Acyclic(order=(0, 1, 2))

    def test_diamond(self, sorter, diamond_graph):
        """Test the diamond ordering and its exact reversed post-order."""
        result = sorter.sort(diamond_graph)

        assert isinstance(result, Acyclic)
        assert_topological(diamond_graph, result.order)
        assert result.order == (0, 2, 1, 3)

    def test_cross_edge_is_not_a_cycle(self, sorter):
        """Test that an edge into a finished subtree is ignored."""
        graph = Digraph(3, [[1], [], [1]])

        result = sorter.sort(graph)

        assert result == Acyclic(order=(2, 0, 1))

    def test_forward_edge_is_not_a_cycle(self, sorter):
        """Test that an edge to an already finished descendant is ignored."""
        graph = Digraph(3, [[1, 2], [2], []])

        result = sorter.sort(graph)

        assert result == Acyclic(order=(0, 1, 2))

    def test_edges_toward_lower_indices(self, sorter):
        """Test a DAG whose edges all point to smaller vertex indices."""
        graph = Digraph(4, [[], [0], [1], [2]])

        result = sorter.sort(graph)

        assert result == Acyclic(order=(3, 2, 1, 0))

    def test_disconnected_components(self, sorter):
        """Test that every component is visited in index order."""
        graph = Digraph(5, [[1], [], [3], [], []])

        result = sorter.sort(graph)

        assert isinstance(result, Acyclic)
        assert_topological(graph, result.order)
        assert result.order == (4, 2, 3, 0, 1)

    def test_deep_chain_does_not_hit_recursion_limit(self, sorter):
        """Test a path far longer than the interpreter recursion limit."""
        size = DEEP_CHAIN_LENGTH
        graph = Digraph(size, [[vertex + 1] for vertex in range(size - 1)] + [[]])

        result = sorter.sort(graph)

        assert result == Acyclic(order=tuple(range(size)))


class TestCyclicGraphs:
    """Test cycle detection and witness reconstruction."""

    def test_self_loop(self, sorter):
        """Test that a self-loop yields a two-element cycle."""
        result = sorter.sort(Digraph(1, [[0]]))

        assert result == Cyclic(cycle=(0, 0))
        assert result.has_cycle

    def test_self_loop_on_later_vertex(self, sorter):
        """Test a self-loop that is not on the first entry vertex."""
        result = sorter.sort(Digraph(3, [[1], [], [2]]))

        assert result == Cyclic(cycle=(2, 2))

    def test_two_cycle(self, sorter):
        """Test a cycle between two vertices."""
        assert sorter.sort(Digraph(2, [[1], [0]])) == Cyclic(cycle=(0, 1, 0))

    def test_triangle(self, sorter, triangle_graph):
        """Test that 0 -> 1 -> 2 -> 0 is reported starting at vertex 0."""
        result = sorter.sort(triangle_graph)

        assert result == Cyclic(cycle=(0, 1, 2, 0))
        assert_cycle(triangle_graph, result.cycle)

    def test_cycle_not_through_root(self, sorter):
        """Test a cycle entered below the DFS root."""
        graph = Digraph(4, [[1], [2], [3], [1]])

        result = sorter.sort(graph)

        assert result == Cyclic(cycle=(1, 2, 3, 1))

    def test_first_cycle_not_shortest(self, sorter):
        """Test that the first cycle in traversal order wins over a shorter one."""
        graph = Digraph(3, [[1, 2], [2], [0]])

        result = sorter.sort(graph)

        assert result == Cyclic(cycle=(0, 1, 2, 0))

    def test_adjacency_order_breaks_ties(self, sorter):
        """Test that successor order decides which cycle is found."""
        graph = Digraph(3, [[2, 1], [2], [0]])

        result = sorter.sort(graph)

        assert result == Cyclic(cycle=(0, 2, 0))

    def test_short_circuit_skips_later_components(self, sorter):
        """Test that traversal stops at the first cycle."""
        graph = Digraph(5, [[1], [0], [3], [4], [2]])

        result = sorter.sort(graph)

        assert result == Cyclic(cycle=(0, 1, 0))

    def test_cycle_after_finished_subtree(self, sorter):
        """Test a cycle in a component entered after an acyclic one."""
        graph = Digraph(4, [[1], [], [3], [2]])

        result = sorter.sort(graph)

        assert result == Cyclic(cycle=(2, 3, 2))

    def test_deep_cycle(self, sorter):
        """Test a cycle longer than the recursion limit."""
        size = DEEP_CHAIN_LENGTH
        graph = Digraph(size, [[(vertex + 1) % size] for vertex in range(size)])

        result = sorter.sort(graph)

        assert isinstance(result, Cyclic)
        assert result.cycle == (*range(size), 0)


class TestSorterProperties:
    """Test invariants that hold across arbitrary graphs."""

    @pytest.mark.parametrize("seed", range(25))
    def test_random_graphs(self, sorter, seed):
        """Test that every result is a valid order or a valid cycle."""
        rng = random.Random(seed)
        size = rng.randint(0, 12)
        density = rng.choice([0.05, 0.15, 0.3])
        acyclic_only = seed % 2 == 0
        matrix = [
            [
                rng.random() < density and (not acyclic_only or col > row)
                for col in range(size)
            ]
            for row in range(size)
        ]
        graph = Digraph.from_matrix(matrix)

        result = sorter.sort(graph)

        if acyclic_only:
            assert isinstance(result, Acyclic)
        if isinstance(result, Acyclic):
            assert_topological(graph, result.order)
        else:
            assert_cycle(graph, result.cycle)

    def test_determinism(self, sorter, diamond_graph, triangle_graph):
        """Test that repeated sorts give identical results."""
        assert sorter.sort(diamond_graph) == sorter.sort(diamond_graph)
        assert sorter.sort(triangle_graph) == sorter.sort(triangle_graph)

    def test_independent_sorters_agree(self, diamond_graph):
        """Test that separate sorter instances produce the same result."""
        first = CycleAwareTopologicalSorter().sort(diamond_graph)
        second = CycleAwareTopologicalSorter().sort(diamond_graph)

        assert first == second

    def test_graph_not_mutated(self, sorter, triangle_graph):
        """Test that sorting leaves the graph unchanged."""
        before = triangle_graph.adjacency

        sorter.sort(triangle_graph)

        assert triangle_graph.adjacency == before

    def test_results_are_frozen(self, sorter, chain_graph):
        """Test that results cannot be modified after the sort."""
        result = sorter.sort(chain_graph)

        with pytest.raises(AttributeError):
            result.order = ()
