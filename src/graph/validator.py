"""Validation of sort results against their source graph.

This module checks that a topological order or a reported cycle actually
holds for the graph it was computed from, and collects any violations in a
ValidationReport.
"""

from dataclasses import dataclass, field

import structlog

from src.graph.digraph import Digraph
from src.graph.topological_sort import Acyclic, Cyclic, SortResult

logger = structlog.get_logger(__name__)

MIN_CYCLE_LENGTH = 2


@dataclass
class ValidationReport:
    """Report containing validation results for a sort result.

    Attributes:
        is_valid: Whether the result passed all checks
        errors: List of violation messages
        checked_edges: Number of graph edges inspected
    """

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    checked_edges: int = 0

    def add_error(self, message: str) -> None:
        """Add an error message and mark validation as failed."""
        self.errors.append(message)
        self.is_valid = False
        logger.error("validation_error", message=message)

    def summary(self) -> str:
        """Generate a human-readable summary of the validation report."""
        lines = [
            f"Validation Status: {'PASS' if self.is_valid else 'FAIL'}",
            f"Edges Checked: {self.checked_edges}",
            f"Errors: {len(self.errors)}",
        ]

        if self.errors:
            lines.append("\nErrors:")
            lines.extend(f"  - {error}" for error in self.errors)

        return "\n".join(lines)


class ResultValidator:
    """Validator confirming that a SortResult is consistent with its graph.

    For an Acyclic result it checks that every vertex appears exactly once and
    that every edge points forward in the order. For a Cyclic result it checks
    that the sequence is closed, long enough, and made of real edges.
    """

    def validate(self, graph: Digraph, result: SortResult) -> ValidationReport:
        """Validate ``result`` against ``graph``.

        Args:
            graph: The graph the result was computed from
            result: The result to check

        Returns:
            ValidationReport describing any violations
        """
        report = ValidationReport()

        if isinstance(result, Acyclic):
            self._check_order(graph, result.order, report)
        elif isinstance(result, Cyclic):
            self._check_cycle(graph, result.cycle, report)
        else:
            report.add_error(f"Unsupported result type: {type(result).__name__}")

        logger.debug(
            "result_validation_complete",
            is_valid=report.is_valid,
            error_count=len(report.errors),
        )

        return report

    def _check_order(
        self,
        graph: Digraph,
        order: tuple[int, ...],
        report: ValidationReport,
    ) -> None:
        """Check completeness of ``order`` and forward direction of all edges."""
        if sorted(order) != list(range(graph.vertex_count)):
            report.add_error(
                f"Order does not list each of the {graph.vertex_count} vertices exactly once",
            )
            return

        position = {vertex: index for index, vertex in enumerate(order)}
        for source, target in graph.edges():
            report.checked_edges += 1
            if position[source] >= position[target]:
                report.add_error(f"Edge {source} -> {target} points backwards in the order")

    def _check_cycle(
        self,
        graph: Digraph,
        cycle: tuple[int, ...],
        report: ValidationReport,
    ) -> None:
        """Check that ``cycle`` is closed and follows existing edges."""
        if len(cycle) < MIN_CYCLE_LENGTH:
            report.add_error(f"Cycle has {len(cycle)} vertices, expected at least 2")
            return

        if cycle[0] != cycle[-1]:
            report.add_error(f"Cycle starts at {cycle[0]} but ends at {cycle[-1]}")

        for source, target in zip(cycle, cycle[1:]):
            report.checked_edges += 1
            if not graph.has_edge(source, target):
                report.add_error(f"Cycle uses missing edge {source} -> {target}")
