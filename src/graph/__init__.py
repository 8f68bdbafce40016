"""Graph module for cycle detection and topological sorting.

This module provides the immutable Digraph value, the depth-first
CycleAwareTopologicalSorter, and a validator for the results it produces.
"""

from src.graph.digraph import Digraph, MalformedGraphError
from src.graph.topological_sort import Acyclic, CycleAwareTopologicalSorter, Cyclic, SortResult
from src.graph.validator import ResultValidator, ValidationReport

__all__ = [
    "Acyclic",
    "CycleAwareTopologicalSorter",
    "Cyclic",
    "Digraph",
    "MalformedGraphError",
    "ResultValidator",
    "SortResult",
    "ValidationReport",
]
