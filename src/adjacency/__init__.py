"""Adjacency-matrix file input and result text output."""

from src.adjacency.formatter import OutputWriteError, render, write_result
from src.adjacency.loader import GraphFormatError, GraphLoadError, load_graph, parse_adjacency_matrix

__all__ = [
    "GraphFormatError",
    "GraphLoadError",
    "OutputWriteError",
    "load_graph",
    "parse_adjacency_matrix",
    "render",
    "write_result",
]
