"""Adjacency-matrix text loading.

The input format is a first line holding the vertex count ``V`` followed by
``V`` rows of ``V`` characters, each ``'0'`` or ``'1'``. A ``'1'`` at row
``i``, column ``j`` is an edge ``i -> j``.

Example:
    >>> graph = parse_adjacency_matrix("3\\n010\\n001\\n000\\n")
    >>> graph.adjacency
    ((1,), (2,), ())
"""

import re
from pathlib import Path

import structlog

from src.graph.digraph import Digraph, MalformedGraphError

logger = structlog.get_logger(__name__)

EDGE = "1"
NO_EDGE = "0"
VERTEX_COUNT_PATTERN = re.compile(r"-?[0-9]+")


class GraphFormatError(MalformedGraphError):
    """Exception raised when adjacency-matrix text cannot be parsed.

    Attributes:
        message: Description of the problem
        line: 1-based line number the problem was found on, if known
    """

    def __init__(self, message: str, line: int | None = None):
        """Initialize the exception.

        Args:
            message: Description of the parse error
            line: 1-based line number of the offending line
        """
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class GraphLoadError(OSError):
    """Exception raised when the graph file cannot be read."""

    def __init__(self, message: str):
        """Initialize the exception with a descriptive message.

        Args:
            message: Description of the I/O failure
        """
        super().__init__(message)
        self.message = message


def parse_adjacency_matrix(text: str) -> Digraph:
    """Parse adjacency-matrix text into a Digraph.

    Leading blank lines and trailing blank lines are ignored, as is trailing
    whitespace on every line.

    Args:
        text: Full contents of an adjacency-matrix file

    Returns:
        The parsed Digraph

    Raises:
        GraphFormatError: If the header or any row is malformed
    """
    lines = [(number, raw.rstrip()) for number, raw in enumerate(text.splitlines(), start=1)]
    while lines and not lines[-1][1]:
        lines.pop()
    while lines and not lines[0][1]:
        lines.pop(0)

    if not lines:
        msg = "Missing vertex count"
        raise GraphFormatError(msg)

    header_line, header = lines[0]
    count_text = header.strip()
    if not VERTEX_COUNT_PATTERN.fullmatch(count_text):
        msg = f"Vertex count must be an integer, got {count_text!r}"
        raise GraphFormatError(msg, header_line)

    vertex_count = int(count_text)
    if vertex_count < 0:
        msg = f"Vertex count must be non-negative, got {vertex_count}"
        raise GraphFormatError(msg, header_line)

    rows = lines[1:]
    if len(rows) != vertex_count:
        last_line = rows[-1][0] if rows else header_line
        msg = f"Expected {vertex_count} matrix rows, got {len(rows)}"
        raise GraphFormatError(msg, last_line)

    adjacency = [_parse_row(row, number, vertex_count) for number, row in rows]

    logger.debug("adjacency_matrix_parsed", vertex_count=vertex_count)

    return Digraph(vertex_count, adjacency)


def _parse_row(row: str, line: int, vertex_count: int) -> list[int]:
    """Convert one matrix row into the successor list of its vertex."""
    if len(row) != vertex_count:
        msg = f"Row has {len(row)} columns, expected {vertex_count}"
        raise GraphFormatError(msg, line)

    successors = []
    for column, cell in enumerate(row):
        if cell == EDGE:
            successors.append(column)
        elif cell != NO_EDGE:
            msg = f"Invalid character {cell!r} in column {column}, expected '0' or '1'"
            raise GraphFormatError(msg, line)
    return successors


def load_graph(path: str | Path, encoding: str = "utf-8") -> Digraph:
    """Load a Digraph from an adjacency-matrix text file.

    Args:
        path: Path to the input file
        encoding: Text encoding of the file

    Returns:
        The parsed Digraph

    Raises:
        GraphLoadError: If the file is missing, unreadable, or not decodable
        GraphFormatError: If the file content is malformed
    """
    input_path = Path(path)

    logger.info("loading_graph", path=str(input_path))

    try:
        text = input_path.read_text(encoding=encoding)
    except FileNotFoundError as e:
        msg = f"Input file not found: {input_path}"
        raise GraphLoadError(msg) from e
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read input file {input_path}: {e}"
        raise GraphLoadError(msg) from e

    graph = parse_adjacency_matrix(text)

    logger.info(
        "graph_loaded",
        path=str(input_path),
        vertex_count=graph.vertex_count,
        edge_count=graph.edge_count,
    )

    return graph
