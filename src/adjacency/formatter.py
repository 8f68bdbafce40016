"""Text rendering of sort results."""

from pathlib import Path

import structlog

from src.graph.digraph import Digraph
from src.graph.topological_sort import Cyclic, SortResult

logger = structlog.get_logger(__name__)


class OutputWriteError(OSError):
    """Exception raised when the result file cannot be written."""

    def __init__(self, message: str):
        """Initialize the exception with a descriptive message.

        Args:
            message: Description of the I/O failure
        """
        super().__init__(message)
        self.message = message


def _join(vertices: tuple[int, ...]) -> str:
    return " ".join(str(vertex) for vertex in vertices)


def render_adjacency_list(graph: Digraph) -> str:
    """Render one ``vertex| successors`` line per vertex."""
    lines = []
    for vertex, successors in enumerate(graph.adjacency):
        lines.append(f"{vertex}| {_join(successors)}".rstrip())
    return "\n".join(lines)


def render(graph: Digraph, result: SortResult) -> str:
    """Render a sort result as the text written to the output file.

    Args:
        graph: The sorted graph, shown as an adjacency list for acyclic results
        result: The sort result

    Returns:
        Output text ending in a newline
    """
    if isinstance(result, Cyclic):
        return f"Cycle found: {_join(result.cycle)}\n"

    lines = ["No Cycle found!", "", "Adjacency List:"]
    if graph.vertex_count:
        lines.append(render_adjacency_list(graph))
    lines.extend(["", "Topological Sort:", _join(result.order)])
    return "\n".join(lines) + "\n"


def write_result(
    path: str | Path,
    graph: Digraph,
    result: SortResult,
    encoding: str = "utf-8",
) -> Path:
    """Render ``result`` and write it to ``path``.

    Args:
        path: Destination file
        graph: The sorted graph
        result: The sort result
        encoding: Text encoding for the output file

    Returns:
        The path written

    Raises:
        OutputWriteError: If the file cannot be written
    """
    output_path = Path(path)
    text = render(graph, result)

    try:
        output_path.write_text(text, encoding=encoding)
    except OSError as e:
        msg = f"Cannot write output file {output_path}: {e}"
        raise OutputWriteError(msg) from e

    logger.info(
        "result_written",
        path=str(output_path),
        has_cycle=result.has_cycle,
        bytes=len(text.encode(encoding)),
    )

    return output_path
