#!/usr/bin/env python3
"""Main Entry Point and CLI Integration.

This module provides the command-line interface for the topological sort
tool. It loads an adjacency-matrix file, sorts the graph or finds a directed
cycle, and writes the result to an output file.
"""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

import structlog

from src.adjacency.formatter import OutputWriteError, write_result
from src.adjacency.loader import GraphLoadError, load_graph
from src.config import ConfigurationError, TopoSortConfig, load_config
from src.graph.digraph import MalformedGraphError
from src.graph.topological_sort import CycleAwareTopologicalSorter
from src.graph.validator import ResultValidator
from src.log_config import bind_context, clear_context, configure_logging

logger = structlog.get_logger(__name__)

USAGE = "Usage: python main.py input.txt output.txt"
SUCCESS_MESSAGE = "An output file was created!"


class UsageArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 and a usage line on bad input."""

    def error(self, message: str) -> None:
        self.exit(1, f"{USAGE}\n{self.prog}: error: {message}\n")


def run(input_path: Path, output_path: Path, config: TopoSortConfig) -> int:
    """Sort the graph in ``input_path`` and write the result to ``output_path``.

    Args:
        input_path: Adjacency-matrix file to read
        output_path: File to write the result to
        config: Active configuration

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    bind_context(input_path=str(input_path), output_path=str(output_path))

    try:
        graph = load_graph(input_path, encoding=config.encoding)

        result = CycleAwareTopologicalSorter().sort(graph)

        report = ResultValidator().validate(graph, result)
        if not report.is_valid:
            logger.error("sort_result_invalid", summary=report.summary())
            print("Error: internal sort result failed validation", file=sys.stderr)
            print(report.summary(), file=sys.stderr)
            return 1

        write_result(output_path, graph, result, encoding=config.encoding)

    except GraphLoadError as e:
        logger.error("input_read_failed", error=e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    except MalformedGraphError as e:
        logger.error("input_malformed", error=e.message)
        print(f"Error: malformed graph: {e.message}", file=sys.stderr)
        return 1

    except OutputWriteError as e:
        logger.error("output_write_failed", error=e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    finally:
        clear_context()

    logger.info("sort_finished", has_cycle=result.has_cycle)
    print(SUCCESS_MESSAGE)
    return 0


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = UsageArgumentParser(
        description="Topologically sort a digraph given as an adjacency matrix, "
        "or report a directed cycle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input format:
  The first line holds the vertex count V, followed by V rows of V
  characters. A '1' at row i, column j is an edge from vertex i to vertex j.

Examples:
  python main.py graph.txt result.txt
        """,
    )

    parser.add_argument("input", type=Path, help="Path to the adjacency-matrix input file")
    parser.add_argument("output", type=Path, help="Path to the result output file")

    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the topological sort command.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_args(argv)

    # Config loading logs, so stderr routing must be in place before it runs
    configure_logging()

    try:
        config = load_config()
    except (FileNotFoundError, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logging(config.logging_level, json_logs=config.json_logs)

    return run(args.input, args.output, config)


if __name__ == "__main__":
    sys.exit(main())
