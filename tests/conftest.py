"""Shared fixtures for the test suite."""

import logging

import pytest
import structlog

from src.graph.digraph import Digraph

ENV_VARS = (
    "TOPOSORT_CONFIG",
    "TOPOSORT_LOGGING_LEVEL",
    "TOPOSORT_JSON_LOGS",
    "TOPOSORT_ENCODING",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Clear configuration env vars and reset logging around each test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    yield

    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)


@pytest.fixture
def chain_graph() -> Digraph:
    """Fixture providing the chain 0 -> 1 -> 2."""
    return Digraph(3, [[1], [2], []])


@pytest.fixture
def triangle_graph() -> Digraph:
    """Fixture providing the cycle 0 -> 1 -> 2 -> 0."""
    return Digraph(3, [[1], [2], [0]])


@pytest.fixture
def diamond_graph() -> Digraph:
    """Fixture providing the diamond 0 -> {1, 2} -> 3."""
    return Digraph(4, [[1, 2], [3], [3], []])
