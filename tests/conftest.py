"""
Shared fixtures: small hand-built graphs with known answers.
"""

import pytest

from graph import Graph


def build_graph(nodes, edges, source, target):
    g = Graph(source_id=source, target_id=target)
    for nid, x, y in nodes:
        g.create_node(nid, x, y)
    for a, b, w in edges:
        g.create_edge(a, b, weight=w)
    return g


@pytest.fixture
def line_graph():
    """A(0,0) - B(10,0) - C(20,0): A-B 2, B-C 3, A-C 10.  Shortest A→C is 5."""
    return build_graph(
        nodes=[("A", 0, 0), ("B", 10, 0), ("C", 20, 0)],
        edges=[("A", "B", 2), ("B", "C", 3), ("A", "C", 10)],
        source="A",
        target="C",
    )


@pytest.fixture
def island_graph():
    """Same triangle plus an isolated target D."""
    return build_graph(
        nodes=[("A", 0, 0), ("B", 10, 0), ("C", 20, 0), ("D", 30, 0)],
        edges=[("A", "B", 2), ("B", "C", 3), ("A", "C", 10)],
        source="A",
        target="D",
    )
