"""
Unit tests for Recorder analytics.
"""

import random

from engine import Recorder
from graph import GraphGenerator


def test_metrics_for_line_graph(line_graph):
    rec = Recorder()
    metrics = rec.record(line_graph)

    assert metrics.source == "A"
    assert metrics.target == "C"
    assert metrics.path == ["A", "B", "C"]
    assert metrics.path_cost == 5
    assert metrics.distance == 5
    assert metrics.nodes_visited == 3
    assert metrics.edges_relaxed == 3
    assert metrics.total_steps == 3
    assert metrics.path_found


def test_metrics_for_unreachable_target(island_graph):
    metrics = Recorder().record(island_graph)
    assert not metrics.path_found
    assert metrics.path == []
    assert metrics.distance is None
    assert metrics.nodes_visited == 3


def test_path_cost_matches_distance_on_generated_graphs():
    for seed in range(5):
        g = GraphGenerator(rng=random.Random(seed)).generate(20, 650, 420, 40)
        metrics = Recorder().record(g)
        assert metrics.path_found
        assert metrics.path_cost == metrics.distance


def test_export_snapshot(line_graph):
    rec = Recorder()
    rec.record(line_graph, "C", "A")
    data = rec.export()

    assert data["graph"] == line_graph.to_dict()
    assert data["metrics"]["path"] == ["C", "B", "A"]
    assert [e["kind"] for e in data["events"]] == ["visit", "visit", "found"]
