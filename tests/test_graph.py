"""
Unit tests for the Graph container and its validation.
"""

import pytest

from graph import Edge, Graph, MalformedGraph, Node


def _two_nodes():
    g = Graph(source_id="A", target_id="B")
    g.create_node("A", 0, 0)
    g.create_node("B", 30, 40)
    return g


def test_adjacency_is_undirected():
    g = _two_nodes()
    edge = g.create_edge("A", "B", weight=3)

    assert g.neighbours("A") == [("B", edge)]
    assert g.neighbours("B") == [("A", edge)]
    assert g.get_edge_between("B", "A") is edge
    assert g.degree("A") == 1
    assert g.get_edge("A-B") is edge
    assert g.get_node("B") == Node("B", 30, 40)
    assert g.get_node("Z") is None
    assert edge.other_end("B") == "A"
    assert edge.other_end("Z") is None


def test_node_distance():
    assert Node("A", 0, 0).distance_to(Node("B", 30, 40)) == 50


def test_edge_to_unknown_node_is_malformed():
    g = _two_nodes()
    with pytest.raises(MalformedGraph):
        g.create_edge("A", "Z", weight=1)


def test_self_loop_is_malformed():
    g = _two_nodes()
    with pytest.raises(MalformedGraph):
        g.create_edge("A", "A", weight=1)


def test_duplicate_edge_in_either_direction_is_malformed():
    g = _two_nodes()
    g.create_edge("A", "B", weight=1)
    with pytest.raises(MalformedGraph):
        g.create_edge("B", "A", weight=2)
    assert g.edge_count() == 1


@pytest.mark.parametrize("weight", [0, -1, 2.5, float("inf"), True, "3"])
def test_bad_weights_are_malformed(weight):
    g = _two_nodes()
    with pytest.raises(MalformedGraph):
        g.add_edge(Edge("A", "B", weight))


def test_duplicate_node_is_malformed():
    g = _two_nodes()
    with pytest.raises(MalformedGraph):
        g.create_node("A", 1, 1)


def test_validate_catches_hand_patched_edges():
    g = _two_nodes()
    g.edges[frozenset(("A", "Q"))] = Edge("A", "Q", 1)
    with pytest.raises(MalformedGraph):
        g.validate()


def test_validate_catches_edge_missing_from_adjacency():
    g = _two_nodes()
    g.create_node("C", 60, 80)
    g.edges[frozenset(("B", "C"))] = Edge("B", "C", 1)
    with pytest.raises(MalformedGraph):
        g.validate()


def test_hyphenated_ids_keep_distinct_edges():
    # both edges are labelled "A-B-C"
    g = Graph.from_dict({
        "source": "A-B",
        "target": "C",
        "nodes": [
            {"id": "A-B", "x": 0, "y": 0},
            {"id": "C", "x": 10, "y": 0},
            {"id": "A", "x": 20, "y": 0},
            {"id": "B-C", "x": 30, "y": 0},
        ],
        "edges": [
            {"source": "A-B", "target": "C", "weight": 1},
            {"source": "A", "target": "B-C", "weight": 5},
        ],
    })

    assert g.edge_count() == 2
    assert g.get_edge_between("A-B", "C").weight == 1
    assert g.get_edge_between("A", "B-C").weight == 5
    assert [nbr for nbr, _ in g.neighbours("A-B")] == ["C"]
    assert g.neighbours("A-B")[0][1].weight == 1
    assert g.path_cost(["A-B", "C"]) == 1


def test_validate_rejects_unknown_source():
    g = _two_nodes()
    g.source_id = "nope"
    with pytest.raises(MalformedGraph):
        g.validate()


def test_connectivity_check(line_graph, island_graph):
    assert line_graph.is_connected()
    assert not island_graph.is_connected()
    assert island_graph.reachable_from("A") == {"A", "B", "C"}
    assert Graph().is_connected()


def test_path_cost(line_graph):
    assert line_graph.path_cost(["A", "B", "C"]) == 5
    assert line_graph.path_cost(["A"]) == 0
    assert line_graph.path_cost([]) == 0


def test_path_cost_rejects_missing_hop(island_graph):
    with pytest.raises(MalformedGraph):
        island_graph.path_cost(["C", "D"])


def test_dict_round_trip(line_graph):
    data = line_graph.to_dict()
    copy = Graph.from_dict(data)

    assert copy.to_dict() == data
    assert copy.source_id == "A"
    assert copy.target_id == "C"
    assert copy.get_edge_between("A", "C").weight == 10


def test_from_dict_rejects_broken_data():
    with pytest.raises(MalformedGraph):
        Graph.from_dict({"nodes": [{"x": 1, "y": 2}]})
    with pytest.raises(MalformedGraph):
        Graph.from_dict({
            "nodes": [{"id": "A", "x": 0, "y": 0}],
            "edges": [{"source": "A", "target": "B", "weight": 1}],
        })
    with pytest.raises(MalformedGraph):
        Graph.from_dict({"nodes": [{"id": "A", "x": "left", "y": 0}]})
