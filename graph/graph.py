"""
graph.py — Graph Container
==========================
Single source of truth for the graph.  The generator builds it, the
shortest-path engine and the HTTP layer only read it.

Responsibilities:
  1. Node / edge registration, validated eagerly   (add / create / get)
  2. Adjacency queries                             (neighbours, degree, …)
  3. Invariant checks                              (validate, is_connected)
  4. Serialisation round-trip                      (to_dict / from_dict)

Design decisions:
  - Nodes stored by id, edges by their unordered endpoint pair, both O(1).
    Edge ids are display labels only; `"A-B" + "C"` and `"A" + "B-C"` both
    read `A-B-C`, so they never key anything.
  - A separate adjacency dict  `_adj[node_id] → [(neighbour_id, Edge)]`
    is maintained incrementally so neighbour queries are O(degree), not O(E).
  - Only simple undirected graphs: no self-loops, at most one edge per
    unordered pair, positive integer weights.  Anything else is a
    MalformedGraph and is rejected the moment it is added.
  - There is no removal API.  Once built, a Graph is read-only and can be
    shared across engine runs.
"""

from collections import deque
import math
import numbers
from typing import Dict, List, Tuple, Optional, Set, Iterable

from graph.node import Node
from graph.edge import Edge


class MalformedGraph(ValueError):
    """Graph data violates the simple-undirected-weighted-graph contract."""


class Graph:
    """
    Attributes:
        nodes      : {node_id: Node}
        edges      : {frozenset((a, b)): Edge}
        source_id  : Designated start node (None for an empty graph).
        target_id  : Designated goal node (None for an empty graph).
        _adj       : {node_id: [(neighbour_id, edge), …]}
    """

    def __init__(self, source_id: Optional[str] = None, target_id: Optional[str] = None):
        self.nodes:     Dict[str, Node] = {}
        self.edges:     Dict[frozenset, Edge] = {}
        self.source_id: Optional[str]   = source_id
        self.target_id: Optional[str]   = target_id
        self._adj:      Dict[str, List[Tuple[str, Edge]]] = {}

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise MalformedGraph(f"duplicate node id {node.id!r}")
        self.nodes[node.id] = node
        self._adj[node.id] = []
        return node

    def create_node(self, node_id: str, x: float, y: float) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(id=node_id, x=x, y=y))

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        self._check_edge(edge)
        self.edges[edge.key] = edge
        self._adj[edge.source].append((edge.target, edge))
        self._adj[edge.target].append((edge.source, edge))
        return edge

    def create_edge(self, source: str, target: str, weight: int = 1) -> Edge:
        return self.add_edge(Edge(source=source, target=target, weight=weight))

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        """First edge labelled edge_id.  Prefer get_edge_between when ids may contain '-'."""
        return next((e for e in self.edges.values() if e.id == edge_id), None)

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """The edge connecting a and b, in either direction."""
        return self.edges.get(frozenset((a, b)))

    def has_edge_between(self, a: str, b: str) -> bool:
        return frozenset((a, b)) in self.edges

    def _check_edge(self, edge: Edge) -> None:
        for end in (edge.source, edge.target):
            if end not in self.nodes:
                raise MalformedGraph(f"edge {edge.id} references unknown node {end!r}")
        if edge.source == edge.target:
            raise MalformedGraph(f"self-loop on node {edge.source!r}")
        if edge.key in self.edges:
            raise MalformedGraph(f"duplicate edge between {edge.source!r} and {edge.target!r}")
        w = edge.weight
        if (
            isinstance(w, bool)
            or not isinstance(w, numbers.Real)
            or not math.isfinite(w)
            or w <= 0
            or w != int(w)
        ):
            raise MalformedGraph(f"edge {edge.id} has invalid weight {w!r}; expected a positive integer")

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] for every incident edge."""
        return list(self._adj.get(node_id, []))

    def degree(self, node_id: str) -> int:
        return len(self._adj.get(node_id, []))

    # ==================================================================
    # INVARIANTS
    # ==================================================================
    def validate(self) -> None:
        """
        Re-check every structural invariant.  Graphs built through
        add_node / add_edge already satisfy them; this guards objects that
        were patched by hand before reaching the engine.
        """
        for key, edge in self.edges.items():
            if key != edge.key:
                raise MalformedGraph(f"edge {edge!r} stored under the wrong endpoint pair")
            for end in (edge.source, edge.target):
                if end not in self.nodes:
                    raise MalformedGraph(f"edge {edge.id} references unknown node {end!r}")
            if edge.source == edge.target:
                raise MalformedGraph(f"self-loop on node {edge.source!r}")
            if (edge.target, edge) not in self._adj[edge.source] or (edge.source, edge) not in self._adj[edge.target]:
                raise MalformedGraph(f"edge {edge!r} is missing from the adjacency lists")
        if sum(len(links) for links in self._adj.values()) != 2 * len(self.edges):
            raise MalformedGraph("adjacency lists hold edges the graph does not")
        for label, nid in (("source", self.source_id), ("target", self.target_id)):
            if nid is not None and nid not in self.nodes:
                raise MalformedGraph(f"{label} {nid!r} is not a node of the graph")

    def reachable_from(self, node_id: str) -> Set[str]:
        """Breadth-first set of every node reachable from node_id."""
        seen = {node_id}
        queue = deque([node_id])
        while queue:
            cur = queue.popleft()
            for nbr, _ in self._adj.get(cur, []):
                if nbr not in seen:
                    seen.add(nbr)
                    queue.append(nbr)
        return seen

    def is_connected(self) -> bool:
        if not self.nodes:
            return True
        start = next(iter(self.nodes))
        return len(self.reachable_from(start)) == len(self.nodes)

    def path_cost(self, path: Iterable[str]) -> int:
        """Sum of edge weights along consecutive node pairs of `path`."""
        path = list(path)
        total = 0
        for a, b in zip(path, path[1:]):
            edge = self.get_edge_between(a, b)
            if edge is None:
                raise MalformedGraph(f"no edge between {a!r} and {b!r}")
            total += edge.weight
        return total

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "source": self.source_id,
            "target": self.target_id,
            "nodes":  [n.to_dict() for n in self.nodes.values()],
            "edges":  [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        try:
            g = cls(source_id=data.get("source"), target_id=data.get("target"))
            for nd in data.get("nodes", []):
                g.add_node(Node.from_dict(nd))
            for ed in data.get("edges", []):
                g.add_edge(Edge.from_dict(ed))
        except MalformedGraph:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise MalformedGraph(f"cannot read graph data: {exc}") from exc
        g.validate()
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        return (
            f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, "
            f"source={self.source_id}, target={self.target_id})"
        )
