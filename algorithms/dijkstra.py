"""
dijkstra.py — Steppable Dijkstra Engine
========================================
Single-source shortest paths, one visible state change per `step()` call,
so an outside driver (Stepper, test, HTTP handler) decides the pace and
can pause, replay or abandon a run at any point.

Phases:
    IDLE  →  initialize()  →  RUNNING
    RUNNING  →  step() pops target       →  FOUND
    RUNNING  →  step() finds no frontier →  EXHAUSTED
    any      →  reset()                  →  IDLE

Each step:
  1. Frontier empty  →  Exhausted
  2. Pop the closest node; already visited → stale copy, pop again
  3. Mark visited
  4. Node is the target  →  Found(path, distance)
  5. Otherwise relax every unvisited neighbour, push improvements,
     return Visit(node, distance, relaxed…)

Correctness note: Dijkstra requires non-negative weights.  The Graph
container only accepts positive integer weights, so this always holds.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Set

from graph import Graph, MalformedGraph
from algorithms.priority_queue import PriorityQueue
from algorithms.step import Exhausted, Found, Relaxed, StepEvent, Visit


logger = logging.getLogger(__name__)

INF = math.inf


class InvalidState(RuntimeError):
    """step() called while the engine is not running."""


class Phase(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    FOUND     = "found"
    EXHAUSTED = "exhausted"


# ---------------------------------------------------------------------------
# Per-run mutable state, owned by exactly one engine
# ---------------------------------------------------------------------------
@dataclass
class AlgorithmState:
    """
    Attributes:
        dist          : {node_id: best known distance}; missing means +inf.
        prev          : {node_id: predecessor on the best known route}.
        visited       : Finalised node ids.
        frontier      : PriorityQueue of (node_id, distance), may hold stale copies.
        visit_order   : Node ids in the order they were finalised.
        edges_relaxed : Number of successful relaxations so far.
    """

    frontier:      PriorityQueue
    dist:          Dict[str, float]          = field(default_factory=dict)
    prev:          Dict[str, Optional[str]]  = field(default_factory=dict)
    visited:       Set[str]                  = field(default_factory=set)
    visit_order:   List[str]                 = field(default_factory=list)
    edges_relaxed: int                       = 0

    def distance(self, node_id: str) -> float:
        return self.dist.get(node_id, INF)

    def snapshot(self) -> dict:
        """JSON-friendly view; unreachable distances become None."""
        return {
            "distances":     {n: (None if d == INF else d) for n, d in self.dist.items()},
            "visited":       list(self.visit_order),
            "frontier_size": len(self.frontier),
            "edges_relaxed": self.edges_relaxed,
        }


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class ShortestPathEngine:
    """
    Usage:
        engine = ShortestPathEngine()
        engine.initialize(graph, "A", "P")
        while engine.is_running:
            event = engine.step()
    """

    def __init__(self, queue_factory: Callable[[], PriorityQueue] = PriorityQueue):
        self._queue_factory = queue_factory
        self._graph:  Optional[Graph]          = None
        self._state:  Optional[AlgorithmState] = None
        self._phase:  Phase                    = Phase.IDLE
        self.source_id: Optional[str] = None
        self.target_id: Optional[str] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize(
        self,
        graph: Graph,
        source_id: Optional[str] = None,
        target_id: Optional[str] = None,
    ) -> None:
        """Start a fresh run.  Source/target default to the graph's own."""
        graph.validate()
        source_id = graph.source_id if source_id is None else source_id
        target_id = graph.target_id if target_id is None else target_id
        for label, nid in (("source", source_id), ("target", target_id)):
            if nid is None or nid not in graph.nodes:
                raise MalformedGraph(f"{label} {nid!r} is not a node of the graph")

        frontier = self._queue_factory()
        state = AlgorithmState(frontier=frontier, dist={nid: INF for nid in graph.nodes})
        state.dist[source_id] = 0
        frontier.add(source_id, 0)

        self._graph    = graph
        self._state    = state
        self.source_id = source_id
        self.target_id = target_id
        self._phase    = Phase.RUNNING
        logger.info("Dijkstra initialised on %r: %s → %s", graph, source_id, target_id)

    def reset(self) -> None:
        """Drop the run.  The graph stays attached for inspection."""
        self._state = None
        self._phase = Phase.IDLE
        logger.info("Dijkstra reset")

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def step(self) -> StepEvent:
        if self._phase is not Phase.RUNNING:
            raise InvalidState(f"step() called while engine is {self._phase.value}")

        state = self._state
        while True:
            node_id = state.frontier.pop()
            if node_id is None:
                self._phase = Phase.EXHAUSTED
                logger.info(
                    "Frontier exhausted after %d visits; %s unreachable from %s",
                    len(state.visited), self.target_id, self.source_id,
                )
                return Exhausted(visited_count=len(state.visited))
            if node_id in state.visited:
                logger.debug("Discarding stale frontier entry for %s", node_id)
                continue
            break

        state.visited.add(node_id)
        state.visit_order.append(node_id)
        distance = state.distance(node_id)

        if node_id == self.target_id:
            self._phase = Phase.FOUND
            path = self.reconstruct_path(node_id)
            logger.info("Path found: %s (distance %s)", " → ".join(path), distance)
            return Found(path=tuple(path), distance=distance)

        relaxed = tuple(self._relax(node_id, distance))
        logger.debug("Visited %s at distance %s, relaxed %d edge(s)", node_id, distance, len(relaxed))
        return Visit(node_id=node_id, distance=distance, relaxed=relaxed)

    def _relax(self, node_id: str, distance: float) -> Iterator[Relaxed]:
        state = self._state
        for nbr, edge in self._graph.neighbours(node_id):
            if nbr in state.visited:
                continue
            candidate = distance + edge.weight
            if candidate < state.distance(nbr):
                state.dist[nbr] = candidate
                state.prev[nbr] = node_id
                state.frontier.add(nbr, candidate)
                state.edges_relaxed += 1
                yield Relaxed(edge=edge, neighbor_id=nbr, new_distance=candidate)

    def events(self) -> Iterator[StepEvent]:
        """Step until a terminal event, yielding each one (terminal included)."""
        while self._phase is Phase.RUNNING:
            yield self.step()

    def run_to_completion(self) -> List[StepEvent]:
        return list(self.events())

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------
    def reconstruct_path(self, node_id: str) -> List[str]:
        """
        Source → node_id along `prev`.  Empty if node_id was never reached
        (or there is no run).
        """
        state = self._state
        if state is None or state.distance(node_id) == INF:
            return []
        path: List[str] = []
        cur: Optional[str] = node_id
        while cur is not None:
            path.append(cur)
            cur = state.prev.get(cur)
        path.reverse()
        return path

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def state(self) -> Optional[AlgorithmState]:
        return self._state

    @property
    def graph(self) -> Optional[Graph]:
        return self._graph

    @property
    def is_running(self) -> bool:
        return self._phase is Phase.RUNNING

    @property
    def is_finished(self) -> bool:
        return self._phase in (Phase.FOUND, Phase.EXHAUSTED)

    def distance_to(self, node_id: str) -> float:
        return self._state.distance(node_id) if self._state else INF
