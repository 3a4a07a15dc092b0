"""
recorder.py — Run Recorder & Analytics
========================================
Runs Dijkstra on a graph from start to finish (no pacing), keeps every
StepEvent, then computes the numbers the analytics card shows.

Usage:
    rec = Recorder()
    metrics = rec.record(graph)          # graph's own source / target
    metrics.path, metrics.distance
    rec.export()                         # serialisable snapshot for replay

The graph is only read, so recording never disturbs a live, paced run on
the same graph.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from graph import Graph
from algorithms import Found, ShortestPathEngine, StepEvent


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    source:         str             = ""
    target:         str             = ""
    nodes_visited:  int             = 0
    edges_relaxed:  int             = 0
    path:           List[str]       = field(default_factory=list)
    path_cost:      int             = 0        # sum of edge weights along `path`
    distance:       Optional[float] = None     # engine-reported distance, None if unreachable
    total_steps:    int             = 0        # number of StepEvents produced
    wall_time_ms:   float           = 0.0
    path_found:     bool            = False


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        events  : Every StepEvent from the last run, terminal one last.
        metrics : RunMetrics of the last run (None before record()).
    """

    def __init__(self):
        self.events:  List[StepEvent]      = []
        self.metrics: Optional[RunMetrics] = None
        self._graph:  Optional[Graph]      = None

    def record(
        self,
        graph: Graph,
        source: Optional[str] = None,
        target: Optional[str] = None,
    ) -> RunMetrics:
        engine = ShortestPathEngine()
        engine.initialize(graph, source, target)

        start = time.monotonic()
        self.events = engine.run_to_completion()
        wall_ms = (time.monotonic() - start) * 1000

        self._graph = graph
        self.metrics = self._compute_metrics(engine, wall_ms)
        logger.info(
            "Recorded run %s → %s: %d steps, found=%s",
            self.metrics.source, self.metrics.target,
            self.metrics.total_steps, self.metrics.path_found,
        )
        return self.metrics

    def export(self) -> Dict[str, Any]:
        return {
            "graph":   self._graph.to_dict() if self._graph else {},
            "metrics": asdict(self.metrics) if self.metrics else {},
            "events":  [e.to_dict() for e in self.events],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, engine: ShortestPathEngine, wall_ms: float) -> RunMetrics:
        state = engine.state
        last  = self.events[-1] if self.events else None

        path: List[str] = []
        distance: Optional[float] = None
        if isinstance(last, Found):
            path = list(last.path)
            distance = last.distance

        return RunMetrics(
            source=engine.source_id,
            target=engine.target_id,
            nodes_visited=len(state.visited),
            edges_relaxed=state.edges_relaxed,
            path=path,
            path_cost=self._graph.path_cost(path),
            distance=distance,
            total_steps=len(self.events),
            wall_time_ms=round(wall_ms, 2),
            path_found=bool(path),
        )
