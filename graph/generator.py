"""
generator.py — Random Connected Graph Generator
================================================
Builds the organic-looking weighted graphs the shortest-path demo runs on.

Pipeline:
  1. Placement     – nodes on a near-square grid, each jittered inside its cell
  2. Labelling     – sort left → right, hand out ids from a fixed alphabet
                     (leftmost = source, rightmost = target)
  3. Connectivity  – randomised greedy spanning structure: repeatedly attach
                     the unconnected node with the lowest noisy distance score
  4. Extra edges   – ~0.8 · n random shortcuts, no duplicates, no long spans

Every attachment in step 3 pulls exactly one new node into the connected
set, so the result is connected by construction.  It is NOT a true minimum
spanning tree; the random score factor is what keeps the shapes irregular.

Scaling: step 3 scans every (connected, unconnected) pair per attachment,
O(n²) per node and O(n³) overall.  Fine for the tens of nodes the demo
uses, not for thousands.

Randomness comes from an injected `random.Random`, so a seeded instance
reproduces a graph exactly.
"""

import logging
import math
import random
from typing import List, Optional, Tuple

from graph.graph import Graph
from graph.node import Node


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Generator Config — canvas defaults and shape knobs
# ---------------------------------------------------------------------------
class GeneratorConfig:
    # canvas
    width:   float = 650
    height:  float = 420
    padding: float = 40

    node_count: int = 16

    # placement
    column_factor: float = 1.5    # cols = ceil(sqrt(n * column_factor))
    jitter:        float = 0.6    # fraction of a cell a node may drift

    # edges
    extra_edge_ratio: float = 0.8
    weight_bucket:    float = 50  # pixels per weight unit
    min_weight:       int   = 1
    max_weight:       int   = 6

    labels: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


CONFIG = GeneratorConfig()


class GraphGenerator:
    """
    Usage:
        gen = GraphGenerator(rng=random.Random(7))
        g   = gen.generate(16, 650, 420, padding=40)
        g.source_id, g.target_id     # leftmost / rightmost node
    """

    def __init__(self, rng: Optional[random.Random] = None, config: GeneratorConfig = CONFIG):
        self.rng    = rng if rng is not None else random.Random()
        self.config = config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def generate(
        self,
        node_count: int,
        width: float,
        height: float,
        padding: Optional[float] = None,
    ) -> Graph:
        if padding is None:
            padding = self.config.padding
        node_count = max(0, int(node_count))

        if node_count == 0:
            logger.info("Generated empty graph")
            return Graph()

        nodes = self._place(node_count, width, height, padding)
        g = Graph(source_id=nodes[0].id, target_id=nodes[-1].id)
        for node in nodes:
            g.add_node(node)

        self._connect(g, nodes)
        tree_edges = g.edge_count()
        self._add_extra_edges(g, nodes, width, height)

        logger.info(
            "Generated graph: %d nodes, %d edges (%d spanning + %d extra), %s → %s",
            g.node_count(), g.edge_count(), tree_edges, g.edge_count() - tree_edges,
            g.source_id, g.target_id,
        )
        return g

    def regenerate(self, node_count: Optional[int] = None) -> Graph:
        """New graph on the configured default canvas."""
        cfg = self.config
        return self.generate(
            cfg.node_count if node_count is None else node_count,
            cfg.width, cfg.height, cfg.padding,
        )

    # ------------------------------------------------------------------
    # 1 + 2: placement and labelling
    # ------------------------------------------------------------------
    def _place(self, node_count: int, width: float, height: float, padding: float) -> List[Node]:
        cfg  = self.config
        rng  = self.rng
        cols = math.ceil(math.sqrt(node_count * cfg.column_factor))
        rows = math.ceil(node_count / cols)
        cell_w = (width - padding * 2) / cols
        cell_h = (height - padding * 2) / rows

        points: List[Tuple[float, float]] = []
        for i in range(node_count):
            col, row = i % cols, i // cols
            jitter_x = (rng.random() - 0.5) * cell_w * cfg.jitter
            jitter_y = (rng.random() - 0.5) * cell_h * cfg.jitter
            points.append((
                padding + col * cell_w + cell_w / 2 + jitter_x,
                padding + row * cell_h + cell_h / 2 + jitter_y,
            ))

        # stable sort: ties keep grid order
        points.sort(key=lambda p: p[0])
        return [Node(id=self.label(i), x=x, y=y) for i, (x, y) in enumerate(points)]

    def label(self, index: int) -> str:
        """A, B, …, 9, then AA, AB, … (bijective base-len(alphabet))."""
        alphabet = self.config.labels
        base = len(alphabet)
        label = ""
        index += 1
        while index > 0:
            index, rem = divmod(index - 1, base)
            label = alphabet[rem] + label
        return label

    # ------------------------------------------------------------------
    # 3: spanning structure
    # ------------------------------------------------------------------
    def _connect(self, g: Graph, nodes: List[Node]) -> None:
        rng = self.rng
        connected: List[int] = [0]
        not_connected: List[int] = list(range(1, len(nodes)))

        while not_connected:
            best: Optional[Tuple[int, int, float]] = None
            best_score = math.inf
            for frm in connected:
                for to in not_connected:
                    dist  = nodes[frm].distance_to(nodes[to])
                    score = dist * (0.5 + rng.random())
                    if score < best_score:
                        best_score = score
                        best = (frm, to, dist)

            frm, to, dist = best
            connected.append(to)
            not_connected.remove(to)
            g.create_edge(nodes[frm].id, nodes[to].id, weight=self._weight(dist))

    # ------------------------------------------------------------------
    # 4: shortcuts
    # ------------------------------------------------------------------
    def _add_extra_edges(self, g: Graph, nodes: List[Node], width: float, height: float) -> None:
        rng = self.rng
        n = len(nodes)
        max_span = (width + height) / 3
        attempts = int(n * self.config.extra_edge_ratio)

        for _ in range(attempts):
            frm = rng.randrange(n)
            to  = rng.randrange(n)
            if frm == to:
                continue
            a, b = nodes[frm], nodes[to]
            if g.has_edge_between(a.id, b.id):
                continue
            dist = a.distance_to(b)
            if dist > max_span:
                continue
            g.create_edge(a.id, b.id, weight=self._weight(dist))

    # ------------------------------------------------------------------
    def _weight(self, dist: float) -> int:
        """Distance bucket plus a 0/1 nudge, clamped to [min_weight, max_weight]."""
        cfg = self.config
        # round half up
        bucket = math.floor(dist / cfg.weight_bucket + 0.5)
        return max(cfg.min_weight, min(cfg.max_weight, bucket + self.rng.randrange(2)))
