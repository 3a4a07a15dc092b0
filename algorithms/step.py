"""
step.py — Step Events
=====================
Every `ShortestPathEngine.step()` returns exactly one of these.  They are
frozen snapshots: the engine is the only writer, the stepper and the
presentation layer are pure readers.

    Visit      – a node was popped and finalised; carries the edges it relaxed
    Relaxed    – sub-event of Visit: a neighbour got a shorter distance
    Found      – the target was popped; terminal, carries the route
    Exhausted  – frontier ran dry without reaching the target; terminal

Each variant has a class-level `kind` tag and a `to_dict()` for JSON, so
the HTTP layer can forward them untouched.
"""

from dataclasses import dataclass, field
from typing import ClassVar, List, Tuple, Union

from graph import Edge


@dataclass(frozen=True)
class Relaxed:
    kind: ClassVar[str] = "relaxed"

    edge:         Edge
    neighbor_id:  str
    new_distance: float

    def to_dict(self) -> dict:
        return {
            "kind":         self.kind,
            "edge":         self.edge.to_dict(),
            "neighbor_id":  self.neighbor_id,
            "new_distance": self.new_distance,
        }


@dataclass(frozen=True)
class Visit:
    """
    Attributes:
        node_id  : The node just finalised.
        distance : Its (now final) shortest distance from the source.
        relaxed  : Neighbours improved through this node, in edge order.
    """

    kind: ClassVar[str] = "visit"

    node_id:  str
    distance: float
    relaxed:  Tuple[Relaxed, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "kind":     self.kind,
            "node_id":  self.node_id,
            "distance": self.distance,
            "relaxed":  [r.to_dict() for r in self.relaxed],
        }


@dataclass(frozen=True)
class Found:
    kind: ClassVar[str] = "found"

    path:     Tuple[str, ...]
    distance: float

    def to_dict(self) -> dict:
        return {
            "kind":     self.kind,
            "path":     list(self.path),
            "hops":     [list(hop) for hop in path_edges(list(self.path))],
            "distance": self.distance,
        }


@dataclass(frozen=True)
class Exhausted:
    kind: ClassVar[str] = "exhausted"

    visited_count: int = 0

    def to_dict(self) -> dict:
        return {"kind": self.kind, "visited_count": self.visited_count}


StepEvent = Union[Visit, Found, Exhausted]


def path_edges(path: List[str]) -> List[Tuple[str, str]]:
    """Consecutive (a, b) hops along a path, for the renderer to highlight."""
    return list(zip(path, path[1:]))
