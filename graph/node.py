"""
node.py — Graph Node
====================
A point in the plane with a stable identifier.

Design decisions:
  - Frozen dataclass.  Nodes are created once by the generator (or
    imported) and never change afterwards, so one Graph can be shared by
    any number of engine runs.
  - Position is only used for distance computation (edge weights, span
    limits); the shortest-path engine never looks at it.
"""

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Node:
    """
    Attributes:
        id : Unique identifier ("A", "B", …, "AA", …).
        x, y : Canvas coordinates in pixels.
    """

    id: str
    x:  float = 0.0
    y:  float = 0.0

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def distance_to(self, other: "Node") -> float:
        """Euclidean distance."""
        return math.hypot(self.x - other.x, self.y - other.y)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"id": self.id, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(id=str(data["id"]), x=float(data.get("x", 0.0)), y=float(data.get("y", 0.0)))

    def __repr__(self) -> str:
        return f"Node(id={self.id}, pos=({self.x:.2f},{self.y:.2f}))"
