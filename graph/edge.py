"""
edge.py — Graph Edge
====================
Undirected, weighted link between two nodes.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Undirected: `source`/`target` only record the order the generator
    connected them in; traversal works both ways.
  - Weights are positive integers (the generator clamps them to [1, 6]).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source : ID of the first endpoint.
        target : ID of the second endpoint.
        weight : Positive integer cost.
    """

    source: str
    target: str
    weight: int = 1

    @property
    def id(self) -> str:
        """Display label.  Not unique when node ids themselves contain '-'."""
        return f"{self.source}-{self.target}"

    @property
    def key(self) -> frozenset:
        """Unordered endpoint pair; two edges with the same key are duplicates."""
        return frozenset((self.source, self.target))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def other_end(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the other. None if node_id isn't an endpoint."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=str(data["source"]),
            target=str(data["target"]),
            weight=data.get("weight", 1),
        )

    def __repr__(self) -> str:
        return f"Edge({self.source} ↔ {self.target}, w={self.weight})"
