"""
algorithms/
-----------
Shortest-path core.

    from algorithms import ShortestPathEngine, PriorityQueue
    from algorithms import Visit, Relaxed, Found, Exhausted, StepEvent
    from algorithms import Phase, InvalidState
"""

from algorithms.priority_queue import PriorityQueue
from algorithms.step           import (
    Visit, Relaxed, Found, Exhausted, StepEvent,
)
from algorithms.dijkstra       import (
    ShortestPathEngine, AlgorithmState, Phase, InvalidState,
)

__all__ = [
    "PriorityQueue",
    "Visit", "Relaxed", "Found", "Exhausted", "StepEvent",
    "ShortestPathEngine", "AlgorithmState", "Phase", "InvalidState",
]
