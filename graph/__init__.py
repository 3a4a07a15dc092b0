"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge, MalformedGraph
    from graph import GraphGenerator, GeneratorConfig
"""

from graph.node      import Node
from graph.edge      import Edge
from graph.graph     import Graph, MalformedGraph
from graph.generator import GraphGenerator, GeneratorConfig

__all__ = [
    "Node",
    "Edge",
    "Graph",           "MalformedGraph",
    "GraphGenerator",  "GeneratorConfig",
]
