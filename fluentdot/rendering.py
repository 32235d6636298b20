from typing import Any

from graphviz import Source  # type: ignore[import]

from .graphs import Graph
from .serializer import serialize


def to_source(graph: Graph, **kwargs: Any) -> Source:
    """Wrap the DOT source of a graph into a graphviz Source.

    The returned object renders, pipes or views the graph with the
    graphviz package. Keyword arguments are passed on to Source, e.g.
    filename, format or engine.
    """
    return Source(serialize(graph), **kwargs)
