import logging
from typing import Any, Mapping, Optional, Union

from .attributes import Attributed, Attributes, AttributeView
from .context import CreationContext
from .exceptions import ContextStateError, FluentDotError, ModelConstructionError
from .graphs import Graph
from .label import Label
from .links import Link, LinkTarget
from .nodes import Node, NodePoint
from .ports import Compass, Port
from .serializer import Serializer, serialize

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Attributed",
    "Attributes",
    "AttributeView",
    "Compass",
    "ContextStateError",
    "CreationContext",
    "FluentDotError",
    "Graph",
    "Label",
    "Link",
    "LinkTarget",
    "ModelConstructionError",
    "Node",
    "NodePoint",
    "Port",
    "Serializer",
    "between",
    "compass",
    "graph",
    "html",
    "node",
    "record",
    "serialize",
    "to",
]


def graph(name: Union[str, Label] = "", **attrs: Any) -> Graph:
    """Create an undirected, non strict graph."""
    return Graph(name, attrs=attrs)


def node(name: Union[str, Label] = "", **attrs: Any) -> Node:
    return Node(name, attrs=attrs)


def to(target: LinkTarget, attrs: Optional[Mapping[str, Any]] = None) -> Link:
    """Create a link to a node, node endpoint or graph."""
    return Link(target, attrs=attrs)


def between(source: Port, target: LinkTarget, attrs: Optional[Mapping[str, Any]] = None) -> Link:
    """Create a link leaving its source node from the given port."""
    return Link(target, source_port=source, attrs=attrs)


def compass(direction: Union[Compass, str]) -> Port:
    return Port(compass=direction)


def record(name: str) -> Port:
    return Port(record=name)


def html(text: str) -> Label:
    """Create a markup label, written as <text> without escaping."""
    return Label.markup(text)
