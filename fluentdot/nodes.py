import copy
from typing import Any, Mapping, Optional, Tuple, Union

from .attributes import Attributed, Attributes
from .context import node_defaults
from .label import Label
from .links import Link, LinkTarget
from .ports import NO_PORT, Compass, Port


class Node(Attributed, LinkTarget):
    """Node represents a named vertex and the links leaving it.

    Nodes are values: attr and link return a new node and leave the
    original untouched. Two nodes with the same name are the same node of
    the rendered graph and get merged when they meet.
    """

    def __init__(self, name: Union[str, Label] = "", attrs: Optional[Mapping[str, Any]] = None):
        """Node represents a graph vertex.

        :param name: Node name, plain text or a markup Label.
        :param attrs: Node attributes, laid over the current node defaults.
        """
        self._name = Label.of(name)
        self._attributes = node_defaults().merge(Attributes(attrs))
        self._links: Tuple[Link, ...] = ()

    def __repr__(self):
        return f"<Node {self._name!r}>"

    @property
    def name(self) -> Label:
        return self._name

    @property
    def links(self) -> Tuple[Link, ...]:
        return self._links

    def link(self, *targets: Union[Link, LinkTarget]) -> "Node":
        """Link this node to other nodes, node endpoints or graphs.

        :param targets: Link targets, or ready made Links.
        :return: A new node holding the added links.
        """
        node = copy.copy(self)
        node._links = self._links + tuple(Link.of(target) for target in targets)
        return node

    def port(self, record: Optional[str] = None, compass: Optional[Union[Compass, str]] = None) -> "NodePoint":
        return NodePoint(self, Port(record, compass))

    def record(self, name: str) -> "NodePoint":
        return NodePoint(self, Port(record=name))

    def compass(self, direction: Union[Compass, str]) -> "NodePoint":
        return NodePoint(self, Port(compass=direction))

    def endpoint(self) -> "NodePoint":
        return NodePoint(self)

    def merge(self, other: "Node") -> "Node":
        """Merge a node of the same name into this one.

        Attributes of other win, its links are appended unless this node
        already holds the very same link.
        """
        if other is self:
            return self
        node = copy.copy(self)
        node._attributes = self._attributes.merge(other._attributes)
        known = {id(link) for link in self._links}
        added = tuple(link for link in other._links if id(link) not in known)
        node._links = self._links + added
        return node

    def _with_attributes(self, attributes: Attributes) -> "Node":
        node = copy.copy(self)
        node._attributes = attributes
        return node


class NodePoint(LinkTarget):
    """NodePoint is a node used as a link endpoint, optionally qualified by a port."""

    __slots__ = ("_node", "_port")

    def __init__(self, node: Node, port: Port = NO_PORT):
        self._node = node
        self._port = port

    @property
    def node(self) -> Node:
        return self._node

    @property
    def port(self) -> Port:
        return self._port

    def record(self, name: str) -> "NodePoint":
        return NodePoint(self._node, self._port.record(name))

    def compass(self, direction: Union[Compass, str]) -> "NodePoint":
        return NodePoint(self._node, self._port.compass(direction))

    def endpoint(self) -> "NodePoint":
        return self

    def __repr__(self):
        return f"<NodePoint {self._node!r} {self._port!r}>"
