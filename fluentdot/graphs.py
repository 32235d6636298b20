import copy
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .attributes import EMPTY, Attributed, Attributes, AttributeView
from .context import graph_defaults
from .exceptions import ModelConstructionError
from .label import Label
from .links import Link, LinkTarget
from .nodes import Node


class Graph(Attributed, LinkTarget):
    """Graph represents a graph or, when nested, a subgraph.

    Besides its own (general) attributes a graph carries the default
    tables written as graph, node and edge statements, its nodes and
    subgraphs in insertion order, and the links it has as a subgraph.
    """

    def __init__(
        self,
        name: Union[str, Label] = "",
        directed: bool = False,
        strict: bool = False,
        attrs: Optional[Mapping[str, Any]] = None,
    ):
        """Graph represents a graph.

        :param name: Graph name. An empty name makes the graph anonymous.
        :param directed: Render edges as directed.
        :param strict: Render the strict keyword, forbidding multi-edges.
        :param attrs: General attributes, laid over the current graph defaults.
        """
        self._name = Label.of(name)
        self._directed = directed
        self._strict = strict
        self._attributes = graph_defaults().merge(Attributes(attrs))
        self._graph_attrs: Attributes = EMPTY
        self._node_attrs: Attributes = EMPTY
        self._link_attrs: Attributes = EMPTY
        self._nodes: Tuple[Node, ...] = ()
        self._node_index: Dict[Label, int] = {}
        self._subgraphs: Tuple["Graph", ...] = ()
        self._subgraph_index: Dict[Label, int] = {}
        self._links: Tuple[Link, ...] = ()

    def __repr__(self):
        return f"<Graph {self._name!r}>"

    def __str__(self) -> str:
        from .serializer import serialize

        return serialize(self)

    @property
    def name(self) -> Label:
        return self._name

    @property
    def is_directed(self) -> bool:
        return self._directed

    @property
    def is_strict(self) -> bool:
        return self._strict

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return self._nodes

    @property
    def subgraphs(self) -> Tuple["Graph", ...]:
        return self._subgraphs

    @property
    def links(self) -> Tuple[Link, ...]:
        return self._links

    @property
    def graph_attrs(self) -> Attributes:
        return self._graph_attrs

    @property
    def node_attrs(self) -> Attributes:
        return self._node_attrs

    @property
    def link_attrs(self) -> Attributes:
        return self._link_attrs

    @property
    def graph_attr(self) -> AttributeView:
        """Defaults for subgraphs, written as a graph [...] statement."""
        return AttributeView(self, "_graph_attrs")

    @property
    def node_attr(self) -> AttributeView:
        """Defaults for nodes, written as a node [...] statement."""
        return AttributeView(self, "_node_attrs")

    @property
    def link_attr(self) -> AttributeView:
        """Defaults for edges, written as an edge [...] statement."""
        return AttributeView(self, "_link_attrs")

    @property
    def general(self) -> AttributeView:
        """Attributes of the graph itself, written as single statements."""
        return AttributeView(self, "_attributes")

    def directed(self) -> "Graph":
        return self._replace(_directed=True)

    def undirected(self) -> "Graph":
        return self._replace(_directed=False)

    def strict(self, strict: bool = True) -> "Graph":
        return self._replace(_strict=strict)

    def named(self, name: Union[str, Label]) -> "Graph":
        return self._replace(_name=Label.of(name))

    def node(self, *nodes: Node) -> "Graph":
        """Add nodes, merging them into already present nodes of the same name."""
        added = list(self._nodes)
        index = dict(self._node_index)
        for node in nodes:
            if not isinstance(node, Node):
                raise ModelConstructionError(f"{node!r} is not a valid Node")
            position = index.get(node.name)
            if position is None:
                index[node.name] = len(added)
                added.append(node)
            else:
                added[position] = added[position].merge(node)
        return self._replace(_nodes=tuple(added), _node_index=index)

    def graph(self, *graphs: "Graph") -> "Graph":
        """Add subgraphs, merging them into present subgraphs of the same name.

        Anonymous subgraphs are always added as they are.
        """
        added = list(self._subgraphs)
        index = dict(self._subgraph_index)
        for graph in graphs:
            if not isinstance(graph, Graph):
                raise ModelConstructionError(f"{graph!r} is not a valid Graph")
            position = None if graph.name.anonymous else index.get(graph.name)
            if position is None:
                if not graph.name.anonymous:
                    index[graph.name] = len(added)
                added.append(graph)
            else:
                added[position] = added[position].merge(graph)
        return self._replace(_subgraphs=tuple(added), _subgraph_index=index)

    def link(self, *targets: Union[Link, LinkTarget]) -> "Graph":
        """Link this graph, used as a subgraph, to nodes, node endpoints or graphs."""
        links = tuple(Link.of(target) for target in targets)
        for link in links:
            if not link.source_port.is_empty():
                raise ModelConstructionError(f"{link!r} leaves from a port, which {self!r} cannot have")
        return self._replace(_links=self._links + links)

    def endpoint(self) -> "Graph":
        return self

    def merge(self, other: "Graph") -> "Graph":
        """Merge a graph of the same name into this one."""
        if other is self:
            return self
        known = {id(link) for link in self._links}
        added = tuple(link for link in other._links if id(link) not in known)
        graph = self._replace(
            _attributes=self._attributes.merge(other._attributes),
            _graph_attrs=self._graph_attrs.merge(other._graph_attrs),
            _node_attrs=self._node_attrs.merge(other._node_attrs),
            _link_attrs=self._link_attrs.merge(other._link_attrs),
            _links=self._links + added,
        )
        return graph.node(*other._nodes).graph(*other._subgraphs)

    def _replace_table(self, slot: str, attributes: Attributes) -> "Graph":
        return self._replace(**{slot: attributes})

    def _with_attributes(self, attributes: Attributes) -> "Graph":
        return self._replace(_attributes=attributes)

    def _replace(self, **changes: Any) -> "Graph":
        graph = copy.copy(self)
        for k, v in changes.items():
            setattr(graph, k, v)
        return graph
