import heapq
import logging
from typing import Dict, Hashable, List, Set, Union

from .attributes import Attributes, AttrValue
from .graphs import Graph
from .label import Label
from .links import Link, LinkTarget
from .nodes import Node, NodePoint
from .ports import Port

logger = logging.getLogger(__name__)

LinkSource = Union[Node, Graph]


def _source_of(target: LinkTarget) -> LinkSource:
    if isinstance(target, NodePoint):
        return target.node
    if isinstance(target, Graph):
        return target
    raise TypeError(f"{target!r} is not a valid link endpoint")


def _key(source: LinkSource) -> Hashable:
    # Nodes are identified by name, graphs by identity.
    if isinstance(source, Node):
        return source.name
    return id(source)


class Serializer:
    """Serializer writes a graph as DOT source.

    The output is built in memory and only returned once complete. The
    graph is not modified and the result depends on nothing but its
    content, so serializing the same graph twice gives the same text.
    """

    _undirected_op = "--"
    _directed_op = "->"
    _quote = '"'

    def __init__(self, graph: Graph):
        if not isinstance(graph, Graph):
            raise TypeError(f"{graph!r} is not a valid Graph")
        self._root = graph
        self._out: List[str] = []

    def serialize(self) -> str:
        self._out = []
        self._graph(self._root, toplevel=True)
        text = "".join(self._out)
        logger.debug("serialized %r into %d characters", self._root, len(text))
        return text

    def _graph(self, graph: Graph, toplevel: bool) -> None:
        self._graph_init(graph, toplevel)
        self._graph_attrs(graph)

        sources = self._link_sources(graph)
        targets = {_key(_source_of(link.target)) for s in sources for link in s.links}
        self._nodes(graph, [s for s in sources if isinstance(s, Node)], targets)
        self._graphs([s for s in sources if isinstance(s, Graph)], targets)

        linked = self._linearize(sources)
        self._edges([s for s in linked if isinstance(s, Node)])
        self._edges([s for s in linked if isinstance(s, Graph)])
        self._out.append("}")

    def _graph_init(self, graph: Graph, toplevel: bool) -> None:
        if toplevel:
            if graph.is_strict:
                self._out.append("strict ")
            self._out.append("digraph " if graph.is_directed else "graph ")
        elif not graph.name.anonymous:
            self._out.append("subgraph ")
        if not graph.name.anonymous:
            self._out.append(self._id(graph.name) + " ")
        self._out.append("{\n")

    def _graph_attrs(self, graph: Graph) -> None:
        for keyword, attributes in (
            ("graph", graph.graph_attrs),
            ("node", graph.node_attrs),
            ("edge", graph.link_attrs),
        ):
            if not attributes.is_empty():
                self._out.append(f"{keyword} {self._attr_list(attributes)}\n")
        for k, v in graph.attributes.items():
            self._out.append(f"{self._id(k)}={self._id(v)}\n")

    def _link_sources(self, graph: Graph) -> List[LinkSource]:
        """Collect everything linked from the graph's nodes and subgraphs.

        Sources are visited depth first in declaration order. Nodes of the
        same name are merged into one entry.
        """
        collected: Dict[Hashable, LinkSource] = {}
        visited: Set[int] = set()
        pending: List[LinkSource] = list(reversed(graph.subgraphs)) + list(reversed(graph.nodes))
        while pending:
            source = pending.pop()
            if id(source) in visited:
                continue
            visited.add(id(source))
            key = _key(source)
            known = collected.get(key)
            collected[key] = source if known is None else known.merge(source)
            pending.extend(_source_of(link.target) for link in reversed(source.links))
        return list(collected.values())

    @staticmethod
    def _linearize(sources: List[LinkSource]) -> List[LinkSource]:
        """Order sources so that linking sources come before their targets.

        Among the sources without pending incoming links the earliest
        collected one goes first. Cycles are broken in collection order.
        """
        position = {_key(source): i for i, source in enumerate(sources)}
        incoming = [0] * len(sources)
        successors: List[List[int]] = [[] for _ in sources]
        for i, source in enumerate(sources):
            for link in source.links:
                target = position[_key(_source_of(link.target))]
                if target != i:
                    successors[i].append(target)
                    incoming[target] += 1

        ready = [i for i, count in enumerate(incoming) if count == 0]
        done = [False] * len(sources)
        ordered: List[LinkSource] = []
        earliest = 0
        while len(ordered) < len(sources):
            if ready:
                current = heapq.heappop(ready)
                if done[current]:
                    continue
            else:
                while done[earliest]:
                    earliest += 1
                current = earliest
            done[current] = True
            ordered.append(sources[current])
            for target in successors[current]:
                incoming[target] -= 1
                if incoming[target] == 0 and not done[target]:
                    heapq.heappush(ready, target)
        return ordered

    def _nodes(self, graph: Graph, nodes: List[Node], targets: Set[Hashable]) -> None:
        declared = {node.name for node in graph.nodes}
        for node in nodes:
            standalone = node.name in declared and not node.links and node.name not in targets
            if not node.attributes.is_empty() or standalone:
                self._out.append(self._id(node.name))
                if not node.attributes.is_empty():
                    self._out.append(" " + self._attr_list(node.attributes))
                self._out.append("\n")

    def _graphs(self, graphs: List[Graph], targets: Set[Hashable]) -> None:
        for graph in graphs:
            if not graph.links and _key(graph) not in targets:
                self._graph(graph, toplevel=False)
                self._out.append("\n")

    def _edges(self, sources: List[LinkSource]) -> None:
        op = self._directed_op if self._root.is_directed else self._undirected_op
        for source in sources:
            for link in source.links:
                if isinstance(source, Node):
                    self._point(source, link.source_port)
                else:
                    self._graph(source, toplevel=False)
                self._out.append(f" {op} ")
                self._target(link)
                if not link.attributes.is_empty():
                    self._out.append(" " + self._attr_list(link.attributes))
                self._out.append("\n")

    def _target(self, link: Link) -> None:
        target = link.target
        if isinstance(target, NodePoint):
            self._point(target.node, target.port)
        elif isinstance(target, Graph):
            self._graph(target, toplevel=False)
        else:
            raise TypeError(f"{target!r} is not a valid link endpoint")

    def _point(self, node: Node, port: Port) -> None:
        self._out.append(self._id(node.name))
        if port.record_name is not None:
            self._out.append(":" + self._id(port.record_name))
        if port.direction is not None:
            self._out.append(":" + port.direction.value)

    def _attr_list(self, attributes: Attributes) -> str:
        return "[" + ",".join(f"{self._id(k)}={self._id(v)}" for k, v in attributes.items()) + "]"

    def _id(self, value: Union[AttrValue, Label]) -> str:
        if isinstance(value, Label):
            if value.html:
                return f"<{value.value}>"
            value = value.value
        return self._quote + value.replace(self._quote, "\\" + self._quote) + self._quote


def serialize(graph: Graph) -> str:
    """Return the DOT source of a graph."""
    return Serializer(graph).serialize()
