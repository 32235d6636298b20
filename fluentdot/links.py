import copy
from typing import Any, Mapping, Optional, Union

from .attributes import Attributed, Attributes
from .context import link_defaults
from .exceptions import ModelConstructionError
from .ports import NO_PORT, Port


class LinkTarget:
    """LinkTarget is anything a link can point to."""

    def endpoint(self) -> "LinkTarget":
        """Return the endpoint a link to this object points at."""
        raise NotImplementedError


class Link(Attributed):
    """Link represents an edge leaving the node or graph that holds it."""

    def __init__(
        self,
        target: LinkTarget,
        source_port: Optional[Port] = None,
        attrs: Optional[Mapping[str, Any]] = None,
    ):
        """Link represents an edge.

        :param target: Node, node endpoint or graph the edge points to.
        :param source_port: Port on the source node the edge leaves from.
        :param attrs: Edge attributes, laid over the current link defaults.
        """
        if not isinstance(target, LinkTarget):
            raise ModelConstructionError(f"{target!r} is not a valid link target")
        if source_port is not None and not isinstance(source_port, Port):
            raise ModelConstructionError(f"{source_port!r} is not a valid port")
        self._target = target.endpoint()
        self._source_port = source_port or NO_PORT
        self._attributes = link_defaults().merge(Attributes(attrs))

    @classmethod
    def of(cls, target: Union["Link", LinkTarget]) -> "Link":
        if isinstance(target, Link):
            return target
        return cls(target)

    @property
    def target(self) -> LinkTarget:
        return self._target

    @property
    def source_port(self) -> Port:
        return self._source_port

    def _with_attributes(self, attributes: Attributes) -> "Link":
        link = copy.copy(self)
        link._attributes = attributes
        return link

    def __repr__(self):
        return f"<Link to {self._target!r}>"
