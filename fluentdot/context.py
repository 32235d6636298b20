import logging
from contextvars import ContextVar
from types import TracebackType
from typing import Optional, Tuple, Type

from .attributes import EMPTY, Attributes, AttributeView
from .exceptions import ContextStateError

logger = logging.getLogger(__name__)

# Stack of active creation contexts.
#
# A ContextVar keeps one stack per thread (and per asyncio task), so
# graphs built concurrently never see each other's defaults.
__contexts: ContextVar[Tuple["CreationContext", ...]] = ContextVar("creation_contexts", default=())


def getcontexts() -> Tuple["CreationContext", ...]:
    return __contexts.get()


def setcontexts(contexts: Tuple["CreationContext", ...]) -> None:
    __contexts.set(contexts)


class CreationContext:
    """CreationContext holds ambient attribute defaults for new graph elements.

    While a context is the innermost active one, every graph, node and link
    created in the same thread starts out with its defaults. Defaults are
    read at creation time only; changing them later does not touch elements
    that already exist. An inner context shadows the outer ones completely.

    A context is a mutable object shared by reference: asyncio tasks or
    copy_context().run calls started while it is active see the same
    context, and defaults they set on it are visible to the caller too.
    Begin a new context inside such a task to keep its defaults private.

        with CreationContext.begin() as ctx:
            ctx.nodes().attr("shape", "box")
            ...
    """

    def __init__(self):
        self._graphs: Attributes = EMPTY
        self._nodes: Attributes = EMPTY
        self._links: Attributes = EMPTY

    @classmethod
    def begin(cls) -> "CreationContext":
        """Push a new, empty context and return it."""
        context = cls()
        contexts = getcontexts()
        setcontexts(contexts + (context,))
        logger.debug("creation context begun at depth %d", len(contexts) + 1)
        return context

    @classmethod
    def end(cls) -> None:
        """Pop the innermost context."""
        contexts = getcontexts()
        if not contexts:
            raise ContextStateError("Creation context ended without a matching begin")
        setcontexts(contexts[:-1])
        logger.debug("creation context ended at depth %d", len(contexts))

    @classmethod
    def current(cls) -> Optional["CreationContext"]:
        contexts = getcontexts()
        return contexts[-1] if contexts else None

    def __enter__(self) -> "CreationContext":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        contexts = getcontexts()
        position = next((i for i, context in enumerate(contexts) if context is self), None)
        if position is None:
            raise ContextStateError(f"{self!r} is not an active creation context")
        # Contexts begun inside this one and never ended go with it.
        setcontexts(contexts[:position])
        logger.debug("creation context ended at depth %d", position + 1)
        if position != len(contexts) - 1 and exc_type is None:
            raise ContextStateError(f"{self!r} was left with inner creation contexts still open")

    def graphs(self) -> AttributeView:
        return AttributeView(self, "_graphs")

    def nodes(self) -> AttributeView:
        return AttributeView(self, "_nodes")

    def links(self) -> AttributeView:
        return AttributeView(self, "_links")

    @property
    def graph_defaults(self) -> Attributes:
        return self._graphs

    @property
    def node_defaults(self) -> Attributes:
        return self._nodes

    @property
    def link_defaults(self) -> Attributes:
        return self._links

    def _replace_table(self, slot: str, attributes: Attributes) -> "CreationContext":
        setattr(self, slot, attributes)
        return self

    def __repr__(self):
        return f"<CreationContext graphs={dict(self._graphs)} nodes={dict(self._nodes)} links={dict(self._links)}>"


def graph_defaults() -> Attributes:
    context = CreationContext.current()
    return context.graph_defaults if context else EMPTY


def node_defaults() -> Attributes:
    context = CreationContext.current()
    return context.node_defaults if context else EMPTY


def link_defaults() -> Attributes:
    context = CreationContext.current()
    return context.link_defaults if context else EMPTY
