class FluentDotError(Exception):
    """Base class for every error raised by fluentdot."""


class ContextStateError(FluentDotError, RuntimeError):
    """A creation context was ended without a matching begin."""


class ModelConstructionError(FluentDotError, TypeError):
    """A graph element was combined with something it cannot hold."""
