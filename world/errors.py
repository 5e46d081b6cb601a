"""Exceptions raised when building or decoding a transit network."""


class TransportError(Exception):
    """Base class for errors in the transit network model."""
    pass


class EmptyRouteError(TransportError):
    """Raised when an operation needs a route with at least one stop."""
    pass


class IncompatibleTypeError(TransportError):
    """Raised when a vehicle's type does not match the type of a route."""
    pass


class TransportFormatError(TransportError):
    """Raised when encoded network text is malformed."""
    pass
