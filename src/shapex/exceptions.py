"""Custom exception hierarchy for shapex."""

from __future__ import annotations


class ShapeXError(Exception):
    """Base exception for all shapex errors."""


class ShapeXConfigError(ShapeXError):
    """Invalid configuration."""


class ShapeXStateError(ShapeXError):
    """A state snapshot could not be compared.

    Raised by the path differ when a snapshot cannot be serialized, most
    commonly because it contains a circular reference.  State trees must be
    acyclic; this is a precondition of every dispatch that replaces state.
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class ShapeXResponseError(ShapeXError):
    """A subscriber callback returned a value that is not a valid response.

    Valid results are ``None``, an awaitable, a mapping with optional
    ``state``/``dispatch`` keys, or a :class:`~shapex.models.SubscriptionResponse`.
    """

    def __init__(self, message: str, *, listener: str = "") -> None:
        self.listener = listener
        super().__init__(message)
