"""Domain-level exceptions.

Services raise these; the RPC boundary translates them into status codes.
Anything that is not a DomainError is treated as an internal failure.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class BadRequest(DomainError):
    """The request is malformed or violates a business rule."""


class NotFound(DomainError):
    """A requested entity does not exist."""
