"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so application handlers can catch them uniformly and turn them into failed
service responses.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist (or is not visible to the caller)."""


class InvalidStateError(DomainException):
    """The operation is not permitted in the aggregate's current status."""


class InvalidTransitionError(DomainException):
    """The requested status is not reachable from the current one."""
