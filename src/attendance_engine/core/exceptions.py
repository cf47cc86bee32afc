class DomainError(Exception):
    """Base exception for the attendance engine."""


class ValidationError(DomainError):
    """Raised when an input record is malformed or misses required fields."""


class InvalidCallError(DomainError, TypeError):
    """Raised when an operation is called with the wrong shape of arguments."""
