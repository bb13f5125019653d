class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist in the caller's organization."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
