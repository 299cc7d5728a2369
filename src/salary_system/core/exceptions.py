class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when credentials or a bearer token are missing or invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks the role required for an action."""


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness rule."""


class NotFoundError(DomainError):
    """Raised when the requested entity does not exist."""


class InternalError(DomainError):
    """Raised when the store or a parser fails unexpectedly."""
