class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced bill, user or menu item does not exist."""


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness or reference rule."""


class StorageError(DomainError):
    """Raised when the database is unavailable or rejects a write."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
