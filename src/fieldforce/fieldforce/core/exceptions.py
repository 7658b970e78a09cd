class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class UnsupportedRecordTypeError(ValidationError):
    """Raised when a submission type label maps to no record kind."""


class InvalidTransitionError(ValidationError):
    """Raised when a status change is not allowed from the current status."""


class NotFoundError(DomainError):
    """Raised when a targeted record no longer exists."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreError(DomainError):
    """Raised when the document store fails (network, driver, ...)."""
