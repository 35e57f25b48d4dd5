class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""


class DataLoadError(DomainError):
    """Raised when a batch cannot load the data it depends on.

    The run is aborted before any write is issued.
    """
