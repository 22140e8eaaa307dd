class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or a required field is missing."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when a bearer token or credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when a record is missing or belongs to someone else."""

    status_code = 404
