"""Domain-specific exceptions.

Every error carries a client-facing ``code`` and the HTTP status the API
answers with. None of them is fatal to the process.
"""

from typing import Any


class DomainError(Exception):
    """Base exception for domain errors."""

    code = "DOMAIN_ERROR"
    status_code = 400

    def __init__(self, message: str, details: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(DomainError):
    """Raised when structural validation or a content rule fails."""

    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(DomainError):
    """Raised when the profile or a referenced sub-entity does not exist."""

    code = "NOT_FOUND"
    status_code = 404


class LimitExceededError(DomainError):
    """Raised when a bounded collection is full."""

    code = "LIMIT_EXCEEDED"
    status_code = 400


class PriorityConflictError(DomainError):
    """Raised when a second active promotion asks for the top priority."""

    code = "PRIORITY_CONFLICT"
    status_code = 400


class AuthenticationError(DomainError):
    """Raised when the internal API token is missing or wrong."""

    code = "UNAUTHORIZED"
    status_code = 401
