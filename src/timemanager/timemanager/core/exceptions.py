class DomainError(Exception):
    """Base exception for business rule violations."""


class NotFoundError(DomainError):
    """Raised when a referenced person, session, pause, leave, shift or template does not exist."""


class ConflictError(DomainError):
    """Raised when an operation would break an interval or lifecycle invariant.

    State is left unchanged.
    """


class ValidationError(DomainError):
    """Raised when caller input is malformed (bad date, missing field)."""
