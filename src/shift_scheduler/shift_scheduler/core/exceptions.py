class DomainError(Exception):
    """Base exception for business rule violations.

    ``kind`` is a stable, machine-checkable code; the message is for humans.
    """

    kind = "domain_error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised when input data is malformed or outside the allowed values."""

    kind = "validation_error"


class UnknownShiftType(ValidationError):
    """Raised when a shift-type code has no entry in the time table."""


class InvalidTransition(ValidationError):
    """Raised when a status change is not allowed from the current status."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    kind = "authentication_failed"


class PermissionDenied(DomainError):
    """Raised when a user lacks the role or ownership for an action."""

    kind = "permission_denied"


class NotFound(DomainError):
    """Raised when a referenced user, shift or leave request does not exist."""

    kind = "not_found"


class Conflict(DomainError):
    """Raised on overlapping leave periods or duplicate shifts."""

    kind = "conflict"


class InvariantViolation(DomainError):
    """Raised when a multi-step workflow fails after partial writes."""

    kind = "invariant_violation"
