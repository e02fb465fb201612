class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"


class InvalidTimeFormat(ValidationError):
    """Raised when a wall-clock string is not a valid HH:MM value."""

    code = "INVALID_TIME_FORMAT"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "AUTHORIZATION_ERROR"


class UnknownLocation(DomainError):
    """Raised when a scanned place identifier matches no registered location."""

    code = "UNKNOWN_LOCATION"


class NotAuthorizedForLocation(AuthorizationError):
    code = "NOT_AUTHORIZED_FOR_LOCATION"


class DuplicateClockIn(DomainError):
    """Raised when a worker-day already has a record."""

    code = "DUPLICATE_CLOCK_IN"


class InvalidTransition(DomainError):
    """Raised when a punch is not valid for the record's current state."""

    code = "INVALID_TRANSITION"


class ConcurrentModification(DomainError):
    """Raised when a record changed between read and write; safe to retry."""

    code = "CONCURRENT_MODIFICATION"
