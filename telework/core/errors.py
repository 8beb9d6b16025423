"""Business errors raised by the services and mapped to HTTP responses in main."""

from fastapi import status


class TeleworkError(Exception):
    """Base class for expected, caller-recoverable failures."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TeleworkError):
    """Malformed or out-of-range input (date not in the future, reason too short...)."""


class ConflictError(TeleworkError):
    """The operation clashes with existing state (duplicate request, second company)."""

    status_code = status.HTTP_409_CONFLICT


class NotFoundError(TeleworkError):
    """Missing resource, or one outside the actor's company scope."""

    status_code = status.HTTP_404_NOT_FOUND


class PermissionDeniedError(TeleworkError):
    """The actor's role does not grant the action."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidTransitionError(TeleworkError):
    """A processed request cannot be processed again."""


class AuthenticationError(TeleworkError):
    status_code = status.HTTP_401_UNAUTHORIZED


class FeatureNotAvailableError(TeleworkError):
    """Raised by features that are declared but not shipped in this version."""
