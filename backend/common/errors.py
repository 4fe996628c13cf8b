"""
Error taxonomy shared by every service blueprint.

Handlers raise these; each blueprint turns them into a JSON body with
the matching status code.
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid input"


class AuthenticationError(ServiceError):
    """Bad credentials. Same message for unknown email and wrong password."""

    status_code = 401
    default_message = "Invalid credentials"


class ConflictError(ServiceError):
    """Duplicate registration."""

    status_code = 409
    default_message = "User already exists"


class UpstreamError(ServiceError):
    """An external dependency failed or timed out."""

    status_code = 500
    default_message = "Upstream service error"


class InternalError(ServiceError):
    status_code = 500
    default_message = "Server error"
