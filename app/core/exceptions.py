"""Typed application errors.

Each error carries the HTTP status it surfaces as and a client-safe message.
The handlers in ``app.main`` render them as ``{"error": message}``.
"""


class RecordDeskError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(RecordDeskError):
    """Malformed or missing input."""

    status_code = 400


class AuthenticationError(RecordDeskError):
    """No session, an expired session, or bad credentials."""

    status_code = 401


class AuthorizationError(RecordDeskError):
    """Authenticated, but not allowed to touch this resource."""

    status_code = 403


class NotFoundError(RecordDeskError):
    status_code = 404


class ConflictError(RecordDeskError):
    """Unique constraint violated (duplicate username)."""

    status_code = 400


class InternalError(RecordDeskError):
    """Unexpected store or filesystem failure. The message must not leak internals."""

    status_code = 500
