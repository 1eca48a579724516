"""Domain error taxonomy shared by the service layer.

Services raise these; the API layer turns them into HTTP responses.
"""

from __future__ import annotations

from fastapi import status


class PlumeError(Exception):
    """Base class for recoverable domain failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(PlumeError):
    """Malformed input: bad reaction type, empty content, cross-post parent."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFoundError(PlumeError):
    """An unknown identifier was referenced."""

    status_code = status.HTTP_404_NOT_FOUND


class AuthorizationError(PlumeError):
    """The actor lacks rights over the mutation target."""

    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(PlumeError):
    """A uniqueness rule was violated."""

    status_code = status.HTTP_409_CONFLICT
