"""
Domain error taxonomy.

Services raise these; the HTTP layer in main.py maps each one to a status code.
Anything that is not a VoteHubError is an infrastructure fault and becomes a 500.
"""

from fastapi import status


class VoteHubError(Exception):
    """Base class for expected, user-facing failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    retryable: bool = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(VoteHubError):
    """A referenced topic, category, option or user does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidOptionError(VoteHubError):
    """The option does not exist or belongs to a different topic."""

    status_code = status.HTTP_400_BAD_REQUEST


class ValidationError(VoteHubError):
    """Structural input violation (option counts, field lengths)."""

    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT


class InvalidQueryError(VoteHubError):
    """Search query too short to be meaningful."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(VoteHubError):
    """No authenticated identity, or credentials did not check out."""

    status_code = status.HTTP_401_UNAUTHORIZED


class TransactionConflictError(VoteHubError):
    """The atomic vote section could not complete. Safe to retry immediately."""

    status_code = status.HTTP_409_CONFLICT
    retryable = True
