"""Service-level exceptions mapped to HTTP responses by the application."""

from fastapi import status


class ServiceError(Exception):
    """Base exception for domain service failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ServiceError):
    """Raised when a referenced user, community or thread does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """Raised when a unique handle or identifier is already taken."""

    status_code = status.HTTP_409_CONFLICT


class InvalidInputError(ServiceError):
    """Raised when request data is rejected before touching the store."""

    status_code = status.HTTP_400_BAD_REQUEST
