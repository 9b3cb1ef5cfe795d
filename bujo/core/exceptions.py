"""Error taxonomy shared by the session layer and the resource clients."""

from __future__ import annotations

from typing import Any, Dict, Optional


class BujoClientError(Exception):
    """Base class for every failure surfaced to callers of the client."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnauthenticatedError(BujoClientError):
    """Raised when an operation needs a logged-in user and none is known."""

    def __init__(self, message: str = "User not logged in") -> None:
        super().__init__(message)


class UnauthorizedError(BujoClientError):
    """Raised when the backend rejects the session and one refresh did not heal it."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class FormValidationError(BujoClientError):
    """Raised for client-side field checks; never sent to the backend."""

    def __init__(self, message: str, *, fields: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message)
        self.fields = dict(fields or {})


class ApiError(BujoClientError):
    """Raised for non-2xx responses other than an unrecoverable 401."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        detail: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class NetworkError(ApiError):
    """Raised when the request never produced a response."""


class RouteNotFoundError(BujoClientError, LookupError):
    """Raised when navigating to a path that no route declares."""


__all__ = [
    "ApiError",
    "BujoClientError",
    "FormValidationError",
    "NetworkError",
    "RouteNotFoundError",
    "UnauthenticatedError",
    "UnauthorizedError",
]
