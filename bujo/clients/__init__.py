"""Expose constructed client wrappers."""

from .auth_api import AuthApiClient, TokenRefreshError
from .http import AuthenticatedClient
from .session_storage import InMemorySessionStorage, SessionStorage, SQLiteSessionStorage

__all__ = [
    "AuthApiClient",
    "AuthenticatedClient",
    "InMemorySessionStorage",
    "SQLiteSessionStorage",
    "SessionStorage",
    "TokenRefreshError",
]
