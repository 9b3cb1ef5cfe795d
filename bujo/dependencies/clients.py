"""
Factory functions to provide the shared client session and its services.

Every factory is cached so the whole process talks to one token store, one
authenticated client and one session facade.
"""

from functools import lru_cache

from bujo.clients import AuthenticatedClient
from bujo.main import BujoApp, create_app
from bujo.services import RouteGuard, SessionService, TokenStore
from bujo.services.routing import Navigator


@lru_cache()
def get_app() -> BujoApp:
    """Create the process-wide client from environment settings."""
    return create_app()


def get_token_store() -> TokenStore:
    return get_app().token_store


def get_authenticated_client() -> AuthenticatedClient:
    return get_app().http


def get_session_service() -> SessionService:
    return get_app().session


def get_route_guard() -> RouteGuard:
    return get_app().router


def get_navigator() -> Navigator:
    return get_app().navigator


__all__ = [
    "get_app",
    "get_authenticated_client",
    "get_navigator",
    "get_route_guard",
    "get_session_service",
    "get_token_store",
]
