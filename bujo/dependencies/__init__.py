"""Expose dependency helpers for wiring the client."""

from .clients import (
    get_app,
    get_authenticated_client,
    get_navigator,
    get_route_guard,
    get_session_service,
    get_token_store,
)

__all__ = [
    "get_app",
    "get_authenticated_client",
    "get_navigator",
    "get_route_guard",
    "get_session_service",
    "get_token_store",
]
