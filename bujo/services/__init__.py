"""Service layer exports."""

from .journal import BulletClient, DiaryClient
from .motivation import MotivationClient
from .profile import AboutClient, favorites_client, statement_client
from .resources import ResourceClient, ViewState
from .routing import NavigationHistory, Route, RouteDecision, RouteGuard
from .session import SessionService
from .session_cipher import SessionCipher, SessionCipherError
from .token_store import TokenStore
from .token_validator import TokenValidator, decode_payload, decode_token, is_token_valid

__all__ = [
    "AboutClient",
    "BulletClient",
    "DiaryClient",
    "MotivationClient",
    "NavigationHistory",
    "ResourceClient",
    "Route",
    "RouteDecision",
    "RouteGuard",
    "SessionCipher",
    "SessionCipherError",
    "SessionService",
    "TokenStore",
    "TokenValidator",
    "ViewState",
    "decode_payload",
    "decode_token",
    "favorites_client",
    "is_token_valid",
    "statement_client",
]
