"""
Access token inspection.

Tokens are treated as opaque apart from two payload claims: ``exp`` (seconds
since epoch) and the subject (``user_id``, falling back to ``sub``). The
signature is never verified here; the backend owns that.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Optional

import jwt

from bujo.models.session import DecodedPayload, DecodeResult, InvalidToken

_UNVERIFIED = {"verify_signature": False, "verify_exp": False}


def decode_token(token: Optional[str]) -> DecodeResult:
    """Decode the payload segment of a three-segment token without raising."""
    if not token:
        return InvalidToken("empty token")
    if not isinstance(token, str):
        return InvalidToken("token is not a string")

    segments = token.split(".")
    if len(segments) != 3:
        return InvalidToken("token must have exactly three segments")
    if not segments[1]:
        return InvalidToken("payload segment is empty")

    try:
        claims = jwt.decode(token, options=_UNVERIFIED)
    except jwt.PyJWTError as exc:
        return InvalidToken(f"undecodable token: {exc}")
    except (ValueError, RecursionError):
        return InvalidToken("payload is not a decodable JSON object")

    if not isinstance(claims, dict):
        return InvalidToken("payload is not a JSON object")
    return DecodedPayload(claims=claims)


def decode_payload(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """Return the raw claims mapping, or ``None`` for any undecodable token."""
    result = decode_token(token)
    if isinstance(result, InvalidToken):
        return None
    return dict(result.claims)


class TokenValidator:
    """Decide whether an access token is structurally sound and unexpired."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock

    def decode(self, token: Optional[str]) -> DecodeResult:
        return decode_token(token)

    def is_valid(self, token: Optional[str]) -> bool:
        result = decode_token(token)
        if isinstance(result, InvalidToken):
            return False
        expires_at = result.expires_at
        if expires_at is None:
            return False
        # Exact boundary: a token expiring "now" is already unusable.
        return self._clock() < expires_at

    def user_id(self, token: Optional[str]) -> Optional[str]:
        result = decode_token(token)
        if isinstance(result, InvalidToken):
            return None
        return result.user_id


def is_token_valid(token: Optional[str], *, now: Optional[float] = None) -> bool:
    """Convenience wrapper around ``TokenValidator.is_valid``."""
    if now is None:
        return TokenValidator().is_valid(token)
    return TokenValidator(clock=lambda: now).is_valid(token)


__all__ = [
    "TokenValidator",
    "decode_payload",
    "decode_token",
    "is_token_valid",
]
