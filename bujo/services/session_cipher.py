"""Sealing of the persisted session record with a key derived from a secret."""

from __future__ import annotations

import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken


class SessionCipherError(ValueError):
    """Raised when a stored session cannot be opened with the configured secret."""


class SessionCipher:
    """Seal and open the serialized session.

    A serialized session is always a JSON object, so anything starting with
    ``{`` is a record written before encryption was switched on.
    """

    def __init__(self, *, secret: str) -> None:
        if not secret:
            raise ValueError("BUJO_SESSION_ENCRYPTION_SECRET must not be empty.")
        key = base64.urlsafe_b64encode(hashlib.sha256(secret.encode("utf-8")).digest())
        self._fernet = Fernet(key)

    @staticmethod
    def is_sealed(raw: str) -> bool:
        return not raw.lstrip().startswith("{")

    def seal(self, serialized: str) -> str:
        return self._fernet.encrypt(serialized.encode("utf-8")).decode("ascii")

    def open(self, sealed: str) -> str:
        try:
            return self._fernet.decrypt(sealed.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError) as exc:
            raise SessionCipherError(
                "Stored session was sealed with a different secret or is corrupt."
            ) from exc


__all__ = ["SessionCipher", "SessionCipherError"]
