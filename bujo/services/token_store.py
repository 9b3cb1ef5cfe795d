"""
Single source of truth for who is logged in and with which tokens.

Every operation touches the one persisted slot behind ``SessionStorage``.
Reads never raise: absent, malformed or unopenable data all mean
"logged out".
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Optional

from pydantic import ValidationError

from bujo.clients.session_storage import SessionStorage
from bujo.models.session import CredentialRecord, UserProfile
from bujo.services.session_cipher import SessionCipher, SessionCipherError

logger = logging.getLogger(__name__)


class TokenStore:
    """Read, write and clear the persisted credential record."""

    def __init__(
        self,
        storage: SessionStorage,
        *,
        cipher: Optional[SessionCipher] = None,
    ) -> None:
        self._storage = storage
        self._cipher = cipher

    def write(self, record: CredentialRecord) -> None:
        """Persist the full record, replacing any prior value in one write."""
        serialized = json.dumps(record.model_dump(mode="json"), separators=(",", ":"))
        if self._cipher is not None:
            serialized = self._cipher.seal(serialized)
        self._storage.set(serialized)

    def read(self) -> Optional[CredentialRecord]:
        try:
            raw = self._storage.get()
        except (OSError, sqlite3.Error):
            logger.warning("Session storage could not be read; treating as logged out")
            return None
        if not raw:
            return None

        unsealed = self._cipher is not None and not self._cipher.is_sealed(raw)
        try:
            if self._cipher is not None and not unsealed:
                raw = self._cipher.open(raw)
            record = CredentialRecord.model_validate(json.loads(raw))
        except SessionCipherError:
            logger.warning("Stored session cannot be opened with the configured secret")
            return None
        except (ValueError, TypeError, RecursionError, ValidationError):
            logger.warning("Stored session is malformed; treating as logged out")
            return None

        if unsealed:
            logger.info("Sealing a session stored before encryption was enabled")
            try:
                self.write(record)
            except (OSError, sqlite3.Error):
                logger.warning("Could not reseal the stored session; keeping it as is")
        return record

    def clear(self) -> None:
        self._storage.clear()

    def read_access_token(self) -> Optional[str]:
        record = self.read()
        return record.access if record else None

    def read_refresh_token(self) -> Optional[str]:
        record = self.read()
        return record.refresh if record else None

    def read_user(self) -> Optional[UserProfile]:
        record = self.read()
        return record.user if record else None

    def update_access_token(self, access: str) -> bool:
        """Swap in a refreshed access token, keeping refresh token and user.

        Returns ``False`` without writing when no session is stored.
        """
        record = self.read()
        if record is None:
            return False
        self.write(record.with_access(access))
        return True


__all__ = ["TokenStore"]
