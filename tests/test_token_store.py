try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from pathlib import Path

import pytest

from bujo.clients.session_storage import InMemorySessionStorage, SQLiteSessionStorage
from bujo.services.session_cipher import SessionCipher
from bujo.services.token_store import TokenStore

try:
    from ._helpers import make_record
except ImportError:  # pragma: no cover
    from _helpers import make_record  # type: ignore


def test_write_then_read_returns_equal_record() -> None:
    store = TokenStore(InMemorySessionStorage())
    record = make_record(user={"id": "1", "username": "u", "theme": "dark", "streak": 3})

    store.write(record)

    assert store.read() == record
    assert store.read().user.model_extra == {"streak": 3}


def test_clear_then_read_returns_none() -> None:
    store = TokenStore(InMemorySessionStorage())
    store.write(make_record())

    store.clear()

    assert store.read() is None
    assert store.read_access_token() is None
    assert store.read_refresh_token() is None
    assert store.read_user() is None


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "null",
        "[]",
        '"just a string"',
        '{"access": "a"}',
        '{"access": "a", "refresh": "r", "user": null}',
    ],
)
def test_malformed_storage_reads_as_logged_out(raw: str) -> None:
    store = TokenStore(InMemorySessionStorage(initial=raw))

    assert store.read() is None
    assert store.read_user() is None


def test_deeply_nested_storage_reads_as_logged_out() -> None:
    store = TokenStore(InMemorySessionStorage(initial="[" * 200_000 + "]" * 200_000))

    assert store.read() is None


def test_projections_follow_the_stored_record() -> None:
    store = TokenStore(InMemorySessionStorage())
    record = make_record(access="a.b.c", refresh="r")
    store.write(record)

    assert store.read_access_token() == "a.b.c"
    assert store.read_refresh_token() == "r"
    assert store.read_user().username == "u"


def test_update_access_token_keeps_refresh_and_user() -> None:
    store = TokenStore(InMemorySessionStorage())
    store.write(make_record(access="old.token.sig", refresh="r"))

    assert store.update_access_token("new.token.sig") is True

    record = store.read()
    assert record.access == "new.token.sig"
    assert record.refresh == "r"
    assert record.user.id == "1"


def test_update_access_token_without_session_is_a_noop() -> None:
    storage = InMemorySessionStorage()
    store = TokenStore(storage)

    assert store.update_access_token("new.token.sig") is False
    assert storage.get() is None


def test_encrypted_store_hides_tokens_at_rest() -> None:
    storage = InMemorySessionStorage()
    store = TokenStore(storage, cipher=SessionCipher(secret="k"))
    record = make_record(access="secret.access.token")

    store.write(record)

    assert "secret.access.token" not in storage.get()
    assert store.read() == record


def test_encrypted_store_treats_foreign_ciphertext_as_absent() -> None:
    storage = InMemorySessionStorage()
    TokenStore(storage, cipher=SessionCipher(secret="one")).write(make_record())

    other = TokenStore(storage, cipher=SessionCipher(secret="two"))

    assert other.read() is None


def test_sqlite_storage_persists_across_instances(tmp_path: Path) -> None:
    db_path = tmp_path / "nested" / "session.db"
    record = make_record()

    TokenStore(SQLiteSessionStorage(str(db_path))).write(record)
    reopened = TokenStore(SQLiteSessionStorage(str(db_path)))

    assert reopened.read() == record
    reopened.clear()
    assert TokenStore(SQLiteSessionStorage(str(db_path))).read() is None


def test_sqlite_storage_keys_are_independent(tmp_path: Path) -> None:
    db_path = str(tmp_path / "session.db")
    first = TokenStore(SQLiteSessionStorage(db_path, key="auth"))
    second = TokenStore(SQLiteSessionStorage(db_path, key="other"))

    first.write(make_record())

    assert second.read() is None


def test_plaintext_session_is_sealed_once_encryption_is_enabled() -> None:
    storage = InMemorySessionStorage()
    record = make_record(access="plain.access.token")
    TokenStore(storage).write(record)

    store = TokenStore(storage, cipher=SessionCipher(secret="k"))

    assert store.read() == record
    assert "plain.access.token" not in storage.get()
    assert store.read() == record
