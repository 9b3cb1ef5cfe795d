try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from bujo.services.session_cipher import SessionCipher, SessionCipherError


def test_sealed_session_opens_back_to_the_same_record() -> None:
    cipher = SessionCipher(secret="session-secret")
    serialized = '{"access":"a.b.c","refresh":"r","user":{"id":"1","username":"u"}}'

    sealed = cipher.seal(serialized)

    assert "a.b.c" not in sealed
    assert cipher.is_sealed(sealed) is True
    assert cipher.open(sealed) == serialized


def test_plaintext_record_is_not_considered_sealed() -> None:
    assert SessionCipher.is_sealed('  {"access":"a"}') is False


def test_session_sealed_with_another_secret_cannot_be_opened() -> None:
    sealed = SessionCipher(secret="one").seal('{"access":"a"}')

    with pytest.raises(SessionCipherError):
        SessionCipher(secret="two").open(sealed)


@pytest.mark.parametrize("sealed", ["not-valid", "gAAAAAcorrupt", "sëaled"])
def test_corrupt_session_cannot_be_opened(sealed: str) -> None:
    with pytest.raises(SessionCipherError):
        SessionCipher(secret="another-secret").open(sealed)


def test_cipher_errors_are_value_errors() -> None:
    assert issubclass(SessionCipherError, ValueError)


def test_cipher_requires_a_secret() -> None:
    with pytest.raises(ValueError):
        SessionCipher(secret="")
