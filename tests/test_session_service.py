try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json

import httpx
import pytest

from bujo.core.exceptions import (
    ApiError,
    FormValidationError,
    NetworkError,
    UnauthenticatedError,
)
from bujo.schemas.auth import LoginCredentials

try:
    from ._helpers import FakeApi, bearer, build_app, make_record, make_token
except ImportError:  # pragma: no cover
    from _helpers import FakeApi, bearer, build_app, make_record, make_token  # type: ignore


@pytest.mark.asyncio
async def test_login_persists_the_exact_triple_and_navigates_home() -> None:
    access = make_token(user_id="7")
    user = {"id": 7, "username": "u", "email": "u@example.com", "theme": "dark"}
    api = FakeApi().add(
        "POST",
        "auth/login/",
        httpx.Response(200, json={"access": access, "refresh": "r", "user": user}),
    )
    app = build_app(api)
    seen = []
    app.session.subscribe(seen.append)

    record = await app.session.login({"username": "u", "password": "p"})

    stored = app.token_store.read()
    assert stored == record
    assert stored.access == access
    assert stored.refresh == "r"
    assert stored.user.model_dump(exclude_none=True) == user
    assert app.http.default_headers["Authorization"] == f"Bearer {access}"
    assert app.navigator.current == "/home"
    assert [u.username for u in seen] == ["u"]
    assert json.loads(api.requests[0].read()) == {"username": "u", "password": "p"}
    await app.aclose()


@pytest.mark.asyncio
async def test_login_stores_opaque_tokens_verbatim() -> None:
    api = FakeApi().add(
        "POST",
        "auth/login/",
        httpx.Response(
            200, json={"access": "a.b.c", "refresh": "r", "user": {"id": "1", "username": "u"}}
        ),
    )
    app = build_app(api)

    await app.session.login({"username": "u", "password": "p"})

    stored = app.token_store.read()
    assert (stored.access, stored.refresh) == ("a.b.c", "r")
    assert stored.user.model_dump(exclude_none=True) == {"id": "1", "username": "u"}
    assert app.navigator.current == "/home"
    await app.aclose()


@pytest.mark.asyncio
async def test_login_accepts_email_instead_of_username() -> None:
    api = FakeApi().add(
        "POST",
        "auth/login/",
        httpx.Response(
            200, json={"access": make_token(), "refresh": "r", "user": {"id": 1, "username": "u"}}
        ),
    )
    app = build_app(api)

    await app.session.login(LoginCredentials(email="u@example.com", password="p"))

    assert json.loads(api.requests[0].read()) == {"email": "u@example.com", "password": "p"}
    await app.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("fields", "message"),
    [
        ({"username": "", "password": "p"}, "Username is required"),
        ({"username": "   ", "password": "p"}, "Username is required"),
        ({"username": "u", "password": ""}, "Password is required"),
    ],
)
async def test_login_validation_fails_before_any_request(fields, message) -> None:
    api = FakeApi()
    app = build_app(api)

    with pytest.raises(FormValidationError) as exc_info:
        await app.session.login(fields)

    assert exc_info.value.message == message
    assert api.requests == []
    await app.aclose()


@pytest.mark.asyncio
async def test_failed_login_keeps_the_previous_session() -> None:
    previous = make_record(access=make_token(user_id="1"))
    api = FakeApi().add(
        "POST",
        "auth/login/",
        httpx.Response(401, json={"detail": "No active account found with the given credentials"}),
    )
    app = build_app(api, record=previous)

    with pytest.raises(ApiError) as exc_info:
        await app.session.login({"username": "u", "password": "wrong"})

    assert exc_info.value.status_code == 401
    assert app.token_store.read() == previous
    assert api.calls("POST", "auth/refresh/") == []
    assert app.navigator.current is None
    await app.aclose()


@pytest.mark.asyncio
async def test_login_with_incomplete_payload_stores_nothing() -> None:
    api = FakeApi().add("POST", "auth/login/", httpx.Response(200, json={"access": "a"}))
    app = build_app(api)

    with pytest.raises(ApiError):
        await app.session.login({"username": "u", "password": "p"})

    assert app.token_store.read() is None
    await app.aclose()


@pytest.mark.asyncio
async def test_logout_blacklists_refresh_token_then_clears_everything() -> None:
    api = FakeApi().add("POST", "auth/logout/", httpx.Response(205))
    app = build_app(api, record=make_record(refresh="r"))
    app.http.set_auth_header(app.token_store.read_access_token())
    seen = []
    app.session.subscribe(seen.append)

    await app.session.logout()

    assert json.loads(api.calls("POST", "auth/logout/")[0].read()) == {"refresh": "r"}
    assert app.token_store.read() is None
    assert "Authorization" not in app.http.default_headers
    assert seen == [None]
    assert app.navigator.current == "/login"
    await app.aclose()


@pytest.mark.asyncio
async def test_logout_clears_local_session_even_when_backend_is_unreachable() -> None:
    def _offline(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    api = FakeApi().add("POST", "auth/logout/", _offline)
    app = build_app(api, record=make_record())
    app.http.set_auth_header(app.token_store.read_access_token())

    await app.session.logout()

    assert app.token_store.read() is None
    assert "Authorization" not in app.http.default_headers
    assert app.navigator.current == "/login"
    await app.aclose()


@pytest.mark.asyncio
async def test_logout_without_session_sends_nothing() -> None:
    api = FakeApi()
    app = build_app(api)

    await app.session.logout()

    assert api.requests == []
    assert app.navigator.current == "/login"
    await app.aclose()


@pytest.mark.asyncio
async def test_edit_profile_replaces_user_and_keeps_tokens() -> None:
    record = make_record(access=make_token(user_id="1"), refresh="r")
    api = FakeApi().add(
        "PATCH",
        "user/1/",
        httpx.Response(200, json={"id": "1", "username": "u", "name": "New Name"}),
    )
    app = build_app(api, record=record)

    user = await app.session.edit_profile({"name": "New Name"}, user_id="1")

    stored = app.token_store.read()
    assert user.name == "New Name"
    assert stored.user.name == "New Name"
    assert stored.access == record.access
    assert stored.refresh == "r"
    request = api.calls("PATCH", "user/1/")[0]
    assert json.loads(request.read()) == {"name": "New Name"}
    assert bearer(request) == record.access
    await app.aclose()


@pytest.mark.asyncio
async def test_edit_profile_keeps_a_token_refreshed_mid_request() -> None:
    fresh = make_token(user_id="1")

    def _patch(request: httpx.Request) -> httpx.Response:
        if bearer(request) != fresh:
            return httpx.Response(401)
        return httpx.Response(200, json={"id": "1", "username": "u", "bio": "hi"})

    api = (
        FakeApi()
        .add("PATCH", "user/1/", _patch)
        .add("POST", "auth/refresh/", httpx.Response(200, json={"access": fresh}))
    )
    app = build_app(api, record=make_record(access="stale.token.sig"))

    await app.session.edit_profile({"bio": "hi"}, user_id=1)

    stored = app.token_store.read()
    assert stored.access == fresh
    assert stored.user.bio == "hi"
    await app.aclose()


@pytest.mark.asyncio
async def test_edit_profile_requires_a_session() -> None:
    api = FakeApi()
    app = build_app(api)

    with pytest.raises(UnauthenticatedError):
        await app.session.edit_profile({"name": "x"}, user_id="1")

    assert api.requests == []
    await app.aclose()


@pytest.mark.asyncio
async def test_register_does_not_log_in() -> None:
    api = FakeApi().add(
        "POST", "auth/register/", httpx.Response(201, json={"id": 3, "username": "new"})
    )
    app = build_app(api)

    result = await app.session.register(
        {"username": "new", "email": "new@example.com", "password": "pw"}
    )

    assert result == {"id": 3, "username": "new"}
    assert app.token_store.read() is None
    assert app.navigator.current is None
    await app.aclose()


@pytest.mark.asyncio
async def test_register_validates_required_fields() -> None:
    api = FakeApi()
    app = build_app(api)

    with pytest.raises(FormValidationError) as exc_info:
        await app.session.register({"username": "new", "password": "pw"})

    assert "email" in exc_info.value.fields
    assert api.requests == []
    await app.aclose()


@pytest.mark.asyncio
async def test_forgot_password_posts_the_email() -> None:
    api = FakeApi().add("POST", "auth/password-reset/", httpx.Response(200, json={}))
    app = build_app(api)

    await app.session.forgot_password({"email": "u@example.com"})

    assert json.loads(api.requests[0].read()) == {"email": "u@example.com"}
    await app.aclose()


@pytest.mark.asyncio
async def test_forgot_password_requires_an_email() -> None:
    api = FakeApi()
    app = build_app(api)

    with pytest.raises(FormValidationError) as exc_info:
        await app.session.forgot_password({"email": ""})

    assert exc_info.value.message == "Email is required."
    assert api.requests == []
    await app.aclose()


@pytest.mark.asyncio
async def test_forgot_password_surfaces_network_errors() -> None:
    def _offline(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    api = FakeApi().add("POST", "auth/password-reset/", _offline)
    app = build_app(api)

    with pytest.raises(NetworkError):
        await app.session.forgot_password({"email": "u@example.com"})

    await app.aclose()


def test_resolve_user_id_prefers_cached_profile() -> None:
    app = build_app(FakeApi(), record=make_record(access=make_token(user_id="99")))

    assert app.session.resolve_user_id() == "1"


def test_resolve_user_id_falls_back_to_token_claim() -> None:
    record = make_record(access=make_token(user_id="42"), user={"username": "u"})
    app = build_app(FakeApi(), record=record)

    assert app.session.resolve_user_id() == "42"


def test_resolve_user_id_without_session_is_none() -> None:
    app = build_app(FakeApi())

    assert app.session.resolve_user_id() is None
    assert app.session.current_user() is None


@pytest.mark.asyncio
async def test_unsubscribed_listener_is_not_called() -> None:
    api = FakeApi()
    app = build_app(api, record=make_record())
    seen = []
    unsubscribe = app.session.subscribe(seen.append)

    unsubscribe()
    await app.session.logout()

    assert seen == []
    await app.aclose()
