"""Session Routes: login, enumeration resistance, logout.

Tests cover:
    - Login with correct credentials returns the account and a fresh cookie
    - Each login opens a separate session; older sessions keep working
    - Unknown email and wrong password produce byte-identical 403 bodies
      (timestamps aside)
    - Logout deletes the session, clears the cookie, and is 403 without a session
"""

from ficai_signals.config import get_settings
from tests.services.fake_fichub import auth, session_token


def _strip_timestamp(body: dict) -> dict:
    error = dict(body["error"])
    error.pop("timestamp", None)
    return error


async def test_login_returns_account_and_new_cookie(client, register):
    first_token = await register()

    res = await client.post("/v1/sessions", json={
        "email": "reader@example.com", "password": "hunter2hunter2",
    })
    assert res.status_code == 200
    assert res.json()["email"] == "reader@example.com"
    new_token = session_token(res)
    assert new_token != first_token

    for token in (first_token, new_token):
        me = await client.get("/v1/accounts/me", headers=auth(token))
        assert me.status_code == 200


async def test_login_email_is_case_insensitive(client, register):
    await register()
    res = await client.post("/v1/sessions", json={
        "email": "READER@example.com", "password": "hunter2hunter2",
    })
    assert res.status_code == 200


async def test_unknown_email_and_wrong_password_are_indistinguishable(client, register):
    await register()

    unknown = await client.post("/v1/sessions", json={
        "email": "nobody@example.com", "password": "hunter2hunter2",
    })
    wrong = await client.post("/v1/sessions", json={
        "email": "reader@example.com", "password": "wrong-password",
    })

    assert unknown.status_code == wrong.status_code == 403
    assert _strip_timestamp(unknown.json()) == _strip_timestamp(wrong.json())
    assert "set-cookie" not in unknown.headers
    assert "set-cookie" not in wrong.headers


async def test_login_with_bad_body_is_validation_error(client):
    res = await client.post("/v1/sessions", json={"email": "reader@example.com"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_logout_clears_cookie_and_invalidates_session(client, register):
    token = await register()

    res = await client.delete("/v1/sessions", headers=auth(token))
    assert res.status_code == 200
    assert res.json() == {}
    set_cookie = res.headers["set-cookie"]
    assert "FicAiSession=" in set_cookie
    assert "Max-Age=0" in set_cookie
    assert f"Domain={get_settings().domain}" in set_cookie

    me = await client.get("/v1/accounts/me", headers=auth(token))
    assert me.status_code == 403


async def test_logout_leaves_other_sessions_alone(client, register):
    token = await register()
    res = await client.post("/v1/sessions", json={
        "email": "reader@example.com", "password": "hunter2hunter2",
    })
    other = session_token(res)

    await client.delete("/v1/sessions", headers=auth(token))

    me = await client.get("/v1/accounts/me", headers=auth(other))
    assert me.status_code == 200


async def test_logout_without_session_is_forbidden(client):
    res = await client.delete("/v1/sessions")
    assert res.status_code == 403


async def test_second_logout_with_same_cookie_is_forbidden(client, register):
    token = await register()
    await client.delete("/v1/sessions", headers=auth(token))
    res = await client.delete("/v1/sessions", headers=auth(token))
    assert res.status_code == 403
