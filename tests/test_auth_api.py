from sapients.core.exceptions import StorageUnavailableError
from sapients.models.activity_log import ActivityLog
from sapients.models.role import Role
from sapients.models.session import UserSession
from sapients.services.session_store import session_store

from conftest import DEFAULT_PASSWORD


def test_login_sets_session_cookie(client, make_user):
    make_user(email="cd@sapients.test", role=Role.CREATIVE_DIRECTOR)

    resp = client.post("/api/auth/login", json={"email": "CD@sapients.test", "password": DEFAULT_PASSWORD})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["user"]["role"] == "CREATIVE_DIRECTOR"
    assert "password_hash" not in body["user"]
    cookie = resp.headers["set-cookie"].lower()
    assert cookie.startswith("sapients_session=")
    assert "httponly" in cookie and "samesite=lax" in cookie


def test_login_failures_are_generic(client, make_user):
    make_user(email="real@sapients.test")

    unknown = client.post("/api/auth/login", json={"email": "nouser@x.com", "password": "whatever"})
    wrong = client.post("/api/auth/login", json={"email": "real@sapients.test", "password": "wrongpassword"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {"detail": "Invalid email or password"}
    assert "set-cookie" not in unknown.headers


def test_login_requires_both_fields(client):
    resp = client.post("/api/auth/login", json={"email": "someone@sapients.test"})
    assert resp.status_code == 400


def test_me_requires_session(client, login):
    assert client.get("/api/auth/me").status_code == 401
    user = login(Role.WRITER)
    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["id"] == user.id


def test_logout_invalidates_session(client, login, db):
    login(Role.VIEWER)
    assert client.get("/api/auth/me").status_code == 200

    resp = client.post("/api/auth/logout")

    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    db.expire_all()
    assert db.query(UserSession).count() == 0
    assert client.get("/api/auth/me").status_code == 401


def test_old_token_is_rejected_after_logout(client, login):
    login(Role.VIEWER)
    token = client.cookies.get("sapients_session")
    client.post("/api/auth/logout")

    assert token
    resp = client.get("/api/auth/me", headers={"Cookie": f"sapients_session={token}"})
    assert resp.status_code == 401


def test_logout_twice_is_fine(client, login):
    login(Role.ARTIST)
    assert client.post("/api/auth/logout").status_code == 200
    assert client.post("/api/auth/logout").status_code == 200


def test_login_and_logout_are_recorded(client, login, db):
    user = login(Role.WRITER)
    client.post("/api/auth/logout")

    db.expire_all()
    actions = [e.action for e in db.query(ActivityLog).order_by(ActivityLog.id)]
    assert actions == ["user.login", "user.logout"]
    assert {e.actor_id for e in db.query(ActivityLog)} == {user.id}


def test_storage_outage_is_a_generic_500(client, login, monkeypatch):
    login(Role.VIEWER)

    def _unavailable(*args, **kwargs):
        raise StorageUnavailableError("Session storage unavailable")

    monkeypatch.setattr(session_store, "find_unique", _unavailable)
    resp = client.get("/api/auth/me")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error"}
