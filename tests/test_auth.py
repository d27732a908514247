"""认证接口测试"""
from fastapi.testclient import TestClient

from netguard.config import settings
from netguard.core.session_manager import session_manager
from netguard.database import SessionLocal
from netguard.main import app
from netguard.models import User

from conftest import PASSWORD, audit_count, login, reload


def test_login_success_sets_session_cookie(anon_client, admin_user):
    response = login(anon_client, "admin")

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["username"] == "admin"
    assert body["user"]["role"] == "admin"
    assert "hashedPassword" not in body["user"]
    assert "password" not in body["user"]

    set_cookie = response.headers["set-cookie"]
    assert settings.SESSION_COOKIE_NAME in set_cookie
    assert "HttpOnly" in set_cookie
    assert session_manager.count() == 1


def test_login_updates_last_login(anon_client, admin_user):
    assert admin_user.last_login is None
    login(anon_client, "admin")
    assert reload(User, admin_user.id).last_login is not None


def test_login_failures_share_generic_message(anon_client, admin_user, inactive_user):
    wrong_password = login(anon_client, "admin", "wrong-password")
    unknown_user = login(anon_client, "nobody")
    inactive = login(anon_client, inactive_user.username)

    for response in (wrong_password, unknown_user, inactive):
        assert response.status_code == 401
        assert "set-cookie" not in response.headers

    messages = {r.json()["message"] for r in (wrong_password, unknown_user, inactive)}
    assert len(messages) == 1
    assert session_manager.count() == 0


def test_login_missing_fields_is_validation_error(anon_client):
    response = anon_client.post("/api/auth/login", json={"username": "admin"})

    assert response.status_code == 400
    fields = [e["field"] for e in response.json()["errors"]]
    assert "password" in fields


def test_current_user_requires_session(anon_client):
    assert anon_client.get("/api/auth/user").status_code == 401


def test_current_user_returns_profile(admin_client, admin_user):
    response = admin_client.get("/api/auth/user")

    assert response.status_code == 200
    assert response.json()["id"] == admin_user.id


def test_unknown_cookie_is_unauthenticated(admin_user):
    response = TestClient(app).get(
        "/api/auth/user",
        headers={"Cookie": f"{settings.SESSION_COOKIE_NAME}=forged-token"},
    )
    assert response.status_code == 401


def test_logout_invalidates_session(admin_client):
    token = admin_client.cookies.get(settings.SESSION_COOKIE_NAME)

    response = admin_client.post("/api/auth/logout")
    assert response.status_code == 200
    assert session_manager.resolve(token) is None

    # 旧 Cookie 不再有效
    stale = TestClient(app).get(
        "/api/auth/user",
        headers={"Cookie": f"{settings.SESSION_COOKIE_NAME}={token}"},
    )
    assert stale.status_code == 401


def test_logout_without_session_succeeds(anon_client):
    assert anon_client.post("/api/auth/logout").status_code == 200


def test_login_and_logout_are_not_audited(anon_client, admin_user):
    login(anon_client, "admin")
    login(anon_client, "admin", "bad-password")
    anon_client.post("/api/auth/logout")
    assert audit_count() == 0


def test_concurrent_sessions_are_independent(admin_user):
    first = TestClient(app)
    second = TestClient(app)
    assert login(first, "admin").status_code == 200
    assert login(second, "admin", PASSWORD).status_code == 200

    first.post("/api/auth/logout")

    assert first.get("/api/auth/user").status_code == 401
    assert second.get("/api/auth/user").status_code == 200


def test_deactivation_during_login_leaves_no_session(monkeypatch, anon_client, operator_user):
    real_create = session_manager.create

    def create_after_deactivation(user_id, username, role):
        # 管理员在凭据校验通过后停用了该账号
        session = SessionLocal()
        try:
            session.get(User, user_id).is_active = False
            session.commit()
        finally:
            session.close()
        session_manager.destroy_user_sessions(user_id)
        return real_create(user_id, username, role)

    monkeypatch.setattr(session_manager, "create", create_after_deactivation)

    response = login(anon_client, "operator")

    assert response.status_code == 401
    assert "set-cookie" not in response.headers
    assert session_manager.count() == 0
