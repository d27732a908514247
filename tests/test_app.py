"""应用级接口与启动流程测试"""
from fastapi.testclient import TestClient

from netguard.config import settings
from netguard.main import app

from conftest import login


def test_root_and_health(anon_client):
    assert anon_client.get("/").json()["name"] == settings.APP_NAME

    health = anon_client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["database"] == "healthy"


def test_startup_creates_default_admin():
    with TestClient(app) as client:
        response = login(client, settings.DEFAULT_ADMIN_USERNAME, settings.DEFAULT_ADMIN_PASSWORD)
        assert response.status_code == 200
        assert response.json()["user"]["role"] == "admin"


def test_unknown_route_is_not_found(anon_client):
    assert anon_client.get("/api/nothing-here").status_code == 404
