"""系统配置测试"""
from conftest import audit_count, audit_rows


def test_upsert_creates_then_overwrites(admin_client, admin_user):
    response = admin_client.put("/api/system-config/retention_days", json={
        "value": 30,
        "description": "日志保留天数",
    })
    assert response.status_code == 200
    assert response.json()["value"] == 30
    assert response.json()["updatedBy"] == admin_user.id

    response = admin_client.put("/api/system-config/retention_days", json={"value": 90})
    body = response.json()
    assert body["value"] == 90
    assert body["description"] == "日志保留天数"

    configs = admin_client.get("/api/system-config").json()
    assert len(configs) == 1

    rows = audit_rows()
    assert [r.action for r in rows] == ["UPDATE_SYSTEM_CONFIG"] * 2
    assert rows[-1].resource_id == "retention_days"


def test_structured_values(admin_client):
    value = {"thresholds": {"cpu": 80, "traffic": [100, 200]}, "enabled": True}
    response = admin_client.put("/api/system-config/alerting", json={"value": value})
    assert response.json()["value"] == value


def test_list_is_ordered_by_key(admin_client):
    admin_client.put("/api/system-config/zeta", json={"value": 1})
    admin_client.put("/api/system-config/alpha", json={"value": 2})

    keys = [c["key"] for c in admin_client.get("/api/system-config").json()]
    assert keys == ["alpha", "zeta"]


def test_value_is_required(admin_client):
    assert admin_client.put("/api/system-config/retention", json={}).status_code == 400
    assert admin_client.put("/api/system-config/retention", json={"value": None}).status_code == 400
    assert audit_count() == 0
