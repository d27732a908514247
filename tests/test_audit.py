"""审计日志测试"""
import threading
import time
from datetime import datetime, timedelta

import pytest
from fastapi import APIRouter, FastAPI
from sqlalchemy.exc import SQLAlchemyError

from netguard.api.router import api_router
from netguard.database import SessionLocal, utcnow
from netguard.main import app
from netguard.models import AuditLog, Device
from netguard.schemas.audit import ENDPOINT_ACTIONS, AuditAction, AuditResource
from netguard.services.audit_service import AuditService, check_audit_coverage

from conftest import audit_count, audit_rows, reload

NEW_DEVICE = {
    "name": "边界路由器",
    "ipAddress": "10.0.0.1",
    "deviceType": "router",
    "protocol": "netflow",
}


# ==================== 写接口覆盖 ====================

def test_every_mutating_route_is_mapped():
    check_audit_coverage(app)
    assert len(ENDPOINT_ACTIONS) == len(set(ENDPOINT_ACTIONS.values())) == len(AuditAction)


def test_unmapped_mutating_route_fails():
    extra = FastAPI()
    extra.include_router(api_router, prefix="/api")

    @extra.post("/api/devices/{device_id}/reboot")
    def reboot(device_id: int):
        return {}

    with pytest.raises(RuntimeError):
        check_audit_coverage(extra)


def test_nested_routers_are_expanded():
    outer = APIRouter()
    outer.include_router(api_router, prefix="/api")
    extra = FastAPI()
    extra.include_router(outer)

    check_audit_coverage(extra)


def test_stale_mapping_fails():
    extra = FastAPI()
    with pytest.raises(RuntimeError):
        check_audit_coverage(extra)


# ==================== 记录内容 ====================

def test_record_captures_actor_and_client(operator_client, operator_user):
    operator_client.post("/api/devices", json=NEW_DEVICE, headers={"User-Agent": "pytest-agent"})

    row = audit_rows()[-1]
    assert row.user_id == operator_user.id
    assert row.username == "operator"
    assert row.user_agent == "pytest-agent"
    assert row.ip_address is not None
    assert row.timestamp is not None


def test_forwarded_for_ignored_by_default(operator_client):
    operator_client.post("/api/devices", json=NEW_DEVICE, headers={"X-Forwarded-For": "203.0.113.7"})
    assert audit_rows()[-1].ip_address != "203.0.113.7"


def test_system_action_has_no_actor(db):
    log = AuditService.record(db, AuditAction.UPDATE_SYSTEM_CONFIG, AuditResource.SYSTEM_CONFIG, "bootstrap")

    assert log is not None
    assert log.user_id is None
    assert log.username is None


def test_unknown_action_is_rejected(db):
    with pytest.raises(ValueError):
        AuditService.record(db, "REBOOT_DEVICE", AuditResource.DEVICE, 1)


def test_timestamps_never_go_backwards(db):
    future = utcnow() + timedelta(hours=1)
    db.add(AuditLog(action="CREATE_DEVICE", resource="device", resource_id="1", timestamp=future))
    db.commit()

    log = AuditService.record(db, AuditAction.DELETE_DEVICE, AuditResource.DEVICE, 1)

    assert log.timestamp >= future


def test_concurrent_records_keep_timestamp_order(monkeypatch):
    from netguard.services import audit_service

    real_utcnow = audit_service.utcnow
    first_call = threading.Event()

    def slow_first_clock():
        value = real_utcnow()
        if not first_call.is_set():
            first_call.set()
            # 第一个写入者取到时间后停顿，让第二个写入者追上
            time.sleep(0.3)
        return value

    monkeypatch.setattr(audit_service, "utcnow", slow_first_clock)

    def write(action):
        session = SessionLocal()
        try:
            AuditService.record(session, action, AuditResource.DEVICE, 1)
        finally:
            session.close()

    first = threading.Thread(target=write, args=(AuditAction.UPDATE_DEVICE,))
    first.start()
    assert first_call.wait(timeout=5)
    second = threading.Thread(target=write, args=(AuditAction.CREATE_DEVICE,))
    second.start()
    first.join(timeout=10)
    second.join(timeout=10)

    rows = audit_rows()
    assert [r.action for r in rows] == ["UPDATE_DEVICE", "CREATE_DEVICE"]
    assert rows[1].timestamp >= rows[0].timestamp


def test_audit_failure_does_not_undo_mutation(operator_client, monkeypatch):
    def broken_select(*args, **kwargs):
        raise SQLAlchemyError("audit table unavailable")

    monkeypatch.setattr("netguard.services.audit_service.select", broken_select)

    response = operator_client.post("/api/devices", json=NEW_DEVICE)

    assert response.status_code == 201
    assert reload(Device, response.json()["id"]) is not None
    assert audit_count() == 0


# ==================== 查询 ====================

def test_audit_logs_newest_first(operator_client):
    created = operator_client.post("/api/devices", json=NEW_DEVICE).json()
    operator_client.put(f"/api/devices/{created['id']}", json={**NEW_DEVICE, "name": "改名"})
    operator_client.delete(f"/api/devices/{created['id']}")

    response = operator_client.get("/api/audit-logs")

    assert response.status_code == 200
    actions = [entry["action"] for entry in response.json()]
    assert actions == ["DELETE_DEVICE", "UPDATE_DEVICE", "CREATE_DEVICE"]
    assert response.headers["X-Total-Count"] == "3"

    timestamps = [entry["timestamp"] for entry in response.json()]
    assert timestamps == sorted(timestamps, reverse=True)


def test_audit_logs_readable_by_any_role(readonly_client):
    assert readonly_client.get("/api/audit-logs").status_code == 200


def test_filter_by_user_and_action(admin_client, admin_user, operator_client, operator_user):
    operator_client.post("/api/devices", json=NEW_DEVICE)
    admin_client.put("/api/system-config/retention", json={"value": 7})

    by_user = admin_client.get("/api/audit-logs", params={"userId": operator_user.id}).json()
    assert [e["action"] for e in by_user] == ["CREATE_DEVICE"]

    by_action = admin_client.get("/api/audit-logs", params={"action": "UPDATE_SYSTEM_CONFIG"}).json()
    assert [e["userId"] for e in by_action] == [admin_user.id]


def test_filter_by_date_range(operator_client):
    session = SessionLocal()
    try:
        session.add_all([
            AuditLog(action="CREATE_DEVICE", resource="device", resource_id="1",
                     timestamp=datetime(2024, 1, 1, 8, 0)),
            AuditLog(action="UPDATE_DEVICE", resource="device", resource_id="1",
                     timestamp=datetime(2024, 1, 15, 23, 30)),
            AuditLog(action="DELETE_DEVICE", resource="device", resource_id="1",
                     timestamp=datetime(2024, 2, 1, 9, 0)),
        ])
        session.commit()
    finally:
        session.close()

    response = operator_client.get("/api/audit-logs", params={
        "startDate": "2024-01-10",
        "endDate": "2024-01-15",
    })
    assert [e["action"] for e in response.json()] == ["UPDATE_DEVICE"]

    response = operator_client.get("/api/audit-logs", params={"startDate": "2024-01-15T00:00:00Z"})
    assert [e["action"] for e in response.json()] == ["DELETE_DEVICE", "UPDATE_DEVICE"]


def test_invalid_filters(operator_client):
    assert operator_client.get("/api/audit-logs", params={"action": "LOGIN"}).status_code == 400
    response = operator_client.get("/api/audit-logs", params={"startDate": "yesterday"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "startDate"


def test_pagination(db, operator_client):
    for i in range(5):
        AuditService.record(db, AuditAction.CREATE_DEVICE, AuditResource.DEVICE, i)

    response = operator_client.get("/api/audit-logs", params={"page": 2, "limit": 2})

    assert [e["resourceId"] for e in response.json()] == ["2", "1"]
    assert response.headers["X-Total-Count"] == "5"
