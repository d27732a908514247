"""告警管理测试"""
from netguard.models import Alert

from conftest import audit_count, make_alert, reload


def test_list_alerts_with_filters(db, readonly_client):
    make_alert(db, severity="high", title="a")
    make_alert(db, severity="low", title="b")
    make_alert(db, severity="high", status="resolved", title="c")

    response = readonly_client.get("/api/alerts", params={"severity": "high"})
    assert response.status_code == 200
    assert {a["title"] for a in response.json()} == {"a", "c"}
    assert response.headers["X-Total-Count"] == "2"

    response = readonly_client.get("/api/alerts", params={"severity": "high", "status": "pending"})
    assert [a["title"] for a in response.json()] == ["a"]


def test_list_alerts_pagination(db, readonly_client):
    for i in range(5):
        make_alert(db, title=f"alert-{i}")

    response = readonly_client.get("/api/alerts", params={"page": 2, "limit": 2})

    assert len(response.json()) == 2
    assert response.headers["X-Total-Count"] == "5"


def test_list_alerts_rejects_bad_filters(readonly_client):
    assert readonly_client.get("/api/alerts", params={"severity": "critical"}).status_code == 400
    assert readonly_client.get("/api/alerts", params={"limit": 0}).status_code == 400


def test_alert_stats(db, readonly_client):
    make_alert(db, severity="high")
    make_alert(db, severity="high")
    make_alert(db, severity="low")
    make_alert(db, severity="medium", status="resolved")
    make_alert(db, severity="medium", status="dismissed")

    response = readonly_client.get("/api/alerts/stats")

    assert response.json() == {"low": 1, "medium": 0, "high": 2, "resolved": 1}


def test_resolve_alert(operator_client, operator_user, alert):
    response = operator_client.put(f"/api/alerts/{alert.id}/resolve")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "resolved"
    assert body["resolvedBy"] == operator_user.id
    assert body["resolvedAt"] is not None
    assert audit_count(action="RESOLVE_ALERT", resource_id=str(alert.id)) == 1


def test_dismiss_alert(operator_client, alert):
    response = operator_client.put(f"/api/alerts/{alert.id}/dismiss")

    assert response.status_code == 200
    assert response.json()["status"] == "dismissed"
    assert audit_count(action="DISMISS_ALERT") == 1


def test_resolve_twice_is_noop(operator_client, alert):
    operator_client.put(f"/api/alerts/{alert.id}/resolve")
    response = operator_client.put(f"/api/alerts/{alert.id}/resolve")

    assert response.status_code == 200
    assert response.json()["status"] == "resolved"
    assert audit_count(action="RESOLVE_ALERT") == 1


def test_closed_alert_cannot_switch_outcome(operator_client, alert):
    operator_client.put(f"/api/alerts/{alert.id}/resolve")

    response = operator_client.put(f"/api/alerts/{alert.id}/dismiss")

    assert response.status_code == 400
    assert reload(Alert, alert.id).status == "resolved"
    assert audit_count(action="DISMISS_ALERT") == 0


def test_processing_alert_can_be_resolved(db, operator_client):
    alert = make_alert(db, status="processing")
    response = operator_client.put(f"/api/alerts/{alert.id}/resolve")
    assert response.json()["status"] == "resolved"


def test_missing_alert(operator_client):
    assert operator_client.put("/api/alerts/999/resolve").status_code == 404
    assert operator_client.put("/api/alerts/999/dismiss").status_code == 404
    assert audit_count() == 0
