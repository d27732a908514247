"""检测规则测试"""
from netguard.models import Alert, DetectionRule

from conftest import audit_count, audit_rows, make_alert, reload

NEW_RULE = {
    "name": "流量突增检测",
    "description": "流量超过基线的 3 倍",
    "ruleType": "traffic_spike",
    "conditions": {"baselineMultiplier": 3},
    "severity": "high",
}


def test_create_rule_records_creator(operator_client, operator_user):
    response = operator_client.post("/api/detection-rules", json=NEW_RULE)

    assert response.status_code == 201
    body = response.json()
    assert body["createdBy"] == operator_user.id
    assert body["isActive"] is True
    assert body["conditions"] == {"baselineMultiplier": 3}
    assert audit_count(action="CREATE_DETECTION_RULE", resource_id=str(body["id"])) == 1


def test_create_rule_validates_input(operator_client):
    response = operator_client.post("/api/detection-rules", json={"name": "", "severity": "extreme"})

    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert {"name", "ruleType", "severity"} <= fields


def test_list_rules(readonly_client, rule):
    response = readonly_client.get("/api/detection-rules")
    assert [r["name"] for r in response.json()] == ["端口扫描检测"]


def test_update_rule(operator_client, rule):
    response = operator_client.put(f"/api/detection-rules/{rule.id}", json=NEW_RULE)

    assert response.status_code == 200
    assert response.json()["ruleType"] == "traffic_spike"
    assert audit_count(action="UPDATE_DETECTION_RULE") == 1


def test_toggle_flips_without_body(operator_client, rule):
    response = operator_client.patch(f"/api/detection-rules/{rule.id}/toggle")

    assert response.status_code == 200
    assert response.json()["isActive"] is False

    response = operator_client.patch(f"/api/detection-rules/{rule.id}/toggle", json={})
    assert response.json()["isActive"] is True


def test_toggle_sets_explicit_value(operator_client, rule):
    response = operator_client.patch(f"/api/detection-rules/{rule.id}/toggle", json={"isActive": False})

    assert response.json()["isActive"] is False
    row = audit_rows()[-1]
    assert row.action == "TOGGLE_DETECTION_RULE"
    assert row.details["isActive"] is False


def test_delete_rule_detaches_alerts(db, operator_client, rule):
    alert = make_alert(db, rule_id=rule.id)

    response = operator_client.delete(f"/api/detection-rules/{rule.id}")

    assert response.status_code == 204
    assert reload(DetectionRule, rule.id) is None
    assert reload(Alert, alert.id).rule_id is None
    assert audit_count(action="DELETE_DETECTION_RULE") == 1


def test_missing_rule(operator_client):
    assert operator_client.put("/api/detection-rules/999", json=NEW_RULE).status_code == 404
    assert operator_client.patch("/api/detection-rules/999/toggle").status_code == 404
    assert operator_client.delete("/api/detection-rules/999").status_code == 404
    assert audit_count() == 0
