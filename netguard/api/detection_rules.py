"""
NetGuard 流量监控平台 - 检测规则 API
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from netguard.core.session_manager import SessionContext
from netguard.database import get_db
from netguard.dependencies import get_current_session, get_current_user
from netguard.models.user import User
from netguard.schemas.audit import AuditAction, AuditResource
from netguard.schemas.detection_rule import (
    DetectionRuleCreate,
    DetectionRuleInfo,
    DetectionRuleToggle,
)
from netguard.services.audit_service import AuditService
from netguard.services.rule_service import DetectionRuleService

router = APIRouter()


@router.get("")
def list_rules(
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """列出所有检测规则"""
    return [DetectionRuleInfo.from_model(rule).to_json() for rule in DetectionRuleService.list_all(db)]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_rule(
    payload: DetectionRuleCreate,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """创建检测规则，创建者为当前用户"""
    rule = DetectionRuleService.create(db, payload, current_user)
    info = DetectionRuleInfo.from_model(rule)

    AuditService.record(
        db,
        AuditAction.CREATE_DETECTION_RULE,
        AuditResource.DETECTION_RULE,
        resource_id=info.id,
        details={"ruleName": info.name},
        user=current_user,
        request=request,
    )
    return info.to_json()


@router.put("/{rule_id}")
def update_rule(
    rule_id: int,
    payload: DetectionRuleCreate,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """更新检测规则"""
    rule = DetectionRuleService.get_or_404(db, rule_id)
    rule = DetectionRuleService.update(db, rule, payload)
    info = DetectionRuleInfo.from_model(rule)

    AuditService.record(
        db,
        AuditAction.UPDATE_DETECTION_RULE,
        AuditResource.DETECTION_RULE,
        resource_id=rule_id,
        details={"ruleName": info.name},
        user=current_user,
        request=request,
    )
    return info.to_json()


@router.patch("/{rule_id}/toggle")
def toggle_rule(
    rule_id: int,
    request: Request,
    payload: Optional[DetectionRuleToggle] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """启用/停用检测规则"""
    rule = DetectionRuleService.get_or_404(db, rule_id)
    rule = DetectionRuleService.toggle(db, rule, payload.is_active if payload else None)
    info = DetectionRuleInfo.from_model(rule)

    AuditService.record(
        db,
        AuditAction.TOGGLE_DETECTION_RULE,
        AuditResource.DETECTION_RULE,
        resource_id=rule_id,
        details={"ruleName": info.name, "isActive": info.is_active},
        user=current_user,
        request=request,
    )
    return info.to_json()


@router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_rule(
    rule_id: int,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """删除检测规则"""
    rule = DetectionRuleService.get_or_404(db, rule_id)
    details = {"ruleName": rule.name}
    DetectionRuleService.delete(db, rule)

    AuditService.record(
        db,
        AuditAction.DELETE_DETECTION_RULE,
        AuditResource.DETECTION_RULE,
        resource_id=rule_id,
        details=details,
        user=current_user,
        request=request,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
