"""
NetGuard 流量监控平台 - 用户管理 API

全部接口仅管理员可用；管理员不能修改自己的角色、状态，也不能删除自己
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from netguard.core.exceptions import ValidationFailed
from netguard.core.session_manager import session_manager
from netguard.database import get_db
from netguard.dependencies import ensure_not_self, get_current_admin
from netguard.models.user import User
from netguard.schemas.audit import AuditAction, AuditResource
from netguard.schemas.auth import UserCreate, UserInfo, UserRoleUpdate, UserStatusUpdate
from netguard.services.audit_service import AuditService
from netguard.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
def list_users(
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """列出所有用户"""
    return [UserInfo.from_model(user).to_json() for user in UserService.list_all(db)]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    request: Request,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """创建用户"""
    user = UserService.create(db, payload)
    info = UserInfo.from_model(user)

    AuditService.record(
        db,
        AuditAction.CREATE_USER,
        AuditResource.USER,
        resource_id=info.id,
        details={"username": info.username, "role": info.role.value},
        user=current_user,
        request=request,
    )
    return info.to_json()


@router.put("/{user_id}/role")
def update_user_role(
    user_id: int,
    payload: UserRoleUpdate,
    request: Request,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """修改用户角色，已登录会话同步新角色"""
    ensure_not_self(current_user, user_id, "不能修改自己的角色")

    target = UserService.get_or_404(db, user_id)
    previous_role = target.role
    target = UserService.update_role(db, target, payload.role)
    session_manager.update_role(target.id, target.role)
    info = UserInfo.from_model(target)

    AuditService.record(
        db,
        AuditAction.UPDATE_USER_ROLE,
        AuditResource.USER,
        resource_id=user_id,
        details={
            "username": info.username,
            "previousRole": previous_role,
            "newRole": info.role.value,
        },
        user=current_user,
        request=request,
    )
    return info.to_json()


@router.put("/{user_id}/status")
def update_user_status(
    user_id: int,
    payload: UserStatusUpdate,
    request: Request,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """启用/停用用户，停用时注销其全部会话"""
    ensure_not_self(current_user, user_id, "不能修改自己的账号状态")

    target = UserService.get_or_404(db, user_id)
    target = UserService.update_status(db, target, payload.is_active)
    if not target.is_active:
        revoked = session_manager.destroy_user_sessions(target.id)
        logger.info("Deactivated user %s, revoked %d session(s)", target.username, revoked)
    info = UserInfo.from_model(target)

    AuditService.record(
        db,
        AuditAction.UPDATE_USER_STATUS,
        AuditResource.USER,
        resource_id=user_id,
        details={"username": info.username, "isActive": info.is_active},
        user=current_user,
        request=request,
    )
    return info.to_json()


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_user(
    user_id: int,
    request: Request,
    confirm: Optional[str] = Query(None, description="确认删除：需与目标用户名一致"),
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """
    删除用户

    须通过 confirm 参数回填目标用户名；只允许删除没有任何历史记录的账号，其余账号应停用
    """
    ensure_not_self(current_user, user_id, "不能删除自己的账号")

    target = UserService.get_or_404(db, user_id)
    if confirm != target.username:
        raise ValidationFailed(
            "删除用户需要确认",
            errors=[{"field": "confirm", "message": "请填写要删除的用户名以确认"}],
        )
    details = {"username": target.username, "role": target.role}
    UserService.delete(db, target)
    session_manager.destroy_user_sessions(user_id)

    AuditService.record(
        db,
        AuditAction.DELETE_USER,
        AuditResource.USER,
        resource_id=user_id,
        details=details,
        user=current_user,
        request=request,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
