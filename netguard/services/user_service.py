"""
NetGuard 流量监控平台 - 用户服务（凭据存储）
"""
import logging
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from netguard.config import settings
from netguard.core.exceptions import NotFound, ValidationFailed
from netguard.core.security import burn_password_check, get_password_hash, verify_password
from netguard.database import utcnow
from netguard.models import Alert, AuditLog, DetectionRule, SystemConfig, User, UserRole
from netguard.schemas.auth import UserCreate

logger = logging.getLogger(__name__)


class UserService:
    """用户与凭据服务"""

    @staticmethod
    def verify(db: Session, username: str, password: str) -> Optional[User]:
        """
        校验用户名和密码

        用户不存在、已停用、密码错误三种情况统一返回 None，调用方不得区分原因
        """
        user = db.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()

        if user is None:
            burn_password_check(password)
            return None
        if not verify_password(password, user.hashed_password):
            return None
        if not user.is_active:
            return None
        return user

    @staticmethod
    def record_login(db: Session, user: User) -> None:
        """更新最后登录时间"""
        user.last_login = utcnow()
        db.commit()

    @staticmethod
    def get_or_404(db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise NotFound("用户不存在")
        return user

    @staticmethod
    def list_all(db: Session) -> list[User]:
        stmt = select(User).order_by(User.created_at.desc(), User.id.desc())
        return list(db.execute(stmt).scalars().all())

    @staticmethod
    def create(db: Session, data: UserCreate) -> User:
        """创建用户，用户名/邮箱重复时报校验错误"""
        conditions = [User.username == data.username]
        if data.email:
            conditions.append(User.email == data.email)
        existing = db.execute(select(User).where(or_(*conditions))).scalars().all()

        errors = []
        for other in existing:
            if other.username == data.username:
                errors.append({"field": "username", "message": "用户名已存在"})
            if data.email and other.email == data.email:
                errors.append({"field": "email", "message": "邮箱已被使用"})
        if errors:
            raise ValidationFailed("用户名或邮箱已存在", errors=errors)

        user = User(
            username=data.username,
            hashed_password=get_password_hash(data.password),
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
            role=data.role.value,
            is_active=True,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationFailed("用户名或邮箱已存在")
        db.refresh(user)
        return user

    @staticmethod
    def update_role(db: Session, user: User, role: UserRole) -> User:
        user.role = role.value
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update_status(db: Session, user: User, is_active: bool) -> User:
        user.is_active = is_active
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def is_referenced(db: Session, user_id: int) -> bool:
        """用户是否被审计、告警、规则或配置历史引用"""
        checks = (
            select(func.count(AuditLog.id)).where(AuditLog.user_id == user_id),
            select(func.count(Alert.id)).where(Alert.resolved_by == user_id),
            select(func.count(DetectionRule.id)).where(DetectionRule.created_by == user_id),
            select(func.count(SystemConfig.id)).where(SystemConfig.updated_by == user_id),
        )
        return any((db.execute(stmt).scalar() or 0) > 0 for stmt in checks)

    @staticmethod
    def delete(db: Session, user: User) -> None:
        """
        永久删除用户

        被历史记录引用的账号只能停用，不能删除
        """
        if UserService.is_referenced(db, user.id):
            raise ValidationFailed("该用户存在历史操作记录，只能停用，不能删除")
        db.delete(user)
        db.commit()

    @staticmethod
    def ensure_default_admin(db: Session) -> Optional[User]:
        """创建默认管理员账户（如果不存在）"""
        admin = db.execute(
            select(User).where(User.username == settings.DEFAULT_ADMIN_USERNAME)
        ).scalar_one_or_none()
        if admin is not None:
            return None

        admin = User(
            username=settings.DEFAULT_ADMIN_USERNAME,
            email=settings.DEFAULT_ADMIN_EMAIL,
            hashed_password=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
            role=UserRole.ADMIN.value,
            is_active=True,
        )
        db.add(admin)
        db.commit()
        db.refresh(admin)
        logger.info("Created default admin account '%s'", admin.username)
        return admin
