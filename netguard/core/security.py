"""
NetGuard 流量监控平台 - 安全模块

密码哈希与校验，只持久化带盐的 bcrypt 哈希
"""
import logging

from passlib.context import CryptContext

from netguard.config import settings

logger = logging.getLogger(__name__)


# 密码哈希上下文
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

# 用户不存在时也做一次哈希比较，使两条失败路径耗时接近
_DUMMY_HASH = pwd_context.hash("netguard-dummy-password")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # 库中存了无法识别的哈希
        logger.warning("[AUTH] 无法识别的密码哈希格式")
        return False


def get_password_hash(password: str) -> str:
    """生成密码哈希"""
    return pwd_context.hash(password)


def burn_password_check(plain_password: str) -> None:
    """对占位哈希做一次校验，结果丢弃"""
    pwd_context.verify(plain_password, _DUMMY_HASH)
