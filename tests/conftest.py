"""
测试公共夹具

数据库指向临时 SQLite 文件，必须在导入 netguard 之前设置环境变量
"""
import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="netguard-test-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402

from netguard.core.security import get_password_hash  # noqa: E402
from netguard.core.session_manager import session_manager  # noqa: E402
from netguard.database import Base, SessionLocal, engine, init_db  # noqa: E402
from netguard.main import app  # noqa: E402
from netguard.models import Alert, AuditLog, DetectionRule, Device, User  # noqa: E402

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def fresh_database():
    """每个用例使用空库与空会话表"""
    Base.metadata.drop_all(bind=engine)
    init_db()
    session_manager.clear()
    yield
    session_manager.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def make_user(db, username, role="readonly", is_active=True, email=None):
    user = User(
        username=username,
        hashed_password=get_password_hash(PASSWORD),
        email=email,
        role=role,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login(client, username, password=PASSWORD):
    return client.post("/api/auth/login", json={"username": username, "password": password})


def logged_in_client(username):
    client = TestClient(app)
    response = login(client, username)
    assert response.status_code == 200, response.text
    return client


def audit_count(**filters) -> int:
    """在独立会话中统计审计记录"""
    session = SessionLocal()
    try:
        stmt = select(func.count(AuditLog.id))
        for column, value in filters.items():
            stmt = stmt.where(getattr(AuditLog, column) == value)
        return session.execute(stmt).scalar() or 0
    finally:
        session.close()


def audit_rows():
    session = SessionLocal()
    try:
        return list(session.execute(select(AuditLog).order_by(AuditLog.id)).scalars().all())
    finally:
        session.close()


def reload(model, pk):
    session = SessionLocal()
    try:
        return session.get(model, pk)
    finally:
        session.close()


@pytest.fixture
def admin_user(db):
    return make_user(db, "admin", role="admin", email="admin@example.com")


@pytest.fixture
def operator_user(db):
    return make_user(db, "operator", role="operator")


@pytest.fixture
def readonly_user(db):
    return make_user(db, "viewer", role="readonly")


@pytest.fixture
def inactive_user(db):
    return make_user(db, "retired", role="operator", is_active=False)


@pytest.fixture
def anon_client():
    return TestClient(app)


@pytest.fixture
def admin_client(admin_user):
    return logged_in_client(admin_user.username)


@pytest.fixture
def operator_client(operator_user):
    return logged_in_client(operator_user.username)


@pytest.fixture
def readonly_client(readonly_user):
    return logged_in_client(readonly_user.username)


@pytest.fixture
def device(db):
    device = Device(
        name="核心交换机",
        ip_address="192.168.1.1",
        device_type="switch",
        protocol="snmp",
        status="online",
    )
    db.add(device)
    db.commit()
    db.refresh(device)
    return device


@pytest.fixture
def rule(db, admin_user):
    rule = DetectionRule(
        name="端口扫描检测",
        rule_type="port_scan",
        conditions={"portThreshold": 100},
        severity="medium",
        is_active=True,
        created_by=admin_user.id,
    )
    db.add(rule)
    db.commit()
    db.refresh(rule)
    return rule


def make_alert(db, severity="high", status="pending", rule_id=None, title="异常流量"):
    alert = Alert(
        title=title,
        description="出站流量异常",
        severity=severity,
        status=status,
        source_ip="10.0.0.5",
        rule_id=rule_id,
    )
    db.add(alert)
    db.commit()
    db.refresh(alert)
    return alert


@pytest.fixture
def alert(db):
    return make_alert(db)
