"""
NetGuard 流量监控平台 - 演示数据

python -m netguard.seed
向空库写入演示用设备、检测规则与告警；已有设备时跳过
"""
import logging

from sqlalchemy import func, select

from netguard.config import settings
from netguard.database import SessionLocal, init_db
from netguard.logging_config import setup_logging
from netguard.models import Device, DeviceStatus, User
from netguard.schemas.alert import AlertCreate
from netguard.schemas.detection_rule import DetectionRuleCreate
from netguard.schemas.device import DeviceCreate
from netguard.services.alert_service import AlertService
from netguard.services.rule_service import DetectionRuleService
from netguard.services.device_service import DeviceService
from netguard.services.user_service import UserService

logger = logging.getLogger(__name__)

DEMO_DEVICES = [
    ("核心交换机", "192.168.1.1", "switch", "snmp", "机房核心交换机"),
    ("边界路由器", "10.0.0.1", "router", "netflow", "出口路由器"),
    ("内网服务器", "192.168.1.10", "server", "sflow", None),
    ("Web服务器", "10.0.1.25", "server", "pcap", None),
]

DEMO_RULES = [
    {
        "name": "端口扫描检测",
        "description": "短时间内同一来源访问大量端口",
        "rule_type": "port_scan",
        "conditions": {"portThreshold": 100, "windowSeconds": 60},
        "severity": "medium",
    },
    {
        "name": "流量突增检测",
        "description": "流量超过基线的 3 倍",
        "rule_type": "traffic_spike",
        "conditions": {"baselineMultiplier": 3, "windowSeconds": 300},
        "severity": "high",
    },
    {
        "name": "DNS 隧道检测",
        "rule_type": "dns_tunnel",
        "conditions": {"maxQueryLength": 120},
        "severity": "low",
        "is_active": False,
    },
]

DEMO_ALERTS = [
    ("检测到端口扫描", "来源主机在 60 秒内访问了 512 个端口", "medium", "172.16.0.100", 0),
    ("异常流量突增", "出站流量达到基线的 4.2 倍", "high", "192.168.1.10", 1),
    ("可疑 DNS 查询", "检测到超长 DNS 查询域名", "low", "10.0.1.25", None),
]


def seed() -> bool:
    """写入演示数据，返回是否实际写入"""
    init_db()
    db = SessionLocal()
    try:
        UserService.ensure_default_admin(db)
        if (db.execute(select(func.count(Device.id))).scalar() or 0) > 0:
            logger.info("Database already contains devices, skipping seed")
            return False

        admin = db.execute(
            select(User).where(User.username == settings.DEFAULT_ADMIN_USERNAME)
        ).scalar_one()

        for name, ip, device_type, protocol, description in DEMO_DEVICES:
            device = DeviceService.create(db, DeviceCreate(
                name=name,
                ip_address=ip,
                device_type=device_type,
                protocol=protocol,
                description=description,
            ))
            device.status = DeviceStatus.ONLINE.value
        db.commit()

        rules = [
            DetectionRuleService.create(db, DetectionRuleCreate(**data), admin)
            for data in DEMO_RULES
        ]

        for title, description, severity, source_ip, rule_index in DEMO_ALERTS:
            AlertService.create(db, AlertCreate(
                title=title,
                description=description,
                severity=severity,
                source_ip=source_ip,
                rule_id=rules[rule_index].id if rule_index is not None else None,
            ))

        logger.info(
            "Seeded %d devices, %d rules, %d alerts",
            len(DEMO_DEVICES), len(DEMO_RULES), len(DEMO_ALERTS),
        )
        return True
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    seed()
