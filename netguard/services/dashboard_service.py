"""
NetGuard 流量监控平台 - 仪表盘服务

流量类数据为合成数据（尚未接入真实采集），设备与告警计数来自数据库
"""
import random
from datetime import timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from netguard.database import utcnow
from netguard.models import Device, DeviceStatus
from netguard.schemas.dashboard import (
    ChartDataset,
    DashboardStats,
    ProtocolShare,
    TrafficChart,
    TrafficSource,
)
from netguard.services.alert_service import AlertService

GB = 1024 ** 3
MB = 1024 ** 2

PROTOCOL_DISTRIBUTION = [
    ("HTTP/HTTPS", 45, 1.2 * GB),
    ("FTP", 15, 0.4 * GB),
    ("SSH", 12, 0.32 * GB),
    ("DNS", 10, 0.27 * GB),
    ("SMTP", 8, 0.21 * GB),
    ("Other", 10, 0.27 * GB),
]

TOP_SOURCES = [
    ("192.168.1.10", "内网服务器", 234.5 * MB, 1247),
    ("10.0.1.25", "Web服务器", 156.8 * MB, 892),
    ("172.16.0.100", "数据库服务器", 98.3 * MB, 445),
]


class DashboardService:
    """仪表盘数据"""

    @staticmethod
    def stats(db: Session) -> DashboardStats:
        online = db.execute(
            select(func.count(Device.id)).where(Device.status == DeviceStatus.ONLINE.value)
        ).scalar() or 0

        return DashboardStats(
            total_traffic=2.34 * 1024 * GB,
            traffic_growth=12.5,
            active_connections=1247,
            connections_growth=8.2,
            anomalies=23,
            anomalies_growth=15.6,
            online_devices=online,
            devices_growth=2.1,
            pending_alerts=AlertService.count_pending(db),
        )

    @staticmethod
    def traffic_chart(hours: int = 24) -> TrafficChart:
        """最近 hours 小时（含当前小时）每小时一个点"""
        now = utcnow()
        labels = []
        inbound = []
        outbound = []
        for i in range(hours, -1, -1):
            point = now - timedelta(hours=i)
            labels.append(point.strftime("%H:%M"))
            inbound.append(round(random.random() * 500 + 100, 2))
            outbound.append(round(random.random() * 400 + 80, 2))

        return TrafficChart(
            labels=labels,
            datasets=[
                ChartDataset(
                    label="入站流量 (Mbps)",
                    data=inbound,
                    border_color="#3b82f6",
                    background_color="rgba(59, 130, 246, 0.1)",
                ),
                ChartDataset(
                    label="出站流量 (Mbps)",
                    data=outbound,
                    border_color="#10b981",
                    background_color="rgba(16, 185, 129, 0.1)",
                ),
            ],
        )

    @staticmethod
    def protocol_distribution() -> list[ProtocolShare]:
        return [
            ProtocolShare(name=name, percentage=pct, bytes=size)
            for name, pct, size in PROTOCOL_DISTRIBUTION
        ]

    @staticmethod
    def top_sources(limit: int = 10) -> list[TrafficSource]:
        return [
            TrafficSource(
                source_ip=ip,
                device_type=kind,
                total_bytes=size,
                total_connections=conns,
            )
            for ip, kind, size, conns in TOP_SOURCES[:limit]
        ]
