"""
NetGuard 流量监控平台 - 仪表盘 Schema
"""
from typing import Optional

from netguard.schemas.base import CamelModel


class DashboardStats(CamelModel):
    """概览统计"""
    total_traffic: float
    traffic_growth: float
    active_connections: int
    connections_growth: float
    anomalies: int
    anomalies_growth: float
    online_devices: int
    devices_growth: float
    pending_alerts: int


class ChartDataset(CamelModel):
    label: str
    data: list[float]
    border_color: str
    background_color: str


class TrafficChart(CamelModel):
    """流量趋势图"""
    labels: list[str]
    datasets: list[ChartDataset]


class ProtocolShare(CamelModel):
    name: str
    percentage: float
    bytes: float


class TrafficSource(CamelModel):
    source_ip: str
    device_type: Optional[str] = None
    total_bytes: float
    total_connections: int
