"""
NetGuard 流量监控平台 - API 路由
"""
