"""
NetGuard 流量监控平台

网络流量异常监控后端：会话认证、角色权限、审计日志与监控资源管理
"""
__version__ = "1.0.0"
