"""
NetGuard 流量监控平台 - Schema 基类

对外 JSON 使用 camelCase（ipAddress、isActive ...），输入同时接受 snake_case
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase 别名模型"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json(self) -> dict:
        """按别名导出为可直接返回的 JSON 字典"""
        return self.model_dump(by_alias=True, mode="json")


class MessageResponse(CamelModel):
    """仅含提示信息的响应"""
    message: str
