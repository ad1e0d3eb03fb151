"""壁纸生成相关的 Pydantic 数据模型."""
from datetime import datetime, timezone
from pydantic import BaseModel, Field
from typing import Any, Optional, Union
from enum import Enum


class ErrorCode(str, Enum):
    """返回给客户端的错误代码."""
    INVALID_PROMPT = "INVALID_PROMPT"
    PROMPT_TOO_LONG = "PROMPT_TOO_LONG"
    NO_IMAGE_GENERATED = "NO_IMAGE_GENERATED"
    AUTH_ERROR = "AUTH_ERROR"
    RATE_LIMIT = "RATE_LIMIT"
    INVALID_REQUEST = "INVALID_REQUEST"
    SERVICE_ERROR = "SERVICE_ERROR"
    # 以下两个由中间件产生，不经过核心流程
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """生成 ISO-8601 UTC 时间戳（毫秒精度，Z 结尾），如 2024-05-01T08:00:00.000Z."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class WallpaperPayload(BaseModel):
    """壁纸生成请求体（原始输入，提示词规则由校验器负责）."""
    prompt: Optional[str] = Field(default=None, description="壁纸描述")
    user_id: Optional[Any] = Field(default=None, description="客户端用户 ID，原样透传，不做校验")
    app_version: Optional[Any] = Field(default=None, description="客户端版本号，暂未使用")


class WallpaperRequest(BaseModel):
    """通过校验的壁纸生成请求."""
    prompt: str = Field(..., description="用户提示词（未裁剪）")
    user_id: Optional[Any] = Field(default=None, description="客户端用户 ID")
    app_version: Optional[Any] = Field(default=None, description="客户端版本号")


class WallpaperSuccess(BaseModel):
    """生成成功的结果."""
    image_url: str = Field(..., description="生成的图片 URL")
    prompt_used: str = Field(..., description="实际发送给上游的增强提示词")
    user_id: Optional[Any] = Field(default=None, description="客户端用户 ID")
    generation_time: datetime = Field(..., description="生成完成时间（UTC）")


class WallpaperFailure(BaseModel):
    """生成失败的结果."""
    error_message: str = Field(..., description="面向客户端的错误信息")
    error_code: ErrorCode = Field(..., description="错误代码")
    status_code: int = Field(..., description="返回给客户端的 HTTP 状态码")


WallpaperResult = Union[WallpaperSuccess, WallpaperFailure]


class WallpaperResponse(BaseModel):
    """壁纸生成成功响应模型."""
    success: bool = Field(default=True, description="是否成功")
    image_url: str = Field(..., description="生成的图片 URL")
    prompt_used: str = Field(..., description="实际使用的提示词")
    user_id: Optional[Any] = Field(default=None, description="客户端用户 ID")
    generation_time: str = Field(..., description="生成时间")
    message: str = Field(default="Beautiful nature wallpaper generated successfully!", description="附加消息")

    @classmethod
    def from_result(cls, result: WallpaperSuccess) -> "WallpaperResponse":
        return cls(
            image_url=result.image_url,
            prompt_used=result.prompt_used,
            user_id=result.user_id,
            generation_time=utc_timestamp(result.generation_time)
        )


class WallpaperError(BaseModel):
    """壁纸生成错误响应模型."""
    error: str = Field(..., description="错误信息")
    code: ErrorCode = Field(..., description="错误代码")
    timestamp: str = Field(default_factory=utc_timestamp, description="错误发生时间")

    @classmethod
    def from_failure(cls, failure: WallpaperFailure) -> "WallpaperError":
        return cls(error=failure.error_message, code=failure.error_code)


class HealthResponse(BaseModel):
    """根路径健康检查响应模型."""
    status: str = Field(default="active", description="服务状态")
    message: str = Field(..., description="状态说明")
    version: str = Field(..., description="服务版本")
    timestamp: str = Field(default_factory=utc_timestamp, description="当前时间")
