"""壁纸生成服务 - 增强提示词、调用 DumplingAI 并统一映射错误."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
from langchain_core.runnables import Runnable
from ecovista.chains.dumpling_image_runnable import DumplingImageRunnable
from ecovista.chains.wallpaper_prompt import build_wallpaper_prompt
from ecovista.core.config import Settings
from ecovista.core.logger import jerror, jinfo, jwarn
from ecovista.models.wallpaper import (
    ErrorCode,
    WallpaperFailure,
    WallpaperRequest,
    WallpaperResult,
    WallpaperSuccess,
)
import httpx
import logging

logger = logging.getLogger(__name__)

# 上游状态码 -> (客户端错误信息, 错误代码, 客户端状态码)
UPSTREAM_ERROR_TABLE: Dict[int, Tuple[str, ErrorCode, int]] = {
    401: ("Service authentication error. Please contact support.", ErrorCode.AUTH_ERROR, 503),
    429: ("Daily AI generation limit reached. Please try again tomorrow!", ErrorCode.RATE_LIMIT, 429),
    400: ("Invalid request. Please try a different description.", ErrorCode.INVALID_REQUEST, 400),
}

SERVICE_ERROR: Tuple[str, ErrorCode, int] = (
    "AI service temporarily unavailable. Please try again later.",
    ErrorCode.SERVICE_ERROR,
    500,
)

NO_IMAGE_FAILURE = WallpaperFailure(
    error_message="Failed to generate wallpaper. Please try a different description.",
    error_code=ErrorCode.NO_IMAGE_GENERATED,
    status_code=500
)


def map_upstream_error(status_code: Optional[int]) -> WallpaperFailure:
    """
    将上游 HTTP 状态码映射为客户端错误.

    Args:
        status_code: 上游状态码；超时或网络错误没有响应时为 None

    Returns:
        WallpaperFailure: 映射后的失败结果，未列出的状态码一律为 SERVICE_ERROR
    """
    message, code, status = UPSTREAM_ERROR_TABLE.get(status_code, SERVICE_ERROR)
    return WallpaperFailure(error_message=message, error_code=code, status_code=status)


def extract_image_url(data: Any) -> Optional[str]:
    """
    从上游响应中提取图片 URL.

    上游可能返回 {"images": [{"url": ...}]} 或 {"output": ["..."]} 两种结构，
    先取 images，没有再取 output。

    Args:
        data: 上游响应 JSON

    Returns:
        Optional[str]: 图片 URL，两种结构都没有时返回 None
    """
    if not isinstance(data, dict):
        return None

    images = data.get("images")
    if isinstance(images, list) and images:
        first = images[0]
        url = first.get("url") if isinstance(first, dict) else None
        return url if isinstance(url, str) and url else None

    output = data.get("output")
    if isinstance(output, list) and output:
        first = output[0]
        return first if isinstance(first, str) and first else None

    return None


class WallpaperService:
    """壁纸生成服务类."""

    def __init__(self, settings: Settings, image_runnable: Optional[Runnable] = None):
        """
        初始化壁纸生成服务.

        Args:
            settings: 应用配置，构造时注入，请求过程中不再读取全局配置
            image_runnable: 图片生成 Runnable，默认根据配置创建 DumplingImageRunnable
        """
        self.settings = settings
        self.image_runnable = image_runnable or DumplingImageRunnable.from_settings(settings)

    async def generate(self, request: WallpaperRequest) -> WallpaperResult:
        """
        生成壁纸.

        Args:
            request: 已通过校验的请求

        Returns:
            WallpaperSuccess: 生成成功
            WallpaperFailure: 上游失败或未返回图片
        """
        enhanced_prompt = build_wallpaper_prompt(request.prompt)
        jinfo(logger, "开始生成壁纸", "增强提示词", prompt=enhanced_prompt, user_id=request.user_id)

        try:
            data = await self.image_runnable.ainvoke(enhanced_prompt)
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            jerror(logger, "DumplingAI 返回错误", "调用上游", status=status_code, body=e.response.text)
            return map_upstream_error(status_code)
        except Exception as e:
            # 超时、网络错误、响应无法解析都没有可用的状态码
            jerror(logger, "DumplingAI 调用失败", "调用上游", error=str(e), error_type=type(e).__name__)
            return map_upstream_error(None)

        image_url = extract_image_url(data)
        if not image_url:
            jwarn(logger, "上游响应中没有图片 URL", "解析响应", user_id=request.user_id)
            return NO_IMAGE_FAILURE

        jinfo(logger, "壁纸生成成功", "解析响应", image_url=image_url)
        return WallpaperSuccess(
            image_url=image_url,
            prompt_used=enhanced_prompt,
            user_id=request.user_id,
            generation_time=datetime.now(timezone.utc)
        )
