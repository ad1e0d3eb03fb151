"""提示词校验 - 在调用上游之前检查请求参数."""
from typing import Union
from ecovista.models.wallpaper import (
    ErrorCode,
    WallpaperFailure,
    WallpaperPayload,
    WallpaperRequest,
)

MIN_PROMPT_LENGTH = 3
MAX_PROMPT_LENGTH = 500


def validate_wallpaper_request(payload: WallpaperPayload) -> Union[WallpaperRequest, WallpaperFailure]:
    """
    校验壁纸生成请求.

    最短长度按裁剪后的文本计算，最长长度按原始文本计算；通过校验的提示词保持原样。

    Args:
        payload: 原始请求体

    Returns:
        WallpaperRequest: 校验通过的请求
        WallpaperFailure: 校验失败（INVALID_PROMPT 或 PROMPT_TOO_LONG）
    """
    prompt = payload.prompt

    if not prompt or len(prompt.strip()) < MIN_PROMPT_LENGTH:
        return WallpaperFailure(
            error_message=f"Please provide a detailed description (at least {MIN_PROMPT_LENGTH} characters)",
            error_code=ErrorCode.INVALID_PROMPT,
            status_code=400
        )

    if len(prompt) > MAX_PROMPT_LENGTH:
        return WallpaperFailure(
            error_message=f"Description too long. Please keep it under {MAX_PROMPT_LENGTH} characters",
            error_code=ErrorCode.PROMPT_TOO_LONG,
            status_code=400
        )

    return WallpaperRequest(
        prompt=prompt,
        user_id=payload.user_id,
        app_version=payload.app_version
    )
