"""壁纸生成 API 端点."""
from typing import Union
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from ecovista.models.wallpaper import (
    WallpaperError,
    WallpaperFailure,
    WallpaperPayload,
    WallpaperResponse,
)
from ecovista.services.prompt_validator import validate_wallpaper_request
from ecovista.services.wallpaper_service import WallpaperService
from ecovista.apis.deps import get_wallpaper_service
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    status: {"model": WallpaperError}
    for status in (400, 429, 500, 503)
}


def _failure_response(failure: WallpaperFailure) -> JSONResponse:
    return JSONResponse(
        status_code=failure.status_code,
        content=WallpaperError.from_failure(failure).model_dump(mode="json")
    )


@router.post("/generate-wallpaper", response_model=WallpaperResponse, responses=ERROR_RESPONSES)
async def generate_wallpaper(
    payload: WallpaperPayload,
    service: WallpaperService = Depends(get_wallpaper_service)
) -> Union[WallpaperResponse, JSONResponse]:
    """
    生成壁纸接口.

    Args:
        payload: 壁纸生成请求体
        service: 壁纸生成服务（通过依赖注入）

    Returns:
        WallpaperResponse: 生成成功
        JSONResponse: {error, code, timestamp}，状态码由失败类型决定
    """
    logger.info("收到新的壁纸生成请求")

    validated = validate_wallpaper_request(payload)
    if isinstance(validated, WallpaperFailure):
        logger.info(f"提示词校验失败: {validated.error_code.value}")
        return _failure_response(validated)

    result = await service.generate(validated)
    if isinstance(result, WallpaperFailure):
        return _failure_response(result)

    return WallpaperResponse.from_result(result)
