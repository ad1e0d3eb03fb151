"""限流模块 - 按客户端 IP 限制 /api/ 前缀下所有请求的频率."""
from fastapi import Request
from fastapi.responses import JSONResponse
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address
from ecovista.core.config import settings
from ecovista.models.wallpaper import ErrorCode
import logging

logger = logging.getLogger(__name__)

API_PATH_PREFIX = "/api/"

# 内存存储，单进程部署足够；滑动窗口与 express-rate-limit 的语义一致
limiter = Limiter(
    key_func=get_remote_address,
    strategy="moving-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)

api_rate_limit = parse(settings.rate_limit)


def rate_limit_response() -> JSONResponse:
    """超出限流时返回的固定 429 响应."""
    return JSONResponse(
        status_code=429,
        content={
            "error": f"Too many requests, please try again after {settings.RATE_LIMIT_WINDOW_MINUTES} minutes.",
            "code": ErrorCode.RATE_LIMIT_EXCEEDED.value
        }
    )


async def limit_api_requests(request: Request, call_next):
    """
    /api/ 前缀下的每个请求（包括不存在的路径）都计入同一个窗口.

    Returns:
        429 JSONResponse（RATE_LIMIT_EXCEEDED），未超限时交给后续处理
    """
    if not limiter.enabled or not request.url.path.startswith(API_PATH_PREFIX):
        return await call_next(request)

    client = get_remote_address(request)
    if not limiter.limiter.hit(api_rate_limit, "api", client):
        logger.warning(f"请求过于频繁: {client} {request.url.path}")
        return rate_limit_response()

    return await call_next(request)
