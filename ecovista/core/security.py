"""安全中间件 - 安全响应头与请求体大小限制."""
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send
from ecovista.core.config import settings
from ecovista.models.wallpaper import ErrorCode, WallpaperError
import logging

logger = logging.getLogger(__name__)


async def add_security_headers(request: Request, call_next):
    """添加安全响应头."""
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-XSS-Protection"] = "0"
    response.headers["Referrer-Policy"] = "no-referrer"
    response.headers["Cross-Origin-Resource-Policy"] = "same-origin"
    # 如果启用了 HTTPS，建议启用 HSTS
    if not settings.DEBUG:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


class RequestBodyTooLarge(HTTPException):
    """请求体超过上限."""

    def __init__(self, max_body_bytes: int):
        super().__init__(status_code=413, detail=f"request body exceeds {max_body_bytes} bytes")
        self.max_body_bytes = max_body_bytes


def payload_too_large_response(max_body_bytes: int) -> JSONResponse:
    error = WallpaperError(
        error=f"Request body too large. Maximum size is {max_body_bytes // (1024 * 1024)}MB",
        code=ErrorCode.PAYLOAD_TOO_LARGE
    )
    return JSONResponse(status_code=413, content=error.model_dump(mode="json"))


async def payload_too_large_handler(request: Request, exc: RequestBodyTooLarge) -> JSONResponse:
    logger.warning(f"请求体过大（分块传输）: {request.url.path}")
    return payload_too_large_response(exc.max_body_bytes)


class RequestBodyLimitMiddleware:
    """
    限制请求体大小.

    声明了 Content-Length 的请求直接按头部判断；没有 Content-Length（分块传输）时
    在读取过程中累计字节数，超限即抛出 RequestBodyTooLarge，由异常处理器返回 413。
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_body_bytes:
            logger.warning(f"请求体过大: {content_length} 字节 {scope['path']}")
            response = payload_too_large_response(self.max_body_bytes)
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    raise RequestBodyTooLarge(self.max_body_bytes)
            return message

        await self.app(scope, limited_receive, send)
