"""FastAPI 应用主入口."""
import sys
from pathlib import Path

# 添加项目根目录到 Python 路径，确保可以直接运行此文件
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ecovista.core.config import settings
from ecovista.core.rate_limit import limit_api_requests
from ecovista.core.security import (
    RequestBodyLimitMiddleware,
    RequestBodyTooLarge,
    add_security_headers,
    payload_too_large_handler,
)
from ecovista.models.wallpaper import ErrorCode, HealthResponse, WallpaperError
from ecovista.apis.v1 import endpoint_wallpaper
import logging

# 配置日志
logging.basicConfig(
    level=logging.INFO,  # 始终使用 INFO 级别，以便记录 API 请求信息
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

# 创建 FastAPI 应用实例（生产环境禁用 API 文档，防止信息泄露）
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="EcoVista Wallpaper API - 自然风景手机壁纸生成服务",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)

# 配置 CORS（移动端直连，仅开放 GET/POST）
origins = ["*"]
if settings.ALLOW_ORIGINS and settings.ALLOW_ORIGINS != "*":
    origins = [origin.strip() for origin in settings.ALLOW_ORIGINS.split(",")]

# 中间件后注册的在外层：请求体大小检查在最内层，其次是 /api/ 限流，
# CORS 预检请求不计入限流，安全响应头覆盖所有响应
app.add_middleware(RequestBodyLimitMiddleware, max_body_bytes=settings.MAX_BODY_BYTES)
app.middleware("http")(limit_api_requests)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

app.middleware("http")(add_security_headers)

app.add_exception_handler(RequestBodyTooLarge, payload_too_large_handler)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """请求体不是合法 JSON 或字段类型错误时，按提示词无效处理."""
    logger.info(f"请求体校验失败: {request.url.path} {[error.get('type') for error in exc.errors()]}")
    error = WallpaperError(
        error="Please provide a detailed description (at least 3 characters)",
        code=ErrorCode.INVALID_PROMPT
    )
    return JSONResponse(status_code=400, content=error.model_dump(mode="json"))


# 注册 API 路由
app.include_router(
    endpoint_wallpaper.router,
    prefix=settings.API_V1_PREFIX,
    tags=["壁纸"]
)


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """根路径（健康探测）."""
    return HealthResponse(
        message=f"{settings.APP_NAME} is running",
        version=settings.APP_VERSION
    )


@app.get("/health")
async def health_check():
    """健康检查接口."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    # 根据 DEBUG 模式选择启动方式
    # reload 模式需要模块路径字符串，非 reload 模式可以直接传递 app 对象
    if settings.DEBUG:
        uvicorn.run(
            "ecovista.main:app",
            host=settings.HOST,
            port=settings.PORT,
            reload=True
        )
    else:
        uvicorn.run(
            app,
            host=settings.HOST,
            port=settings.PORT,
            reload=False,
            timeout_keep_alive=75  # 单次生成最长 60 秒，保持连接时间需大于上游超时
        )
