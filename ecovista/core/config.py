"""应用配置管理 - 环境变量和 API Keys."""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """应用配置类 - 从环境变量加载配置."""

    # 应用基础配置
    APP_NAME: str = "EcoVista Wallpaper API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # API 服务配置
    API_V1_PREFIX: str = "/api/v1"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ALLOW_ORIGINS: str = "*"  # 逗号分隔的来源列表，移动端直连时保持 "*"
    MAX_BODY_BYTES: int = 10 * 1024 * 1024  # 请求体上限 10MB

    # DumplingAI 绘图服务配置
    DUMPLING_AI_KEY: Optional[str] = None
    DUMPLING_AI_URL: str = "https://app.dumplingai.com/api/v1/generate-ai-image"
    DUMPLING_AI_MODEL: str = "FLUX.1-schnell"
    GENERATION_TIMEOUT: float = 60  # 单次生成请求超时时间（秒），不做重试

    # 限流配置（按客户端 IP，作用于 /api/ 下的接口）
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_REQUESTS: int = 10
    RATE_LIMIT_WINDOW_MINUTES: int = 15

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True
    }

    @property
    def rate_limit(self) -> str:
        """slowapi/limits 格式的限流字符串，例如 "10 per 15 minutes"."""
        return f"{self.RATE_LIMIT_REQUESTS} per {self.RATE_LIMIT_WINDOW_MINUTES} minutes"


# 创建全局配置实例
settings = Settings()
