"""API 依赖项模块."""
from functools import lru_cache
from ecovista.core.config import settings
from ecovista.services.wallpaper_service import WallpaperService


@lru_cache
def get_wallpaper_service() -> WallpaperService:
    """获取壁纸生成服务（进程内单例，配置在构造时注入）."""
    return WallpaperService(settings)
