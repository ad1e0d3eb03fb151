"""LangChain chains package."""
from ecovista.chains.dumpling_image_runnable import DumplingImageRunnable
from ecovista.chains.wallpaper_prompt import (
    WALLPAPER_PROMPT,
    WALLPAPER_STYLE_SUFFIX,
    build_wallpaper_prompt
)

__all__ = [
    "DumplingImageRunnable",
    "WALLPAPER_PROMPT",
    "WALLPAPER_STYLE_SUFFIX",
    "build_wallpaper_prompt"
]
