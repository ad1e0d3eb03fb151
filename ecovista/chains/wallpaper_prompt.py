"""壁纸提示词模板 - 为用户描述追加固定的风格修饰词."""
from langchain_core.prompts import PromptTemplate

# 引导模型生成自然风景、高质量、竖屏手机壁纸；不随输入变化
WALLPAPER_STYLE_SUFFIX = (
    ", beautiful nature wallpaper, high quality, mobile phone wallpaper, "
    "4K, detailed, stunning, peaceful natural scenery"
)

WALLPAPER_PROMPT = PromptTemplate.from_template("{prompt}" + WALLPAPER_STYLE_SUFFIX)


def build_wallpaper_prompt(prompt: str) -> str:
    """
    构建发送给上游的增强提示词.

    用户文本按原样代入，不裁剪、不转义，其中的花括号也不会被当作模板变量。

    Args:
        prompt: 用户提示词

    Returns:
        str: prompt + 固定风格后缀
    """
    return WALLPAPER_PROMPT.format(prompt=prompt)
