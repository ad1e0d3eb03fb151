"""DumplingAI 绘图 Runnable - 调用 DumplingAI 图片生成接口."""
from typing import Dict, Any, Optional
from langchain_core.runnables import Runnable, RunnableConfig
from ecovista.core.config import Settings
import httpx
import logging
import asyncio

logger = logging.getLogger(__name__)


class DumplingImageRunnable(Runnable[str, Dict[str, Any]]):
    """
    DumplingAI 图片生成 Runnable，输入增强后的提示词，输出上游原始 JSON.

    只发起一次请求，不做重试；非 2xx 状态码抛出 httpx.HTTPStatusError，
    网络错误按 httpx 的异常原样抛出，由调用方统一映射。
    timeout 是整次调用（连接、发送、读取完整响应）的总时限，超时抛出 asyncio.TimeoutError。

    使用示例：
    ```python
    runnable = DumplingImageRunnable.from_settings(settings)
    data = await runnable.ainvoke("a calm lake at dawn, beautiful nature wallpaper, ...")
    ```
    """

    # 固定的生成参数：单张、竖屏 9:16、webp 压缩、质量 90
    NUM_OUTPUTS = 1
    ASPECT_RATIO = "9:16"
    OUTPUT_FORMAT = "webp"
    OUTPUT_QUALITY = 90

    def __init__(self, api_url: str, api_key: Optional[str], model: str, timeout: float):
        """
        初始化 DumplingAI Runnable.

        Args:
            api_url: 图片生成接口地址
            api_key: Bearer 凭证
            model: 模型标识
            timeout: 请求超时时间（秒）
        """
        super().__init__()
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

        if not self.api_key:
            logger.warning("DumplingAI API Key 未配置，请设置 DUMPLING_AI_KEY 环境变量")

    @classmethod
    def from_settings(cls, settings: Settings) -> "DumplingImageRunnable":
        return cls(
            api_url=settings.DUMPLING_AI_URL,
            api_key=settings.DUMPLING_AI_KEY,
            model=settings.DUMPLING_AI_MODEL,
            timeout=settings.GENERATION_TIMEOUT
        )

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        """
        构建请求体.

        Args:
            prompt: 增强后的提示词

        Returns:
            Dict[str, Any]: DumplingAI 请求 JSON
        """
        return {
            "model": self.model,
            "input": {
                "prompt": prompt,
                "num_outputs": self.NUM_OUTPUTS,
                "aspect_ratio": self.ASPECT_RATIO,
                "output_format": self.OUTPUT_FORMAT,
                "output_quality": self.OUTPUT_QUALITY
            }
        }

    async def ainvoke(
        self,
        input: str,
        config: Optional[RunnableConfig] = None,
        **kwargs: Any
    ) -> Dict[str, Any]:
        """
        异步调用 DumplingAI 生成图片.

        Args:
            input: 增强后的提示词
            config: Runnable配置

        Returns:
            Dict[str, Any]: 上游返回的 JSON

        Raises:
            httpx.HTTPStatusError: 上游返回非 2xx 状态码
            asyncio.TimeoutError: 整次调用超过总时限
            httpx.TimeoutException: 单次连接或读取超时
            httpx.HTTPError: 其他网络错误
            ValueError: 响应不是合法 JSON
        """
        return await asyncio.wait_for(self._post(input), timeout=self.timeout)

    async def _post(self, prompt: str) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self.api_key or ''}",
            "Content-Type": "application/json"
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.api_url,
                headers=headers,
                json=self.build_payload(prompt)
            )

            if response.is_error:
                logger.error(f"DumplingAI API 请求失败，状态码: {response.status_code}")
                logger.error(f"错误详情: {response.text}")
            response.raise_for_status()

            return response.json()

    def invoke(
        self,
        input: str,
        config: Optional[RunnableConfig] = None,
        **kwargs: Any
    ) -> Dict[str, Any]:
        """
        同步调用 DumplingAI 生成图片（仅用于脚本，不可在事件循环内调用）.

        Args:
            input: 增强后的提示词
            config: Runnable配置

        Returns:
            Dict[str, Any]: 上游返回的 JSON
        """
        return asyncio.run(self.ainvoke(input, config))
