"""结构化日志 - 请求处理过程中的事件以单行 JSON 输出."""
import json
import logging
from typing import Any, Dict, Optional

# 单个字段在日志中的最大字符数，客户端透传的值（如 user_id）可能很大
MAX_FIELD_CHARS = 200

_PLAIN_TYPES = (str, int, float, bool, type(None))


def _clip(value: Any) -> Any:
    """超长字符串截断；非基础类型转成 repr 后截断."""
    if not isinstance(value, _PLAIN_TYPES):
        value = repr(value)
    if isinstance(value, str) and len(value) > MAX_FIELD_CHARS:
        return f"{value[:MAX_FIELD_CHARS]}...(共 {len(value)} 字符)"
    return value


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    stage: Optional[str] = None,
    **fields: Any,
) -> None:
    """输出一条结构化事件日志.

    Args:
        logger: 日志记录器
        level: 日志级别（logging 常量）
        event: 事件说明
        stage: 可选，请求处理阶段（增强提示词、调用上游、解析响应）
        fields: 附加字段，逐个截断后写入
    """
    if not logger.isEnabledFor(level):
        return

    payload: Dict[str, Any] = {"event": event}
    if stage:
        payload["stage"] = stage
    payload.update({key: _clip(value) for key, value in fields.items()})
    logger.log(level, json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def jinfo(logger: logging.Logger, event: str, stage: Optional[str] = None, **fields: Any) -> None:
    log_event(logger, logging.INFO, event, stage, **fields)


def jwarn(logger: logging.Logger, event: str, stage: Optional[str] = None, **fields: Any) -> None:
    log_event(logger, logging.WARNING, event, stage, **fields)


def jerror(logger: logging.Logger, event: str, stage: Optional[str] = None, **fields: Any) -> None:
    log_event(logger, logging.ERROR, event, stage, **fields)
