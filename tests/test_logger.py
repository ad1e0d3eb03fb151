"""Tests for the JSON log line helpers."""

from __future__ import annotations

import json
import logging

import pytest

from ecovista.core.logger import MAX_FIELD_CHARS, jerror, jinfo, jwarn

LOGGER_NAME = "ecovista.tests.logger"


def test_jinfo_emits_compact_json(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger(LOGGER_NAME)

    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        jinfo(logger, "壁纸生成成功", "解析响应", image_url="https://cdn/x.webp", status=200)

    record = caplog.records[-1]
    assert record.levelno == logging.INFO
    assert json.loads(record.getMessage()) == {
        "event": "壁纸生成成功",
        "stage": "解析响应",
        "image_url": "https://cdn/x.webp",
        "status": 200,
    }
    assert "壁纸" in record.getMessage()


def test_long_client_values_are_clipped(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    huge_user_id = "u" * 1_000_000

    with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
        jwarn(logger, "上游响应中没有图片 URL", user_id=huge_user_id, nested={"ids": list(range(10_000))})

    message = caplog.records[-1].getMessage()
    payload = json.loads(message)
    assert payload["user_id"].startswith("u" * MAX_FIELD_CHARS)
    assert len(payload["user_id"]) < MAX_FIELD_CHARS + 50
    assert payload["nested"].startswith("{'ids': [0, 1, 2")
    assert len(message) < 1000
    assert "stage" not in payload


def test_disabled_level_emits_nothing(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger(LOGGER_NAME)

    with caplog.at_level(logging.CRITICAL, logger=LOGGER_NAME):
        jerror(logger, "DumplingAI 调用失败", error="boom")

    assert not [record for record in caplog.records if record.name == LOGGER_NAME]
