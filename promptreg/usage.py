"""Prompt 使用记录：每次渲染后输出一条结构化日志，供审计与回归定位。

只写日志，不做持久化；记录内容以 prompt_hash 标识模板版本，
不包含渲染后的正文与变量值（可能含客户数据）。
"""

from __future__ import annotations

__all__ = ["PromptUsageLogger"]

import logging
from typing import Any

from promptreg.contracts.types import RenderResult
from promptreg.rendering.hashing import canonical_stringify

logger = logging.getLogger(__name__)


class PromptUsageLogger:
    """把 RenderResult 的溯源字段与调用方元数据合并为一条日志记录。"""

    def __init__(self, log: logging.Logger | None = None, *, level: int = logging.INFO):
        self._log = log or logger
        self._level = level

    def log_usage(
        self,
        result: RenderResult,
        *,
        model_id: str | None = None,
        provider: str | None = None,
        tenant_id: str | None = None,
        user_id: str | None = None,
        run_id: str | None = None,
        tool_name: str | None = None,
        purpose: str | None = None,
    ) -> dict[str, Any]:
        """记录一次 prompt 使用并返回记录内容（None 字段不输出）。"""
        record: dict[str, Any] = {
            "prompt_id": result.prompt_id,
            "prompt_version": result.prompt_version,
            "prompt_hash": result.prompt_hash,
            "render_hash": result.render_hash,
            "render_engine_version": result.render_engine_version,
            "model_id": model_id,
            "provider": provider,
            "tenant_id": tenant_id,
            "user_id": user_id,
            "run_id": run_id,
            "tool_name": tool_name,
            "purpose": purpose or result.prompt_id,
        }
        record = {k: v for k, v in record.items() if v is not None}
        self._log.log(self._level, "prompt usage %s", canonical_stringify(record))
        return record
