"""跨模块共享常量 — 渲染引擎版本与占位符/区块标记格式。

RENDER_ENGINE_VERSION 参与 prompt_hash 计算：占位符语法、文本归一化规则、
哈希输入任何一项变化时都必须手工递增，使旧语义下的哈希与新哈希可区分。
"""

from __future__ import annotations

__all__ = [
    "RENDER_ENGINE_VERSION",
    "VARIABLE_KINDS",
    "BLOCK_START_TEMPLATE",
    "BLOCK_END_TEMPLATE",
    "DEFAULT_ENVIRONMENT",
]

RENDER_ENGINE_VERSION = "prompt-render.v1"

VARIABLE_KINDS = ("text", "block", "json")

BLOCK_START_TEMPLATE = "<<{key}>>"        # block 变量起始标记
BLOCK_END_TEMPLATE = "<<END:{key}>>"      # block 变量结束标记

DEFAULT_ENVIRONMENT = "development"
