"""内容寻址哈希：模板指纹与规范化变量指纹。

- canonical_stringify：键递归排序 + 紧凑分隔符的 JSON 序列化，
  语义相同的输入（键顺序不同）产生逐字节相同的输出。json 类变量替换与 render_hash 共用。
- template_hash：sha256(version + "\\n" + template + "\\n" + RENDER_ENGINE_VERSION)，
  与变量无关，用于审计、变更检测和跨输入稳定的缓存键。
- render_hash：sha256(template_hash + "\\n" + canonical_stringify(variables))，
  相同 (模板, 输入) 恒得到相同值，可用于整次渲染的去重。
"""

from __future__ import annotations

__all__ = ["canonical_stringify", "hash_text", "template_hash", "render_hash"]

import hashlib
import json
from typing import Any

from promptreg.contracts.constants import RENDER_ENGINE_VERSION


def canonical_stringify(value: Any) -> str:
    """对任意 JSON 兼容值做稳定序列化（键排序、无多余空白、保留非 ASCII）。"""
    return json.dumps(value, ensure_ascii=False, sort_keys=True, separators=(",", ":"), default=str)


def hash_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def template_hash(
    version: str,
    template: str,
    engine_version: str = RENDER_ENGINE_VERSION,
) -> str:
    """计算模板版本指纹（不含变量）。"""
    return hash_text(f"{version}\n{template}\n{engine_version}")


def render_hash(prompt_hash: str, variables: dict[str, Any]) -> str:
    """计算整次渲染指纹：模板指纹 + 规范化后的已校验变量。"""
    return hash_text(f"{prompt_hash}\n{canonical_stringify(variables)}")
