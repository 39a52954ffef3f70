"""结构化错误归一化辅助模块。

调用方在业务边界捕获注册表异常后，应向终端用户展示通用的“功能不可用”提示，
而把结构化细节写入日志。本模块把任意异常归一化为
(error_type, error_stage, error_code, error_detail) 字典以便聚合统计。

两个入口：
- classify_error()：从错误文本关键词推断分类（兜底路径，适用于外部异常或已序列化的消息）。
- describe_error()：优先从结构化异常(PromptRegistryError)提取，否则回退到文本分类。

错误阶段(error_stage)枚举：
  lookup → select → validate → template → unknown
"""

from __future__ import annotations

__all__ = ["classify_error", "describe_error"]

from typing import Any

from promptreg.contracts.exceptions import PromptRegistryError, SchemaValidationError


def classify_error(error_message: str) -> tuple[str, str, str]:
    """从错误文本关键词推断 (error_type, error_stage, error_code) 三元组。

    关键词顺序决定优先级：not_found > configuration > schema > template。
    """
    text = (error_message or "").strip()
    lower = text.lower()
    if not text:
        return ("", "", "")
    if "prompt_not_found" in lower:
        return ("not_found", "lookup", "prompt_not_found")
    if "prompt_configuration_error" in lower:
        return ("configuration_failure", "select", "prompt_configuration_error")
    if "schema_validation_error" in lower:
        return ("schema_failure", "validate", "schema_validation_error")
    if "template_contract_error" in lower:
        return ("template_contract_failure", "template", "template_contract_error")
    return ("unknown_error", "unknown", "unknown_error")


def describe_error(exc: BaseException) -> dict[str, Any]:
    """Return normalized, log-friendly error fields for an exception."""
    if isinstance(exc, PromptRegistryError):
        fields: dict[str, Any] = {
            "error_type": exc.error_type,
            "error_stage": exc.error_stage,
            "error_code": exc.error_code,
            "error_detail": str(exc),
            "prompt_id": exc.prompt_id,
        }
        if isinstance(exc, SchemaValidationError):
            fields["issues"] = exc.issues
        return fields
    error_type, error_stage, error_code = classify_error(str(exc))
    return {
        "error_type": error_type or "unknown_error",
        "error_stage": error_stage or "unknown",
        "error_code": error_code or "unknown_error",
        "error_detail": f"{type(exc).__name__}: {exc}",
        "prompt_id": None,
    }
