"""核心数据契约层 — 跨模块共享的类型定义、常量与异常层级。

本包使用惰性导入(lazy import)，按需加载子模块：
    from promptreg.contracts import PromptContext, RenderResult, TemplateContractError

子模块：
- types.py     : PromptDefinition / PromptVersion / PromptContext / RenderResult 等值对象
- exceptions.py: PromptRegistryError 异常层级
- error.py     : classify_error / describe_error（结构化错误归一化）
- constants.py : RENDER_ENGINE_VERSION / 区块标记格式
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from promptreg_utils.lazy_import import make_lazy_module_getattr

if TYPE_CHECKING:
    from promptreg.contracts.constants import RENDER_ENGINE_VERSION
    from promptreg.contracts.error import classify_error, describe_error
    from promptreg.contracts.exceptions import (
        PromptConfigurationError,
        PromptNotFoundError,
        PromptRegistryError,
        SchemaValidationError,
        TemplateContractError,
    )
    from promptreg.contracts.types import (
        PromptContext,
        PromptDefinition,
        PromptVersion,
        RenderResult,
        ResolvedPrompt,
        SelectionRule,
        SelectionWhen,
        VariableDeclaration,
    )

__all__ = [
    "RENDER_ENGINE_VERSION",
    "classify_error",
    "describe_error",
    # exceptions
    "PromptRegistryError",
    "PromptNotFoundError",
    "PromptConfigurationError",
    "SchemaValidationError",
    "TemplateContractError",
    # value types
    "PromptContext",
    "PromptDefinition",
    "PromptVersion",
    "RenderResult",
    "ResolvedPrompt",
    "SelectionRule",
    "SelectionWhen",
    "VariableDeclaration",
]

_SYMBOLS: dict[str, tuple[str, str]] = {
    "RENDER_ENGINE_VERSION": ("promptreg.contracts.constants", "RENDER_ENGINE_VERSION"),
    "classify_error": ("promptreg.contracts.error", "classify_error"),
    "describe_error": ("promptreg.contracts.error", "describe_error"),
    "PromptRegistryError": ("promptreg.contracts.exceptions", "PromptRegistryError"),
    "PromptNotFoundError": ("promptreg.contracts.exceptions", "PromptNotFoundError"),
    "PromptConfigurationError": ("promptreg.contracts.exceptions", "PromptConfigurationError"),
    "SchemaValidationError": ("promptreg.contracts.exceptions", "SchemaValidationError"),
    "TemplateContractError": ("promptreg.contracts.exceptions", "TemplateContractError"),
    "PromptContext": ("promptreg.contracts.types", "PromptContext"),
    "PromptDefinition": ("promptreg.contracts.types", "PromptDefinition"),
    "PromptVersion": ("promptreg.contracts.types", "PromptVersion"),
    "RenderResult": ("promptreg.contracts.types", "RenderResult"),
    "ResolvedPrompt": ("promptreg.contracts.types", "ResolvedPrompt"),
    "SelectionRule": ("promptreg.contracts.types", "SelectionRule"),
    "SelectionWhen": ("promptreg.contracts.types", "SelectionWhen"),
    "VariableDeclaration": ("promptreg.contracts.types", "VariableDeclaration"),
}
__getattr__ = make_lazy_module_getattr(_SYMBOLS, __name__)
