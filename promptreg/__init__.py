"""版本化 Prompt 模板注册表与确定性渲染引擎。

包结构概览：
  promptreg/
  ├── contracts/   → 值对象（PromptDefinition / RenderResult …）、异常层级、常量
  ├── rendering/   → 占位符扫描、模板渲染、内容哈希
  ├── providers/   → provider 契约、静态目录、租户覆盖、覆盖文件加载
  ├── catalog/     → 编译期静态 prompt 目录 + 默认注册表装配
  ├── selection.py → 基于上下文的版本选择
  ├── registry.py  → PromptRegistry（get / render / list）
  ├── context.py   → 从设置构建 PromptContext
  ├── usage.py     → prompt 使用日志
  ├── config.py    → YAML/.env 配置加载 + RegistrySettings
  └── cli/runner.py → CLI 入口

本包不调用任何语言模型、不做持久化、不做网络 I/O。
使用惰性导入（lazy import）避免 import promptreg 时拉入全部子模块。
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from promptreg_utils.lazy_import import make_lazy_module_getattr

if TYPE_CHECKING:
    from promptreg.catalog import build_default_catalog, create_default_registry
    from promptreg.config import RegistrySettings, load_settings
    from promptreg.context import build_prompt_context
    from promptreg.contracts.constants import RENDER_ENGINE_VERSION
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
    from promptreg.providers.overrides import OverridePromptProvider, PromptOverride
    from promptreg.providers.static import StaticPromptProvider
    from promptreg.registry import PromptRegistry
    from promptreg.usage import PromptUsageLogger

__all__ = [
    "PromptRegistry",
    "StaticPromptProvider",
    "OverridePromptProvider",
    "PromptOverride",
    "build_default_catalog",
    "create_default_registry",
    "RegistrySettings",
    "load_settings",
    "build_prompt_context",
    "PromptUsageLogger",
    "RENDER_ENGINE_VERSION",
    "PromptContext",
    "PromptDefinition",
    "PromptVersion",
    "RenderResult",
    "ResolvedPrompt",
    "SelectionRule",
    "SelectionWhen",
    "VariableDeclaration",
    "PromptRegistryError",
    "PromptNotFoundError",
    "PromptConfigurationError",
    "SchemaValidationError",
    "TemplateContractError",
]

_SYMBOLS: dict[str, tuple[str, str]] = {
    "PromptRegistry": ("promptreg.registry", "PromptRegistry"),
    "StaticPromptProvider": ("promptreg.providers.static", "StaticPromptProvider"),
    "OverridePromptProvider": ("promptreg.providers.overrides", "OverridePromptProvider"),
    "PromptOverride": ("promptreg.providers.overrides", "PromptOverride"),
    "build_default_catalog": ("promptreg.catalog", "build_default_catalog"),
    "create_default_registry": ("promptreg.catalog", "create_default_registry"),
    "RegistrySettings": ("promptreg.config", "RegistrySettings"),
    "load_settings": ("promptreg.config", "load_settings"),
    "build_prompt_context": ("promptreg.context", "build_prompt_context"),
    "PromptUsageLogger": ("promptreg.usage", "PromptUsageLogger"),
    "RENDER_ENGINE_VERSION": ("promptreg.contracts.constants", "RENDER_ENGINE_VERSION"),
    "PromptContext": ("promptreg.contracts.types", "PromptContext"),
    "PromptDefinition": ("promptreg.contracts.types", "PromptDefinition"),
    "PromptVersion": ("promptreg.contracts.types", "PromptVersion"),
    "RenderResult": ("promptreg.contracts.types", "RenderResult"),
    "ResolvedPrompt": ("promptreg.contracts.types", "ResolvedPrompt"),
    "SelectionRule": ("promptreg.contracts.types", "SelectionRule"),
    "SelectionWhen": ("promptreg.contracts.types", "SelectionWhen"),
    "VariableDeclaration": ("promptreg.contracts.types", "VariableDeclaration"),
    "PromptRegistryError": ("promptreg.contracts.exceptions", "PromptRegistryError"),
    "PromptNotFoundError": ("promptreg.contracts.exceptions", "PromptNotFoundError"),
    "PromptConfigurationError": ("promptreg.contracts.exceptions", "PromptConfigurationError"),
    "SchemaValidationError": ("promptreg.contracts.exceptions", "SchemaValidationError"),
    "TemplateContractError": ("promptreg.contracts.exceptions", "TemplateContractError"),
}
__getattr__ = make_lazy_module_getattr(_SYMBOLS, __name__)
