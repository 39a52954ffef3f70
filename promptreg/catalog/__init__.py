"""编译期静态 prompt 目录与默认注册表装配。

目录是纯数据：build_default_catalog() 返回不可变元组，
由调用方在进程启动时注入 StaticPromptProvider，而不是在 import 时创建全局单例。
"""

from __future__ import annotations

__all__ = ["build_default_catalog", "create_default_registry"]

from typing import TYPE_CHECKING

from promptreg.catalog.copilot import COPILOT_PROMPTS
from promptreg.catalog.crm import CRM_PROMPTS
from promptreg.catalog.inventory import INVENTORY_PROMPTS
from promptreg.catalog.invoices import INVOICE_PROMPTS
from promptreg.contracts.types import PromptDefinition

if TYPE_CHECKING:
    from promptreg.providers.base import PromptProvider
    from promptreg.registry import PromptRegistry


def build_default_catalog() -> tuple[PromptDefinition, ...]:
    return (*CRM_PROMPTS, *INVENTORY_PROMPTS, *INVOICE_PROMPTS, *COPILOT_PROMPTS)


def create_default_registry(
    override_provider: "PromptProvider | None" = None,
    *,
    overrides_first: bool = True,
) -> "PromptRegistry":
    """用默认目录装配注册表。

    overrides_first=True 时覆盖 provider 排在静态目录之前（覆盖优先）；
    False 时静态目录具有权威性，覆盖只补充目录中没有的 prompt。
    """
    from promptreg.providers.static import StaticPromptProvider
    from promptreg.registry import PromptRegistry

    static = StaticPromptProvider(build_default_catalog())
    if override_provider is None:
        return PromptRegistry([static])
    if overrides_first:
        return PromptRegistry([override_provider, static])
    return PromptRegistry([static, override_provider])
