"""版本选择器：根据运行上下文为 PromptDefinition 选出适用的 PromptVersion。

匹配规则（三个条件同时满足）：
  environments    为 None 或包含 context.environment
  workspace_kinds 为 None 或（context.workspace_kind 非空且包含于列表）
  tenant_ids      为 None 或（context.tenant_id 非空且包含于列表）

所有命中规则按 priority 降序做稳定排序，同优先级时定义中靠前的规则胜出；
无命中时回退到 default_version。最终版本号必须存在于 versions 中，
否则抛出 PromptConfigurationError（目录数据错误，不重试）。
"""

from __future__ import annotations

__all__ = ["rule_matches", "select_version_id", "resolve_version"]

import logging

from promptreg.contracts.exceptions import PromptConfigurationError
from promptreg.contracts.types import PromptContext, PromptDefinition, PromptVersion, SelectionRule

logger = logging.getLogger(__name__)


def rule_matches(rule: SelectionRule, context: PromptContext) -> bool:
    when = rule.when
    if when.environments is not None and context.environment not in when.environments:
        return False
    if when.workspace_kinds is not None and (
        context.workspace_kind is None or context.workspace_kind not in when.workspace_kinds
    ):
        return False
    if when.tenant_ids is not None and (
        context.tenant_id is None or context.tenant_id not in when.tenant_ids
    ):
        return False
    return True


def select_version_id(definition: PromptDefinition, context: PromptContext) -> str:
    """返回选中的版本号（不检查是否存在）。"""
    matched = [rule for rule in definition.selection if rule_matches(rule, context)]
    if not matched:
        return definition.default_version
    # sorted() 是稳定排序：同 priority 保持声明顺序
    ranked = sorted(matched, key=lambda rule: rule.priority, reverse=True)
    return ranked[0].version


def resolve_version(definition: PromptDefinition, context: PromptContext) -> PromptVersion:
    """选出版本并解析为 PromptVersion。

    Raises
    ------
    PromptConfigurationError
        规则目标或 default_version 不在 versions 中。
    """
    version_id = select_version_id(definition, context)
    version = definition.get_version(version_id)
    if version is None:
        raise PromptConfigurationError(
            f"prompt '{definition.id}' selects version '{version_id}' "
            f"which is not defined. Available: {definition.version_ids()}",
            prompt_id=definition.id,
        )
    logger.debug(
        "prompt %s resolved to version %s (env=%s, workspace_kind=%s, tenant=%s)",
        definition.id, version_id, context.environment, context.workspace_kind, context.tenant_id,
    )
    return version
