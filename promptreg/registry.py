"""Prompt 注册表：编排 provider 链 + 版本选择 + 渲染 + 哈希。

公开 API：
- get(prompt_id, context)             → ResolvedPrompt
- render(prompt_id, context, variables) → RenderResult
- list(context=None)                  → list[PromptDefinition]

注册表实例本身就是传给调用方的状态单元（依赖注入，无模块级单例）。
render() 之间不共享可变状态；所有异常同步抛出、不重试。
"""

from __future__ import annotations

__all__ = ["PromptRegistry"]

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from promptreg.contracts.constants import RENDER_ENGINE_VERSION
from promptreg.contracts.error import describe_error
from promptreg.contracts.exceptions import PromptNotFoundError, PromptRegistryError
from promptreg.contracts.types import PromptContext, PromptDefinition, RenderResult, ResolvedPrompt
from promptreg.providers.base import PromptProvider
from promptreg.rendering.hashing import render_hash, template_hash
from promptreg.rendering.renderer import render_template
from promptreg.selection import resolve_version

logger = logging.getLogger(__name__)


class PromptRegistry:
    """按顺序查询 provider 的 prompt 注册表。"""

    def __init__(self, providers: Iterable[PromptProvider]):
        self._providers: tuple[PromptProvider, ...] = tuple(providers)
        if not self._providers:
            raise ValueError("PromptRegistry requires at least one provider")

    @property
    def providers(self) -> tuple[PromptProvider, ...]:
        return self._providers

    def _find_definition(self, prompt_id: str, context: PromptContext) -> PromptDefinition:
        for provider in self._providers:
            definition = provider.get(prompt_id, context)
            if definition is not None:
                logger.debug(
                    "prompt %s served by provider %s",
                    prompt_id, provider.name or type(provider).__name__,
                )
                return definition
        raise PromptNotFoundError(prompt_id)

    def get(self, prompt_id: str, context: PromptContext) -> ResolvedPrompt:
        """解析定义与版本，返回模板哈希（不渲染变量）。"""
        try:
            definition = self._find_definition(prompt_id, context)
            version = resolve_version(definition, context)
        except PromptRegistryError as exc:
            logger.warning("prompt lookup rejected: %s", describe_error(exc))
            raise
        return ResolvedPrompt(
            definition=definition,
            version=version,
            prompt_hash=template_hash(version.version, version.template),
        )

    def render(
        self,
        prompt_id: str,
        context: PromptContext,
        variables: Mapping[str, Any] | None = None,
    ) -> RenderResult:
        """渲染 prompt：要么完全满足契约，要么抛出 PromptRegistryError 子类。"""
        resolved = self.get(prompt_id, context)
        version = resolved.version
        try:
            rendered = render_template(version, variables, prompt_id=prompt_id)
        except PromptRegistryError as exc:
            logger.warning("prompt render rejected: %s", describe_error(exc))
            raise
        return RenderResult(
            prompt_id=prompt_id,
            prompt_version=version.version,
            prompt_hash=resolved.prompt_hash,
            render_engine_version=RENDER_ENGINE_VERSION,
            template=version.template,
            content=rendered.content,
            variables=rendered.variables,
            render_hash=render_hash(resolved.prompt_hash, rendered.variables),
        )

    def list(self, context: PromptContext | None = None) -> list[PromptDefinition]:
        """合并所有支持列举的 provider；同一 id 以先报告者为准。"""
        merged: dict[str, PromptDefinition] = {}
        for provider in self._providers:
            if not provider.supports_listing:
                continue
            for definition in provider.list(context):
                merged.setdefault(definition.id, definition)
        return [*merged.values()]
