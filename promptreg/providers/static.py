"""静态目录 provider：构造时一次性建立 id → 定义 映射，之后只读。

目录是显式注入的不可变值（见 promptreg.catalog.build_default_catalog），
不依赖模块级全局单例；多线程并发 render() 读取同一实例无需加锁。
"""

from __future__ import annotations

__all__ = ["StaticPromptProvider"]

import logging
from collections.abc import Iterable
from types import MappingProxyType

from promptreg.contracts.exceptions import PromptConfigurationError
from promptreg.contracts.types import PromptContext, PromptDefinition
from promptreg.providers.base import PromptProvider

logger = logging.getLogger(__name__)


class StaticPromptProvider(PromptProvider):
    """编译期 prompt 目录。"""

    name = "static"
    supports_listing = True

    def __init__(self, definitions: Iterable[PromptDefinition]):
        catalog: dict[str, PromptDefinition] = {}
        for definition in definitions:
            if definition.id in catalog:
                raise PromptConfigurationError(
                    f"duplicate prompt id '{definition.id}' in static catalog",
                    prompt_id=definition.id,
                )
            catalog[definition.id] = definition
        self._catalog = MappingProxyType(catalog)
        logger.debug("static prompt catalog built with %d definitions", len(catalog))

    def get(self, prompt_id: str, context: PromptContext) -> PromptDefinition | None:
        return self._catalog.get(prompt_id)

    def list(self, context: PromptContext | None = None) -> list[PromptDefinition]:
        return list(self._catalog.values())

    def __len__(self) -> int:
        return len(self._catalog)

    def __contains__(self, prompt_id: object) -> bool:
        return prompt_id in self._catalog
